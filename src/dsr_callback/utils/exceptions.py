"""Custom exception classes for the DSR Callback Receiver.

All exceptions inherit from DSRCallbackError to allow catching all custom exceptions.
"""


class DSRCallbackError(Exception):
    """Base exception for all DSR Callback Receiver custom exceptions."""

    pass


class EnvelopeParseError(DSRCallbackError):
    """Raised when a request body cannot be parsed as a SOAP envelope.
    
    Examples:
        - Body is not well-formed XML (unclosed tag, bad encoding)
        - Body is empty
    """

    pass


class ConfigurationError(DSRCallbackError):
    """Raised when configuration loading or validation fails.
    
    Examples:
        - Explicit configuration file not found
        - Invalid configuration file format
        - Port out of range
    """

    pass
