"""DSR Callback Receiver.

Receives SOAP callbacks (notifyUpdated, newEvent) pushed by access-point
controllers and answers them with the protocol acknowledgement.
"""

__version__ = "1.0.0"
