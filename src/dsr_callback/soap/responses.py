"""Acknowledgement envelopes returned to the controller.

The acknowledgements carry no payload data; the controller only checks that
it received the expected response element.
"""

from ..models.notifications import OperationKind

SOAP12_NS = "http://www.w3.org/2003/05/soap-envelope"
DSR_NS = "http://xml.assaabloy.com/dsr/2.0"

RESPONSE_CONTENT_TYPE = "application/soap+xml; charset=utf-8"

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def _acknowledgement(response_element: str) -> str:
    return (
        f'{XML_DECLARATION}<soap:Envelope xmlns:soap="{SOAP12_NS}">'
        f'<soap:Body><ns:{response_element} xmlns:ns="{DSR_NS}"/></soap:Body>'
        f"</soap:Envelope>"
    )


def build_response(kind: OperationKind) -> str:
    """Return the acknowledgement envelope for an operation.

    Args:
        kind: Classified operation

    Returns:
        SOAP 1.2 envelope text

    Example:
        >>> build_response(OperationKind.UNRECOGNIZED).endswith("<soap:Body/></soap:Envelope>")
        True
    """
    if kind is OperationKind.STATUS_UPDATE:
        return _acknowledgement("notifyUpdatedResponse")
    if kind is OperationKind.EVENT_NOTIFICATION:
        return _acknowledgement("newEventResponse")
    return f'{XML_DECLARATION}<soap:Envelope xmlns:soap="{SOAP12_NS}"><soap:Body/></soap:Envelope>'
