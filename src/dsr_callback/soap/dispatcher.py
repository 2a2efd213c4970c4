"""Operation dispatch for parsed DSR callback envelopes."""

import logging
from typing import Any, Callable, Optional

from ..models.notifications import DispatchResult, OperationKind
from .envelope import get_body, get_path
from .extractors import extract_event, extract_status
from .responses import build_response

logger = logging.getLogger(__name__)

# Receives every dispatch result; its return value is ignored
NotificationSink = Callable[[DispatchResult], None]


def classify(envelope: dict[str, Any] | None) -> OperationKind:
    """Classify a parsed envelope by the element present under Body.

    notifyUpdated takes priority if a body carries both operations.
    Presence is by element, not content: an empty ``<notifyUpdated/>`` or
    ``<newEvent/>`` still gets its own acknowledgement (with no record),
    where a truthiness check would have answered with the empty-body ack.

    Args:
        envelope: Tree returned by parse_envelope

    Returns:
        Operation kind
    """
    body = get_body(envelope)
    if not isinstance(body, dict):
        return OperationKind.UNRECOGNIZED
    if "notifyUpdated" in body:
        return OperationKind.STATUS_UPDATE
    if "newEvent" in body:
        return OperationKind.EVENT_NOTIFICATION
    return OperationKind.UNRECOGNIZED


def dispatch(
    envelope: dict[str, Any] | None,
    sink: Optional[NotificationSink] = None,
) -> DispatchResult:
    """Classify an envelope, extract its payload and pick the acknowledgement.

    Args:
        envelope: Tree returned by parse_envelope (must not be a parse failure)
        sink: Optional observability sink called with the result

    Returns:
        DispatchResult with the acknowledgement envelope to return
    """
    kind = classify(envelope)
    body = get_body(envelope)

    result = DispatchResult(kind=kind, response_xml=build_response(kind), body=body)

    if kind is OperationKind.STATUS_UPDATE:
        result.status = extract_status(get_path(body, "notifyUpdated", "accessPoint"))
        if result.status is None:
            logger.warning("notifyUpdated callback without accessPoint")
    elif kind is OperationKind.EVENT_NOTIFICATION:
        result.event = extract_event(get_path(body, "newEvent", "logEntry"))
        if result.event is None:
            logger.warning("newEvent callback without logEntry")
    else:
        logger.warning("Unknown callback type")

    logger.info(f"Dispatched {kind.value} callback")

    if sink is not None:
        try:
            sink(result)
        except Exception as e:
            logger.warning(f"Failed to render {kind.value} callback: {e}", exc_info=True)

    return result
