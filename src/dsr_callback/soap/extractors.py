"""Payload extraction for DSR callbacks.

Turns the parsed ``accessPoint`` and ``logEntry`` subtrees into normalized
records. Missing or empty fields resolve to ``"N/A"``; nothing here raises
on an unexpected shape.
"""

import logging
from typing import Any, Optional

from ..models.notifications import (
    PLACEHOLDER,
    AccessPointStatus,
    EventRecord,
    LogDataItem,
)
from .attributes import as_list, normalize_attributes, text_of
from .envelope import get_path

logger = logging.getLogger(__name__)


def field_text(node: Any, *path: str) -> str:
    """Return the text at ``path`` under ``node`` or the placeholder.

    Args:
        node: Parsed subtree
        *path: Keys to walk

    Returns:
        Field text, or "N/A" when missing or empty
    """
    return text_of(get_path(node, *path)) or PLACEHOLDER


def extract_status(access_point: Any) -> Optional[AccessPointStatus]:
    """Extract the normalized status of an access point.

    Args:
        access_point: Parsed ``notifyUpdated/accessPoint`` subtree

    Returns:
        AccessPointStatus, or None if the access point is absent

    Example:
        >>> status = extract_status({"id": "AP-100"})
        >>> status.access_point_id, status.sync_status
        ('AP-100', 'N/A')
    """
    if not isinstance(access_point, dict):
        return None

    attributes: dict[str, str] = {}
    raw_attributes = get_path(access_point, "accessPointAttributes", "attributes")
    if raw_attributes is not None:
        attributes = normalize_attributes(raw_attributes)

    status = AccessPointStatus(
        access_point_id=field_text(access_point, "id"),
        serial_number=field_text(access_point, "serialNumber"),
        online=field_text(access_point, "online"),
        sync_status=field_text(access_point, "syncStatus"),
        firmware_upgrade_status=field_text(access_point, "firmwareUpgradeStatus"),
        time_of_last_firmware_upgrade=field_text(access_point, "timeOfLastFirmwareUpgrade"),
        attributes=attributes,
    )

    logger.debug(f"Extracted access point status: {status}")
    return status


def extract_event(log_entry: Any) -> Optional[EventRecord]:
    """Extract the normalized log entry of a newEvent callback.

    Args:
        log_entry: Parsed ``newEvent/logEntry`` subtree

    Returns:
        EventRecord, or None if the log entry is absent
    """
    if not isinstance(log_entry, dict):
        return None

    log_data = [
        LogDataItem(key=field_text(item, "key"), value=field_text(item, "value"))
        for item in as_list(log_entry.get("logData"))
    ]

    event = EventRecord(
        origin_type=field_text(log_entry, "origin", "logOriginType"),
        family=field_text(log_entry, "family"),
        code=field_text(log_entry, "code"),
        time_stamp=field_text(log_entry, "timeStamp"),
        log_data=log_data,
    )

    logger.debug(f"Extracted event: {event}")
    return event
