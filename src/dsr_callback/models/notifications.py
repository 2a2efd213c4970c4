"""Notification data models.

This module defines the normalized records extracted from DSR callbacks
(access-point status updates and log/event notifications) together with the
result of dispatching one envelope.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

# Placeholder rendered for every missing or empty scalar field
PLACEHOLDER = "N/A"


class OperationKind(Enum):
    """Callback operation carried by a SOAP envelope body."""

    STATUS_UPDATE = "notifyUpdated"
    EVENT_NOTIFICATION = "newEvent"
    UNRECOGNIZED = "unknown"


@dataclass
class AccessPointStatus:
    """Normalized access-point status from a notifyUpdated callback.

    Attributes:
        access_point_id: Access point identifier (``accessPoint/id``)
        serial_number: Hardware serial number
        online: Online flag exactly as sent by the controller
        sync_status: Synchronization status
        firmware_upgrade_status: Firmware upgrade status
        time_of_last_firmware_upgrade: Timestamp text of the last upgrade
        attributes: Attribute name to value mapping

    Example:
        >>> status = AccessPointStatus(access_point_id="AP-100")
        >>> status.serial_number
        'N/A'
    """

    access_point_id: str = PLACEHOLDER
    serial_number: str = PLACEHOLDER
    online: str = PLACEHOLDER
    sync_status: str = PLACEHOLDER
    firmware_upgrade_status: str = PLACEHOLDER
    time_of_last_firmware_upgrade: str = PLACEHOLDER
    attributes: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Return the record keyed by the protocol's field names."""
        return {
            "accessPointId": self.access_point_id,
            "serialNumber": self.serial_number,
            "online": self.online,
            "syncStatus": self.sync_status,
            "firmwareUpgradeStatus": self.firmware_upgrade_status,
            "timeOfLastFirmwareUpgrade": self.time_of_last_firmware_upgrade,
            "attributes": dict(self.attributes),
        }


@dataclass
class LogDataItem:
    """Single key/value pair from a log entry's logData collection."""

    key: str = PLACEHOLDER
    value: str = PLACEHOLDER


@dataclass
class EventRecord:
    """Normalized log entry from a newEvent callback.

    Attributes:
        origin_type: ``origin/logOriginType``
        family: Event family
        code: Event code
        time_stamp: Event timestamp text
        log_data: Key/value pairs attached to the event
    """

    origin_type: str = PLACEHOLDER
    family: str = PLACEHOLDER
    code: str = PLACEHOLDER
    time_stamp: str = PLACEHOLDER
    log_data: List[LogDataItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Return the record keyed by the protocol's field names."""
        return {
            "logOriginType": self.origin_type,
            "family": self.family,
            "code": self.code,
            "timeStamp": self.time_stamp,
            "logData": [{"key": item.key, "value": item.value} for item in self.log_data],
        }


@dataclass
class DispatchResult:
    """Outcome of dispatching one parsed envelope.

    Attributes:
        kind: Classified operation
        response_xml: Acknowledgement envelope to send back
        status: Extracted status (STATUS_UPDATE only, None when accessPoint is absent)
        event: Extracted event (EVENT_NOTIFICATION only, None when logEntry is absent)
        body: Raw Body subtree, kept for diagnostics of unrecognized callbacks
    """

    kind: OperationKind
    response_xml: str
    status: Optional[AccessPointStatus] = None
    event: Optional[EventRecord] = None
    body: Any = None

    @property
    def is_recognized(self) -> bool:
        """Check whether the envelope carried a known operation."""
        return self.kind is not OperationKind.UNRECOGNIZED
