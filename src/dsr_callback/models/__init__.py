"""Models module.

This module provides data models and dataclasses for the application.
"""

from dsr_callback.models.notifications import (
    PLACEHOLDER,
    AccessPointStatus,
    DispatchResult,
    EventRecord,
    LogDataItem,
    OperationKind,
)

__all__ = [
    "PLACEHOLDER",
    "AccessPointStatus",
    "DispatchResult",
    "EventRecord",
    "LogDataItem",
    "OperationKind",
]
