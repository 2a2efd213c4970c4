"""Console rendering of received callbacks."""

import json
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

import click

from ..models.notifications import (
    AccessPointStatus,
    DispatchResult,
    EventRecord,
    OperationKind,
)

logger = logging.getLogger(__name__)

# Attributes shown first and highlighted
FIRMWARE_ATTRIBUTES = (
    "FIRMWARE_VERSION",
    "FIRMWARE_VERSION_INPROGRESS",
    "FIRMWARE_UPLOAD_PERCENTAGE",
    "CC_FIRMWARE_VERSION",
    "CC_FIRMWARE_VERSION_INPROGRESS",
    "CC_FIRMWARE_UPLOAD_PERCENTAGE",
)

BANNER_WIDTH = 80


class CallbackRenderer:
    """Writes a human-readable block for every dispatched callback.

    Used as the dispatcher's notification sink. Styling is applied with
    click and stripped by click.echo when output is not a terminal.

    Attributes:
        styled: Whether to apply ANSI styling to lines
        echo: Function receiving each rendered line
    """

    def __init__(
        self,
        styled: bool = True,
        echo: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.styled = styled
        self.echo = echo or click.echo

    def __call__(self, result: DispatchResult) -> None:
        for line in self.render(result):
            self.echo(line)
        logger.info(self.summary(result))

    def _style(self, text: str, **styles) -> str:
        if not self.styled:
            return text
        return click.style(text, **styles)

    def render(self, result: DispatchResult, timestamp: Optional[datetime] = None) -> list[str]:
        """Render a dispatch result as a list of lines.

        Args:
            result: Dispatch result to render
            timestamp: Time shown in the header (default: now, UTC)

        Returns:
            Lines of the rendered block
        """
        timestamp = timestamp or datetime.now(timezone.utc)
        rule = self._style("=" * BANNER_WIDTH, fg="cyan")

        lines = [
            "",
            rule,
            self._style(
                f"[{timestamp.isoformat()}] {result.kind.value} Callback Received",
                fg="yellow",
            ),
            rule,
        ]

        if result.kind is OperationKind.STATUS_UPDATE and result.status is not None:
            lines.extend(self.render_status(result.status))
        elif result.kind is OperationKind.EVENT_NOTIFICATION and result.event is not None:
            lines.extend(self.render_event(result.event))
        elif result.kind is OperationKind.UNRECOGNIZED:
            lines.append(self._style("Unknown callback type", fg="yellow"))
            lines.append(
                self._style("Body: ", fg="bright_black")
                + json.dumps(result.body, indent=2, default=str)
            )
        else:
            lines.append(self._style(f"{result.kind.value} callback without payload", fg="yellow"))

        lines.append(rule)
        lines.append("")
        return lines

    def render_status(self, status: AccessPointStatus) -> list[str]:
        """Render access point, firmware and attribute sections."""
        lines = [
            self._style("Access Point Information:", fg="green"),
            f"   ID: {status.access_point_id}",
            f"   Serial: {status.serial_number}",
            f"   Online: {status.online}",
            f"   Sync Status: {status.sync_status}",
            "",
            self._style("Firmware Status:", fg="green"),
            f"   Upgrade Status: {self._style(status.firmware_upgrade_status, fg='yellow', bold=True)}",
            f"   Last Update: {status.time_of_last_firmware_upgrade}",
        ]

        if status.attributes:
            lines.append("")
            lines.append(self._style("Attributes:", fg="green"))
            for key in FIRMWARE_ATTRIBUTES:
                value = status.attributes.get(key)
                if value:
                    lines.append(
                        f"   {self._style(key, fg='cyan')}: "
                        f"{self._style(value, fg='yellow', bold=True)}"
                    )
            for key, value in status.attributes.items():
                if key not in FIRMWARE_ATTRIBUTES:
                    lines.append(f"   {self._style(key, fg='bright_black')}: {value}")

        return lines

    def render_event(self, event: EventRecord) -> list[str]:
        """Render event fields and log data pairs."""
        lines = [
            self._style("Event Information:", fg="green"),
            f"   Origin: {event.origin_type}",
            f"   Family: {event.family}",
            f"   Code: {self._style(event.code, fg='yellow', bold=True)}",
            f"   Timestamp: {event.time_stamp}",
        ]

        if event.log_data:
            lines.append("")
            lines.append(self._style("Log Data:", fg="green"))
            for item in event.log_data:
                lines.append(f"   {self._style(item.key, fg='cyan')}: {item.value}")

        return lines

    @staticmethod
    def summary(result: DispatchResult) -> str:
        """One-line log summary of a dispatch result."""
        if result.status is not None:
            return (
                f"notifyUpdated - AccessPoint: {result.status.access_point_id}, "
                f"Sync: {result.status.sync_status}, "
                f"Firmware: {result.status.firmware_upgrade_status}, "
                f"Attributes: {len(result.status.attributes)}"
            )
        if result.event is not None:
            return (
                f"newEvent - Origin: {result.event.origin_type}, "
                f"Family: {result.event.family}, Code: {result.event.code}, "
                f"Timestamp: {result.event.time_stamp}"
            )
        return f"{result.kind.value} callback acknowledged"
