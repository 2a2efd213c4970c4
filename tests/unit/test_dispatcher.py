"""Unit tests for operation dispatch and acknowledgement synthesis."""

import logging
from unittest.mock import MagicMock

import pytest

from dsr_callback.models.notifications import OperationKind
from dsr_callback.soap.dispatcher import classify, dispatch
from dsr_callback.soap.envelope import parse_envelope
from dsr_callback.soap.responses import RESPONSE_CONTENT_TYPE, build_response
from fixtures.envelopes import (
    EVENT_NOTIFICATION_RESPONSE,
    STATUS_UPDATE_RESPONSE,
    UNRECOGNIZED_RESPONSE,
)


class TestBuildResponse:
    """Tests for the acknowledgement templates."""

    def test_status_update_template(self):
        # Arrange & Act & Assert
        assert build_response(OperationKind.STATUS_UPDATE) == STATUS_UPDATE_RESPONSE

    def test_event_notification_template(self):
        # Arrange & Act & Assert
        assert build_response(OperationKind.EVENT_NOTIFICATION) == EVENT_NOTIFICATION_RESPONSE

    def test_unrecognized_template(self):
        # Arrange & Act & Assert
        assert build_response(OperationKind.UNRECOGNIZED) == UNRECOGNIZED_RESPONSE

    @pytest.mark.parametrize("kind", list(OperationKind))
    def test_templates_are_well_formed(self, kind):
        """Test every acknowledgement parses as a SOAP envelope."""
        # Arrange & Act
        tree = parse_envelope(build_response(kind))

        # Assert
        assert tree is not None
        assert "Body" in tree["Envelope"]

    def test_content_type(self):
        # Arrange & Act & Assert
        assert RESPONSE_CONTENT_TYPE == "application/soap+xml; charset=utf-8"


class TestClassify:
    """Tests for classify."""

    def test_notify_updated(self, notify_updated_xml):
        # Arrange & Act & Assert
        assert classify(parse_envelope(notify_updated_xml)) is OperationKind.STATUS_UPDATE

    def test_new_event(self, new_event_xml):
        # Arrange & Act & Assert
        assert classify(parse_envelope(new_event_xml)) is OperationKind.EVENT_NOTIFICATION

    def test_unknown_operation(self, unknown_operation_xml):
        # Arrange & Act & Assert
        assert classify(parse_envelope(unknown_operation_xml)) is OperationKind.UNRECOGNIZED

    @pytest.mark.parametrize(
        "xml",
        [
            "<Envelope/>",
            "<Envelope><Body/></Envelope>",
            "<Envelope><Header/></Envelope>",
            "<NotAnEnvelope><Body><notifyUpdated/></Body></NotAnEnvelope>",
        ],
    )
    def test_degenerate_envelopes_are_unrecognized(self, xml):
        """Test envelopes without a usable body classify as unrecognized."""
        # Arrange & Act & Assert
        assert classify(parse_envelope(xml)) is OperationKind.UNRECOGNIZED

    def test_empty_operation_element_is_still_classified(self):
        """Test an empty notifyUpdated element counts as present."""
        # Arrange & Act & Assert
        tree = parse_envelope("<Envelope><Body><notifyUpdated/></Body></Envelope>")
        assert classify(tree) is OperationKind.STATUS_UPDATE

    def test_notify_updated_wins_over_new_event(self):
        """Test notifyUpdated has priority when both are present."""
        # Arrange
        tree = parse_envelope(
            "<Envelope><Body><newEvent/><notifyUpdated/></Body></Envelope>"
        )

        # Act & Assert
        assert classify(tree) is OperationKind.STATUS_UPDATE


class TestDispatch:
    """Tests for dispatch."""

    def test_status_update(self, notify_updated_minimal_xml):
        """Test the AP-100 example extracts and acknowledges."""
        # Arrange & Act
        result = dispatch(parse_envelope(notify_updated_minimal_xml))

        # Assert
        assert result.kind is OperationKind.STATUS_UPDATE
        assert result.is_recognized
        assert result.status.to_dict() == {
            "accessPointId": "AP-100",
            "serialNumber": "N/A",
            "online": "N/A",
            "syncStatus": "N/A",
            "firmwareUpgradeStatus": "N/A",
            "timeOfLastFirmwareUpgrade": "N/A",
            "attributes": {"FIRMWARE_VERSION": "2.1.0"},
        }
        assert result.event is None
        assert result.response_xml == STATUS_UPDATE_RESPONSE

    def test_event_notification(self, new_event_xml):
        # Arrange & Act
        result = dispatch(parse_envelope(new_event_xml))

        # Assert
        assert result.kind is OperationKind.EVENT_NOTIFICATION
        assert result.event.code == "DOOR_OPENED"
        assert result.status is None
        assert result.response_xml == EVENT_NOTIFICATION_RESPONSE

    def test_unrecognized_keeps_body(self, unknown_operation_xml, caplog):
        """Test unknown bodies are acknowledged and kept for diagnostics."""
        # Arrange & Act
        with caplog.at_level(logging.WARNING):
            result = dispatch(parse_envelope(unknown_operation_xml))

        # Assert
        assert result.kind is OperationKind.UNRECOGNIZED
        assert not result.is_recognized
        assert result.body == {"heartbeat": {"sequence": "7"}}
        assert result.response_xml == UNRECOGNIZED_RESPONSE
        assert "Unknown callback type" in caplog.text

    def test_status_update_without_access_point(self):
        """Test a notifyUpdated body without accessPoint still acknowledges."""
        # Arrange & Act
        result = dispatch(parse_envelope("<Envelope><Body><notifyUpdated/></Body></Envelope>"))

        # Assert
        assert result.status is None
        assert result.response_xml == STATUS_UPDATE_RESPONSE

    def test_empty_new_event_gets_event_acknowledgement(self):
        """Test an empty newEvent element is not answered with the empty-body ack."""
        # Arrange & Act
        result = dispatch(parse_envelope("<Envelope><Body><newEvent/></Body></Envelope>"))

        # Assert
        assert result.kind is OperationKind.EVENT_NOTIFICATION
        assert result.event is None
        assert result.response_xml == EVENT_NOTIFICATION_RESPONSE
        assert result.response_xml != UNRECOGNIZED_RESPONSE

    def test_response_independent_of_payload(self, notify_updated_xml, notify_updated_minimal_xml):
        """Test the acknowledgement carries no payload data."""
        # Arrange & Act
        full = dispatch(parse_envelope(notify_updated_xml))
        minimal = dispatch(parse_envelope(notify_updated_minimal_xml))

        # Assert
        assert full.response_xml == minimal.response_xml

    def test_sink_receives_result(self, new_event_xml):
        # Arrange
        sink = MagicMock()

        # Act
        result = dispatch(parse_envelope(new_event_xml), sink=sink)

        # Assert
        sink.assert_called_once_with(result)

    def test_sink_failure_does_not_change_response(self, new_event_xml, caplog):
        """Test a failing sink is logged and ignored."""
        # Arrange
        sink = MagicMock(side_effect=RuntimeError("console closed"))

        # Act
        with caplog.at_level(logging.WARNING):
            result = dispatch(parse_envelope(new_event_xml), sink=sink)

        # Assert
        assert result.response_xml == EVENT_NOTIFICATION_RESPONSE
        assert "console closed" in caplog.text
