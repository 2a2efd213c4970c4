"""SOAP envelope handling for DSR callbacks.

This module provides envelope parsing, payload extraction, operation dispatch
and acknowledgement synthesis.
"""

from .attributes import as_list, first_present, normalize_attributes
from .dispatcher import classify, dispatch
from .envelope import parse_envelope, parse_envelope_strict
from .extractors import extract_event, extract_status
from .responses import RESPONSE_CONTENT_TYPE, build_response

__all__ = [
    "RESPONSE_CONTENT_TYPE",
    "as_list",
    "build_response",
    "classify",
    "dispatch",
    "extract_event",
    "extract_status",
    "first_present",
    "normalize_attributes",
    "parse_envelope",
    "parse_envelope_strict",
]
