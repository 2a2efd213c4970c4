"""Shared utilities for the DSR Callback Receiver."""
