"""Command line interface for the DSR Callback Receiver."""
