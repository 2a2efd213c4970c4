"""Callback server module.

This module provides the Flask application receiving DSR callbacks, its
configuration and the console rendering of received callbacks.
"""
