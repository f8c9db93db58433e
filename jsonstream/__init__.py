"""Buffered JSON output stream, number and string formatting, and composable value encoders."""

__version__ = "0.1.0"

__all__ = ["numbers", "strings", "stream", "native", "composite"]