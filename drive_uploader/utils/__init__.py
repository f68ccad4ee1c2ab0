"""
Shared utilities for the Drive uploader.

- logging: console/JSON/GitHub Actions logging with secret masking
- actions: GitHub Actions inputs and masking
- config: run configuration and credential decoding
"""

from drive_uploader.utils.logging import get_logger, log_function_call

__all__ = ["get_logger", "log_function_call"]
