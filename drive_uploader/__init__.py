"""
Drive Uploader

Uploads local files matched by a glob pattern to a Google Drive folder
using a service-account credential, as a CLI or a CI step.

This package provides one module per stage of the upload flow:
- drive: Drive API client wrapper
- uploader: directory mirroring, naming, overwrite lookup, transfer, batch
- utils: logging, GitHub Actions helpers and configuration
"""

__version__ = "0.1.0"

from drive_uploader.utils.logging import setup_logging

# Initialize default logging configuration
setup_logging()
