"""
Google Drive access layer.

Wraps the Drive v3 API calls used by the uploader and the value types
returned by them.
"""

from .client import (
    DRIVE_SCOPE,
    FOLDER_MIME_TYPE,
    DriveClient,
    RemoteFile,
    RemoteFolder,
    folder_query,
    media_mime_type,
    name_query,
)

__all__ = [
    "DRIVE_SCOPE",
    "FOLDER_MIME_TYPE",
    "DriveClient",
    "RemoteFile",
    "RemoteFolder",
    "folder_query",
    "media_mime_type",
    "name_query",
]
