"""
Error hierarchy for the Drive uploader.

Every failure that aborts a run derives from DriveUploadError so the batch
driver can stop iterating and report a single message.
"""


class DriveUploadError(Exception):
    """Base class for all fatal upload errors."""


class ConfigurationError(DriveUploadError):
    """Missing input, invalid glob pattern or unresolvable target name."""


class RemoteServiceError(DriveUploadError):
    """Failure returned by a Drive list/create/update/auth call."""


class LocalFileError(DriveUploadError):
    """Local file is missing or unreadable."""
