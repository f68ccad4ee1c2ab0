"""
Google Drive file uploader.

Transfers one local file to Drive, either creating a new file in the
target folder or updating an existing file found by the overwrite lookup.

Example usage:
    >>> from drive_uploader.uploader import UploadRequest, upload_file
    >>> request = UploadRequest(
    ...     source_path="dist/report.pdf",
    ...     target_folder_id="1AbC",
    ...     target_name="Report",
    ... )
    >>> result = upload_file(client, request)
    >>> if result.success:
    ...     print(f"{result.action} {result.file_id}")
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from drive_uploader.drive import DriveClient, RemoteFile, media_mime_type
from drive_uploader.errors import DriveUploadError, LocalFileError
from drive_uploader.utils.logging import get_logger, log_function_call

logger = get_logger(__name__)

ACTION_CREATED = "created"
ACTION_UPDATED = "updated"
ACTION_SKIPPED = "skipped"


@dataclass(frozen=True)
class UploadRequest:
    """
    One file to transfer.

    Attributes:
        source_path: Local path of the file
        target_folder_id: Folder the file is placed in (must exist)
        target_name: Remote file name
        mime_type: Explicit content type; empty lets Drive infer it
        overwrite: Whether an update target was looked up
    """

    source_path: str
    target_folder_id: str
    target_name: str
    mime_type: str = ""
    overwrite: bool = False


@dataclass
class UploadResult:
    """
    Outcome of one upload.

    Attributes:
        success: Whether the file was transferred (or skipped as a directory)
        request: Request that was executed
        action: 'created', 'updated' or 'skipped' (None on failure)
        file_id: Id of the created or updated Drive file
        error_message: Error description (None if successful)
    """

    success: bool
    request: UploadRequest
    action: Optional[str] = None
    file_id: Optional[str] = None
    error_message: Optional[str] = None


@log_function_call
def upload_file(
    client: DriveClient,
    request: UploadRequest,
    existing: Optional[RemoteFile] = None,
) -> UploadResult:
    """
    Upload a single file to Google Drive.

    Directories are skipped with a warning. With an existing file the
    content and metadata of that file are replaced and the target folder is
    added to its parents; otherwise a new file is created. The local file
    is closed on every path.

    Args:
        client: Drive client
        request: What to upload and where
        existing: File to update in place, or None to create

    Returns:
        UploadResult; a failed result means the run must stop
    """
    path = Path(request.source_path)

    if path.is_dir():
        logger.warning(f"{request.source_path} is a directory. skipping upload.")
        return UploadResult(success=True, request=request, action=ACTION_SKIPPED)

    media_type = media_mime_type(request.source_path, request.mime_type)

    try:
        try:
            stream = open(path, "rb")
        except OSError as e:
            raise LocalFileError(
                f"opening file with filename: {request.source_path} failed with error: {e}"
            ) from e

        with stream:
            if existing is not None:
                remote = client.update_file(
                    existing.id,
                    stream,
                    name=request.target_name,
                    add_parent_id=request.target_folder_id,
                    mime_type=request.mime_type,
                    media_type=media_type,
                )
                action = ACTION_UPDATED
            else:
                remote = client.create_file(
                    stream,
                    name=request.target_name,
                    parent_id=request.target_folder_id,
                    mime_type=request.mime_type,
                    media_type=media_type,
                )
                action = ACTION_CREATED

    except (DriveUploadError, OSError) as e:
        logger.error(str(e))
        return UploadResult(success=False, request=request, error_message=str(e))

    logger.info(f"Uploaded/Updated file: {request.target_name} ({remote.id})")
    return UploadResult(
        success=True, request=request, action=action, file_id=remote.id
    )
