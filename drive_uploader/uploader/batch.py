"""
Batch upload driver.

Expands the configured glob pattern and runs, for every matched file and
strictly in order: directory mirroring, name resolution, overwrite lookup
and upload. The first failure stops the batch.
"""

import glob
from dataclasses import dataclass, field
from typing import List, Optional

from drive_uploader.drive import DriveClient
from drive_uploader.errors import ConfigurationError, DriveUploadError
from drive_uploader.utils.config import UploadSettings
from drive_uploader.utils.logging import get_logger, log_function_call

from .mirror import mirror_directory_structure
from .naming import resolve_target_name
from .overwrite import find_existing_file
from .uploader import UploadRequest, UploadResult, upload_file

logger = get_logger(__name__)


@dataclass
class BatchResult:
    """
    Outcome of a batch run.

    Attributes:
        success: Whether every matched file was processed
        files: Paths matched by the pattern
        results: Per-file results, in processing order
        error_message: Reason the batch stopped (None if successful)
    """

    success: bool
    files: List[str] = field(default_factory=list)
    results: List[UploadResult] = field(default_factory=list)
    error_message: Optional[str] = None

    @property
    def uploaded(self) -> int:
        return sum(1 for r in self.results if r.success and r.file_id)


def expand_pattern(pattern: str) -> List[str]:
    """
    Expand a glob pattern into a sorted list of local paths.

    '**' matches any number of directories.

    Raises:
        ConfigurationError: If the pattern is empty or matches nothing
    """
    if not pattern or not pattern.strip():
        raise ConfigurationError("Invalid filename pattern: empty pattern")

    files = sorted(glob.glob(pattern, recursive=True))
    logger.info(f"Files: {files}")
    if not files:
        raise ConfigurationError(f"No file found! pattern: {pattern}")
    return files


def process_file(
    client: DriveClient,
    settings: UploadSettings,
    source_path: str,
    multiple_files: bool,
) -> UploadResult:
    """
    Upload one matched file.

    The target folder always starts from the configured root folder.

    Raises:
        DriveUploadError: If mirroring, naming or the overwrite lookup fails
    """
    logger.info(f"Processing file {source_path}")

    folder_id = settings.folder_id
    if settings.mirror_directory_structure:
        folder_id = mirror_directory_structure(client, source_path, folder_id)

    target_name = resolve_target_name(source_path, settings, multiple_files)
    existing = find_existing_file(client, target_name, folder_id, settings.overwrite)

    request = UploadRequest(
        source_path=source_path,
        target_folder_id=folder_id,
        target_name=target_name,
        mime_type=settings.mime_type,
        overwrite=settings.overwrite,
    )
    return upload_file(client, request, existing)


@log_function_call
def upload_batch(client: DriveClient, settings: UploadSettings) -> BatchResult:
    """
    Upload every file matched by settings.filename.

    Args:
        client: Drive client
        settings: Run configuration

    Returns:
        BatchResult; processing stops at the first failed file and the
        remaining files are not attempted
    """
    try:
        files = expand_pattern(settings.filename)
    except ConfigurationError as e:
        logger.error(str(e))
        return BatchResult(success=False, error_message=str(e))

    batch = BatchResult(success=True, files=files)
    multiple_files = len(files) > 1

    for source_path in files:
        try:
            result = process_file(client, settings, source_path, multiple_files)
        except DriveUploadError as e:
            logger.error(f"Processing {source_path} failed: {e}")
            batch.success = False
            batch.error_message = str(e)
            return batch

        batch.results.append(result)
        if not result.success:
            batch.success = False
            batch.error_message = result.error_message
            return batch

    logger.info(f"Batch upload complete: {batch.uploaded}/{len(files)} file(s) uploaded")
    return batch
