"""
Google Drive upload flow.

Provides the per-file steps (directory mirroring, target naming, overwrite
lookup, transfer) and the batch driver that runs them for every file
matched by the configured glob pattern.
"""

from .batch import BatchResult, expand_pattern, process_file, upload_batch
from .mirror import directory_segments, ensure_folder, mirror_directory_structure
from .naming import resolve_target_name
from .overwrite import find_existing_file
from .uploader import UploadRequest, UploadResult, upload_file

__all__ = [
    "BatchResult",
    "UploadRequest",
    "UploadResult",
    "directory_segments",
    "ensure_folder",
    "expand_pattern",
    "find_existing_file",
    "mirror_directory_structure",
    "process_file",
    "resolve_target_name",
    "upload_batch",
    "upload_file",
]
