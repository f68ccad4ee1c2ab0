"""
Remote directory mirroring.

Recreates the local directory chain of a file as nested Drive folders,
reusing folders that already exist under the expected parent.
"""

from pathlib import PurePath
from typing import List

from drive_uploader.drive import DriveClient, folder_query
from drive_uploader.utils.logging import get_logger, log_function_call

logger = get_logger(__name__)


def directory_segments(source_path: str) -> List[str]:
    """
    Ordered directory components of a local path.

    The file name itself, '.', empty components and the filesystem root
    are dropped.

    Example:
        >>> directory_segments("logs/2024/run.txt")
        ['logs', '2024']
        >>> directory_segments("report.pdf")
        []
    """
    parent = PurePath(source_path).parent
    return [
        part
        for part in parent.parts
        if part not in ("", ".") and part != parent.anchor
    ]


def ensure_folder(client: DriveClient, parent_id: str, name: str) -> str:
    """
    Return the id of the folder called name under parent_id.

    An existing folder is reused (the first one listed wins when several
    share the name); otherwise a new folder is created.
    """
    logger.info(f"Checking for existing folder {name}")
    for candidate in client.list_files(folder_query(name)):
        if candidate.name == name and candidate.in_folder(parent_id):
            logger.info(f"Found existing folder {name}.")
            return candidate.id

    logger.info(f"Creating folder: {name}")
    return client.create_folder(name, parent_id).id


@log_function_call
def mirror_directory_structure(
    client: DriveClient, source_path: str, root_folder_id: str
) -> str:
    """
    Ensure the folder chain of source_path exists below root_folder_id.

    Args:
        client: Drive client
        source_path: Local file path whose directories are mirrored
        root_folder_id: Folder the chain starts from

    Returns:
        Id of the deepest folder (root_folder_id when there are no
        directory components)

    Raises:
        RemoteServiceError: If a lookup or folder creation fails
    """
    segments = directory_segments(source_path)
    logger.info(f"Mirroring directory structure: {segments}")

    folder_id = root_folder_id
    for segment in segments:
        folder_id = ensure_folder(client, folder_id, segment)
    return folder_id
