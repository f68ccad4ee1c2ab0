"""
Overwrite target lookup.

Finds the existing Drive file a run should update instead of creating a
duplicate.
"""

from typing import Optional

from drive_uploader.drive import DriveClient, RemoteFile, name_query
from drive_uploader.utils.logging import get_logger, log_function_call

logger = get_logger(__name__)


@log_function_call
def find_existing_file(
    client: DriveClient, name: str, folder_id: str, overwrite: bool
) -> Optional[RemoteFile]:
    """
    Find the file to update in place, if any.

    With overwrite disabled no lookup is made. Otherwise every object named
    exactly name is listed and the first one whose parents include
    folder_id is returned. Same-named objects in other folders are ignored.

    Returns:
        Matching RemoteFile, or None when a new file must be created

    Raises:
        RemoteServiceError: If the lookup fails
    """
    if not overwrite:
        return None

    candidates = client.list_files(name_query(name))
    logger.info(f"Files: {len(candidates)}")

    for candidate in candidates:
        if candidate.name == name and candidate.in_folder(folder_id):
            logger.info(f"Overwriting file: {candidate.name} ({candidate.id})")
            return candidate

    logger.info("No similar files found. Creating a new file")
    return None
