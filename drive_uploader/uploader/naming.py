"""
Target name resolution.

Decides the remote name of each matched file from the configured name,
the source path and the run flags.
"""

from pathlib import Path

from drive_uploader.errors import ConfigurationError
from drive_uploader.utils.config import UploadSettings
from drive_uploader.utils.logging import get_logger, log_function_call

logger = get_logger(__name__)


@log_function_call
def resolve_target_name(
    source_path: str, settings: UploadSettings, multiple_files: bool
) -> str:
    """
    Resolve the remote name for one matched file.

    Rules, in priority order:
        1. use_complete_source_name: the matched path as is
        2. several files matched, or no name configured: the base name
        3. otherwise: the configured name
    A configured prefix is then prepended.

    Args:
        source_path: Path as returned by the glob expansion
        settings: Run configuration
        multiple_files: Whether the pattern matched more than one file

    Returns:
        Target name

    Raises:
        ConfigurationError: If no name can be derived

    Example:
        >>> settings = UploadSettings(filename="*.txt", folder_id="F", name_prefix="ci-")
        >>> resolve_target_name("out/a.txt", settings, multiple_files=True)
        'ci-a.txt'
    """
    if settings.use_complete_source_name:
        target_name = source_path
    elif multiple_files or not settings.name:
        target_name = Path(source_path).name
    else:
        target_name = settings.name

    if not target_name:
        raise ConfigurationError("Could not discover target file name")

    if settings.name_prefix:
        target_name = settings.name_prefix + target_name

    logger.info(f"target file name: {target_name}")
    return target_name
