#!/usr/bin/env python3
"""
Upload files to a Google Drive folder.

CLI wrapper for the uploader package. Every option falls back to the
matching GitHub Actions input (INPUT_<NAME> environment variable), so the
same script runs locally and as a workflow step.

Usage:
    python scripts/upload.py --filename "dist/*.zip" --folder-id 1AbC --credentials "$B64"
    python scripts/upload.py --filename report.pdf --name Report --overwrite
    python scripts/upload.py --filename "logs/**/*.txt" --mirror-directory-structure
"""

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

# Add project root to path for imports (before other imports)
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from drive_uploader.drive import DriveClient  # noqa: E402
from drive_uploader.errors import DriveUploadError  # noqa: E402
from drive_uploader.uploader import upload_batch  # noqa: E402
from drive_uploader.utils import config  # noqa: E402
from drive_uploader.utils.logging import get_logger, setup_logging  # noqa: E402

logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Upload files to a Google Drive folder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Options not given on the command line are read from the GitHub Actions
inputs (INPUT_FILENAME, INPUT_FOLDERID, INPUT_CREDENTIALS, ...).

Examples:
  # Upload one file under a fixed name
  %(prog)s --filename build/report.pdf --name Report --folder-id 1AbC

  # Upload every log, recreating the local directories as folders
  %(prog)s --filename "logs/**/*.txt" --mirror-directory-structure

  # Replace a file with the same name in the target folder
  %(prog)s --filename notes.txt --overwrite
        """,
    )

    parser.add_argument("--filename", help="Glob pattern of the files to upload")
    parser.add_argument("--name", help="Target name (single file only)")
    parser.add_argument("--folder-id", help="Destination Drive folder id")
    parser.add_argument(
        "--credentials",
        help="Base64-encoded service account JSON",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        default=None,
        help="Update a same-named file in the target folder instead of creating one",
    )
    parser.add_argument(
        "--mime-type",
        help="Content type of the uploaded files (default: inferred)",
    )
    parser.add_argument(
        "--use-complete-source-filename-as-name",
        action="store_true",
        default=None,
        help="Use the matched path, directories included, as the target name",
    )
    parser.add_argument(
        "--mirror-directory-structure",
        action="store_true",
        default=None,
        help="Recreate the local directory structure as Drive folders",
    )
    parser.add_argument("--name-prefix", help="Prefix prepended to every target name")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    return parser.parse_args(argv)


def build_overrides(args: argparse.Namespace) -> Dict[str, str]:
    """Map given command-line options to action input names."""
    options = {
        config.FILENAME_INPUT: args.filename,
        config.NAME_INPUT: args.name,
        config.FOLDER_ID_INPUT: args.folder_id,
        config.CREDENTIALS_INPUT: args.credentials,
        config.OVERWRITE_INPUT: args.overwrite,
        config.MIME_TYPE_INPUT: args.mime_type,
        config.USE_COMPLETE_SOURCE_NAME_INPUT: args.use_complete_source_filename_as_name,
        config.MIRROR_DIRECTORY_STRUCTURE_INPUT: args.mirror_directory_structure,
        config.NAME_PREFIX_INPUT: args.name_prefix,
    }
    overrides = {}
    for name, value in options.items():
        if value is None:
            continue
        overrides[name] = "true" if value is True else value
    return overrides


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the upload CLI."""
    args = parse_args(argv)

    if args.verbose:
        setup_logging(level="DEBUG")

    try:
        settings = config.UploadSettings.from_env(overrides=build_overrides(args))
        credentials_info = config.decode_credentials(settings.credentials)
        client = DriveClient.from_service_account_info(credentials_info)
    except DriveUploadError as e:
        logger.error(str(e))
        return 1

    try:
        batch = upload_batch(client, settings)
    except KeyboardInterrupt:
        logger.warning("Upload cancelled by user")
        return 130

    if not batch.success:
        logger.error(f"Upload failed: {batch.error_message}")
        return 1

    logger.info(f"Uploaded {batch.uploaded} of {len(batch.files)} file(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
