"""
Run configuration for the Drive uploader.

Loads the action inputs from ``INPUT_*`` environment variables (optionally
from a .env file) and command-line overrides into an immutable
UploadSettings instance that is passed to every component.
"""

import base64
import binascii
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

from drive_uploader.errors import ConfigurationError
from drive_uploader.utils.actions import add_mask, get_input, parse_bool
from drive_uploader.utils.logging import get_logger

logger = get_logger(__name__)

# Action input names
FILENAME_INPUT = "filename"
NAME_INPUT = "name"
FOLDER_ID_INPUT = "folderId"
CREDENTIALS_INPUT = "credentials"
OVERWRITE_INPUT = "overwrite"
MIME_TYPE_INPUT = "mimeType"
USE_COMPLETE_SOURCE_NAME_INPUT = "useCompleteSourceFilenameAsName"
MIRROR_DIRECTORY_STRUCTURE_INPUT = "mirrorDirectoryStructure"
NAME_PREFIX_INPUT = "namePrefix"


@dataclass(frozen=True)
class UploadSettings:
    """
    Process-wide upload configuration, read once at startup.

    Attributes:
        filename: Glob pattern selecting the local files to upload
        folder_id: Destination root folder id
        credentials: Base64-encoded service-account JSON (never in repr)
        name: Fixed target name, used when exactly one file matched
        overwrite: Update a same-named file in the target folder in place
        mime_type: Explicit content type; empty lets Drive infer it
        use_complete_source_name: Use the matched path as the remote name
        mirror_directory_structure: Recreate local directories as folders
        name_prefix: String prepended to every target name
    """

    filename: str
    folder_id: str
    credentials: str = field(default="", repr=False)
    name: str = ""
    overwrite: bool = False
    mime_type: str = ""
    use_complete_source_name: bool = False
    mirror_directory_structure: bool = False
    name_prefix: str = ""

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> "UploadSettings":
        """
        Load settings from action inputs.

        When environ is None the process environment is used, after
        loading a .env file from the project root if one exists. Values in
        overrides (keyed by input name) take precedence over the
        environment.

        Raises:
            ConfigurationError: If a required input is missing
        """
        if environ is None:
            env_path = Path(__file__).parent.parent.parent / ".env"
            if env_path.exists():
                load_dotenv(env_path)
            environ = os.environ

        overrides = overrides or {}

        def read(name: str) -> str:
            if overrides.get(name) is not None:
                return str(overrides[name]).strip()
            return get_input(name, environ)

        filename = read(FILENAME_INPUT)
        if not filename:
            raise _missing_input(FILENAME_INPUT)

        folder_id = read(FOLDER_ID_INPUT)
        if not folder_id:
            raise _missing_input(FOLDER_ID_INPUT)

        credentials = read(CREDENTIALS_INPUT)
        if not credentials:
            raise _missing_input(CREDENTIALS_INPUT)
        add_mask(credentials)

        overwrite = parse_bool(OVERWRITE_INPUT, read(OVERWRITE_INPUT))
        if overwrite is None:
            logger.warning("Overwrite is disabled.")

        use_complete_source_name = parse_bool(
            USE_COMPLETE_SOURCE_NAME_INPUT, read(USE_COMPLETE_SOURCE_NAME_INPUT)
        )
        if use_complete_source_name is None:
            logger.info(f"{USE_COMPLETE_SOURCE_NAME_INPUT} is disabled.")

        mirror_directory_structure = parse_bool(
            MIRROR_DIRECTORY_STRUCTURE_INPUT, read(MIRROR_DIRECTORY_STRUCTURE_INPUT)
        )
        if mirror_directory_structure is None:
            logger.info(f"{MIRROR_DIRECTORY_STRUCTURE_INPUT} is disabled.")

        return cls(
            filename=filename,
            folder_id=folder_id,
            credentials=credentials,
            name=read(NAME_INPUT),
            overwrite=bool(overwrite),
            mime_type=read(MIME_TYPE_INPUT),
            use_complete_source_name=bool(use_complete_source_name),
            mirror_directory_structure=bool(mirror_directory_structure),
            name_prefix=read(NAME_PREFIX_INPUT),
        )


def decode_credentials(encoded: str) -> Dict[str, Any]:
    """
    Decode the base64 service-account credential blob.

    Line breaks in the blob are ignored, so wrapped `base64` output is
    accepted. The decoded document and its private key are masked before
    parsing.

    Args:
        encoded: Base64-encoded service-account JSON

    Returns:
        Parsed service-account info dict

    Raises:
        ConfigurationError: If the blob is not valid base64 or JSON
    """
    try:
        decoded = base64.b64decode("".join(encoded.split()), validate=True).decode(
            "utf-8"
        )
    except (binascii.Error, ValueError) as e:
        raise ConfigurationError(
            f"base64 decoding of '{CREDENTIALS_INPUT}' failed with error: {e}"
        ) from e

    if decoded.endswith("\n"):
        decoded = decoded[:-1]
    add_mask(decoded)

    try:
        info = json.loads(decoded)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"parsing of '{CREDENTIALS_INPUT}' failed with error: {e}"
        ) from e

    if not isinstance(info, dict):
        raise ConfigurationError(
            f"'{CREDENTIALS_INPUT}' must decode to a JSON object"
        )

    private_key = info.get("private_key")
    if isinstance(private_key, str):
        add_mask(private_key)

    return info


def _missing_input(name: str) -> ConfigurationError:
    return ConfigurationError(f"missing input '{name}'")
