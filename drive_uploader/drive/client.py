"""
Google Drive API v3 client wrapper.

Thin layer over google-api-python-client exposing exactly the calls the
uploader needs (list, create folder, create file, update file) and
translating API, auth and transport failures into RemoteServiceError.

Example usage:
    >>> from drive_uploader.drive import DriveClient, folder_query
    >>> client = DriveClient.from_service_account_info(info)
    >>> folders = client.list_files(folder_query("logs"))
    >>> if not folders:
    ...     folder = client.create_folder("logs", parent_id="root-id")
"""

import mimetypes
from dataclasses import dataclass
from typing import Any, BinaryIO, Dict, List, Optional, Tuple

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from googleapiclient.http import MediaIoBaseUpload

from drive_uploader.errors import RemoteServiceError
from drive_uploader.utils.logging import get_logger

logger = get_logger(__name__)

# Files created or opened by this credential only
DRIVE_SCOPE = "https://www.googleapis.com/auth/drive.file"
FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
DEFAULT_MEDIA_MIME_TYPE = "application/octet-stream"
LIST_FIELDS = "nextPageToken, files(name,id,mimeType,parents)"

# API, auth and transport failures of a Drive call
REMOTE_ERRORS = (HttpError, GoogleAuthError, httplib2.HttpLib2Error, OSError)


@dataclass(frozen=True)
class RemoteFolder:
    """A Drive folder, referenced by id only."""

    id: str
    name: str
    parent_id: str


@dataclass(frozen=True)
class RemoteFile:
    """
    A Drive object returned by a list call.

    Attributes:
        id: Drive file id
        name: File name
        parent_ids: Ids of the folders containing the object
        mime_type: Drive mime type ('' when not returned)
    """

    id: str
    name: str
    parent_ids: Tuple[str, ...] = ()
    mime_type: str = ""

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "RemoteFile":
        return cls(
            id=item["id"],
            name=item.get("name", ""),
            parent_ids=tuple(item.get("parents") or ()),
            mime_type=item.get("mimeType", ""),
        )

    def in_folder(self, folder_id: str) -> bool:
        return folder_id in self.parent_ids


def escape_query_value(value: str) -> str:
    """Escape a string literal for use in a Drive search query."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def name_query(name: str) -> str:
    """Query matching every object with exactly this name."""
    return f"name='{escape_query_value(name)}'"


def folder_query(name: str) -> str:
    """Query matching every folder with exactly this name."""
    return f"{name_query(name)} and mimeType='{FOLDER_MIME_TYPE}'"


def media_mime_type(path: str, mime_type: str = "") -> str:
    """Content type for the upload body: explicit, guessed, or the default."""
    if mime_type:
        return mime_type
    guessed, _ = mimetypes.guess_type(path)
    return guessed or DEFAULT_MEDIA_MIME_TYPE


class DriveClient:
    """
    Drive operations used by the uploader.

    Every call addresses all drives the credential can reach (shared drives
    included) and raises RemoteServiceError on failure.
    """

    def __init__(self, service: Any) -> None:
        self._service = service

    def __repr__(self) -> str:
        return "DriveClient()"

    @classmethod
    def from_service_account_info(cls, info: Dict[str, Any]) -> "DriveClient":
        """
        Build a client authenticated with a service-account credential.

        Raises:
            RemoteServiceError: If the credential is rejected
        """
        try:
            credentials = service_account.Credentials.from_service_account_info(
                info, scopes=[DRIVE_SCOPE]
            )
            service = build(
                "drive", "v3", credentials=credentials, cache_discovery=False
            )
        except (ValueError, GoogleAuthError, HttpError) as e:
            raise RemoteServiceError(
                f"fetching service account credentials failed with error: {e}"
            ) from e
        return cls(service)

    def list_files(self, query: str) -> List[RemoteFile]:
        """
        Return every object matching a search query, across all drives.

        Follows pagination until the result set is exhausted.
        """
        logger.debug(f"Listing files: q={query}")
        files: List[RemoteFile] = []
        page_token: Optional[str] = None

        while True:
            try:
                response = (
                    self._service.files()
                    .list(
                        q=query,
                        fields=LIST_FIELDS,
                        corpora="allDrives",
                        includeItemsFromAllDrives=True,
                        supportsAllDrives=True,
                        pageToken=page_token,
                    )
                    .execute()
                )
            except REMOTE_ERRORS as e:
                raise RemoteServiceError(f"Unable to list files: {e}") from e

            files.extend(RemoteFile.from_api(item) for item in response.get("files", []))
            page_token = response.get("nextPageToken")
            if not page_token:
                break

        logger.debug(f"Found {len(files)} file(s)")
        return files

    def create_folder(self, name: str, parent_id: str) -> RemoteFolder:
        """Create a folder under parent_id."""
        body = {"name": name, "mimeType": FOLDER_MIME_TYPE, "parents": [parent_id]}
        try:
            response = (
                self._service.files()
                .create(body=body, fields="id", supportsAllDrives=True)
                .execute()
            )
        except REMOTE_ERRORS as e:
            raise RemoteServiceError(f"Unable to create folder {name}: {e}") from e
        return RemoteFolder(id=response["id"], name=name, parent_id=parent_id)

    def create_file(
        self,
        stream: BinaryIO,
        name: str,
        parent_id: str,
        mime_type: str = "",
        media_type: str = DEFAULT_MEDIA_MIME_TYPE,
    ) -> RemoteFile:
        """
        Create a file under parent_id with the stream's content.

        Args:
            stream: Open binary stream with the file content
            name: Remote file name
            parent_id: Target folder id
            mime_type: Metadata mime type; empty lets Drive infer it
            media_type: Content type of the upload body
        """
        body: Dict[str, Any] = {"name": name, "parents": [parent_id]}
        if mime_type:
            body["mimeType"] = mime_type
        media = MediaIoBaseUpload(stream, mimetype=media_type, resumable=False)
        try:
            response = (
                self._service.files()
                .create(body=body, media_body=media, fields="id", supportsAllDrives=True)
                .execute()
            )
        except REMOTE_ERRORS as e:
            raise RemoteServiceError(
                f"creating/updating file failed with error: {e}"
            ) from e
        return RemoteFile(id=response["id"], name=name, parent_ids=(parent_id,))

    def update_file(
        self,
        file_id: str,
        stream: BinaryIO,
        name: str,
        add_parent_id: str,
        mime_type: str = "",
        media_type: str = DEFAULT_MEDIA_MIME_TYPE,
    ) -> RemoteFile:
        """Replace the content and metadata of an existing file."""
        body: Dict[str, Any] = {"name": name}
        if mime_type:
            body["mimeType"] = mime_type
        media = MediaIoBaseUpload(stream, mimetype=media_type, resumable=False)
        try:
            response = (
                self._service.files()
                .update(
                    fileId=file_id,
                    body=body,
                    media_body=media,
                    addParents=add_parent_id,
                    fields="id",
                    supportsAllDrives=True,
                )
                .execute()
            )
        except REMOTE_ERRORS as e:
            raise RemoteServiceError(
                f"creating/updating file failed with error: {e}"
            ) from e
        return RemoteFile(
            id=response.get("id", file_id), name=name, parent_ids=(add_parent_id,)
        )
