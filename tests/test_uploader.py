"""
Unit tests for uploader module (single file transfer).

Uses temporary files and a mocked DriveClient; validates the create and
update paths, directory skipping and error reporting.
"""

from unittest.mock import MagicMock

import pytest

from drive_uploader.drive import DriveClient, RemoteFile
from drive_uploader.errors import RemoteServiceError
from drive_uploader.uploader import UploadRequest, UploadResult, upload_file


@pytest.fixture
def client():
    client = MagicMock(spec=DriveClient)
    client.create_file.return_value = RemoteFile("new-id", "a.txt", ("root",))
    client.update_file.return_value = RemoteFile("old-id", "a.txt", ("root",))
    return client


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "a.txt"
    path.write_bytes(b"hello drive")
    return path


class TestUploadRequest:
    """Test UploadRequest dataclass."""

    def test_upload_request_defaults(self):

        """Test UploadRequest defaults."""
        request = UploadRequest(
            source_path="a.txt", target_folder_id="root", target_name="a.txt"
        )

        assert request.mime_type == ""
        assert request.overwrite is False

    def test_upload_result_failure(self):

        """Test failed UploadResult."""
        request = UploadRequest("a.txt", "root", "a.txt")
        result = UploadResult(success=False, request=request, error_message="boom")

        assert result.action is None
        assert result.file_id is None
        assert result.error_message == "boom"


class TestUploadFile:
    """Test upload_file function."""

    def test_create_path(self, client, source_file):

        """Test upload_file creates a new file and closes the stream."""
        request = UploadRequest(str(source_file), "root", "Report", mime_type="text/plain")

        result = upload_file(client, request)

        assert result.success is True
        assert result.action == "created"
        assert result.file_id == "new-id"
        client.update_file.assert_not_called()

        args, kwargs = client.create_file.call_args
        assert kwargs["name"] == "Report"
        assert kwargs["parent_id"] == "root"
        assert kwargs["mime_type"] == "text/plain"
        assert kwargs["media_type"] == "text/plain"
        assert args[0].closed

    def test_update_path(self, client, source_file):

        """Test upload_file updates the existing file."""
        existing = RemoteFile("old-id", "a.txt", ("root",))
        request = UploadRequest(str(source_file), "root", "a.txt", overwrite=True)

        result = upload_file(client, request, existing)

        assert result.success is True
        assert result.action == "updated"
        assert result.file_id == "old-id"
        client.create_file.assert_not_called()

        args, kwargs = client.update_file.call_args
        assert args[0] == "old-id"
        assert kwargs["name"] == "a.txt"
        assert kwargs["add_parent_id"] == "root"

    def test_stream_content_is_file_content(self, client, source_file):

        """Test the uploaded stream carries the file content."""
        seen = {}

        def capture(stream, **kwargs):
            seen["content"] = stream.read()
            return RemoteFile("new-id", kwargs["name"], (kwargs["parent_id"],))

        client.create_file.side_effect = capture

        upload_file(client, UploadRequest(str(source_file), "root", "a.txt"))

        assert seen["content"] == b"hello drive"

    def test_directory_is_skipped(self, client, tmp_path):

        """Test upload_file skips a directory without calling Drive."""
        result = upload_file(client, UploadRequest(str(tmp_path), "root", "dir"))

        assert result.success is True
        assert result.action == "skipped"
        client.create_file.assert_not_called()
        client.update_file.assert_not_called()

    def test_missing_file_fails(self, client, tmp_path):

        """Test upload_file reports a missing file."""
        missing = tmp_path / "missing.txt"
        result = upload_file(client, UploadRequest(str(missing), "root", "missing.txt"))

        assert result.success is False
        assert "opening file" in result.error_message
        client.create_file.assert_not_called()

    def test_remote_error_fails_and_closes_file(self, client, source_file):

        """Test a Drive error gives a failed result and closes the file."""
        streams = []

        def fail(stream, **kwargs):
            streams.append(stream)
            raise RemoteServiceError("creating/updating file failed with error: 500")

        client.create_file.side_effect = fail

        result = upload_file(client, UploadRequest(str(source_file), "root", "a.txt"))

        assert result.success is False
        assert "creating/updating file failed" in result.error_message
        assert streams[0].closed
