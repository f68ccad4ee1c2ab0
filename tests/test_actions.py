"""Tests for GitHub Actions helpers."""

import pytest

from drive_uploader.utils.actions import add_mask, get_input, input_env_name, parse_bool
from drive_uploader.utils.logging import mask_secrets


class TestInputs:
    """Test action input lookup."""

    @pytest.mark.parametrize(
        "name, env_name",
        [
            ("filename", "INPUT_FILENAME"),
            ("folderId", "INPUT_FOLDERID"),
            ("useCompleteSourceFilenameAsName", "INPUT_USECOMPLETESOURCEFILENAMEASNAME"),
            ("name prefix", "INPUT_NAME_PREFIX"),
        ],
    )
    def test_input_env_name(self, name, env_name):
        """Test environment variable name of an input."""
        assert input_env_name(name) == env_name

    def test_get_input_strips_value(self):

        """Test get_input strips surrounding whitespace."""
        assert get_input("name", {"INPUT_NAME": "  Report \n"}) == "Report"

    def test_get_input_missing_is_empty(self):

        """Test a missing input reads as empty."""
        assert get_input("name", {}) == ""


class TestParseBool:
    """Test boolean input parsing."""

    @pytest.mark.parametrize("value", ["1", "t", "T", "TRUE", "true", "True"])
    def test_true_values(self, value):
        """Test accepted true literals."""
        assert parse_bool("overwrite", value) is True

    @pytest.mark.parametrize("value", ["0", "f", "F", "FALSE", "false", "False"])
    def test_false_values(self, value):
        """Test accepted false literals."""
        assert parse_bool("overwrite", value) is False

    def test_empty_value_is_none(self):

        """Test empty value means not set."""
        assert parse_bool("overwrite", "") is None

    def test_invalid_value_is_false(self):

        """Test an unrecognized value is false."""
        assert parse_bool("overwrite", "yes") is False


class TestAddMask:
    """Test secret masking."""

    def test_add_mask_registers_secret(self, monkeypatch):

        """Test add_mask registers the value for log masking."""
        monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
        add_mask("top-secret")
        assert mask_secrets("value=top-secret") == "value=***"

    def test_add_mask_emits_workflow_command_in_actions(self, monkeypatch, capsys):

        """Test add_mask emits ::add-mask:: per line inside GitHub Actions."""
        monkeypatch.setenv("GITHUB_ACTIONS", "true")
        add_mask("line-one\nline-two")

        out = capsys.readouterr().out
        assert "::add-mask::line-one\n" in out
        assert "::add-mask::line-two\n" in out

    def test_add_mask_outside_actions_prints_nothing(self, monkeypatch, capsys):

        """Test add_mask prints nothing outside GitHub Actions."""
        monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
        add_mask("quiet")
        assert capsys.readouterr().out == ""

    def test_add_mask_ignores_empty(self, monkeypatch, capsys):

        """Test add_mask ignores empty values."""
        monkeypatch.setenv("GITHUB_ACTIONS", "true")
        add_mask("")
        assert capsys.readouterr().out == ""
