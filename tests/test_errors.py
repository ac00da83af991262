"""Tests for the error hierarchy."""

import pytest

from conic import (
    BindingError,
    ConfigEncodeError,
    ConfigFileAlreadyExistsError,
    ConfigKeyError,
    ConfigReadError,
    ConfigWriteError,
    ConicError,
    MissingSourceError,
    UnsupportedFormatError,
)


class TestConicErrors:
    """Test error types."""

    def test_base_error(self):
        error = ConicError("Test error", path="/test/path")
        assert str(error) == "Test error"
        assert error.message == "Test error"
        assert error.context == {"path": "/test/path"}

    @pytest.mark.parametrize("cls", [
        MissingSourceError,
        ConfigReadError,
        ConfigWriteError,
        ConfigEncodeError,
        BindingError,
        ConfigKeyError,
    ])
    def test_inherit_from_base(self, cls):
        error = cls("failed")
        assert isinstance(error, ConicError)
        assert error.message == "failed"

    def test_unsupported_format(self):
        error = UnsupportedFormatError("ini")
        assert isinstance(error, ConicError)
        assert error.format_id == "ini"
        assert str(error) == "Unsupported Config Type 'ini'"
        assert error.context == {"format_id": "ini"}

    def test_missing_source_default_message(self):
        assert str(MissingSourceError()) == "No Config File"

    def test_already_exists(self):
        error = ConfigFileAlreadyExistsError("/etc/app.json")
        assert error.path == "/etc/app.json"
        assert str(error) == "Config File '/etc/app.json' Already Exists"
