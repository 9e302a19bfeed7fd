"""
Tests for PassThroughFilter
"""

import os
from datetime import datetime, UTC

import pytest

from filterfs.base import FSOperationType, Fs
from filterfs.filter import PassThroughFilter


class NoRemove(PassThroughFilter):
    def remove(self, name):
        raise PermissionError(f"remove blocked: {name}")


class TestPassThroughFilter:
    """Test the no-op filter base."""

    @pytest.fixture
    def fs(self):
        return PassThroughFilter()

    def test_is_a_filesystem(self, fs):
        """Test the filter satisfies the Fs interface."""
        assert isinstance(fs, Fs)

    def test_every_operation_returns_none(self, fs):
        """Test no operation raises or returns a value."""
        now = datetime.now(UTC)
        assert fs.create("/a") is None
        assert fs.open("/a") is None
        assert fs.open_file("/a", os.O_RDWR, 0o644) is None
        assert fs.mkdir("/d", 0o755) is None
        assert fs.mkdir_all("/d/e", 0o755) is None
        assert fs.remove("/a") is None
        assert fs.remove_all("/d") is None
        assert fs.rename("/a", "/b") is None
        assert fs.stat("/a") is None
        assert fs.chmod("/a", 0o600) is None
        assert fs.chtimes("/a", now, now) is None

    def test_name(self, fs):
        """Test name() reports the class name."""
        assert fs.name() == "PassThroughFilter"
        assert NoRemove().name() == "NoRemove"

    def test_subclass_overrides_one_operation(self):
        """Test a subclass only gates what it overrides."""
        fs = NoRemove()
        assert fs.remove_all("/d") is None
        with pytest.raises(PermissionError):
            fs.remove("/a")

    def test_operation_names_are_methods(self, fs):
        """Test every FSOperationType value names an Fs method."""
        for operation in FSOperationType:
            assert callable(getattr(fs, operation.value))
