"""Unit tests for comment settings."""

import pydantic
import pytest

from discuss.config import CommentSettings


class TestCommentSettings:
    """Tests for CommentSettings bounds."""

    def test_defaults(self):
        """Defaults match the comment policy."""
        settings = CommentSettings()

        assert settings.edit_window_minutes == 15
        assert (settings.min_length, settings.max_length) == (1, 5000)
        assert settings.max_display_depth == 4

    def test_max_length_cannot_exceed_storage_limit(self):
        """The comments table rejects bodies over 5000 characters."""
        with pytest.raises(pydantic.ValidationError):
            CommentSettings(max_length=5001)

    def test_max_length_can_be_lowered(self):
        """Stricter limits are allowed."""
        assert CommentSettings(max_length=500).max_length == 500
