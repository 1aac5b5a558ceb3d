"""Test utilities for cmakekits tests."""

from tests.utils.builders import ReplyBuilder

__all__ = ["ReplyBuilder"]
