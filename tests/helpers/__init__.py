"""Test helper utilities for the page model tests."""

from .fake_document import FakeDocument, FakeElement, RecordingListener

__all__ = [
    "FakeDocument",
    "FakeElement",
    "RecordingListener",
]
