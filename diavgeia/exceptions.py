"""Errors raised while publishing a generated decision document."""

from __future__ import annotations


class PublishError(Exception):
    """A publishing step failed.

    ``retryable`` tells the caller whether running the same step again may
    succeed (a busy triple store) or not (a missing executable, a full disk).
    """

    def __init__(self, message: str, *, retryable: bool = False) -> None:
        super().__init__(message)
        self.retryable = retryable


class StorageError(PublishError):
    """Writing or compressing the decision file failed."""


class LoaderError(PublishError):
    """The triple store loader process failed."""
