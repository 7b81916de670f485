"""
This module defines the error classes raised while encoding, decoding or mapping watch cursors.

Every error is a `CursorError`, which carries a human-readable `message` and a `code`. The code
is an HTTP status code that an API surface can use to report the failure to its client.
"""


class CursorError(ValueError):
    """
    CursorError has two attributes, `message` and `code`, which are set during initialization. The
    `message` attribute represents a human-readable error message, and the `code` attribute is an
    HTTP status code that can be used to indicate the type of error that occurred.
    """

    default_code = 400

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = self.default_code if code is None else code

    def __str__(self) -> str:
        return self.message

    def status(self) -> int:
        """Return the HTTP status code associated with this CursorError."""
        return self.code


class MalformedTokenError(CursorError):
    """The token is not a structurally valid cursor."""


class UnsupportedVersionError(CursorError):
    """The token was produced by a cursor format this codec does not speak."""

    default_code = 410

    def __init__(self, version: str) -> None:
        super().__init__(f"decode cursor, but got invalid cursor version: {version}")
        self.version = version


class CursorValidationError(CursorError):
    """A cursor value is incomplete and must not be encoded."""

    default_code = 500


class MissingTypeError(CursorValidationError):
    """The cursor has no resource type."""


class InvalidPositionError(CursorValidationError):
    """The cursor position is unset."""


class InvalidObjectIdError(CursorValidationError):
    """The cursor object identifier is empty or badly shaped."""


class UnsupportedTypeError(CursorValidationError):
    """The resource type has no wire code."""


class UnsupportedSourceError(CursorError):
    """A change event came from a collection that is not watched."""

    default_code = 500

    def __init__(self, collection: str, oid: str) -> None:
        super().__init__(f"unsupported cursor type collection: {collection}")
        self.collection = collection
        self.oid = oid
