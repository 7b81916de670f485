"""
This module defines the watch Cursor and its text encoding.

A cursor points at one event of a change stream. It is handed to watch clients as an opaque
token, and a client which lost its place presents the token again to resume from that event.
The token is the base64 encoding of five carriage-return separated fields::

    version CR type-code CR oid CR seconds CR counter

Tokens do not sort like the positions they encode; compare decoded cursors instead.
"""

import base64
import binascii
import re
from dataclasses import dataclass

from .constants import (
    CURSOR_VERSION,
    FIELD_COUNT,
    FIELD_SEPARATOR,
    MAX_UINT32,
    NO_EVENT_OID,
)
from .errors import (
    InvalidObjectIdError,
    InvalidPositionError,
    MalformedTokenError,
    MissingTypeError,
    UnsupportedTypeError,
    UnsupportedVersionError,
)
from .resource_type import ResourceType, code_of, type_from_code

_OID_PATTERN = re.compile(r"[0-9a-f]{24}")
_OID_BYTES_PATTERN = re.compile(rb"[0-9a-f]{24}")
_UNSIGNED_PATTERN = re.compile(rb"[0-9]+")
_SIGNED_PATTERN = re.compile(rb"[+-]?[0-9]+")


@dataclass(frozen=True, order=True)
class Position:
    """
    A logical timestamp of the change stream, ordered by seconds and then counter.

    :param seconds: The seconds part, zero means the position is unset
    :param counter: The logical counter within the second
    """

    seconds: int
    counter: int

    def __post_init__(self) -> None:
        for name, value in (("seconds", self.seconds), ("counter", self.counter)):
            if not 0 <= value <= MAX_UINT32:
                raise ValueError(f"position {name} out of range: {value}")

    @property
    def is_set(self) -> bool:
        return self.seconds != 0


def is_valid_oid(oid: str) -> bool:
    """Return whether oid looks like an object id, 24 lowercase hex characters."""
    return _OID_PATTERN.fullmatch(oid) is not None


@dataclass(frozen=True)
class Cursor:
    """
    A dataclass pointing at one event of the change stream.

    :param type: The resource type the event belongs to
    :param position: The position of the event in the stream
    :param oid: A hard to guess object id telling apart events at the same position
    """

    type: ResourceType
    position: Position
    oid: str

    def encode(self) -> str:
        """
        Encode the cursor into its token.

        :raises CursorValidationError: if the cursor is incomplete or its type has no wire code.
        """
        if not self.type:
            raise MissingTypeError("unsupported type")

        if not self.position.is_set:
            raise InvalidPositionError("invalid cluster time sec")

        if not self.oid:
            raise InvalidObjectIdError("invalid oid")
        if not is_valid_oid(self.oid):
            raise InvalidObjectIdError(f"invalid oid: {self.oid}")

        code = code_of(self.type)
        if code < 0:
            raise UnsupportedTypeError(f"unsupported cursor type: {self.type}")

        fields = (
            CURSOR_VERSION,
            str(code),
            self.oid,
            str(self.position.seconds),
            str(self.position.counter),
        )
        raw = FIELD_SEPARATOR.join(field.encode("ascii") for field in fields)
        return base64.b64encode(raw).decode("ascii")

    @classmethod
    def decode(cls, token: str) -> "Cursor":
        """
        Decode a token back into a cursor.

        Decoding is lenient about what the fields mean: a type code unknown to this build yields
        an UNKNOWN cursor, and no cross-field checks are done.

        :raises MalformedTokenError: if the token is not a structurally valid cursor.
        :raises UnsupportedVersionError: if the token has another format version.
        """
        try:
            raw = base64.b64decode(token, validate=True)
        except (binascii.Error, ValueError) as err:
            raise MalformedTokenError(
                f"decode cursor, but base64 decode failed, err: {err}"
            ) from err

        elements = raw.split(FIELD_SEPARATOR)
        if len(elements) != FIELD_COUNT:
            raise MalformedTokenError("invalid cursor string")

        version, typ, oid, sec, counter = elements
        if version != CURSOR_VERSION.encode("ascii"):
            raise UnsupportedVersionError(_text(version))

        if _SIGNED_PATTERN.fullmatch(typ) is None:
            raise MalformedTokenError(f"got invalid type: {_text(typ)}")

        if _OID_BYTES_PATTERN.fullmatch(oid) is None:
            raise MalformedTokenError(f"got invalid oid: {_text(oid)}")

        return cls(
            type=type_from_code(int(typ)),
            position=Position(
                seconds=_parse_uint32(sec, "sec"),
                counter=_parse_uint32(counter, "counter"),
            ),
            oid=oid.decode("ascii"),
        )


def _text(field: bytes) -> str:
    return field.decode("utf-8", errors="replace")


def _parse_uint32(field: bytes, name: str) -> int:
    if _UNSIGNED_PATTERN.fullmatch(field) is None:
        raise MalformedTokenError(f"got invalid {name} field {_text(field)}")
    value = int(field)
    if value > MAX_UINT32:
        raise MalformedTokenError(f"got invalid {name} field {_text(field)}, out of range")
    return value


def encode_cursor(cursor: Cursor) -> str:
    """Encode the given cursor into its token."""
    return cursor.encode()


def decode_cursor(token: str) -> Cursor:
    """Decode the given token into a cursor."""
    return Cursor.decode(token)


def _init_no_event_cursor() -> tuple[Cursor, str]:
    no_event = Cursor(
        type=ResourceType.NO_EVENT,
        position=Position(seconds=1, counter=1),
        oid=NO_EVENT_OID,
    )
    try:
        token = no_event.encode()
    except ValueError as err:
        raise RuntimeError("initial NoEventCursor failed") from err
    return no_event, token


NO_EVENT, NO_EVENT_CURSOR = _init_no_event_cursor()
"""
NO_EVENT_CURSOR is a special cursor: no event has occurred yet, watching starts from the head of
the stream. It always is `MQ0xDTENMQ01ZWE2ZDNmMzk0YzFmNWQ5ODZlOWJkODY=`.
"""


def is_no_event(cursor: Cursor | str) -> bool:
    """Return whether the given cursor or token is the no-event cursor."""
    if isinstance(cursor, Cursor):
        return cursor == NO_EVENT
    return cursor == NO_EVENT_CURSOR
