"""Watch cursor module."""

from .api_handler import WatchFastApiHandler, create_app
from .client import Client
from .constants import CURSOR_VERSION
from .cursor import (
    NO_EVENT,
    NO_EVENT_CURSOR,
    Cursor,
    Position,
    decode_cursor,
    encode_cursor,
    is_no_event,
)
from .data_reader import DataReader
from .errors import (
    CursorError,
    CursorValidationError,
    InvalidObjectIdError,
    InvalidPositionError,
    MalformedTokenError,
    MissingTypeError,
    UnsupportedSourceError,
    UnsupportedTypeError,
    UnsupportedVersionError,
)
from .event import ChangeEvent, WatchEvent
from .resource_type import (
    ResourceType,
    classify,
    code_of,
    list_watchable_types,
    type_from_code,
)
from .settings import WatchSettings, get_settings
from .source_mapper import SourceMapper, cursor_for, token_for

__all__ = [
    "CURSOR_VERSION",
    "NO_EVENT",
    "NO_EVENT_CURSOR",
    "ChangeEvent",
    "Client",
    "Cursor",
    "CursorError",
    "CursorValidationError",
    "DataReader",
    "InvalidObjectIdError",
    "InvalidPositionError",
    "MalformedTokenError",
    "MissingTypeError",
    "Position",
    "ResourceType",
    "SourceMapper",
    "UnsupportedSourceError",
    "UnsupportedTypeError",
    "UnsupportedVersionError",
    "WatchEvent",
    "WatchFastApiHandler",
    "WatchSettings",
    "classify",
    "code_of",
    "create_app",
    "cursor_for",
    "decode_cursor",
    "encode_cursor",
    "get_settings",
    "is_no_event",
    "list_watchable_types",
    "token_for",
    "type_from_code",
]
