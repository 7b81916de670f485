import base64

import pytest
from watchcursor import (
    NO_EVENT,
    NO_EVENT_CURSOR,
    Cursor,
    CursorValidationError,
    InvalidObjectIdError,
    InvalidPositionError,
    MalformedTokenError,
    MissingTypeError,
    Position,
    ResourceType,
    UnsupportedTypeError,
    UnsupportedVersionError,
    decode_cursor,
    encode_cursor,
    is_no_event,
)

OID = "aaaaaaaaaaaaaaaaaaaaaaaa"


def make_token(*fields: str) -> str:
    return base64.b64encode("\r".join(fields).encode()).decode()


def test_no_event_cursor_matches_wire_fixture() -> None:
    assert NO_EVENT_CURSOR == "MQ0xDTENMQ01ZWE2ZDNmMzk0YzFmNWQ5ODZlOWJkODY="
    assert NO_EVENT == Cursor(ResourceType.NO_EVENT, Position(1, 1), "5ea6d3f394c1f5d986e9bd86")
    assert NO_EVENT.encode() == NO_EVENT_CURSOR


def test_no_event_cursor_decodes_to_sentinel() -> None:
    cursor = Cursor.decode(NO_EVENT_CURSOR)

    assert cursor == NO_EVENT
    assert is_no_event(cursor)
    assert is_no_event(NO_EVENT_CURSOR)


def test_is_no_event_false_for_regular_cursor() -> None:
    cursor = Cursor(ResourceType.HOST, Position(1, 1), "5ea6d3f394c1f5d986e9bd86")

    assert not is_no_event(cursor)
    assert not is_no_event(cursor.encode())


def test_encode_lays_out_fields_in_order() -> None:
    cursor = Cursor(ResourceType.SET, Position(1588000000, 42), OID)

    raw = base64.b64decode(cursor.encode())

    assert raw == b"1\r5\r" + OID.encode() + b"\r1588000000\r42"


@pytest.mark.parametrize(
    "resource_type", [typ for typ in ResourceType if typ is not ResourceType.UNKNOWN]
)
def test_round_trip(resource_type: ResourceType) -> None:
    cursor = Cursor(resource_type, Position(4294967295, 0), "0123456789abcdef01234567")

    token = encode_cursor(cursor)

    assert decode_cursor(token) == cursor
    assert encode_cursor(cursor) == token


@pytest.mark.parametrize(
    ("cursor", "error"),
    [
        (Cursor(None, Position(1, 1), OID), MissingTypeError),  # type: ignore[arg-type]
        (Cursor(ResourceType.HOST, Position(0, 1), OID), InvalidPositionError),
        (Cursor(ResourceType.HOST, Position(1, 1), ""), InvalidObjectIdError),
        (Cursor(ResourceType.HOST, Position(1, 1), "not-an-oid"), InvalidObjectIdError),
        (Cursor(ResourceType.HOST, Position(1, 1), OID.upper()), InvalidObjectIdError),
        (Cursor(ResourceType.UNKNOWN, Position(1, 1), OID), UnsupportedTypeError),
    ],
)
def test_encode_rejects_incomplete_cursor(cursor: Cursor, error: type[Exception]) -> None:
    with pytest.raises(error) as excinfo:
        cursor.encode()

    assert isinstance(excinfo.value, CursorValidationError)
    assert excinfo.value.status() == 500


def test_encode_checks_position_before_oid() -> None:
    with pytest.raises(InvalidPositionError, match="invalid cluster time sec"):
        Cursor(ResourceType.HOST, Position(0, 0), "").encode()


@pytest.mark.parametrize("seconds", [-1, 2**32])
def test_position_rejects_out_of_range_values(seconds: int) -> None:
    with pytest.raises(ValueError, match="out of range"):
        Position(seconds, 0)


def test_positions_order_by_seconds_then_counter() -> None:
    assert Position(1, 9) < Position(2, 0) < Position(2, 1)
    assert not Position(0, 0).is_set


def test_decode_unknown_type_code_is_not_an_error() -> None:
    cursor = Cursor.decode(make_token("1", "99", OID, "100", "3"))

    assert cursor == Cursor(ResourceType.UNKNOWN, Position(100, 3), OID)


@pytest.mark.parametrize("code", ["0", "-4"])
def test_decode_zero_or_negative_type_code_is_unknown(code: str) -> None:
    assert Cursor.decode(make_token("1", code, OID, "100", "3")).type is ResourceType.UNKNOWN


def test_decode_does_no_cross_field_checks() -> None:
    cursor = Cursor.decode(make_token("1", "1", OID, "0", "7"))

    assert cursor == Cursor(ResourceType.NO_EVENT, Position(0, 7), OID)


@pytest.mark.parametrize("version", ["2", "0", "", "1.0"])
def test_decode_rejects_other_versions(version: str) -> None:
    with pytest.raises(UnsupportedVersionError) as excinfo:
        Cursor.decode(make_token(version, "2", OID, "100", "3"))

    assert excinfo.value.version == version
    assert excinfo.value.status() == 410


@pytest.mark.parametrize(
    "token",
    [
        "not base64!",
        "MQ0xDTE",  # missing padding
        "",
        make_token("1", "2", OID, "100"),
        make_token("1", "2", OID, "100", "3", "4"),
        make_token("1", "2", OID, "100", "3", ""),  # trailing separator
        make_token("1", "x", OID, "100", "3"),
        make_token("1", "", OID, "100", "3"),
        make_token("1", "2", "aaaa", "100", "3"),
        make_token("1", "2", OID.upper(), "100", "3"),
        make_token("1", "2", "g" * 24, "100", "3"),
        make_token("1", "2", OID, "abc", "3"),
        make_token("1", "2", OID, "-1", "3"),
        make_token("1", "2", OID, "+1", "3"),
        make_token("1", "2", OID, "100", " 3"),
        make_token("1", "2", OID, "4294967296", "3"),
        make_token("1", "2", OID, "100", "4294967296"),
    ],
)
def test_decode_rejects_malformed_token(token: str) -> None:
    with pytest.raises(MalformedTokenError) as excinfo:
        Cursor.decode(token)

    assert excinfo.value.status() == 400


def test_decode_reports_invalid_cursor_string_for_wrong_field_count() -> None:
    with pytest.raises(MalformedTokenError, match="invalid cursor string"):
        Cursor.decode(make_token("1", "2", OID))


def test_decode_reports_invalid_oid() -> None:
    with pytest.raises(MalformedTokenError, match="got invalid oid: xyz"):
        Cursor.decode(make_token("1", "2", "xyz", "100", "3"))


def test_cursor_is_immutable() -> None:
    cursor = Cursor(ResourceType.HOST, Position(100, 3), OID)

    with pytest.raises(AttributeError):
        cursor.oid = "bbbbbbbbbbbbbbbbbbbbbbbb"  # type: ignore[misc]
