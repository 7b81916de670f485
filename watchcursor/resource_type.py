"""Module defining the kinds of resources a watch cursor can point into."""

from enum import Enum


class ResourceType(str, Enum):
    """
    The closed set of resource types known to this build.

    `NO_EVENT` and `UNKNOWN` are not watchable. The integer codes returned by `code_of` are part
    of the cursor wire format and must never be reused or renumbered.
    """

    NO_EVENT = "no_event"
    UNKNOWN = "unknown"
    HOST = "host"
    HOST_RELATION = "host_relation"
    BIZ = "biz"
    SET = "set"
    MODULE = "module"
    OBJECT = "object"

    @classmethod
    def parse(cls, value: str) -> "ResourceType":
        """Return the resource type with the given wire name, or UNKNOWN."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


_CODES: dict[ResourceType, int] = {
    ResourceType.NO_EVENT: 1,
    ResourceType.HOST: 2,
    ResourceType.HOST_RELATION: 3,
    ResourceType.BIZ: 4,
    ResourceType.SET: 5,
    ResourceType.MODULE: 6,
    ResourceType.OBJECT: 7,
}

_TYPES_BY_CODE: dict[int, ResourceType] = {code: typ for typ, code in _CODES.items()}

_WATCHABLE_TYPES = (
    ResourceType.HOST,
    ResourceType.HOST_RELATION,
    ResourceType.BIZ,
    ResourceType.SET,
    ResourceType.MODULE,
    ResourceType.OBJECT,
)

_EVENT_KINDS: dict[str, ResourceType] = {
    "hostcreate": ResourceType.HOST,
    "hostupdate": ResourceType.HOST,
    "hostdelete": ResourceType.HOST,
    "host_relation": ResourceType.HOST_RELATION,
    "bizcreate": ResourceType.BIZ,
    "bizupdate": ResourceType.BIZ,
    "bizdelete": ResourceType.BIZ,
    "setcreate": ResourceType.SET,
    "setupdate": ResourceType.SET,
    "setdelete": ResourceType.SET,
    "modulecreate": ResourceType.MODULE,
    "moduleupdate": ResourceType.MODULE,
    "moduledelete": ResourceType.MODULE,
    "objectcreate": ResourceType.OBJECT,
    "objectupdate": ResourceType.OBJECT,
    "objectdelete": ResourceType.OBJECT,
}


def code_of(resource_type: ResourceType) -> int:
    """Return the wire code of the given type, or -1 when it has none."""
    return _CODES.get(resource_type, -1)


def type_from_code(code: int) -> ResourceType:
    """
    Return the resource type with the given wire code.

    Codes this build does not know about, including ones assigned by a newer build, map to
    UNKNOWN instead of failing.
    """
    return _TYPES_BY_CODE.get(code, ResourceType.UNKNOWN)


def list_watchable_types() -> tuple[ResourceType, ...]:
    """Return all resource types which can be subscribed to."""
    return _WATCHABLE_TYPES


def is_watchable(resource_type: ResourceType) -> bool:
    return resource_type in _WATCHABLE_TYPES


def classify(event_kind: str) -> ResourceType:
    """Return the resource type owning an event kind such as `hostcreate` or `setdelete`."""
    return _EVENT_KINDS.get(event_kind, ResourceType.UNKNOWN)
