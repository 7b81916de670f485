"""Module to define the event dataclasses."""

from dataclasses import dataclass
from typing import Any

from .cursor import Position
from .resource_type import ResourceType


@dataclass
class ChangeEvent:
    """A raw event as read from the change stream of a collection."""

    collection: str
    position: Position
    oid: str
    data: Any = None


@dataclass
class WatchEvent:
    """An event delivered to watch clients, with the cursor to resume after it."""

    resource_type: ResourceType
    cursor: str
    data: Any
