"""Module to define the DataReader interface."""

from collections.abc import AsyncGenerator, Generator
from typing import Protocol

from .cursor import Cursor
from .event import ChangeEvent
from .resource_type import ResourceType

# pylint: disable=R0903


class DataReader(Protocol):
    """
    DataReader is an interface describing an abstraction for reading change events of one
    resource type, resuming after the event a cursor points at.
    """

    def get_events(
        self,
        resource_type: ResourceType,
        start: Cursor | None,
        page_size: int | None,
    ) -> Generator[ChangeEvent, None, None] | AsyncGenerator[ChangeEvent, None]:
        """
        Read a page of change events at server side.

        :param resource_type: the resource type being watched
        :param start: the cursor to resume after, None to start from the head of the stream
        :param page_size: page size of the return data
        """
        ...
