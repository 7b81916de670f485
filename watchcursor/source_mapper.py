"""Module mapping raw change events to watch cursors."""

from collections.abc import Mapping
from types import MappingProxyType

from loguru import logger

from .constants import (
    BIZ_COLLECTION,
    HOST_COLLECTION,
    HOST_RELATION_COLLECTION,
    MODULE_COLLECTION,
    OBJECT_COLLECTION,
    SET_COLLECTION,
)
from .cursor import Cursor
from .errors import CursorValidationError, UnsupportedSourceError
from .event import ChangeEvent
from .resource_type import ResourceType

DEFAULT_COLLECTIONS: Mapping[str, ResourceType] = MappingProxyType(
    {
        HOST_COLLECTION: ResourceType.HOST,
        HOST_RELATION_COLLECTION: ResourceType.HOST_RELATION,
        BIZ_COLLECTION: ResourceType.BIZ,
        SET_COLLECTION: ResourceType.SET,
        MODULE_COLLECTION: ResourceType.MODULE,
        OBJECT_COLLECTION: ResourceType.OBJECT,
    }
)


class SourceMapper:
    """Resolve the resource type of change events by the collection they come from."""

    def __init__(self, collections: Mapping[str, ResourceType] | None = None) -> None:
        """
        Initialize the SourceMapper with the table of watched collections.

        :param collections: Maps collection names to resource types. Defaults to
            `DEFAULT_COLLECTIONS`.
        """
        self._collections = MappingProxyType(
            dict(DEFAULT_COLLECTIONS if collections is None else collections)
        )

    @property
    def collections(self) -> Mapping[str, ResourceType]:
        """Return the table of watched collections."""
        return self._collections

    def resource_type_of(self, collection: str) -> ResourceType | None:
        return self._collections.get(collection)

    def cursor_for(self, collection: str, event: ChangeEvent) -> Cursor:
        """
        Build the cursor pointing at the given event.

        :param collection: The collection the event was read from
        :param event: The raw change event
        :raises UnsupportedSourceError: if the collection is not watched.
        """
        resource_type = self.resource_type_of(collection)
        if resource_type is None:
            logger.error(
                "unsupported cursor type collection: {}, oid: {}", collection, event.oid
            )
            raise UnsupportedSourceError(collection, event.oid)

        return Cursor(type=resource_type, position=event.position, oid=event.oid)

    def token_for(self, collection: str, event: ChangeEvent) -> str:
        """
        Build and encode the cursor pointing at the given event.

        :raises UnsupportedSourceError: if the collection is not watched.
        :raises CursorValidationError: if the event carries no usable position or oid.
        """
        return self.encode(self.cursor_for(collection, event))

    def encode(self, cursor: Cursor) -> str:
        """
        Encode a cursor built by `cursor_for`, logging the failure if it cannot be encoded.

        :raises CursorValidationError: if the cursor carries no usable position or oid.
        """
        try:
            return cursor.encode()
        except CursorValidationError as err:
            logger.error("encode event cursor failed, err: {}, oid: {}", err, cursor.oid)
            raise


_default_mapper = SourceMapper()


def cursor_for(collection: str, event: ChangeEvent) -> Cursor:
    """Build the cursor of an event using the default collection table."""
    return _default_mapper.cursor_for(collection, event)


def token_for(collection: str, event: ChangeEvent) -> str:
    """Build the cursor token of an event using the default collection table."""
    return _default_mapper.token_for(collection, event)
