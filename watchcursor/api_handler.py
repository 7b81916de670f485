"""Api handlers definition."""

import json
from collections.abc import AsyncGenerator, Generator
from typing import Any

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import StreamingResponse
from loguru import logger

from .cursor import Cursor
from .data_reader import DataReader
from .errors import MalformedTokenError, UnsupportedVersionError
from .event import ChangeEvent
from .log import setup_logging
from .resource_type import ResourceType, is_watchable, list_watchable_types
from .settings import WatchSettings, get_settings
from .source_mapper import SourceMapper


class WatchFastApiHandler:
    """Handler for the watch API from server side using fastapi."""

    def __init__(
        self,
        data_reader: DataReader,
        settings: WatchSettings | None = None,
    ) -> None:
        """Initialize the WatchFastApiHandler with DataReader and settings."""
        self.data_reader = data_reader
        self.settings = settings or get_settings()
        self.source_mapper = SourceMapper(self.settings.collection_types())

    def validate(self, request: Request) -> Any:
        """Validate all required parameters and its format.
        Return the expected parameter structure for next step processing.
        """
        query_params = request.query_params
        resource_param = query_params.get("resource")
        if resource_param is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Parameter resource not found"
            )
        resource_type = ResourceType.parse(resource_param)
        if not is_watchable(resource_type):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid parameter resource"
            )

        start = None
        cursor_param = query_params.get("cursor")
        if cursor_param:
            start = self._decode_cursor(cursor_param, resource_type)

        page_size_hint_param = query_params.get("pagesizehint")
        page_size_hint = None
        if page_size_hint_param:
            try:
                page_size_hint = int(page_size_hint_param)
            except ValueError as err:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Invalid parameter pagesizehint",
                ) from err
            if page_size_hint < 1:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Invalid parameter pagesizehint",
                )
            page_size_hint = min(page_size_hint, self.settings.max_page_size)

        return {
            "resource": resource_type,
            "start": start,
            "pagesizehint": page_size_hint,
        }

    def _decode_cursor(self, token: str, resource_type: ResourceType) -> Cursor | None:
        """Decode the cursor a client resumes from, None for any no-event cursor."""
        try:
            cursor = Cursor.decode(token)
        except UnsupportedVersionError as err:
            logger.info("rejecting cursor {}: {}", token, err)
            raise HTTPException(
                status_code=err.status(), detail="cursor no longer valid"
            ) from err
        except MalformedTokenError as err:
            raise HTTPException(status_code=err.status(), detail=str(err)) from err

        if cursor.type is ResourceType.NO_EVENT:
            return None
        if cursor.type is ResourceType.UNKNOWN:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cursor resource type is not supported by this server",
            )
        if cursor.type != resource_type:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Cursor does not belong to resource {resource_type.value}",
            )
        return cursor

    def _format(self, event: ChangeEvent) -> bytes:
        cursor = self.source_mapper.cursor_for(event.collection, event)
        line = {
            "resource": cursor.type.value,
            "cursor": self.source_mapper.encode(cursor),
            "data": event.data,
        }
        return f"{json.dumps(line)}\n".encode()

    async def generate_response_format(
        self,
        data_gen: Generator[ChangeEvent, Any, Any] | AsyncGenerator[ChangeEvent, Any],
    ) -> AsyncGenerator[bytes, Any]:
        """Generate the response format for the client."""
        if isinstance(data_gen, AsyncGenerator):
            async for event in data_gen:
                yield self._format(event)
        else:
            for event in data_gen:
                yield self._format(event)

    def handle(self, request: Request) -> StreamingResponse:
        """Handle the request after validation.
        Return final response to the client.
        """
        validated_data = self.validate(request)
        data_gen = self.data_reader.get_events(
            validated_data["resource"], validated_data["start"], validated_data["pagesizehint"]
        )
        response_gen = self.generate_response_format(data_gen)
        return StreamingResponse(response_gen, media_type="application/x-ndjson")

    def list_resource_types(self) -> dict[str, list[str]]:
        """Return the resource types clients may watch."""
        return {"resources": [typ.value for typ in list_watchable_types()]}


def create_app(data_reader: DataReader, settings: WatchSettings | None = None) -> FastAPI:
    """Create the watch API application serving events read by data_reader."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_json)

    app = FastAPI()
    api_handler = WatchFastApiHandler(data_reader=data_reader, settings=settings)

    @app.get("/watch/v1")
    async def watch(request: Request) -> StreamingResponse:
        return api_handler.handle(request)

    @app.get("/watch/v1/resources")
    async def resources() -> dict[str, list[str]]:
        return api_handler.list_resource_types()

    return app
