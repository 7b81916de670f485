"""Module containing client-side related code for the watch API."""

import json
from collections.abc import AsyncGenerator
from typing import Any

import httpx

from .cursor import Cursor
from .errors import UnsupportedTypeError
from .event import WatchEvent
from .resource_type import ResourceType, is_watchable


class Client:
    """Client-side code to watch a resource type on the watch API."""

    def __init__(
        self,
        url: str,
        http_client: httpx.AsyncClient,
    ) -> None:
        """
        Initializes a new instance of the Client class.

        :param url: The URL of the watch endpoint.
        :param http_client: A httpx AsyncClient under which to make the HTTP requests.
            This allows one time setup of authentication etc. on the session,
            and increases performance if fetching events frequently due to
            connection pooling.
        """
        self.url = url
        self._http_client = http_client

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Return the http_client being used by this client."""
        return self._http_client

    async def fetch_events(
        self,
        resource_type: ResourceType,
        cursor: Cursor | str | None = None,
        page_size_hint: int | None = None,
    ) -> AsyncGenerator[WatchEvent, None]:
        """
        Fetch events of a resource type from the server, resuming after the given cursor.

        :param resource_type: The resource type to watch.
        :param cursor: An optional cursor, or its token, to resume after. Without one the
            server starts from the head of the stream.
        :param page_size_hint: An optional hint for the page size of the response.
        :raises UnsupportedTypeError: if the resource type cannot be watched.
        :raises CursorValidationError: if the given Cursor cannot be encoded.
        :raises ValueError: if a line of the response is not a complete event.
        :raises httpx.RequestError: if unable to call the endpoint successfully.
        :raises httpx.HTTPError: if response status code does not indicate success.
        :raises json.JSONDecodeError: if a line from the response cannot be decoded into JSON.
        """
        self._validate_inputs(resource_type)
        params = self._build_request_params(resource_type, cursor, page_size_hint)

        async with self._http_client.stream("GET", self.url, params=params) as res:
            async for event in self._process_response(res):
                yield event

    async def list_resource_types(self) -> list[ResourceType]:
        """
        Fetch the resource types the server advertises as watchable.

        :raises httpx.HTTPError: if response status code does not indicate success.
        """
        res = await self._http_client.get(f"{self.url.rstrip('/')}/resources")
        res.raise_for_status()
        return [ResourceType.parse(name) for name in res.json()["resources"]]

    def _validate_inputs(self, resource_type: ResourceType) -> None:
        if not is_watchable(resource_type):
            msg = f"unsupported watch resource type: {resource_type}"
            raise UnsupportedTypeError(msg, 400)

    def _build_request_params(
        self,
        resource_type: ResourceType,
        cursor: Cursor | str | None,
        page_size_hint: int | None,
    ) -> dict[str, str | int]:
        """
        Build the http request parameters using the provided inputs.

        :param resource_type: The resource type to watch.
        :param cursor: An optional cursor, or its token, to resume after.
        :param page_size_hint: An optional hint for the page size of the response.
        :return: the http request parameters
        """
        params: dict[str, str | int] = {
            "resource": resource_type.value,
        }
        if isinstance(cursor, Cursor):
            params["cursor"] = cursor.encode()
        elif cursor:
            params["cursor"] = cursor

        if page_size_hint:
            params["pagesizehint"] = page_size_hint

        return params

    async def _process_response(self, res: httpx.Response) -> AsyncGenerator[WatchEvent, None]:
        """
        Process the response from the server.

        :param res: the server response
        :raises httpx.HTTPError: if response status code does not indicate success.
        :raises json.JSONDecodeError: if a line from the response cannot be decoded into JSON.
        :raises ValueError: if a line is not a complete event.
        """
        res.raise_for_status()

        async for line in res.aiter_lines():
            if not line:
                continue
            yield self._parse_event(line)

    def _parse_event(self, raw_line: str) -> WatchEvent:
        """
        Parse a line of response from the server.

        :param raw_line: The raw JSON line from the server
        :raises ValueError: if an error occurred parsing the json line into an event.
        """
        event: dict[str, Any] = json.loads(raw_line)
        try:
            return WatchEvent(
                resource_type=ResourceType(event["resource"]),
                cursor=event["cursor"],
                data=event["data"],
            )
        except Exception as error:
            msg = "error while parsing event"
            raise ValueError(msg) from error
