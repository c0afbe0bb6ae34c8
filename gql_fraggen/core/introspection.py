"""Schema loading from a live GraphQL endpoint.

Runs the standard introspection query over HTTP and prints the result as
SDL, which can then be handed to the schema parser like a schema file.
"""

import logging
from typing import Any

import httpx
from graphql import GraphQLError, build_client_schema, get_introspection_query, print_schema

from .auth import Auth, NoAuth
from .errors import FragmentGeneratorError

log = logging.getLogger(__name__)


class IntrospectionError(FragmentGeneratorError):
    """Exception raised when a schema cannot be introspected."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)


class IntrospectionClient:
    """Fetches a schema from a GraphQL endpoint via introspection.

    Supports pluggable authentication via the Auth protocol.

    Examples:
        client = IntrospectionClient(url, auth=BearerAuth(token))
        sdl = await client.fetch_sdl()
    """

    def __init__(
        self,
        url: str,
        auth: Auth | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            url: GraphQL endpoint URL
            auth: Authentication handler (implements Auth protocol)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, e.g. for testing
        """
        self.url = url
        self.timeout = timeout
        self._auth = auth if auth is not None else NoAuth()
        self._transport = transport

    async def fetch_introspection(self) -> dict[str, Any]:
        """Run the introspection query and return the 'data' portion.

        Raises:
            IntrospectionError: On HTTP failures or GraphQL errors
        """
        headers = {"Content-Type": "application/json"}
        headers.update(self._auth.get_headers())
        payload = {"query": get_introspection_query(descriptions=False)}

        log.info("Introspecting schema from %s", self.url)
        async with httpx.AsyncClient(
            timeout=self.timeout,
            headers=headers,
            transport=self._transport,
        ) as client:
            try:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
            except httpx.HTTPError as e:
                raise IntrospectionError(f"Introspection request failed: {e}") from e

        try:
            result = response.json()
        except ValueError as e:
            raise IntrospectionError(f"Endpoint did not return JSON: {e}") from e

        if result.get("errors"):
            error_messages = "; ".join(e.get("message", str(e)) for e in result["errors"])
            raise IntrospectionError(f"GraphQL errors: {error_messages}", result["errors"])

        data = result.get("data")
        if not data or "__schema" not in data:
            raise IntrospectionError("Response does not contain an introspection result")
        return data

    async def fetch_sdl(self) -> str:
        """Fetch the schema and print it as SDL."""
        data = await self.fetch_introspection()
        try:
            schema = build_client_schema(data)
        except (GraphQLError, TypeError) as e:
            raise IntrospectionError(f"Invalid introspection result: {e}") from e
        return print_schema(schema)
