"""Tests for loading schemas from a GraphQL endpoint."""

import asyncio
import json

import httpx
import pytest
from graphql import build_schema, introspection_from_schema

from gql_fraggen.core.auth import BearerAuth
from gql_fraggen.core.introspection import IntrospectionClient, IntrospectionError
from gql_fraggen.core.parser import SchemaParser

URL = "https://api.example.com/graphql"

SDL = """
interface Node { id: ID! }
type User implements Node { id: ID! name: String }
type Query { user(id: ID!): User }
"""


def introspection_payload() -> dict:
    return {"data": introspection_from_schema(build_schema(SDL))}


def client_for(handler, auth=None) -> IntrospectionClient:
    return IntrospectionClient(URL, auth=auth, transport=httpx.MockTransport(handler))


class TestFetch:
    """Successful introspection round trips."""

    def test_sends_introspection_query(self):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, json=introspection_payload())

        data = asyncio.run(client_for(handler, BearerAuth("secret")).fetch_introspection())

        assert "__schema" in data
        request = requests[0]
        assert request.method == "POST"
        assert request.headers["Authorization"] == "Bearer secret"
        assert "__schema" in json.loads(request.content)["query"]

    def test_sdl_parses_back(self):
        def handler(request):
            return httpx.Response(200, json=introspection_payload())

        sdl = asyncio.run(client_for(handler).fetch_sdl())
        ir = SchemaParser(quiet=True).parse_string(sdl)
        assert ir.types["User"].interfaces == ["Node"]
        assert [f.name for f in ir.types["User"].fields] == ["id", "name"]


class TestFailures:
    """Failed introspection raises IntrospectionError."""

    def test_http_error(self):
        def handler(request):
            return httpx.Response(500, text="boom")

        with pytest.raises(IntrospectionError) as exc_info:
            asyncio.run(client_for(handler).fetch_sdl())
        assert "500" in str(exc_info.value)

    def test_graphql_errors(self):
        errors = [{"message": "Introspection is disabled"}]

        def handler(request):
            return httpx.Response(200, json={"errors": errors})

        with pytest.raises(IntrospectionError) as exc_info:
            asyncio.run(client_for(handler).fetch_introspection())
        assert "Introspection is disabled" in str(exc_info.value)
        assert exc_info.value.errors == errors

    def test_not_json(self):
        def handler(request):
            return httpx.Response(200, text="<html></html>")

        with pytest.raises(IntrospectionError):
            asyncio.run(client_for(handler).fetch_introspection())

    def test_missing_schema(self):
        def handler(request):
            return httpx.Response(200, json={"data": {"hello": "world"}})

        with pytest.raises(IntrospectionError):
            asyncio.run(client_for(handler).fetch_introspection())

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(IntrospectionError):
            asyncio.run(client_for(handler).fetch_introspection())
