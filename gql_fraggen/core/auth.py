"""Authentication handlers for schema introspection requests.

Provides pluggable authentication via the Auth protocol. Handlers only
contribute HTTP headers.
"""

from typing import Iterable, Protocol, runtime_checkable


@runtime_checkable
class Auth(Protocol):
    """Protocol for authentication handlers.

    Example:
        class TenantAuth:
            def __init__(self, token: str, tenant: str):
                self.token = token
                self.tenant = tenant

            def get_headers(self) -> dict[str, str]:
                return {"Authorization": f"Bearer {self.token}", "X-Tenant": self.tenant}
    """

    def get_headers(self) -> dict[str, str]:
        """Return headers to include in requests."""
        ...


class NoAuth:
    """No authentication (for public endpoints or testing)."""

    def get_headers(self) -> dict[str, str]:
        return {}


class BearerAuth:
    """Bearer token authentication.

    Example:
        auth = BearerAuth("eyJhbGciOiJIUzI1NiIs...")
    """

    def __init__(self, token: str):
        self.token = token

    def get_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


class HeaderAuth:
    """Arbitrary request headers, e.g. API keys.

    Example:
        auth = HeaderAuth({"x-api-key": "key123"})
        auth = HeaderAuth.from_lines(["x-api-key: key123"])
    """

    def __init__(self, headers: dict[str, str]):
        self._headers = dict(headers)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "HeaderAuth":
        """Build from ``Name: value`` strings as given on a command line."""
        headers = {}
        for line in lines:
            name, sep, value = line.partition(":")
            if not sep or not name.strip():
                raise ValueError(f"Invalid header {line!r}, expected 'Name: value'")
            headers[name.strip()] = value.strip()
        return cls(headers)

    def get_headers(self) -> dict[str, str]:
        return self._headers.copy()


class ChainedAuth:
    """Merges the headers of several handlers; later handlers win."""

    def __init__(self, *handlers: Auth):
        self.handlers = handlers

    def get_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        for handler in self.handlers:
            headers.update(handler.get_headers())
        return headers
