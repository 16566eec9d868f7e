"""
Transport protocol for chain API calls.

The chain client depends on this protocol, not on httpx directly, so tests
can hand it canned bodies and the HTTP layer can be swapped without
touching response parsing.

Concrete implementations:
    - HttpxTransport (default, uses httpx.AsyncClient)
    - FakeTransport (tests, returns canned responses)
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class JsonTransport(Protocol):
    """Async transport for JSON POST requests."""

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Send a JSON body and return the parsed JSON response.

        Args:
            url: Full endpoint URL.
            payload: Request body.

        Returns:
            Parsed JSON response as a dict. Node-level error bodies are
            returned, not raised, so the client can report them.

        Raises:
            Exception: On transport-level failures (connection refused,
                timeout, TLS error, non-JSON error pages). The client lets
                these propagate.
        """
        ...


class HttpxTransport:
    """Default transport using httpx.AsyncClient.

    Args:
        timeout: Request timeout in seconds.
    """

    def __init__(self, timeout: float = 30.0) -> None:
        self._timeout = timeout

    @property
    def timeout(self) -> float:
        return self._timeout

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """POST ``payload`` via httpx."""
        import httpx

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            response = await client.post(
                url,
                json=payload,
                headers={"Content-Type": "application/json"},
            )
            if response.is_error:
                # Nodes answer failed queries with a JSON error body and a
                # 4xx/5xx status. Hand that body back; raise for anything else.
                try:
                    body = response.json()
                except ValueError:
                    response.raise_for_status()
                    raise
                if isinstance(body, dict) and "error" in body:
                    return body
                response.raise_for_status()
            result: dict[str, Any] = response.json()
            return result
