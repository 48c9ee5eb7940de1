"""
Transport protocol for JSON-RPC calls.

Defines the seam where the HTTP implementation plugs in. The JSON-RPC
client depends on this protocol, not on httpx directly, so the transport
can be swapped for a test fake without editing parsing logic.

Concrete implementations:
    - HttpxTransport (default, uses httpx.AsyncClient)
    - FakeTransport (tests, returns canned responses)

Failure contract:
    Every transport-level failure surfaces as ``TransportError`` with an
    ``error_code`` of TIMEOUT, CONNECTION_FAILED, HTTP_ERROR or
    INVALID_JSON. Ledger-level failures are NOT transport errors: a
    ``{"result": {"status": "error"}}`` body is a valid response.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import httpx

from jingtum_rpc.errors import ErrorCode, TransportError


@runtime_checkable
class JsonRpcTransport(Protocol):
    """Async transport for JSON-RPC POST requests."""

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Send a JSON-RPC request and return the parsed response.

        Args:
            url: The JSON-RPC endpoint URL.
            payload: The JSON-RPC request body (method, params).

        Returns:
            Parsed JSON response as a dict.

        Raises:
            TransportError: On connection refused, timeout, non-2xx status,
                or a body that is not a JSON object.
        """
        ...


class HttpxTransport:
    """Default transport using httpx.AsyncClient.

    Args:
        timeout: Per-request timeout in seconds. This is the only
            per-call timeout; the submission loop adds none of its own.
        headers: Extra headers sent with every request.
    """

    def __init__(self, timeout: float = 30.0, headers: dict[str, str] | None = None) -> None:
        self._timeout = timeout
        self._headers = headers or {}

    @property
    def timeout(self) -> float:
        return self._timeout

    async def post_json(self, url: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Send JSON-RPC request via httpx."""
        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    url,
                    json=payload,
                    headers={"Content-Type": "application/json", **self._headers},
                )
        except httpx.TimeoutException as e:
            raise TransportError(
                f"request to {url} timed out after {self._timeout}s",
                error_code=ErrorCode.TIMEOUT,
                details={"url": url, "timeout": self._timeout},
            ) from e
        except httpx.ConnectError as e:
            raise TransportError(
                f"failed to connect to {url}",
                error_code=ErrorCode.CONNECTION_FAILED,
                details={"url": url},
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(
                f"HTTP error: {e}",
                error_code=ErrorCode.HTTP_ERROR,
                details={"url": url, "error": str(e)},
            ) from e

        if response.status_code >= 400:
            raise TransportError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                error_code=ErrorCode.HTTP_ERROR,
                details={"url": url, "status_code": response.status_code},
            )

        try:
            result = response.json()
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError are both ValueErrors.
            raise TransportError(
                "response was not valid JSON",
                error_code=ErrorCode.INVALID_JSON,
                details={
                    "url": url,
                    "body_preview": response.text[:200] if response.text else "",
                },
            ) from e

        if not isinstance(result, dict):
            raise TransportError(
                "response JSON was not an object",
                error_code=ErrorCode.INVALID_JSON,
                details={"url": url, "type": type(result).__name__},
            )
        return result
