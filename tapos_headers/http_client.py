"""
Chain HTTP API client: real network implementation of ChainAccessor.

Translates ``get_info`` / ``get_block`` responses into ChainInfo/BlockRef.
Uses an injectable transport (JsonTransport) so the HTTP layer can be
swapped for test fakes without changing parsing logic.

No retry loops. No caching. No logic beyond request building and response
parsing.

Endpoints:
    - POST {url}/v1/chain/get_info with {}
    - POST {url}/v1/chain/get_block with {"block_num_or_id": n}

Error bodies look like:
    {"code": 500, "message": "Internal Service Error",
     "error": {"code": 3100002, "name": "unknown_block_exception",
               "what": "Unknown block", "details": [...]}}
"""

from __future__ import annotations

import logging
from typing import Any

from tapos_headers.chain import BlockRef, ChainInfo
from tapos_headers.errors import ChainQueryError, MalformedChainResponse
from tapos_headers.transport import HttpxTransport, JsonTransport

logger = logging.getLogger(__name__)

GET_INFO_PATH = "/v1/chain/get_info"
GET_BLOCK_PATH = "/v1/chain/get_block"

_UINT32_MAX = 0xFFFFFFFF


class HttpChainClient:
    """Chain API client implementing the ChainAccessor protocol.

    Args:
        url: Base URL of the node (e.g. "http://127.0.0.1:8888").
        transport: Injectable transport for HTTP POST. Defaults to
            HttpxTransport. Pass a FakeTransport for testing.
    """

    def __init__(
        self,
        url: str,
        transport: JsonTransport | None = None,
    ) -> None:
        if not url:
            raise ValueError("url must be non-empty")
        self._url = url.rstrip("/")
        self._transport = transport or HttpxTransport()

    @property
    def url(self) -> str:
        """The node base URL."""
        return self._url

    # -----------------------------------------------------------------
    # ChainAccessor protocol methods
    # -----------------------------------------------------------------

    async def get_info(self) -> ChainInfo:
        """Fetch head block number and time.

        Transport exceptions propagate to the caller.
        """
        response = await self._post(GET_INFO_PATH, {})
        return _parse_info_response(response)

    async def get_block(self, block_num: int) -> BlockRef:
        """Fetch the block at ``block_num`` and return its reference prefix.

        Transport exceptions propagate to the caller.
        """
        response = await self._post(GET_BLOCK_PATH, {"block_num_or_id": block_num})
        block = _parse_block_response(response)
        if block.block_num != block_num:
            raise MalformedChainResponse(
                f"requested block {block_num}, node returned {block.block_num}"
            )
        return block

    async def _post(self, path: str, payload: dict[str, Any]) -> dict[str, Any]:
        logger.debug("POST %s%s %s", self._url, path, payload)
        response = await self._transport.post_json(self._url + path, payload)
        _raise_for_error_body(response)
        return response


# =====================================================================
# Response parsing (pure functions, no I/O)
# =====================================================================


def _raise_for_error_body(response: dict[str, Any]) -> None:
    """Raise ChainQueryError if the node returned an error body."""
    error = response.get("error")
    if error is None:
        return
    if not isinstance(error, dict):
        raise ChainQueryError(response.get("code"), None, str(error))

    detail = error.get("what") or response.get("message") or "unknown chain error"
    details = error.get("details")
    if isinstance(details, list) and details and isinstance(details[0], dict):
        message = details[0].get("message")
        if message:
            detail = f"{detail}: {message}"
    raise ChainQueryError(error.get("code"), error.get("name"), detail)


def _require_int(response: dict[str, Any], key: str) -> int:
    value = response.get(key)
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedChainResponse(f"{key} must be an int, got: {value!r}")
    if value < 0:
        raise MalformedChainResponse(f"{key} must be non-negative, got: {value}")
    return value


def _parse_info_response(response: dict[str, Any]) -> ChainInfo:
    """Parse a get_info body into ChainInfo."""
    head_block_num = _require_int(response, "head_block_num")
    head_block_time = response.get("head_block_time")
    if not isinstance(head_block_time, str) or not head_block_time:
        raise MalformedChainResponse(
            f"head_block_time must be a non-empty string, got: {head_block_time!r}"
        )
    return ChainInfo(head_block_num=head_block_num, head_block_time=head_block_time)


def _parse_block_response(response: dict[str, Any]) -> BlockRef:
    """Parse a get_block body into BlockRef."""
    block_num = _require_int(response, "block_num")
    ref_block_prefix = _require_int(response, "ref_block_prefix")
    if ref_block_prefix > _UINT32_MAX:
        raise MalformedChainResponse(
            f"ref_block_prefix out of uint32 range: {ref_block_prefix}"
        )
    return BlockRef(block_num=block_num, ref_block_prefix=ref_block_prefix)
