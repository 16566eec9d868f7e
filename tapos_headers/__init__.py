"""
TaPOS transaction headers.

Public API:

    Header assembly:
        - ``build_transaction_headers()``: await info + block, return headers.
        - ``create_transaction()``: callback-style entry point.
        - ``TransactionHeaders``: result type.
        - ``ref_block_num_for()``: 16-bit reference block number.

    Chain time:
        - ``parse_chain_time()``: head block time as aware UTC datetime.
        - ``format_expiration()``: whole-second UTC ISO-8601.

    Protocols (for dependency injection):
        - ``ChainAccessor``: network boundary (get_info, get_block).
        - ``JsonTransport``: injectable HTTP transport.

    Concrete client:
        - ``HttpChainClient``: chain HTTP API implementation of ChainAccessor.
        - ``HttpxTransport``: default httpx-based transport.
"""

from tapos_headers.chain import BlockRef, ChainAccessor, ChainInfo
from tapos_headers.chain_time import (
    expiration_after,
    format_expiration,
    parse_chain_time,
)
from tapos_headers.errors import ChainQueryError, MalformedChainResponse, TaposError
from tapos_headers.headers import (
    DEFAULT_EXPIRE_SECONDS,
    REF_BLOCK_NUM_MASK,
    TAPOS_BLOCK_OFFSET,
    TransactionHeaders,
    build_transaction_headers,
    create_transaction,
    ref_block_num_for,
)
from tapos_headers.http_client import HttpChainClient
from tapos_headers.transport import HttpxTransport, JsonTransport

__all__ = [
    "BlockRef",
    "ChainAccessor",
    "ChainInfo",
    "ChainQueryError",
    "DEFAULT_EXPIRE_SECONDS",
    "HttpChainClient",
    "HttpxTransport",
    "JsonTransport",
    "MalformedChainResponse",
    "REF_BLOCK_NUM_MASK",
    "TAPOS_BLOCK_OFFSET",
    "TaposError",
    "TransactionHeaders",
    "build_transaction_headers",
    "create_transaction",
    "expiration_after",
    "format_expiration",
    "parse_chain_time",
    "ref_block_num_for",
]
