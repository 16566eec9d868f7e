"""
Chain accessor protocol: the network boundary.

The header builder depends on this interface, not on a concrete client.
Tests pass a fake; production code passes ``HttpChainClient``.

The protocol has exactly two methods:
    - get_info() → ChainInfo
    - get_block(block_num) → BlockRef

Failures are raised, not returned. The builder lets them propagate
untouched, so an implementation is free to raise whatever is natural for
its transport.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


# =========================================================================
# Result types
# =========================================================================


@dataclass(frozen=True)
class ChainInfo:
    """Head state of the chain as reported by ``get_info``.

    Attributes:
        head_block_num: Current chain height.
        head_block_time: Timestamp of the head block. The node emits it
            without a zone suffix (e.g. "2024-01-01T00:00:00.000"); it is
            always UTC. See ``chain_time.parse_chain_time``.
    """

    head_block_num: int
    head_block_time: str


@dataclass(frozen=True)
class BlockRef:
    """The slice of a block needed to anchor a transaction to it.

    Attributes:
        block_num: Height of the fetched block.
        ref_block_prefix: 32-bit value taken from the block id.
    """

    block_num: int
    ref_block_prefix: int


# =========================================================================
# Protocol
# =========================================================================


@runtime_checkable
class ChainAccessor(Protocol):
    """Interface for the two read-only chain queries.

    Methods are async because network I/O is inherently asynchronous.
    Implementations own connection handling and timeouts.
    """

    async def get_info(self) -> ChainInfo:
        """Return the current head block number and time."""
        ...

    async def get_block(self, block_num: int) -> BlockRef:
        """Return the reference prefix of the block at ``block_num``."""
        ...
