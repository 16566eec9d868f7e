"""
TaPOS transaction headers.

Consult the chain and gather what a new transaction needs for Transaction
as Proof of Stake: a 16-bit reference block number, the 32-bit prefix of
that block's id and an expiration derived from chain time (not wall-clock
time).

Flow:
    get_info() → parse head time → back up TAPOS_BLOCK_OFFSET blocks
    → get_block(target) → assemble TransactionHeaders

Usually called once per transaction, or cached per block by the caller.
A longer cache window means a longer window for replaying the transaction.
Nothing in this module caches.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from tapos_headers.chain import ChainAccessor
from tapos_headers.chain_time import expiration_after, parse_chain_time

logger = logging.getLogger(__name__)

DEFAULT_EXPIRE_SECONDS = 60

# Back up a few blocks from head so the anchor survives mini-forks.
TAPOS_BLOCK_OFFSET = 3

REF_BLOCK_NUM_MASK = 0xFFFF

HeadersCallback = Callable[[BaseException | None, "TransactionHeaders | None"], Any]


@dataclass(frozen=True)
class TransactionHeaders:
    """Anti-replay header fields of one transaction.

    Attributes:
        expiration: UTC time after which the transaction is invalid,
            "YYYY-MM-DDTHH:MM:SS".
        ref_block_num: Reference block height masked to 16 bits.
        ref_block_prefix: 32-bit prefix of the referenced block's id.
        region: Always 0.
        max_net_usage_words: Always 0 (no explicit limit).
        max_kcpu_usage: Always 0 (no explicit limit).
        delay_sec: Always 0.
        context_free_actions: Empty; filled by the caller.
        actions: Empty; filled by the caller.
        signatures: Empty; filled by the signer.
    """

    expiration: str
    ref_block_num: int
    ref_block_prefix: int
    region: int = 0
    max_net_usage_words: int = 0
    max_kcpu_usage: int = 0
    delay_sec: int = 0
    context_free_actions: tuple[Any, ...] = ()
    actions: tuple[Any, ...] = ()
    signatures: tuple[Any, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Plain transaction dict for the caller to extend and sign.

        Sequences come back as new lists the caller owns.
        """
        return {
            "expiration": self.expiration,
            "region": self.region,
            "ref_block_num": self.ref_block_num,
            "ref_block_prefix": self.ref_block_prefix,
            "max_net_usage_words": self.max_net_usage_words,
            "max_kcpu_usage": self.max_kcpu_usage,
            "delay_sec": self.delay_sec,
            "context_free_actions": list(self.context_free_actions),
            "actions": list(self.actions),
            "signatures": list(self.signatures),
        }


def ref_block_num_for(head_block_num: int) -> int:
    """Reference block number for a chain at ``head_block_num``.

    Masks to 16 bits, so heights past 65535 wrap.

    Raises:
        ValueError: If the chain is shorter than TAPOS_BLOCK_OFFSET.
    """
    return _target_block_num(head_block_num) & REF_BLOCK_NUM_MASK


def _target_block_num(head_block_num: int) -> int:
    if head_block_num < TAPOS_BLOCK_OFFSET:
        raise ValueError(
            f"head_block_num must be at least {TAPOS_BLOCK_OFFSET}, "
            f"got: {head_block_num}"
        )
    return head_block_num - TAPOS_BLOCK_OFFSET


def _check_expire_in_seconds(expire_in_seconds: int) -> None:
    if (
        isinstance(expire_in_seconds, bool)
        or not isinstance(expire_in_seconds, int)
        or expire_in_seconds <= 0
    ):
        raise ValueError(
            f"expire_in_seconds must be a positive int, got: {expire_in_seconds!r}"
        )


async def build_transaction_headers(
    chain: ChainAccessor,
    expire_in_seconds: int = DEFAULT_EXPIRE_SECONDS,
) -> TransactionHeaders:
    """Query the chain and assemble TaPOS headers.

    The block query is issued only after the info query succeeds. Errors
    from either query propagate unchanged.

    Args:
        chain: Accessor for ``get_info`` and ``get_block``.
        expire_in_seconds: Seconds from head block time until expiration.

    Returns:
        A fresh TransactionHeaders.

    Raises:
        ValueError: If expire_in_seconds is not a positive int, the head
            time is not UTC, the chain is too short to back up, or the
            expiration falls past the datetime range.
    """
    _check_expire_in_seconds(expire_in_seconds)

    info = await chain.get_info()
    chain_time = parse_chain_time(info.head_block_time)
    target = _target_block_num(info.head_block_num)
    ref_block_num = target & REF_BLOCK_NUM_MASK

    logger.debug(
        "head %d, referencing block %d (ref_block_num=%d)",
        info.head_block_num,
        target,
        ref_block_num,
    )

    block = await chain.get_block(target)

    return TransactionHeaders(
        expiration=expiration_after(chain_time, expire_in_seconds),
        ref_block_num=ref_block_num,
        ref_block_prefix=block.ref_block_prefix,
    )


def create_transaction(
    chain: ChainAccessor,
    expire_in_seconds: int = DEFAULT_EXPIRE_SECONDS,
    callback: HeadersCallback | None = None,
) -> Awaitable[None]:
    """Callback-style wrapper around ``build_transaction_headers``.

    The callback is checked here, synchronously, so a missing one fails
    before anything is queried. The returned awaitable delivers exactly one
    of ``callback(error, None)`` or ``callback(None, headers)``.

    Nothing is queried until the result is awaited (or wrapped with
    ``asyncio.create_task``). A result that is dropped without being awaited
    never calls the callback.

    Example:
        await create_transaction(client, 60, lambda err, headers: ...)

    Raises:
        TypeError: If callback is None.
    """
    if callback is None:
        raise TypeError("callback parameter is required")
    return _deliver(chain, expire_in_seconds, callback)


async def _deliver(
    chain: ChainAccessor,
    expire_in_seconds: int,
    callback: HeadersCallback,
) -> None:
    try:
        headers = await build_transaction_headers(chain, expire_in_seconds)
    except Exception as exc:
        callback(exc, None)
    else:
        callback(None, headers)
