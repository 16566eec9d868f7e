"""
Error taxonomy for TaPOS header assembly.

Failures from the chain accessor are never wrapped by the builder: whatever
``get_info()`` or ``get_block()`` raises reaches the caller unchanged. The
types below are raised by the concrete HTTP client when the node answers
but the answer is unusable.

    - ``ChainQueryError``: the node returned an error body.
    - ``MalformedChainResponse``: the body is missing fields or holds
      out-of-range values.

A missing completion callback is a plain ``TypeError``; bad arguments are
plain ``ValueError``.
"""

from __future__ import annotations


class TaposError(Exception):
    """Base class for errors raised by this package."""


class ChainQueryError(TaposError):
    """The chain node rejected a query.

    Attributes:
        code: Numeric error code from the node (HTTP-style, e.g. 500).
        name: Symbolic error name (e.g. "unknown_block_exception").
        detail: Human-readable message for diagnostics.
    """

    def __init__(self, code: int | None, name: str | None, detail: str) -> None:
        self.code = code
        self.name = name
        self.detail = detail
        label = name or "chain_error"
        super().__init__(f"{label} ({code}): {detail}")


class MalformedChainResponse(TaposError, ValueError):
    """The chain node answered with a body that cannot be parsed."""
