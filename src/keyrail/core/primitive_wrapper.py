"""
Primitive Wrapper and Dispatch

A wrapper turns a PrimitiveSet into one object satisfying the operation
contract (verify, decrypt, ...). Every wrapper shares the same two-phase
dispatch:

1. Tagged phase - if the input is longer than the non-RAW prefix, try the
   ENABLED entries registered under its first NON_RAW_PREFIX_SIZE bytes,
   in insertion order, on the remainder.
2. Raw phase - try the ENABLED RAW entries, in insertion order, on the full
   original input.

Each candidate is awaited before the next one starts. A candidate that raises
counts as a non-match and the error is discarded: callers only ever see the
aggregate outcome, so nothing reveals which key almost matched.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Awaitable, Callable, Generic, Iterable, Optional, Tuple, Type, TypeVar

import structlog

from ..config import Settings, get_settings
from .crypto_format import split_prefix
from .exceptions import MissingPrimaryError, NullPrimitiveSetError, PrimitiveTypeMismatchError
from .keyset import KeyStatus
from .primitive_set import PrimitiveEntry, PrimitiveSet

logger = structlog.get_logger()

P = TypeVar("P")
W = TypeVar("W")
R = TypeVar("R")

BYTES_LIKE = (bytes, bytearray, memoryview)

# attempt(entry, body) -> result, or None when the entry rejects the input
Attempt = Callable[[PrimitiveEntry, bytes], Awaitable[Optional[R]]]


class CandidateOutcome(Enum):
    """Internal classification of a single candidate try. Never returned."""
    MATCH = "MATCH"
    REJECTED = "REJECTED"
    ERRORED = "ERRORED"
    SKIPPED = "SKIPPED"


async def try_candidate(
    entry: PrimitiveEntry,
    body: bytes,
    attempt: Attempt,
) -> Tuple[CandidateOutcome, Any]:
    """
    Run one candidate, folding any exception into ERRORED.

    The second item is the result for MATCH, the exception class name for
    ERRORED and None otherwise.
    """
    if entry.status != KeyStatus.ENABLED:
        return CandidateOutcome.SKIPPED, None
    try:
        result = await attempt(entry, body)
    except Exception as e:
        return CandidateOutcome.ERRORED, type(e).__name__
    if result is None:
        return CandidateOutcome.REJECTED, None
    return CandidateOutcome.MATCH, result


async def try_entries(
    entries: Iterable[PrimitiveEntry],
    body: bytes,
    attempt: Attempt,
    operation: str,
    settings: Settings,
) -> Optional[R]:
    """Try entries strictly in order; return the first match or None."""
    for entry in entries:
        outcome, result = await try_candidate(entry, body, attempt)
        if outcome == CandidateOutcome.MATCH:
            return result
        if outcome == CandidateOutcome.ERRORED and settings.log_candidate_errors:
            # Error class name only: messages may embed input bytes
            logger.debug(
                "dispatch_candidate_errored",
                operation=operation,
                key_id=entry.key_id,
                error_type=result,
            )
    return None


async def dispatch(
    primitive_set: PrimitiveSet,
    payload: bytes,
    attempt: Attempt,
    operation: str = "operation",
    settings: Optional[Settings] = None,
) -> Optional[R]:
    """
    Run the tagged-then-raw dispatch over `primitive_set`.

    Returns the first non-None result produced by an ENABLED entry, or None
    when no entry in either phase succeeds.
    """
    settings = settings or get_settings()
    payload = bytes(payload)

    split = split_prefix(payload)
    if split is not None:
        prefix, remainder = split
        result = await try_entries(
            primitive_set.entries_for_prefix(prefix),
            remainder,
            attempt,
            operation,
            settings,
        )
        if result is not None:
            return result

    # Fall back to RAW keys with the full, unsplit input
    return await try_entries(
        primitive_set.raw_entries(),
        payload,
        attempt,
        operation,
        settings,
    )


def require_primary(primitive_set: PrimitiveSet) -> PrimitiveEntry:
    entry = primitive_set.primary()
    if entry is None:
        raise MissingPrimaryError("Primitive set has no primary key")
    return entry


class PrimitiveWrapper(ABC, Generic[P, W]):
    """
    Turns a PrimitiveSet[P] into a single W.

    Wrapping only closes over the set; it performs no cryptographic work.
    """

    @abstractmethod
    def wrap(self, primitive_set: PrimitiveSet[P]) -> W:
        """Wrap a primitive set into one primitive."""
        pass

    @abstractmethod
    def primitive_class(self) -> Type[W]:
        """The operation contract satisfied by the wrapped primitive."""
        pass

    @abstractmethod
    def input_primitive_class(self) -> Type[P]:
        """The primitive class a set must hold to be wrapped."""
        pass

    def check_primitive_set(self, primitive_set: Optional[PrimitiveSet[P]]) -> PrimitiveSet[P]:
        if primitive_set is None:
            raise NullPrimitiveSetError("Primitive set has to be non-null")
        if not issubclass(primitive_set.primitive_class, self.input_primitive_class()):
            raise PrimitiveTypeMismatchError(
                f"{type(self).__name__} cannot wrap a set of "
                f"{primitive_set.primitive_class.__name__}"
            )
        return primitive_set
