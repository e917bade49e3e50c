"""
Cache Item Envelope

Every cached payload is stored inside an envelope that records when it was
captured. Freshness is decided at read time from that timestamp; the
store's own expiry is only a reclamation safety net.

Wire format (orjson):
    {"captured_at": 1733740800, "payload": <any JSON value>}
"""

import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import orjson

Clock = Callable[[], float]


class EnvelopeDecodeError(ValueError):
    """Raised when stored bytes are not a well-formed envelope."""


@dataclass(frozen=True)
class CacheEnvelope:
    """A payload plus the whole second at which it was captured."""

    captured_at: int
    payload: Any

    def to_bytes(self) -> bytes:
        return orjson.dumps({"captured_at": self.captured_at, "payload": self.payload})

    @classmethod
    def from_bytes(cls, raw: str | bytes) -> "CacheEnvelope":
        try:
            document = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise EnvelopeDecodeError(f"envelope is not valid JSON: {e}") from e

        if not isinstance(document, dict) or "payload" not in document:
            raise EnvelopeDecodeError("envelope is missing its payload")

        captured_at = document.get("captured_at")
        # bool is an int subclass; a boolean timestamp is still garbage
        if not isinstance(captured_at, int) or isinstance(captured_at, bool):
            raise EnvelopeDecodeError("envelope has no integer captured_at")

        return cls(captured_at=captured_at, payload=document["payload"])


def now_seconds(clock: Clock = time.time) -> int:
    """Current time in whole seconds, rounded down."""
    return math.floor(clock())


def wrap(payload: Any, clock: Clock = time.time) -> CacheEnvelope:
    """Stamp `payload` with the current time."""
    return CacheEnvelope(captured_at=now_seconds(clock), payload=payload)


def is_fresh(envelope: CacheEnvelope, ttl_seconds: int, clock: Clock = time.time) -> bool:
    """
    True while less than `ttl_seconds` have elapsed since capture.

    An entry exactly `ttl_seconds` old is stale.
    """
    return now_seconds(clock) - envelope.captured_at < ttl_seconds
