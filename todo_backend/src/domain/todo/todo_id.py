from __future__ import annotations

import os
import threading
import time
import uuid
from dataclasses import dataclass

from .errors import ValidationError


_lock = threading.Lock()
_last_millis = 0
_last_seq = 0


def _uuid7() -> uuid.UUID:
    # 48-bit unix millis | version 7 | 12-bit sequence | variant | 62 random bits
    # Within one process ids are strictly increasing: a repeated (or earlier)
    # millisecond reuses the last one and bumps the sequence, and an exhausted
    # sequence borrows the next millisecond. Ids from different processes are
    # only ordered to the millisecond.
    global _last_millis, _last_seq
    rand = int.from_bytes(os.urandom(8), "big")
    with _lock:
        millis = time.time_ns() // 1_000_000
        if millis > _last_millis:
            # random start leaves room for the sequence to grow
            seq = int.from_bytes(os.urandom(2), "big") & 0x7FF
        else:
            millis = _last_millis
            seq = _last_seq + 1
            if seq > 0xFFF:
                millis += 1
                seq = 0
        _last_millis, _last_seq = millis, seq
    value = (millis & 0xFFFF_FFFF_FFFF) << 80
    value |= 0x7 << 76
    value |= seq << 64
    value |= 0b10 << 62
    value |= rand & 0x3FFF_FFFF_FFFF_FFFF
    return uuid.UUID(int=value)


# PUBLIC_INTERFACE
@dataclass(frozen=True, order=True)
class TodoID:
    """
    Identifier of a Todo.

    Wraps a UUID version 7, so ids generated later sort after ids generated
    earlier. Ids from the same process are strictly
    increasing, even within one millisecond.
    """

    value: uuid.UUID

    @classmethod
    def new(cls) -> "TodoID":
        """Generate a fresh time-ordered identifier."""
        return cls(_uuid7())

    @classmethod
    def from_string(cls, s: str) -> "TodoID":
        """Parse the canonical string form. Raises ValidationError on bad input."""
        try:
            return cls(uuid.UUID(s))
        except (TypeError, ValueError, AttributeError) as e:
            raise ValidationError(f"invalid todo id: {s!r}") from e

    def __str__(self) -> str:
        return str(self.value)
