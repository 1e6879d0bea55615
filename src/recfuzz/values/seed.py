"""Deterministic seeding helpers.

Reproducible random streams are derived from a single integer seed.  Each
stream is identified by a label (for the CLI, the sampled target) and an
index, hashed with SHA-256 under a fixed namespace so that streams for
different labels or indices are independent while the same triple always
yields the same sequence.
"""

from __future__ import annotations

import hashlib
import random
from typing import Final

from recfuzz.config import ConfigModel

# ---------------------------------------------------------------------------
# Domain separation constants
# ---------------------------------------------------------------------------

_NS_STREAM: Final = b"recfuzz/v1/stream"


def rng_from_seed(seed: int) -> random.Random:
    """Return a deterministic :class:`~random.Random` seeded with ``seed``."""

    return random.Random(seed)


def derive_seed(seed: int, label: str, index: int = 0) -> int:
    """Return a 256-bit seed for the stream ``(seed, label, index)``."""

    data = b"\x00".join(
        (_NS_STREAM, str(seed).encode("ascii"), label.encode("utf-8"), str(index).encode("ascii"))
    )
    return int.from_bytes(hashlib.sha256(data).digest(), "big")


def derive_rng(seed: int, label: str, index: int = 0) -> random.Random:
    """Reproducible RNG for the stream ``(seed, label, index)``."""

    return random.Random(derive_seed(seed, label, index))


def resolve_seed(cfg: ConfigModel) -> int:
    """Return the configured seed, or a fresh one when none is configured."""

    if cfg.seed.value is not None:
        return cfg.seed.value
    return random.SystemRandom().getrandbits(63)


__all__ = ["derive_rng", "derive_seed", "resolve_seed", "rng_from_seed"]
