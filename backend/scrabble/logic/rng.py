"""
Random number generation for tile bag shuffling and tile id minting.

Each session owns one random.Random seeded from a cryptographic seed
(generated via the secrets module unless one is supplied). Passing an
explicit seed makes a whole session reproducible, which the tests rely on.
"""

from __future__ import annotations

import random
import secrets
from typing import TypeVar

SEED_BYTES = 32

T = TypeVar("T")


def validate_seed_hex(seed_hex: str) -> None:
    """Validate that a seed string is the correct hex format.

    Raises TypeError for non-string input, ValueError for invalid format.
    """
    if not isinstance(seed_hex, str):
        raise TypeError(f"Seed must be a string, got {type(seed_hex).__name__}")
    expected_length = SEED_BYTES * 2
    if len(seed_hex) != expected_length:
        raise ValueError(f"Seed must be exactly {expected_length} hex characters, got {len(seed_hex)}")
    try:
        bytes.fromhex(seed_hex)
    except ValueError:
        raise ValueError("Seed contains invalid hex characters") from None


def generate_seed() -> str:
    """Generate a cryptographic seed as a hex string."""
    return secrets.token_bytes(SEED_BYTES).hex()


def create_rng(seed_hex: str | None = None) -> random.Random:
    """Create the per-session RNG, from a fresh seed when none is given."""
    if seed_hex is None:
        seed_hex = generate_seed()
    validate_seed_hex(seed_hex)
    return random.Random(int(seed_hex, 16))  # noqa: S311


def fisher_yates_shuffle(items: list[T], rng: random.Random) -> list[T]:
    """
    Return a uniformly shuffled copy of items.

    For i from n-1 down to 1: swap items[i] with items[j], j uniform in [0, i].
    randrange draws without modulo bias, so every permutation is equally likely.
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result
