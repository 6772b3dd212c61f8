"""Random byte sources for CXNN.

The machine never picks its own randomness: it draws from whatever
``RandomSource`` the host hands it, so tests can pin the sequence.
"""

from typing import Iterable, Protocol, runtime_checkable

import jax
import jax.numpy as jnp


@runtime_checkable
class RandomSource(Protocol):
    def next_byte(self) -> int:
        """Return a uniformly distributed value in [0, 255]."""
        ...


class PRNGKeySource:
    """Seeded source backed by ``jax.random``; one key split per draw."""

    def __init__(self, seed: int = 0):
        self.seed = seed
        self.key = jax.random.PRNGKey(seed)

    def next_byte(self) -> int:
        self.key, subkey = jax.random.split(self.key)
        return int(jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32))

    def __repr__(self):
        return f"PRNGKeySource(seed={self.seed})"


class SequenceSource:
    """Replays a fixed byte sequence, starting over when exhausted."""

    def __init__(self, values: Iterable[int]):
        self.values = [v & 0xFF for v in values]
        if not self.values:
            raise ValueError("SequenceSource needs at least one value")
        self.position = 0

    def next_byte(self) -> int:
        value = self.values[self.position]
        self.position = (self.position + 1) % len(self.values)
        return value

    def __repr__(self):
        return f"SequenceSource({self.values!r})"
