"""Seeded 2D gradient noise used by the land colorer.

A classic permutation-table gradient noise: 256 shuffled entries,
quintic fade, bilinear blend of four corner gradients. Values fall
roughly in [-1, 1].
"""

import numpy as np
from numpy.typing import NDArray

from ..types import make_rng

PERM_SIZE = 256


def fade(t: NDArray[np.float64]) -> NDArray[np.float64]:
    """Quintic smoothing curve 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(t: NDArray[np.float64], a: NDArray[np.float64], b: NDArray[np.float64]) -> NDArray[np.float64]:
    return a + t * (b - a)


def grad(hash_: NDArray[np.int64], x: NDArray[np.float64], y: NDArray[np.float64]) -> NDArray[np.float64]:
    """Dot product with one of 8 gradient directions picked by the hash."""
    h = hash_ & 7
    u = np.where(h < 4, x, y)
    v = np.where(h < 4, y, x)
    return np.where((h & 1) == 0, u, -u) + np.where((h & 2) == 0, v, -v)


class NoiseField:
    """Deterministic noise field for a seed.

    Args:
        seed: Run seed; the permutation table is shuffled with its own stream.
    """

    def __init__(self, seed: int):
        rng = make_rng(seed)
        p = list(range(PERM_SIZE))

        # Fisher-Yates, drawing j from [0, i]
        for i in range(PERM_SIZE - 1, 0, -1):
            j = int(rng.integers(i + 1))
            p[i], p[j] = p[j], p[i]

        # Doubled so corner lookups never wrap
        self.perm: NDArray[np.int64] = np.array(p + p, dtype=np.int64)

    def sample(self, x: float, y: float) -> float:
        """Noise value at a single point."""
        return float(self._evaluate(np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)))

    def sample_grid(self, width: int, height: int, scale: float) -> NDArray[np.float64]:
        """Noise for every tile of a grid.

        Args:
            width: Grid width.
            height: Grid height.
            scale: Multiplier applied to tile coordinates before sampling.

        Returns:
            (height, width) array; entry [y, x] equals sample(x * scale, y * scale).
        """
        ys, xs = np.meshgrid(
            np.arange(height, dtype=np.float64),
            np.arange(width, dtype=np.float64),
            indexing="ij",
        )
        return self._evaluate(xs * scale, ys * scale)

    def _evaluate(self, x: NDArray[np.float64], y: NDArray[np.float64]) -> NDArray[np.float64]:
        x_floor = np.floor(x)
        y_floor = np.floor(y)
        xi = x_floor.astype(np.int64) & 255
        yi = y_floor.astype(np.int64) & 255

        xf = x - x_floor
        yf = y - y_floor
        u = fade(xf)
        v = fade(yf)

        perm = self.perm
        a = perm[xi] + yi
        b = perm[xi + 1] + yi

        bottom = lerp(u, grad(perm[a], xf, yf), grad(perm[b], xf - 1, yf))
        top = lerp(u, grad(perm[a + 1], xf, yf - 1), grad(perm[b + 1], xf - 1, yf - 1))
        return lerp(v, bottom, top)
