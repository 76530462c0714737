"""Small helpers over a ``numpy.random.Generator``.

Only ``rng.integers(low, high)`` and ``rng.random()`` are ever called so any
generator-like object providing those two methods can drive the simulation.
"""


def rand_int(rng, low, high):
    """Uniform integer in the inclusive range [low, high]."""
    return int(rng.integers(low, high + 1))


def choice(rng, seq):
    return seq[int(rng.integers(0, len(seq)))]


def take(rng, pool):
    """Remove and return a uniformly drawn element, or None when the pool is empty."""
    if not pool:
        return None
    return pool.pop(int(rng.integers(0, len(pool))))


def discard(seq, element):
    """Remove ``element`` from ``seq`` if present. Removing twice is harmless."""
    for i, candidate in enumerate(seq):
        if candidate is element:
            del seq[i]
            return True
    return False
