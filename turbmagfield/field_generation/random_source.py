"""Seedable pseudo-random number source for the spectral sampler."""

from typing import Optional

import numpy as np

SEED_MODULUS = 2**32


class RandomSource:
    """Deterministic source of uniform and standard-normal deviates.

    This wraps a private ``np.random.RandomState`` (Mersenne Twister). Every stochastic draw made while synthesizing
    one field comes from a single instance, so that a fixed seed reproduces a fixed field. Instances are never shared
    implicitly; pass the same instance explicitly if several consumers must draw from one stream.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        Parameters
        ----------
        seed : Optional[int], optional
            Initial seed, by default None, which seeds from operating system entropy.
        """
        self.prng = np.random.RandomState()
        self.seed(seed)

    def seed(self, value: Optional[int] = None):
        """Reset the internal state.

        Parameters
        ----------
        value : Optional[int], optional
            Any integer seed, by default None, which seeds from operating system entropy and is therefore not
            reproducible. Integers outside of the unsigned 32-bit range wrap modulo 2**32, so that e.g. -1 seeds
            like 2**32 - 1.
        """
        if value is not None:
            self.prng.seed(int(value) % SEED_MODULUS)
        else:
            self.prng.seed()

    def uniform(self) -> float:
        """Return a uniform deviate in [0, 1)."""
        return self.prng.random_sample()

    def normal(self) -> float:
        """Return a standard-normal deviate (mean 0, variance 1)."""
        return self.prng.standard_normal()

    def get_state(self) -> tuple:
        return self.prng.get_state()

    def set_state(self, state: tuple):
        self.prng.set_state(state)
