"""Tests for the RMS normalizer."""

import numpy as np
import pytest

from turbmagfield.field_generation import mean_square, normalize_rms
from turbmagfield.parameters import ConfigurationError


@pytest.mark.unit
class TestNormalizeRMS:
    """Test the rescaling to a target RMS strength."""

    @pytest.mark.parametrize("b_rms", [1.0, 1e-9, 3.5])
    def test_rms_invariant(self, b_rms):
        """The normalized field has exactly the target RMS magnitude."""
        rng = np.random.RandomState(0)
        components = [rng.standard_normal((6, 6, 6)) * s for s in (1.0, 2.0, 0.5)]

        field = normalize_rms(components, b_rms)

        assert field.shape == (6, 6, 6, 3)
        assert np.isclose(np.sqrt(np.mean(np.sum(field**2, axis=-1))), b_rms, rtol=1e-12)

    def test_uniform_weight(self):
        """All cells are scaled by the same factor, preserving the field's shape."""
        rng = np.random.RandomState(1)
        components = [rng.standard_normal((4, 4, 4)) for _ in range(3)]

        field = normalize_rms(components, 2.0)
        ratio = field / np.stack(components, axis=-1)

        np.testing.assert_allclose(ratio, ratio[0, 0, 0, 0])

    def test_mean_square(self):
        components = [np.full((2, 2, 2), 1.0), np.full((2, 2, 2), 2.0), np.zeros((2, 2, 2))]

        assert mean_square(components) == 5.0

    def test_zero_field_rejected(self):
        """A vanishing field cannot be normalized and is rejected instead of producing nan."""
        components = [np.zeros((4, 4, 4)) for _ in range(3)]

        with pytest.raises(ConfigurationError):
            normalize_rms(components, 1.0)

    def test_requires_three_components(self):
        with pytest.raises(ValueError):
            normalize_rms([np.ones((2, 2, 2))] * 2, 1.0)
