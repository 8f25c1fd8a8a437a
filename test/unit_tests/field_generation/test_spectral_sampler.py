"""Tests for the spectral sampler."""

import numpy as np
import pytest

from turbmagfield.field_generation import RandomSource, SpectralSampler, wavenumbers
from turbmagfield.parameters import ConfigurationError, GridGeometry, TurbulenceParameters


def make_sampler(samples=8, spacing=1.0, l_min=2.0, l_max=4.0, spectral_index=-11.0 / 3.0):
    """Create a sampler for a grid at the origin."""
    geometry = GridGeometry(origin=(0.0, 0.0, 0.0), samples=samples, spacing=spacing)
    turbulence = TurbulenceParameters(l_min=l_min, l_max=l_max, b_rms=1.0, spectral_index=spectral_index)
    return SpectralSampler(geometry, turbulence)


@pytest.mark.unit
class TestWavenumbers:
    """Test the index-to-wavenumber mapping."""

    def test_even(self):
        """Even grids run up to just under 1/2 and then wrap negative."""
        kx, ky, kz = wavenumbers(8)

        np.testing.assert_allclose(kx, [0, 0.125, 0.25, 0.375, -0.5, -0.375, -0.25, -0.125])
        np.testing.assert_array_equal(kx, ky)
        np.testing.assert_allclose(kz, [0, 0.125, 0.25, 0.375, -0.5])

    def test_odd(self):
        """Odd grids wrap after (n - 1) / 2 and the reduced axis holds only non-negative wavenumbers."""
        kx, _, kz = wavenumbers(5)

        np.testing.assert_allclose(kx, [0, 0.2, 0.4, -0.4, -0.2])
        np.testing.assert_allclose(kz, [0, 0.2, 0.4])


@pytest.mark.unit
class TestSpectralSampler:
    """Test band selection, coefficient properties and reproducibility of the sampler."""

    def test_band_limits(self):
        """The band is [spacing / l_max, spacing / l_min] in units of inverse cells."""
        sampler = make_sampler(spacing=0.5, l_min=2.0, l_max=4.0)

        assert sampler.k_min == 0.125
        assert sampler.k_max == 0.25

    def test_output_shapes(self):
        """Three complex coefficient grids of the reduced shape are produced."""
        sampler = make_sampler()
        coefficients = sampler.sample(RandomSource(seed=42))

        assert len(coefficients) == 3
        for c in coefficients:
            assert c.shape == (8, 8, 5)
            assert np.iscomplexobj(c)

    def test_out_of_band_zero(self):
        """Wavevectors outside of the band carry exactly zero, including the DC mode."""
        sampler = make_sampler()
        mask = sampler.in_band_mask()
        coefficients = sampler.sample(RandomSource(seed=42))

        assert not mask[0, 0, 0]
        for c in coefficients:
            assert np.all(c[~mask] == 0)
        assert np.any(np.stack(coefficients, axis=-1)[mask] != 0, axis=-1).all()

    def test_in_band_matches_magnitudes(self):
        """The band mask selects exactly the wavevectors with k_min <= |k| <= k_max."""
        sampler = make_sampler()
        k = sampler.magnitudes[sampler.in_band_mask()]

        assert np.all(k >= sampler.k_min) and np.all(k <= sampler.k_max)
        assert sampler.num_modes == k.size > 0

    def test_transverse(self):
        """Every coefficient vector is perpendicular to its wavevector."""
        sampler = make_sampler(samples=12, l_min=1.5, l_max=12.0)
        Bx, By, Bz = sampler.sample(RandomSource(seed=5))
        k = sampler.wavevectors

        k_dot_B = k[..., 0] * Bx + k[..., 1] * By + k[..., 2] * Bz

        np.testing.assert_allclose(np.abs(k_dot_B), 0.0, atol=1e-12)

    def test_common_phase(self):
        """The three components of one mode share the same complex phase."""
        sampler = make_sampler()
        Bx, By, Bz = sampler.sample(RandomSource(seed=9))
        B = np.stack([Bx, By, Bz], axis=-1)[sampler.in_band_mask()]

        # b * exp(i phase) with real b: all components are real multiples of one unit complex number
        phase = np.exp(1j * np.angle(B[np.arange(len(B)), np.argmax(np.abs(B), axis=-1)]))
        np.testing.assert_allclose((B / phase[:, np.newaxis]).imag, 0.0, atol=1e-12)

    def test_amplitude_weighting(self):
        """Mode magnitudes equal |normal deviate| * |k|^(alpha / 2), replayed from the same seed."""
        spectral_index = -11.0 / 3.0
        sampler = make_sampler(spectral_index=spectral_index)
        mask = sampler.in_band_mask()
        Bx, By, Bz = sampler.sample(RandomSource(seed=21))
        magnitude = np.sqrt(np.abs(Bx) ** 2 + np.abs(By) ** 2 + np.abs(Bz) ** 2)[mask]

        replay = RandomSource(seed=21)
        normals = []
        for _ in range(sampler.num_modes):
            replay.uniform()
            normals.append(replay.normal())
            replay.uniform()

        expected = np.abs(normals) * sampler.magnitudes[mask] ** (spectral_index / 2)
        np.testing.assert_allclose(magnitude, expected, rtol=1e-12)

    def test_reproducible(self):
        """The same seed reproduces identical coefficients."""
        sampler = make_sampler()
        first = sampler.sample(RandomSource(seed=42))
        second = sampler.sample(RandomSource(seed=42))

        for a, b in zip(first, second):
            np.testing.assert_array_equal(a, b)

    def test_draw_count(self):
        """Each in-band wavevector consumes exactly three draws."""
        sampler = make_sampler()
        source = RandomSource(seed=3)
        sampler.sample(source)

        reference = RandomSource(seed=3)
        for _ in range(sampler.num_modes):
            reference.uniform()
            reference.normal()
            reference.uniform()

        assert source.uniform() == reference.uniform()

    def test_single_shell(self):
        """A band holding only the |k| = 1/n shell samples just the axis modes of the half-grid."""
        sampler = make_sampler(samples=8, spacing=1.0, l_min=7.9, l_max=8.0)

        # (+-1, 0, 0), (0, +-1, 0) and (0, 0, 1)
        assert sampler.num_modes == 5
        np.testing.assert_allclose(sampler.magnitudes[sampler.in_band_mask()], 0.125)

    def test_empty_band_rejected_before_drawing(self):
        """An empty band raises ConfigurationError without consuming any random draw."""
        sampler = make_sampler(samples=8, spacing=1.0, l_min=7.8, l_max=7.9)
        source = RandomSource(seed=4)

        assert sampler.num_modes == 0
        with pytest.raises(ConfigurationError):
            sampler.sample(source)

        assert source.uniform() == RandomSource(seed=4).uniform()

    def test_band_beyond_nyquist_rejected(self):
        """Length scales below the cell size place the band beyond every representable wavenumber."""
        sampler = make_sampler(samples=8, spacing=1.0, l_min=0.1, l_max=0.2)

        with pytest.raises(ConfigurationError):
            sampler.check_band()

    def test_zero_wavevector_rejected(self):
        """A band reaching down to k = 0 is rejected before any random draw."""
        sampler = make_sampler()
        sampler.k_min = 0.0
        source = RandomSource(seed=4)

        with pytest.raises(ConfigurationError, match="zero wavevector"):
            sampler.sample(source)

        assert source.uniform() == RandomSource(seed=4).uniform()
