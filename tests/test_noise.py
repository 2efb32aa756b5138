"""Tests for noise kernels, configuration and fractal blends."""

import numpy as np
import pytest

from randnoise import (
    InvalidNoiseConfiguration,
    NoiseConfig,
    billow,
    billow_noise,
    fbm,
    fbm_noise,
    noise,
    noise_config,
    random_noise_cfg,
    random_noise_fn,
    ridged_multi,
    ridgedmulti_noise,
    rng,
    simplex,
    single,
    single_noise,
    vnoise,
)
from randnoise.procedural.fractal import _preset
from randnoise.procedural.kernel import kernel

NOISE_TYPES = ["value", "gradient", "simplex"]
INTERPOLATIONS = ["none", "linear", "hermite", "quintic"]


@pytest.fixture
def grid():
    """Dense 2D sample of coordinates, off the integer lattice."""
    x, y = np.meshgrid(np.linspace(-7.3, 9.1, 97), np.linspace(-3.7, 12.9, 89))
    return x, y


class TestKernel:
    """Tests for the elementary noise kernel."""

    @pytest.mark.parametrize("noise_type", NOISE_TYPES)
    @pytest.mark.parametrize("interpolation", INTERPOLATIONS)
    def test_range(self, noise_type, interpolation):
        coords = np.random.default_rng(0).uniform(-50.0, 50.0, size=(3, 2000))
        for dim in (1, 2, 3):
            values = kernel(7, noise_type, interpolation, *coords[:dim])
            assert values.shape == (2000,)
            assert np.all((values >= -1.0) & (values <= 1.0))

    @pytest.mark.parametrize("noise_type", NOISE_TYPES)
    def test_deterministic(self, noise_type, grid):
        a = kernel(3, noise_type, "hermite", *grid)
        b = kernel(3, noise_type, "hermite", *grid)
        np.testing.assert_array_equal(a, b)

    @pytest.mark.parametrize("noise_type", NOISE_TYPES)
    def test_seed_changes_field(self, noise_type, grid):
        a = kernel(3, noise_type, "hermite", *grid)
        b = kernel(4, noise_type, "hermite", *grid)
        assert not np.allclose(a, b)

    @pytest.mark.parametrize("noise_type", NOISE_TYPES)
    def test_not_constant(self, noise_type, grid):
        assert np.std(kernel(1, noise_type, "quintic", *grid)) > 0.05

    def test_gradient_zero_on_lattice(self):
        """Gradient noise vanishes at integer coordinates."""
        x, y = np.meshgrid(np.arange(-4, 5), np.arange(-4, 5))
        np.testing.assert_array_equal(kernel(11, "gradient", "linear", x, y), 0.0)
        np.testing.assert_array_equal(kernel(11, "gradient", "quintic", x, y, x), 0.0)

    def test_value_interpolates_lattice(self):
        """Value noise takes the lattice value at integer coordinates."""
        x = np.arange(-5.0, 6.0)
        for interpolation in INTERPOLATIONS:
            np.testing.assert_array_equal(
                kernel(2, "value", interpolation, x),
                kernel(2, "value", "none", x),
            )

    def test_no_interpolation_is_step(self):
        x = np.array([3.05, 3.5, 3.95])
        values = kernel(5, "value", "none", x, x)
        assert values[0] == values[1] == values[2]

    def test_simplex_1d_is_2d_at_origin_row(self):
        x = np.linspace(-4.0, 4.0, 101)
        np.testing.assert_array_equal(kernel(9, "simplex", "none", x), kernel(9, "simplex", "none", x, 0.0))

    def test_simplex_ignores_interpolation(self, grid):
        np.testing.assert_array_equal(
            kernel(9, "simplex", "linear", *grid),
            kernel(9, "simplex", "quintic", *grid),
        )

    def test_broadcasting(self):
        values = kernel(1, "gradient", "hermite", np.linspace(0, 1, 3)[:, None], np.linspace(0, 1, 4))
        assert values.shape == (3, 4)

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            kernel(1, "worley", "linear", 0.5)

    def test_unknown_interpolation(self):
        with pytest.raises(ValueError):
            kernel(1, "value", "cubic", 0.5)


class TestNoiseConfig:
    """Tests for noise configuration."""

    def test_defaults(self):
        cfg = noise_config(seed=1)
        assert cfg.noise_type == "gradient"
        assert cfg.interpolation == "hermite"
        assert cfg.octaves == 6
        assert cfg.lacunarity == 2.0
        assert cfg.gain == 0.5
        assert cfg.normalize is True

    def test_random_seed_by_default(self):
        assert isinstance(NoiseConfig().seed, int)

    def test_mapping_keys(self):
        cfg = noise_config({"noise-type": "value", "normalize?": False, "octaves": None})
        assert cfg.noise_type == "value"
        assert cfg.normalize is False
        assert cfg.octaves == 6

    def test_keywords_override(self):
        cfg = noise_config({"octaves": 3}, octaves=4)
        assert cfg.octaves == 4

    def test_from_config(self):
        base = NoiseConfig(seed=5, octaves=2)
        assert noise_config(base, gain=0.25) == NoiseConfig(seed=5, octaves=2, gain=0.25)

    def test_immutable(self):
        cfg = NoiseConfig(seed=5)
        with pytest.raises(AttributeError):
            cfg.octaves = 3

    @pytest.mark.parametrize(
        "options",
        [
            {"octaves": 0},
            {"octaves": 2.5},
            {"lacunarity": 0.0},
            {"lacunarity": float("inf")},
            {"gain": -0.5},
            {"noise_type": "worley"},
            {"interpolation": "cubic"},
            {"seed": 1.5},
            {"lacunarity": "2.0"},
            {"gain": "half"},
            {"gain": None, "lacunarity": True},
            {"frequency": 2.0},
        ],
    )
    def test_invalid(self, options):
        with pytest.raises(InvalidNoiseConfiguration):
            noise_config(**options)

    def test_amplitude_sum(self):
        assert NoiseConfig(seed=1, octaves=3, gain=0.5).amplitude_sum == pytest.approx(1.75)
        assert NoiseConfig(seed=1, octaves=4, gain=1.0).amplitude_sum == 4.0

    def test_verbose(self, capsys):
        noise_config(seed=1, verbose=True)
        out = capsys.readouterr().out
        assert "Noise configuration" in out
        assert "octaves = 6" in out

    def test_random_cfg(self):
        for seed in range(20):
            options = random_noise_cfg(rng("mersenne", seed))
            cfg = noise_config(options)
            assert 1 <= cfg.octaves < 10
            assert 1.5 <= cfg.lacunarity < 2.5
            assert 0.2 <= cfg.gain < 0.8
            assert cfg.normalize


class TestBlends:
    """Tests for single, FBM, billow and ridged multifractal noise."""

    @pytest.mark.parametrize("noise_type", NOISE_TYPES)
    @pytest.mark.parametrize("blend", [single, fbm, billow, ridged_multi])
    def test_normalized_range(self, blend, noise_type, grid):
        cfg = NoiseConfig(seed=21, noise_type=noise_type, octaves=4)
        values = blend(cfg, *grid)
        assert np.all((values >= 0.0) & (values <= 1.0))

    @pytest.mark.parametrize("noise_type", NOISE_TYPES)
    def test_single_raw_range(self, noise_type, grid):
        cfg = NoiseConfig(seed=21, noise_type=noise_type, normalize=False)
        values = single(cfg, *grid)
        assert np.all((values >= -1.0) & (values <= 1.0))
        assert values.min() < 0.0 < values.max()

    def test_fbm_raw_bounded_by_amplitude_sum(self, grid):
        cfg = NoiseConfig(seed=3, octaves=5, normalize=False)
        values = fbm(cfg, *grid)
        assert np.all(np.abs(values) <= cfg.amplitude_sum)

    @pytest.mark.parametrize("normalize", [True, False])
    @pytest.mark.parametrize("noise_type", NOISE_TYPES)
    def test_one_octave_fbm_is_single(self, noise_type, normalize, grid):
        cfg = NoiseConfig(seed=8, noise_type=noise_type, octaves=1, normalize=normalize)
        np.testing.assert_array_equal(fbm(cfg, *grid), single(cfg, *grid))

    def test_billow_transform(self, grid):
        cfg = NoiseConfig(seed=8, octaves=1, normalize=False)
        v = single(cfg, *grid)
        b = billow(cfg, *grid)
        np.testing.assert_allclose(b, 2.0 * np.abs(v) - 1.0)
        assert np.all((b >= -1.0) & (b <= 1.0))

    def test_ridged_single_octave(self, grid):
        cfg = NoiseConfig(seed=8, octaves=1, normalize=False)
        v = single(cfg, *grid)
        np.testing.assert_allclose(ridged_multi(cfg, *grid), (1.0 - np.abs(v)) ** 2)

    def test_ridged_raw_range(self, grid):
        cfg = NoiseConfig(seed=8, octaves=6, normalize=False)
        values = ridged_multi(cfg, *grid)
        assert np.all((values >= 0.0) & (values <= cfg.amplitude_sum))

    def test_octaves_add_detail(self, grid):
        coarse = fbm(NoiseConfig(seed=2, octaves=1), *grid)
        fine = fbm(NoiseConfig(seed=2, octaves=6), *grid)
        assert not np.allclose(coarse, fine)

    def test_scalar_input(self):
        cfg = NoiseConfig(seed=4)
        for blend in (single, fbm, billow, ridged_multi):
            assert isinstance(blend(cfg, 0.3), float)
            assert isinstance(blend(cfg, 0.3, 1.7), float)
            assert isinstance(blend(cfg, 0.3, 1.7, -2.2), float)

    def test_scalar_matches_array(self):
        cfg = NoiseConfig(seed=4, noise_type="simplex")
        xs = np.array([0.1, 2.3, -4.5])
        np.testing.assert_allclose(fbm(cfg, xs, 1.0), [fbm(cfg, x, 1.0) for x in xs])


class TestFactories:
    """Tests for noise function factories and presets."""

    @pytest.mark.parametrize("factory", [single_noise, fbm_noise, billow_noise, ridgedmulti_noise])
    def test_factory(self, factory):
        f = factory(seed=12, noise_type="value", octaves=3)
        assert f.config.seed == 12
        assert f.config.octaves == 3
        assert 0.0 <= f(0.4, 0.6) <= 1.0
        assert f(0.4, 0.6) == f(0.4, 0.6)

    def test_factory_from_mapping(self):
        f = fbm_noise({"seed": 1, "noise-type": "simplex"}, octaves=2)
        assert f.config.noise_type == "simplex"
        assert f.config.octaves == 2

    def test_factory_matches_blend(self):
        f = billow_noise(seed=6, normalize=False)
        assert f(1.5, 2.5) == billow(f.config, 1.5, 2.5)

    def test_factory_rejects_invalid(self):
        with pytest.raises(InvalidNoiseConfiguration):
            ridgedmulti_noise(octaves=0)

    def test_verbose(self, capsys):
        single_noise(seed=3, verbose=True)
        assert "noise_type = gradient" in capsys.readouterr().out

    def test_presets(self):
        for name, preset in [("noise", noise), ("vnoise", vnoise), ("simplex", simplex)]:
            cfg = _preset(name).config
            assert cfg.octaves == 6
            assert cfg.lacunarity == 2.0
            assert cfg.gain == 0.5
            assert cfg.normalize
            value = preset(0.25, 0.5, 0.75)
            assert 0.0 <= value <= 1.0
            assert preset(0.25, 0.5, 0.75) == value

    def test_preset_kernels(self):
        assert _preset("noise").config.noise_type == "gradient"
        assert _preset("noise").config.interpolation == "quintic"
        assert _preset("vnoise").config.noise_type == "value"
        assert _preset("simplex").config.noise_type == "simplex"

    def test_random_noise_fn(self):
        f = random_noise_fn(rng=rng("pcg64", 10))
        assert isinstance(f.config, NoiseConfig)
        values = f(np.linspace(0, 10, 50), 0.5)
        assert np.all((values >= 0.0) & (values <= 1.0))

    def test_random_noise_fn_with_config(self):
        f = random_noise_fn({"seed": 77, "octaves": 2}, rng=rng("pcg64", 10))
        assert f.config.seed == 77
        assert f.config.octaves == 2
