"""
Test blend formulas
"""
import numpy as np
import pytest

from gruvstyle.blend import (
    apply_edge_lightness,
    blend_lab,
    clamp_strength,
    contrast_compensate,
    sigmoid_mix,
)


@pytest.fixture
def lab_pairs():
    """Random original / target Lab rows"""
    gen = np.random.default_rng(11)
    orig = np.column_stack(
        [gen.uniform(0, 100, 200), gen.uniform(-90, 90, 200), gen.uniform(-90, 90, 200)]
    ).astype(np.float32)
    target = np.column_stack(
        [gen.uniform(0, 100, 200), gen.uniform(-60, 60, 200), gen.uniform(-60, 60, 200)]
    ).astype(np.float32)
    return orig, target


class TestClampStrength:
    """Strength range per method"""

    def test_sigmoid_range(self):
        assert clamp_strength(0.4, "sigmoid") == pytest.approx(0.4)
        assert clamp_strength(1.7, "sigmoid") == 1.0
        assert clamp_strength(-0.3, "sigmoid") == 0.0

    def test_overshoot_range(self):
        assert clamp_strength(1.7, "overshoot") == pytest.approx(1.7)
        assert clamp_strength(3.0, "overshoot") == 2.0

    def test_clamping_is_reported(self, capsys):
        clamp_strength(5.0, "sigmoid")
        assert "[warn]" in capsys.readouterr().out

    @pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_rejected(self, bad):
        with pytest.raises(ValueError):
            clamp_strength(bad, "sigmoid")

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            clamp_strength(0.5, "cubic")


class TestSigmoidBlend:
    """Sigmoid-modulated chroma blend"""

    def test_mix_bounds(self):
        """Mix is strength/2 for equal channels and approaches strength far apart"""
        orig = np.array([10.0, 10.0], dtype=np.float32)
        target = np.array([10.0, 60.0], dtype=np.float32)
        mix = sigmoid_mix(orig, target, 0.8)
        assert mix[0] == pytest.approx(0.4)
        assert mix[1] == pytest.approx(0.8, abs=1e-6)

    def test_zero_strength_keeps_chroma(self, lab_pairs):
        orig, target = lab_pairs
        out = blend_lab(orig, target, 0.0, "sigmoid")
        assert np.array_equal(out[:, 1:], orig[:, 1:])
        assert np.allclose(out[:, 0], orig[:, 0] * 0.98 + target[:, 0] * 0.02, atol=1e-4)

    def test_monotonic_pull(self, lab_pairs):
        """More strength never moves a/b further from the target"""
        orig, target = lab_pairs
        prev = np.abs(orig[:, 1:] - target[:, 1:])
        for s in np.linspace(0.1, 1.0, 10):
            out = blend_lab(orig, target, float(s), "sigmoid")
            dist = np.abs(out[:, 1:] - target[:, 1:])
            assert np.all(dist <= prev + 1e-4)
            prev = dist

    def test_full_strength_on_target_is_fixed_point(self):
        target = np.array([[44.36, 55.40, 37.13]], dtype=np.float32)
        out = blend_lab(target, target, 1.0, "sigmoid")
        assert np.allclose(out, target, atol=1e-4)


class TestOvershootBlend:
    """Linear blend with 1.5x overshoot"""

    def test_zero_strength_keeps_chroma(self, lab_pairs):
        orig, target = lab_pairs
        out = blend_lab(orig, target, 0.0, "overshoot")
        assert np.array_equal(out[:, 1:], orig[:, 1:])
        assert np.allclose(out[:, 0], orig[:, 0] * 0.95 + target[:, 0] * 0.05, atol=1e-4)

    def test_neutral_source_moves_along_target(self):
        """From a neutral pixel, chroma grows toward the target and past it"""
        orig = np.array([[50.0, 0.0, 0.0]], dtype=np.float32)
        target = np.array([[50.0, 20.0, -10.0]], dtype=np.float32)
        direction = target[0, 1:] / np.linalg.norm(target[0, 1:])
        prev = 0.0
        for s in np.linspace(0.0, 2.0, 9):
            out = blend_lab(orig, target, float(s), "overshoot")
            assert np.allclose(out[0, 1:], 1.5 * s * target[0, 1:], atol=1e-4)
            proj = float(out[0, 1:] @ direction)
            assert proj >= prev - 1e-6
            prev = proj
        out = blend_lab(orig, target, 1.0, "overshoot")
        assert np.linalg.norm(out[0, 1:]) > np.linalg.norm(target[0, 1:])

    def test_lab_is_not_clamped(self):
        orig = np.array([[50.0, 0.0, 0.0]], dtype=np.float32)
        target = np.array([[50.0, 100.0, 0.0]], dtype=np.float32)
        out = blend_lab(orig, target, 2.0, "overshoot")
        assert out[0, 1] == pytest.approx(300.0)


class TestEdgeAndContrast:
    """Edge-aware lightness and contrast compensation"""

    def test_edge_weights(self):
        orig_l = np.array([20.0, 20.0, 20.0], dtype=np.float32)
        harm_l = np.array([60.0, 60.0, 60.0], dtype=np.float32)
        mask = np.array([0, 255, 51], dtype=np.uint8)
        out = apply_edge_lightness(orig_l, harm_l, mask)
        assert out[0] == orig_l[0]
        assert out[1] == harm_l[1]
        assert out[2] == pytest.approx(28.0, abs=1e-4)

    def test_contrast_boost_and_clip(self):
        rgb = np.array([0.0, 0.5, 0.95, 1.0], dtype=np.float32)
        out = contrast_compensate(rgb)
        assert np.allclose(out, [0.0, 0.54, 1.0, 1.0], atol=1e-6)
