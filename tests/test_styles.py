"""
Test style selection and style chains
"""
import numpy as np
import pytest

from gruvstyle.pipeline import compute_edge_mask, harmonize
from gruvstyle.styles import (
    Gruvbox,
    Mosaic,
    Retro,
    Synthwave,
    Watercolor,
    apply_style,
    parse_style,
)


class TestParseStyle:
    """Style names"""

    @pytest.mark.parametrize(
        "name,cls",
        [
            ("gruvbox", Gruvbox),
            ("retro", Retro),
            ("synthwave", Synthwave),
            ("mosaic", Mosaic),
            ("Watercolor", Watercolor),
        ],
    )
    def test_known_names(self, name, cls):
        assert isinstance(parse_style(name), cls)

    def test_mosaic_carries_block_size(self):
        assert parse_style("mosaic", block_size=8) == Mosaic(block_size=8)
        assert parse_style("mosaic").block_size == 16

    def test_default_and_unknown_fall_back(self, capsys):
        assert parse_style(None) == Gruvbox()
        assert parse_style("noir") == Gruvbox()
        assert "[warn]" in capsys.readouterr().out


class TestApplyStyle:
    """Style chains"""

    @pytest.mark.parametrize(
        "style", [Gruvbox(), Retro(), Synthwave(), Mosaic(block_size=8), Watercolor()]
    )
    def test_shape_and_dtype_preserved(self, random_image, style):
        out = apply_style(random_image, style, 1.0, rng=np.random.default_rng(0))
        assert out.shape == (24, 32, 3)
        assert out.dtype == np.uint8

    def test_gruvbox_is_edge_aware_harmonize(self, random_image):
        expected = random_image.copy()
        harmonize(expected, 0.7, compute_edge_mask(expected, 5, 25.0, 2.0))
        out = apply_style(random_image, Gruvbox(), 0.7)
        assert np.array_equal(out, expected)

    def test_retro_is_reproducible_with_seed(self, random_image):
        a = apply_style(random_image.copy(), Retro(), 1.0, rng=np.random.default_rng(3))
        b = apply_style(random_image.copy(), Retro(), 1.0, rng=np.random.default_rng(3))
        assert np.array_equal(a, b)

    def test_mosaic_blocks(self, random_image):
        out = apply_style(random_image, Mosaic(block_size=8), 1.0)
        for y in range(0, 24, 8):
            for x in range(0, 32, 8):
                block = out[y : y + 8, x : x + 8].reshape(-1, 3)
                assert np.all(block == block[0])

    def test_synthwave_uses_softer_strength(self, random_image):
        """Synthwave harmonises at 80% of the requested strength"""
        from gruvstyle.effects import apply_gradient_overlay, boost_saturation

        expected = random_image.copy()
        harmonize(expected, 0.8 * 0.5, None)
        apply_gradient_overlay(expected)
        boost_saturation(expected, 1.5)
        out = apply_style(random_image, Synthwave(), 0.5)
        assert np.array_equal(out, expected)

    def test_unsupported_style(self, random_image):
        with pytest.raises(TypeError):
            apply_style(random_image, "gruvbox", 1.0)
