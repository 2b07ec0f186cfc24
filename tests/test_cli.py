"""
Test the command line entry point and image I/O
"""
import numpy as np
import pytest
from PIL import Image

from gruvstyle.image_io import load_image_rgb, save_image_rgb
import restyle


class TestImageIO:
    """Load and save"""

    def test_png_round_trip(self, tmp_path, random_image):
        path = save_image_rgb(tmp_path / "img.png", random_image)
        assert path.exists()
        assert np.array_equal(load_image_rgb(path), random_image)

    def test_load_converts_to_rgb(self, tmp_path):
        path = tmp_path / "rgba.png"
        Image.new("RGBA", (5, 3), color=(10, 20, 30, 128)).save(path)
        rgb = load_image_rgb(path)
        assert rgb.shape == (3, 5, 3)
        assert rgb.dtype == np.uint8


class TestCli:
    """restyle.py"""

    def test_defaults(self):
        args = restyle.parse_cli_args(["in.png"])
        assert str(args.dst) == "output.png"
        assert args.strength == 1.0
        assert args.style == "gruvbox"
        assert args.method == "sigmoid"
        assert args.metric == "cie76"
        assert args.quantize_de is False

    def test_positional_strength_and_style(self):
        args = restyle.parse_cli_args(["in.png", "out.png", "0.8", "retro"])
        assert str(args.dst) == "out.png"
        assert args.strength == pytest.approx(0.8)
        assert args.style == "retro"

    def test_flags_override_positionals(self):
        args = restyle.parse_cli_args(
            ["in.png", "out.png", "0.8", "retro", "--strength", "0.3", "--style", "mosaic"]
        )
        assert args.strength == pytest.approx(0.3)
        assert args.style == "mosaic"

    def test_no_arguments_prints_styles(self, capsys):
        assert restyle.main([]) == 0
        err = capsys.readouterr().err
        assert "Usage:" in err
        for name in ("gruvbox", "retro", "synthwave", "mosaic", "watercolor"):
            assert name in err

    def test_unknown_positional_style_falls_back(self, tmp_path, random_image, capsys):
        src = tmp_path / "in.png"
        dst = tmp_path / "out.png"
        Image.fromarray(random_image).save(src)
        assert restyle.main([str(src), str(dst), "0.5", "sepia", "--workers", "1"]) == 0
        assert dst.exists()
        assert "[warn]" in capsys.readouterr().out

    def test_end_to_end(self, tmp_path, random_image, capsys):
        src = tmp_path / "in.png"
        dst = tmp_path / "out.png"
        Image.fromarray(random_image).save(src)

        status = restyle.main(
            [str(src), str(dst), "--style", "mosaic", "--block-size", "4",
             "--strength", "0.6", "--seed", "1", "--workers", "1", "--debug"]
        )

        assert status == 0
        assert dst.exists()
        with Image.open(dst) as im:
            assert im.size == (32, 24)
        out = capsys.readouterr().out
        assert "Styled image saved to" in out
        assert "[run]" in out

    def test_missing_input(self, tmp_path, capsys):
        status = restyle.main([str(tmp_path / "nope.png")])
        assert status == 2
        assert "[error]" in capsys.readouterr().err
