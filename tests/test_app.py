"""Smoke tests for the dotscreen command line.

Run:
    pytest tests/test_app.py -v
"""

from PIL import Image

from dotscreen.app import build_parser, main

from .test_rendering import svg_circles


def _write_image(tmp_path, color=(0, 0, 0)):
    path = tmp_path / "frame.png"
    Image.new("RGB", (40, 30), color).save(path)
    return path


def test_parser_defaults():
    args = build_parser().parse_args(["in.png"])
    assert args.grid_size == 20
    assert args.brightness == 20
    assert args.dither == "None"
    assert args.scale == 2


def test_svg_export(tmp_path):
    source = _write_image(tmp_path)
    output = tmp_path / "out.svg"
    code = main(
        [str(source), "-o", str(output), "--grid-size", "100", "--brightness", "0",
         "--max-width", "400", "--max-height", "300"]
    )
    assert code == 0
    circles = svg_circles(output.read_text(encoding="utf-8"))
    # 400x300 canvas at grid 100 -> 4x3 black cells
    assert len(circles) == 12
    assert all(r == 50 for _, _, r in circles)


def test_png_export_is_upscaled(tmp_path):
    source = _write_image(tmp_path, (255, 255, 255))
    output = tmp_path / "out.png"
    code = main(
        [str(source), "-o", str(output), "--max-width", "400", "--max-height", "300",
         "--scale", "3", "--dither", "Ordered"]
    )
    assert code == 0
    with Image.open(output) as saved:
        assert saved.size == (1200, 900)
        assert saved.getextrema() == (255, 255)


def test_default_output_next_to_input(tmp_path):
    source = _write_image(tmp_path)
    assert main([str(source), "--max-width", "200", "--max-height", "200"]) == 0
    assert (tmp_path / "halftone.png").exists()


def test_invalid_configuration_exit_code(tmp_path, capsys):
    source = _write_image(tmp_path)
    assert main([str(source), "--gamma", "0"]) == 2
    assert "invalid configuration" in capsys.readouterr().err


def test_unreadable_input_exit_code(tmp_path, capsys):
    missing = tmp_path / "missing.png"
    assert main([str(missing)]) == 1
    assert "Failed to load image" in capsys.readouterr().err


def test_unwritable_output_exit_code(tmp_path, capsys):
    source = _write_image(tmp_path)
    output = tmp_path / "missing_dir" / "out.svg"
    args = [str(source), "-o", str(output), "--max-width", "200", "--max-height", "200"]
    assert main(args) == 1
    assert "error:" in capsys.readouterr().err
    assert not output.exists()
