"""
Tests for the stamp-maker command line.
"""

import json

import pytest

import stamp_maker
from SM_Libs.ImageEditingLib.image_codec import load_pixel_buffer

LINE_ARGS = [
    "--header-bottom", "10",
    "--footer-top", "50",
    "--text-line", "30",
    "--left-start", "5",
    "--right-start", "75",
]


@pytest.fixture
def base_args(white_stamp_png, tmp_path):
    return [
        str(white_stamp_png),
        "--name", "Test",
        "--output-dir", str(tmp_path / "out"),
        "--config", str(tmp_path / "config.json"),
    ]


class TestMain:
    """Tests for stamp_maker.main."""

    def test_writes_stamp(self, base_args, tmp_path, capsys):
        code = stamp_maker.main(base_args + LINE_ARGS + ["--pick", "0", "0", "--letter", "40", "--letter", "20"])

        assert code == 0
        stamp_path = tmp_path / "out" / "Test.stamp"
        assert capsys.readouterr().out.strip() == str(stamp_path)

        data = json.loads(stamp_path.read_text(encoding="utf-8"))
        assert data["fontSize"] == 21
        assert data["baseCoordinate"] == [{"x": 20, "y": 30}, {"x": 40, "y": 30}]

    def test_missing_lines_exit_2(self, base_args, tmp_path, capsys):
        code = stamp_maker.main(base_args + ["--header-bottom", "10"])

        assert code == 2
        assert "rightStart" in capsys.readouterr().err
        assert not (tmp_path / "out").exists()

    def test_out_of_range_line_exit_2(self, base_args):
        args = base_args + LINE_ARGS + ["--text-line", "999"]
        assert stamp_maker.main(args) == 2

    def test_missing_image_exit_2(self, tmp_path):
        assert stamp_maker.main([str(tmp_path / "nope.png"), "--name", "Test",
                                 "--config", str(tmp_path / "c.json")]) == 2

    def test_corrupt_image_exit_1(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"garbage")
        assert stamp_maker.main([str(path), "--name", "Test", "--config", str(tmp_path / "c.json")]) == 1

    def test_strict_ordering_flag(self, base_args):
        args = base_args + LINE_ARGS + ["--header-bottom", "55"]
        assert stamp_maker.main(args) == 0
        assert stamp_maker.main(args + ["--strict-ordering"]) == 2

    def test_target_and_png(self, base_args, tmp_path):
        png_path = tmp_path / "processed.png"
        args = base_args + LINE_ARGS + ["--target", "255", "255", "255", "--png", str(png_path)]

        assert stamp_maker.main(args) == 0
        assert load_pixel_buffer(png_path).pixel_at(0, 0)[3] == 0

    def test_pick_and_target_are_exclusive(self, base_args):
        with pytest.raises(SystemExit):
            stamp_maker.main(base_args + ["--pick", "0", "0", "--target", "1", "2", "3"])

    def test_config_file_output_dir(self, white_stamp_png, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"output_dir": str(tmp_path / "from_config")}), encoding="utf-8")

        code = stamp_maker.main([str(white_stamp_png), "--name", "Test", "--config", str(config_path)] + LINE_ARGS)

        assert code == 0
        assert (tmp_path / "from_config" / "Test.stamp").exists()
