"""Tests for the command line interface."""
from jpeg_sof.cli import main


class TestCli:
    """Tests for jpeg-sof subcommands."""

    def test_sof(self, color_jpeg, capsys):
        assert main(["sof", str(color_jpeg)]) == 0
        out = capsys.readouterr().out
        assert "[JPEG]" in out
        assert "Compression Type: Baseline" in out
        assert "Image Width: 64 pixels" in out
        assert "Image Height: 48 pixels" in out
        assert "Number of Components: 3" in out

    def test_markers(self, color_jpeg, capsys):
        assert main(["markers", str(color_jpeg)]) == 0
        out = capsys.readouterr().out
        assert "Start of Image (SOI)" in out
        assert "Start of Frame 0 (SOF0) - Baseline DCT" in out
        assert "Start of Scan (SOS)" in out

    def test_check(self, gray_jpeg, capsys):
        assert main(["check", str(gray_jpeg)]) == 0
        assert "OK: 20x30, 1 component(s)" in capsys.readouterr().out

    def test_truncated_sof_reported(self, tmp_path, capsys):
        path = tmp_path / "short.jpg"
        path.write_bytes(b"\xFF\xD8\xFF\xC0\x00\x05\x08\x00\x10\xFF\xD9")
        assert main(["sof", str(path)]) == 0
        out = capsys.readouterr().out
        assert "Data Precision: 8 bits" in out
        assert "ERROR:" in out

    def test_no_sof(self, tmp_path, capsys):
        path = tmp_path / "nosof.jpg"
        path.write_bytes(b"\xFF\xD8\xFF\xD9")
        assert main(["sof", str(path)]) == 1

    def test_not_a_jpeg(self, tmp_path, capsys):
        path = tmp_path / "note.txt"
        path.write_bytes(b"hello")
        assert main(["sof", str(path)]) == 2
        assert "Error reading" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        assert main(["sof", str(tmp_path / "missing.jpg")]) == 2

    def test_no_command(self, capsys):
        assert main([]) == 2
