"""Tests for flexcalc.cli — the flexcalc command."""

import json

import pytest

from flexcalc.cli import main


class TestScoreCommand:
    def test_prints_score(self, two_frames_path, capsys):
        assert main(["score", str(two_frames_path)]) == 0
        assert capsys.readouterr().out == "1.0000\n"

    def test_precision_flag(self, three_frames_path, capsys):
        assert main(["score", str(three_frames_path), "--precision", "2"]) == 0
        assert capsys.readouterr().out == "2.00\n"

    def test_show_closest(self, three_frames_path, capsys):
        assert main(["score", str(three_frames_path), "--show-closest"]) == 0
        assert capsys.readouterr().out == "2.0000\nclosest frame: b\n"

    def test_config_file(self, tmp_path, capsys):
        traj = tmp_path / "hash.traj"
        traj.write_text("#a\n0 0 0\n#b\n2 0 0\n")
        config = tmp_path / "flexcalc.json"
        config.write_text(json.dumps({"marker": "#", "precision": 1}))
        assert main(["score", str(traj), "--config", str(config)]) == 0
        assert capsys.readouterr().out == "1.0\n"

    def test_mismatch_reports_header(self, mismatch_path, capsys):
        assert main(["score", str(mismatch_path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "atom count mismatch" in captured.err
        assert "'short'" in captured.err

    def test_empty_file(self, tmp_path, capsys):
        path = tmp_path / "empty.traj"
        path.write_text("")
        assert main(["score", str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "empty trajectory" in captured.err

    def test_format_error(self, tmp_path, capsys):
        path = tmp_path / "bad.traj"
        path.write_text(">a\n1 2 oops\n")
        assert main(["score", str(path)]) == 1
        assert "format error: line 2" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main(["score", str(tmp_path / "missing.traj")]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "cannot read" in captured.err

    def test_missing_argument_is_usage_error(self, capsys):
        with pytest.raises(SystemExit) as info:
            main(["score"])
        assert info.value.code == 2

    def test_invalid_precision_is_usage_error(self, two_frames_path):
        with pytest.raises(SystemExit) as info:
            main(["score", str(two_frames_path), "--precision", "-1"])
        assert info.value.code == 2

    def test_malformed_config_file(self, two_frames_path, tmp_path, capsys):
        config = tmp_path / "flexcalc.json"
        config.write_text("{not json")
        assert main(["score", str(two_frames_path), "--config", str(config)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "invalid config" in captured.err
        assert "usage:" not in captured.err

    @pytest.mark.parametrize(
        "content, match",
        [
            ({"colour": "red"}, "unknown config keys"),
            ({"log_level": "LOUD"}, "log_level"),
        ],
    )
    def test_invalid_config_values(self, two_frames_path, tmp_path, capsys, content, match):
        config = tmp_path / "flexcalc.json"
        config.write_text(json.dumps(content))
        assert main(["score", str(two_frames_path), "--config", str(config)]) == 1
        assert match in capsys.readouterr().err

    def test_missing_config_file(self, two_frames_path, tmp_path, capsys):
        missing = tmp_path / "missing.json"
        assert main(["score", str(two_frames_path), "--config", str(missing)]) == 1
        assert "cannot read config" in capsys.readouterr().err

    def test_undecodable_trajectory(self, tmp_path, capsys):
        path = tmp_path / "bad.traj"
        path.write_bytes(b">a\n1 2 3\n>b\n1 2 \xff\xfe\n")
        assert main(["score", str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "format error: cannot decode" in captured.err


class TestGenerateCommand:
    def test_writes_file_that_scores(self, tmp_path, capsys):
        path = tmp_path / "random.traj"
        assert main([
            "generate", str(path), "--frames", "5", "--atoms", "3", "--seed", "1",
        ]) == 0
        assert path.read_text().count(">") == 5
        assert main(["score", str(path)]) == 0
        assert float(capsys.readouterr().out) > 0.0

    def test_writes_to_stdout(self, capsys):
        assert main(["generate", "-", "--frames", "2", "--atoms", "1", "--seed", "0"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == ">0"
        assert lines[2] == ">1"

    def test_invalid_atoms_is_usage_error(self, tmp_path):
        path = tmp_path / "x.traj"
        with pytest.raises(SystemExit) as info:
            main(["generate", str(path), "--atoms", "0"])
        assert info.value.code == 2
        assert not path.exists()

    @pytest.mark.parametrize(
        "option, value",
        [("--frames", "-1"), ("--box", "0"), ("--box", "-2.5")],
    )
    def test_invalid_options_leave_no_file(self, tmp_path, option, value):
        path = tmp_path / "x.traj"
        with pytest.raises(SystemExit) as info:
            main(["generate", str(path), option, value])
        assert info.value.code == 2
        assert not path.exists()
