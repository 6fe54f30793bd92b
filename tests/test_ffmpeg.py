"""Unit tests for the ffmpeg wrappers.

WHY: A wrong -map or a badly quoted playlist only shows up after minutes
of encoding. Checking the exact argument lists catches it immediately.

HOW: Command builders are tested directly. transcode() and concat() run
with subprocess.run patched, so ffmpeg is never executed.
"""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from vconcat.core.errors import TranscodeError
from vconcat.media import ffmpeg as ff
from vconcat.media.resize import parse_resize


def _completed(returncode=0, stderr=""):
    proc = MagicMock()
    proc.returncode = returncode
    proc.stderr = stderr
    return proc


class TestBuildTranscodeCommand:

    def test_identity_copies_all_streams(self):
        cmd = ff.build_transcode_command(
            Path("/in/a.mp4"), Path("/out/a.mkv"), parse_resize("100%"), Path("/out/a.ass"), ffmpeg="ffmpeg"
        )
        assert cmd == [
            "ffmpeg", "-y", "-hide_banner", "-loglevel", "error",
            "-i", "/in/a.mp4", "-i", "/out/a.ass",
            "-codec", "copy", "-map", "0", "-map", "1",
            "/out/a.mkv",
        ]

    def test_identity_without_subtitle(self):
        cmd = ff.build_transcode_command(Path("a.mp4"), Path("a.mkv"), parse_resize("1"), ffmpeg="ffmpeg")
        assert cmd == [
            "ffmpeg", "-y", "-hide_banner", "-loglevel", "error",
            "-i", "a.mp4",
            "-codec", "copy", "-map", "0",
            "a.mkv",
        ]

    def test_scaled_with_subtitle(self):
        cmd = ff.build_transcode_command(
            Path("a.mp4"), Path("a.mkv"), parse_resize("w320"), Path("a.ass"), ffmpeg="ffmpeg"
        )
        assert cmd[cmd.index("-filter_complex") + 1] == "[0:v]scale=320:-2:flags=lanczos[video]"
        assert cmd[-7:] == ["-c:a", "copy", "-map", "1", "-c:s", "copy", "a.mkv"]
        assert "0:a?" in cmd

    def test_scaled_without_subtitle(self):
        cmd = ff.build_transcode_command(Path("a.mp4"), Path("a.mkv"), parse_resize("25%"), ffmpeg="ffmpeg")
        assert cmd[cmd.index("-filter_complex") + 1] == "[0:v]scale=iw*0.25:-2:flags=lanczos[video]"
        assert "-c:s" not in cmd
        assert cmd[-1] == "a.mkv"

    def test_paths_with_spaces_stay_single_arguments(self):
        cmd = ff.build_transcode_command(
            Path("/my clips/a b.mp4"), Path("/out dir/x.mkv"), parse_resize("w320"), ffmpeg="ffmpeg"
        )
        assert "/my clips/a b.mp4" in cmd
        assert cmd[-1] == "/out dir/x.mkv"


class TestTranscode:

    def test_success_returns_output(self):
        with patch("vconcat.media.ffmpeg.subprocess.run", return_value=_completed()) as run:
            out = ff.transcode(Path("a.mp4"), Path("a.mkv"), parse_resize("w320"))
        assert out == Path("a.mkv")
        assert run.call_args[0][0][0] == ff.FFMPEG_BINARY

    def test_failure_raises(self):
        proc = _completed(returncode=1, stderr="warning\nInvalid data found\n")
        with patch("vconcat.media.ffmpeg.subprocess.run", return_value=proc):
            with pytest.raises(TranscodeError) as exc_info:
                ff.transcode(Path("a.mp4"), Path("a.mkv"), parse_resize("w320"), ffmpeg="ffmpeg")
        assert exc_info.value.returncode == 1
        assert "Invalid data found" in str(exc_info.value)
        assert exc_info.value.command[0] == "ffmpeg"


class TestConcat:

    def test_playlist_format(self, tmp_path):
        clips = [tmp_path / "a.mkv", tmp_path / "it's.mkv"]
        playlist = ff.write_concat_playlist(clips, tmp_path / "list.txt")
        lines = playlist.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "file '{}'".format(tmp_path.resolve() / "a.mkv")
        assert lines[1].endswith("it'\\''s.mkv'")

    def test_concat_runs_demuxer(self, tmp_path):
        clips = [tmp_path / "a.mkv", tmp_path / "b.mkv"]
        playlist = tmp_path / "concat-playlist.txt"
        with patch("vconcat.media.ffmpeg.subprocess.run", return_value=_completed()) as run:
            out = ff.concat(clips, tmp_path / "all.mkv", playlist, ffmpeg="ffmpeg")

        assert out == tmp_path / "all.mkv"
        assert playlist.is_file()
        cmd = run.call_args[0][0]
        assert cmd == ff.build_concat_command(playlist, tmp_path / "all.mkv", "ffmpeg")
        assert ["-f", "concat", "-safe", "0"] == cmd[5:9]

    def test_concat_nothing(self, tmp_path):
        with pytest.raises(ValueError):
            ff.concat([], tmp_path / "all.mkv", tmp_path / "list.txt")

    def test_concat_failure(self, tmp_path):
        with patch("vconcat.media.ffmpeg.subprocess.run", return_value=_completed(1, "boom")):
            with pytest.raises(TranscodeError):
                ff.concat([tmp_path / "a.mkv"], tmp_path / "all.mkv", tmp_path / "list.txt")


class TestIsCommandPresent:

    def test_missing(self, monkeypatch):
        monkeypatch.setattr(ff.shutil, "which", lambda name: None)
        assert ff.is_command_present("ffmpeg") is False

    def test_present(self, monkeypatch, tmp_path):
        exe = tmp_path / "ffmpeg"
        exe.write_text("#!/bin/sh\n", encoding="utf-8")
        exe.chmod(0o755)
        monkeypatch.setattr(ff.shutil, "which", lambda name: str(exe))
        assert ff.is_command_present("ffmpeg") is True
