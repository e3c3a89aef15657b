import os
import subprocess

import pytest

from xlsxboost.exceptions import (
    FileOpenError,
    TempFileError,
    UnsupportedPlatformError,
)
from xlsxboost.utils import file_utils
from xlsxboost.utils.file_utils import FileUtils


@pytest.fixture
def calls(monkeypatch):
    recorded = []

    def fake_run(args, check=False):
        recorded.append((args, check))
        return subprocess.CompletedProcess(args, 0)

    monkeypatch.setattr(file_utils.subprocess, "run", fake_run)
    return recorded


@pytest.fixture
def xlsx_file(isolated_workdir):
    path = isolated_workdir / "test.xlsx"
    path.write_bytes(b"PK")
    return path


def test_ensure_directory_exists_creates_and_reports_true(tmp_path):
    target_dir = tmp_path / "subdir"
    assert FileUtils.ensure_directory_exists(str(target_dir)) is True
    assert target_dir.is_dir()


def test_ensure_directory_exists_invalid_dir_returns_false(tmp_path):
    a_file = tmp_path / "file.txt"
    a_file.write_text("x")
    assert FileUtils.ensure_directory_exists("") is False
    assert FileUtils.ensure_directory_exists(str(a_file)) is False


@pytest.mark.parametrize(
    "platform, command",
    [("linux", "xdg-open"), ("darwin", "open"), ("freebsd13", "xdg-open")],
)
def test_open_file_uses_platform_command(calls, xlsx_file, platform, command):
    opened = FileUtils.open_file("test.xlsx", platform=platform)

    expected = os.path.join(os.getcwd(), "test.xlsx")
    assert opened == expected
    assert calls == [([command, expected], True)]


def test_open_file_on_windows_uses_startfile(monkeypatch, xlsx_file, calls):
    started = []
    monkeypatch.setattr(file_utils.os, "startfile", started.append, raising=False)

    opened = FileUtils.open_file("test.xlsx", platform="win32")

    assert started == [opened]
    assert calls == []


def test_open_file_accepts_absolute_path(calls, xlsx_file):
    assert FileUtils.open_file(str(xlsx_file), platform="linux") == str(xlsx_file)


def test_open_file_missing_file_raises(calls):
    with pytest.raises(FileOpenError):
        FileUtils.open_file("missing.xlsx", platform="linux")
    with pytest.raises(FileOpenError):
        FileUtils.open_file("", platform="linux")
    assert calls == []


def test_open_file_unsupported_platform_raises(calls, xlsx_file):
    with pytest.raises(UnsupportedPlatformError):
        FileUtils.open_file("test.xlsx", platform="emscripten")
    assert calls == []


def test_open_file_launcher_failure_raises(monkeypatch, xlsx_file):
    def failing_run(args, check=False):
        raise subprocess.CalledProcessError(1, args)

    monkeypatch.setattr(file_utils.subprocess, "run", failing_run)

    with pytest.raises(FileOpenError) as exc_info:
        FileUtils.open_file("test.xlsx", platform="linux")
    assert isinstance(exc_info.value.__cause__, subprocess.CalledProcessError)


def test_create_and_remove_temp_file(tmp_path):
    directory = tmp_path / "tmp"
    path = FileUtils.create_temp_file(
        suffix=".png", prefix="plot_", directory=str(directory)
    )

    assert os.path.isfile(path)
    assert os.path.basename(path).startswith("plot_")
    assert path.endswith(".png")

    assert FileUtils.remove_file(path) is True
    assert not os.path.exists(path)
    # 再次删除返回 False
    assert FileUtils.remove_file(path) is False


def test_create_temp_file_names_are_unique():
    first = FileUtils.create_temp_file()
    second = FileUtils.create_temp_file()
    try:
        assert first != second
    finally:
        FileUtils.remove_file(first)
        FileUtils.remove_file(second)


def test_create_temp_file_unusable_directory_raises(tmp_path):
    a_file = tmp_path / "not_a_dir"
    a_file.write_text("x")
    with pytest.raises(TempFileError):
        FileUtils.create_temp_file(directory=str(a_file))


def test_remove_file_os_error_returns_false(tmp_path, monkeypatch):
    path = tmp_path / "a.png"
    path.write_bytes(b"x")

    def bad_remove(_path):
        raise PermissionError("locked")

    monkeypatch.setattr("xlsxboost.utils.file_utils.os.remove", bad_remove)
    assert FileUtils.remove_file(str(path)) is False
