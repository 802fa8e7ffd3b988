import os
import stat
from datetime import datetime

from treasurehunt.actionlog import format_entry, log_action

WHEN = datetime(2024, 1, 2, 3, 4, 5)


def test_format_entry_layout():
    assert (
        format_entry("Added Treasure", WHEN)
        == "USED ACTION: Added Treasure at [2024-01-02 03:04:05]\n"
    )


def test_format_entry_truncates_long_action():
    entry = format_entry("x" * 400, WHEN)
    assert len(entry) == 255
    assert not entry.endswith("\n")
    assert entry.startswith("USED ACTION: xxx")


def test_log_action_creates_and_appends(tmp_path):
    path = tmp_path / "logged_hunt.txt"
    first = log_action("Added Treasure", path, WHEN)
    second = log_action("Listed hunt", path, WHEN)
    assert first == format_entry("Added Treasure", WHEN)
    assert path.read_text(encoding="utf-8") == first + second
    assert path.read_text(encoding="utf-8").count("\n") == 2


def test_log_action_default_time_is_now(tmp_path):
    path = tmp_path / "log.txt"
    before = datetime.now().replace(microsecond=0)
    entry = log_action("Viewed", path)
    after = datetime.now()
    stamp = entry[entry.index("[") + 1 : entry.index("]")]
    logged = datetime.strptime(stamp, "%Y-%m-%d %H:%M:%S")
    assert before <= logged <= after


def test_log_action_file_mode(tmp_path):
    mask = os.umask(0)
    os.umask(mask)
    path = tmp_path / "log.txt"
    log_action("Added Treasure", path, WHEN)
    assert stat.S_IMODE(path.stat().st_mode) == 0o644 & ~mask


def test_log_action_missing_directory_raises(tmp_path):
    try:
        log_action("x", tmp_path / "nope" / "log.txt", WHEN)
    except FileNotFoundError as exc:
        assert exc.filename is not None
    else:
        raise AssertionError("expected FileNotFoundError")