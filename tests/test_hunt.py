import os

import pytest

from treasurehunt.hunt import (
    DuplicateTreasureError,
    Hunt,
    HuntError,
    HuntNotFoundError,
    TreasureNotFoundError,
)
from treasurehunt.record import RECORD_SIZE, Treasure, read_records


def make(ident, user="alice", clue="under the oak", value=10):
    return Treasure(ident, user, 1.5, -2.25, clue, value)


@pytest.fixture
def hunt(tmp_path):
    return Hunt("h1", tmp_path)


def log_lines(hunt):
    return hunt.log_path.read_text(encoding="utf-8").splitlines()


def test_add_creates_hunt_and_stores_treasure(hunt):
    hunt.add(make(1))
    assert hunt.exists
    assert hunt.treasures() == [make(1)]
    assert hunt.data_path.stat().st_size == RECORD_SIZE


def test_add_keeps_order(hunt):
    for ident in (3, 1, 2):
        hunt.add(make(ident))
    assert [t.id for t in hunt.treasures()] == [3, 1, 2]


def test_add_duplicate_raises_and_keeps_one(hunt):
    hunt.add(make(5))
    with pytest.raises(DuplicateTreasureError) as info:
        hunt.add(make(5, user="bob"))
    assert info.value.treasure_id == 5
    assert read_records(hunt.data_path) == [make(5)]


def test_add_creates_link_to_log(hunt):
    hunt.add(make(1))
    assert hunt.link_path.is_symlink()
    assert os.readlink(hunt.link_path) == os.path.join("h1", "logged_hunt.txt")
    assert hunt.link_path.read_text(encoding="utf-8") == hunt.log_path.read_text(
        encoding="utf-8"
    )


def test_add_logs_action(hunt):
    hunt.add(make(1))
    hunt.add(make(2))
    lines = log_lines(hunt)
    assert len(lines) == 2
    assert all(line.startswith("USED ACTION: Added Treasure at [") for line in lines)


def test_add_fails_when_path_is_a_file(tmp_path):
    (tmp_path / "h1").write_text("x")
    with pytest.raises(HuntError):
        Hunt("h1", tmp_path).add(make(1))


def test_missing_hunt_raises(hunt):
    with pytest.raises(HuntNotFoundError):
        hunt.treasures()
    with pytest.raises(HuntNotFoundError):
        hunt.summary()
    with pytest.raises(HuntNotFoundError):
        hunt.view(1)
    with pytest.raises(HuntNotFoundError):
        hunt.remove_treasure(1)
    with pytest.raises(HuntNotFoundError):
        hunt.remove()


def test_hunt_without_data_raises(hunt):
    hunt.path.mkdir()
    with pytest.raises(HuntError):
        hunt.treasures()


def test_trailing_fragment_ignored(hunt):
    hunt.add(make(1))
    with open(hunt.data_path, "ab") as data:
        data.write(b"\x01\x02\x03")
    assert hunt.treasures() == [make(1)]


def test_summary_reports_size_and_logs(hunt):
    hunt.add(make(1))
    hunt.add(make(2))
    summary = hunt.summary()
    assert summary.name == "h1"
    assert summary.size == 2 * RECORD_SIZE
    assert summary.treasures == [make(1), make(2)]
    assert log_lines(hunt)[-1].startswith("USED ACTION: Listed h1 at [")


def test_summary_message_is_cut(tmp_path):
    name = "n" * 40
    hunt = Hunt(name, tmp_path)
    hunt.add(make(1))
    hunt.summary()
    last = log_lines(hunt)[-1]
    assert last.startswith("USED ACTION: Listed " + "n" * 22 + " at [")


def test_view_returns_treasure_and_logs(hunt):
    hunt.add(make(7, user="carol"))
    hunt.add(make(8))
    assert hunt.view(7) == make(7, user="carol")
    assert log_lines(hunt)[-1].startswith("USED ACTION: Viewed TREASURE 7 at [")


def test_view_missing_raises_without_logging(hunt):
    hunt.add(make(1))
    before = log_lines(hunt)
    with pytest.raises(TreasureNotFoundError) as info:
        hunt.view(42)
    assert info.value.treasure_id == 42
    assert log_lines(hunt) == before


def test_remove_treasure(hunt):
    for ident in (1, 2, 3):
        hunt.add(make(ident))
    assert hunt.remove_treasure(2) is True
    assert [t.id for t in hunt.treasures()] == [1, 3]
    assert not hunt.copy_path.exists()
    assert log_lines(hunt)[-1].startswith(
        "USED ACTION: Removed treasure with ID 2 at ["
    )


def test_remove_treasure_not_found(hunt):
    hunt.add(make(1))
    assert hunt.remove_treasure(9) is False
    assert hunt.treasures() == [make(1)]
    assert not hunt.copy_path.exists()
    assert log_lines(hunt)[-1].startswith(
        "USED ACTION: Tried to remove treasure with ID 9, but not found at ["
    )


def test_remove_hunt(hunt):
    hunt.add(make(1))
    report = hunt.remove()
    assert report.complete
    assert not hunt.path.exists()
    assert not os.path.lexists(hunt.link_path)


def test_remove_hunt_with_extra_file(hunt):
    hunt.add(make(1))
    (hunt.path / "other").write_text("x")
    report = hunt.remove()
    assert report.data_removed and report.link_removed and report.log_removed
    assert report.directory_removed is False
    assert not report.complete
    assert hunt.path.is_dir()


def test_remove_hunt_without_link(hunt):
    hunt.path.mkdir()
    report = hunt.remove()
    assert report.data_removed is False
    assert report.link_removed is False
    assert report.log_removed is False
    assert report.directory_removed is True