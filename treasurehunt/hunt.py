"""A hunt: a directory holding treasure records and an action log."""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from treasurehunt.actionlog import log_action
from treasurehunt.record import Treasure, iter_records

DATA_FILE = "treasure_data"
LOG_FILE = "logged_hunt.txt"
COPY_FILE = "copy_treasure"
LINK_PREFIX = "logged_hunt-"

_DIR_MODE = 0o755
_DATA_MODE = 0o777

# Room left for an action message in the short and the long message buffers.
_SHORT_MESSAGE = 29
_LONG_MESSAGE = 49


class HuntError(Exception):
    """A hunt operation could not be carried out."""


class HuntNotFoundError(HuntError):
    """The hunt directory does not exist."""

    def __init__(self, name: str) -> None:
        super().__init__(f"hunt {name!r} does not exist")
        self.name = name


class DuplicateTreasureError(HuntError):
    """A treasure with the same id is already stored in the hunt."""

    def __init__(self, treasure_id: int) -> None:
        super().__init__(f"treasure with id {treasure_id} already exists")
        self.treasure_id = treasure_id


class TreasureNotFoundError(HuntError):
    """No treasure with the requested id is stored in the hunt."""

    def __init__(self, treasure_id: int) -> None:
        super().__init__(f"no treasure with id {treasure_id} found")
        self.treasure_id = treasure_id


@dataclass(frozen=True)
class HuntSummary:
    """What listing a hunt reports."""

    name: str
    size: int
    last_access: datetime
    treasures: list[Treasure]


@dataclass(frozen=True)
class RemovalReport:
    """Which parts of a hunt were deleted when removing it."""

    data_removed: bool
    link_removed: bool
    log_removed: bool
    directory_removed: bool

    @property
    def complete(self) -> bool:
        return all(
            (
                self.data_removed,
                self.link_removed,
                self.log_removed,
                self.directory_removed,
            )
        )


def _try(action, path: Path) -> bool:
    try:
        action(path)
    except OSError:
        return False
    return True


class Hunt:
    """A named hunt living under ``base_dir``."""

    def __init__(self, name: str, base_dir: str | Path | None = None) -> None:
        self.name = name
        self.base_dir = Path(base_dir) if base_dir is not None else Path()

    @property
    def path(self) -> Path:
        return self.base_dir / self.name

    @property
    def data_path(self) -> Path:
        return self.path / DATA_FILE

    @property
    def log_path(self) -> Path:
        return self.path / LOG_FILE

    @property
    def link_path(self) -> Path:
        return self.base_dir / f"{LINK_PREFIX}{self.name}"

    @property
    def copy_path(self) -> Path:
        return self.path / COPY_FILE

    @property
    def exists(self) -> bool:
        return self.path.is_dir()

    def _log(self, message: str, limit: int) -> None:
        log_action(message[:limit], self.log_path)

    def _require(self) -> None:
        if not self.exists:
            raise HuntNotFoundError(self.name)

    def _open_data(self):
        try:
            return open(self.data_path, "rb")
        except OSError as exc:
            raise HuntError(
                f"cannot open treasure data of hunt {self.name!r}: {exc}"
            ) from exc

    def add(self, treasure: Treasure) -> None:
        """Store a new treasure, creating the hunt if needed."""
        record = treasure.pack()
        if not self.exists:
            try:
                os.mkdir(self.path, _DIR_MODE)
            except OSError as exc:
                raise HuntError(
                    f"cannot create hunt {self.name!r}: {exc}"
                ) from exc
        try:
            fd = os.open(
                self.data_path, os.O_CREAT | os.O_RDWR | os.O_APPEND, _DATA_MODE
            )
        except OSError as exc:
            raise HuntError(
                f"cannot open treasure data of hunt {self.name!r}: {exc}"
            ) from exc
        with os.fdopen(fd, "r+b") as data:
            if any(stored.id == treasure.id for stored in iter_records(data)):
                raise DuplicateTreasureError(treasure.id)
            data.seek(0, os.SEEK_END)
            data.write(record)
        self._link_log()
        self._log("Added Treasure", _SHORT_MESSAGE)

    def _link_log(self) -> None:
        try:
            os.lstat(self.link_path)
        except FileNotFoundError:
            target = os.path.join(self.name, LOG_FILE)
            try:
                os.symlink(target, self.link_path)
            except OSError as exc:
                raise HuntError(
                    f"cannot create symbolic link {self.link_path}: {exc}"
                ) from exc
        except OSError:
            pass

    def treasures(self) -> list[Treasure]:
        """Return the stored treasures in file order."""
        self._require()
        with self._open_data() as data:
            return list(iter_records(data))

    def summary(self) -> HuntSummary:
        """Describe the hunt and its treasures, logging the listing."""
        self._require()
        with self._open_data() as data:
            info = os.stat(data.fileno())
            treasures = list(iter_records(data))
        self._log(f"Listed {self.name}", _SHORT_MESSAGE)
        return HuntSummary(
            name=self.name,
            size=info.st_size,
            last_access=datetime.fromtimestamp(info.st_atime),
            treasures=treasures,
        )

    def view(self, treasure_id: int) -> Treasure:
        """Return the first treasure with ``treasure_id``, logging the view."""
        self._require()
        with self._open_data() as data:
            found = next(
                (t for t in iter_records(data) if t.id == treasure_id), None
            )
        if found is None:
            raise TreasureNotFoundError(treasure_id)
        self._log(f"Viewed TREASURE {treasure_id}", _SHORT_MESSAGE)
        return found

    def remove_treasure(self, treasure_id: int) -> bool:
        """Drop every treasure with ``treasure_id``; report whether any was."""
        self._require()
        with self._open_data() as data:
            try:
                copy = open(self.copy_path, "wb")
            except OSError as exc:
                raise HuntError(
                    f"cannot open temporary file {self.copy_path}: {exc}"
                ) from exc
            removed = False
            with copy:
                for treasure in iter_records(data):
                    if treasure.id == treasure_id:
                        removed = True
                    else:
                        copy.write(treasure.pack())
        if removed:
            os.replace(self.copy_path, self.data_path)
            message = f"Removed treasure with ID {treasure_id}"
        else:
            self.copy_path.unlink()
            message = (
                f"Tried to remove treasure with ID {treasure_id}, but not found"
            )
        self._log(message, _LONG_MESSAGE)
        return removed

    def remove(self) -> RemovalReport:
        """Delete the data file, log link, log file and hunt directory."""
        self._require()
        return RemovalReport(
            data_removed=_try(os.remove, self.data_path),
            link_removed=_try(os.unlink, self.link_path),
            log_removed=_try(os.remove, self.log_path),
            directory_removed=_try(os.rmdir, self.path),
        )