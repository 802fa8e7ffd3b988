"""Command-line entry point for managing treasure hunts."""

from __future__ import annotations

import sys
from typing import Callable

from treasurehunt.hunt import (
    DuplicateTreasureError,
    Hunt,
    HuntError,
    HuntNotFoundError,
    TreasureNotFoundError,
)
from treasurehunt.record import _parse_int, format_treasure, prompt_treasure

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

USAGE = (
    "usage: treasurehunt --add|--list|--remove_hunt <hunt>\n"
    "       treasurehunt --view|--remove_treasure <hunt> <id>"
)


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    return EXIT_FAILURE


def _add(hunt: Hunt) -> int:
    created = not hunt.exists
    linked = hunt.link_path.is_symlink() or hunt.link_path.exists()
    treasure = prompt_treasure()
    try:
        hunt.add(treasure)
    except DuplicateTreasureError as exc:
        print(f"TREASURE WITH ID {exc.treasure_id} ALLREADY EXISTS !")
        return EXIT_FAILURE
    if created:
        print(f"Directory {hunt.name} created with succes!")
    print("NEW TREASURE ADDED !")
    if not linked and hunt.link_path.is_symlink():
        print("Symbolik link succeded !")
    return EXIT_SUCCESS


def _list(hunt: Hunt) -> int:
    try:
        summary = hunt.summary()
    except HuntNotFoundError:
        return _fail("Hunt doesn't exist!")
    print(f"Nume hunt: {summary.name}")
    print(f"Dimensiune hunt: {summary.size}")
    print(f"Last modification: {summary.last_access.ctime()}\n")
    print("File content: \n")
    for number, treasure in enumerate(summary.treasures, start=1):
        print(f"Treasure {number}")
        print(format_treasure(treasure))
    return EXIT_SUCCESS


def _remove_hunt(hunt: Hunt) -> int:
    try:
        report = hunt.remove()
    except HuntNotFoundError:
        return _fail("Doesn't exist :))")
    print(
        "Treasure file deleted!"
        if report.data_removed
        else "It didn't removed the file !"
    )
    print(
        "Symbolic link removed with succes!"
        if report.link_removed
        else "Something happend and it didn't removed the symbolic link!"
    )
    print(
        "File loggin deleted!"
        if report.log_removed
        else "Failed to delete loggin file !"
    )
    print(
        "Hunt succesfully deleted!"
        if report.directory_removed
        else "Couldn't delete the HUNT!"
    )
    return EXIT_SUCCESS


def _view(hunt: Hunt, treasure_id: int) -> int:
    try:
        treasure = hunt.view(treasure_id)
    except HuntNotFoundError:
        return _fail("Failed to open the hunt!")
    except TreasureNotFoundError:
        print(f"NO TREASURE WITH ID {treasure_id} FOUND!")
        return EXIT_FAILURE
    print(f"TREASURE WITH ID {treasure_id} FOUND!")
    print(f"TREASURE {treasure_id}:\n")
    print(format_treasure(treasure))
    return EXIT_SUCCESS


def _remove_treasure(hunt: Hunt, treasure_id: int) -> int:
    try:
        removed = hunt.remove_treasure(treasure_id)
    except HuntNotFoundError:
        return _fail("Failed to open the hunt !")
    if removed:
        print(f"TREASURE WITH ID {treasure_id} REMOVED WITH SUCCES!")
    else:
        print(f"TREASURE WITH ID {treasure_id} NOT FOUNND !!!")
    return EXIT_SUCCESS


_HUNT_COMMANDS: dict[str, Callable[[Hunt], int]] = {
    "--add": _add,
    "--list": _list,
    "--remove_hunt": _remove_hunt,
}

_TREASURE_COMMANDS: dict[str, Callable[[Hunt, int], int]] = {
    "--view": _view,
    "--remove_treasure": _remove_treasure,
}


def main(argv: list[str] | None = None) -> int:
    """Run one hunt command and return the process exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2:
        _fail("NOT ENOUGH ARGUMENTS !")
        return _fail(USAGE)

    option, name = args[0], args[1]
    hunt = Hunt(name)
    try:
        if len(args) == 2:
            command = _HUNT_COMMANDS.get(option)
            if command is None:
                return _fail("NO ARGUMENTS FOUND!")
            return command(hunt)
        if len(args) == 3:
            treasure_command = _TREASURE_COMMANDS.get(option)
            if treasure_command is None:
                return _fail("NOT GOOD ARGUMENTS!")
            return treasure_command(hunt, _parse_int(args[2]))
    except (HuntError, ValueError, OSError) as exc:
        return _fail(str(exc))
    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())