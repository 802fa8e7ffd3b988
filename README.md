# treasurehunt

A small command-line manager for treasure hunts.

- Each hunt is a directory.
- The treasures of a hunt are kept in `treasure_data` inside that directory. This is a binary file of fixed-size records.
- Every action is appended to `logged_hunt.txt` in the hunt directory.
- When a treasure is added, a symbolic link named `logged_hunt-<hunt>` is made next to the hunt directory if it is not there yet. It points at that log.

## Installation

```
pip install .
```

## Usage

The hunt name is taken relative to the current directory.

```
treasure-manager --add HUNT
treasure-manager --list HUNT
treasure-manager --view HUNT ID
treasure-manager --remove_treasure HUNT ID
treasure-manager --remove_hunt HUNT
```

`--add`
- Creates the hunt directory if it does not exist yet.
- Asks in turn for the treasure's ID, user, longitude, latitude, clue and value.
- Numbers are read from the start of each answer. An answer with no number counts as 0.
- The user is cut to 34 bytes and the clue to 79 bytes.
- A treasure whose ID is already in the hunt is refused, and the command exits with status 1.

`--list`
- Prints the hunt's name and the size in bytes of its data file.
- Prints the data file's last access time, shown under the label "Last modification".
- Prints every treasure in the order it was stored.

`--view`
- Prints the first treasure with the given ID.
- If there is none, it says so and exits with status 1.

`--remove_treasure`
- Removes every treasure with the given ID.
- A missing ID is reported and logged, and the command still exits with status 0.

`--remove_hunt`
- Deletes, in order, the data file, the log link, the log and the hunt directory.
- Reports whether each step succeeded.

A hunt that does not exist is reported on standard error, with exit status 1. So are wrong or missing arguments.

Each entry in the log looks like this:

```
USED ACTION: Added Treasure at [2024-05-01 12:30:00]
```

## Library use

```python
from treasurehunt.hunt import Hunt
from treasurehunt.record import Treasure, format_treasure

hunt = Hunt("HUNT001", ".")
hunt.add(Treasure(id=1, user="alice", longitude=26.1, latitude=44.4,
                  clue="under the old oak", value=100))
for treasure in hunt.treasures():
    print(format_treasure(treasure))
```

### `treasurehunt.hunt.Hunt(name, base_dir=None)`

A hunt lives in `base_dir / name`. When `base_dir` is `None`, the current directory is used.

| Method | What it does |
| --- | --- |
| `add(treasure)` | Stores a treasure, creating the hunt if needed. Raises `DuplicateTreasureError` when the ID is taken. |
| `treasures()` | Returns the stored treasures without logging. |
| `summary()` | Returns a `HuntSummary` (`name`, `size`, `last_access`, `treasures`) and logs the listing. |
| `view(treasure_id)` | Returns the first matching treasure and logs the view. Raises `TreasureNotFoundError` when there is none. |
| `remove_treasure(treasure_id)` | Drops every matching treasure. Returns whether any was removed, and logs the attempt. |
| `remove()` | Deletes the hunt. Returns a `RemovalReport` with one flag per step and a `complete` property. |

A method other than `add` raises `HuntNotFoundError` when the hunt directory is missing. All the errors derive from `HuntError`.

### `treasurehunt.record`

- `Treasure` is a dataclass with `id`, `user`, `longitude`, `latitude`, `clue` and `value`.
- `Treasure.pack()` gives one record of `RECORD_SIZE` bytes. It raises `ValueError` when a field does not fit.
- `Treasure.unpack(data)` decodes one record.
- `iter_records(stream)` and `read_records(path)` read stored records. A trailing partial record is ignored.
- `prompt_treasure(input_fn, output)` asks for the fields.
- `format_treasure(treasure)` renders a treasure on one line.

### `treasurehunt.actionlog`

- `format_entry(action, when)` builds one log line.
- `log_action(action, path, now=None)` appends that line to a log file and returns it.

## What it does not do

- There is no way to edit a stored treasure; remove it and add it again.
- There is no command that lists all hunts.
- Records are read and written as a whole file on each command; there is no locking between concurrent runs.

## Development

```
pip install -e .[test]
pytest
```