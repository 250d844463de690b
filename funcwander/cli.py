"""Command line search for an expression reproducing the A-law expansion."""

from __future__ import annotations

import argparse
import json
import signal
import threading
import time
from pathlib import Path
from typing import Optional, Sequence

from .alaw import AlawTarget
from .func_node import AtomFuncs
from .samples import (
    And,
    ArgX,
    BitCount,
    ConstAtom,
    Not,
    Or,
    Shl,
    Shr,
    Sub,
    Sum,
    Xor,
)
from .search_task import SearchTask, Settings

MAX_CONSTANT = 256
_STATUS_INTERVAL = 10.0
_POLL_INTERVAL = 0.05


def build_atoms() -> AtomFuncs:
    """The atoms used by the search: X, constants 1..256 and bit operations."""
    atoms = AtomFuncs()
    atoms.add(ArgX())
    for value in range(1, MAX_CONSTANT + 1):
        atoms.add(ConstAtom(value))
    for atom in (Not(), BitCount(), Sum(), Sub(), And(), Or(), Xor(), Shr(), Shl()):
        atoms.add(atom)
    return atoms


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="funcwander",
        description="Search for an expression matching the A-law expansion.",
    )
    parser.add_argument("--savefile", help="file to resume from and save to")
    parser.add_argument("--max-depth", type=int, help="maximum tree depth")
    parser.add_argument("--max-best", type=int, help="number of best results kept")
    return parser.parse_args(argv)


def _load(task: SearchTask, save_file: str) -> bool:
    try:
        text = Path(save_file).read_text(encoding="utf-8")
    except OSError:
        print(f"Failed to open file: {save_file}")
        return True
    try:
        task.from_json(text)
    except ValueError:
        print(f"Failed to parse JSON from file: {save_file}")
        return False
    print(f"Loaded JSON from file: {save_file}")
    return True


def _wait(task: SearchTask, stop: threading.Event) -> None:
    deadline = time.monotonic() + _STATUS_INTERVAL
    while not stop.is_set() and not task.done() and time.monotonic() < deadline:
        stop.wait(_POLL_INTERVAL)


def _main_loop(settings: Settings, stop: threading.Event) -> str:
    task = SearchTask(
        settings, build_atoms(), AlawTarget(), skip_constant=True, skip_symmetric=True
    )

    if settings.save_file and not _load(task, settings.save_file):
        return ""

    task.run()
    while not stop.is_set():
        _wait(task, stop)
        if task.done():
            stop.set()
        print(task.status())
    task.stop()

    if settings.save_file:
        try:
            with open(settings.save_file, "w", encoding="utf-8") as fh:
                json.dump(task.to_json(), fh)
        except OSError:
            print(f"Failed to open file: {settings.save_file}")
            return ""
        print(f"Current status saved to {settings.save_file}")

    return task.status()


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    settings = Settings()
    if args.savefile:
        settings.save_file = args.savefile
    if args.max_depth is not None:
        settings.max_depth = args.max_depth
    if args.max_best is not None:
        settings.max_best = args.max_best

    stop = threading.Event()

    def on_signal(signum, _frame) -> None:
        print(f"got signal {signum}")
        if signum == signal.SIGINT:
            print("terminating by Ctrl+C")
            stop.set()

    previous = None
    in_main_thread = threading.current_thread() is threading.main_thread()
    if in_main_thread:
        previous = signal.signal(signal.SIGINT, on_signal)
    try:
        status = _main_loop(settings, stop)
    finally:
        if in_main_thread:
            signal.signal(signal.SIGINT, previous)

    print(status)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())