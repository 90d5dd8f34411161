"""Command-line front door for baconnav.

Parses CLI options, builds a session rooted at the working directory and
dispatches one command. One-shot commands start from a fresh session, so
``next`` and ``previous`` always open the first and last location; ``shell``
keeps a single session alive so the selection survives between steps.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import shutil
import sys
from pathlib import Path
from typing import TextIO

from .config import load_settings, save_quickfix_enabled
from .editor import location_cursor, open_in_editor
from .locations import Location
from .quickfix import to_quickfix_items
from .render import display_path, format_location_rows, header_line
from .send import send_action
from .session import BaconSession, load_locations
from .socket_dir import resolve_socket_dir

NO_LOCATIONS_MESSAGE = "Error: no bacon locations loaded"

SHELL_HELP = """\
commands:
  l            reload and list locations
  n / p        next / previous location
  <number>     open location by index
  r            reload locations
  send ACTION  send an action to bacon (e.g. job:clippy)
  where        show resolved locations file and socket directory
  quickfix on|off
               persist quickfix errorfile mirroring
  q            quit
"""


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


class CommandRunner:
    """Executes commands against one session, writing to ``out``/``err``."""

    def __init__(
        self,
        session: BaconSession,
        out: TextIO,
        err: TextIO,
        color: bool = False,
        edit: bool = False,
    ) -> None:
        self.session = session
        self.out = out
        self.err = err
        self.color = color
        self.edit = edit

    def _error(self, message: str) -> bool:
        self.err.write(message.rstrip("\n") + "\n")
        return False

    def reload(self) -> bool:
        report = load_locations(self.session)
        for warning in report.warnings:
            self.err.write(warning + "\n")
        if not report.ok:
            return self._error(f"Error: {report.error}")
        return True

    def show_list(self) -> bool:
        if not self.reload():
            return False
        store = self.session.store
        if len(store) == 0:
            return self._error(NO_LOCATIONS_MESSAGE)
        store.clear_selection()
        width = max(1, shutil.get_terminal_size((80, 24)).columns)
        self.out.write(header_line(width, self.color) + "\n\n")
        for row in format_location_rows(store, self.session.cwd, self.color):
            self.out.write(row + "\n")
        return True

    def show_quickfix_json(self) -> bool:
        """Print the locations as a JSON list of ``setqflist()`` items."""
        if not self.reload():
            return False
        self.out.write(json.dumps(to_quickfix_items(self.session.store), indent=2) + "\n")
        return True

    def set_quickfix(self, state: str) -> bool:
        if state not in {"on", "off"}:
            return self._error(f"Expected on or off, got: {state!r}")
        enabled = state == "on"
        save_quickfix_enabled(enabled)
        settings = dataclasses.replace(self.session.settings, quickfix_enabled=enabled)
        self.session.settings = settings
        if enabled:
            self.out.write(f"Quickfix mirroring enabled, writing {settings.quickfix_path} next to the locations file\n")
        else:
            self.out.write("Quickfix mirroring disabled\n")
        return True

    def _open(self, location: Location) -> bool:
        line, column = location_cursor(location)
        shown = display_path(location.filename, self.session.cwd)
        self.out.write(f"[{self.session.store.index}/{len(self.session.store)}] {shown}:{line}:{column + 1}")
        self.out.write(f" {location.text}\n" if location.text else "\n")
        if self.edit:
            error = open_in_editor(location)
            if error is not None:
                return self._error(error)
        return True

    def step(self, direction: int) -> bool:
        if not self.reload():
            return False
        location = self.session.store.advance(direction)
        if location is None:
            return self._error(NO_LOCATIONS_MESSAGE)
        return self._open(location)

    def open_index(self, index: int) -> bool:
        if not self.reload():
            return False
        location = self.session.store.select(index)
        if location is None:
            return True
        return self._open(location)

    def send(self, action: str) -> bool:
        outcome = send_action(self.session, action)
        if not outcome.ok:
            return self._error(outcome.message)
        self.out.write(outcome.message + "\n")
        return True

    def where(self) -> bool:
        ok = True
        report = load_locations(self.session)
        for warning in report.warnings:
            self.err.write(warning + "\n")
        if report.ok:
            self.out.write(f"locations: {report.path} ({len(report.locations)} entries)\n")
        else:
            ok = self._error(f"locations: {report.error}")
        socket = resolve_socket_dir(self.session)
        if socket.directory is not None:
            self.out.write(f"socket: {socket.directory}\n")
        else:
            ok = self._error(f"socket: {socket.error}")
        return ok

    def run_shell(self, stdin: TextIO) -> bool:
        self.out.write(SHELL_HELP)
        for raw in stdin:
            command = raw.strip()
            if not command:
                continue
            if command in {"q", "quit", "exit"}:
                break
            self.dispatch_shell(command)
        return True

    def dispatch_shell(self, command: str) -> bool:
        if command == "l":
            return self.show_list()
        if command == "n":
            return self.step(1)
        if command == "p":
            return self.step(-1)
        if command == "r":
            if self.reload():
                self.out.write(f"{len(self.session.store)} location(s) loaded\n")
                return True
            return False
        if command == "where":
            return self.where()
        if command == "send" or command.startswith("send "):
            return self.send(command[len("send"):].strip())
        if command.startswith("quickfix "):
            return self.set_quickfix(command[len("quickfix"):].strip())
        if command.isdigit():
            return self.open_index(int(command))
        return self._error(f"Unknown command: {command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="baconnav",
        description="Navigate bacon diagnostics and send actions to a running bacon.",
    )
    parser.add_argument("--cwd", default=None, help="Working directory. Defaults to the current directory.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log search and cache decisions to stderr.")
    sub = parser.add_subparsers(dest="command", required=True)
    list_parser = sub.add_parser("list", help="Load and list all locations.")
    list_parser.add_argument("--json", action="store_true", help="Print setqflist()-style JSON items instead of rows.")
    next_parser = sub.add_parser(
        "next",
        help="Go to the next location. Each run starts unselected, so this opens the first one; use shell to step.",
    )
    next_parser.add_argument("--edit", action="store_true", help="Open the location in $EDITOR.")
    previous_parser = sub.add_parser(
        "previous",
        help="Go to the previous location. Each run starts unselected, so this opens the last one; use shell to step.",
    )
    previous_parser.add_argument("--edit", action="store_true", help="Open the location in $EDITOR.")
    open_parser = sub.add_parser("open", help="Go to the location with the given index.")
    open_parser.add_argument("index", type=_positive_int)
    open_parser.add_argument("--edit", action="store_true", help="Open the location in $EDITOR.")
    send_parser = sub.add_parser("send", help="Send an action to bacon, e.g. job:clippy.")
    send_parser.add_argument("action")
    sub.add_parser("where", help="Show the resolved locations file and socket directory.")
    quickfix_parser = sub.add_parser("quickfix", help="Turn quickfix errorfile mirroring on or off (saved in config).")
    quickfix_parser.add_argument("state", choices=["on", "off"])
    shell_parser = sub.add_parser("shell", help="Interactive session reading commands from stdin.")
    shell_parser.add_argument("--edit", action="store_true", help="Open selected locations in $EDITOR.")
    return parser


def main(argv: list[str] | None = None, default_cwd: Path | None = None) -> None:
    """Parse CLI arguments and run one baconnav command.

    ``default_cwd`` is primarily for tests; when omitted the current working
    directory is used. Exits with status 1 when the command fails.
    """
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    cwd = Path(args.cwd) if args.cwd is not None else (default_cwd or Path.cwd())
    if not cwd.is_dir():
        raise SystemExit(f"Directory not found: {cwd}")

    settings = load_settings()
    session = BaconSession(cwd=cwd.resolve(), settings=settings)
    color = settings.color and not args.no_color and sys.stdout.isatty()
    runner = CommandRunner(
        session,
        out=sys.stdout,
        err=sys.stderr,
        color=color,
        edit=bool(getattr(args, "edit", False)),
    )

    if args.command == "list":
        ok = runner.show_quickfix_json() if args.json else runner.show_list()
    elif args.command == "next":
        ok = runner.step(1)
    elif args.command == "previous":
        ok = runner.step(-1)
    elif args.command == "open":
        ok = runner.open_index(args.index)
    elif args.command == "send":
        ok = runner.send(args.action)
    elif args.command == "where":
        ok = runner.where()
    elif args.command == "quickfix":
        ok = runner.set_quickfix(args.state)
    else:
        ok = runner.run_shell(sys.stdin)

    if not ok:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
