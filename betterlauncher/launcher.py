"""Launcher state: filtering, selection, navigation and activation.

The model keeps the rows shown to the user, the current query, the selected
row and whether the launcher has closed. A query that is an arithmetic
expression gets a result row at the top; activating it copies the result.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from .desktop import DesktopEntry, launch_application, load_desktop_entries
from .expression import evaluate_math_expression

MATH_SEPARATOR = " = "
CALCULATOR_ICON = "accessories-calculator"


@dataclass(eq=False)
class Row:
    """One line of the result list: an application or a calculation."""

    label: str
    icon: str | None = None

    @property
    def is_math(self) -> bool:
        return MATH_SEPARATOR in self.label

    @property
    def result(self) -> str | None:
        """The text after the last separator of a calculation row."""
        if not self.is_math:
            return None
        return self.label.split(MATH_SEPARATOR)[-1]


def _print_result(text: str) -> None:
    print(text)


class Launcher:
    """Search list of applications with an inline calculator."""

    def __init__(
        self,
        entries: Iterable[DesktopEntry] = (),
        *,
        copy: Callable[[str], object] | None = None,
        launch: Callable[[str], object] | None = None,
    ) -> None:
        self.rows: list[Row] = []
        self._exec_commands: dict[str, str] = {}
        for entry in entries:
            self._exec_commands[entry.name] = entry.exec_command
            self.rows.append(Row(entry.name, entry.icon))
        self.query = ""
        self.closed = False
        self._filter: str | None = None
        self._selected: Row | None = self.rows[0] if self.rows else None
        self._copy = copy or _print_result
        self._launch = launch or launch_application

    def _is_visible(self, row: Row) -> bool:
        if self._filter is None or row.is_math:
            return True
        return self._filter in row.label.lower()

    def visible_rows(self) -> list[Row]:
        """Rows that pass the current filter, in display order."""
        return [row for row in self.rows if self._is_visible(row)]

    def selected(self) -> Row | None:
        """The selected row, or ``None``."""
        return self._selected

    def set_query(self, query: str) -> None:
        """Update the search text, refreshing the result row, filter and selection."""
        self.query = query
        lowered = query.lower()

        while self.rows and self.rows[0].is_math:
            removed = self.rows.pop(0)
            if removed is self._selected:
                self._selected = None

        if not lowered:
            self._filter = None
            if self.rows:
                self._selected = self.rows[0]
            return

        result = evaluate_math_expression(lowered)
        if result is not None:
            self.rows.insert(0, Row(f"{lowered}{MATH_SEPARATOR}{result}", CALCULATOR_ICON))

        self._filter = lowered
        self._selected = next(iter(self.visible_rows()), None)

    def move_down(self) -> Row | None:
        """Select the next visible row, or the first when nothing is selected."""
        visible = self.visible_rows()
        if self._selected in visible:
            index = visible.index(self._selected)
            if index + 1 < len(visible):
                self._selected = visible[index + 1]
        elif visible:
            self._selected = visible[0]
        return self._selected

    def move_up(self) -> Row | None:
        """Select the previous visible row, staying put at the top."""
        visible = self.visible_rows()
        if self._selected in visible:
            index = visible.index(self._selected)
            if index > 0:
                self._selected = visible[index - 1]
        return self._selected

    def activate_row(self, row: Row) -> bool:
        """Copy a calculation or launch an application; return whether it acted."""
        if row.is_math:
            self._copy(row.result or "")
            self.closed = True
            return True
        exec_command = self._exec_commands.get(row.label)
        if exec_command is None:
            return False
        self._launch(exec_command)
        self.closed = True
        return True

    def activate(self) -> bool:
        """Act on the selection, the raw query as a calculation, or the first row."""
        if self._selected is not None:
            return self.activate_row(self._selected)
        result = evaluate_math_expression(self.query)
        if result is not None:
            self._copy(result)
            self.closed = True
            return True
        visible = self.visible_rows()
        if not visible:
            return False
        self._selected = visible[0]
        return self.activate_row(visible[0])


def _show(launcher: Launcher) -> None:
    selected = launcher.selected()
    for row in launcher.visible_rows():
        marker = "> " if row is selected else "  "
        print(f"{marker}{row.label}")


def _interactive(launcher: Launcher) -> None:
    _show(launcher)
    for line in sys.stdin:
        command = line.rstrip("\n")
        if command == ":quit":
            return
        if command == "":
            launcher.activate()
        elif command == ":down":
            launcher.move_down()
        elif command == ":up":
            launcher.move_up()
        else:
            launcher.set_query(command)
        if launcher.closed:
            return
        _show(launcher)


def main(argv: list[str] | None = None) -> int:
    """Search installed applications or evaluate a calculation."""
    parser = argparse.ArgumentParser(
        prog="betterlauncher",
        description="Search applications and evaluate calculations.",
    )
    parser.add_argument("query", nargs="?", help="search text or expression")
    parser.add_argument(
        "--list", action="store_true", help="print matching rows instead of activating"
    )
    args = parser.parse_args(argv)

    launcher = Launcher(load_desktop_entries())
    if args.query is None:
        if args.list:
            _show(launcher)
        else:
            _interactive(launcher)
        return 0

    launcher.set_query(args.query)
    if args.list:
        _show(launcher)
        return 0
    return 0 if launcher.activate() else 1


if __name__ == "__main__":
    sys.exit(main())