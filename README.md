# betterlauncher

A small application launcher for XDG desktops, driven from the terminal.
It finds the installed applications through their `.desktop` files, narrows
them down with a search query and starts the one you pick. A query that is
an arithmetic or logical expression is worked out as well, and its result
is offered as the first entry.

## Installing

```
pip install .
```

## Running

```
betterlauncher [--list] [QUERY]
```

With a `QUERY`, the list is filtered by it and the first matching row is
activated: an application is started, or, if the query is an expression,
its result is printed. The command exits with status 1 when nothing could
be activated. With `--list`, the matching rows are printed instead, the
selected one marked with `>`.

Without a `QUERY`, `betterlauncher --list` prints every application, and
plain `betterlauncher` starts an interactive session that reads lines from
standard input and prints the list after each one:

- any text sets the search query (matched case-insensitively against names);
- `:down` and `:up` move the selection;
- an empty line activates the selected row, then the session ends;
- `:quit` ends the session.

When the query is an expression such as `7/2` or `2 * (3 + 4)`, a row of
the form `7/2 = 3.5` appears at the top of the list. Whole numbers around
`/` are treated as decimals, so `7/2` yields `3.5`. Expressions support
64-bit integers, floats, `true`/`false`, `+ - * / % ^`, comparisons,
`&& || !` and parentheses.

Applications are read from `$XDG_DATA_HOME/applications` (default
`~/.local/share/applications`) and from every `applications` directory under
`$XDG_DATA_DIRS` (default `/usr/local/share:/usr/share`), searched
recursively. Entries that are hidden, marked `NoDisplay=true`, not of
`Type=Application`, or that lack a name, an icon or a command are left out.
The field codes `%f %F %u %U %i %c %k` are stripped from the command before
it is started in the background.

## Using it from Python

```python
from betterlauncher.desktop import load_desktop_entries
from betterlauncher.expression import evaluate_math_expression
from betterlauncher.launcher import Launcher

print(evaluate_math_expression("7/2"))      # "3.5"
print(evaluate_math_expression("firefox"))  # None

launcher = Launcher(load_desktop_entries(), copy=print)
launcher.set_query("term")
for row in launcher.visible_rows():
    print(row.label)
launcher.move_down()
launcher.activate()
```

- `betterlauncher.desktop`: `DesktopEntry`, `parse_desktop_file`,
  `collect_desktop_files`, `application_dirs`, `find_desktop_files`,
  `load_desktop_entries`, `clean_exec_command`, `launch_application`.
- `betterlauncher.expression`: `evaluate` returns the raw value,
  `format_value` renders it, `evaluate_math_expression` returns the text or
  `None`; bad expressions raise `ExpressionError`.
- `betterlauncher.launcher`: `Launcher` holds the search state
  (`set_query`, `visible_rows`, `selected`, `move_down`, `move_up`,
  `activate`, `activate_row`, `closed`); `Row` is one list line. The `copy`
  and `launch` arguments replace what is done with a calculation result
  (printed by default) and with an application's command (started by
  default).
- `betterlauncher.logger`: `Logger` and `LogLevel` write timestamped lines
  with a coloured level, errors to standard error and the rest to standard
  output.

## What it does not do

There is no graphical window, no icons are drawn and no keyboard shortcuts
are caught: the launcher works on lines of text in the terminal. A
calculation result is printed, not put on the clipboard.

## Tests

```
pip install .[test]
pytest
```