import pytest

from betterlauncher.desktop import DesktopEntry
from betterlauncher.expression import evaluate_math_expression
from betterlauncher.launcher import CALCULATOR_ICON, Launcher, Row, main

ENTRIES = [
    DesktopEntry("Firefox", "firefox", "firefox %u"),
    DesktopEntry("Files", "folder", "nautilus --new-window"),
    DesktopEntry("Terminal", "terminal", "kgx"),
]


@pytest.fixture
def recorded():
    return {"copied": [], "launched": []}


@pytest.fixture
def launcher(recorded):
    return Launcher(
        ENTRIES,
        copy=recorded["copied"].append,
        launch=recorded["launched"].append,
    )


def labels(rows):
    return [row.label for row in rows]


def test_initial_state_shows_all_and_selects_first(launcher):
    assert labels(launcher.visible_rows()) == ["Firefox", "Files", "Terminal"]
    assert launcher.selected().label == "Firefox"
    assert launcher.closed is False


def test_filter_is_substring_and_selects_first_match(launcher):
    launcher.set_query("te")
    assert labels(launcher.visible_rows()) == ["Terminal"]
    assert launcher.selected().label == "Terminal"


def test_filter_is_case_insensitive(launcher):
    launcher.set_query("FIRE")
    assert labels(launcher.visible_rows()) == ["Firefox"]


def test_math_query_prepends_result_row(launcher):
    launcher.set_query("2*3")
    first = launcher.rows[0]
    assert first.is_math
    assert first.icon == CALCULATOR_ICON
    assert first.label == "2*3 = " + evaluate_math_expression("2*3")
    assert launcher.visible_rows() == [first]
    assert launcher.selected() is first


def test_new_query_drops_old_result_row(launcher):
    launcher.set_query("2*3")
    launcher.set_query("fi")
    assert not any(row.is_math for row in launcher.rows)
    assert labels(launcher.visible_rows()) == ["Firefox", "Files"]


def test_clearing_query_restores_everything(launcher):
    launcher.set_query("term")
    launcher.set_query("")
    assert labels(launcher.visible_rows()) == ["Firefox", "Files", "Terminal"]
    assert launcher.selected().label == "Firefox"


def test_no_match_clears_selection(launcher, recorded):
    launcher.set_query("zzz")
    assert launcher.visible_rows() == []
    assert launcher.selected() is None
    assert launcher.activate() is False
    assert launcher.closed is False
    assert recorded["launched"] == []


def test_activate_math_row_copies_result(launcher, recorded):
    launcher.set_query("7-2")
    assert launcher.activate() is True
    assert recorded["copied"] == [evaluate_math_expression("7-2")]
    assert launcher.closed is True


def test_activate_application_launches_exec(launcher, recorded):
    launcher.set_query("files")
    assert launcher.activate() is True
    assert recorded["launched"] == ["nautilus --new-window"]
    assert launcher.closed is True


def test_activate_row_unknown_label(launcher, recorded):
    assert launcher.activate_row(Row("Unknown")) is False
    assert recorded["launched"] == []
    assert launcher.closed is False


def test_duplicate_names_launch_last_command(recorded):
    entries = [
        DesktopEntry("Editor", "a", "first-editor"),
        DesktopEntry("Editor", "b", "second-editor"),
    ]
    launcher = Launcher(entries, copy=recorded["copied"].append,
                        launch=recorded["launched"].append)
    assert launcher.activate() is True
    assert recorded["launched"] == ["second-editor"]


def test_navigation_stays_within_bounds(launcher):
    assert launcher.move_up().label == "Firefox"
    assert launcher.move_down().label == "Files"
    assert launcher.move_down().label == "Terminal"
    assert launcher.move_down().label == "Terminal"
    assert launcher.move_up().label == "Files"


def test_navigation_only_visits_visible_rows(launcher):
    launcher.set_query("fi")
    assert launcher.move_down().label == "Files"
    assert launcher.move_down().label == "Files"


def test_move_down_selects_first_when_none_selected(launcher):
    launcher.set_query("zzz")
    launcher.set_query("")
    launcher._selected = None
    assert launcher.move_down().label == "Firefox"


def test_row_result_property():
    assert Row("1+1 = 2").result == "2"
    assert Row("Firefox").result is None
    assert Row("a = b = c").result == "c"


def _write_desktop(directory, name, app_name):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_text(
        f"[Desktop Entry]\nType=Application\nName={app_name}\n"
        f"Icon=icon\nExec=/bin/true\n"
    )


@pytest.fixture
def xdg_env(tmp_path, monkeypatch):
    home = tmp_path / "home"
    system = tmp_path / "system"
    _write_desktop(home / "applications", "firefox.desktop", "Firefox")
    _write_desktop(system / "applications", "terminal.desktop", "Terminal")
    monkeypatch.setenv("XDG_DATA_HOME", str(home))
    monkeypatch.setenv("XDG_DATA_DIRS", str(system))
    return tmp_path


def test_main_lists_matching_rows(xdg_env, capsys):
    assert main(["--list", "fire"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines == ["> Firefox"]


def test_main_lists_everything_without_query(xdg_env, capsys):
    assert main(["--list"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert sorted(line.strip("> ").strip() for line in lines) == ["Firefox", "Terminal"]


def test_main_prints_calculation(xdg_env, capsys):
    assert main(["1+2"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-1] == evaluate_math_expression("1+2")


def test_main_reports_failure_when_nothing_matches(xdg_env, capsys):
    assert main(["nomatchatall"]) == 1
    assert capsys.readouterr().out == ""