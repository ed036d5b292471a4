import pytest

from deskrun.core.errors import ExecutableNotFound, MenuError
from deskrun.core.menu import build_menu_command, select


def test_first_line_is_selected(make_exe):
    menu = make_exe("menu", "#!/bin/sh\nhead -n 1\n")
    assert select(["Zed", "Alpha"], menu) == "Zed"


def test_all_names_are_sent_one_per_line(make_exe, tmp_path):
    seen = tmp_path / "seen.txt"
    menu = make_exe("menu", f"#!/bin/sh\ncat > {seen}\necho picked\n")
    assert select(["A", "B (1)", "C"], menu) == "picked"
    assert seen.read_text(encoding="utf-8") == "A\nB (1)\nC\n"


def test_extra_arguments_are_forwarded(make_exe):
    menu = make_exe("menu", '#!/bin/sh\necho "$1|$2|$3"\n')
    assert select(["x"], f"{menu} -p", ["-l", "10"]) == "-p|-l|10"


def test_cancelled_menu_returns_none(make_exe):
    assert select(["a"], make_exe("cancel", "#!/bin/sh\nexit 1\n")) is None
    assert select(["a"], make_exe("empty", "#!/bin/sh\nexit 0\n")) is None


def test_unresolvable_menu_program(bin_dir, monkeypatch):
    monkeypatch.setenv("PATH", str(bin_dir))
    with pytest.raises(ExecutableNotFound):
        select(["a"], "dmenu -i")


def test_unstartable_menu_program(tmp_path):
    not_executable = tmp_path / "menu.txt"
    not_executable.write_text("", encoding="utf-8")
    with pytest.raises(MenuError):
        select(["a"], str(not_executable))


def test_build_menu_command(make_exe, bin_dir, monkeypatch):
    dmenu = make_exe("dmenu")
    monkeypatch.setenv("PATH", str(bin_dir))
    assert build_menu_command("dmenu -i -p Run:", ["-fn", "mono"]) == [dmenu, "-i", "-p", "Run:", "-fn", "mono"]
