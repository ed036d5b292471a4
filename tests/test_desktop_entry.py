import os
import pytest

from deskrun.core.errors import FileReadError, InvalidDesktopEntry
from deskrun.core.parsers.desktop_entry import DesktopEntryParser, extract_exec, read_desktop_section


def test_parse_basic_entry(roots, write_desktop):
    user, system = roots
    path = write_desktop(system, "firefox.desktop", Name="Firefox", Exec="firefox %u")
    entry = DesktopEntryParser([str(user), str(system)]).parse(path)
    assert entry.name == "Firefox"
    assert entry.command_template == "firefox %u"
    assert entry.id == "firefox"
    assert entry.source_dir == os.path.normpath(str(system))
    assert entry.working_dir is None
    assert entry.terminal is False
    assert entry.collision_index == 0


def test_id_uses_path_relative_to_root(roots, write_desktop):
    _, system = roots
    path = write_desktop(system, "kde/org.kde.dolphin.desktop", Name="Dolphin", Exec="dolphin")
    entry = DesktopEntryParser([str(system)]).parse(path)
    assert entry.id == "kde-org.kde.dolphin"


def test_id_prefers_longest_root(roots, write_desktop):
    _, system = roots
    nested = system / "kde"
    path = write_desktop(system, "kde/konsole.desktop", Name="Konsole", Exec="konsole")
    entry = DesktopEntryParser([str(system), str(nested)]).parse(path)
    assert entry.id == "konsole"
    assert entry.source_dir == os.path.normpath(str(nested))


def test_id_strips_extension_case_insensitively(roots, write_desktop):
    _, system = roots
    path = write_desktop(system, "Shout.DESKTOP", Name="Shout", Exec="shout")
    assert DesktopEntryParser([str(system)]).parse(path).id == "Shout"


@pytest.mark.parametrize("keys", [
    {"Hidden": "true"},
    {"NoDisplay": "true"},
    {"Type": "Link"},
    {"Type": None},
])
def test_invisible_or_non_application_entries_are_skipped(roots, write_desktop, keys):
    _, system = roots
    fields = {"Name": "Thing", "Exec": "thing"}
    fields.update(keys)
    path = write_desktop(system, "thing.desktop", **fields)
    assert DesktopEntryParser([str(system)]).parse(path) is None


def test_hidden_entry_skipped_even_with_everything_else_valid(roots, write_desktop):
    _, system = roots
    path = write_desktop(system, "h.desktop", Name="H", Exec="h", Terminal="true", Hidden="true")
    assert DesktopEntryParser([str(system)]).parse(path) is None


def test_file_without_desktop_entry_group_is_skipped(roots, write_desktop):
    _, system = roots
    path = write_desktop(system, "other.desktop", group="Something Else", Name="X", Exec="x")
    assert DesktopEntryParser([str(system)]).parse(path) is None


def test_missing_name_is_skipped(roots, write_desktop):
    _, system = roots
    path = write_desktop(system, "noname.desktop", Exec="x")
    assert DesktopEntryParser([str(system)]).parse(path) is None


def test_missing_exec_is_an_error(roots, write_desktop):
    _, system = roots
    path = write_desktop(system, "noexec.desktop", Name="No Exec")
    with pytest.raises(InvalidDesktopEntry) as exc:
        DesktopEntryParser([str(system)]).parse(path)
    assert exc.value.path == path


def test_localized_name_preferred(roots, write_desktop):
    _, system = roots
    path = write_desktop(system, "files.desktop", **{"Name": "Files", "Name[de]": "Dateien", "Exec": "nautilus"})
    assert DesktopEntryParser([str(system)], locale="de").parse(path).name == "Dateien"
    assert DesktopEntryParser([str(system)], locale="fr").parse(path).name == "Files"
    assert DesktopEntryParser([str(system)]).parse(path).name == "Files"


def test_path_and_terminal_keys(roots, write_desktop):
    _, system = roots
    path = write_desktop(system, "htop.desktop", Name="htop", Exec="htop", Path="/srv/work", Terminal="true")
    entry = DesktopEntryParser([str(system)]).parse(path)
    assert entry.working_dir == "/srv/work"
    assert entry.terminal is True


def test_only_the_desktop_entry_group_is_read(roots, write_desktop):
    _, system = roots
    action = "\n[Desktop Action new-window]\nName=New Window\nExec=browser --new-window\nNoDisplay=true\n"
    path = write_desktop(system, "browser.desktop", extra=action, Name="Browser", Exec="browser")
    entry = DesktopEntryParser([str(system)]).parse(path)
    assert entry.name == "Browser"
    assert entry.command_template == "browser"


def test_entry_group_after_another_group(roots, tmp_path):
    _, system = roots
    path = system / "late.desktop"
    path.write_text(
        "[Desktop Action x]\nExec=wrong\n\n[Desktop Entry]\nType=Application\nName=Late\nExec=right\n",
        encoding="utf-8",
    )
    section = read_desktop_section(str(path))
    assert section.startswith("[Desktop Entry]")
    assert DesktopEntryParser([str(system)]).parse(str(path)).command_template == "right"


def test_crlf_line_endings(roots):
    _, system = roots
    path = system / "dos.desktop"
    path.write_bytes(b"[Desktop Entry]\r\nType=Application\r\nName=Dos\r\nExec=dos --run\r\n")
    entry = DesktopEntryParser([str(system)]).parse(str(path))
    assert entry.name == "Dos"
    assert entry.command_template == "dos --run"


def test_unreadable_file_raises_file_read_error(roots):
    _, system = roots
    missing = str(system / "gone.desktop")
    with pytest.raises(FileReadError) as exc:
        DesktopEntryParser([str(system)]).parse(missing)
    assert exc.value.path == missing


def test_extract_exec(roots, write_desktop):
    _, system = roots
    path = write_desktop(system, "x.desktop", Name="X", Exec="x --y", Path="/tmp", Terminal="true")
    assert extract_exec(path) == ("x --y", "/tmp", True)


def test_extract_exec_requires_exec_key(roots, write_desktop):
    _, system = roots
    path = write_desktop(system, "x.desktop", Name="X")
    with pytest.raises(InvalidDesktopEntry):
        extract_exec(path)
