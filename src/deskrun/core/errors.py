"""Error taxonomy shared by the tokenizer, the catalog builder and the runner."""
from typing import Optional


class DeskrunError(RuntimeError):
    code = "deskrun_error"

    def __init__(self, message: str, hint: str = ""):
        super().__init__(message)
        self.message = message
        self.hint = hint


class ParseError(DeskrunError):
    """Raised by the Exec tokenizer."""
    code = "parse_error"


class EmptyCommand(ParseError):
    code = "empty_command"

    def __init__(self):
        super().__init__("Command is empty")


class MalformedCommand(ParseError):
    code = "malformed_command"

    def __init__(self, char: str, offset: int, command: Optional[str] = None):
        super().__init__(
            f"Unescaped {char!r} at position {offset} in command",
            hint="quote the argument or escape the character with a backslash",
        )
        self.char = char
        self.offset = offset
        self.command = command


class ExecutableNotFound(DeskrunError):
    code = "executable_not_found"

    def __init__(self, name: str):
        super().__init__(f"Executable not found in PATH: {name}")
        self.name = name


class InvalidDesktopEntry(DeskrunError):
    code = "invalid_desktop_entry"

    def __init__(self, path: str, reason: str = "has no Exec key"):
        super().__init__(f"{path} {reason}")
        self.path = path


class InvalidAlias(DeskrunError):
    code = "invalid_alias"

    def __init__(self, name: str, command: str = ""):
        super().__init__(
            f"Alias {name!r} does not resolve to a catalog entry or desktop file",
            hint=f"check aliases.{name}.command ({command!r})" if command else "",
        )
        self.name = name


class FileReadError(DeskrunError):
    code = "file_read_error"

    def __init__(self, path: str, reason: str = ""):
        msg = f"Failed to read {path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.path = path


class LaunchFailed(DeskrunError):
    code = "launch_failed"

    def __init__(self, target: str, reason: str = ""):
        msg = f"Failed to launch {target}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(msg)
        self.target = target


class MenuError(DeskrunError):
    code = "menu_error"
