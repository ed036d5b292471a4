"""
Exec value handling: field-code expansion, tokenization and executable lookup.

The tokenizer is deliberately not POSIX ``shlex``. A double quote only opens
or closes a whitespace-preserving region when it touches a token boundary
(start/end of the string or a neighbouring space). A quote in the middle of a
word toggles a separate "literal quote" mode instead: the quote is dropped,
whitespace still splits, and the reserved-character check still applies.
Exec lines in the wild such as ``--opt="value"`` rely on this.
"""
import re
import shutil
from typing import List, Optional, Sequence

from deskrun.core.constants import RESERVED_CHARS, STRIPPED_FIELD_CODES
from deskrun.core.errors import EmptyCommand, MalformedCommand, ExecutableNotFound

# %% must win over the single-letter codes at the same position, so it is
# listed first. Flatpak exports wrap forwarded arguments in @@u ... @@.
FIELD_CODE_RE = re.compile(
    r"(?P<pre> *)"
    r"(?P<code>@@u? %[fFuU] @@|%%|%[" + STRIPPED_FIELD_CODES + r"]|%k)"
    r"(?P<post> *)"
)


def escape_argument(value: str) -> str:
    """Backslash-escape every reserved character so ``value`` tokenizes to one argument."""
    return "".join("\\" + ch if ch in RESERVED_CHARS else ch for ch in value)


def expand_field_codes(exec_value: str, desktop_file: str = "") -> str:
    """Substitute the field codes deskrun understands in an Exec value.

    ``%%`` becomes ``%``, ``%k`` becomes the (escaped) desktop file path and
    ``%f %F %u %U %i`` are removed together with the spaces around them.
    Unknown codes are left for the tokenizer to treat as plain text.
    """
    def _replace(match: re.Match) -> str:
        pre, code, post = match.group("pre"), match.group("code"), match.group("post")
        if code == "%%":
            return f"{pre}%{post}"
        if code == "%k":
            return f"{pre}{escape_argument(desktop_file)}{post}"
        # A removed code must not join the words on either side of it.
        return " " if pre or post else ""

    return FIELD_CODE_RE.sub(_replace, exec_value).strip()


def tokenize(command: str) -> List[str]:
    """Split a command line into an argument vector.

    Raises EmptyCommand for empty input and MalformedCommand for a reserved
    character that is neither quoted nor escaped.
    """
    if not command or not command.strip():
        raise EmptyCommand()

    tokens: List[str] = []
    buf: List[str] = []
    started = False
    quoted = False
    literal_quotes = False
    escaped = False
    last = len(command) - 1

    for i, ch in enumerate(command):
        if escaped:
            buf.append(ch)
            started = True
            escaped = False
            continue

        if ch == "\\":
            if i == last:
                raise MalformedCommand(ch, i, command)
            escaped = True
            continue

        if ch == '"':
            at_boundary = (
                i == 0
                or i == last
                or command[i - 1] == " "
                or command[i + 1] == " "
            )
            if at_boundary and not literal_quotes:
                quoted = not quoted
                started = True
            else:
                literal_quotes = not literal_quotes
            continue

        if ch == " " and not quoted:
            if started:
                tokens.append("".join(buf))
                buf = []
                started = False
            continue

        if not quoted and ch in RESERVED_CHARS:
            raise MalformedCommand(ch, i, command)

        buf.append(ch)
        started = True

    # Final flush; an unterminated quoted region is kept as typed.
    if started:
        tokens.append("".join(buf))

    if not tokens:
        raise EmptyCommand()
    return tokens


def resolve_executable(argv: Sequence[str], search_path: Optional[str] = None) -> List[str]:
    """Replace argv[0] with an absolute executable path.

    Names that already contain a separator are used verbatim.
    """
    args = list(argv)
    if not args:
        raise EmptyCommand()
    head = args[0]
    if "/" in head:
        return args
    binary = shutil.which(head, path=search_path) if head else None
    if not binary:
        raise ExecutableNotFound(head)
    args[0] = binary
    return args


def parse_command(command: str, search_path: Optional[str] = None) -> List[str]:
    return resolve_executable(tokenize(command), search_path=search_path)
