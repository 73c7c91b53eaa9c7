"""Java ``.properties`` file reader.

Android projects keep machine-local settings in ``local.properties`` and the
NDK records its version in ``source.properties``. Both use the Java properties
syntax: ``key=value``, ``key: value`` or ``key value`` lines, ``#``/``!``
comments and backslash line continuations.
"""

import logging
from pathlib import Path
from typing import Dict

logger = logging.getLogger(__name__)

_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}


def parse_properties(text: str) -> Dict[str, str]:
    """
    Parse properties text into a dictionary.

    Later keys override earlier ones.

    Args:
        text: Contents of a properties file

    Returns:
        Mapping of property names to values

    Example:
        >>> parse_properties("Pkg.Revision = 25.2.9519653\\n")
        {'Pkg.Revision': '25.2.9519653'}
    """
    properties: Dict[str, str] = {}

    for line in _logical_lines(text):
        key, value = _split_entry(line)
        properties[_unescape(key)] = _unescape(value)

    return properties


def load_properties(path: Path) -> Dict[str, str]:
    """
    Load a properties file.

    Args:
        path: Path to the file

    Returns:
        Parsed properties (empty if the file does not exist)
    """
    if not path.exists():
        logger.debug(f"Properties file not found (optional): {path}")
        return {}

    logger.debug(f"Loading properties from {path}")
    return parse_properties(path.read_text(encoding="utf-8"))


def _logical_lines(text: str):
    pending = ""
    for raw in text.splitlines():
        line = raw.lstrip()
        if not pending and (not line or line[0] in "#!"):
            continue

        # An odd number of trailing backslashes continues the line.
        trailing = len(line) - len(line.rstrip("\\"))
        if trailing % 2 == 1:
            pending += line[:-1]
            continue

        yield pending + line
        pending = ""

    if pending:
        yield pending


def _split_entry(line: str):
    index = 0
    length = len(line)
    while index < length:
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in "=: \t\f":
            break
        index += 1

    key = line[:index]
    rest = line[index:].lstrip(" \t\f")
    if rest[:1] in ("=", ":"):
        rest = rest[1:].lstrip(" \t\f")
    return key, rest


def _unescape(value: str) -> str:
    if "\\" not in value:
        return value

    out = []
    chars = iter(value)
    for char in chars:
        if char != "\\":
            out.append(char)
            continue
        nxt = next(chars, "")
        if nxt == "u":
            digits = "".join(next(chars, "") for _ in range(4))
            try:
                out.append(chr(int(digits, 16)))
            except ValueError:
                out.append("u" + digits)
        else:
            out.append(_ESCAPES.get(nxt, nxt))
    return "".join(out)
