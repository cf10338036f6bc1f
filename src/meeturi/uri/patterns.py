"""Lexical patterns shared by every URI parsing step.

Each pattern is only ever matched at the start of the not yet consumed part of
a string; callers thread the remainder explicitly.
"""

import re

# Source strings are kept separate so that larger patterns (legacy hier-part
# rules) can embed them.
PROTOCOL_PATTERN = r"([a-z][a-z0-9.+-]*:)"
AUTHORITY_PATTERN = r"(//[^/?#]+)"
PATH_PATTERN = r"([^?#]*)"

PROTOCOL_RE = re.compile(PROTOCOL_PATTERN, re.IGNORECASE)
AUTHORITY_RE = re.compile(AUTHORITY_PATTERN, re.IGNORECASE)
PATH_RE = re.compile(PATH_PATTERN, re.IGNORECASE)

# A complete scheme token such as "https:"
SCHEME_RE = re.compile(r"^[a-z][a-z0-9.+-]*:$")


def consume(pattern: re.Pattern, remaining: str) -> tuple[str | None, str]:
    """Match ``pattern`` at the start of ``remaining``.

    Returns the matched text (or None) and the rest of the string.
    """
    match = pattern.match(remaining)
    if not match:
        return None, remaining
    return match.group(1), remaining[match.end():]
