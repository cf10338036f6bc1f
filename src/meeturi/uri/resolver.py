"""Resolution of URIs which (supposedly) reference a meeting room."""

from __future__ import annotations

import unicodedata
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote, unquote

from meeturi.common.config_schema import MeetUriConfig
from meeturi.uri.fixers import fix_uri_string_hier_part, fix_uri_string_scheme
from meeturi.uri.params import URI_COMPONENT_SAFE
from meeturi.uri.parser import ParsedURI, parse_standard_uri_string


@dataclass(frozen=True)
class MeetingURI(ParsedURI):
    """A ParsedURI plus the deployment context root and the room it names."""
    context_root: str = '/'
    room: str | None = None


def get_location_context_root(location: Any) -> str:
    """Return the (web application) context root of ``location``.

    ``location`` is anything with a ``pathname``, as an attribute or a key.
    """
    if isinstance(location, Mapping):
        pathname = location['pathname']
    else:
        pathname = location.pathname

    context_root_end = pathname.rfind('/')
    if context_root_end == -1:
        return '/'
    return pathname[:context_root_end + 1]


def resolve_meeting_uri(uri: Any, config: MeetUriConfig | None = None) -> MeetingURI | None:
    """Parse a URI referencing a meeting.

    Anything but a string means no URI was supplied and yields None; an empty
    string is a (degenerate) URI.
    """
    if not isinstance(uri, str):
        return None

    parsed = parse_standard_uri_string(
        fix_uri_string_hier_part(fix_uri_string_scheme(uri, config), config))

    # The room is the last component of pathname.
    pathname = parsed.pathname
    room = pathname[pathname.rfind('/') + 1:] or None

    return MeetingURI(
        **parsed.to_dict(),
        context_root=get_location_context_root(parsed),
        room=room,
    )


def get_backend_safe_room_name(room: str | None) -> str | None:
    """Normalize a room name the way conferencing backends store it.

    The name is decoded if it was percent-encoded, NFKC normalized, lowercased
    and encoded again. Escapes come out lowercase too.
    """
    if not room:
        return room

    try:
        room = unquote(room, errors='strict')
    except UnicodeDecodeError:
        # not percent-encoded UTF-8, keep the name as given
        pass
    room = unicodedata.normalize('NFKC', room).lower()

    return quote(room, safe=URI_COMPONENT_SAFE).lower()
