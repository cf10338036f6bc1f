"""Pre-parse rewrites that turn non-conforming meeting URIs into standard ones."""

from meeturi.common.config_schema import DEFAULT_CONFIG, MeetUriConfig
from meeturi.uri.patterns import PROTOCOL_RE, consume


def fix_uri_string_hier_part(uri: str, config: MeetUriConfig | None = None) -> str:
    """Rewrite URIs of known legacy deployments to their canonical host.

    Only the protocol and whatever follows the matched legacy prefix (the room)
    are kept, e.g. ``https://hipchat.com/video/call/abc`` becomes
    ``https://enso.hipchat.me/abc``. The first matching rule wins.
    """
    config = config or DEFAULT_CONFIG

    for rule in config.hier_part_rules:
        match = rule.pattern().match(uri)
        if match:
            return f"{match.group(1)}//{rule.canonical_host}/{uri[match.end():]}"

    return uri


def fix_uri_string_scheme(uri: str, config: MeetUriConfig | None = None) -> str:
    """Collapse the leading scheme(s) of ``uri`` into a well-known one.

    App-specific schemes may precede or replace http(s), e.g.
    ``app-scheme:https://host/room``. Every consecutive leading scheme is
    consumed and only the last one is considered; anything not well-known
    becomes the fallback scheme. Without an authority the remainder is a room
    name only and is returned without a scheme.
    """
    config = config or DEFAULT_CONFIG

    protocol = None
    remaining = uri
    while True:
        matched, remaining = consume(PROTOCOL_RE, remaining)
        if matched is None:
            break
        protocol = matched

    if protocol is None:
        return uri

    protocol = protocol.lower()
    if protocol not in config.well_known_schemes:
        protocol = config.fallback_scheme

    if remaining.startswith('//'):
        return protocol + remaining
    return remaining
