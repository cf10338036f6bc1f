"""
Standard URI parsing and serialization.

The parser follows the component split of RFC 3986 without enforcing it: the
input is stripped left to right (protocol, authority, pathname, search, hash)
and whatever does not match a step is simply left for the next one. It never
raises for malformed input.

Known simplifications:
    - userinfo is dropped and never serialized back
    - host and port are split at the last ':' so bracketed IPv6 literals
      are not understood
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from meeturi.uri.patterns import AUTHORITY_RE, PATH_RE, PROTOCOL_RE, consume


@dataclass(frozen=True)
class ParsedURI:
    """The well-known Location/URL properties of a parsed URI."""
    protocol: str | None = None
    host: str | None = None
    hostname: str | None = None
    port: str | None = None
    pathname: str = '/'
    search: str = ''
    hash: str = ''

    @property
    def href(self) -> str:
        return standard_uri_to_string(self)

    def __str__(self) -> str:
        return self.href

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def parse_standard_uri_string(string: str) -> ParsedURI:
    """Parse ``string`` into a ParsedURI.

    >>> parse_standard_uri_string('https://user@meet.example.com:8443/room?a=1#b')
    ParsedURI(protocol='https:', host='meet.example.com:8443', hostname='meet.example.com', port='8443', pathname='/room', search='?a=1', hash='#b')
    """
    fields: dict[str, Any] = {}
    remaining = string

    # protocol
    protocol, remaining = consume(PROTOCOL_RE, remaining)
    if protocol is not None:
        fields['protocol'] = protocol.lower()

    # authority
    authority, remaining = consume(AUTHORITY_RE, remaining)
    if authority is not None:
        authority = authority[2:]

        userinfo_end = authority.find('@')
        if userinfo_end != -1:
            authority = authority[userinfo_end + 1:]

        fields['host'] = authority

        port_begin = authority.rfind(':')
        if port_begin != -1:
            fields['port'] = authority[port_begin + 1:]
            authority = authority[:port_begin]

        fields['hostname'] = authority

    # pathname
    pathname, remaining = consume(PATH_RE, remaining)
    if pathname:
        if not pathname.startswith('/'):
            pathname = f'/{pathname}'
    else:
        pathname = '/'
    fields['pathname'] = pathname

    # search
    if remaining.startswith('?'):
        hash_begin = remaining.find('#', 1)
        if hash_begin == -1:
            hash_begin = len(remaining)
        fields['search'] = remaining[:hash_begin]
        remaining = remaining[hash_begin:]

    # hash
    if remaining.startswith('#'):
        fields['hash'] = remaining

    return ParsedURI(**fields)


def standard_uri_to_string(uri: ParsedURI) -> str:
    """Serialize a ParsedURI (or any record with the same fields) back to a string."""
    parts = []

    if uri.protocol:
        parts.append(uri.protocol)
    if uri.host:
        parts.append(f'//{uri.host}')
    parts.append(uri.pathname or '/')
    if uri.search:
        parts.append(uri.search)
    if uri.hash:
        parts.append(uri.hash)

    return ''.join(parts)
