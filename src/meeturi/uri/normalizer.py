"""
Folding of URL-like option objects into one canonical URI string.

The options resemble those accepted by a conference embedding API:

    {
        'url': 'https://meet.example.com/tenant/',
        'domain': 'meet.example.com',     # or host / hostname
        'roomName': 'standup',            # or room
        'jwt': '<token>',
        'configOverwrite': {'p2p': {'enabled': False}},
        'interfaceConfigOverwrite': {'SHOW_BRAND': False},
    }

Options may be a mapping or any object exposing the same attributes. The merge
runs in a fixed order and every step returns a new ParsedURI, so the steps can
be applied (and tested) one at a time:

    url_object_to_string == parse url -> merge_protocol -> merge_authority
                            -> merge_room -> merge_jwt -> merge_overrides
                            -> serialize
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import replace
from typing import Any
from urllib.parse import ParseResult, SplitResult

from meeturi.common.config_schema import DEFAULT_CONFIG, MeetUriConfig
from meeturi.uri.fixers import fix_uri_string_scheme
from meeturi.uri.params import object_to_url_params
from meeturi.uri.parser import ParsedURI, parse_standard_uri_string


def _option(options: Any, name: str) -> Any:
    if isinstance(options, Mapping):
        return options.get(name)
    return getattr(options, name, None)


def _first_truthy(options: Any, *names: str) -> Any:
    for name in names:
        value = _option(options, name)
        if value:
            return value
    return None


def _first_defined(options: Any, *names: str) -> Any:
    for name in names:
        value = _option(options, name)
        if value is not None:
            return value
    return None


def merge_protocol(url: ParsedURI, options: Any) -> ParsedURI:
    """Take ``protocol``/``scheme`` from the options when the URL has none."""
    if url.protocol:
        return url

    protocol = _first_truthy(options, 'protocol', 'scheme')
    if not protocol:
        return url

    # do not make a fuss about the final ':'
    protocol = str(protocol)
    if not protocol.endswith(':'):
        protocol += ':'
    return replace(url, protocol=protocol)


def merge_authority(url: ParsedURI, options: Any, config: MeetUriConfig | None = None) -> ParsedURI:
    """Take the authority from ``domain``/``host``/``hostname`` when the URL has none.

    The domain may carry a path which denotes the tenant; it becomes the context
    root unless the URL already has a pathname of its own.
    """
    if url.host:
        return url

    domain = _first_truthy(options, 'domain', 'host', 'hostname')
    if not domain:
        return url

    config = config or DEFAULT_CONFIG

    # The placeholder makes sure the domain is not taken for a pathname only.
    synthetic = parse_standard_uri_string(
        fix_uri_string_scheme(f'{config.domain_placeholder_scheme}//{domain}', config))

    changes: dict[str, Any] = {}
    if synthetic.host:
        changes.update(host=synthetic.host, hostname=synthetic.hostname, port=synthetic.port)
        if not url.protocol:
            changes['protocol'] = synthetic.protocol

    if url.pathname == '/' and synthetic.pathname != '/':
        changes['pathname'] = synthetic.pathname

    return replace(url, **changes) if changes else url


def merge_room(url: ParsedURI, options: Any, base_pathname: str | None = None) -> ParsedURI:
    """Append ``roomName``/``room`` to the pathname unless it already names the room.

    ``base_pathname`` is the pathname of the URL as given in the options,
    before a tenant context root was adopted; it decides whether the room is
    already present.
    """
    room = _first_truthy(options, 'roomName', 'room')
    if not room:
        return url

    room = str(room)
    if base_pathname is None:
        base_pathname = url.pathname

    if base_pathname.endswith('/') or not base_pathname.endswith(f'/{room}'):
        pathname = url.pathname
        if not pathname.endswith('/'):
            pathname += '/'
        return replace(url, pathname=pathname + room)

    return url


def merge_jwt(url: ParsedURI, options: Any) -> ParsedURI:
    """Add ``jwt`` to the query unless a jwt parameter is already there."""
    jwt = _option(options, 'jwt')
    if not jwt:
        return url

    search = url.search
    if '?jwt=' in search or '&jwt=' in search:
        return url

    if not search.startswith('?'):
        search = f'?{search}'
    if len(search) != 1:
        search += '&'
    return replace(url, search=f'{search}jwt={jwt}')


def merge_overrides(url: ParsedURI, options: Any, config: MeetUriConfig | None = None) -> ParsedURI:
    """Encode the override groups (config, interfaceConfig) into the hash."""
    config = config or DEFAULT_CONFIG
    url_hash = url.hash

    for name in config.override_groups:
        params = object_to_url_params(
            _first_defined(options, f'{name}Overwrite', name, f'{name}Override'),
            group=name,
        )
        if not params:
            continue

        params_string = f'{name}.' + f'&{name}.'.join(params)
        if url_hash:
            params_string = f'&{params_string}'
        else:
            url_hash = '#'
        url_hash += params_string

    return replace(url, hash=url_hash) if url_hash != url.hash else url


def url_object_to_string(options: Any, config: MeetUriConfig | None = None) -> str | None:
    """Return the canonical URI string described by a URL-like options object."""
    config = config or DEFAULT_CONFIG

    raw_url = _option(options, 'url')
    url = parse_standard_uri_string(fix_uri_string_scheme(str(raw_url) if raw_url else '', config))
    base_pathname = url.pathname

    url = merge_protocol(url, options)
    url = merge_authority(url, options, config)
    url = merge_room(url, options, base_pathname)
    url = merge_jwt(url, options)
    url = merge_overrides(url, options, config)

    return url.href or None


def to_canonical_string(obj: Any, config: MeetUriConfig | None = None) -> str | None:
    """Return a string representation of something which is supposed to be a URL.

    Strings are returned as they are and URL objects as their href; other
    objects are treated as URL-like options. None and other primitives yield
    None.
    """
    if obj is None:
        return None
    if isinstance(obj, str):
        return str(obj)
    if isinstance(obj, (bool, int, float, complex, bytes, bytearray)):
        return None

    href = getattr(obj, 'href', None)
    if isinstance(href, str):
        return href
    if isinstance(obj, (ParseResult, SplitResult)):
        return obj.geturl()

    return url_object_to_string(obj, config)
