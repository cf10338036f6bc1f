"""URL parameters: override groups in the fragment, and query parameters."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import replace
from typing import Any
from urllib.parse import quote, unquote

from w3lib.url import add_or_replace_parameter, url_query_parameter

from meeturi.common.config_schema import DEFAULT_CONFIG, MeetUriConfig
from meeturi.common.log_events import LogEvent
from meeturi.common.logging import get_logger
from meeturi.uri.fixers import fix_uri_string_scheme
from meeturi.uri.parser import ParsedURI, parse_standard_uri_string

logger = get_logger(__name__)

# Characters encodeURIComponent leaves alone besides letters and digits
URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(value: str) -> str:
    return quote(value, safe=URI_COMPONENT_SAFE)


def _json_compatible(value: Any) -> Any:
    # JSON has no NaN or Infinity, they are written as null
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, Mapping):
        return {k: _json_compatible(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_compatible(v) for v in value]
    return value


def object_to_url_params(obj: Any, group: str | None = None) -> list[str]:
    """Turn a mapping into ``key=<percent-encoded JSON>`` URL parameter strings.

    Non-finite floats are encoded as ``null``. Values which cannot be
    serialized at all (arbitrary objects, cycles, nesting too deep to walk)
    are skipped with a warning; anything but a mapping yields no parameters.
    """
    if not isinstance(obj, Mapping):
        return []

    params = []
    for key, value in obj.items():
        try:
            encoded = json.dumps(
                _json_compatible(value),
                separators=(',', ':'),
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError, RecursionError) as e:
            logger.log_event(
                LogEvent.OVERRIDE_ENCODE_FAILED,
                message=f"Error encoding {key}: {e}",
                group=group,
                key=str(key),
                error=str(e),
            )
            continue
        params.append(f"{key}={encode_uri_component(encoded)}")

    return params


def parse_url_params(
    url: str | ParsedURI,
    dont_parse: bool = False,
    source: str = 'hash',
    config: MeetUriConfig | None = None,
) -> dict[str, Any]:
    """Parse the parameters in the hash (or search) of ``url``.

    Values are percent-decoded and JSON-parsed unless ``dont_parse``; a key
    without ``=`` maps to None. A fragment that is a single route such as
    ``#/settings`` carries no parameters.
    """
    if isinstance(url, str):
        url = parse_standard_uri_string(fix_uri_string_scheme(url, config))

    param_str = url.search if source == 'search' else url.hash
    params: dict[str, Any] = {}
    param_parts = param_str[1:].split('&') if param_str else []

    # hash routers
    if source == 'hash' and len(param_parts) == 1 and param_parts[0].startswith('/'):
        return params

    for part in param_parts:
        key, sep, value = part.partition('=')
        if not key:
            continue
        if not sep:
            params[key] = None
            continue
        if dont_parse:
            params[key] = value
            continue

        try:
            decoded = unquote(value, errors='strict').replace('\\&', '&', 1)
            params[key] = None if decoded == 'undefined' else json.loads(decoded)
        except (ValueError, RecursionError) as e:
            logger.log_event(
                LogEvent.PARAM_DECODE_FAILED,
                message=f"Failed to parse URL parameter value: {value}",
                key=key,
                error=str(e),
            )

    return params


def extract_override_groups(
    url: str | ParsedURI,
    config: MeetUriConfig | None = None,
) -> dict[str, dict[str, Any]]:
    """Collect ``group.key=value`` hash parameters into one mapping per override group."""
    config = config or DEFAULT_CONFIG
    groups: dict[str, dict[str, Any]] = {}

    for key, value in parse_url_params(url, config=config).items():
        name, dot, prop = key.partition('.')
        if dot and prop and name in config.override_groups:
            groups.setdefault(name, {})[prop] = value

    return groups


def get_url_param(url: str, name: str, default: str | None = None) -> str | None:
    return url_query_parameter(url, name, default)


def set_url_param(url: str, name: str, value: Any) -> str:
    """Add query parameter ``name`` to ``url`` or replace its current value."""
    return add_or_replace_parameter(url, name, str(value))


def get_url_without_params(url: str) -> str:
    """Drop search and hash from ``url`` when either of them carries anything."""
    parsed = parse_standard_uri_string(url)
    if len(parsed.search) > 1 or len(parsed.hash) > 1:
        return replace(parsed, search='', hash='').href
    return url


def get_url_without_params_normalized(url: str | None) -> str:
    if not url:
        return ''
    return get_url_without_params(url).lower()
