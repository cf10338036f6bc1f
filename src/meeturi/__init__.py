"""Meeting URI toolkit.

Parses, normalizes and serializes URIs naming a video-conferencing room,
including legacy deployment shapes and URL-like option objects.
"""

from meeturi.common.config import ConfigValidationError, load_config
from meeturi.common.config_schema import DEFAULT_CONFIG, MeetUriConfig
from meeturi.common.logging import get_logger, setup_logging
from meeturi.uri.fixers import fix_uri_string_hier_part, fix_uri_string_scheme
from meeturi.uri.normalizer import to_canonical_string, url_object_to_string
from meeturi.uri.params import (
    extract_override_groups,
    get_url_param,
    get_url_without_params,
    get_url_without_params_normalized,
    object_to_url_params,
    parse_url_params,
    set_url_param,
)
from meeturi.uri.parser import ParsedURI, parse_standard_uri_string, standard_uri_to_string
from meeturi.uri.resolver import (
    MeetingURI,
    get_backend_safe_room_name,
    get_location_context_root,
    resolve_meeting_uri,
)

__version__ = "0.1.0"
__all__ = [
    "ConfigValidationError",
    "DEFAULT_CONFIG",
    "MeetUriConfig",
    "MeetingURI",
    "ParsedURI",
    "extract_override_groups",
    "fix_uri_string_hier_part",
    "fix_uri_string_scheme",
    "get_backend_safe_room_name",
    "get_location_context_root",
    "get_logger",
    "get_url_param",
    "get_url_without_params",
    "get_url_without_params_normalized",
    "load_config",
    "object_to_url_params",
    "parse_standard_uri_string",
    "parse_url_params",
    "resolve_meeting_uri",
    "set_url_param",
    "setup_logging",
    "standard_uri_to_string",
    "to_canonical_string",
    "url_object_to_string",
]
