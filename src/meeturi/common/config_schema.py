"""
Pydantic-based configuration schema with strict validation.
Catches type errors, malformed schemes and typos (unknown keys).
"""

import re
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from meeturi.uri.patterns import PROTOCOL_PATTERN, SCHEME_RE


def _normalize_scheme(value: str) -> str:
    scheme = value.lower()
    if not scheme.endswith(':'):
        scheme += ':'
    if not SCHEME_RE.match(scheme):
        raise ValueError(f"'{value}' is not a valid URI scheme")
    return scheme


class HierPartRuleConfig(BaseModel):
    """One legacy deployment whose URLs are rewritten before parsing"""
    model_config = ConfigDict(extra='forbid', frozen=True)

    host: str = Field(
        min_length=1,
        description="Legacy host, matched case-insensitively"
    )
    path_prefixes: Tuple[str, ...] = Field(
        min_length=1,
        description="Fixed path prefixes preceding the room name"
    )
    canonical_host: str = Field(
        min_length=1,
        description="Host the legacy URL is rewritten to"
    )

    @field_validator('path_prefixes')
    @classmethod
    def strip_slashes(cls, v):
        prefixes = tuple(p.strip('/') for p in v)
        if not all(prefixes):
            raise ValueError("path prefixes must not be empty")
        return prefixes

    def pattern(self) -> re.Pattern:
        """Compile the rule: protocol, then //host/, then one of the prefixes and /"""
        prefixes = '|'.join(re.escape(p) for p in self.path_prefixes)
        return re.compile(
            f"^{PROTOCOL_PATTERN}//{re.escape(self.host)}/(?:{prefixes})/",
            re.IGNORECASE
        )


DEFAULT_HIER_PART_RULES = (
    HierPartRuleConfig(
        host='hipchat.com',
        path_prefixes=('video/call',),
        canonical_host='enso.hipchat.me'
    ),
    HierPartRuleConfig(
        host='enso.me',
        path_prefixes=('call', 'meeting'),
        canonical_host='enso.hipchat.me'
    ),
)


class LoggingConfig(BaseModel):
    """Logging configuration, field names match setup_logging()"""
    model_config = ConfigDict(extra='forbid', frozen=True)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root log level"
    )
    log_format: Literal["human", "json"] = Field(
        default="human",
        description="Record format for every handler"
    )
    log_file: Optional[Path] = Field(
        default=None,
        description="File receiving the records as well (None = stderr only)"
    )

    @field_validator('log_level', mode='before')
    @classmethod
    def upper_level(cls, v):
        return v.upper() if isinstance(v, str) else v

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class MeetUriConfig(BaseModel):
    """Complete meeturi configuration"""
    model_config = ConfigDict(extra='forbid', frozen=True)

    hier_part_rules: Tuple[HierPartRuleConfig, ...] = Field(
        default=DEFAULT_HIER_PART_RULES,
        description="Legacy deployment rewrites, evaluated in order"
    )
    well_known_schemes: Tuple[str, ...] = Field(
        default=('http:', 'https:'),
        min_length=1,
        description="Schemes kept as-is by the scheme fixer"
    )
    fallback_scheme: str = Field(
        default='https:',
        description="Scheme substituted for any other scheme"
    )
    domain_placeholder_scheme: str = Field(
        default='meeting:',
        description="Scheme prefixed to a bare domain so it parses as an authority"
    )
    override_groups: Tuple[str, ...] = Field(
        default=('config', 'interfaceConfig'),
        description="Option groups serialized into the URI fragment"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings"
    )

    @field_validator('well_known_schemes', mode='before')
    @classmethod
    def normalize_well_known(cls, v):
        if isinstance(v, str):
            v = [v]
        return tuple(_normalize_scheme(s) for s in v)

    @field_validator('fallback_scheme', 'domain_placeholder_scheme', mode='before')
    @classmethod
    def normalize_scheme(cls, v):
        if not isinstance(v, str):
            raise ValueError("scheme must be a string")
        return _normalize_scheme(v)

    @field_validator('override_groups')
    @classmethod
    def validate_group_names(cls, v):
        for name in v:
            if not name or not name.isidentifier():
                raise ValueError(f"override group name '{name}' is not an identifier")
        return v

    @model_validator(mode='after')
    def validate_fallback_is_well_known(self):
        """The fallback has to survive a second pass through the scheme fixer"""
        if self.fallback_scheme not in self.well_known_schemes:
            raise ValueError(
                f"fallback_scheme ({self.fallback_scheme}) must be one of "
                f"well_known_schemes ({', '.join(self.well_known_schemes)})"
            )
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'MeetUriConfig':
        """
        Create and validate configuration from dictionary.

        Raises:
            pydantic.ValidationError: If configuration is invalid
        """
        return cls.model_validate(config_dict)

    def to_dict(self) -> Dict[str, Any]:
        """Export configuration as dictionary"""
        return self.model_dump()


DEFAULT_CONFIG = MeetUriConfig()
