"""Tests for the lexical patterns and the pre-parse fixers."""

import pytest

from meeturi.common.config_schema import HierPartRuleConfig, MeetUriConfig
from meeturi.uri.fixers import fix_uri_string_hier_part, fix_uri_string_scheme
from meeturi.uri.patterns import AUTHORITY_RE, PATH_RE, PROTOCOL_RE, consume


class TestPatterns:
    """each pattern only ever eats a prefix"""

    @pytest.mark.parametrize(
        "pattern,text,expected",
        [
            (PROTOCOL_RE, "https://x", ("https:", "//x")),
            (PROTOCOL_RE, "HTTPS://x", ("HTTPS:", "//x")),
            (PROTOCOL_RE, "org.jitsi.meet://x", ("org.jitsi.meet:", "//x")),
            (PROTOCOL_RE, "a+b-c.d:rest", ("a+b-c.d:", "rest")),
            (PROTOCOL_RE, "1abc:rest", (None, "1abc:rest")),
            (PROTOCOL_RE, "room1", (None, "room1")),
            (AUTHORITY_RE, "//host:80/path", ("//host:80", "/path")),
            (AUTHORITY_RE, "//host?q", ("//host", "?q")),
            (AUTHORITY_RE, "//host#h", ("//host", "#h")),
            (AUTHORITY_RE, "///path", (None, "///path")),
            (AUTHORITY_RE, "/path", (None, "/path")),
            (PATH_RE, "/a/b?q#h", ("/a/b", "?q#h")),
            (PATH_RE, "?q", ("", "?q")),
            (PATH_RE, "", ("", "")),
        ],
    )
    def test_consume(self, pattern, text, expected):
        assert consume(pattern, text) == expected


class TestFixSchemeCanonicalization:
    """app-specific schemes collapse into http(s)"""

    @pytest.mark.critical
    def test_app_scheme_stacked_before_https(self):
        assert (
            fix_uri_string_scheme("app-scheme:https://meet.example.com/room1")
            == "https://meet.example.com/room1"
        )

    def test_app_scheme_stacked_before_http(self):
        assert fix_uri_string_scheme("app:http://meet.example.com/r") == "http://meet.example.com/r"

    def test_app_scheme_replacing_https(self):
        assert (
            fix_uri_string_scheme("org.jitsi.meet://meet.example.com/room1")
            == "https://meet.example.com/room1"
        )

    def test_scheme_is_lowercased(self):
        assert fix_uri_string_scheme("HTTP://Meet.Example.com/Room") == "http://Meet.Example.com/Room"

    def test_unknown_scheme_becomes_https(self):
        assert fix_uri_string_scheme("ftp://meet.example.com/r") == "https://meet.example.com/r"

    def test_only_last_scheme_counts(self):
        assert fix_uri_string_scheme("http:app:ftp://meet.example.com/r") == "https://meet.example.com/r"

    def test_room_name_only_loses_scheme(self):
        assert fix_uri_string_scheme("app:room1") == "room1"

    @pytest.mark.parametrize("uri", ["room1", "", "/room1", "//meet.example.com/r", "?jwt=x"])
    def test_without_scheme_unchanged(self, uri):
        assert fix_uri_string_scheme(uri) == uri

    def test_host_with_port_reads_as_scheme(self):
        # A bare host:port is taken for a scheme followed by a path.
        assert fix_uri_string_scheme("meet.example.com:8080/room") == "8080/room"

    @pytest.mark.parametrize(
        "uri",
        [
            "app-scheme:https://meet.example.com/room1",
            "ftp://meet.example.com/r",
            "app:room1",
            "room1",
        ],
    )
    def test_idempotent(self, uri):
        once = fix_uri_string_scheme(uri)
        assert fix_uri_string_scheme(once) == once

    def test_custom_fallback(self):
        config = MeetUriConfig(fallback_scheme="http:")
        assert fix_uri_string_scheme("app://meet.example.com/r", config) == "http://meet.example.com/r"


class TestFixHierPart:
    """legacy deployments get their canonical host"""

    @pytest.mark.parametrize(
        "uri,expected",
        [
            ("https://hipchat.com/video/call/abc", "https://enso.hipchat.me/abc"),
            ("HTTP://HipChat.com/video/call/abc", "HTTP://enso.hipchat.me/abc"),
            ("https://enso.me/call/xyz", "https://enso.hipchat.me/xyz"),
            ("https://enso.me/meeting/xyz?a=1#b", "https://enso.hipchat.me/xyz?a=1#b"),
            ("https://enso.me/call/", "https://enso.hipchat.me/"),
        ],
    )
    def test_legacy_rewrites(self, uri, expected):
        assert fix_uri_string_hier_part(uri) == expected

    @pytest.mark.parametrize(
        "uri",
        [
            "https://enso.me/other/xyz",
            "https://example.com/video/call/abc",
            "https://hipchat.com/video/xyz",
            "//hipchat.com/video/call/abc",
            "room1",
            "",
        ],
    )
    def test_unmatched_unchanged(self, uri):
        assert fix_uri_string_hier_part(uri) == uri

    def test_idempotent(self):
        once = fix_uri_string_hier_part("https://hipchat.com/video/call/abc")
        assert fix_uri_string_hier_part(once) == once

    def test_first_rule_wins(self):
        config = MeetUriConfig(
            hier_part_rules=[
                HierPartRuleConfig(host="old.example.com", path_prefixes=["j"], canonical_host="first.example.com"),
                HierPartRuleConfig(host="old.example.com", path_prefixes=["j"], canonical_host="second.example.com"),
            ]
        )
        assert fix_uri_string_hier_part("https://old.example.com/j/r", config) == "https://first.example.com/r"
