from __future__ import annotations

import pytest

from src.access_log.extract import (
    find_header,
    flatten_body,
    resolve_source_ip,
    split_host,
    split_user_agent,
)


def test_find_header_first_match_wins() -> None:
    headers = [("host", "first.example"), ("Host", "second.example")]
    assert find_header(headers, "host") == "first.example"


def test_find_header_is_case_insensitive() -> None:
    assert find_header([("User-Agent", "curl/8.0")], "user-agent") == "curl/8.0"


def test_find_header_missing_returns_empty() -> None:
    assert find_header([("accept", "*/*")], "authorization") == ""


@pytest.mark.parametrize(
    "value, expected",
    [
        ("example.com:8080", ("example.com", "8080")),
        ("example.com", ("example.com", "80")),
        ("", ("", "")),
        ("example.com:", ("example.com", "")),
        ("[::1]:8443", ("[", ":1]:8443")),
    ],
)
def test_split_host(value: str, expected: tuple[str, str]) -> None:
    assert split_host(value) == expected


def test_split_user_agent_windows() -> None:
    assert split_user_agent("Mozilla/5.0 (Windows NT 10.0; Win64; x64)") == (
        "Mozilla/5.0",
        "Windows NT 10.0",
        "Win64",
        "x64",
    )


def test_split_user_agent_short_string_pads_with_empty() -> None:
    assert split_user_agent("curl/8.4.0") == ("curl/8.4.0", "", "", "")


def test_split_user_agent_empty() -> None:
    assert split_user_agent("") == ("", "", "", "")


def test_split_user_agent_ignores_parts_past_engine() -> None:
    ua = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko)"
    assert split_user_agent(ua) == (
        "Mozilla/5.0",
        "X11",
        "Linux x86_64",
        "AppleWebKit/537.36",
    )


def test_split_user_agent_tolerates_garbage() -> None:
    assert split_user_agent(");;((") == ("", "", "", "")


def test_flatten_body_object_drops_non_string_values() -> None:
    assert flatten_body('{"a":"1","b":2}') == "a:1,b:"


def test_flatten_body_keeps_document_key_order() -> None:
    assert flatten_body('{"z":"last","a":"first"}') == "z:last,a:first"


def test_flatten_body_nested_values_degrade_to_empty() -> None:
    assert flatten_body('{"user":{"name":"x"},"tags":["a"],"ok":true,"n":null}') == (
        "user:,tags:,ok:,n:"
    )


@pytest.mark.parametrize(
    "body",
    [
        "hello world",
        "[1, 2, 3]",
        '{"a":NaN,"b":"x"}',
        '{"a":Infinity}',
        '{"a":-Infinity}',
        '"just a string"',
        "42",
        "null",
        "{broken",
        "",
    ],
)
def test_flatten_body_non_object_is_unchanged(body: str) -> None:
    assert flatten_body(body) == body


def test_flatten_body_empty_object() -> None:
    assert flatten_body("{}") == ""


def test_resolve_source_ip_prefers_forwarded() -> None:
    headers = [
        ("forwarded", 'for="203.0.113.7";proto=https, for=198.51.100.1'),
        ("x-forwarded-for", "192.0.2.1"),
    ]
    assert resolve_source_ip(headers, "10.0.0.1") == "203.0.113.7"


def test_resolve_source_ip_uses_first_x_forwarded_for() -> None:
    headers = [("x-forwarded-for", "192.0.2.1, 10.0.0.2")]
    assert resolve_source_ip(headers, "10.0.0.1") == "192.0.2.1"


def test_resolve_source_ip_falls_back_to_peer() -> None:
    assert resolve_source_ip([], "10.0.0.1") == "10.0.0.1"


def test_resolve_source_ip_unknown_is_empty() -> None:
    assert resolve_source_ip([("forwarded", "proto=http")], None) == ""
