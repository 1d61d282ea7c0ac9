"""
Tests for IP helpers, emoji normalization and log deduplication.
"""

import logging

import pytest

from visitor_greeting.utils import (
    LogOnce,
    client_ip_from_headers,
    first_grapheme,
    is_local_address,
    normalize_emoji,
    normalize_ip,
    parse_ip,
)

# ---------------------------------------------------------------------------
# IP normalization / classification
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  8.8.8.8 ", "8.8.8.8"),
        ("[2001:DB8::1]", "2001:db8::1"),
        ("fe80::1%eth0", "fe80::1"),
        ("[FE80::1%25en0]", "fe80::1"),
    ],
)
def test_normalize_ip(raw, expected):
    assert normalize_ip(raw) == expected


@pytest.mark.parametrize("ip", ["1.2.3", "1.2.3.4.5", "256.1.1.1", "2001:db8::zz", "localhost", "abc"])
def test_parse_ip_rejects_malformed(ip):
    assert parse_ip(ip) is None


@pytest.mark.parametrize(
    "ip",
    [
        "127.0.0.1",
        "127.255.0.9",
        "10.1.2.3",
        "172.16.0.1",
        "172.31.255.255",
        "192.168.1.10",
        "169.254.10.10",
        "100.64.0.1",
        "100.127.255.254",
        "0.0.0.0",
        "::1",
        "fd12:3456::1",
        "fe80::abcd",
    ],
)
def test_local_addresses(ip):
    assert is_local_address(parse_ip(ip))


@pytest.mark.parametrize("ip", ["8.8.8.8", "172.32.0.1", "100.128.0.1", "2001:4860:4860::8888"])
def test_public_addresses(ip):
    assert not is_local_address(parse_ip(ip))


def test_client_ip_prefers_first_forwarded_entry():
    assert client_ip_from_headers("203.0.113.7, 10.0.0.1", "198.51.100.1", "127.0.0.1") == "203.0.113.7"


def test_client_ip_falls_back_to_real_ip_then_peer():
    assert client_ip_from_headers(None, " 198.51.100.1 ", "127.0.0.1") == "198.51.100.1"
    assert client_ip_from_headers("", None, "127.0.0.1") == "127.0.0.1"
    assert client_ip_from_headers(None, None, None) is None


# ---------------------------------------------------------------------------
# Emoji
# ---------------------------------------------------------------------------


def test_first_grapheme_keeps_variation_selector():
    assert first_grapheme("\u2600\ufe0f\u2600\ufe0f") == "\u2600\ufe0f"


def test_first_grapheme_keeps_zwj_sequence():
    family = "\U0001f468\u200d\U0001f469\u200d\U0001f467"
    assert first_grapheme(family + "!") == family


def test_first_grapheme_keeps_flag_pair():
    flag = "\U0001f1fa\U0001f1f8"
    assert first_grapheme(flag + flag) == flag


@pytest.mark.parametrize(
    "value, expected",
    [
        ("😀", "😀"),
        ("😀😀😀", "😀"),
        ("  \U0001f327\ufe0f ", "\U0001f327\ufe0f"),
        ("", ""),
        ("   ", ""),
        (None, ""),
        (42, ""),
        ("sun", ""),
    ],
)
def test_normalize_emoji(value, expected):
    assert normalize_emoji(value) == expected


# ---------------------------------------------------------------------------
# LogOnce
# ---------------------------------------------------------------------------


def test_log_once_suppresses_repeats(caplog):
    log_once = LogOnce(logging.getLogger("tests.log_once"))

    with caplog.at_level(logging.WARNING, logger="tests.log_once"):
        assert log_once.warning("provider down") is True
        assert log_once.warning("provider down") is False
        assert log_once.warning("other failure") is True

    messages = [r.getMessage() for r in caplog.records]
    assert messages == ["provider down", "other failure"]


def test_log_once_reset(caplog):
    log_once = LogOnce(logging.getLogger("tests.log_once"))
    log_once.warning("provider down")
    log_once.reset()

    assert not log_once.seen("provider down")
    assert log_once.warning("provider down") is True


def test_log_once_dedups_on_condition_key(caplog):
    log_once = LogOnce(logging.getLogger("tests.log_once"))

    with caplog.at_level(logging.WARNING, logger="tests.log_once"):
        for i in range(50):
            log_once.warning(f"Invalid IP 'bad-{i}'", key="invalid-ip")

    assert [r.getMessage() for r in caplog.records] == ["Invalid IP 'bad-0'"]
    assert log_once.seen("invalid-ip")
    assert not log_once.seen("Invalid IP 'bad-0'")
