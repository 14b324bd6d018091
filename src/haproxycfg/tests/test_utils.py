import socket

import mock
import pytest

from haproxycfg.utils import (
    NetLoc,
    NotFound,
    Resolved,
    as_list,
    find_ip,
    parse_bool,
)


@mock.patch("socket.getaddrinfo")
def test_find_ip_returns_first_address(gai):
    gai.return_value = [
        (None, None, None, None, ("10.0.0.5", 0)),
        (None, None, None, None, ("10.0.0.6", 0))]
    result = find_ip("web01.example.com")
    assert Resolved("web01.example.com", "10.0.0.5") == result
    assert result
    assert "10.0.0.5" == result.address
    gai.assert_called_once_with("web01.example.com", None)


@mock.patch("socket.getaddrinfo")
def test_find_ip_returns_ipv6_address(gai):
    gai.return_value = [
        (None, None, None, None, ("2001:db8::1", 0, 0, 0))]
    assert "2001:db8::1" == find_ip("web01.example.com").address


@pytest.mark.parametrize("error", [
    socket.gaierror(-2, "Name or service not known"),
    socket.herror("host not found"),
    socket.timeout("timed out"),
    UnicodeError("label empty or too long"),
])
def test_find_ip_swallows_lookup_errors(error):
    with mock.patch("socket.getaddrinfo", side_effect=error) as gai:
        result = find_ip("unknown.example.com")
    assert NotFound("unknown.example.com") == result
    assert not result
    assert result.address is None
    assert "fallback" == result.unwrap("fallback")
    # No retries.
    assert 1 == gai.call_count


@mock.patch("socket.getaddrinfo")
def test_find_ip_uses_override_without_lookup(gai):
    ov = {"web01.example.com": "1.2.3.4"}
    result = find_ip("web01.example.com", resolve_override=ov)
    assert "1.2.3.4" == result.unwrap()
    assert not gai.called


@mock.patch("socket.getaddrinfo", side_effect=socket.gaierror("failed"))
def test_find_ip_logs_failure_in_debug_mode(gai, output):
    output.enable_debug = True
    find_ip("unknown.example.com")
    assert "resolving `unknown.example.com`" in output.backend.output
    assert "could not resolve `unknown.example.com`: failed" in \
        output.backend.output


def test_resolved_and_not_found_compare_by_value():
    assert Resolved("a", "1.2.3.4") != Resolved("a", "1.2.3.5")
    assert NotFound("a") != NotFound("b")
    assert Resolved("a", "1.2.3.4") != NotFound("a")


def test_netloc_str():
    assert "127.0.0.1" == str(NetLoc("127.0.0.1"))
    assert "127.0.0.1:514" == str(NetLoc("127.0.0.1", "514"))
    assert "[::1]:514" == str(NetLoc("::1", 514))
    assert "<NetLoc `*:514`>" == repr(NetLoc("*", "514"))


@pytest.mark.parametrize("value,host,port", [
    ("10.0.0.1:514", "10.0.0.1", "514"),
    ("[2001:db8::1]:514", "2001:db8::1", "514"),
    ("[2001:db8::1]", "2001:db8::1", None),
    ("2001:db8::1", "2001:db8::1", None),
    (":514", "", "514"),
    ("localhost", "localhost", None),
])
def test_netloc_parse(value, host, port):
    loc = NetLoc.parse(value)
    assert host == loc.host
    assert port == loc.port


def test_netloc_ordering():
    assert sorted([NetLoc("b", 1), NetLoc("a", 2)]) == [
        NetLoc("a", 2), NetLoc("b", 1)]


def test_as_list():
    assert [] == as_list(None)
    assert ["514"] == as_list("514")
    assert ["514", "515"] == as_list("514, 515")
    assert [514] == as_list(514)
    assert ["a", "b"] == as_list(("a", "b"))


def test_parse_bool():
    assert parse_bool("yes")
    assert parse_bool("True")
    assert not parse_bool("off")
    assert not parse_bool(False)
    with pytest.raises(ValueError):
        parse_bool("maybe")
