import os.path

import pytest

import haproxycfg.utils
from haproxycfg import ConfigurationError, UnknownDirective
from haproxycfg.config import Config, Settings
from haproxycfg.manifest import (
    load_config,
    load_manifest,
    parse_bind,
    parse_directives,
)
from haproxycfg.options import LOGFORWARD, RING

fixture = os.path.join(os.path.dirname(__file__), "fixture", "manifest.cfg")


@pytest.fixture
def manifest(tmpdir):
    with open(fixture) as f:
        text = f.read().format(tmpdir=str(tmpdir))
    path = str(tmpdir / "manifest.cfg")
    with open(path, "w") as f:
        f.write(text)
    return path


def test_config_sections_preserve_case():
    config = Config.from_string("[resolver]\nWeb01.Example.com = 1.2.3.4\n")
    assert "resolver" in config
    assert {"Web01.Example.com": "1.2.3.4"} == config["resolver"]
    assert config.get("haproxy") is None
    with pytest.raises(KeyError):
        config["haproxy"]


def test_config_section_lists():
    config = Config.from_string(
        "[a]\ncomma = a, b\nlines =\n  a\n  b, c\nsingle = a\n")
    section = config["a"]
    assert ["a", "b"] == section.as_list("comma")
    assert ["a", "b, c"] == section.as_list("lines")
    assert ["a"] == section.as_list("single")
    assert ["a", "b, c"] == section.as_lines("lines")
    assert [] == section.as_lines("missing")


def test_settings_defaults():
    settings = Settings.from_config(Config(None))
    assert "/etc/haproxy/haproxy.cfg" == settings.config_file
    assert "haproxy" == settings.instance_name("haproxy")
    assert "haproxy-logs" == settings.instance_name("logs")


def test_settings_reject_unknown_keys():
    with pytest.raises(ConfigurationError) as e:
        Settings.from_config(Config.from_string("[haproxy]\nconfig = x\n"))
    assert "haproxy: unknown setting 'config'" == str(e.value)


def test_parse_directives():
    assert [
        ("log", "global"),
        ("timeout client", "10s"),
        ("option", None),
        ("log", "127.0.0.1 local0 info"),
    ] == parse_directives(LOGFORWARD, [
        "log global", "timeout client 10s", "option",
        "log 127.0.0.1 local0 info"])
    assert [("timeout", "10s")] == parse_directives(RING, ["timeout 10s"])


def test_parse_bind():
    assert {"*:514": [], "[::]:6514": ["ssl", "crt", "x.pem"]} == \
        parse_bind(["*:514", "[::]:6514 ssl crt x.pem"])


def test_load_manifest(manifest, tmpdir):
    catalog = load_manifest(manifest)
    assert {"web01.example.com": "10.0.0.5"} == catalog.resolve_override
    assert {} == haproxycfg.utils.resolve_override
    default = str(tmpdir / "haproxy.cfg")
    logs = str(tmpdir / "haproxy-logs.cfg")
    assert [logs, default] == catalog.concat.targets()
    assert """
log-forward lb1
  bind 0.0.0.0:514
  log global
  timeout client 10s

ring lb1
  format rfc5424
  size 32764
  server web01 10.0.0.5:514 check inter 2000
""" == catalog.concat.render(default)
    assert """
log-forward lb2
  bind 10.0.0.1:6514 ssl crt /etc/ssl/lb.pem
  log 127.0.0.1:10514 local0
  maxconn 10
""" == catalog.concat.render(logs)

    assert [logs, default] == catalog.write()
    with open(default) as f:
        assert f.read().startswith("\nlog-forward lb1\n")


@pytest.mark.parametrize("text,message", [
    ("[frontend:x]\n", "frontend:x: unknown section"),
    ("[logforward:x]\nconfigure_ring = maybe\n",
     "x: configure_ring: Not a boolean: 'maybe'"),
    ("[logforward:x]\nmode = tcp\n",
     "x: LogForward got an unexpected argument 'mode'"),
])
def test_invalid_manifest(text, message):
    with pytest.raises(ConfigurationError) as e:
        load_config(Config.from_string(text))
    assert message == str(e.value)


def test_manifest_unknown_directive():
    with pytest.raises(UnknownDirective):
        load_config(Config.from_string(
            "[logforward:x]\noptions =\n  mode tcp\n"))


def test_manifest_balancermember_section(tmpdir):
    catalog = load_config(Config.from_string("""\
[haproxy]
config_file = {}/haproxy.cfg

[balancermember:web01]
listening_service = lb1
ipaddresses = 10.0.0.5, 10.0.0.6
server_names = web01, web01b
ports = 514
define_cookies = on
""".format(tmpdir)))
    assert [
        "  server web01 10.0.0.5:514 cookie web01",
        "  server web01b 10.0.0.6:514 cookie web01b",
    ] == catalog.concat.render(str(tmpdir / "haproxy.cfg")).splitlines()


def test_resolver_overrides_do_not_leak_between_manifests():
    first = load_config(Config.from_string(
        "[resolver]\nweb01.example.com = 10.0.0.5\n"))
    second = load_config(Config.from_string("[haproxy]\n"))
    assert {"web01.example.com": "10.0.0.5"} == first.resolve_override
    assert {} == second.resolve_override
    assert {} == haproxycfg.utils.resolve_override
