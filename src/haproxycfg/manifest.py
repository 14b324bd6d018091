"""Load a manifest that declares resources into a catalog.

A manifest is an INI file::

    [haproxy]
    config_file = /etc/haproxy/haproxy.cfg

    [resolver]
    web01.example.com = 10.0.0.5

    [logforward:lb1]
    ipaddress = 0.0.0.0
    ports = 514
    options =
        log global
        maxconn 100

    [export:web01]
    listening_service = lb1
    ports = 514
    fqdn = web01.example.com

``export`` sections describe balancer members exported by other nodes,
``balancermember`` sections declare members directly.

"""
from haproxycfg import ConfigurationError, output
from haproxycfg.balancermember import BalancerMember
from haproxycfg.component import Catalog
from haproxycfg.config import Config, Settings
from haproxycfg.exported import ExportedResources
from haproxycfg.logforward import LogForward
from haproxycfg.options import KNOWN, LOGFORWARD, RING
import haproxycfg.utils

BOOLEANS = {
    LogForward: (
        "sort_options_alphabetic", "collect_exported", "configure_ring"),
    BalancerMember: ("define_cookies",),
}

LISTS = {
    LogForward: ("ipaddress", "ports"),
    BalancerMember: ("ports", "server_names", "ipaddresses"),
}


def parse_directives(kind, lines):
    """Parse ``directive value...`` lines into ordered pairs.

    Two-word directives like ``timeout client`` are recognized.

    """
    known = KNOWN[kind]
    result = []
    for line in lines:
        words = line.split()
        if len(words) > 1 and " ".join(words[:2]) in known:
            directive, value = " ".join(words[:2]), words[2:]
        else:
            directive, value = words[0], words[1:]
        result.append((directive, " ".join(value) or None))
    return result


def parse_bind(lines):
    bind = {}
    for line in lines:
        address, *options = line.split()
        bind[address] = options
    return bind


def section_args(factory, name, section):
    args = {}
    for key, value in section.items():
        if key in BOOLEANS.get(factory, ()):
            try:
                value = haproxycfg.utils.parse_bool(value)
            except ValueError as e:
                raise ConfigurationError.from_context(
                    "{}: {}".format(key, e), name)
        elif key in LISTS.get(factory, ()):
            value = section.as_list(key)
        elif key == "options" and factory is LogForward:
            value = parse_directives(LOGFORWARD, section.as_lines(key))
        elif key == "ring_options":
            value = parse_directives(RING, section.as_lines(key))
        elif key == "options":
            value = section.as_list(key)
        elif key == "bind":
            value = parse_bind(section.as_lines(key))
        args[key] = value
    return args


def create(factory, name, section):
    args = section_args(factory, name, section)
    try:
        return factory(name, **args)
    except TypeError as e:
        raise ConfigurationError.from_context(str(e), name)


def load_resolver(config):
    """Return the hostname overrides of the manifest's resolver section."""
    overrides = {}
    resolver = config.get("resolver", {})
    for hostname, address in resolver.items():
        output.annotate(
            "resolver override {} -> {}".format(hostname, address),
            debug=True)
        overrides[hostname] = address
    return overrides


def load_manifest(path):
    """Return a catalog with all resources of the manifest at `path`."""
    return load_config(Config(path))


def load_config(config):
    settings = Settings.from_config(config)
    resolve_override = load_resolver(config)

    exported = ExportedResources()
    declared = []
    for section_name in config:
        kind, _, name = section_name.partition(":")
        section = config[section_name]
        if kind == "export":
            member = create(BalancerMember, name, section)
            exported.export(member.listening_service, member)
        elif kind == "logforward":
            declared.append(create(LogForward, name, section))
        elif kind == "balancermember":
            declared.append(create(BalancerMember, name, section))
        elif kind not in ("haproxy", "resolver"):
            raise ConfigurationError.from_context(
                "unknown section", section_name)

    catalog = Catalog(settings, exported, resolve_override)
    for component in declared:
        catalog += component
    return catalog
