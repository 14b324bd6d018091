import functools
import socket

from haproxycfg import output


class Resolved(object):
    """A hostname lookup that produced an address."""

    def __init__(self, hostname, address):
        self.hostname = hostname
        self.address = address

    def __bool__(self):
        return True

    def __eq__(self, other):
        if isinstance(other, Resolved):
            return (self.hostname, self.address) == (
                other.hostname, other.address)
        return NotImplemented

    def __hash__(self):
        return hash((self.hostname, self.address))

    def __repr__(self):
        return "<Resolved `{}` -> {}>".format(self.hostname, self.address)

    def unwrap(self, default=None):
        return self.address


class NotFound(object):
    """A hostname lookup that failed.

    Callers can not tell an unknown name from a failing resolver.
    """

    address = None

    def __init__(self, hostname):
        self.hostname = hostname

    def __bool__(self):
        return False

    def __eq__(self, other):
        if isinstance(other, NotFound):
            return self.hostname == other.hostname
        return NotImplemented

    def __hash__(self):
        return hash(self.hostname)

    def __repr__(self):
        return "<NotFound `{}`>".format(self.hostname)

    def unwrap(self, default=None):
        return default


resolve_override = {}


def find_ip(hostname, resolve_override=resolve_override):
    """Look up the address of `hostname` once.

    Returns :py:class:`Resolved` or :py:class:`NotFound`. Lookup errors
    never propagate. There is no timeout, retry or caching: the call
    blocks as long as the system resolver does.

    """
    if hostname in resolve_override:
        address = resolve_override[hostname]
        output.annotate(
            "resolved `{}` to {} (override)".format(hostname, address),
            debug=True)
        return Resolved(hostname, address)
    output.annotate("resolving `{}`".format(hostname), debug=True)
    try:
        responses = socket.getaddrinfo(hostname, None)
    except (OSError, UnicodeError) as e:
        output.annotate(
            "could not resolve `{}`: {}".format(hostname, e), debug=True)
        return NotFound(hostname)
    if not responses:
        return NotFound(hostname)
    address = responses[0][4][0]
    output.annotate(
        "selected {}, {}".format(hostname, address), debug=True)
    return Resolved(hostname, address)


@functools.total_ordering
class NetLoc(object):
    """A network location specified by host and port.

    .. code-block:: pycon

        >>> str(NetLoc('127.0.0.1', 514))
        '127.0.0.1:514'
        >>> str(NetLoc('::1', 514))
        '[::1]:514'

    """

    host = None
    port = None

    def __init__(self, host, port=None):
        self.host = host
        self.port = port

    @classmethod
    def parse(cls, value):
        """Parse `host:port`, `[v6]:port` or a plain host."""
        value = value.strip()
        if value.startswith("["):
            host, _, rest = value[1:].partition("]")
            port = rest[1:] if rest.startswith(":") else None
            return cls(host, port or None)
        if value.count(":") == 1:
            host, port = value.split(":")
            return cls(host, port or None)
        return cls(value)

    def __str__(self):
        if self.port:
            if ":" in self.host:  # ipv6
                fmt = "[{self.host}]:{self.port}"
            else:
                fmt = "{self.host}:{self.port}"
        else:
            fmt = "{self.host}"
        return fmt.format(self=self)

    def __repr__(self):
        return "<NetLoc `{}`>".format(self)

    # Not "correct" comparisons from a networking viewpoint, but they give
    # a predictable ordering.
    def __lt__(self, other):
        return str(self) < str(other)

    def __eq__(self, other):
        return str(self) == str(other)

    def __hash__(self):
        return hash(str(self))


def as_list(value):
    """Normalize a scalar, comma separated string or sequence to a list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [x.strip() for x in value.split(",") if x.strip()]
    if isinstance(value, (list, tuple, set, frozenset)):
        return list(value)
    return [value]


def parse_bool(value):
    if isinstance(value, bool):
        return value
    value = str(value).strip().lower()
    if value in ("true", "yes", "on", "1"):
        return True
    if value in ("false", "no", "off", "0", ""):
        return False
    raise ValueError("Not a boolean: {!r}".format(value))
