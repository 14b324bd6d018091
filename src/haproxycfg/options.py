"""Directive sets for the sections haproxycfg renders.

Options are given as a mapping (or an ordered sequence of pairs) from a
directive name to a value. A value can be a scalar, which renders one
line, a list, which renders one line per item, or ``None``/empty, which
renders the bare directive.

"""
from collections.abc import Mapping

from haproxycfg import UnknownDirective

LOGFORWARD = "log-forward"
RING = "ring"

#: Directives recognized in a ``log-forward`` section and what they do.
LOGFORWARD_DIRECTIVES = {
    "backlog": "size of the pending connection queue of stream binds",
    "bind": "additional stream listener (tcp) for syslog messages",
    "description": "free text shown in reports",
    "dgram-bind": "datagram listener (udp) for syslog messages",
    "log": "log target the received messages are forwarded to",
    "maxconn": "maximum number of concurrent stream connections",
    "option": "section option, e.g. `dont-parse-log`",
    "timeout client": "inactivity timeout of stream connections",
}

#: Directives recognized in a ``ring`` section and what they do.
RING_DIRECTIVES = {
    "backing-file": "file that mirrors the ring content",
    "description": "free text shown in reports",
    "format": "message format, e.g. `rfc5424` or `raw`",
    "maxlen": "maximum length of a message",
    "server": "syslog server the ring forwards to",
    "size": "size of the ring in bytes",
    "timeout connect": "timeout to connect to a server",
    "timeout server": "timeout for servers to accept messages",
}

KNOWN = {
    LOGFORWARD: LOGFORWARD_DIRECTIVES,
    RING: RING_DIRECTIVES,
}


class Directives(object):
    """An ordered, validated list of ``(directive, [values])`` pairs."""

    def __init__(self, kind, section_name, values=None,
                 sort_alphabetic=False):
        self.kind = kind
        self.section_name = section_name
        known = KNOWN[kind]
        if values is None:
            values = ()
        elif isinstance(values, Mapping):
            values = list(values.items())
        else:
            values = list(values)
        if sort_alphabetic:
            values = sorted(values, key=lambda pair: pair[0])
        self.items = []
        for directive, value in values:
            if directive not in known:
                raise UnknownDirective.from_context(
                    kind, section_name, directive)
            self.items.append((directive, _values(value)))

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    def __bool__(self):
        return bool(self.items)

    def lines(self):
        for directive, values in self.items:
            if not values:
                yield directive
                continue
            for value in values:
                yield "{} {}".format(directive, value)


def _values(value):
    if value is None or value == "":
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value if v is not None and v != ""]
    return [str(value)]
