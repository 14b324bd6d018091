"""haproxycfg templating support

Currently we support one templating engine:

Jinja2::
    @@ for line in options.lines()
      {{ line }}
    @@ endfor

Section templates are shipped with the package in ``templates/``.

"""

import importlib_resources
import jinja2

from haproxycfg import TemplatingError, output
from haproxycfg.options import LOGFORWARD, RING, Directives
from haproxycfg.utils import NetLoc, as_list


class TemplateEngine(object):
    """Abstract templating wrapper class.

    Use a subclass that connects to a specific template engine.
    """

    @classmethod
    def get(cls, enginename):
        """Return TemplateEngine instance for `enginename`."""
        if enginename.lower() == "jinja2":
            return Jinja2Engine()
        raise NotImplementedError("template engine not known", enginename)

    def template(self, name, args):
        """Render the packaged template `name` and return the value."""
        source = (
            importlib_resources.files("haproxycfg")
            .joinpath("templates")
            .joinpath(name)
            .read_text(encoding="utf-8"))
        return self.expand(source, args, identifier=name)

    def expand(self, templatestr, args, identifier="<template>"):
        """Expand template in `templatestr` and return it as string."""
        raise NotImplementedError


class Jinja2Engine(TemplateEngine):

    def __init__(self, *args, **kwargs):
        super(Jinja2Engine, self).__init__(*args, **kwargs)
        self.env = jinja2.Environment(
            line_statement_prefix="@@",
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined,
        )

    def expand(self, templatestr, args, identifier="<template>"):
        output.annotate("rendering {}".format(identifier), debug=True)
        try:
            tmpl = self.env.from_string(templatestr)
            tmpl.filename = identifier
            return tmpl.render(**args)
        except Exception as e:
            raise TemplatingError.from_context(e, identifier)


engine = TemplateEngine.get("jinja2")


def bind_lines(params):
    """Compute the listeners of a section.

    An explicit ``bind`` mapping of ``address:port`` to options wins.
    Otherwise every ip address is combined with every port, where ports
    may be given as a comma separated string.

    """
    bind = params.get("bind")
    if bind:
        result = []
        for address, options in bind.items():
            options = [str(o) for o in as_list(options) if o]
            result.append(" ".join([str(NetLoc.parse(address))] + options))
        return result
    ports = []
    for port in as_list(params.get("ports")):
        ports.extend(as_list(str(port)))
    # Listen on all addresses if only ports are given.
    ipaddresses = as_list(params.get("ipaddress")) or ["*"]
    result = []
    for ipaddress in ipaddresses:
        for port in ports:
            result.append(str(NetLoc(ipaddress, port)))
    # Keep the first occurrence of duplicated addresses only.
    return list(dict.fromkeys(result))


def _directives(kind, params, key):
    value = params.get(key)
    if isinstance(value, Directives):
        return value
    return Directives(
        kind, params["section_name"], value,
        sort_alphabetic=params.get("sort_options_alphabetic", False))


def render_logforward(params):
    """Render the ``log-forward`` block for `params`."""
    args = dict(
        section_name=params["section_name"],
        binds=bind_lines(params),
        options=_directives(LOGFORWARD, params, "options"),
    )
    return engine.template("logforward.cfg.jinja2", args)


def render_ring(params):
    """Render the ``ring`` block for `params`."""
    args = dict(
        section_name=params["section_name"],
        options=_directives(RING, params, "ring_options"),
    )
    return engine.template("ring.cfg.jinja2", args)
