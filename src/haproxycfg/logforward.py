from haproxycfg import ConfigurationConflict
from haproxycfg.component import ConcatFragment, InstanceComponent
from haproxycfg.options import LOGFORWARD, RING, Directives
from haproxycfg.template import render_logforward, render_ring


class LogForward(InstanceComponent):
    """A ``log-forward`` section with an optional ``ring`` section.

    Configuration attributes::

        section_name = STRING
            name of the section, also the tag of collected members
        bind = MAPPING
            ``address:port`` to a list of bind options
        ipaddress = STRING or LIST
            addresses to listen on, combined with ``ports``
        ports = STRING or LIST
            ports to listen on, may be comma separated
        options = MAPPING
            log-forward directives
        ring_options = MAPPING
            ring directives
        sort_options_alphabetic = BOOL
        collect_exported = BOOL
            collect balancer members exported for ``section_name``
        configure_ring = BOOL
        instance = STRING
        config_file = PATH
            overrides the instance's configuration file

    Both blocks are submitted at ``15-<section_name>-00``. The log-forward
    block always precedes the ring block.

    """

    namevar = "section_name"

    bind = None
    ipaddress = None
    ports = None
    options = None
    ring_options = None
    sort_options_alphabetic = False
    collect_exported = True
    configure_ring = False

    def configure(self):
        if self.ports and self.bind:
            raise ConfigurationConflict.from_context(
                self._breadcrumbs, "ports", "bind")
        if self.ipaddress and self.bind:
            raise ConfigurationConflict.from_context(
                self._breadcrumbs, "ipaddress", "bind")

        self.target = self.resolve_config_file()
        self.order = order_key(self.section_name)

        params = self.params()
        logforward = render_logforward(params)
        ring = render_ring(params) if self.configure_ring else None

        self += ConcatFragment(
            "{}-{}_logforward_block".format(
                self.instance_name, self.section_name),
            target=self.target, order=self.order, content=logforward)
        if ring is not None:
            self += ConcatFragment(
                "{}-{}_ring_block".format(
                    self.instance_name, self.section_name),
                target=self.target, order=self.order, content=ring)

        if self.collect_exported:
            self.catalog.exported.collect(self.catalog, self.section_name)

    def params(self):
        sort = self.sort_options_alphabetic
        return dict(
            section_name=self.section_name,
            bind=self.bind,
            ipaddress=self.ipaddress,
            ports=self.ports,
            options=Directives(
                LOGFORWARD, self.section_name, self.options, sort),
            ring_options=Directives(
                RING, self.section_name, self.ring_options, sort),
            sort_options_alphabetic=sort,
        )


def order_key(section_name):
    return "15-{}-00".format(section_name)
