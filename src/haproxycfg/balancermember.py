from haproxycfg import ConfigurationError, ResolutionError
from haproxycfg.component import ConcatFragment, InstanceComponent
from haproxycfg.template import engine
from haproxycfg.utils import NetLoc, as_list, find_ip


class BalancerMember(InstanceComponent):
    """Server lines for a listening service.

    Expects either ``ipaddresses`` or an ``fqdn`` that resolves. Server
    names default to the fqdn's short name, numbered ``<name>-1``,
    ``<name>-2``, ... for several addresses. Explicit ``server_names`` need
    one name per address. Each (server name, address) pair renders one
    line per port.

    Lines are ordered right after the section they belong to:
    ``15-<listening_service>-01-<member_name>``.

    Members are usually exported by the nodes that run the servers and
    collected by the section they belong to.

    """

    namevar = "member_name"

    listening_service = None
    ports = None
    server_names = None
    ipaddresses = None
    fqdn = None
    prefix = "server"
    options = ()
    define_cookies = False
    weight = None

    def configure(self):
        if not self.listening_service:
            raise ValueError("listening_service required")
        self.target = self.resolve_config_file()
        self.addresses = self.resolve_addresses()
        self.names = self.resolve_names()

        content = engine.template(
            "balancermember.cfg.jinja2", dict(lines=list(self.lines())))
        self += ConcatFragment(
            "{}-{}_balancermember_{}".format(
                self.instance_name, self.listening_service,
                self.member_name),
            target=self.target,
            order="15-{}-01-{}".format(
                self.listening_service, self.member_name),
            content=content)

    def resolve_addresses(self):
        addresses = as_list(self.ipaddresses)
        if addresses:
            return addresses
        hostname = self.fqdn or self.member_name
        address = find_ip(
            hostname, resolve_override=self.catalog.resolve_override)
        if not address:
            raise ResolutionError.from_context(hostname, self._breadcrumbs)
        return [address.address]

    def resolve_names(self):
        names = as_list(self.server_names)
        if names:
            if len(names) != len(self.addresses):
                raise ConfigurationError.from_context(
                    "{} server names for {} addresses".format(
                        len(names), len(self.addresses)),
                    self._breadcrumbs)
            return names
        name = (self.fqdn or self.member_name).split(".")[0]
        if len(self.addresses) == 1:
            return [name]
        return ["{}-{}".format(name, i)
                for i in range(1, len(self.addresses) + 1)]

    def lines(self):
        options = " ".join(sorted(str(o) for o in as_list(self.options)))
        ports = []
        for port in as_list(self.ports):
            ports.extend(as_list(str(port)))
        for address, name in zip(self.addresses, self.names):
            locations = [NetLoc(address, port) for port in ports] or \
                [NetLoc(address)]
            for location in locations:
                line = "{} {} {}".format(self.prefix, name, location)
                if self.define_cookies:
                    line += " cookie {}".format(name)
                if self.weight is not None:
                    line += " weight {}".format(self.weight)
                if options:
                    line += " " + options
                yield line
