import copy

from haproxycfg import output


class ExportedResources(object):
    """A store of resources exported by other nodes.

    Resources are exported under a tag. Collecting a tag declares a copy
    of every resource exported under it into a catalog. Collecting the
    same tag into the same catalog again does nothing.

    """

    def __init__(self):
        self.resources = {}

    def export(self, tag, component):
        self.resources.setdefault(tag, []).append(component)

    def tagged(self, tag):
        return list(self.resources.get(tag, ()))

    def collect(self, catalog, tag):
        for exported in self.tagged(tag):
            key = catalog.key(exported)
            if key in catalog and \
                    getattr(catalog[key], "_exported", None) is exported:
                continue
            component = copy.copy(exported)
            component._exported = exported
            output.annotate(
                "collecting {}({}) for `{}`".format(*key, tag), debug=True)
            catalog += component
