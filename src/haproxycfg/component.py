from haproxycfg import ConfigurationError, output
from haproxycfg.concat import Concat
from haproxycfg.config import Settings
from haproxycfg.exported import ExportedResources
import haproxycfg.template
import haproxycfg.utils


class Component(object):
    """A resource that contributes to one or more configuration files.

    The constructor takes one un-named argument which is
    assigned to the attribute set by the ``namevar`` class
    attribute. The remaining keyword arguments are set as object
    attributes.

    Components are declared in a :py:class:`Catalog` (or added to another
    component via ``+=``) which calls :py:meth:`configure` right away.

    """

    #: The ``namevar`` attribute specifies the attribute
    #: name of the first unnamed argument passed to the
    #: constructor.
    namevar = None

    parent = None
    _prepared = False

    def __init__(self, namevar=None, **kw):
        for key in kw:
            if not hasattr(self.__class__, key):
                raise TypeError("{} got an unexpected argument '{}'".format(
                    self.__class__.__name__, key))
        if self.namevar:
            if namevar is None:
                raise ValueError("Namevar %s required" % self.namevar)
            kw[self.namevar] = namevar
        self.__dict__.update(kw)

    def __repr__(self):
        return '<%s "%s">' % (self.__class__.__name__, self._breadcrumbs)

    @property
    def name(self):
        return getattr(self, self.namevar) if self.namevar else ""

    @property
    def _breadcrumb(self):
        result = self.__class__.__name__
        if self.name:
            result += "({})".format(self.name)
        return result

    @property
    def _breadcrumbs(self):
        result = ""
        if isinstance(self.parent, Component):
            result += self.parent._breadcrumbs + " > "
        return result + self._breadcrumb

    @property
    def catalog(self):
        """(*readonly*) The :py:class:`Catalog` this component is
        declared in."""
        current = self.parent
        while isinstance(current, Component):
            current = current.parent
        return current

    @property
    def settings(self):
        return self.catalog.settings

    # Configuration phase

    def prepare(self, parent):
        self.parent = parent
        self.sub_components = []
        self.configure()
        self._prepared = True

    def configure(self):
        """Validate parameters and declare sub-components.

        Sub-components are added to this component by using the ``+=``
        syntax:

        .. code-block:: python

            class MyComponent(Component):

                def configure(self):
                    self += ConcatFragment('a', target=..., order=..., ...)

        """
        pass

    def expand(self, string, **args):
        return haproxycfg.template.engine.expand(
            string, args, identifier=self._breadcrumbs)

    # Sub-component mechanics

    def __add__(self, component):
        """Add and prepare a new sub-component."""
        if component is not None:
            self.sub_components.append(component)
            if not component._prepared:
                component.prepare(self)
        return self

    @property
    def recursive_sub_components(self):
        for sub in self.sub_components:
            yield sub
            for rec_sub in sub.recursive_sub_components:
                yield rec_sub


class InstanceComponent(Component):
    """A component that contributes to the configuration file of an
    instance."""

    instance = "haproxy"
    config_file = None

    def resolve_config_file(self):
        """An explicit `config_file` wins over the instance default."""
        self.instance_name = self.settings.instance_name(self.instance)
        if self.config_file:
            return self.config_file
        if self.instance == self.settings.default_instance:
            return self.settings.config_file
        return self.expand(
            self.settings.config_file_template,
            instance_name=self.instance_name)


class ConcatFragment(Component):
    """Submit a block of text to the catalog's concat service."""

    namevar = "fragment_name"
    target = None
    order = None
    content = ""

    def configure(self):
        self.fragment = self.catalog.concat.submit(
            self.fragment_name, self.target, self.order, self.content)


class Catalog(object):
    """One compilation pass.

    Holds the declared resources, the concat service that assembles the
    target files and the store of exported resources.

    """

    def __init__(self, settings=None, exported=None, resolve_override=None):
        self.settings = settings if settings is not None else Settings()
        self.exported = exported if exported is not None else \
            ExportedResources()
        self.concat = Concat()
        self.resources = {}
        if resolve_override is None:
            resolve_override = haproxycfg.utils.resolve_override
        #: Hostname to address overrides used by this catalog's resources.
        self.resolve_override = resolve_override

    @staticmethod
    def key(component):
        return (component.__class__.__name__, component.name)

    def __contains__(self, key):
        return key in self.resources

    def __getitem__(self, key):
        return self.resources[key]

    def __add__(self, component):
        """Declare `component` and configure it.

        If configuring fails, everything the component declared or
        submitted is dropped again.

        """
        key = self.key(component)
        if key in self.resources:
            raise ConfigurationError.from_context(
                "duplicate declaration", "{}({})".format(*key))
        output.annotate("declaring {}({})".format(*key), debug=True)
        declared = set(self.resources)
        checkpoint = self.concat.checkpoint()
        self.resources[key] = component
        try:
            component.prepare(self)
        except Exception:
            for k in list(self.resources):
                if k not in declared:
                    del self.resources[k]
            self.concat.rollback(checkpoint)
            raise
        return self

    def __iter__(self):
        return iter(self.resources.values())

    def write(self, predict_only=False):
        """Write every target file once. Return the changed targets."""
        changed = []
        for target in self.concat.targets():
            if self.concat.write(target, predict_only=predict_only):
                changed.append(target)
        return changed
