from configparser import RawConfigParser

from haproxycfg import ConfigurationError


class ConfigSection(dict):

    def as_list(self, option):
        result = self[option]
        if "\n" in result:
            result = (x.strip() for x in result.split("\n"))
            result = [x for x in result if x]
        elif "," in result:
            result = [x.strip() for x in result.split(",")]
        else:
            result = [result]
        return result

    def as_lines(self, option):
        """Return the non-empty lines of a multi-line value."""
        lines = (x.strip() for x in self.get(option, "").split("\n"))
        return [x for x in lines if x]


class Config(object):

    def __init__(self, path):
        config = RawConfigParser()
        config.optionxform = lambda optionstr: optionstr
        if path:  # Test support
            with open(path) as f:
                config.read_file(f)
        self.config = config

    @classmethod
    def from_string(cls, text):
        self = cls(None)
        self.config.read_string(text)
        return self

    def __contains__(self, section):
        return self.config.has_section(section)

    def __getitem__(self, section):
        if section not in self:
            raise KeyError(section)
        return ConfigSection(
            (x, self.config.get(section, x))
            for x in self.config.options(section))

    def __iter__(self):
        return iter(self.config.sections())

    def get(self, section, default=None):
        try:
            return self[section]
        except KeyError:
            return default


class Settings(object):
    """Global settings shared by all resources of a catalog."""

    #: The configuration file of the default instance.
    config_file = "/etc/haproxy/haproxy.cfg"
    #: Jinja2 template for the configuration file of other instances.
    #: ``instance_name`` is ``haproxy-<instance>``.
    config_file_template = "/etc/{{ instance_name }}/{{ instance_name }}.cfg"
    #: The name of the default instance.
    default_instance = "haproxy"

    def __init__(self, **kw):
        for key, value in kw.items():
            if not hasattr(self.__class__, key):
                raise ConfigurationError.from_context(
                    "unknown setting '{}'".format(key), "haproxy")
            setattr(self, key, value)

    @classmethod
    def from_config(cls, config):
        return cls(**config.get("haproxy", {}))

    def instance_name(self, instance):
        if instance == self.default_instance:
            return instance
        return "haproxy-{}".format(instance)
