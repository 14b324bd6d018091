import os
import os.path
from typing import Optional

from ._output import output

with open(os.path.dirname(__file__) + "/version.txt") as f:
    __version__ = f.read().strip()


def prepare_error(error):
    return f"{error.__class__.__name__}: {error}"


class ReportingException(Exception):
    """Exceptions that support user-readable reporting."""

    def __str__(self):
        raise NotImplementedError()

    def report(self):
        raise NotImplementedError()


class ConfigurationError(ReportingException):
    """Indicates that a resource could not be configured successfully."""

    message: str
    resource: Optional[str]

    @classmethod
    def from_context(cls, message, resource=None):
        self = cls()
        self.message = message
        self.resource = resource
        return self

    def __str__(self):
        if self.resource:
            return "{}: {}".format(self.resource, self.message)
        return str(self.message)

    def report(self):
        output.error(str(self))


class ConfigurationConflict(ConfigurationError):
    """Two mutually exclusive parameters have been given at the same time."""

    first: str
    second: str

    @classmethod
    def from_context(cls, resource, first, second):
        self = cls()
        self.resource = resource
        self.first = first
        self.second = second
        self.message = "'{}' and '{}' are mutually exclusive".format(
            first, second)
        return self

    def report(self):
        output.error("Conflicting parameters")
        output.tabular("Resource", self.resource, red=True)
        output.tabular("Parameters", "{}, {}".format(self.first, self.second),
                       red=True)


class UnknownDirective(ConfigurationError):
    """An option key is not a directive known for its section kind."""

    kind: str
    directive: str

    @classmethod
    def from_context(cls, kind, section_name, directive):
        self = cls()
        self.kind = kind
        self.resource = "{} {}".format(kind, section_name)
        self.directive = directive
        self.message = "unknown directive '{}'".format(directive)
        return self

    def report(self):
        output.error("Unknown directive")
        output.tabular("Section", self.resource, red=True)
        output.tabular("Directive", self.directive, red=True)


class ResolutionError(ConfigurationError):
    """A hostname that a resource depends on could not be resolved."""

    hostname: str

    @classmethod
    def from_context(cls, hostname, resource=None):
        self = cls()
        self.hostname = hostname
        self.resource = resource
        self.message = "could not resolve `{}`".format(hostname)
        return self

    def report(self):
        output.error("Error while resolving hostname")
        output.tabular("hostname", self.hostname, red=True)
        if self.resource:
            output.tabular("resource", self.resource)


class TemplatingError(ReportingException):
    """Error while rendering a template."""

    identifier: str
    error: str

    @classmethod
    def from_context(cls, exception, identifier):
        self = cls()
        self.identifier = identifier
        self.error = prepare_error(exception)
        return self

    def __str__(self):
        return "Error while rendering {}: {}".format(
            self.identifier, self.error)

    def report(self):
        output.error("Error while rendering template")
        output.tabular("template", self.identifier, red=True)
        output.tabular("message", self.error, separator=":\n")
