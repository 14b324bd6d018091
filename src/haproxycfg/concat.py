"""Ordered concatenation of configuration fragments.

Fragments are collected from any number of resources during one
compilation pass and merged into one file per target. The file is the
concatenation of all fragments sorted by their order key. Fragments that
share an order key keep the order in which they were submitted.

"""
import difflib
import os
import os.path

from haproxycfg import ConfigurationError, output


class Fragment(object):
    """A named, ordered block of text destined for a target file."""

    def __init__(self, name, target, order, content, sequence):
        self.name = name
        self.target = target
        self.order = order
        self.content = content
        self.sequence = sequence

    @property
    def sort_key(self):
        return (self.order, self.sequence)

    def __repr__(self):
        return "<Fragment {} ({}) -> {}>".format(
            self.name, self.order, self.target)


class Concat(object):
    """Collect fragments and write one file per target."""

    ensure_newline = True
    encoding = "utf-8"

    def __init__(self):
        self._fragments = {}
        self._sequence = 0

    def submit(self, name, target, order, content):
        fragments = self._fragments.setdefault(target, {})
        if name in fragments:
            raise ConfigurationError.from_context(
                "duplicate fragment for {}".format(target), name)
        fragment = Fragment(name, target, str(order), content, self._sequence)
        self._sequence += 1
        fragments[name] = fragment
        output.annotate(
            "submitted fragment {} {} -> {}".format(
                fragment.order, name, target),
            debug=True)
        return fragment

    def checkpoint(self):
        return self._sequence

    def rollback(self, checkpoint):
        """Drop all fragments submitted since `checkpoint`."""
        for target, fragments in list(self._fragments.items()):
            for name, fragment in list(fragments.items()):
                if fragment.sequence >= checkpoint:
                    del fragments[name]
            if not fragments:
                del self._fragments[target]

    def targets(self):
        return sorted(self._fragments)

    def fragments(self, target):
        return sorted(
            self._fragments.get(target, {}).values(),
            key=lambda f: f.sort_key)

    def render(self, target):
        result = []
        for fragment in self.fragments(target):
            content = fragment.content
            if self.ensure_newline and not content.endswith("\n"):
                content += "\n"
            result.append(content)
        return "".join(result)

    def write(self, target, predict_only=False):
        """Bring `target` up to date. Return whether it changed."""
        wanted = self.render(target)
        try:
            with open(target, "r", encoding=self.encoding) as f:
                current = f.read()
        except FileNotFoundError:
            current = ""
        if current == wanted:
            output.annotate("{} is up to date".format(target), debug=True)
            return False

        output.annotate(target)
        diff = difflib.unified_diff(
            current.splitlines(), wanted.splitlines())
        for line in diff:
            line = line.replace("\n", "")
            if not line.strip():
                continue
            output.annotate(
                "  {} {}".format(os.path.basename(target), line),
                red=line.startswith("-"),
                green=line.startswith("+"))

        if predict_only:
            return True
        leading = os.path.dirname(target)
        if leading and not os.path.isdir(leading):
            os.makedirs(leading)
        with open(target, "w", encoding=self.encoding) as f:
            f.write(wanted)
        return True
