import os

import pytest

import haproxycfg.utils
from haproxycfg.component import Catalog
from haproxycfg.config import Settings


@pytest.fixture
def catalog(tmpdir):
    settings = Settings(
        config_file=str(tmpdir / "haproxy" / "haproxy.cfg"),
        config_file_template=str(tmpdir) +
        "/{{ instance_name }}/{{ instance_name }}.cfg")
    return Catalog(settings)


@pytest.fixture(autouse=True)
def ensure_workingdir(request):
    working_dir = os.getcwd()
    yield
    os.chdir(working_dir)


@pytest.fixture(autouse=True)
def reset_resolve_overrides():
    haproxycfg.utils.resolve_override.clear()
    yield
    haproxycfg.utils.resolve_override.clear()


@pytest.fixture(autouse=True)
def output(monkeypatch):
    from haproxycfg import output
    from haproxycfg._output import TestBackend

    backend = TestBackend()
    monkeypatch.setattr(output, "backend", backend)
    monkeypatch.setattr(output, "enable_debug", False)
    return output
