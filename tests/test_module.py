import logging

import pytest

from pillar.domain import ModuleOptions
from pillar.module import Module
from pillar.package import Package


@pytest.fixture
def package():
    return Package()


def test_module_starts_uncached(package):
    module = package.define("foo", lambda: "foo")

    assert not module.is_cached
    assert module.cached_value is None
    assert repr(module) == "<Module [foo] defined>"


def test_load_caches_value(package):
    module = package.define("foo", lambda: "foo")

    assert module.load() == "foo"
    assert module.is_cached
    assert module.cached_value == "foo"
    assert repr(module) == "<Module [foo] cached>"


def test_cache_marks_module_cached_even_for_none(package):
    module = Module(package, "foo", lambda: "unused", ModuleOptions())

    assert module.cache(None) is None
    assert module.is_cached
    assert module.load() is None


def test_dependencies_are_read_from_signature(package):
    module = package.define("view", lambda model, controller: None)

    assert module.dependencies == ["model", "controller"]


def test_dependencies_are_a_copy(package):
    module = package.define("view", lambda model: None)

    module.dependencies.append("other")

    assert module.dependencies == ["model"]


def test_module_needs_and_run_delegate_to_package(package):
    package.define("a", lambda: "A")
    package.define("b", lambda: "B")
    module = package.define("c")

    assert module.needs("a") == "A"
    assert module.needs("a b") == {"a": "A", "b": "B"}
    assert module.run("b") is None


def test_log_on_load_and_after_load(package, caplog):
    package.define("quiet", lambda: None)
    package.define("loud", lambda quiet: None, log_on_load=True, log_after_load=True)

    with caplog.at_level(logging.INFO, logger="pillar"):
        package.run("loud")
        package.run("loud")

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert messages == ["Loading [loud].", "Finished loading [loud]."]


def test_after_load_not_logged_when_definition_fails(package, caplog):
    def broken():
        raise ValueError("broken")

    package.define("broken", broken, log_on_load=True, log_after_load=True)

    with caplog.at_level(logging.INFO, logger="pillar"):
        with pytest.raises(ValueError):
            package.run("broken")

    messages = [r.getMessage() for r in caplog.records if r.levelno == logging.INFO]
    assert messages == ["Loading [broken]."]
