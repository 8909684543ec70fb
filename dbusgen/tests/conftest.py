"""Unit tests configuration file."""

import os

import pytest

from dbusgen.generator import parse

FIXTURE_DIR = os.path.join(os.path.dirname(os.path.realpath(__file__)), "generator")


def pytest_configure(config):
    """Disable verbose output when running tests."""
    terminal = config.pluginmanager.getplugin("terminal")
    if terminal:
        terminal.TerminalReporter.showfspath = False


@pytest.fixture
def spec_path():
    return os.path.join(FIXTURE_DIR, "spec.xml")


@pytest.fixture
def spec(spec_path):
    with open(spec_path, "rb") as f:
        return parse(f.read())
