"""dbusgen - Go declaration generator for D-Bus interface specifications."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("dbusgen")
except PackageNotFoundError:
    __version__ = "(local)"
