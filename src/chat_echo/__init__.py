"""chat-echo: activity telemetry for editor sessions and AI conversations."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("chat-echo")
except PackageNotFoundError:
    # Running from a source checkout that was never installed
    __version__ = "0.0.0-dev"
