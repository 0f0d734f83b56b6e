"""Keep Istanbul browser coverage across navigations and save it per test."""

from js_coverage_keeper.channel import (
    READ_COVERAGE_SCRIPT,
    WRITE_COVERAGE_SCRIPT,
    PageScriptChannel,
    ScriptChannel,
)
from js_coverage_keeper.errors import (
    ArgumentError,
    ChannelNotAttachedError,
    CoverageKeeperError,
)
from js_coverage_keeper.options import (
    CoveragePluginOptions,
    WrappableFunction,
    validate_options,
)
from js_coverage_keeper.plugin import CoveragePlugin
from js_coverage_keeper.preserver import (
    install,
    make_preserving_wrapper,
    preserve_function,
)
from js_coverage_keeper.writer import JsonFileWriter, JsonWriter

__all__ = [
    # Plugin
    "CoveragePlugin",
    # Options
    "CoveragePluginOptions",
    "WrappableFunction",
    "validate_options",
    # Preserving
    "make_preserving_wrapper",
    "install",
    "preserve_function",
    # Collaborators
    "ScriptChannel",
    "PageScriptChannel",
    "READ_COVERAGE_SCRIPT",
    "WRITE_COVERAGE_SCRIPT",
    "JsonWriter",
    "JsonFileWriter",
    # Errors
    "CoverageKeeperError",
    "ArgumentError",
    "ChannelNotAttachedError",
]
