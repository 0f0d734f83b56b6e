"""Plugin options and their validation."""

import os
import re
from collections.abc import Callable, Mapping, MutableMapping, Sequence
from dataclasses import dataclass
from typing import Any

from js_coverage_keeper.errors import ArgumentError

DEFAULT_COVERAGE_VARIABLE = "__coverage__"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


@dataclass(frozen=True)
class WrappableFunction:
    """A callable together with the slot it is installed in.

    ``owner`` is the object (or mapping) holding the callable and ``name`` is
    the attribute (or key) under which it lives. The wrapper replaces
    ``owner.name`` in place.
    """

    function: Callable[..., Any]
    owner: Any
    name: str

    @classmethod
    def bound(cls, owner: Any, name: str) -> "WrappableFunction":
        """Build a record by looking ``name`` up on ``owner``."""
        if isinstance(owner, Mapping):
            function = owner.get(name)
        else:
            function = getattr(owner, name, None)
        return cls(function=function, owner=owner, name=name)


@dataclass(frozen=True)
class CoveragePluginOptions:
    """Construction-time options for CoveragePlugin."""

    output_path: str | os.PathLike | None = None
    functions: Sequence[WrappableFunction] = ()
    coverage_variable: str = DEFAULT_COVERAGE_VARIABLE


def validate_function(target: Any, index: int | None = None) -> WrappableFunction:
    """Check that a single function record can be wrapped and reinstalled.

    Raises:
        ArgumentError: If the record is unusable
    """
    where = "functions" if index is None else f"functions[{index}]"
    if not isinstance(target, WrappableFunction):
        raise ArgumentError(
            f"{where} must be a WrappableFunction, got {type(target).__name__}",
            field="functions",
        )
    if not callable(target.function):
        raise ArgumentError(f"{where} is not callable", field="functions")
    if target.owner is None:
        raise ArgumentError(f"{where} has no owner to install into", field="functions")
    if isinstance(target.owner, Mapping) and not isinstance(target.owner, MutableMapping):
        raise ArgumentError(
            f"{where} owner is a read-only mapping", field="functions"
        )
    if not isinstance(target.name, str) or not target.name:
        raise ArgumentError(
            f"{where} needs a non-empty attribute name", field="functions"
        )
    return target


def validate_options(options: CoveragePluginOptions) -> CoveragePluginOptions:
    """Validate plugin options, failing fast on the first problem.

    Args:
        options: The options to check

    Returns:
        The same options, unchanged

    Raises:
        ArgumentError: If any option is invalid
    """
    if not isinstance(options, CoveragePluginOptions):
        raise ArgumentError(
            f"options must be CoveragePluginOptions, got {type(options).__name__}"
        )

    output_path = options.output_path
    if output_path is None:
        raise ArgumentError("outputPath is required", field="output_path")
    if not isinstance(output_path, (str, os.PathLike)):
        raise ArgumentError(
            f"outputPath must be a string, got {type(output_path).__name__}",
            field="output_path",
        )
    if not os.fspath(output_path):
        raise ArgumentError("outputPath must not be empty", field="output_path")

    # str is a Sequence too, but never a list of functions
    if not isinstance(options.functions, (list, tuple)):
        raise ArgumentError(
            f"functions must be a list, got {type(options.functions).__name__}",
            field="functions",
        )
    for index, target in enumerate(options.functions):
        validate_function(target, index)

    variable = options.coverage_variable
    if not isinstance(variable, str) or not _IDENTIFIER.match(variable):
        raise ArgumentError(
            f"coverage_variable must be a JavaScript identifier, got {variable!r}",
            field="coverage_variable",
        )

    return options
