"""Wrap functions so in-page coverage survives the page transitions they cause."""

import functools
import inspect
import logging
from collections.abc import Callable, Mapping, MutableMapping
from typing import Any

from js_coverage_keeper.channel import (
    READ_COVERAGE_SCRIPT,
    WRITE_COVERAGE_SCRIPT,
    ScriptChannel,
)
from js_coverage_keeper.options import WrappableFunction

logger = logging.getLogger(__name__)


def make_preserving_wrapper(
    function: Callable[..., Any],
    resolve_channel: Callable[[], ScriptChannel],
    read_script: str = READ_COVERAGE_SCRIPT,
    write_script: str = WRITE_COVERAGE_SCRIPT,
) -> Callable[..., Any]:
    """Build an async wrapper that saves and restores coverage around a call.

    The wrapper reads the coverage global, calls ``function`` with the exact
    arguments it received (awaiting the result if it is awaitable), writes the
    saved coverage back and returns the function's result. The snapshot lives
    in the wrapper's own frame, so a call only ever restores what it read.

    If ``function`` raises, the restore is still attempted. A failing restore
    on that path is logged and the original exception propagates.

    Args:
        function: The callable to wrap
        resolve_channel: Returns the channel to use; called on every invocation
            so a channel attached after wrapping is picked up
        read_script: Script returning the coverage global
        write_script: Script assigning its single argument to the coverage global

    Returns:
        The wrapper, with the unwrapped callable as ``original_function``
    """

    @functools.wraps(function)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        channel = resolve_channel()
        snapshot = await channel.execute_script(read_script)

        try:
            result = function(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
        except BaseException:
            try:
                await channel.execute_script(write_script, snapshot)
            except Exception as restore_error:
                logger.warning(
                    f"Could not restore coverage after {_describe(function)} failed: "
                    f"{restore_error}"
                )
            raise

        await channel.execute_script(write_script, snapshot)
        return result

    wrapper.original_function = function
    return wrapper


def install(target: WrappableFunction, wrapper: Callable[..., Any]) -> None:
    """Replace ``target.owner``'s ``target.name`` slot with ``wrapper``.

    This mutates the owner: later lookups through that attribute (or key)
    see the wrapper.
    """
    if isinstance(target.owner, MutableMapping):
        target.owner[target.name] = wrapper
    elif isinstance(target.owner, Mapping):
        raise TypeError(f"Cannot install {target.name!r} into a read-only mapping")
    else:
        setattr(target.owner, target.name, wrapper)


def preserve_function(
    target: WrappableFunction,
    resolve_channel: Callable[[], ScriptChannel],
    read_script: str = READ_COVERAGE_SCRIPT,
    write_script: str = WRITE_COVERAGE_SCRIPT,
) -> Callable[..., Any]:
    """Wrap ``target.function`` and install the wrapper in its owner.

    Returns:
        The installed wrapper
    """
    wrapper = make_preserving_wrapper(
        target.function, resolve_channel, read_script, write_script
    )
    install(target, wrapper)
    logger.info(f"Preserving coverage around {_describe(target.function)}")
    return wrapper


def _describe(function: Callable[..., Any]) -> str:
    return getattr(function, "__qualname__", None) or repr(function)
