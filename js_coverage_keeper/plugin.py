"""Coverage plugin driven by the host test runner's lifecycle."""

import logging
import uuid
from collections.abc import Callable
from pathlib import Path
from typing import Any

from playwright.async_api import Frame, Page

from js_coverage_keeper.channel import (
    PageScriptChannel,
    ScriptChannel,
    read_coverage_script,
    write_coverage_script,
)
from js_coverage_keeper.errors import ChannelNotAttachedError
from js_coverage_keeper.options import (
    CoveragePluginOptions,
    WrappableFunction,
    validate_function,
    validate_options,
)
from js_coverage_keeper.preserver import install, preserve_function
from js_coverage_keeper.writer import JsonFileWriter, JsonWriter

logger = logging.getLogger(__name__)


class CoveragePlugin:
    """Preserve Istanbul coverage across navigations and save it after each test.

    Construction validates the options and then wraps every configured
    function in place. The script channel may be supplied later with
    ``attach()``; anything that talks to the page before then raises
    ``ChannelNotAttachedError``.

    Usage:
        plugin = CoveragePlugin(CoveragePluginOptions(output_path=".nyc_output"))
        plugin.attach(page)
        plugin.preserve(WrappableFunction.bound(page, "goto"))
        ...
        await plugin.post_test()
    """

    def __init__(
        self,
        options: CoveragePluginOptions,
        channel: ScriptChannel | None = None,
        writer: JsonWriter | None = None,
        id_factory: Callable[[], Any] = uuid.uuid4,
    ):
        self.options = validate_options(options)
        self.writer = writer if writer is not None else JsonFileWriter()
        self.id_factory = id_factory
        self._channel = channel
        self._read_script = read_coverage_script(self.options.coverage_variable)
        self._write_script = write_coverage_script(self.options.coverage_variable)
        self.wrapped: list[Callable[..., Any]] = []

        installed: list[WrappableFunction] = []
        try:
            for target in self.options.functions:
                self.wrapped.append(self._wrap(target))
                installed.append(target)
        except Exception:
            for target in reversed(installed):
                install(target, target.function)
            raise

    @property
    def output_path(self) -> Path:
        return Path(self.options.output_path)

    @property
    def is_attached(self) -> bool:
        return self._channel is not None

    @property
    def channel(self) -> ScriptChannel:
        """The script channel into the page under test.

        Raises:
            ChannelNotAttachedError: If no channel has been supplied yet
        """
        if self._channel is None:
            raise ChannelNotAttachedError(
                "No script channel attached; call attach() with a page first"
            )
        return self._channel

    @channel.setter
    def channel(self, channel: ScriptChannel | None) -> None:
        self._channel = channel

    def attach(self, target: Page | Frame | ScriptChannel) -> ScriptChannel:
        """Use a Playwright page (or any ScriptChannel) for coverage scripts."""
        if isinstance(target, (Page, Frame)):
            target = PageScriptChannel(target)
        elif not callable(getattr(target, "execute_script", None)):
            raise TypeError(
                f"Cannot attach {type(target).__name__}: expected an async Playwright "
                "Page or Frame, or an object with an async execute_script()"
            )
        self._channel = target
        return target

    def preserve(self, target: WrappableFunction) -> Callable[..., Any]:
        """Wrap one more function after construction.

        Useful for methods of pages created once the plugin already exists.

        Raises:
            ArgumentError: If the record cannot be wrapped
        """
        validate_function(target)
        wrapper = self._wrap(target)
        self.wrapped.append(wrapper)
        return wrapper

    def _wrap(self, target: WrappableFunction) -> Callable[..., Any]:
        return preserve_function(
            target,
            lambda: self.channel,
            read_script=self._read_script,
            write_script=self._write_script,
        )

    async def post_test(self) -> Path:
        """Gather the page's coverage and write it to a fresh JSON artifact.

        Returns:
            Path of the written artifact
        """
        coverage = await self.channel.execute_script(self._read_script)
        if coverage is None:
            logger.warning(
                f"Page has no window.{self.options.coverage_variable}; "
                "is it instrumented?"
            )

        artifact = self.output_path / f"{self.id_factory()}.json"
        self.writer.write_json_sync(artifact, coverage)
        logger.info(
            f"Successfully gathered coverage from the page and wrote it to {artifact}"
        )
        return artifact

    async def teardown(self) -> None:
        """Lifecycle hook run once the session ends. Nothing to clean up."""
