"""Run coverage scripts in the browser through Playwright."""

import logging
from typing import Any, Protocol

from playwright.async_api import Frame, Page

from js_coverage_keeper.options import DEFAULT_COVERAGE_VARIABLE

logger = logging.getLogger(__name__)


def read_coverage_script(variable: str = DEFAULT_COVERAGE_VARIABLE) -> str:
    """JavaScript that returns the in-page coverage global."""
    return f"() => window.{variable}"


def write_coverage_script(variable: str = DEFAULT_COVERAGE_VARIABLE) -> str:
    """JavaScript that replaces the in-page coverage global with its argument."""
    return f"(coverage) => {{ window.{variable} = coverage; }}"


READ_COVERAGE_SCRIPT = read_coverage_script()
WRITE_COVERAGE_SCRIPT = write_coverage_script()


class ScriptChannel(Protocol):
    """Anything that can evaluate a script in the page under test."""

    async def execute_script(self, script: str, *args: Any) -> Any: ...


class PageScriptChannel:
    """Evaluate scripts in a Playwright page or frame."""

    def __init__(self, page: Page | Frame):
        self._page = page

    @property
    def page(self) -> Page | Frame:
        return self._page

    async def execute_script(self, script: str, *args: Any) -> Any:
        """Evaluate a function expression in the page.

        Playwright passes a single argument to the function, so several
        arguments are sent as one list.
        """
        if not args:
            return await self._page.evaluate(script)
        if len(args) == 1:
            return await self._page.evaluate(script, args[0])
        return await self._page.evaluate(script, list(args))
