"""pytest integration: one CoveragePlugin per test, saved on teardown.

Enable with ``-p js_coverage_keeper.pytest_plugin`` or
``pytest_plugins = ["js_coverage_keeper.pytest_plugin"]``. The page handed to
``attach()`` must come from ``playwright.async_api``; the sync ``page`` fixture
of pytest-playwright will not work. With an async page fixture of your own::

    @pytest.mark.asyncio
    async def test_checkout(async_page, js_coverage):
        page = async_page
        js_coverage.attach(page)
        js_coverage.preserve(WrappableFunction.bound(page, "goto"))
        await page.goto(...)
"""

import logging
from pathlib import Path

import pytest
import pytest_asyncio

from js_coverage_keeper.options import CoveragePluginOptions
from js_coverage_keeper.plugin import CoveragePlugin

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = ".nyc_output"


def pytest_addoption(parser):
    """Register command line and ini options."""
    group = parser.getgroup("js-coverage")
    group.addoption(
        "--js-coverage-dir",
        action="store",
        default=None,
        help=f"Directory for per-test Istanbul coverage files (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.addini(
        "js_coverage_dir",
        help="Directory for per-test Istanbul coverage files",
        default=DEFAULT_OUTPUT_DIR,
    )


def resolve_output_dir(config: pytest.Config) -> Path:
    """Pick the artifact directory: command line, then ini, then default."""
    value = config.getoption("--js-coverage-dir", default=None)
    if not value:
        value = config.getini("js_coverage_dir") or DEFAULT_OUTPUT_DIR
    path = Path(value)
    if not path.is_absolute():
        path = Path(config.rootpath) / path
    return path


@pytest_asyncio.fixture
async def js_coverage(request):
    """A CoveragePlugin whose coverage is written once the test finishes."""
    plugin = CoveragePlugin(
        CoveragePluginOptions(output_path=resolve_output_dir(request.config))
    )
    yield plugin

    if plugin.is_attached:
        await plugin.post_test()
    else:
        logger.info(f"No page attached in {request.node.nodeid}; skipping coverage")
    await plugin.teardown()
