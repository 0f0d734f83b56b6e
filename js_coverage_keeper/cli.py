"""Command-line interface for js-coverage-keeper."""

import argparse
import asyncio
import logging
import sys

from playwright.async_api import Error as PlaywrightError

from js_coverage_keeper.errors import CoverageKeeperError
from js_coverage_keeper.options import CoveragePluginOptions, WrappableFunction
from js_coverage_keeper.page_loader import PageLoader, PageLoadError
from js_coverage_keeper.plugin import CoveragePlugin

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIR = ".nyc_output"


def setup_logging(verbose: bool = False):
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="js-coverage-keeper",
        description="Gather Istanbul coverage from instrumented web pages",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    collect_parser = subparsers.add_parser(
        "collect",
        help="Load a page and save its coverage object (default)",
    )
    collect_parser.add_argument(
        "url",
        help="URL to load (http, https, or file://)",
    )
    collect_parser.add_argument(
        "--output-dir",
        "-o",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for coverage artifacts (default: {DEFAULT_OUTPUT_DIR})",
    )
    collect_parser.add_argument(
        "--reload",
        type=int,
        default=0,
        metavar="N",
        help="Reload the page N times, keeping coverage, before saving (default: 0)",
    )
    collect_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log progress to stderr",
    )

    return parser


def parse_args(args: list[str]) -> argparse.Namespace:
    """Parse command-line arguments, treating a bare URL as 'collect URL'."""
    parser = create_parser()

    if args and not args[0].startswith("-") and args[0] != "collect":
        args = ["collect"] + args

    return parser.parse_args(args)


async def run_collect(url: str, output_dir: str, reloads: int = 0) -> int:
    """Run the collect command.

    Args:
        url: URL of an instrumented page
        output_dir: Directory for the coverage artifact
        reloads: Number of coverage-preserving reloads before collecting

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    logger.info(f"Collecting coverage from {url}")
    try:
        async with PageLoader() as loader:
            page = await loader.load(url)

            plugin = CoveragePlugin(CoveragePluginOptions(output_path=output_dir))
            plugin.attach(page)
            plugin.preserve(WrappableFunction.bound(page, "reload"))

            for _ in range(reloads):
                await page.reload()

            artifact = await plugin.post_test()
            await plugin.teardown()
    except PageLoadError as e:
        logger.error(f"Page load error ({e.phase}): {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except (CoverageKeeperError, PlaywrightError, OSError) as e:
        logger.error(f"Coverage collection failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(artifact)
    return 0


async def run_cli(args: list[str]) -> int:
    """Run the CLI with the given arguments.

    Args:
        args: Command-line arguments (without program name)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    try:
        parsed = parse_args(args)
    except SystemExit as e:
        return e.code if e.code else 1

    if parsed.command is None:
        create_parser().print_help(sys.stderr)
        return 1

    setup_logging(parsed.verbose)

    if parsed.reload < 0:
        print("Error: --reload must not be negative", file=sys.stderr)
        return 2

    return await run_collect(parsed.url, parsed.output_dir, parsed.reload)


def main():
    """Entry point for the CLI."""
    exit_code = asyncio.run(run_cli(sys.argv[1:]))
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
