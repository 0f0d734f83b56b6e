"""Tests for page loader."""

import pytest

from js_coverage_keeper.page_loader import PageLoader, PageLoadError


class TestPageLoader:
    def given_local_file_url(self, fixtures_path, name="instrumented_page.html"):
        self.url = f"file://{fixtures_path}/{name}"

    def given_invalid_url(self):
        self.url = "not-a-valid-url"

    def given_unreachable_url(self):
        self.url = "https://localhost:99999/nonexistent"

    async def when_page_is_loaded(self):
        async with PageLoader() as loader:
            self.page = await loader.load(self.url)
            self.title = await self.page.title()
            self.coverage = await self.page.evaluate("() => window.__coverage__")

    async def when_page_load_fails(self):
        async with PageLoader() as loader:
            with pytest.raises(PageLoadError) as exc_info:
                await loader.load(self.url)
            self.error = exc_info.value

    def then_error_contains(self, text):
        assert text in str(self.error)

    def then_error_phase_is(self, phase):
        assert self.error.phase == phase

    @pytest.mark.asyncio
    async def test_loads_local_file(self, fixtures_path):
        """PageLoader loads a local HTML file and runs its scripts."""
        self.given_local_file_url(fixtures_path)
        await self.when_page_is_loaded()
        assert self.title == "Instrumented Page"
        assert self.coverage["/src/app.js"]["s"]["0"] == 1

    @pytest.mark.asyncio
    async def test_raises_error_for_invalid_url(self):
        """PageLoader raises PageLoadError for invalid URL schemes."""
        self.given_invalid_url()
        await self.when_page_load_fails()
        self.then_error_contains("Invalid URL")
        self.then_error_phase_is("validation")

    @pytest.mark.asyncio
    async def test_raises_error_for_unreachable_page(self):
        """PageLoader raises PageLoadError with phase='loading' for unreachable URLs."""
        self.given_unreachable_url()
        await self.when_page_load_fails()
        self.then_error_phase_is("loading")

    @pytest.mark.asyncio
    async def test_close_can_run_twice(self):
        """Closing explicitly inside the block leaves nothing for exit to trip on."""
        async with PageLoader() as loader:
            await loader.close()
        await loader.close()
