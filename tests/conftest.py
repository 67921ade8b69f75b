"""Pytest configuration: resolved config, Playwright browser and page objects."""
import pytest
from playwright.sync_api import Error as PlaywrightError, sync_playwright

from config import is_headless, resolve_config
from pages import Pages
from utils import log_step, take_screenshot


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_runtest_makereport(item, call):
    # Expose each phase's report to fixtures (item.rep_setup, item.rep_call...).
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


@pytest.fixture(scope="session")
def app_config():
    """Resolved once per test session and shared read-only."""
    return resolve_config()


@pytest.fixture(scope="session")
def browser(app_config):
    with sync_playwright() as p:
        try:
            browser = p.chromium.launch(
                headless=is_headless(app_config),
                slow_mo=app_config.slow_mo,
            )
        except PlaywrightError as e:
            pytest.skip(f"Chromium is not available: {e}")
        yield browser
        browser.close()


@pytest.fixture
def page(browser, app_config, request):
    """Fresh context per test; screenshot on failure before it is closed."""
    context = browser.new_context(
        viewport={"width": app_config.viewport.width, "height": app_config.viewport.height},
    )
    page = context.new_page()
    page.set_default_timeout(app_config.timeout)
    yield page

    report = getattr(request.node, "rep_call", None)
    if report is not None and report.failed:
        log_step(f"Test failed: {request.node.nodeid}")
        take_screenshot(page, f"failed-{request.node.name}")
    context.close()


@pytest.fixture
def pages(page, app_config):
    return Pages(page, app_config)


@pytest.fixture
def logged_in(pages):
    pages.home.go_to_home_page()
    pages.home.valid_login()
    return pages
