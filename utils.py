import json
import logging
import random
import re
import string
import time
from datetime import date as date_type, datetime
from pathlib import Path

from playwright.sync_api import TimeoutError as PWTimeout
from tenacity import (
    Retrying,
    before_sleep_log,
    stop_after_attempt,
    wait_exponential,
)


logging.basicConfig(
    level=logging.INFO,
    format="[%(levelname)s] %(asctime)s - %(message)s",
)
logger = logging.getLogger("storefront")


DEFAULT_TIMEOUT_MS = 30000
EXISTS_TIMEOUT_MS = 1000
SCREENSHOT_DIR = "test-results/screenshots"


class RecoverableError(Exception):
    """Raised for transient/browser timing issues that warrant a retry."""


class ElementNotReady(RecoverableError):
    """An element did not reach the awaited state before the timeout."""

    def __init__(self, selector, state, operation, elapsed_ms):
        self.selector = selector
        self.state = state
        self.operation = operation
        self.elapsed_ms = elapsed_ms
        super().__init__(
            f"{operation}: '{selector}' not {state} after {elapsed_ms} ms"
        )


class NavigationError(Exception):
    """A page did not reach its expected loaded state."""

    def __init__(self, target, reason):
        self.target = target
        self.reason = reason
        super().__init__(f"Could not load {target}: {reason}")


class AssertionFailed(AssertionError):
    """Observed page state differs from the expectation."""

    def __init__(self, what, expected, actual):
        self.what = what
        self.expected = expected
        self.actual = actual
        super().__init__(f"{what}: expected {expected!r}, got {actual!r}")


class DialogRaceError(RuntimeError):
    """A dialog-triggering action ran without a dialog handler armed first."""


def _elapsed_ms(started):
    return int((time.monotonic() - started) * 1000)


def _wait_for_state(page, selector, state, timeout, operation, started=None):
    started = time.monotonic() if started is None else started
    element = page.locator(selector).first
    try:
        element.wait_for(state=state, timeout=timeout)
    except PWTimeout as e:
        raise ElementNotReady(selector, state, operation, _elapsed_ms(started)) from e
    return element


def wait_for_visible(page, selector, timeout=DEFAULT_TIMEOUT_MS, operation="wait for element"):
    return _wait_for_state(page, selector, "visible", timeout, operation)


def wait_for_clickable(page, selector, timeout=DEFAULT_TIMEOUT_MS, operation="wait for clickable"):
    """Visible, then still attached, both within the same `timeout` budget."""
    started = time.monotonic()
    _wait_for_state(page, selector, "visible", timeout, operation, started)
    remaining = max(timeout - _elapsed_ms(started), 1)
    return _wait_for_state(page, selector, "attached", remaining, operation, started)


def wait_for_hidden(page, selector, timeout=DEFAULT_TIMEOUT_MS, operation="wait for hidden"):
    _wait_for_state(page, selector, "hidden", timeout, operation)


def click_locator(element, selector, timeout=DEFAULT_TIMEOUT_MS, operation="click", started=None):
    """Click `element`, reporting a click timeout as ElementNotReady for `selector`."""
    started = time.monotonic() if started is None else started
    try:
        element.click(timeout=timeout)
    except PWTimeout as e:
        raise ElementNotReady(selector, "clickable", operation, _elapsed_ms(started)) from e


def safe_click(page, selector, timeout=DEFAULT_TIMEOUT_MS):
    started = time.monotonic()
    element = wait_for_clickable(page, selector, timeout, operation="click")
    click_locator(element, selector, timeout, "click", started)


def safe_fill(page, selector, text, timeout=DEFAULT_TIMEOUT_MS):
    """Clear the field before typing so earlier input never leaks through."""
    started = time.monotonic()
    element = wait_for_visible(page, selector, timeout, operation="fill")
    try:
        element.clear(timeout=timeout)
        element.fill(text, timeout=timeout)
    except PWTimeout as e:
        raise ElementNotReady(selector, "editable", "fill", _elapsed_ms(started)) from e


def element_exists(page, selector, timeout=EXISTS_TIMEOUT_MS):
    try:
        page.locator(selector).first.wait_for(state="attached", timeout=timeout)
    except PWTimeout:
        return False
    return True


def get_element_text(page, selector, timeout=DEFAULT_TIMEOUT_MS, state="visible"):
    # state="attached" reads boxes that render empty, which never become visible.
    element = _wait_for_state(page, selector, state, timeout, "read text")
    return element.text_content() or ""


def get_element_attribute(page, selector, attribute, timeout=DEFAULT_TIMEOUT_MS):
    element = _wait_for_state(page, selector, "attached", timeout, f"read attribute {attribute}")
    return element.get_attribute(attribute)


def scroll_into_view(page, selector, timeout=DEFAULT_TIMEOUT_MS):
    element = wait_for_visible(page, selector, timeout, operation="scroll into view")
    element.scroll_into_view_if_needed(timeout=timeout)


def wait_for_page_load(page, timeout=DEFAULT_TIMEOUT_MS):
    page.wait_for_load_state("networkidle", timeout=timeout)
    page.wait_for_load_state("domcontentloaded", timeout=timeout)


def wait_for_api_response(page, url_pattern, action, timeout=DEFAULT_TIMEOUT_MS):
    """Run `action` and return the JSON body of the first matching response.

    The waiter is registered before `action` runs, so a fast response is
    never missed. `url_pattern` is a substring or a compiled regex.
    """
    if isinstance(url_pattern, str):
        def matches(response):
            return url_pattern in response.url
    else:
        def matches(response):
            return bool(url_pattern.search(response.url))

    with page.expect_response(matches, timeout=timeout) as response_info:
        action()
    return response_info.value.json()


def clear_browser_data(page):
    page.context.clear_cookies()
    page.evaluate("() => { localStorage.clear(); sessionStorage.clear(); }")


def set_viewport_size(page, viewport):
    page.set_viewport_size({"width": viewport.width, "height": viewport.height})


def _sanitize(name):
    return re.sub(r"[^A-Za-z0-9_.-]+", "_", name).strip("_") or "screenshot"


def take_screenshot(page, name, directory=SCREENSHOT_DIR):
    timestamp = datetime.now().isoformat().replace(":", "-").replace(".", "-")
    path = Path(directory) / f"{_sanitize(name)}-{timestamp}.png"
    path.parent.mkdir(parents=True, exist_ok=True)
    page.screenshot(path=str(path), full_page=True)
    logger.info("Screenshot saved to %s", path)
    return path


def retry_with_backoff(operation, max_retries=3, base_delay_ms=1000, sleep=time.sleep):
    """Call `operation` until it succeeds, at most `max_retries + 1` times.

    Sleeps `base_delay_ms * 2**attempt` between attempts, without jitter, and
    re-raises the last error unchanged once the budget is spent.
    """
    if max_retries < 0:
        raise ValueError(f"max_retries must be >= 0, got {max_retries}")
    retrying = Retrying(
        reraise=True,
        stop=stop_after_attempt(max_retries + 1),
        wait=wait_exponential(multiplier=base_delay_ms / 1000, exp_base=2),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        sleep=sleep,
    )
    return retrying(operation)


def generate_random_string(length=10):
    return "".join(random.choices(string.ascii_letters + string.digits, k=length))


def generate_random_email():
    return f"{generate_random_string(8)}@example.com"


def generate_random_number(min_value=1, max_value=1000):
    return random.randint(min_value, max_value)


def format_date(date=None, fmt="YYYY-MM-DD"):
    if date is None:
        date = date_type.today()
    return (
        fmt.replace("YYYY", f"{date.year:04d}")
        .replace("MM", f"{date.month:02d}")
        .replace("DD", f"{date.day:02d}")
    )


def log_step(step):
    logger.info("[STEP] %s", step)


def log_test_data(data):
    logger.info("[TEST DATA] %s", json.dumps(data, indent=2, default=str))
