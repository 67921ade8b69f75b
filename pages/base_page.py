from abc import ABC, abstractmethod
from typing import Mapping, Optional

from playwright.sync_api import Error as PlaywrightError, Locator, Page
from playwright.sync_api import TimeoutError as PWTimeout

from config import EnvironmentConfig
from utils import (
    ElementNotReady,
    NavigationError,
    get_element_attribute,
    get_element_text,
    log_step,
    safe_click,
    safe_fill,
    scroll_into_view,
    take_screenshot,
    wait_for_clickable,
    wait_for_page_load,
    wait_for_visible,
)


class BasePage(ABC):
    """Navigation and element helpers shared by every page object.

    Subclasses declare a read-only ``LOCATORS`` mapping, the ``path`` they
    live at, and how to tell that they finished loading.
    """

    path: str = "/"

    def __init__(self, page: Page, config: EnvironmentConfig) -> None:
        self.page = page
        self.config = config
        self.base_url = config.base_url.rstrip("/")
        self.timeout = config.timeout

    @abstractmethod
    def get_locators(self) -> Mapping[str, str]:
        """Symbolic name -> selector for this page."""

    @abstractmethod
    def verify_page_loaded(self) -> None:
        """Raise NavigationError unless the page is ready for interaction."""

    # Navigation

    def navigate_to(self, path: str = "") -> None:
        url = f"{self.base_url}{path}"
        log_step(f"Navigating to: {url}")
        try:
            self.page.goto(url, timeout=self.timeout)
        except PlaywrightError as e:
            raise NavigationError(url, str(e)) from e
        self.wait_for_page_to_load()

    def open(self) -> None:
        self.navigate_to(self.path)
        self.verify_page_loaded()

    @property
    def title(self) -> str:
        return self.page.title()

    @property
    def current_url(self) -> str:
        return self.page.url

    def reload(self) -> None:
        log_step("Refreshing page")
        self.page.reload(timeout=self.timeout)
        self.wait_for_page_to_load()

    def go_back(self) -> None:
        log_step("Going back in browser history")
        self.page.go_back(timeout=self.timeout)
        self.wait_for_page_to_load()

    def go_forward(self) -> None:
        log_step("Going forward in browser history")
        self.page.go_forward(timeout=self.timeout)
        self.wait_for_page_to_load()

    def wait_for_page_to_load(self) -> None:
        try:
            wait_for_page_load(self.page, self.timeout)
        except PWTimeout as e:
            raise NavigationError(self.page.url, str(e)) from e

    def wait_for_network_idle(self) -> None:
        self.page.wait_for_load_state("networkidle", timeout=self.timeout)

    def wait_for_dom_content_loaded(self) -> None:
        self.page.wait_for_load_state("domcontentloaded", timeout=self.timeout)

    def wait_for_url_to_contain(self, text: str, timeout: Optional[int] = None) -> None:
        try:
            self.page.wait_for_url(f"**/*{text}*", timeout=self._timeout(timeout))
        except PWTimeout as e:
            raise NavigationError(f"URL containing {text!r}", str(e)) from e

    def take_screenshot(self, name: str):
        return take_screenshot(self.page, name)

    # Elements

    def wait_for_element(self, selector: str, timeout: Optional[int] = None) -> Locator:
        return wait_for_visible(self.page, selector, self._timeout(timeout))

    def wait_for_clickable_element(self, selector: str, timeout: Optional[int] = None) -> Locator:
        return wait_for_clickable(self.page, selector, self._timeout(timeout))

    def click_element(self, selector: str, timeout: Optional[int] = None) -> None:
        log_step(f"Clicking element: {selector}")
        safe_click(self.page, selector, self._timeout(timeout))

    def fill_input(self, selector: str, text: str, timeout: Optional[int] = None) -> None:
        log_step(f"Filling input {selector} with: {text}")
        safe_fill(self.page, selector, text, self._timeout(timeout))

    def get_element_text(self, selector: str) -> str:
        return get_element_text(self.page, selector, self.timeout).strip()

    def get_element_attribute(self, selector: str, attribute: str) -> Optional[str]:
        return get_element_attribute(self.page, selector, attribute, self.timeout)

    def is_element_visible(self, selector: str) -> bool:
        # No waiting: reports the state right now.
        return self.page.locator(selector).first.is_visible()

    def is_element_enabled(self, selector: str) -> bool:
        return self.wait_for_element(selector).is_enabled()

    def wait_for_text_in_element(self, selector: str, text: str, timeout: Optional[int] = None) -> Locator:
        return wait_for_visible(
            self.page,
            f"{selector} >> text={text}",
            self._timeout(timeout),
            operation=f"wait for text {text!r}",
        )

    def scroll_to_element(self, selector: str) -> None:
        scroll_into_view(self.page, selector, self.timeout)

    def _timeout(self, timeout: Optional[int]) -> int:
        # 0 is a real budget; only None falls back to the page default.
        return self.timeout if timeout is None else timeout

    def _require(self, *names: str) -> None:
        """Wait for the named locators, reporting a failure as NavigationError."""
        locators = self.get_locators()
        for name in names:
            try:
                self.wait_for_element(locators[name])
            except ElementNotReady as e:
                raise NavigationError(type(self).__name__, str(e)) from e
