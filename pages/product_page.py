from contextlib import contextmanager
from types import MappingProxyType

from playwright.sync_api import TimeoutError as PWTimeout

from pages.base_page import BasePage
from testdata import TEST_URLS
from utils import DialogRaceError, ElementNotReady, log_step


class DialogOutcome:
    """Filled in once the guarded dialog has been accepted."""

    def __init__(self):
        self.message = None


class ProductPage(BasePage):
    path = TEST_URLS["product"]

    LOCATORS = MappingProxyType({
        "productName": "#tbodyid h2.name",
        "productPrice": "#tbodyid h3.price-container",
        "addToCartButton": "a.btn.btn-success.btn-lg",
    })

    def __init__(self, page, config):
        super().__init__(page, config)
        self._dialog_armed = False

    def get_locators(self):
        return self.LOCATORS

    def verify_page_loaded(self):
        log_step("Verifying product page is loaded")
        self._require("productName", "addToCartButton")

    def product_name(self):
        return self.get_element_text(self.LOCATORS["productName"])

    def product_price(self):
        return self.get_element_text(self.LOCATORS["productPrice"])

    @contextmanager
    def confirmation_dialog(self):
        """Accept the next native dialog raised inside the block.

        The handler is registered before the block runs, and the block only
        returns once the dialog has shown up and been accepted.
        """
        outcome = DialogOutcome()

        def accept(dialog):
            outcome.message = dialog.message
            dialog.accept()

        log_step("Arming confirmation dialog handler")
        self.page.once("dialog", accept)
        self._dialog_armed = True
        block_done = False
        try:
            with self.page.expect_event("dialog", timeout=self.timeout):
                yield outcome
                block_done = True
        except PWTimeout as e:
            # Only the dialog wait itself is reported as a missing dialog.
            if not block_done:
                raise
            raise ElementNotReady("dialog", "shown", "confirmation dialog", self.timeout) from e
        finally:
            self._dialog_armed = False
            if outcome.message is None:
                self.page.remove_listener("dialog", accept)

    def click_add_to_cart(self):
        if not self._dialog_armed:
            raise DialogRaceError(
                "click_add_to_cart() raises a native alert; call it inside confirmation_dialog()"
            )
        log_step("Adding product to cart")
        self.click_element(self.LOCATORS["addToCartButton"])

    def add_product_to_cart(self):
        """Click "Add to cart" and accept the alert; returns the alert text."""
        with self.confirmation_dialog() as outcome:
            self.click_add_to_cart()
        log_step(f"Accepted confirmation message: {outcome.message}")
        return outcome.message
