import re
from types import MappingProxyType

from playwright.sync_api import expect

from pages.base_page import BasePage
from testdata import ORDER_FORMS, SUCCESS_MESSAGES, TEST_URLS
from utils import AssertionFailed, get_element_text, log_step, wait_for_hidden

DEFAULT_ORDER = ORDER_FORMS["default"]

DETAIL_LINE = re.compile(r"^\s*([A-Za-z][A-Za-z ]*?)\s*:\s*(.*?)\s*$")


def parse_purchase_details(text):
    """Turn the confirmation body ("Id: 1\\nAmount: 360 USD\\n...") into a dict."""
    details = {}
    for line in text.splitlines():
        match = DETAIL_LINE.match(line)
        if match:
            details[match.group(1)] = match.group(2)
    return details


class CartPage(BasePage):
    path = TEST_URLS["cart"]

    LOCATORS = MappingProxyType({
        "cartTable": "#tbodyid",
        "cartItems": "#tbodyid tr",
        "cartCells": "#tbodyid tr td",
        "cartItemTitles": "#tbodyid tr td:nth-child(2)",
        "cartTotal": "#totalp",
        "button_placeOrder": "button[data-target='#orderModal']",
        "orderModal": "#orderModal",
        "input_Name": "input[id='name']",
        "input_Country": "input[id='country']",
        "input_City": "input[id='city']",
        "input_CreditCard": "input[id='card']",
        "input_Month": "input[id='month']",
        "input_Year": "input[id='year']",
        "button_purchase": "button[onclick='purchaseOrder()']",
        "confirmationModal": ".sweet-alert",
        "confirmationTitle": ".sweet-alert h2",
        "confirmationDetails": ".sweet-alert p.lead",
        "button_ok": "button.confirm.btn.btn-lg.btn-primary",
    })

    def get_locators(self):
        return self.LOCATORS

    def verify_page_loaded(self):
        log_step("Verifying cart page is loaded")
        self.wait_for_url_to_contain("cart")
        self._require("button_placeOrder")

    def click_place_order_button(self):
        log_step("Clicking Place Order button")
        self.click_element(self.LOCATORS["button_placeOrder"])
        self.wait_for_element(self.LOCATORS["orderModal"])

    def complete_placement_form(
        self,
        name=DEFAULT_ORDER.name,
        country=DEFAULT_ORDER.country,
        city=DEFAULT_ORDER.city,
        card=DEFAULT_ORDER.card,
        month=DEFAULT_ORDER.month,
        year=DEFAULT_ORDER.year,
    ):
        log_step("Filling place order form")
        self.fill_input(self.LOCATORS["input_Name"], name)
        self.fill_input(self.LOCATORS["input_Country"], country)
        self.fill_input(self.LOCATORS["input_City"], city)
        self.fill_input(self.LOCATORS["input_CreditCard"], card)
        self.fill_input(self.LOCATORS["input_Month"], month)
        self.fill_input(self.LOCATORS["input_Year"], year)

    def click_purchase_button(self):
        log_step("Clicking Purchase button")
        self.click_element(self.LOCATORS["button_purchase"])

    def validate_purchase_confirmation_modal(self):
        """Check the sweet-alert confirmation, dismiss it, and return its details."""
        log_step("Validating purchase confirmation modal")
        self.wait_for_element(self.LOCATORS["confirmationModal"])

        title = self.get_element_text(self.LOCATORS["confirmationTitle"])
        expected = SUCCESS_MESSAGES["order_placed"]
        if title != expected:
            raise AssertionFailed("purchase confirmation title", expected, title)

        details = parse_purchase_details(
            self.page.locator(self.LOCATORS["confirmationDetails"]).first.inner_text()
        )
        self.click_element(self.LOCATORS["button_ok"])
        wait_for_hidden(self.page, self.LOCATORS["confirmationModal"], self.timeout,
                        operation="dismiss purchase confirmation")
        return details

    def place_order(self, form=DEFAULT_ORDER):
        self.click_place_order_button()
        self.complete_placement_form(
            name=form.name,
            country=form.country,
            city=form.city,
            card=form.card,
            month=form.month,
            year=form.year,
        )
        self.click_purchase_button()
        return self.validate_purchase_confirmation_modal()

    def cart_product_names(self):
        titles = self.page.locator(self.LOCATORS["cartItemTitles"])
        return [text.strip() for text in titles.all_inner_texts()]

    def cart_total(self):
        # An empty cart renders #totalp with no text, so it is never "visible".
        text = get_element_text(self.page, self.LOCATORS["cartTotal"], self.timeout,
                                state="attached").strip()
        return int(text) if text.isdigit() else 0

    def validate_product_on_cart(self, expected_product):
        log_step(f"Validating product {expected_product} is present in cart")
        cells = self.LOCATORS["cartCells"]
        match = self.page.locator(cells).get_by_text(expected_product, exact=True).first
        try:
            expect(match).to_be_visible(timeout=self.timeout)
        except AssertionError as e:
            actual = [text.strip() for text in self.page.locator(cells).all_inner_texts()]
            raise AssertionFailed("cart contents", expected_product, actual) from e
