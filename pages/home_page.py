import random
from types import MappingProxyType

from playwright.sync_api import TimeoutError as PWTimeout, expect

from pages.base_page import BasePage
from pages.cart_page import CartPage
from pages.product_page import ProductPage
from testdata import TEST_URLS
from utils import (
    AssertionFailed,
    ElementNotReady,
    click_locator,
    log_step,
    wait_for_api_response,
    wait_for_hidden,
)

# Sidebar label -> value the shop sends to its /bycat endpoint.
CATEGORIES = MappingProxyType({
    "phones": "phone",
    "laptops": "notebook",
    "monitors": "monitor",
})


class HomePage(BasePage):
    """Landing page of the shop: login modal, product grid and navbar."""

    path = TEST_URLS["home"]

    LOCATORS = MappingProxyType({
        # Navbar
        "logo": "#nava",
        "homeButton": "a.nav-link[href='index.html']",
        "cartButton": "#cartur",
        "logInButton": "#login2",
        "logOutButton": "#logout2",
        "userGreeting": "#nameofuser",

        # Login modal
        "logInModal": "#logInModal",
        "input_loginUsername": "#loginusername",
        "input_loginPassword": "#loginpassword",
        "button_submitLogin": "button[onclick='logIn()']",

        # Catalogue
        "productGrid": "#tbodyid",
        "productLinks": "#tbodyid .card-title a",
        "categoryLink": "a[onclick=\"byCat('{category}')\"]",
    })

    def get_locators(self):
        return self.LOCATORS

    def verify_page_loaded(self):
        log_step("Verifying home page is loaded")
        self._require("logo", "productLinks")
        log_step("Home page loaded successfully")

    def go_to_home_page(self):
        log_step("Navigating to home page")
        self.open()

    # Login

    def click_log_in_button(self):
        log_step("Opening login modal")
        self.click_element(self.LOCATORS["logInButton"])
        self.wait_for_element(self.LOCATORS["logInModal"])

    def fill_login_username(self, username):
        self.fill_input(self.LOCATORS["input_loginUsername"], username)

    def fill_login_password(self, password):
        self.fill_input(self.LOCATORS["input_loginPassword"], password)

    def submit_login_modal(self):
        log_step("Submitting login modal")
        self.click_element(self.LOCATORS["button_submitLogin"])
        wait_for_hidden(self.page, self.LOCATORS["logInModal"], self.timeout,
                        operation="close login modal")

    def submit_login_expecting_alert(self):
        """Submit credentials the shop rejects; return the alert it raises."""
        log_step("Submitting login modal, expecting an alert")
        messages = []

        def accept(dialog):
            messages.append(dialog.message)
            dialog.accept()

        self.page.once("dialog", accept)
        submitted = False
        try:
            with self.page.expect_event("dialog", timeout=self.timeout):
                self.click_element(self.LOCATORS["button_submitLogin"])
                submitted = True
        except PWTimeout as e:
            if not submitted:
                raise
            raise ElementNotReady("dialog", "shown", "login alert", self.timeout) from e
        finally:
            if not messages:
                self.page.remove_listener("dialog", accept)
        return messages[0] if messages else ""

    def validate_log_in(self, username):
        expected = f"Welcome {username}"
        log_step(f"Validating greeting: {expected}")
        greeting = self.page.locator(self.LOCATORS["userGreeting"])
        try:
            expect(greeting).to_have_text(expected, timeout=self.timeout)
        except AssertionError as e:
            actual = (greeting.text_content() or "").strip()
            raise AssertionFailed("login greeting", expected, actual) from e

    def log_in(self, username, password):
        self.click_log_in_button()
        self.fill_login_username(username)
        self.fill_login_password(password)
        self.submit_login_modal()
        self.validate_log_in(username)

    def valid_login(self):
        user = self.config.test_data.valid_user
        log_step(f"Logging in as {user.username}")
        self.log_in(user.username, user.password)

    def log_out(self):
        log_step("Logging out")
        self.click_element(self.LOCATORS["logOutButton"])
        self.wait_for_element(self.LOCATORS["logInButton"])

    def is_logged_in(self):
        return self.is_element_visible(self.LOCATORS["userGreeting"])

    # Catalogue

    def product_names(self):
        self.wait_for_element(self.LOCATORS["productLinks"])
        links = self.page.locator(self.LOCATORS["productLinks"])
        return [text.strip() for text in links.all_inner_texts()]

    def search_products(self, term):
        """Case-insensitive match of `term` against the rendered product names.

        A blank term either returns every product or raises ValueError,
        depending on the configured empty-search policy.
        """
        names = self.product_names()
        if not term or not term.strip():
            if self.config.empty_search == "error":
                raise ValueError("search term must not be empty")
            log_step("Empty search term, returning all products")
            return names
        needle = term.strip().casefold()
        return [name for name in names if needle in name.casefold()]

    def filter_by_category(self, category):
        key = category.strip().lower()
        if key not in CATEGORIES:
            raise ValueError(
                f"Unknown category {category!r}, expected one of {sorted(CATEGORIES)}"
            )
        log_step(f"Filtering products by category: {key}")
        selector = self.LOCATORS["categoryLink"].format(category=CATEGORIES[key])
        payload = wait_for_api_response(
            self.page,
            "/bycat",
            lambda: self.click_element(selector),
            self.timeout,
        )
        return [item["title"].strip() for item in payload.get("Items", [])]

    def select_random_product(self):
        """Open a product picked uniformly from the grid; return its name."""
        names = self.product_names()
        if not names:
            raise ElementNotReady(self.LOCATORS["productLinks"], "visible",
                                  "select random product", 0)
        index = random.randrange(len(names))
        selected = names[index]
        log_step(f"Selecting product: {selected}")

        link = self.page.locator(self.LOCATORS["productLinks"]).nth(index)
        click_locator(link, f"{self.LOCATORS['productLinks']} >> nth={index}",
                      self.timeout, operation="select random product")
        ProductPage(self.page, self.config).verify_page_loaded()
        return selected

    def click_cart_button(self):
        log_step("Opening cart")
        self.click_element(self.LOCATORS["cartButton"])
        self.wait_for_url_to_contain("cart")

    def click_home_button(self):
        self.click_element(self.LOCATORS["homeButton"])
        self.wait_for_page_to_load()

    def add_random_product_to_cart(self):
        selected = self.select_random_product()
        ProductPage(self.page, self.config).add_product_to_cart()
        self.click_cart_button()
        CartPage(self.page, self.config).validate_product_on_cart(selected)
        return selected
