from functools import cached_property

from playwright.sync_api import Page

from config import EnvironmentConfig
from pages.base_page import BasePage
from pages.cart_page import CartPage
from pages.home_page import HomePage
from pages.product_page import ProductPage


class Pages:
    """
    Page objects bound to one browser page and one resolved config.
    """

    def __init__(self, page: Page, config: EnvironmentConfig):
        self.page = page
        self.config = config

    @cached_property
    def home(self) -> HomePage:
        return HomePage(self.page, self.config)

    @cached_property
    def product(self) -> ProductPage:
        return ProductPage(self.page, self.config)

    @cached_property
    def cart(self) -> CartPage:
        return CartPage(self.page, self.config)


__all__ = ["BasePage", "CartPage", "HomePage", "Pages", "ProductPage"]
