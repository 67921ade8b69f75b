"""Utilities against static HTML in a real Chromium (no network needed)."""
import pytest

from config import Viewport
from pages import CartPage
from testdata import VIEWPORTS
from utils import (
    ElementNotReady,
    clear_browser_data,
    element_exists,
    get_element_attribute,
    safe_click,
    safe_fill,
    set_viewport_size,
    wait_for_hidden,
    wait_for_visible,
)

pytestmark = pytest.mark.browser

FORM = """
<input id="name" value="left over from a previous run">
<button id="go" onclick="document.getElementById('out').textContent = 'clicked'">Go</button>
<span id="out"></span>
<div id="hidden" style="display: none">secret</div>
<a id="link" href="/cart.html">Cart</a>
"""


@pytest.fixture
def form_page(page):
    page.set_content(FORM)
    return page


def test_safe_fill_last_write_wins(form_page):
    safe_fill(form_page, "#name", "X", timeout=2000)
    safe_fill(form_page, "#name", "Y", timeout=2000)
    assert form_page.input_value("#name") == "Y"


def test_safe_click(form_page):
    safe_click(form_page, "#go", timeout=2000)
    assert form_page.text_content("#out") == "clicked"


def test_element_exists(form_page):
    assert element_exists(form_page, "#name") is True
    # Attached but hidden still exists.
    assert element_exists(form_page, "#hidden") is True
    assert element_exists(form_page, "#nothing-here", timeout=200) is False


def test_wait_for_visible_on_hidden_element(form_page):
    with pytest.raises(ElementNotReady) as excinfo:
        wait_for_visible(form_page, "#hidden", timeout=200, operation="read secret")
    assert excinfo.value.selector == "#hidden"
    assert excinfo.value.elapsed_ms >= 100


def test_wait_for_hidden(form_page):
    wait_for_hidden(form_page, "#hidden", timeout=500)
    wait_for_hidden(form_page, "#nothing-here", timeout=500)


def test_get_element_attribute(form_page):
    assert get_element_attribute(form_page, "#link", "href", timeout=500) == "/cart.html"
    assert get_element_attribute(form_page, "#link", "target", timeout=500) is None


def test_clear_browser_data(page):
    # Storage needs a real origin; about:blank refuses access.
    page.route("https://shop.test/", lambda route: route.fulfill(body="<p>shop</p>", content_type="text/html"))
    page.goto("https://shop.test/")
    page.evaluate("() => { localStorage.setItem('cart', '1'); sessionStorage.setItem('s', '1'); }")

    clear_browser_data(page)

    assert page.evaluate("() => localStorage.length + sessionStorage.length") == 0


@pytest.mark.parametrize("text, total", [("", 0), ("790", 790), ("1150", 1150)])
def test_cart_total_reads_empty_total_box(page, app_config, text, total):
    # An empty <h3> has no box, so it is attached but never visible.
    page.set_content(f'<h3 id="totalp">{text}</h3>')
    config = app_config.model_copy(update={"timeout": 1000})
    assert CartPage(page, config).cart_total() == total


@pytest.mark.parametrize("name", sorted(VIEWPORTS))
def test_set_viewport_size_to_named_viewport(page, name):
    set_viewport_size(page, Viewport(**VIEWPORTS[name]))
    assert page.viewport_size == VIEWPORTS[name]
    assert page.evaluate("() => window.innerWidth") == VIEWPORTS[name]["width"]
