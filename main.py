# main.py
import sys
import argparse
from playwright.sync_api import sync_playwright, Error as PlaywrightError

from config import is_headless, resolve_config
from pages import Pages
from utils import (
    AssertionFailed,
    DialogRaceError,
    NavigationError,
    RecoverableError,
    log_step,
    logger,
    retry_with_backoff,
    take_screenshot,
)


FLOWS = ("login", "cart", "checkout")


def _run_flow(pages, flow):
    """Drive the shop through `flow` and describe what happened."""
    pages.home.valid_login()
    username = pages.config.test_data.valid_user.username
    if flow == "login":
        return f'logged in as "{username}"'

    product = pages.home.add_random_product_to_cart()
    if flow == "cart":
        return f'"{product}" is in the cart of "{username}"'

    details = pages.cart.place_order()
    return f'ordered "{product}", purchase id {details.get("Id", "?")} for {details.get("Amount", "?")}'


def run(flow: str, env_name=None, headless=False) -> str:
    config = resolve_config(env_name)
    log_step(f"Running '{flow}' flow against {config.base_url} ({config.environment})")

    with sync_playwright() as p:
        browser = p.chromium.launch(
            headless=headless or is_headless(config),
            slow_mo=config.slow_mo,
        )
        context = browser.new_context(
            viewport={"width": config.viewport.width, "height": config.viewport.height},
            locale="en-US",
        )
        page = context.new_page()
        page.set_default_navigation_timeout(config.timeout)
        page.set_default_timeout(config.timeout)
        pages = Pages(page, config)

        try:
            # Only opening the shop is retried; the flow itself runs once.
            retry_with_backoff(
                pages.home.go_to_home_page,
                max_retries=config.retries,
                base_delay_ms=1000,
            )
            outcome = _run_flow(pages, flow)

            msg = f"Success! {outcome}"
            print(msg)
            return msg

        except (RecoverableError, NavigationError, AssertionFailed, DialogRaceError, PlaywrightError) as e:
            err = f"Run failed during '{flow}': {e}"
            logger.error(err)
            take_screenshot(page, f"failed-{flow}")
            print(err)
            return err
        finally:
            context.close()
            browser.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Product Store login / cart / checkout robot")
    parser.add_argument("--flow", choices=FLOWS, default="checkout", help="Flow to run")
    parser.add_argument("--env", default=None, help="Environment profile (default: NODE_ENV or development)")
    parser.add_argument("--headless", action="store_true", help="Run headless")
    args = parser.parse_args()

    sys.exit(0 if run(args.flow, args.env, args.headless).startswith("Success!") else 1)
