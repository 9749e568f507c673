"""Behave environment configuration for the CMS step library."""

from __future__ import annotations

import logging
import os

from selenium import webdriver
from selenium.webdriver.chrome.options import Options
from selenium.webdriver.chrome.service import Service
from webdriver_manager.chrome import ChromeDriverManager

from cmsbdd import create_catalog
from cmsbdd.browser import SeleniumBrowser
from cmsbdd.common.log_handlers import init_logging
from cmsbdd.config import Settings, load_site_config
from cmsbdd.html_browser import HtmlBrowser

logger = logging.getLogger("cmsbdd")


def before_all(context):
    """Load settings and start the browser before running any scenarios."""
    context.settings = Settings.load(context.config.userdata)
    init_logging(level=context.settings.log_level)
    context.site_config = load_site_config(context.settings.site_config)
    context.browser = create_browser(context.settings)


def before_scenario(context, scenario):
    """Every scenario starts from an empty ScenarioContext."""
    logger.debug("Starting scenario '%s'", scenario.name)
    context.catalog = create_catalog(
        context.browser, context.settings, context.site_config
    )


def after_scenario(context, _scenario):
    catalog = getattr(context, "catalog", None)
    if catalog is not None:
        catalog.context.close()
        context.catalog = None


def after_all(context):
    """Tear down the browser."""
    if hasattr(context, "browser") and context.browser:
        context.browser.quit()


def create_browser(settings: Settings):
    """Headless Chrome, or the script-less HtmlBrowser when BROWSER=html."""
    if settings.browser == "html":
        return HtmlBrowser()

    chrome_options = Options()
    chrome_binary = os.getenv("CHROME_BINARY") or _first_existing(
        "/usr/bin/chromium",
        "/usr/bin/chromium-browser",
        "/usr/bin/google-chrome",
        "/usr/bin/google-chrome-stable",
    )
    if chrome_binary:
        chrome_options.binary_location = chrome_binary

    chrome_options.add_argument("--headless=new")
    chrome_options.add_argument("--disable-gpu")
    chrome_options.add_argument("--window-size=1440,900")
    chrome_options.add_argument("--no-sandbox")
    chrome_options.add_argument("--disable-dev-shm-usage")

    driver_path = (
        os.getenv("CHROMEDRIVER")
        or _first_existing("/usr/bin/chromedriver", "/usr/lib/chromium/chromedriver")
        or ChromeDriverManager().install()
    )
    service = Service(driver_path)
    return SeleniumBrowser(webdriver.Chrome(service=service, options=chrome_options))


def _first_existing(*paths: str) -> str | None:
    for path in paths:
        if path and os.path.exists(path):
            return path
    return None
