"""
Page navigation.

Maps symbolic page identifiers ("home", "login page") to paths through the
configured page map and checks where the browser ended up.
"""
import logging
from urllib.parse import urlsplit

from cmsbdd.browser import Engine
from cmsbdd.common.errors import (
    ElementNotFoundError,
    StepAssertionError,
    UnexpectedPageError,
    UnknownPageIdentifierError,
)

logger = logging.getLogger("cmsbdd")


def strip_query_string(url: str) -> str:
    """The url up to (not including) its '?'"""
    return url.split("?", 1)[0]


class PageNavigator:
    """Resolves page identifiers and drives the browser to them"""

    def __init__(self, browser, page_map, base_url: str = ""):
        self.browser = browser
        self.page_map = page_map
        self.base_url = base_url

    def resolve(self, identifier: str) -> str:
        try:
            return self.page_map[identifier]
        except KeyError as error:
            raise UnknownPageIdentifierError(identifier) from error

    def locate_path(self, path: str) -> str:
        """Absolute url for a path on the site under test"""
        if urlsplit(path).scheme:
            return path
        return self.base_url.rstrip("/") + "/" + path.lstrip("/")

    def visit(self, path: str) -> None:
        self.browser.navigate(self.locate_path(path))

    def navigate_to(self, identifier: str) -> None:
        path = self.resolve(identifier)
        logger.info("Going to '%s' page (%s)", identifier, path)
        self.visit(path)

    def assert_current_page(self, identifier: str) -> None:
        """The current url, query string aside, is exactly the page's url"""
        current = strip_query_string(self.browser.current_url)
        expected = self.locate_path(self.resolve(identifier))
        if current != expected:
            raise UnexpectedPageError(expected, current)

    def assert_redirected_to(self, target: str) -> None:
        """The page holds a Redirect form pointing at target"""
        form = self.browser.find_one(Engine.CSS, 'form[name="Redirect"]')
        if form is None:
            raise ElementNotFoundError('form[name="Redirect"]', "form", "Missing redirect form.")
        action = form.get_attribute("action")
        if action != target:
            raise StepAssertionError(f"Expected redirect to '{target}', form targets '{action}'")
