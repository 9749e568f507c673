"""
Element lookup.

Resolves selectors against the live document and turns "nothing found" into
a step failure naming the selector and what was looked for.
"""
import logging

from selenium.common.exceptions import TimeoutException
from selenium.webdriver.support.ui import WebDriverWait

from cmsbdd.browser import Engine
from cmsbdd.common.errors import ElementNotFoundError, ElementUnexpectedlyFoundError
from cmsbdd.xpath import literal, looks_like_xpath

logger = logging.getLogger("cmsbdd")

POLL_FREQUENCY = 0.5


def guess_engine(selector) -> Engine:
    """Named selectors are (kind, locator) pairs; XPath is sniffed by prefix"""
    if isinstance(selector, tuple):
        return Engine.NAMED
    if looks_like_xpath(selector):
        return Engine.XPATH
    return Engine.CSS


class ElementLocator:
    """Finds elements, optionally polling up to wait_timeout seconds"""

    def __init__(self, browser, wait_timeout: float = 0, poll_frequency: float = POLL_FREQUENCY):
        self.browser = browser
        self.wait_timeout = wait_timeout
        self.poll_frequency = poll_frequency

    def _lookup(self, selector, engine=None, within=None) -> list:
        engine = Engine(engine) if engine else guess_engine(selector)
        root = within if within is not None else self.browser
        return root.find_all(engine, selector)

    def _wait_for(self, lookup) -> list:
        found = lookup()
        if found or not self.wait_timeout:
            return found
        try:
            return WebDriverWait(
                self.browser, self.wait_timeout, poll_frequency=self.poll_frequency
            ).until(lambda _: lookup())
        except TimeoutException:
            return []

    def find_all(self, selector, engine=None, within=None) -> list:
        """Every match; an empty list is a valid answer"""
        return self._lookup(selector, engine, within)

    def find_one(self, selector, engine=None, subject: str = "element", within=None, message=None):
        """First match, failing the step when there is none"""
        found = self._wait_for(lambda: self._lookup(selector, engine, within))
        if not found:
            logger.debug("No %s for %s", subject, selector)
            raise ElementNotFoundError(selector, subject, message)
        return found[0]

    def assert_absent(self, selector, engine=None, subject: str = "element", message=None):
        """Fail the step when anything matches"""
        if self._lookup(selector, engine):
            raise ElementUnexpectedlyFoundError(selector, subject, message)

    def find_button_by_label(self, label: str):
        return self.find_one(("button", label), Engine.NAMED, "button")

    def find_link_by_text(self, label: str):
        return self.find_one(("link", label), Engine.NAMED, "link")

    def find_link_or_button(self, label: str):
        return self.find_one(("link_or_button", label), Engine.NAMED, "link or button")

    def find_field(self, locator: str):
        """Form field by id, name, placeholder or label text"""
        return self.find_one(("field", locator), Engine.NAMED, "field")

    def find_field_by_partial_id(self, fragment: str):
        quoted = literal(fragment)
        xpath = (
            f"//input[contains(@id, {quoted})] | //textarea[contains(@id, {quoted})]"
            f" | //select[contains(@id, {quoted})]"
        )
        return self.find_one(xpath, Engine.XPATH, "field")

    def find_by_id(self, element_id: str, subject: str = "element"):
        return self.find_one(f"//*[@id={literal(element_id)}]", Engine.XPATH, subject)

    def complete_attribute(self, needle: str, tag: str | None = None, attr: str = "id"):
        """Full value of the first `attr` containing needle, or None"""
        xpath = f"//{tag or '*'}[contains(@{attr}, {literal(needle)})]"
        found = self.find_all(xpath, Engine.XPATH)
        return found[0].get_attribute(attr) if found else None
