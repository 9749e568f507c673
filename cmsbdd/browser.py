"""
Browser boundary.

The step library talks to the page only through Browser and Element. Two
drivers implement them: SeleniumBrowser for a real browser and HtmlBrowser
(see html_browser) for script-less sessions and static documents.
"""
import logging
import os
from abc import ABC, abstractmethod
from enum import Enum

from selenium.common.exceptions import UnknownMethodException, WebDriverException
from selenium.webdriver.common.by import By
from selenium.webdriver.support.ui import Select

from cmsbdd.common.errors import UnsupportedCapabilityError
from cmsbdd.xpath import named_xpath

logger = logging.getLogger("cmsbdd")


class Engine(str, Enum):
    """Selector languages understood by the drivers"""

    XPATH = "xpath"
    CSS = "css"
    NAMED = "named"


def resolve_selector(engine, selector) -> tuple:
    """Named selectors are rendered to XPath, the others pass through"""
    engine = Engine(engine)
    if engine is Engine.NAMED:
        kind, locator = selector
        return Engine.XPATH, named_xpath(kind, locator)
    return engine, selector


class Element(ABC):
    """A node of the live document"""

    @property
    @abstractmethod
    def text(self) -> str:
        """Visible text of the node"""

    @property
    @abstractmethod
    def tag_name(self) -> str:
        """Lower case tag name"""

    @abstractmethod
    def get_attribute(self, name: str) -> str | None:
        """Attribute value or None when absent"""

    @abstractmethod
    def click(self) -> None:
        """Click the node"""

    @abstractmethod
    def set_value(self, value) -> None:
        """Replace the value of a form control"""

    @abstractmethod
    def attach_file(self, path: str) -> None:
        """Attach a local file to a file input"""

    @property
    @abstractmethod
    def parent(self) -> "Element | None":
        """Parent node"""

    @abstractmethod
    def _find_all(self, engine: Engine, selector: str) -> list:
        """Resolved lookup relative to this node"""

    def has_attribute(self, name: str) -> bool:
        return self.get_attribute(name) is not None

    def find_all(self, engine, selector) -> list:
        return self._find_all(*resolve_selector(engine, selector))

    def find_one(self, engine, selector):
        found = self.find_all(engine, selector)
        return found[0] if found else None


class Browser(ABC):
    """A browser session"""

    @abstractmethod
    def navigate(self, url: str) -> None:
        """Load the url"""

    @property
    @abstractmethod
    def current_url(self) -> str:
        """Url of the loaded page"""

    @property
    @abstractmethod
    def page_source(self) -> str:
        """Markup of the loaded page"""

    @abstractmethod
    def execute_script(self, script: str, *args):
        """Run script in the page; raises UnsupportedCapabilityError when impossible"""

    @abstractmethod
    def _find_all(self, engine: Engine, selector: str) -> list:
        """Resolved lookup over the whole document"""

    def find_all(self, engine, selector) -> list:
        return self._find_all(*resolve_selector(engine, selector))

    def find_one(self, engine, selector):
        found = self.find_all(engine, selector)
        return found[0] if found else None

    def quit(self) -> None:
        """Release the session"""


######################################################################
#  S E L E N I U M   D R I V E R
######################################################################
BY_ENGINE = {Engine.XPATH: By.XPATH, Engine.CSS: By.CSS_SELECTOR}


class SeleniumElement(Element):
    """Element backed by a Selenium WebElement"""

    def __init__(self, web_element):
        self.web_element = web_element

    @property
    def text(self) -> str:
        return self.web_element.text or ""

    @property
    def tag_name(self) -> str:
        return (self.web_element.tag_name or "").lower()

    def get_attribute(self, name: str) -> str | None:
        return self.web_element.get_attribute(name)

    def click(self) -> None:
        self.web_element.click()

    def set_value(self, value) -> None:
        if self.tag_name == "select":
            Select(self.web_element).select_by_visible_text(str(value))
            return
        self.web_element.clear()
        self.web_element.send_keys(str(value))

    def attach_file(self, path: str) -> None:
        self.web_element.send_keys(os.path.abspath(path))

    @property
    def parent(self):
        return SeleniumElement(self.web_element.find_element(By.XPATH, ".."))

    def _find_all(self, engine: Engine, selector: str) -> list:
        return [
            SeleniumElement(found)
            for found in self.web_element.find_elements(BY_ENGINE[engine], selector)
        ]


class SeleniumBrowser(Browser):
    """Browser backed by a Selenium WebDriver"""

    def __init__(self, driver):
        self.driver = driver

    def navigate(self, url: str) -> None:
        logger.info("Navigating to %s", url)
        self.driver.get(url)

    @property
    def current_url(self) -> str:
        return self.driver.current_url

    @property
    def page_source(self) -> str:
        return self.driver.page_source

    def execute_script(self, script: str, *args):
        try:
            return self.driver.execute_script(script, *args)
        except UnknownMethodException as error:
            raise UnsupportedCapabilityError(str(error)) from error
        except WebDriverException as error:
            if "javascript" in str(error).lower() and "disabled" in str(error).lower():
                raise UnsupportedCapabilityError(str(error)) from error
            raise

    def _find_all(self, engine: Engine, selector: str) -> list:
        return [
            SeleniumElement(found)
            for found in self.driver.find_elements(BY_ENGINE[engine], selector)
        ]

    def quit(self) -> None:
        self.driver.quit()
