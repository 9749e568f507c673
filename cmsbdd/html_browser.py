"""
Script-less browser.

Fetches pages with requests and evaluates selectors with lxml. It follows
links, submits forms and keeps cookies through its session, but cannot run
script: execute_script always raises UnsupportedCapabilityError. The same
driver loads literal HTML for offline assertions.
"""
import logging
from contextlib import ExitStack
from urllib.parse import urljoin

import requests
from lxml import etree
from lxml import html as lxml_html

from cmsbdd.browser import Browser, Element, Engine
from cmsbdd.common.errors import UnsupportedCapabilityError

logger = logging.getLogger("cmsbdd")

REQUEST_TIMEOUT = 10
SUBMIT_TYPES = ("submit", "image")


def _normalize(text: str) -> str:
    return " ".join((text or "").split())


class HtmlElement(Element):
    """Element backed by an lxml node"""

    def __init__(self, node, browser: "HtmlBrowser"):
        self.node = node
        self.browser = browser

    def __eq__(self, other):
        return isinstance(other, HtmlElement) and other.node is self.node

    def __hash__(self):
        return id(self.node)

    def __repr__(self):
        return f"<HtmlElement {self.tag_name}>"

    @property
    def text(self) -> str:
        return _normalize(self.node.text_content())

    @property
    def tag_name(self) -> str:
        return str(self.node.tag).lower()

    @property
    def input_type(self) -> str:
        return (self.node.get("type") or "text").lower()

    def get_attribute(self, name: str) -> str | None:
        if name == "value" and self.tag_name == "textarea":
            return self.node.text or ""
        if name == "value" and self.tag_name == "select":
            selected = self.node.xpath(".//option[@selected]") or self.node.xpath(".//option")
            if not selected:
                return None
            return selected[0].get("value", _normalize(selected[0].text_content()))
        return self.node.get(name)

    def click(self) -> None:
        if self.tag_name == "a" and self.node.get("href") is not None:
            self.browser.navigate(urljoin(self.browser.current_url, self.node.get("href")))
        elif self._is_submit():
            self.browser.submit(self)
        elif self.tag_name == "input" and self.input_type in ("checkbox", "radio"):
            self._set_checked(self.node.get("checked") is None)
        else:
            logger.debug("Click on %s has no effect without script", self)

    def _is_submit(self) -> bool:
        if self.tag_name == "button":
            return (self.node.get("type") or "submit").lower() == "submit"
        return self.tag_name == "input" and self.input_type in SUBMIT_TYPES

    def _set_checked(self, checked: bool) -> None:
        if checked:
            self.node.set("checked", "checked")
        elif "checked" in self.node.attrib:
            del self.node.attrib["checked"]

    def set_value(self, value) -> None:
        value = "" if value is None else str(value)
        if self.tag_name == "textarea":
            self.node.text = value
        elif self.tag_name == "select":
            for option in self.node.xpath(".//option"):
                label = _normalize(option.text_content())
                if value in (option.get("value"), label):
                    option.set("selected", "selected")
                elif "selected" in option.attrib:
                    del option.attrib["selected"]
        elif self.input_type in ("checkbox", "radio"):
            self._set_checked(value.lower() not in ("", "0", "false", "no", "off"))
        else:
            self.node.set("value", value)

    def attach_file(self, path: str) -> None:
        self.node.set("value", path)
        self.browser.files[self.node.get("name") or self.node.get("id") or path] = path

    @property
    def parent(self):
        parent = self.node.getparent()
        return HtmlElement(parent, self.browser) if parent is not None else None

    @property
    def form(self):
        for ancestor in self.node.iterancestors("form"):
            return ancestor
        return None

    def _find_all(self, engine: Engine, selector: str) -> list:
        return self.browser.wrap(_query(self.node, engine, selector))


def _query(node, engine: Engine, selector: str) -> list:
    if engine is Engine.CSS:
        return node.cssselect(selector)
    return node.xpath(selector)


class HtmlBrowser(Browser):
    """Browser without script support built on requests and lxml"""

    def __init__(self, session: requests.Session | None = None, timeout: int = REQUEST_TIMEOUT):
        self.session = session or requests.Session()
        self.timeout = timeout
        self.files = {}
        self._url = "about:blank"
        self._source = ""
        self.document = lxml_html.document_fromstring("<html><body></body></html>")

    def load_html(self, source: str, url: str = "about:blank") -> "HtmlBrowser":
        """Replace the current document with literal markup"""
        self._url = url
        self._source = source
        self.files = {}
        if not (source or "").strip():
            source = "<html><body></body></html>"
        try:
            self.document = lxml_html.document_fromstring(source)
        except ValueError:
            # lxml refuses str input carrying an XML encoding declaration
            self.document = lxml_html.document_fromstring(source.encode("utf-8"))
        return self

    def wrap(self, nodes) -> list:
        """Keep element results only (text and attribute results are dropped)"""
        return [
            HtmlElement(node, self)
            for node in nodes
            if isinstance(node, etree._Element)  # pylint: disable=protected-access
            and isinstance(node.tag, str)
        ]

    def navigate(self, url: str) -> None:
        logger.info("Fetching %s", url)
        response = self.session.get(url, timeout=self.timeout)
        self._load_response(response)

    def _load_response(self, response) -> None:
        if response.status_code >= 400:
            logger.warning("%s answered %s", response.url, response.status_code)
        self.load_html(response.text, response.url)

    def submit(self, button: HtmlElement) -> None:
        """Submit the form owning the button the way a browser would"""
        form = button.form
        if form is None:
            logger.debug("%s is not inside a form", button)
            return
        file_names = set(form.xpath(".//input[@type='file']/@name"))
        fields = [(name, value) for name, value in form.form_values() if name not in file_names]
        if button.node.get("name"):
            fields.append((button.node.get("name"), button.node.get("value", "")))
        action = urljoin(self._url, form.get("action") or self._url)
        method = (form.get("method") or "get").upper()
        logger.info("Submitting form to %s (%s)", action, method)
        if method == "GET":
            response = self.session.get(action, params=fields, timeout=self.timeout)
        else:
            with ExitStack() as stack:
                files = {
                    name: stack.enter_context(open(path, "rb"))
                    for name, path in self.files.items()
                    if name in file_names
                }
                response = self.session.post(
                    action, data=fields, files=files or None, timeout=self.timeout
                )
        self._load_response(response)

    @property
    def current_url(self) -> str:
        return self._url

    @property
    def page_source(self) -> str:
        return self._source

    def execute_script(self, script: str, *args):
        raise UnsupportedCapabilityError("HtmlBrowser cannot execute script")

    def _find_all(self, engine: Engine, selector: str) -> list:
        return self.wrap(_query(self.document, engine, selector))

    def quit(self) -> None:
        self.session.close()
