"""
Table driven assertions.

Checks Gherkin tables against the elements of the live document. Text and
href comparisons use substring containment so small markup variations do not
break scenarios; only the table cell check compares whole (stripped) texts.
"""
import logging

from cmsbdd.browser import Engine
from cmsbdd.common.errors import (
    ConfigurationError,
    CountMismatchError,
    ElementNotFoundError,
    OrderingViolationError,
)
from cmsbdd.models.table import GherkinTable, LinkDescriptor
from cmsbdd.xpath import concat_tag_xpath, literal, tags_for_semantic_type

logger = logging.getLogger("cmsbdd")


def _as_link(link) -> LinkDescriptor:
    if isinstance(link, LinkDescriptor):
        return link
    return LinkDescriptor(link)


def link_matches(element, link: LinkDescriptor) -> bool:
    """href holds the slug, or the visible text holds the text"""
    href = element.get_attribute("href") or ""
    return link.slug in href or link.text in element.text


class TableMatcher:
    """Ordered and unordered matching of expected rows against elements"""

    def __init__(self, locator):
        self.locator = locator

    ######################################################################
    # Unordered existence
    ######################################################################
    def assert_all_present(self, base: str, links) -> None:
        """Every link must exist somewhere under the base block"""
        for link in map(_as_link, links):
            if not link.text:
                raise ConfigurationError("Missing link for searching on table")
            xpath = f"{base}//a[contains(text(), {literal(link.text)})][@href]"
            self.locator.find_one(
                xpath,
                Engine.XPATH,
                "link",
                message=f"Couldn't find a link for object '{link.text}'",
            )

    def assert_all_absent(self, base: str, links) -> None:
        """No link may carry exactly one of the given texts"""
        for link in map(_as_link, links):
            xpath = f"{base}//a[text() = {literal(link.text)}][@href]"
            self.locator.assert_absent(
                xpath, Engine.XPATH, "link", message=f"Unexpected link found: '{link.text}'"
            )

    ######################################################################
    # Ordered, non contiguous
    ######################################################################
    def assert_sequential_order(self, links, available) -> None:
        """Expected links appear in this order among the available elements.

        The cursor only moves forward and every match is consumed. Elements
        between two expected links are ignored: only relative order matters.
        """
        links = [_as_link(link) for link in links]
        available = list(available)
        cursor = passed = 0
        previous = ""
        for link in links:
            while cursor < len(available) and not link_matches(available[cursor], link):
                cursor += 1
            if cursor >= len(available):
                raise OrderingViolationError(link.text, previous)
            logger.debug("Matched '%s' at position %d", link.text, cursor)
            # consumed: one element never satisfies two expected links
            cursor += 1
            passed += 1
            previous = link.text

        if passed != len(links):
            raise CountMismatchError(len(links), passed, "links evaluated")

    def assert_links_in_order(self, base: str, links) -> None:
        available = self.locator.find_all(f"{base}//a[@href]", Engine.XPATH)
        self.assert_sequential_order(links, available)

    ######################################################################
    # Links inside semantic tags
    ######################################################################
    def assert_links_in_tags(self, rows) -> None:
        """Each (link, type) row needs a link with that exact text in the type's tags"""
        for row in rows:
            if len(row) != 2:
                raise ConfigurationError("Each row should hold a link and a tag type")
            link, type_name = row
            xpath = concat_tag_xpath(
                tags_for_semantic_type(type_name), f"//a[@href and text() = {literal(link)}]"
            )
            self.locator.find_one(
                xpath, Engine.XPATH, "link", message=f"Couldn't find a link with '{link}' text"
            )

    ######################################################################
    # Table rows and columns
    ######################################################################
    @staticmethod
    def _column_index(name: str, position: int, actual_header: list) -> int:
        if name in actual_header:
            return actual_header.index(name)
        return position

    def assert_table_contains(self, table_element, table: GherkinTable) -> None:
        """Each expected row must match one actual row.

        The first expected column is the key: candidate rows are those whose
        key cell contains it. A candidate matches when every other expected
        cell equals the actual cell of the same (header named) column.
        """
        actual_header = [
            cell.text.strip() for cell in table_element.find_all(Engine.XPATH, "(.//tr[th])[1]/th")
        ]
        columns = [
            self._column_index(name, position, actual_header)
            for position, name in enumerate(table.header)
        ]
        actual_rows = [
            [cell.text.strip() for cell in row.find_all(Engine.XPATH, "./td")]
            for row in table_element.find_all(Engine.XPATH, ".//tr[td]")
        ]

        for expected in table.body:
            if not expected:
                continue
            key_column = columns[0] if columns else 0
            candidates = [
                row for row in actual_rows if len(row) > key_column and expected[0] in row[key_column]
            ]
            rest = list(zip(columns[1:], expected[1:]))
            if not any(
                all(column < len(row) and row[column] == cell for column, cell in rest)
                for row in candidates
            ):
                expected_text = ",".join(expected)
                raise ElementNotFoundError(
                    expected_text,
                    "table row",
                    f"Couldn't find a table row matching '{expected_text}'",
                )

    ######################################################################
    # Counts
    ######################################################################
    def assert_listed_count(self, count: int, object_type: str) -> None:
        """The "<type> list" table holds count rows besides its header"""
        xpath = f"//table[../h1 = {literal(object_type + ' list')}]"
        listing = self.locator.find_one(
            xpath,
            Engine.XPATH,
            "listing table",
            message=f"Could not find listing table for {object_type}",
        )
        rows = listing.find_all(Engine.CSS, "tr")
        if len(rows) != count + 1:
            raise CountMismatchError(count + 1, len(rows), "table rows")
