######################################################################
# Copyright 2016, 2024 John J. Rofrano. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
######################################################################

"""
Step catalog.

Every Gherkin sentence of the library ends up in one StepCatalog method. The
catalog owns nothing but references: the browser, the per-scenario context
and the components built on top of them. behave step modules only parse
sentences and call in here.

Tables are GherkinTable values with the header row included; every method
works on table.body.
"""
import logging
import os
from collections.abc import Mapping

from cmsbdd.browser import Engine
from cmsbdd.common.errors import (
    ConfigurationError,
    ElementNotFoundError,
    MissingFileError,
    PendingStepError,
    StepAssertionError,
    UnsupportedCapabilityError,
)
from cmsbdd.content import (
    ContentManager,
    PendingContentRepository,
    dummy_content_for,
    dummy_data_for_fields,
)
from cmsbdd.forms import FillAction, FormFiller, is_alias_token
from cmsbdd.locator import ElementLocator
from cmsbdd.matcher import TableMatcher
from cmsbdd.models.table import links_from_table, settings_from_multiple_value, table_to_data
from cmsbdd.navigator import PageNavigator
from cmsbdd.xpath import build_block_xpath, literal

logger = logging.getLogger("cmsbdd")

LOGIN_PATH = "/user/login"
SEARCH_FIELD_ID = "site-wide-search-field"
SEARCH_FORM_ID = "site-wide-search"
SEARCH_BUTTON = "SearchButton"
SUBMIT_SEARCH_SCRIPT = (
    f"(function(){{ document.getElementById('{SEARCH_FORM_ID}').submit(); }})()"
)
DEFAULT_BLOCK = "main"


class StepCatalog:  # pylint: disable=too-many-public-methods,unused-argument
    """Implementation of the browser, form and content steps"""

    def __init__(self, browser, context, repository=None, base_url: str = "", wait_timeout: float = 0):
        self.browser = browser
        self.context = context
        self.repository = repository or PendingContentRepository()
        self.locator = ElementLocator(browser, wait_timeout)
        self.matcher = TableMatcher(self.locator)
        self.navigator = PageNavigator(browser, context.page_map, base_url)
        self.forms = FormFiller(self.locator, self.alias_value)
        self.content = ContentManager(self.repository)
        self.created = {}

    ######################################################################
    #  H E L P E R S
    ######################################################################
    def block_xpath(self, block_id: str) -> str:
        return build_block_xpath(block_id, self.context.main_attributes)

    def content_for(self, identifier: str):
        return self.context.content_for(identifier, self.repository.get_data_by_identifier)

    def alias_value(self, letter: str):
        """Value kept under a one letter alias, generated on first use"""
        if letter not in self.context.content_holder:
            self.context.store(letter, dummy_content_for("text"))
        return self.context.content_holder[letter]

    ######################################################################
    #  B R O W S E R   S T E P S
    ######################################################################
    def logged_in_as(self, user: str, password: str) -> None:
        self.visit(LOGIN_PATH)
        self.fill_field("Username", user)
        self.fill_field("Password", password)
        self.press_button("Login")
        self.assert_redirected_to("/")

    def go_to(self, identifier: str) -> None:
        self.navigator.navigate_to(identifier)

    def assert_on_page(self, identifier: str) -> None:
        self.navigator.assert_current_page(identifier)

    def visit(self, path: str) -> None:
        self.navigator.visit(path)

    def click_link(self, label: str) -> None:
        self.locator.find_link_by_text(label).click()

    def press_button(self, label: str) -> None:
        self.locator.find_button_by_label(label).click()

    def fill_field(self, field: str, value) -> None:
        self.forms.execute([FillAction(field, value)])

    def attach_file(self, field: str, identifier: str) -> None:
        """Attach a file given by path or by a stored identifier"""
        path = self.context.file_for(identifier, self.repository.get_data_by_identifier)
        if not isinstance(path, str) or not os.path.isfile(path):
            raise MissingFileError(identifier)
        self.locator.find_field(field).attach_file(path)

    def dont_see_links(self, table, block: str = DEFAULT_BLOCK) -> None:
        self.matcher.assert_all_absent(self.block_xpath(block), links_from_table(table))

    def _menu_xpath(self, menu: str) -> str:
        xpath = self.block_xpath(f"{menu} menu")
        if not xpath:
            raise PendingStepError(f"Menu '{menu}' not defined")
        return xpath

    def see_menu(self, menu: str) -> None:
        self.locator.find_one(self._menu_xpath(menu), Engine.XPATH, f"{menu} menu")

    def dont_see_menu(self, menu: str) -> None:
        self.locator.assert_absent(self._menu_xpath(menu), Engine.XPATH, f"{menu} menu")

    def search_for(self, phrase: str) -> None:
        """Fill the site wide search and submit it.

        Submission goes through script; drivers that cannot run script click
        the search button instead.
        """
        field = self.locator.find_by_id(SEARCH_FIELD_ID, "search field")
        field.set_value(phrase)
        try:
            self.browser.execute_script(SUBMIT_SEARCH_SCRIPT)
        except UnsupportedCapabilityError:
            logger.info("Script not supported, clicking %s", SEARCH_BUTTON)
            quoted = literal(SEARCH_BUTTON)
            button = field.parent.find_one(
                Engine.XPATH, f".//*[@name={quoted} or @id={quoted} or @value={quoted}]"
            )
            if button is None:
                raise ElementNotFoundError(SEARCH_BUTTON, "button")
            button.click()
        self.context.prior_search_phrase = phrase

    def assert_search_results(self, count: int) -> None:
        feedback = self.locator.find_one(
            "div.feedback",
            Engine.CSS,
            "search feedback",
            message="Could not find result count text element.",
        )
        expected = f'Search for "{self.context.prior_search_phrase}" returned {count} matches'
        actual = feedback.text.strip()
        if actual != expected:
            raise StepAssertionError(f"Expected '{expected}', found '{actual}'")

    def see_links_for_content_objects(self, table, block: str = DEFAULT_BLOCK) -> None:
        self.matcher.assert_all_present(self.block_xpath(block), links_from_table(table))

    def see_links_in_order(self, table, block: str = DEFAULT_BLOCK) -> None:
        self.matcher.assert_links_in_order(self.block_xpath(block), links_from_table(table))

    def see_links_in_tags(self, table) -> None:
        self.matcher.assert_links_in_tags(table.body)

    def see_listed_count(self, count: int, object_type: str) -> None:
        self.matcher.assert_listed_count(count, object_type)

    def see_table(self, table) -> None:
        """Some table of the page holds every expected row"""
        tables = self.locator.find_all("//table", Engine.XPATH)
        if not tables:
            raise ElementNotFoundError("//table", "table")
        failure = None
        for table_element in tables:
            try:
                self.matcher.assert_table_contains(table_element, table)
                return
            except ElementNotFoundError as error:
                failure = error
        raise failure

    def assert_redirected_to(self, target: str) -> None:
        self.navigator.assert_redirected_to(target)

    def dump_page(self) -> str:
        source = self.browser.page_source
        logger.info("Page dump of %s:\n%s", self.browser.current_url, source)
        return source

    ######################################################################
    #  F O R M   A N D   D A T A   S T E P S
    ######################################################################
    def fill_form(self, form_name: str, only_fields=None, identifier: str | None = None) -> dict:
        try:
            form_data = self.context.forms[form_name]
        except KeyError as error:
            raise ConfigurationError(f"Form '{form_name}' not defined") from error
        filled = self.forms.fill(form_data, only_fields)
        if identifier:
            self.context.store(identifier, filled)
        return filled

    def fix_data(self, identifier: str, table) -> dict:
        data = table_to_data(table.body)
        self.context.store(identifier, data)
        return data

    def assert_form_filled_with(self, identifier: str) -> None:
        """Each field shows the value stored under the identifier"""
        data = self.content_for(identifier)
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"No form data stored under '{identifier}'")
        for field, expected in data.items():
            if isinstance(expected, (list, tuple)):
                self._assert_table_filled(field, expected)
                continue
            expected = self._expected(expected)
            actual = self.locator.find_field(field).get_attribute("value") or ""
            if actual != str(expected):
                raise StepAssertionError(f"Field '{field}' holds '{actual}', expected '{expected}'")

    def _expected(self, value):
        """Alias tokens stand for the value kept under their letter"""
        return self.alias_value(value) if is_alias_token(value) else value

    def _assert_table_filled(self, field: str, expected) -> None:
        (action,) = self.forms.plan({field: expected})
        actual_rows = self.forms.read_table(field)
        for position, row in enumerate(action.rows):
            row = [str(self._expected(cell)) for cell in row]
            actual = actual_rows[position] if position < len(actual_rows) else []
            if row != actual[: len(row)]:
                raise StepAssertionError(
                    f"Row {position + 1} of '{field}' holds {actual}, expected {list(row)}"
                )

    def dummy_content(self, type_name: str, identifier: str | None = None):
        value = dummy_content_for(type_name)
        if identifier:
            self.context.store(identifier, value)
        return value

    ######################################################################
    #  C O N T E N T   S T E P S
    ######################################################################
    def dummy_data_for_content_type(self, content_type: str) -> dict:
        stored = self.context.content_holder.get(content_type)
        if isinstance(stored, Mapping) and "fields" in stored:
            definitions = stored["fields"]
        else:
            definitions = self.repository.get_field_definitions(content_type)
        if not definitions:
            raise ConfigurationError(f"Couldn't find Field definitions of Content Type '{content_type}'")
        return dummy_data_for_fields(definitions)

    def have_user_with(self, table):
        return self.repository.create_user(table_to_data(table.body))

    def have_content_type_with(self, identifier: str, table):
        """Rows with one filled cell are type definitions, the others fields.

        Field rows read "type, identifier, definitions..."; empty cells are
        dropped since Gherkin tables are rectangular.
        """
        rows = [[cell for cell in row if cell] for row in table.body]
        definitions = [row[0] for row in rows if len(row) == 1]
        fields = [row for row in rows if len(row) >= 2]
        draft = self.content.create_content_type(identifier, definitions, fields)
        self.context.store(
            identifier,
            {"fields": {field.identifier: field.field_type for field in draft.field_definitions}},
        )
        return draft

    def _create_object(self, identifier, content_type, data=None, location=None, publish=True):
        values = self.dummy_data_for_content_type(content_type)
        values.update(data or {})
        created = self.content.create_content(content_type, values, location=location, publish=publish)
        self.created[identifier] = created
        self.context.store(identifier, values)
        return created

    def have_content_object_with(self, identifier: str, content_type: str, table):
        return self._create_object(identifier, content_type, table_to_data(table.body))

    def have_content_object_draft(self, identifier: str, content_type: str):
        return self._create_object(identifier, content_type, publish=False)

    def have_content_object(self, identifier: str, content_type: str):
        return self._create_object(identifier, content_type)

    def have_following_content_objects(self, content_type: str, table) -> list:
        """Rows: identifier, location, then "key:value" settings"""
        created = []
        for row in table.body:
            if not row:
                continue
            identifier, location = row[0], (row[1] if len(row) > 1 else None)
            settings = {}
            for cell in row[2:]:
                setting = settings_from_multiple_value(cell)
                if isinstance(setting, Mapping):
                    settings.update(setting)
            created.append(self._create_object(identifier, content_type, settings, location or None))
        return created

    def have_containers_containing(self, containers: int, container_type: str, leafs: int, leaf_type: str):
        created = []
        for index in range(1, containers + 1):
            container = self._create_object(f"{container_type}{index}", container_type)
            location = container.get("location_id")
            if location is None:
                raise ConfigurationError(f"Container '{container_type}{index}' has no location")
            for leaf in range(1, leafs + 1):
                self._create_object(f"{container_type}{index}/{leaf_type}{leaf}", leaf_type, location=location)
            created.append(container)
        return created

    def have_average_stars(self, stars, votes, identifier):
        raise PendingStepError("Content managing: voting system")

    def _stored_object(self, identifier: str):
        return self.created.get(identifier) or self.repository.get_data_by_identifier(identifier)

    def dont_have_content_object(self, identifier: str) -> None:
        stored = self._stored_object(identifier)
        if stored and "id" in stored:
            self.repository.delete_content(stored["id"])
        self.created.pop(identifier, None)
        self.context.content_holder.pop(identifier, None)

    def update_content_object(self, identifier: str, table):
        stored = self._stored_object(identifier)
        if not stored or "id" not in stored:
            raise ConfigurationError(f"Content object '{identifier}' not found")
        fields = table_to_data(table.body)
        result = self.repository.update_content(stored["id"], fields)
        current = self.context.content_holder.get(identifier)
        self.context.store(identifier, {**current, **fields} if isinstance(current, Mapping) else fields)
        return result

    def see_content_object(self, identifier: str) -> None:
        """The page shows the title (or name) of the content object"""
        data = self.content_for(identifier)
        if not isinstance(data, Mapping):
            raise ConfigurationError(f"Content object '{identifier}' not found")
        name = data.get("title") or data.get("name")
        if not name:
            raise PendingStepError("Content check needs a 'title' or 'name' field")
        self.locator.find_one(
            f"//*[not(self::script)][contains(text(), {literal(name)})]",
            Engine.XPATH,
            "content object",
            message=f"Couldn't find Content object '{identifier}' ({name})",
        )

    def extension_active_with(self, extension: str, table):
        raise PendingStepError("System managing to enable an extension (with definitions)")

    def setting_enabled(self, setting: str):
        raise PendingStepError(f"Define enable '{setting}'")

    def setting_disabled(self, setting: str):
        raise PendingStepError(f"Define disable '{setting}'")
