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
Step Catalog Test Suite
"""

# pylint: disable=missing-function-docstring
import os
import tempfile
from unittest import TestCase
from unittest.mock import MagicMock

from cmsbdd import create_catalog
from cmsbdd.common.errors import (
    ConfigurationError,
    ElementNotFoundError,
    MissingFileError,
    PendingStepError,
    StepAssertionError,
)
from cmsbdd.config import Settings, SiteConfig
from cmsbdd.content import PendingContentRepository, RestContentRepository
from cmsbdd.html_browser import HtmlBrowser
from cmsbdd.models import GherkinTable
from .factories import SiteConfigDataFactory

SEARCH_PAGE = """
<html><body>
  <form id="site-wide-search" action="/content/search">
    <input id="site-wide-search-field" name="SearchText"/>
    <input type="submit" name="SearchButton" value="Search"/>
  </form>
</body></html>
"""

LOGIN_PAGE = """
<html><body>
  <form method="post" action="/user/login">
    <label for="username">Username</label><input id="username" name="Login"/>
    <label for="password">Password</label><input id="password" type="password" name="Password"/>
    <input type="submit" name="LoginButton" value="Login"/>
  </form>
</body></html>
"""

EDIT_PAGE = """
<html><body>
  <nav class="menu top"><a href="/">Home</a></nav>
  <form method="post" action="/content/edit">
    <input name="title"/>
    <input type="file" name="image"/>
    <div id="tags"><table>
      <tr><td><input name="tag1"/></td><td><input name="tag2"/></td></tr>
    </table></div>
  </form>
  <table id="summary"><tr><th>Name</th></tr><tr><td>Other</td></tr></table>
  <table id="people"><tr><th>Name</th><th>Age</th></tr><tr><td>Alice</td><td>30</td></tr></table>
  <h1>Welcome</h1>
</body></html>
"""


def _response(text, url):
    response = MagicMock()
    response.text = text
    response.url = url
    response.status_code = 200
    return response


def _table(*rows):
    return GherkinTable.from_rows(rows)


class CatalogTestCase(TestCase):
    """Catalog over a script-less browser with a mocked session"""

    def setUp(self):
        self.session = MagicMock()
        self.browser = HtmlBrowser(self.session)
        self.site = SiteConfig.from_dict(SiteConfigDataFactory())
        self.settings = Settings(base_url="http://host")
        self.catalog = create_catalog(self.browser, self.settings, self.site)

    def load(self, html, url="http://host/"):
        self.browser.load_html(html, url)


######################################################################
#  B R O W S E R   S T E P S
######################################################################
class TestBrowserSteps(CatalogTestCase):
    """Navigation, search and page assertions"""

    def test_default_repository(self):
        self.assertIsInstance(self.catalog.repository, PendingContentRepository)
        settings = Settings(content_api_url="http://api")
        catalog = create_catalog(self.browser, settings, self.site)
        self.assertIsInstance(catalog.repository, RestContentRepository)

    def test_go_to_and_assert(self):
        self.session.get.return_value = _response("<html></html>", "http://host/articles?page=2")
        self.catalog.go_to("articles")
        self.session.get.assert_called_once_with("http://host/articles", timeout=10)
        self.catalog.assert_on_page("articles")

    def test_logged_in_as(self):
        """It should log in through the login form"""
        self.session.get.return_value = _response(LOGIN_PAGE, "http://host/user/login")
        self.session.post.return_value = _response(
            '<html><body><form name="Redirect" action="/"></form></body></html>', "http://host/"
        )
        self.catalog.logged_in_as("admin", "publish")
        self.session.post.assert_called_once_with(
            "http://host/user/login",
            data=[("Login", "admin"), ("Password", "publish"), ("LoginButton", "Login")],
            files=None,
            timeout=10,
        )

    def test_search_falls_back_to_button(self):
        """It should click SearchButton when script cannot run"""
        self.load(SEARCH_PAGE)
        self.session.get.return_value = _response("<html></html>", "http://host/content/search")
        self.catalog.search_for("release")
        self.session.get.assert_called_once_with(
            "http://host/content/search",
            params=[("SearchText", "release"), ("SearchButton", "Search")],
            timeout=10,
        )
        self.assertEqual(self.catalog.context.prior_search_phrase, "release")

    def test_search_with_script(self):
        browser = MagicMock()
        field = MagicMock()
        browser.find_all.return_value = [field]
        catalog = create_catalog(browser, self.settings, self.site)
        catalog.search_for("release")
        field.set_value.assert_called_once_with("release")
        browser.execute_script.assert_called_once()
        field.parent.find_one.assert_not_called()

    def test_search_script_failure_propagates(self):
        """It should only fall back on the unsupported capability signal"""
        browser = MagicMock()
        field = MagicMock()
        browser.find_all.return_value = [field]
        browser.execute_script.side_effect = RuntimeError("script error")
        catalog = create_catalog(browser, self.settings, self.site)
        with self.assertRaises(RuntimeError):
            catalog.search_for("release")
        field.parent.find_one.assert_not_called()
        self.assertEqual(catalog.context.prior_search_phrase, "")

    def test_search_results(self):
        self.load('<html><body><div class="feedback">Search for "release" returned 2 matches</div></body></html>')
        self.catalog.context.prior_search_phrase = "release"
        self.catalog.assert_search_results(2)
        with self.assertRaises(StepAssertionError):
            self.catalog.assert_search_results(3)

    def test_menus(self):
        self.load(EDIT_PAGE)
        self.catalog.see_menu("top")
        with self.assertRaises(PendingStepError):
            self.catalog.see_menu("side")
        with self.assertRaises(PendingStepError):
            self.catalog.dont_see_menu("side")
        with self.assertRaises(StepAssertionError):
            self.catalog.dont_see_menu("top")

    def test_links_in_main(self):
        self.load("<html><body><div id='page'><a href='/a'>Alpha</a></div><a href='/b'>Beta</a></body></html>")
        self.catalog.see_links_for_content_objects(_table(["link"], ["Alpha"]))
        self.catalog.dont_see_links(_table(["link"], ["Beta"]))
        self.catalog.see_links_in_order(_table(["link"], ["Alpha"]))
        with self.assertRaises(ElementNotFoundError):
            self.catalog.see_links_for_content_objects(_table(["link"], ["Beta"]))

    def test_see_table_checks_every_table(self):
        self.load(EDIT_PAGE)
        self.catalog.see_table(_table(["Name", "Age"], ["Alice", "30"]))
        with self.assertRaises(ElementNotFoundError):
            self.catalog.see_table(_table(["Name", "Age"], ["Alice", "31"]))

    def test_dump_page(self):
        self.load("<html><body>dump me</body></html>")
        with self.assertLogs("cmsbdd", level="INFO") as logs:
            source = self.catalog.dump_page()
        self.assertIn("dump me", source)
        self.assertIn("dump me", "".join(logs.output))


######################################################################
#  F O R M   A N D   D A T A   S T E P S
######################################################################
class TestFormSteps(CatalogTestCase):
    """Configured forms and scenario data"""

    def setUp(self):
        super().setUp()
        self.load(EDIT_PAGE)

    def test_fill_form_and_check(self):
        """It should keep the filled values and find them in the form"""
        filled = self.catalog.fill_form("article", identifier="draft")
        self.assertEqual(self.catalog.context.content_holder["draft"], filled)
        self.assertEqual(filled["title"], self.catalog.context.content_holder["A"])
        self.assertEqual(filled["tags"], [["news", "releases"]])
        self.catalog.assert_form_filled_with("draft")

    def test_fill_only_listed_fields(self):
        filled = self.catalog.fill_form("article", ["tags"])
        self.assertEqual(list(filled), ["tags"])

    def test_unknown_form(self):
        with self.assertRaises(ConfigurationError):
            self.catalog.fill_form("contact")

    def test_fix_data_mismatch(self):
        self.catalog.fill_field("title", "Hello")
        self.catalog.fix_data("expected", _table(["field", "value"], ["title", "Goodbye"]))
        with self.assertRaises(StepAssertionError):
            self.catalog.assert_form_filled_with("expected")
        self.catalog.fix_data("expected", _table(["field", "value"], ["title", "Hello"]))
        self.catalog.assert_form_filled_with("expected")

    def test_fixed_alias_matches_filled_alias(self):
        """It should compare an alias letter with the value it stands for"""
        self.catalog.fix_data("expected", _table(["field", "value"], ["title", "A"]))
        self.catalog.fill_field("title", "A")
        self.catalog.assert_form_filled_with("expected")

    def test_fixed_alias_in_table_rows(self):
        self.catalog.fill_form("article", ["tags"])
        self.catalog.fill_field("tag2", "C")
        self.catalog.context.store("tagged", {"tags": [["news", "C"]]})
        self.catalog.assert_form_filled_with("tagged")
        self.catalog.context.store("other", {"tags": [["news", "D"]]})
        with self.assertRaises(StepAssertionError):
            self.catalog.assert_form_filled_with("other")

    def test_form_data_missing(self):
        with self.assertRaises(ConfigurationError):
            self.catalog.assert_form_filled_with("nothing")

    def test_alias_reused(self):
        self.catalog.fill_field("title", "B")
        value = self.catalog.context.content_holder["B"]
        self.catalog.fix_data("check", _table(["field", "value"], ["title", "B"]))
        self.assertEqual(self.catalog.alias_value("B"), value)

    def test_dummy_content(self):
        value = self.catalog.dummy_content("integer", "number")
        self.assertEqual(self.catalog.context.content_holder["number"], value)

    def test_attach_file(self):
        with tempfile.NamedTemporaryFile(suffix=".png", delete=False) as handle:
            path = handle.name
        self.addCleanup(os.remove, path)
        self.catalog.context.store("logo", path)
        self.catalog.attach_file("image", "logo")
        self.assertEqual(self.browser.files["image"], path)
        with self.assertRaises(MissingFileError):
            self.catalog.attach_file("image", "unknown")


######################################################################
#  C O N T E N T   S T E P S
######################################################################
class TestContentSteps(CatalogTestCase):
    """Content set up through the repository"""

    def setUp(self):
        super().setUp()
        self.repository = MagicMock()
        self.repository.get_field_definitions.return_value = {"title": "ezstring", "body": "eztext"}
        self.repository.create_content.return_value = {"id": 5, "version": 1, "location_id": 60}
        self.repository.get_data_by_identifier.return_value = None
        self.catalog = create_catalog(self.browser, self.settings, self.site, self.repository)

    def test_pending_without_repository(self):
        catalog = create_catalog(self.browser, self.settings, self.site)
        with self.assertRaises(PendingStepError):
            catalog.have_content_object("welcome", "article")
        with self.assertRaises(PendingStepError):
            catalog.have_user_with(_table(["field", "value"], ["login", "bob"]))

    def test_content_type_and_object(self):
        self.catalog.have_content_type_with(
            "article", _table(["field type", "identifier"], ["ezstring", "title"], ["eztext", "body"])
        )
        self.assertEqual(
            self.catalog.context.content_holder["article"],
            {"fields": {"title": "ezstring", "body": "eztext"}},
        )
        self.catalog.have_content_object_with("welcome", "article", _table(["field", "value"], ["title", "Welcome"]))
        data = self.catalog.context.content_holder["welcome"]
        self.assertEqual(data["title"], "Welcome")
        self.assertTrue(data["body"])
        self.repository.publish_version.assert_called_once_with(5, 1)

    def test_content_type_mixed_rows(self):
        """It should read one filled cell rows as definitions in a rectangular table"""
        draft = self.catalog.have_content_type_with(
            "folder",
            _table(
                ["field type", "identifier", "settings"],
                ["is container", "", ""],
                ["ezstring", "title", "required"],
                ["eztext", "body", ""],
            ),
        )
        self.assertTrue(draft.is_container)
        self.assertEqual(
            [(field.field_type, field.identifier) for field in draft.field_definitions],
            [("ezstring", "title"), ("eztext", "body")],
        )
        self.assertTrue(draft.field_definitions[0].is_required)
        self.assertEqual(
            self.catalog.context.content_holder["folder"],
            {"fields": {"title": "ezstring", "body": "eztext"}},
        )

    def test_draft(self):
        self.catalog.have_content_object_draft("draft", "article")
        self.repository.publish_version.assert_not_called()

    def test_following_objects(self):
        self.repository.load_content_by_url.return_value = {"location_id": 9}
        table = _table(["identifier", "location", "settings"], ["one", "", ""], ["two", "folder", "title:Two"])
        created = self.catalog.have_following_content_objects("article", table)
        self.assertEqual(len(created), 2)
        self.assertEqual(self.catalog.context.content_holder["two"]["title"], "Two")
        self.repository.load_content_by_url.assert_called_once_with("/folder")

    def test_containers(self):
        self.catalog.have_containers_containing(2, "folder", 3, "article")
        self.assertEqual(self.repository.create_content.call_count, 8)

    def test_delete_and_update(self):
        self.catalog.have_content_object("welcome", "article")
        self.catalog.update_content_object("welcome", _table(["field", "value"], ["title", "New"]))
        self.repository.update_content.assert_called_once_with(5, {"title": "New"})
        self.assertEqual(self.catalog.context.content_holder["welcome"]["title"], "New")
        self.catalog.dont_have_content_object("welcome")
        self.repository.delete_content.assert_called_once_with(5)
        self.assertNotIn("welcome", self.catalog.context.content_holder)

    def test_update_unknown(self):
        with self.assertRaises(ConfigurationError):
            self.catalog.update_content_object("ghost", _table(["field", "value"], ["title", "x"]))

    def test_see_content_object(self):
        self.load(EDIT_PAGE)
        self.catalog.context.store("welcome", {"title": "Welcome"})
        self.catalog.see_content_object("welcome")
        self.catalog.context.store("bye", {"title": "Goodbye"})
        with self.assertRaises(ElementNotFoundError):
            self.catalog.see_content_object("bye")

    def test_pending_steps(self):
        for step in (
            lambda: self.catalog.have_average_stars("4", "10", "welcome"),
            lambda: self.catalog.extension_active_with("ezcomments", _table(["setting"])),
            lambda: self.catalog.setting_enabled("cache"),
            lambda: self.catalog.setting_disabled("cache"),
        ):
            with self.assertRaises(PendingStepError):
                step()
