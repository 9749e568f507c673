"""
Test cases for XPath query construction
"""

# pylint: disable=missing-function-docstring
from unittest import TestCase

from cmsbdd.browser import Engine
from cmsbdd.common.errors import ConfigurationError, PendingStepError, UnsupportedTypeError
from cmsbdd.html_browser import HtmlBrowser
from cmsbdd.models import AttributeMatch, RawXPath, TagName, looks_like_xpath
from cmsbdd.xpath import (
    attribute_search_expr,
    build_block_xpath,
    concat_tag_xpath,
    literal,
    main_attribute_search_expr,
    named_xpath,
    tags_for_semantic_type,
)

BLOCKS = {
    "main": "//div[@id='page']",
    "footer": "footer",
    "top menu": {"tag": "nav", "class": ["menu", "top"]},
    "greeting": {"text": "Hello"},
}


######################################################################
#  B L O C K   X P A T H   T E S T   C A S E S
######################################################################
class TestBuildBlockXPath(TestCase):
    """Block descriptors rendered as XPath"""

    def test_raw_xpath_is_returned_unchanged(self):
        """It should return an XPath descriptor as is"""
        self.assertEqual(build_block_xpath("main", BLOCKS), "//div[@id='page']")

    def test_grouped_xpath_is_raw(self):
        """It should take a descriptor starting with '(' as XPath"""
        blocks = {"first": "(//li)[1]"}
        self.assertEqual(build_block_xpath("first", blocks), "(//li)[1]")

    def test_tag_name(self):
        """It should turn a bare tag into a descendant search"""
        self.assertEqual(build_block_xpath("footer", BLOCKS), "//footer")

    def test_attribute_match_chains_predicates(self):
        """It should chain one contains() predicate per value"""
        self.assertEqual(
            build_block_xpath("top menu", BLOCKS),
            "//nav[contains(@class, 'menu')][contains(@class, 'top')]",
        )

    def test_text_key_uses_text_node(self):
        """It should match the text key against text()"""
        self.assertEqual(
            build_block_xpath("greeting", BLOCKS), "//*[contains(text(), 'Hello')]"
        )

    def test_unknown_block_is_empty(self):
        """It should answer an empty string for an unknown block"""
        self.assertEqual(build_block_xpath("sidebar", BLOCKS), "")
        self.assertEqual(build_block_xpath("sidebar", None), "")

    def test_parsed_descriptors(self):
        """It should accept already parsed descriptors"""
        blocks = {
            "a": RawXPath("//aside"),
            "b": TagName("header"),
            "c": AttributeMatch("div", {"id": ("content",)}),
        }
        self.assertEqual(build_block_xpath("a", blocks), "//aside")
        self.assertEqual(build_block_xpath("b", blocks), "//header")
        self.assertEqual(build_block_xpath("c", blocks), "//div[contains(@id, 'content')]")

    def test_quotes_in_values(self):
        """It should quote values holding apostrophes"""
        blocks = {"quote": {"text": "it's"}}
        self.assertEqual(build_block_xpath("quote", blocks), "//*[contains(text(), \"it's\")]")

    def test_looks_like_xpath(self):
        """It should only sniff strings"""
        self.assertTrue(looks_like_xpath("//a"))
        self.assertTrue(looks_like_xpath("(//a)[2]"))
        self.assertFalse(looks_like_xpath("div.menu"))
        self.assertFalse(looks_like_xpath(["/", "a"]))
        self.assertFalse(looks_like_xpath(None))


######################################################################
#  L I T E R A L   T E S T   C A S E S
######################################################################
class TestLiteral(TestCase):
    """XPath string literals"""

    def test_plain_text(self):
        self.assertEqual(literal("Home"), "'Home'")

    def test_apostrophe(self):
        self.assertEqual(literal("it's"), "\"it's\"")

    def test_double_quote(self):
        self.assertEqual(literal('say "hi"'), "'say \"hi\"'")

    def test_both_quotes(self):
        """It should fall back to concat() when both quote kinds are present"""
        self.assertEqual(literal("Say \"it's\""), "concat('Say \"it', \"'\", 's\"')")

    def test_literals_match_original_text(self):
        """It should find nodes whose text holds any quote combination"""
        texts = ["plain", "it's", 'say "hi"', "Say \"it's\" now"]
        browser = HtmlBrowser()
        for text in texts:
            escaped = text.replace("&", "&amp;").replace('"', "&quot;")
            browser.load_html(f'<html><body><p title="{escaped}">x</p></body></html>')
            found = browser.find_all(Engine.XPATH, f"//p[@title={literal(text)}]")
            self.assertEqual(len(found), 1, text)


######################################################################
#  S E M A N T I C   T Y P E   T E S T   C A S E S
######################################################################
class TestSemanticTypes(TestCase):
    """Tags registered for semantic types"""

    def test_list(self):
        self.assertEqual(tags_for_semantic_type("list"), frozenset({"li"}))

    def test_headers_are_case_insensitive(self):
        for type_name in ("topic", "Header", "TITLE"):
            self.assertEqual(tags_for_semantic_type(type_name), frozenset({"h1", "h2", "h3"}))

    def test_unknown_type_is_pending(self):
        """It should flag an unknown type as not implemented"""
        with self.assertRaises(UnsupportedTypeError) as raised:
            tags_for_semantic_type("paragraph")
        self.assertIsInstance(raised.exception, PendingStepError)
        self.assertIn("paragraph", str(raised.exception))

    def test_concat_tag_xpath(self):
        """It should join sorted tags without a trailing separator"""
        self.assertEqual(
            concat_tag_xpath({"h3", "h1", "h2"}, "//a"), "//h1//a | //h2//a | //h3//a"
        )
        self.assertEqual(concat_tag_xpath({"li"}, ""), "//li")


######################################################################
#  A T T R I B U T E   S E A R C H   T E S T   C A S E S
######################################################################
class TestAttributeSearch(TestCase):
    """Attribute search expressions"""

    def test_string_matches_id_or_class(self):
        self.assertEqual(attribute_search_expr("main"), "//*[@id='main' or @class='main']")
        self.assertEqual(
            attribute_search_expr("main", wrap_in_predicate=False), "@id='main' or @class='main'"
        )

    def test_mapping(self):
        """It should OR many values and AND attributes"""
        self.assertEqual(
            attribute_search_expr({"id": "page", "class": ["wide", "dark"]}, False),
            "@id='page' and (@class='wide' or @class='dark')",
        )

    def test_main_attribute_search(self):
        blocks = {"top menu": AttributeMatch("nav", {"class": ("menu", "top")}), "main": TagName("page")}
        self.assertEqual(
            main_attribute_search_expr("top menu", blocks),
            "//*[(@class='menu' or @class='top')]",
        )
        self.assertEqual(
            main_attribute_search_expr("main", blocks, False), "@id='page' or @class='page'"
        )

    def test_main_attribute_search_needs_configuration(self):
        with self.assertRaises(ConfigurationError):
            main_attribute_search_expr("sidebar", {})
        with self.assertRaises(ConfigurationError):
            main_attribute_search_expr("raw", {"raw": RawXPath("//div")})


######################################################################
#  N A M E D   S E L E C T O R   T E S T   C A S E S
######################################################################
class TestNamedXPath(TestCase):
    """Named link, button and field selectors"""

    HTML = """
    <html><body>
      <a href="/about" title="About us">About</a>
      <a name="anchor">No href</a>
      <button type="submit">Save draft</button>
      <input type="submit" name="publish" value="Publish"/>
      <label for="title-field">Title</label>
      <input id="title-field" name="title"/>
      <input type="hidden" name="token" value="x"/>
      <textarea placeholder="Body"></textarea>
    </body></html>
    """

    def setUp(self):
        self.browser = HtmlBrowser().load_html(self.HTML)

    def _count(self, kind, locator):
        return len(self.browser.find_all(Engine.XPATH, named_xpath(kind, locator)))

    def test_link(self):
        self.assertEqual(self._count("link", "About"), 1)
        self.assertEqual(self._count("link", "About us"), 1)
        self.assertEqual(self._count("link", "No href"), 0)

    def test_button(self):
        self.assertEqual(self._count("button", "Save draft"), 1)
        self.assertEqual(self._count("button", "Publish"), 1)
        self.assertEqual(self._count("button", "Save"), 0)

    def test_field(self):
        self.assertEqual(self._count("field", "Title"), 1)
        self.assertEqual(self._count("field", "title"), 1)
        self.assertEqual(self._count("field", "Body"), 1)
        self.assertEqual(self._count("field", "token"), 0)

    def test_link_or_button(self):
        self.assertEqual(self._count("link_or_button", "Publish"), 1)
        self.assertEqual(self._count("link_or_button", "About"), 1)

    def test_unknown_kind(self):
        with self.assertRaises(UnsupportedTypeError):
            named_xpath("image", "logo")
