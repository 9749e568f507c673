"""
XPath query construction.

Pure functions turning block descriptors, attribute maps and semantic type
names into XPath expressions. Every user supplied string is embedded through
literal(), so quotes in test data can never break an expression.
"""
from collections.abc import Mapping

from cmsbdd.common.errors import ConfigurationError, UnsupportedTypeError
from cmsbdd.models.descriptors import (
    AttributeMatch,
    RawXPath,
    TagName,
    looks_like_xpath,
    parse_block_descriptor,
)

__all__ = [
    "attribute_search_expr",
    "build_block_xpath",
    "concat_tag_xpath",
    "literal",
    "looks_like_xpath",
    "main_attribute_search_expr",
    "named_xpath",
    "tags_for_semantic_type",
]

SEMANTIC_TAGS = {
    "topic": frozenset({"h1", "h2", "h3"}),
    "header": frozenset({"h1", "h2", "h3"}),
    "title": frozenset({"h1", "h2", "h3"}),
    "list": frozenset({"li"}),
}

FIELD_NODES = (
    "self::input[not(@type='submit' or @type='image' or @type='button'"
    " or @type='reset' or @type='hidden')] or self::textarea or self::select"
)
BUTTON_INPUT_TYPES = "@type='submit' or @type='image' or @type='button' or @type='reset'"


def literal(text) -> str:
    """Render text as an XPath string literal.

    XPath 1.0 has no escape character, so a string holding both quote kinds is
    split on apostrophes and rebuilt with concat().
    """
    text = str(text)
    if "'" not in text:
        return f"'{text}'"
    if '"' not in text:
        return f'"{text}"'
    pieces = [f"'{piece}'" for piece in text.split("'")]
    return "concat(" + ", \"'\", ".join(pieces) + ")"


def _contains_predicate(attribute: str, value: str) -> str:
    target = "text()" if attribute == "text" else f"@{attribute}"
    return f"[contains({target}, {literal(value)})]"


def build_block_xpath(block_id: str, main_attributes: Mapping) -> str:
    """XPath for a configured page block, or "" when the block is unknown"""
    descriptor = parse_block_descriptor((main_attributes or {}).get(block_id))
    if descriptor is None:
        return ""
    if isinstance(descriptor, RawXPath):
        return descriptor.xpath
    if isinstance(descriptor, TagName):
        return f"//{descriptor.tag}"
    if isinstance(descriptor, AttributeMatch):
        xpath = f"//{descriptor.tag}" if descriptor.tag else "//*"
        for attribute, values in descriptor.attrs.items():
            for value in values:
                xpath += _contains_predicate(attribute, value)
        return xpath
    raise TypeError(f"Unsupported block descriptor: {descriptor!r}")


def tags_for_semantic_type(type_name: str) -> frozenset:
    """Tags that hold a kind of content (headers, list entries...)"""
    try:
        return SEMANTIC_TAGS[type_name.strip().lower()]
    except KeyError as error:
        raise UnsupportedTypeError(type_name) from error


def concat_tag_xpath(tags, suffix: str) -> str:
    """Union of //tag<suffix> for each tag"""
    return " | ".join(f"//{tag}{suffix}" for tag in sorted(tags))


def _equals_any(attribute: str, values) -> str:
    if isinstance(values, (list, tuple, set, frozenset)):
        values = list(values)
        return "(" + " or ".join(f"@{attribute}={literal(value)}" for value in values) + ")"
    return f"@{attribute}={literal(values)}"


def attribute_search_expr(container, wrap_in_predicate: bool = True) -> str:
    """Attribute search for an id/class string or an attribute -> value(s) map"""
    if isinstance(container, Mapping):
        result = " and ".join(
            _equals_any(attribute, values) for attribute, values in container.items()
        )
    else:
        quoted = literal(container)
        result = f"@id={quoted} or @class={quoted}"
    return f"//*[{result}]" if wrap_in_predicate else result


def main_attribute_search_expr(
    block_id: str, main_attributes: Mapping, wrap_in_predicate: bool = True
) -> str:
    """Attribute search built from the configured attributes of a block"""
    descriptor = (main_attributes or {}).get(block_id)
    if descriptor is None:
        raise ConfigurationError(f"Couldn't find the attributes for '{block_id}' container")
    if isinstance(descriptor, AttributeMatch):
        descriptor = dict(descriptor.attrs)
    elif isinstance(descriptor, TagName):
        # a single value names the id or class of the container
        descriptor = descriptor.tag
    elif isinstance(descriptor, RawXPath):
        raise ConfigurationError(f"Block '{block_id}' is not described by attributes")
    return attribute_search_expr(descriptor, wrap_in_predicate)


def _link_xpath(quoted: str) -> str:
    return (
        f"//a[@href][@id={quoted} or @title={quoted}"
        f" or contains(normalize-space(string(.)), {quoted}) or .//img[@alt={quoted}]]"
    )


def _button_xpath(quoted: str) -> str:
    match = f"@id={quoted} or @name={quoted} or @value={quoted} or @title={quoted}"
    return (
        f"//button[{match} or normalize-space(string(.))={quoted}]"
        f" | //input[{BUTTON_INPUT_TYPES}][{match}]"
    )


def _field_xpath(quoted: str) -> str:
    return (
        f"//*[{FIELD_NODES}][@id={quoted} or @name={quoted} or @placeholder={quoted}"
        f" or @id=//label[contains(normalize-space(string(.)), {quoted})]/@for]"
    )


def named_xpath(kind: str, locator: str) -> str:
    """XPath for a named selector: link, button, field or link_or_button"""
    quoted = literal(locator)
    builders = {
        "link": _link_xpath,
        "button": _button_xpath,
        "field": _field_xpath,
        "link_or_button": lambda q: f"{_link_xpath(q)} | {_button_xpath(q)}",
    }
    try:
        builder = builders[kind]
    except KeyError as error:
        raise UnsupportedTypeError(kind, f"Named selector '{kind}' not defined") from error
    return builder(quoted)
