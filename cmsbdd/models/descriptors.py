"""
Block descriptors.

A block is a named region of the page ("main", "top menu"...). Its root
selector is configured as one of three shapes:

    blocks:
      main: "//div[@id='main']"       # raw XPath
      footer: footer                  # bare tag name
      top menu:                       # attribute match
        tag: nav
        class: [menu, top]
        text: Home
"""
from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class RawXPath:
    """A descriptor that already is an XPath expression"""

    xpath: str


@dataclass(frozen=True)
class TagName:
    """A descriptor naming a single tag"""

    tag: str


@dataclass(frozen=True)
class AttributeMatch:
    """Optional tag plus required substrings for each attribute"""

    tag: str | None = None
    attrs: dict = field(default_factory=dict)


BlockDescriptor = Union[RawXPath, TagName, AttributeMatch]


def looks_like_xpath(value) -> bool:
    """Heuristic: a string starting with '/' or '(' is taken as XPath.

    This is not a syntax check. Anything that is not a string is never XPath.
    """
    return isinstance(value, str) and value.startswith(("/", "("))


def _as_values(value) -> tuple:
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(str(item) for item in value)
    return (str(value),)


def parse_block_descriptor(raw) -> BlockDescriptor | None:
    """Turn a configuration value into a BlockDescriptor"""
    if raw is None:
        return None
    if isinstance(raw, (RawXPath, TagName, AttributeMatch)):
        return raw
    if isinstance(raw, str):
        if looks_like_xpath(raw):
            return RawXPath(raw)
        return TagName(raw)
    if isinstance(raw, dict):
        attrs = {str(key): _as_values(value) for key, value in raw.items() if key != "tag"}
        return AttributeMatch(tag=raw.get("tag"), attrs=attrs)
    raise TypeError(f"Unsupported block descriptor: {raw!r}")
