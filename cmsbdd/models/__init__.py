"""Data model for the step library."""
from .context import ScenarioContext
from .descriptors import (
    AttributeMatch,
    BlockDescriptor,
    RawXPath,
    TagName,
    looks_like_xpath,
    parse_block_descriptor,
)
from .table import (
    GherkinTable,
    LinkDescriptor,
    links_from_table,
    settings_from_multiple_value,
    table_to_data,
)

__all__ = [
    "AttributeMatch",
    "BlockDescriptor",
    "GherkinTable",
    "LinkDescriptor",
    "RawXPath",
    "ScenarioContext",
    "TagName",
    "links_from_table",
    "looks_like_xpath",
    "parse_block_descriptor",
    "settings_from_multiple_value",
    "table_to_data",
]
