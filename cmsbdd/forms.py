"""
Form filling.

A form definition maps field names to values. plan() turns it into fill
actions (scalars fill one field, lists fill the rows of a multi-value
widget) and execute() performs them through the ElementLocator.
"""
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from cmsbdd.browser import Engine
from cmsbdd.common.errors import ConfigurationError, ElementNotFoundError, MissingFileError
from cmsbdd.xpath import literal

logger = logging.getLogger("cmsbdd")

FILL = "fill"
TABLE = "table"

ROW_INPUTS = (
    ".//input[not(@type='hidden' or @type='submit' or @type='button' or @type='image')]"
    " | .//textarea | .//select"
)


@dataclass(frozen=True)
class FillAction:
    """One field to fill, or one multi-row widget to fill row by row"""

    field: str
    value: object = None
    rows: tuple = ()
    kind: str = FILL


def is_alias_token(value) -> bool:
    """A single upper case letter stands for a value kept by the scenario"""
    return isinstance(value, str) and len(value) == 1 and "A" <= value <= "Z"


def _selected(field, only_fields) -> bool:
    if not only_fields:
        return True
    if isinstance(only_fields, str):
        return field == only_fields
    return field in only_fields


def _as_rows(value) -> tuple:
    if all(not isinstance(item, (list, tuple)) for item in value):
        return (tuple(value),)
    return tuple(tuple(item) if isinstance(item, (list, tuple)) else (item,) for item in value)


class FormFiller:
    """Plans and performs form fills"""

    def __init__(self, locator, resolve_alias=None):
        self.locator = locator
        self.resolve_alias = resolve_alias

    @staticmethod
    def plan(form_data: Mapping, only_fields=None) -> list:
        """Fill actions for the selected fields of a form definition.

        only_fields may be None (every field), one field name or a
        collection of names.
        """
        if not form_data:
            raise ConfigurationError("Missing form data")
        actions = []
        for field, value in form_data.items():
            if not _selected(field, only_fields):
                continue
            if isinstance(value, (list, tuple)):
                actions.append(FillAction(field, rows=_as_rows(value), kind=TABLE))
            else:
                actions.append(FillAction(field, value))
        return actions

    def _value_of(self, value):
        if self.resolve_alias is not None and is_alias_token(value):
            return self.resolve_alias(value)
        return value

    def _fill(self, action: FillAction):
        element = self.locator.find_field(action.field)
        value = self._value_of(action.value)
        if element.tag_name == "input" and (element.get_attribute("type") or "") == "file":
            if not os.path.isfile(str(value)):
                raise MissingFileError(str(value))
            element.attach_file(str(value))
        else:
            element.set_value(value)
        return value

    def _table_rows(self, field: str) -> list:
        """Rows holding inputs inside a multi-value widget"""
        quoted = literal(field)
        container = self.locator.find_one(
            f"//*[@id={quoted} or @name={quoted} or contains(@id, {quoted})][.//tr]",
            Engine.XPATH,
            "table field",
        )
        return container.find_all(Engine.XPATH, ".//tr[.//input or .//textarea or .//select]")

    def read_table(self, field: str) -> list:
        """Current values of a multi-value widget, row by row"""
        return [
            [element.get_attribute("value") or "" for element in row.find_all(Engine.XPATH, ROW_INPUTS)]
            for row in self._table_rows(field)
        ]

    def _fill_table(self, action: FillAction):
        rows = self._table_rows(action.field)
        if len(rows) < len(action.rows):
            raise ElementNotFoundError(
                action.field,
                "table field",
                f"Field '{action.field}' has {len(rows)} rows, {len(action.rows)} needed",
            )
        filled = []
        for row, values in zip(rows, action.rows):
            inputs = row.find_all(Engine.XPATH, ROW_INPUTS)
            if len(inputs) < len(values):
                raise ElementNotFoundError(
                    action.field, "table field", f"Not enough inputs in a row of '{action.field}'"
                )
            resolved = [self._value_of(value) for value in values]
            for element, value in zip(inputs, resolved):
                element.set_value(value)
            filled.append(resolved)
        return filled

    def execute(self, actions) -> dict:
        """Perform the actions; returns field -> value actually entered"""
        filled = {}
        for action in actions:
            logger.debug("Filling '%s'", action.field)
            if action.kind == TABLE:
                filled[action.field] = self._fill_table(action)
            else:
                filled[action.field] = self._fill(action)
        return filled

    def fill(self, form_data: Mapping, only_fields=None) -> dict:
        return self.execute(self.plan(form_data, only_fields))
