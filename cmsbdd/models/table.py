"""
Gherkin table helpers.

behave hands tables over with the header row split from the body. The
library works on plain rows and always treats row 0 as the header.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class GherkinTable:
    """Ordered rows of string cells, the first one being the header"""

    rows: tuple

    @classmethod
    def from_rows(cls, rows) -> "GherkinTable":
        return cls(tuple(tuple(str(cell) for cell in row) for row in rows))

    @classmethod
    def from_behave(cls, table) -> "GherkinTable":
        """Rebuild the full table (header included) from a behave Table"""
        if table is None:
            return cls(())
        rows = [list(table.headings)]
        rows.extend(list(row.cells) for row in table.rows)
        return cls.from_rows(rows)

    @property
    def header(self) -> tuple:
        return self.rows[0] if self.rows else ()

    @property
    def body(self) -> tuple:
        """Data rows with the header stripped"""
        return self.rows[1:]

    def column(self, index: int = 0) -> list:
        return [row[index] for row in self.body if len(row) > index]

    def __len__(self):
        return len(self.body)


@dataclass(frozen=True)
class LinkDescriptor:
    """Expected link text (or url slug source) with an optional parent label"""

    text: str
    parent: str | None = None

    @property
    def slug(self) -> str:
        return self.text.replace(" ", "-")

    @classmethod
    def from_row(cls, row) -> "LinkDescriptor":
        parent = row[1] if len(row) >= 2 and row[1] else None
        return cls(row[0], parent)


def links_from_table(table: GherkinTable) -> list:
    """Build link descriptors from the table body"""
    return [LinkDescriptor.from_row(row) for row in table.body if row]


def table_to_data(rows, data: dict | None = None) -> dict:
    """Convert "| field | value |" rows into a field -> value mapping.

    A row with several filled value cells becomes a list (multi-valued field),
    a row with a lone field name maps to an empty string.
    """
    data = dict(data or {})
    for row in rows:
        if not row:
            continue
        row = list(row)
        key = row[0]
        filled = [cell for cell in row if cell]
        if len(filled) <= 2:
            value = row[1] if len(row) > 1 else ""
        else:
            value = row[1:]
        data[key] = value
    return data


def settings_from_multiple_value(value):
    """Split "key:value" or "key:v1:v2" cells into a mapping"""
    if not isinstance(value, str) or ":" not in value:
        return value
    key, *values = value.split(":")
    if len(values) == 1:
        return {key: values[0]}
    return {key: values}
