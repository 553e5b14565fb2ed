"""
================================================================================
Table Query Engine
================================================================================

Addresses table cells by header name and row text instead of coordinates.

Every call re-reads the header row into a TableSchema and re-scans the body
rows; nothing is cached between calls, so data-driven tests that mutate the
table between steps always see the current DOM.

Row matching deliberately differs between the two queries:
    - get_table_cell_value(): first data row whose whole text contains
      `row_text`, ignoring case and with runs of whitespace (the tabs and
      newlines between cells) collapsed to one space
    - verify_row_exists(): every expected header's cell must equal the
      expected value exactly after trimming

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

import allure
from loguru import logger

from .errors import ColumnNotFound, HeaderNotFound, RowNotFound
from .locator import ElementRef, Handle, resolve


HEADER_CELLS = "th"
BODY_ROWS = "tbody tr"
# Any row holding data cells; excludes header-only rows of tables without <tbody>
DATA_ROWS = "tr:has(td)"
DATA_CELLS = "td"


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to one space and casefold, for row matching."""
    return " ".join(text.split()).casefold()


@dataclass(frozen=True)
class TableSchema:
    """Ordered header text -> zero-based column index."""

    headers: tuple

    @classmethod
    def from_texts(cls, texts: List[str]) -> "TableSchema":
        return cls(headers=tuple(text.strip() for text in texts))

    def index_of(self, header: str) -> int:
        """Index of the first column titled `header`, or -1."""
        try:
            return self.headers.index(header)
        except ValueError:
            return -1

    def __len__(self) -> int:
        return len(self.headers)


class TableQuery:
    """
    Header-aware table reader.

    Usage:
        >>> tables = TableQuery(page)
        >>> await tables.get_table_cell_value("#users", "Bob Smith", "Role")
        'Editor'
        >>> await tables.verify_row_exists("#users", {"Name": "Alice Johnson", "Role": "Admin"})
        True

    Args:
        page: Page or Frame the table selectors are evaluated in
    """

    def __init__(self, page: Any):
        self.page = page

    async def read_schema(self, table: Handle) -> TableSchema:
        """Read the header row of `table` into a fresh TableSchema."""
        return TableSchema.from_texts(await table.all_inner_texts(HEADER_CELLS))

    @allure.step("Get cell [{row_text}] x [{column_header}]")
    async def get_table_cell_value(
        self,
        table_ref: ElementRef,
        row_text: str,
        column_header: str,
    ) -> str:
        """
        Value of `column_header` in the first row containing `row_text`.

        Args:
            table_ref: The <table> element
            row_text: Text anywhere in the wanted row; may span several
                cells, e.g. "Bob Smith bob@example.com"
            column_header: Exact header text of the wanted column

        Returns:
            Trimmed cell text

        Raises:
            ColumnNotFound: Header missing, or the matched row is too short
            RowNotFound: No data row contains `row_text`
        """
        table = resolve(self.page, table_ref)
        schema = await self.read_schema(table)

        column = schema.index_of(column_header)
        if column == -1:
            logger.error(f"Column '{column_header}' not in {list(schema.headers)}")
            raise ColumnNotFound(column_header, table.describe())

        wanted = normalize_text(row_text)
        for row in await table.query_all(DATA_ROWS):
            if wanted not in normalize_text(await row.inner_text()):
                continue

            cells = await row.all_inner_texts(DATA_CELLS)
            if column >= len(cells):
                raise ColumnNotFound(column_header, table.describe(), row_text=row_text)

            value = cells[column].strip()
            logger.debug(f"Cell [{row_text}] x [{column_header}] = '{value}'")
            return value

        logger.error(f"No row containing '{row_text}' in {table.describe()}")
        raise RowNotFound(row_text, table.describe())

    @allure.step("Verify row exists: {expected_data}")
    async def verify_row_exists(
        self,
        table_ref: ElementRef,
        expected_data: Mapping[str, str],
    ) -> bool:
        """
        Whether one body row matches every header/value pair at once.

        Args:
            table_ref: The <table> element
            expected_data: Header text -> expected trimmed cell text

        Returns:
            True on the first fully matching row, False if none match

        Raises:
            HeaderNotFound: A header in `expected_data` is not in the table
                (checked before any row is read)
        """
        table = resolve(self.page, table_ref)
        schema = await self.read_schema(table)

        indices: Dict[str, int] = {}
        for header in expected_data:
            column = schema.index_of(header)
            if column == -1:
                logger.error(f"Header '{header}' not in {list(schema.headers)}")
                raise HeaderNotFound(header, table.describe())
            indices[header] = column

        for position, row in enumerate(await table.query_all(BODY_ROWS)):
            if await self._row_matches(row, expected_data, indices):
                logger.debug(f"Row {position} matches {dict(expected_data)}")
                return True

        logger.info(f"No row matches {dict(expected_data)} in {table.describe()}")
        return False

    async def _row_matches(
        self,
        row: Handle,
        expected_data: Mapping[str, str],
        indices: Dict[str, int],
    ) -> bool:
        cells = await row.query_all(DATA_CELLS)
        for header, expected in expected_data.items():
            column = indices[header]
            if column >= len(cells):
                return False
            if (await cells[column].inner_text()).strip() != expected:
                return False
        return True

    async def get_row_count(self, table_ref: ElementRef) -> int:
        """Number of body rows."""
        return len(await resolve(self.page, table_ref).query_all(BODY_ROWS))

    async def get_column_count(self, table_ref: ElementRef) -> int:
        """Number of header cells."""
        return len(await resolve(self.page, table_ref).all_inner_texts(HEADER_CELLS))


__all__ = [
    "normalize_text",
    "TableSchema",
    "TableQuery",
]
