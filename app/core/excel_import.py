"""Import prioritizer use cases from an Excel workbook.

Only the first worksheet is read. Its first row holds the headers; the
columns Title, Department and Description are matched case-insensitively.
"""

import io
from typing import Any

from openpyxl import load_workbook

from app.core.logging import get_logger
from app.core.schemas_prioritizer import UseCaseInput
from app.core.use_cases import DEFAULT_DEPARTMENT, timestamp_id

logger = get_logger(__name__)

NO_VALID_ROWS_MESSAGE = (
    "No valid use cases found in the Excel file. Please ensure it has columns: "
    "Title, Department, Description (case-insensitive)"
)
PARSE_FAILED_MESSAGE = "Failed to parse Excel file. Please check the format and try again."


class ExcelImportError(Exception):
    """Raised when a workbook cannot be turned into use cases."""


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def read_sheet_rows(data: bytes) -> list[dict[str, Any]]:
    """
    Read the first worksheet into header-keyed row dicts.

    Empty cells are returned as "" so every row carries every header.

    Raises:
        ExcelImportError: If the bytes are not a readable workbook or a sheet
            fails to parse while its rows are read
    """
    try:
        workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    except Exception as e:
        logger.error(f"Error parsing Excel: {e}")
        raise ExcelImportError(PARSE_FAILED_MESSAGE) from e

    # read_only workbooks parse sheet XML lazily, inside iter_rows
    try:
        return _collect_rows(workbook.worksheets[0])
    except Exception as e:
        logger.error(f"Error reading Excel rows: {e}")
        raise ExcelImportError(PARSE_FAILED_MESSAGE) from e
    finally:
        workbook.close()


def _collect_rows(worksheet: Any) -> list[dict[str, Any]]:
    row_iter = worksheet.iter_rows(values_only=True)
    header_row = next(row_iter, None)
    if header_row is None:
        return []

    headers = [_cell_text(h) for h in header_row]
    rows = []
    for values in row_iter:
        if values is None or all(v is None for v in values):
            continue
        row = {h: "" for h in headers if h}
        for header, value in zip(headers, values):
            if header:
                row[header] = "" if value is None else value
        rows.append(row)
    return rows


def _get_property(row: dict[str, Any], name: str) -> str:
    """Case-insensitive column lookup."""
    for key, value in row.items():
        if key.lower() == name.lower():
            return _cell_text(value)
    return ""


def rows_to_use_cases(rows: list[dict[str, Any]]) -> list[UseCaseInput]:
    """Keep rows that have both a title and a description."""
    batch = timestamp_id()
    use_cases = []
    for index, row in enumerate(rows):
        title = _get_property(row, "title")
        department = _get_property(row, "department")
        description = _get_property(row, "description")

        if not title or not description:
            continue

        use_cases.append(
            UseCaseInput(
                id=f"excel-{batch}-{index}",
                title=title,
                department=department or DEFAULT_DEPARTMENT,
                description=description,
            )
        )
    return use_cases


def import_use_cases(data: bytes, filename: str | None = None) -> list[UseCaseInput]:
    """
    Extract use cases from an uploaded .xlsx file.

    Args:
        data: Raw workbook bytes
        filename: Original filename, for logging only

    Returns:
        Parsed use cases (at least one)

    Raises:
        ExcelImportError: If the file is unreadable or has no valid rows
    """
    use_cases = rows_to_use_cases(read_sheet_rows(data))

    if not use_cases:
        raise ExcelImportError(NO_VALID_ROWS_MESSAGE)

    logger.info(
        f"Imported {len(use_cases)} use case(s) from Excel",
        extra={"upload_filename": filename, "count": len(use_cases)},
    )
    return use_cases
