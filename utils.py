import io
import logging
from dataclasses import replace
from typing import List, Sequence, Tuple

import pandas as pd # type: ignore

from tax_calc import LineItem

logger = logging.getLogger(__name__)

ITEM_FIELDS = ("quantity", "rate")

_QUANTITY_COLUMNS = ("quantity", "qty")
_RATE_COLUMNS = ("rate", "unit_price", "price")
_DESCRIPTION_COLUMNS = ("description", "item", "name", "product")


def new_items(count: int = 1) -> Tuple[LineItem, ...]:
    return tuple(LineItem() for _ in range(max(int(count), 1)))


def add_item(items: Sequence[LineItem]) -> Tuple[LineItem, ...]:
    return tuple(items) + (LineItem(),)


def remove_item(items: Sequence[LineItem], index: int) -> Tuple[LineItem, ...]:
    """Drop the item at index. At least one item always remains."""
    items = tuple(items)
    if len(items) <= 1 or not 0 <= index < len(items):
        return items
    return items[:index] + items[index + 1:]


def update_item(items: Sequence[LineItem], index: int, field: str, value: str) -> Tuple[LineItem, ...]:
    if field not in ITEM_FIELDS:
        raise ValueError(f"Unknown item field: {field!r}")
    if not 0 <= index < len(items):
        return tuple(items)
    items = list(items)
    items[index] = replace(items[index], **{field: "" if value is None else str(value)})
    return tuple(items)


def _cell_text(value) -> str:
    if pd.isna(value):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _find_column(columns: List[str], candidates):
    lowered = [str(c).strip().lower() for c in columns]
    for name in candidates:
        if name in lowered:
            return columns[lowered.index(name)]
    return None


def _fallback_columns(columns: List[str], used) -> List[str]:
    """
    Unmatched columns in sheet order. Description columns are skipped,
    and so is the leading column of a Description, Qty, Unit shaped sheet.
    """
    pool = []
    for i, col in enumerate(columns):
        if col in used or str(col).strip().lower() in _DESCRIPTION_COLUMNS:
            continue
        if i == 0 and len(columns) >= 3:
            continue
        pool.append(col)
    return pool


def items_from_dataframe(df: pd.DataFrame) -> Tuple[LineItem, ...]:
    columns = list(df.columns)
    qty_col = _find_column(columns, _QUANTITY_COLUMNS)
    rate_col = _find_column(columns, _RATE_COLUMNS)
    pool = _fallback_columns(columns, {c for c in (qty_col, rate_col) if c is not None})
    if qty_col is None and pool:
        qty_col = pool.pop(0)
    if rate_col is None and pool:
        rate_col = pool.pop(0)
    items = []
    for _, row in df.iterrows():
        qty = _cell_text(row[qty_col]) if qty_col is not None else ""
        rate = _cell_text(row[rate_col]) if rate_col is not None else ""
        items.append(LineItem(quantity=qty, rate=rate))
    return tuple(items)


def load_items_from_upload(file_bytes: bytes, filename: str) -> Tuple[LineItem, ...]:
    """Read line items from an uploaded CSV or XLSX file."""
    fname = filename.lower()
    try:
        if fname.endswith(".csv"):
            df = pd.read_csv(io.BytesIO(file_bytes))
        elif fname.endswith(".xlsx"):
            df = pd.read_excel(io.BytesIO(file_bytes))
        else:
            raise ValueError(f"Unsupported file type: {filename}")
    except ValueError:
        raise
    except Exception as e:
        raise ValueError(f"Could not read {filename}: {e}") from e

    items = items_from_dataframe(df)
    logger.info("Loaded %d items from %s", len(items), filename)
    return items
