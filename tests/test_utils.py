import io

import pandas as pd
import pytest

from tax_calc import LineItem
from utils import (
    add_item,
    items_from_dataframe,
    load_items_from_upload,
    new_items,
    remove_item,
    update_item,
)


def test_new_items_has_at_least_one():
    assert new_items() == (LineItem(),)
    assert new_items(0) == (LineItem(),)
    assert len(new_items(3)) == 3


def test_add_item_appends_empty_item():
    items = (LineItem("2", "50"),)
    grown = add_item(items)
    assert grown == (LineItem("2", "50"), LineItem())
    assert items == (LineItem("2", "50"),)


def test_remove_item_keeps_order():
    items = (LineItem("1", "a"), LineItem("2", "b"), LineItem("3", "c"))
    assert remove_item(items, 1) == (LineItem("1", "a"), LineItem("3", "c"))
    assert len(items) == 3


def test_remove_last_remaining_item_is_noop():
    items = (LineItem("1", "10"),)
    assert remove_item(items, 0) == items


def test_remove_out_of_range_is_noop():
    items = (LineItem("1", "a"), LineItem("2", "b"))
    assert remove_item(items, 5) == items
    assert remove_item(items, -1) == items


def test_update_item_replaces_one_field():
    items = (LineItem("1", "10"), LineItem("2", "20"))
    updated = update_item(items, 1, "rate", "25")
    assert updated == (LineItem("1", "10"), LineItem("2", "25"))
    assert items[1].rate == "20"


def test_update_item_rejects_unknown_field():
    with pytest.raises(ValueError):
        update_item((LineItem(),), 0, "discount", "5")


def test_items_from_dataframe_matches_columns_by_name():
    df = pd.DataFrame({"Description": ["Pen", "Book"], "Qty": [2, 3], "Unit_Price": [50, 20.5]})
    assert items_from_dataframe(df) == (LineItem("2", "50"), LineItem("3", "20.5"))


def test_items_from_dataframe_falls_back_to_first_columns():
    df = pd.DataFrame({"a": ["4", None], "b": ["12.5", "7"]})
    assert items_from_dataframe(df) == (LineItem("4", "12.5"), LineItem("", "7"))


def test_load_items_from_csv():
    data = b"quantity,rate\n2,100\n1,10\n"
    assert load_items_from_upload(data, "items.CSV") == (LineItem("2", "100"), LineItem("1", "10"))


def test_load_items_from_xlsx():
    buffer = io.BytesIO()
    pd.DataFrame({"Quantity": [2, 3], "Rate": [50, 20]}).to_excel(buffer, index=False)
    items = load_items_from_upload(buffer.getvalue(), "items.xlsx")
    assert items == (LineItem("2", "50"), LineItem("3", "20"))


def test_load_items_rejects_unsupported_type():
    with pytest.raises(ValueError, match="Unsupported file type"):
        load_items_from_upload(b"", "items.pdf")


def test_load_items_reports_unreadable_file():
    with pytest.raises(ValueError):
        load_items_from_upload(b"not a workbook", "items.xlsx")


def test_update_item_out_of_range_is_noop():
    items = (LineItem("1", "10"), LineItem("2", "20"))
    assert update_item(items, 5, "rate", "99") == items
    assert update_item(items, -1, "rate", "99") == items


def test_fallback_skips_column_matched_by_name():
    df = pd.DataFrame({"Item": ["Pen"], "Qty": [2], "Cost": [50]})
    assert items_from_dataframe(df) == (LineItem("2", "50"),)


def test_fallback_skips_description_column():
    df = pd.DataFrame({"Rate": [50], "Name": ["Pen"], "Count": [2]})
    assert items_from_dataframe(df) == (LineItem("2", "50"),)


def test_load_items_from_description_qty_unit_sheet():
    data = b"Description,Amount,Unit\nPen,2,50\nBook,3,20.5\n"
    assert load_items_from_upload(data, "export.csv") == (LineItem("2", "50"), LineItem("3", "20.5"))
