from typing import List, Tuple

import pandas as pd # type: ignore

from tax_calc import GstMode, InvoiceInput, InvoiceResult, money, parse_amount


def format_money(val, symbol="₹"):
    return f"{symbol}{money(val):.2f}"


def split_rate_label(gst_rate_text) -> str:
    """Per-half rate shown next to CGST/SGST, e.g. "18" -> "9.0"."""
    return f"{parse_amount(gst_rate_text) / 2:.1f}"


def summary_rows(result: InvoiceResult, invoice: InvoiceInput, symbol="₹") -> List[Tuple[str, str]]:
    """
    Rows of the summary panel, in display order.
    Zero-amount items are hidden, and the packing row only shows
    when a packing charge was entered.
    """
    rows = []
    for i, amount in enumerate(result.item_amounts):
        if amount > 0:
            rows.append((f"Item {i+1} Amount (Qty × Rate)", format_money(amount, symbol)))

    rows.append(("Basic Amount", format_money(result.basic_amount, symbol)))
    if parse_amount(invoice.packing) > 0:
        rows.append(("Amount with Packing", format_money(result.amount_with_packing, symbol)))

    if GstMode.coerce(invoice.gst_mode) is GstMode.IGST:
        rows.append((f"IGST ({invoice.gst_rate}%)", format_money(result.igst, symbol)))
    else:
        half = split_rate_label(invoice.gst_rate)
        rows.append((f"CGST ({half}%)", format_money(result.cgst, symbol)))
        rows.append((f"SGST ({half}%)", format_money(result.sgst, symbol)))

    rows.append(("Grand Total", format_money(result.grand_total, symbol)))
    return rows


def summary_frame(result: InvoiceResult, invoice: InvoiceInput, symbol="₹") -> pd.DataFrame:
    return pd.DataFrame(summary_rows(result, invoice, symbol), columns=["Description", "Amount"])
