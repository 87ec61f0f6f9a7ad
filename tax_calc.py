import logging
import math
import re
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Dict, Sequence, Tuple

logger = logging.getLogger(__name__)

# leading numeric literal, the way a browser number field parses it
_NUMBER_PREFIX = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


class GstMode(Enum):
    IGST = "igst"
    CGST_SGST = "cgst_sgst"

    @property
    def label(self):
        return "IGST" if self is GstMode.IGST else "CGST + SGST"

    @classmethod
    def coerce(cls, value):
        """Accept a GstMode, its value ("igst") or its name ("CGST_SGST")."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for mode in cls:
            if text.lower() == mode.value or text.upper() == mode.name:
                return mode
        raise ValueError(f"Unknown GST mode: {value!r}")


@dataclass(frozen=True)
class LineItem:
    quantity: str = ""
    rate: str = ""


@dataclass(frozen=True)
class InvoiceInput:
    items: Tuple[LineItem, ...] = (LineItem(),)
    packing: str = ""
    gst_rate: str = "18"
    gst_mode: GstMode = GstMode.IGST


@dataclass(frozen=True)
class InvoiceResult:
    item_amounts: Tuple[float, ...] = field(default_factory=tuple)
    basic_amount: float = 0.0
    amount_with_packing: float = 0.0
    igst: float = 0.0
    cgst: float = 0.0
    sgst: float = 0.0
    gst_total: float = 0.0
    grand_total: float = 0.0

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["item_amounts"] = list(self.item_amounts)
        return data


def parse_amount(text) -> float:
    """
    Parse the numeric prefix of free-form user text.
    Empty, blank or non-numeric text counts as 0.0 and never raises.
    """
    if text is None:
        return 0.0
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = float(text)
        return value if math.isfinite(value) else 0.0

    m = _NUMBER_PREFIX.match(str(text))
    if not m:
        if str(text).strip():
            logger.debug("Treating non-numeric input %r as 0", text)
        return 0.0
    try:
        value = float(m.group(0))
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        logger.debug("Treating out-of-range input %r as 0", text)
        return 0.0
    return value


def compute_item_amounts(items: Sequence[LineItem]) -> Tuple[float, ...]:
    return tuple(parse_amount(it.quantity) * parse_amount(it.rate) for it in items)


def compute_basic_amount(item_amounts: Sequence[float]) -> float:
    total = 0.0
    for amount in item_amounts:
        total += amount
    return total


def compute_amount_with_packing(basic_amount: float, packing_text) -> float:
    return basic_amount + parse_amount(packing_text)


def round_half_up(n: float) -> float:
    """Round to the nearest rupee, ties upward."""
    return float(math.floor(n + 0.5))


def round_split_half(n: float) -> float:
    """
    Round one half of a split tax.
    Floor when the fractional part is below .5, ceil otherwise.
    """
    fractional = n - math.floor(n)
    if fractional < 0.5:
        return float(math.floor(n))
    return float(math.ceil(n))


def compute_gst(amount_with_packing: float, gst_rate_text, gst_mode) -> Dict[str, float]:
    """
    Compute tax components for the invoice.
    IGST -> single tax rounded to the nearest rupee
    CGST_SGST -> half of the tax rounded once, SGST mirrors CGST
    """
    mode = GstMode.coerce(gst_mode)
    rate_pct = parse_amount(gst_rate_text)
    if rate_pct < 0:
        logger.warning("Negative GST rate %r clamped to 0", gst_rate_text)
        rate_pct = 0.0

    raw_gst = amount_with_packing * (rate_pct / 100)
    igst = cgst = sgst = 0.0
    if mode is GstMode.IGST:
        igst = round_half_up(raw_gst)
        gst_total = igst
    else:
        cgst = round_split_half(raw_gst / 2)
        sgst = cgst
        gst_total = cgst + sgst

    return {
        "igst": igst,
        "cgst": cgst,
        "sgst": sgst,
        "gst_total": gst_total,
    }


def compute_grand_total(amount_with_packing: float, gst_total: float) -> float:
    return amount_with_packing + gst_total


def calculate_invoice(invoice: InvoiceInput) -> InvoiceResult:
    item_amounts = compute_item_amounts(invoice.items)
    basic_amount = compute_basic_amount(item_amounts)
    amount_with_packing = compute_amount_with_packing(basic_amount, invoice.packing)
    gst = compute_gst(amount_with_packing, invoice.gst_rate, invoice.gst_mode)
    return InvoiceResult(
        item_amounts=item_amounts,
        basic_amount=basic_amount,
        amount_with_packing=amount_with_packing,
        igst=gst["igst"],
        cgst=gst["cgst"],
        sgst=gst["sgst"],
        gst_total=gst["gst_total"],
        grand_total=compute_grand_total(amount_with_packing, gst["gst_total"]),
    )


def money(val):
    """Round to 2 decimals consistently for money values."""
    return round(float(val), 2)
