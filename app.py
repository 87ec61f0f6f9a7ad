import logging

import streamlit as st

from config import get_settings
from summary import format_money, summary_frame
from tax_calc import GstMode, InvoiceInput, calculate_invoice
from utils import add_item, load_items_from_upload, new_items, remove_item, update_item

SETTINGS = get_settings()

logging.basicConfig(
    level=getattr(logging, SETTINGS["log_level"].upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# ---------------------------------------------------
# PAGE CONFIG
# ---------------------------------------------------
st.set_page_config(page_title=SETTINGS["page_title"], layout="centered")

st.markdown("""
    <style>
        .main, .stApp {
            background-color: #f5f7ff;
        }
        h1, h2, h3 {
            color: #3730a3;
        }
        .item-box {
            background-color: #f9fafb;
            padding: 12px 16px;
            border-radius: 8px;
            margin-bottom: 8px;
        }
        .summary-box {
            background-color: #eef2ff;
            padding: 12px 18px;
            border-radius: 8px;
            font-weight: 700;
            margin-top: 15px;
            border-left: 4px solid #4f46e5;
        }
    </style>
""", unsafe_allow_html=True)

st.title("🧾 Invoice Calculator")
st.write("Calculate your invoice with GST")

# ---------------------------------------------------
# SESSION STATE
# ---------------------------------------------------
if "invoice_items" not in st.session_state:
    st.session_state.invoice_items = new_items()
# bumped on every add/remove so item widgets are rebuilt from state
if "items_rev" not in st.session_state:
    st.session_state.items_rev = 0


def _replace_items(items):
    st.session_state.invoice_items = items
    st.session_state.items_rev += 1


def _on_add():
    _replace_items(add_item(st.session_state.invoice_items))


def _on_remove(index):
    _replace_items(remove_item(st.session_state.invoice_items, index))


def _on_edit(index, field, key):
    st.session_state.invoice_items = update_item(st.session_state.invoice_items, index, field, st.session_state[key])


# ---------------------------------------------------
# ITEMS
# ---------------------------------------------------
col1, col2 = st.columns([3, 1])
with col1:
    st.subheader("Items")
with col2:
    st.button("➕ Add Item", on_click=_on_add)

items = st.session_state.invoice_items
rev = st.session_state.items_rev

for i, it in enumerate(items):
    st.markdown(f'<div class="item-box"><b>Item {i+1}</b>', unsafe_allow_html=True)
    c_qty, c_rate, c_remove = st.columns([2, 2, 1])
    qty_key = f"qty{i}_{rev}"
    rate_key = f"rate{i}_{rev}"
    with c_qty:
        st.text_input(f"Quantity {i+1}", value=it.quantity, key=qty_key,
                      placeholder="Enter quantity",
                      on_change=_on_edit, args=(i, "quantity", qty_key))
    with c_rate:
        st.text_input(f"Rate {i+1}", value=it.rate, key=rate_key,
                      placeholder="Enter rate",
                      on_change=_on_edit, args=(i, "rate", rate_key))
    with c_remove:
        st.button("Remove", key=f"remove{i}_{rev}", on_click=_on_remove, args=(i,),
                  disabled=len(items) == 1)
    st.markdown('</div>', unsafe_allow_html=True)

uploaded = st.file_uploader("Load items from a spreadsheet (CSV/XLSX)", type=["csv", "xlsx"])
if uploaded is not None and st.button("Load Items"):
    try:
        loaded = load_items_from_upload(uploaded.read(), uploaded.name)
        if loaded:
            _replace_items(loaded)
            st.rerun()
        else:
            st.warning(f"No items found in {uploaded.name}")
    except ValueError as e:
        logger.warning("Item upload failed: %s", e)
        st.error(str(e))

# ---------------------------------------------------
# PACKING & GST SETTINGS
# ---------------------------------------------------
packing = st.text_input("Packing Charges", value="", placeholder="Enter packing charges")

c_rate, c_type = st.columns(2)
with c_rate:
    gst_rate = st.text_input("GST Rate (%)", value=SETTINGS["gst_rate"], placeholder="Enter GST rate")
with c_type:
    modes = list(GstMode)
    default_mode = GstMode.coerce(SETTINGS["gst_mode"])
    gst_mode = st.selectbox("GST Type", modes, index=modes.index(default_mode),
                            format_func=lambda m: m.label)

# ---------------------------------------------------
# SUMMARY
# ---------------------------------------------------
invoice = InvoiceInput(items=st.session_state.invoice_items, packing=packing,
                       gst_rate=gst_rate, gst_mode=gst_mode)
result = calculate_invoice(invoice)
symbol = SETTINGS["currency_symbol"]

st.subheader("Summary")
frame = summary_frame(result, invoice, symbol)
st.table(frame.iloc[:-1].set_index("Description"))

st.markdown(f"""
<div class="summary-box">
    Grand Total: {format_money(result.grand_total, symbol)}
</div>
""", unsafe_allow_html=True)
