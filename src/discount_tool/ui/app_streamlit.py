"""
Streamlit UI for the Discount Calculator.

Features:
- Three calculator modes: final price, discount rate, original price
- Standard, BOGO and Buy 2 Get 1 deals with tax, shipping and coupons
- Deal verdicts from the advisor
- Calculation history with CSV export
"""
import logging
import streamlit as st
import sys
from pathlib import Path
from datetime import datetime

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from discount_tool.config.currencies import CURRENCIES, format_currency, get_currency
from discount_tool.config.settings import get_settings
from discount_tool.engine import CalculatorMode, DealType, DiscountType, PricingInput, compute
from discount_tool.services.advisor_service import request_advice_sync
from discount_tool.services.history_service import HistoryStore
from discount_tool.services.validation import validate_input

logger = logging.getLogger(__name__)


st.set_page_config(
    page_title="Discount Calculator",
    layout="wide",
    initial_sidebar_state="expanded"
)


@st.cache_resource
def get_settings_cached():
    """Get cached settings."""
    return get_settings()


@st.cache_resource
def get_history():
    """Get cached history store."""
    s = get_settings_cached()
    return HistoryStore(limit=s.history_limit, csv_path=s.history_csv)


settings = get_settings_cached()
history = get_history()

MODE_LABELS = {
    CalculatorMode.PRICE: "🏷️ Final Price",
    CalculatorMode.DISCOUNT: "📉 Discount Rate",
    CalculatorMode.ORIGINAL: "⏪ Original Price",
}

DEAL_LABELS = {
    DealType.STANDARD: "Standard discount",
    DealType.BOGO: "Buy 1 Get 1 Free",
    DealType.B2G1: "Buy 2 Get 1 Free",
}


def reset_form():
    """Back to defaults, keeping the chosen currency."""
    currency = st.session_state.get('currency', settings.default_currency)
    defaults = PricingInput.defaults().replace(currency=currency)
    for key, value in defaults.to_dict().items():
        st.session_state[key] = value
    st.session_state.result = None
    st.session_state.advice = None


def clear_advice():
    st.session_state.advice = None


# Initialize form state
if 'result' not in st.session_state:
    reset_form()
    st.session_state.currency = get_currency(settings.default_currency).code

# Inputs hidden in the current mode would otherwise lose their values
for key in PricingInput.defaults().to_dict():
    st.session_state[key] = st.session_state[key]


# ============================================================================
# SIDEBAR: Currency & Status
# ============================================================================
with st.sidebar:
    st.header("⚙️ Settings")

    codes = [c.code for c in CURRENCIES]
    st.selectbox(
        "Currency",
        options=codes,
        format_func=lambda code: f"{get_currency(code).symbol} {code} - {get_currency(code).name}",
        key="currency",
        on_change=clear_advice,
    )

    st.divider()

    if settings.openai_api_key:
        st.success(f"🤖 **Deal analysis active** ({settings.advisor_model})")
    else:
        st.warning("⚠️ Deal analysis unavailable (no API key)")

    st.caption(f"History: {len(history)} / {history.limit} calculations")


# ============================================================================
# MAIN CONTENT
# ============================================================================
st.title("Discount Calculator")
st.caption(f"v1.0 | {datetime.now().strftime('%Y-%m-%d')}")

tab_calc, tab_history = st.tabs(["🧮 Calculator", "🕘 History"])

with tab_calc:
    mode = st.radio(
        "Mode",
        options=list(MODE_LABELS),
        format_func=MODE_LABELS.get,
        horizontal=True,
        label_visibility="collapsed",
        on_change=clear_advice,
    )
    currency = st.session_state.currency
    symbol = get_currency(currency).symbol

    col1, col2 = st.columns([1.4, 1.2], gap="large")

    with col1:
        with st.container(border=True):
            st.text_input("Item (optional)", key="item_name", on_change=clear_advice)

            if mode in (CalculatorMode.PRICE, CalculatorMode.DISCOUNT):
                st.number_input(f"Original Price ({symbol})", min_value=0.0, step=1.0,
                                key="original_price", on_change=clear_advice)

            if mode in (CalculatorMode.DISCOUNT, CalculatorMode.ORIGINAL):
                label = "Price Paid" if mode == CalculatorMode.DISCOUNT else "Final Price"
                st.number_input(f"{label} ({symbol})", min_value=0.0, step=1.0,
                                key="target_price", on_change=clear_advice)

            if mode == CalculatorMode.PRICE:
                st.selectbox("Deal Type", options=[d.value for d in DealType],
                             format_func=lambda v: DEAL_LABELS[DealType(v)],
                             key="deal_type", on_change=clear_advice)

            deal_is_bundle = mode == CalculatorMode.PRICE and st.session_state.deal_type != DealType.STANDARD.value
            if mode != CalculatorMode.DISCOUNT and not deal_is_bundle:
                c1, c2 = st.columns([2, 1])
                with c1:
                    st.number_input("Discount", min_value=0.0, step=1.0,
                                    key="discount_value", on_change=clear_advice)
                with c2:
                    st.radio("Type", options=[d.value for d in DiscountType],
                             format_func=lambda v: "%" if v == DiscountType.PERCENT.value else symbol,
                             key="discount_type", horizontal=True, on_change=clear_advice)

            with st.expander("Tax, shipping & quantity", expanded=True):
                c1, c2 = st.columns(2)
                with c1:
                    st.number_input("Tax (%)", min_value=0.0, step=0.5, key="tax_rate", on_change=clear_advice)
                    st.number_input("Quantity", min_value=1, step=1, key="quantity", on_change=clear_advice)
                with c2:
                    st.number_input(f"Shipping ({symbol})", min_value=0.0, step=1.0,
                                    key="shipping_cost", on_change=clear_advice)
                    if mode == CalculatorMode.PRICE and not deal_is_bundle:
                        st.number_input("Extra Coupon (%)", min_value=0.0, max_value=100.0, step=1.0,
                                        key="additional_coupon", on_change=clear_advice)

            b1, b2 = st.columns(2)
            calculate_clicked = b1.button("Calculate", type="primary", use_container_width=True)
            b2.button("🔄 Reset", on_click=reset_form, use_container_width=True)

        pricing_input = PricingInput(
            original_price=st.session_state.original_price,
            discount_value=st.session_state.discount_value,
            discount_type=st.session_state.discount_type,
            quantity=int(st.session_state.quantity),
            tax_rate=st.session_state.tax_rate,
            shipping_cost=st.session_state.shipping_cost,
            additional_coupon=st.session_state.additional_coupon,
            currency=currency,
            target_price=st.session_state.target_price,
            deal_type=st.session_state.deal_type,
            item_name=st.session_state.item_name,
        )

        if calculate_clicked:
            validation = validate_input(pricing_input, mode)
            for error in validation.errors:
                st.error(error)
            if validation.valid:
                result = compute(pricing_input, mode)
                entry = history.add(pricing_input, result)
                st.session_state.result = result
                st.session_state.result_input = pricing_input
                st.session_state.history_id = entry.id
                st.session_state.advice = None
            for warning in validation.warnings:
                st.warning(warning)

    with col2:
        st.subheader("Result")
        result = st.session_state.result

        with st.container(border=True):
            if result is None:
                st.info("Enter the deal details and press **Calculate**.")
            else:
                result_currency = st.session_state.result_input.currency
                fmt = lambda amount: format_currency(amount, result_currency)

                if result.calculation_mode == CalculatorMode.PRICE:
                    st.metric("Final Price (per unit)", fmt(result.final_price))
                elif result.calculation_mode == CalculatorMode.DISCOUNT:
                    st.metric("Discount Rate", f"{result.effective_discount_rate:.1f}%")
                else:
                    st.metric("Original Price (per unit)",
                              fmt(result.final_price + result.total_saving / st.session_state.result_input.quantity))

                m1, m2 = st.columns(2)
                m1.metric("Total Cost", fmt(result.total_cost))
                m2.metric("Unit Cost", fmt(result.price_per_unit))

                if result.total_saving > 0:
                    st.markdown(
                        f":green[**You Save: {fmt(result.total_saving)} "
                        f"({result.effective_discount_rate:.1f}%)**]"
                    )
                st.caption(f"Tax: {fmt(result.tax_amount)}")

                for warning in result.warnings:
                    st.warning(warning)

                with st.expander("🔍 Calculation Details"):
                    st.code(result.get_trace_text(), language=None)

                st.divider()

                if st.session_state.advice:
                    st.info(st.session_state.advice)
                elif st.button("✨ Analyze Deal Value", use_container_width=True):
                    with st.spinner("Analyzing deal..."):
                        advice = request_advice_sync(st.session_state.result_input, result, settings)
                    st.session_state.advice = advice
                    try:
                        history.set_advice(st.session_state.history_id, advice)
                    except ValueError:
                        # History was cleared or the entry was evicted since calculating
                        logger.warning("History entry %s gone; advice not stored", st.session_state.history_id)
                    st.rerun()


# ============================================================================
# TAB 2: HISTORY
# ============================================================================
with tab_history:
    st.subheader("🕘 Recent Calculations")

    if len(history) == 0:
        st.info("No calculations yet.")
    else:
        df = history.to_dataframe()
        st.dataframe(
            df[['timestamp', 'calculation_mode', 'item_name', 'currency', 'original_price',
                'target_price', 'final_price', 'total_cost', 'total_saving',
                'effective_discount_rate', 'deal_type', 'ai_advice']],
            use_container_width=True,
            hide_index=True,
        )

        c1, c2 = st.columns(2)
        c1.download_button(
            "📥 CSV",
            data=history.to_csv(),
            file_name="discount_history.csv",
            mime="text/csv",
            use_container_width=True
        )
        if c2.button("🗑️ Clear", use_container_width=True):
            history.clear()
            st.rerun()
