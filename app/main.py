import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
import logging
from dataclasses import replace
from datetime import date
from uuid import uuid4

import pandas as pd
import plotly.express as px
import streamlit as st

from budgetsim import config
from budgetsim.alerts import default_bus, publish_projection_alerts
from budgetsim.async_reports import year_tables
from budgetsim.breakdown import top_categories
from budgetsim.charts import balance_figure, year_figure
from budgetsim.domain import (
    CASHFLOW,
    CYCLES,
    EXPENSE,
    FORECAST,
    INCOME,
    MONTHLY,
    ONE_TIME,
    Item,
    Settings,
)
from budgetsim.frames import items_frame, projection_frame, year_frame
from budgetsim.functional import safe_item, validate_item
from budgetsim.periods import resolve_period
from budgetsim.projection import balance_on, project_period
from budgetsim.services import DEFAULT_CALCULATORS, BudgetService, year_table
from budgetsim.settings import clamp_month_start_day
from budgetsim.storage import export_items_json, import_items_json, load_state, save_state
from budgetsim.transforms import add_item, merge_items, remove_item, update_item

logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("budgetsim.app")

st.set_page_config(page_title="Budget Simulator", layout="wide")

if "budget_items" not in st.session_state:
    st.session_state.budget_items, st.session_state.settings = load_state()


def persist():
    save_state(st.session_state.budget_items, st.session_state.settings)


money = config.format_money

st.sidebar.markdown("### ⚙️ Settings")
settings: Settings = st.session_state.settings
month_start_day = clamp_month_start_day(st.sidebar.number_input(
    "Month starts on day",
    min_value=1,
    max_value=28,
    value=settings.month_start_day,
    step=1,
    help="Payday-style months, e.g. 25 means the 25th to the 24th",
))
yearly_mode = st.sidebar.radio(
    "Yearly items",
    [FORECAST, CASHFLOW],
    index=0 if settings.yearly_mode == FORECAST else 1,
    format_func=lambda m: "Forecast (1/12 per month)" if m == FORECAST else "Cashflow (full amount when due)",
)
new_settings = Settings(month_start_day=month_start_day, yearly_mode=yearly_mode)
if new_settings != settings:
    st.session_state.settings = settings = new_settings
    persist()

reference = st.sidebar.date_input("Reference date", value=date.today())

st.sidebar.markdown("### 💰 Balance")
anchor = st.sidebar.radio("Known balance", ["Today", "Period start"])
known_balance = st.sidebar.number_input("Balance", value=0.0, step=1000.0, format="%.0f")
alert_threshold = st.sidebar.number_input("Warn below", min_value=0.0, value=0.0, step=1000.0, format="%.0f")

menu = st.sidebar.radio("Menu", ["🏠 This period", "🧾 Items", "📅 Year", "📂 Import / Export"])

items = st.session_state.budget_items
period = resolve_period(reference, settings.month_start_day)

if menu == "🏠 This period":
    st.title("🏠 This period")
    st.caption(f"{period.start:%Y-%m-%d} to {period.end_exclusive:%Y-%m-%d} (exclusive)")

    report = BudgetService().period_report(items, settings, reference)
    result = report["result"]
    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Expenses", money(result["expense_total"]))
    with k2:
        st.metric("Income", money(result["income_total"]))
    with k3:
        st.metric("Net", money(result["net"]))

    for check in report["validation"]:
        for msg in check["messages"]:
            st.warning(msg)

    if anchor == "Today":
        projection = project_period(items, settings, reference, today_balance=known_balance, today=date.today())
    else:
        projection = project_period(items, settings, reference, start_balance=known_balance)

    b1, b2, b3 = st.columns(3)
    with b1:
        st.metric("Period start balance", money(projection.start_balance))
    with b2:
        st.metric("Lowest balance", money(projection.min_balance))
    with b3:
        st.metric("Period end balance", money(projection.end_balance))

    for alert in publish_projection_alerts(default_bus(), projection, alert_threshold):
        st.error(f"⚠️ {alert['alert']}")

    if projection.rows:
        st.plotly_chart(balance_figure(projection, period.start), use_container_width=True)
        disp = projection_frame(projection)
        disp["date"] = disp["date"].dt.strftime("%Y-%m-%d")
        disp["signed_amount"] = disp["signed_amount"].map(money)
        disp["balance"] = disp["balance"].map(money)
        st.subheader("📜 Cash events")
        st.table(disp.drop(columns=["shortfall"]).reset_index(drop=True))
        if period.start <= date.today() < period.end_exclusive:
            st.caption(f"Projected balance today: {money(balance_on(projection, date.today()))}")
    else:
        st.info("No cash events in this period.")

    top = list(top_categories(items, settings, reference, 5))
    if top:
        df_cat = pd.DataFrame(top, columns=["Category", "Total"])
        fig_cat = px.pie(df_cat, values="Total", names="Category", title="Top expense categories")
        fig_cat.update_layout(height=300)
        st.plotly_chart(fig_cat, use_container_width=True)

elif menu == "🧾 Items":
    st.title("🧾 Items")

    st.subheader("➕ Add item")
    with st.form("item_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            name = st.text_input("Name")
            kind = st.selectbox("Kind", [EXPENSE, INCOME])
            amount = st.number_input("Amount", min_value=0.0, step=100.0, format="%.0f")
            category = st.text_input("Category")
        with col2:
            cycle = st.selectbox("Cycle", list(CYCLES), index=list(CYCLES).index(MONTHLY))
            pay_date = st.date_input("Pay date (one-time)", value=date.today())
            pay_day = st.number_input("Pay day (monthly / yearly)", min_value=1, max_value=31, value=1)
            start_date = st.date_input("Active from (optional)", value=None)
            end_date = st.date_input("Active until (optional)", value=None)
        submitted = st.form_submit_button("Add Item")

        if submitted:
            new_item = Item(
                id=uuid4().hex,
                name=name,
                amount=float(amount),
                cycle=cycle,
                kind=kind,
                category=category,
                pay_date=pay_date if cycle == ONE_TIME else None,
                pay_day=None if cycle == ONE_TIME else int(pay_day),
                start_date=start_date,
                end_date=end_date,
            )
            checked = validate_item(new_item)
            if checked.is_left():
                st.error(checked.get_error()["message"])
            else:
                st.session_state.budget_items = add_item(st.session_state.budget_items, checked.get_or_else(new_item))
                persist()
                logger.info("Added item %s", new_item.id)
                st.success(f"Added {name or 'item'}")

    items = st.session_state.budget_items
    df = items_frame(items)
    if df.empty:
        st.info("No items yet.")
    else:
        st.dataframe(df.drop(columns=["signed"]), use_container_width=True, hide_index=True)

        st.subheader("✏️ Edit / delete")
        labels = {i.id: f"{i.name} ({i.kind}, {i.cycle})" for i in items}
        selected_id = st.selectbox("Item", list(labels), format_func=labels.get)
        selected = safe_item(items, selected_id)
        if selected.is_some():
            current = selected.get_or_else(None)
            new_amount = st.number_input("New amount", min_value=0.0, value=float(current.amount or 0), step=100.0)
            c1, c2 = st.columns(2)
            with c1:
                if st.button("💾 Save amount"):
                    updated = replace(current, amount=new_amount)
                    st.session_state.budget_items = update_item(st.session_state.budget_items, updated)
                    persist()
                    st.rerun()
            with c2:
                if st.button("🗑 Delete"):
                    st.session_state.budget_items = remove_item(st.session_state.budget_items, selected_id)
                    persist()
                    logger.info("Removed item %s", selected_id)
                    st.rerun()

elif menu == "📅 Year":
    st.title("📅 Year")
    report = BudgetService(calculators=DEFAULT_CALCULATORS + (year_table,)).period_report(items, settings, reference)
    year = st.number_input("Year", min_value=1970, max_value=2100, value=report["result"]["year"], step=1)

    ydf = year_frame(items, int(year), settings.yearly_mode)
    st.plotly_chart(year_figure(ydf, f"{int(year)} by month"), use_container_width=True)
    disp = ydf.copy()
    for col in ("expense", "income", "net", "cumulative"):
        disp[col] = disp[col].map(money)
    st.table(disp)

    st.subheader("📈 Compare years")
    years = [int(year) + offset for offset in range(-1, 2)]
    tables = asyncio.run(year_tables(items, years, settings.yearly_mode))
    compare = pd.DataFrame({str(y): tables[y] for y in years}, index=ydf["month"])
    st.line_chart(compare.cumsum())

elif menu == "📂 Import / Export":
    st.title("📂 Import / Export")

    st.download_button("⬇ Download items (JSON)", export_items_json(items), file_name="items.json")

    uploaded = st.file_uploader("Import items (JSON)", type=["json"])
    if uploaded is not None and st.button("Import"):
        parsed = import_items_json(uploaded.getvalue())
        if parsed.is_left():
            st.error(parsed.get_error()["message"])
        else:
            incoming = parsed.get_or_else(())
            st.session_state.budget_items = merge_items(st.session_state.budget_items, incoming)
            persist()
            logger.info("Imported %d items", len(incoming))
            st.success(f"Imported {len(incoming)} items")
