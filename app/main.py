import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st
import pandas as pd
import plotly.express as px

from dhanchakra.config import configure_logging, get_settings
from dhanchakra.domain import CATEGORIES, CATEGORY_COLORS, WARNING, SUCCESS, INFO, category_color
from dhanchakra.storage import ExpenseRepository, JsonFileStorage
from dhanchakra.store import ExpenseStore
from dhanchakra.services import DashboardService, InsightService
from dhanchakra.transforms import expenses_to_df, format_money

settings = get_settings()
configure_logging(settings.log_level)

st.set_page_config(page_title="Dhanchakra", layout="wide", page_icon="💰")

if "store" not in st.session_state:
    repository = ExpenseRepository(
        JsonFileStorage(settings.data_file),
        default_balance=settings.default_balance,
        default_goal=settings.default_goal,
    )
    st.session_state.store = ExpenseStore.load(repository)
if "goal_editing" not in st.session_state:
    st.session_state.goal_editing = False

store: ExpenseStore = st.session_state.store
cur = settings.currency


def money(value: float) -> str:
    return format_money(value, cur)


def flash(level: str, message: str) -> None:
    st.session_state.flash = (level, message)


pending = st.session_state.pop("flash", None)
if pending:
    level, message = pending
    st.toast(f"{'✅' if level == 'success' else '❌'} {message}")

# Sidebar: account balance
st.sidebar.markdown("### 🏦 Account")
st.sidebar.caption(f"Opening balance: **{money(store.balance)}**")
with st.sidebar.form("balance_form", clear_on_submit=True):
    new_balance = st.text_input("Set account balance", placeholder=f"{store.balance:.2f}")
    if st.form_submit_button("Update Balance"):
        result = store.submit_balance(new_balance)
        if result.is_right():
            flash("success", "Account balance updated!")
        else:
            flash("error", result.get_error()["message"])
        st.rerun()
st.sidebar.caption(f"Data file: `{settings.data_file}`")

dashboard = DashboardService(InsightService(currency=cur)).summary(store.expenses, store.balance, store.goal)

st.title("💰 Dhanchakra")
st.caption(
    "Track your expenses, visualize spending patterns, and get intelligent insights "
    "to achieve your financial goals with confidence."
)

k1, k2, k3, k4, k5 = st.columns(5)
with k1:
    st.metric("Total Spent", money(dashboard["total_spent"]), help="All time")
with k2:
    st.metric("This Month", money(dashboard["monthly_total"]), help=dashboard["month_label"])
with k3:
    st.metric("Transactions", dashboard["count"], help="Total recorded")
with k4:
    st.metric("Avg per Transaction", money(dashboard["average"]))
with k5:
    balance_left = dashboard["balance_left"]
    st.metric(
        "Balance Left",
        money(balance_left),
        delta="Remaining in account" if balance_left >= 0 else "Overdrawn",
        delta_color="normal" if balance_left >= 0 else "inverse",
    )

st.divider()

col_left, col_mid, col_right = st.columns(3)

with col_left:
    st.subheader("➕ Add New Expense")
    with st.form("expense_form", clear_on_submit=True):
        c1, c2 = st.columns(2)
        with c1:
            amount = st.text_input(f"Amount ({cur})", placeholder="0.00")
        with c2:
            category = st.selectbox("Category", CATEGORIES, index=None, placeholder="Select category")
        description = st.text_input("Description", placeholder="What did you spend on?")
        submitted = st.form_submit_button("Add Expense", use_container_width=True)

        if submitted:
            result = store.submit_expense(amount, description, category)
            if result.is_right():
                flash("success", "Expense added successfully!")
            else:
                flash("error", result.get_error()["message"])
            st.rerun()

    st.subheader("🎯 Monthly Spending Goal")
    goal = dashboard["goal"]
    if st.session_state.goal_editing:
        with st.form("goal_form"):
            raw_goal = st.text_input(f"Monthly Goal ({cur})", value=f"{store.goal:.2f}")
            g1, g2 = st.columns(2)
            save = g1.form_submit_button("Save Goal")
            cancel = g2.form_submit_button("Cancel")
        if save:
            result = store.submit_goal(raw_goal)
            if result.is_right():
                st.session_state.goal_editing = False
                flash("success", "Spending goal updated!")
            else:
                flash("error", result.get_error()["message"])
            st.rerun()
        if cancel:
            st.session_state.goal_editing = False
            st.rerun()
    else:
        g1, g2, g3 = st.columns(3)
        g1.metric("Goal", money(goal.goal))
        g2.metric("Spent", money(goal.spent))
        g3.metric("Over Budget" if goal.is_over_budget else "Remaining", money(abs(goal.remaining)))
        st.caption(f"Progress: {goal.progress:.1f}%")
        st.progress(goal.progress / 100)
        if goal.is_over_budget:
            st.error(f"📈 **{goal.headline}** {goal.message(cur)}")
        else:
            st.success(f"💵 **{goal.headline}** {goal.message(cur)}")
        if st.button("✏️ Edit Goal", key="btn_edit_goal"):
            st.session_state.goal_editing = True
            st.rerun()

with col_mid:
    st.subheader("🧾 Recent Expenses")
    if store.expenses:
        with st.container(height=520):
            for e in store.expenses:
                color = category_color(e.category)
                st.markdown(
                    f"**{money(e.amount)}** &nbsp; "
                    f"<span style='background:{color}22;color:{color};border:1px solid {color}55;"
                    f"border-radius:6px;padding:1px 6px;font-size:0.8em'>🏷 {e.category}</span>  \n"
                    f"{e.description}  \n"
                    f"<small>📅 {pd.Timestamp(e.date).strftime('%m/%d/%Y')}</small>",
                    unsafe_allow_html=True,
                )
                st.markdown("---")
        csv = expenses_to_df(store.expenses).to_csv(index=False)
        st.download_button("⬇ Download CSV", csv, file_name="expenses.csv", mime="text/csv")
    else:
        st.info("No expenses yet. Add your first expense!")

with col_right:
    st.subheader("🧠 AI Financial Insights")
    st.caption(
        "Powered by spending analysis. What works well: pattern recognition, goal tracking. "
        "Limitations: based on limited data, general advice only."
    )
    show = {WARNING: st.warning, SUCCESS: st.success, INFO: st.info}
    for insight in dashboard["insights"]:
        render = show.get(insight.kind, st.info)
        render(f"**{insight.title}** `{insight.badge}`\n\n{insight.message}\n\n💡 _{insight.tip}_")
    with st.expander("Rules evaluated", expanded=False):
        st.table(pd.DataFrame(dashboard["insight_steps"]))
    st.caption(
        "These insights use simple rules on your spending data. They don't know your "
        "personal circumstances, income, or specific financial goals."
    )

st.divider()

if not store.expenses:
    st.subheader("📊 Expense Analytics")
    st.info("Add some expenses to see your spending analytics!")
else:
    chart_left, chart_right = st.columns(2)
    with chart_left:
        df_cat = pd.DataFrame([{"Category": t.category, "Amount": t.amount} for t in dashboard["category_totals"]])
        fig_cat = px.pie(
            df_cat,
            values="Amount",
            names="Category",
            title=f"Spending by Category (Total: {money(dashboard['total_spent'])})",
            color="Category",
            color_discrete_map=CATEGORY_COLORS,
        )
        fig_cat.update_traces(hovertemplate=f"%{{label}}: {cur}%{{value:.2f}}<extra></extra>")
        fig_cat.update_layout(height=360)
        st.plotly_chart(fig_cat, use_container_width=True)
    with chart_right:
        df_week = pd.DataFrame([{"Week": b.label, "Amount": b.amount} for b in dashboard["weekly"]])
        fig_week = px.bar(
            df_week,
            x="Week",
            y="Amount",
            title="Weekly Spending Trend",
            template="plotly_dark",
        )
        fig_week.update_traces(marker_color="#10b981", hovertemplate=f"%{{x}}: {cur}%{{y:.2f}}<extra></extra>")
        fig_week.update_layout(height=360, xaxis_tickangle=-45)
        st.plotly_chart(fig_week, use_container_width=True)
