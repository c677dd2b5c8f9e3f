"""
Streamlit Frontend for Trackwise

Personal and household finance tracking: expenses by category, budget
goals, household members and their contributions, and a shared
shopping list.

DESIGN PRINCIPLES:
1. Simple, clear interface
2. Forms are validated before anything is saved
3. Clear error messages in simple language
4. AI suggestions are offered, never applied silently

This module is the composition root. It builds AppState once per
server process and a SessionProvider once per browser session, and
passes them to each page. Nothing else holds global state.
"""

import asyncio
import html
import re
from datetime import date, datetime
from decimal import Decimal

import streamlit as st

from trackwise.agents import SuggestionAgent, SuggestionError
from trackwise.audit import ChangeLogger, configure_logging
from trackwise.auth import SessionProvider
from trackwise.config import get_settings, validate_all_settings
from trackwise.exports import (
    budget_goal_rows,
    contribution_rows,
    expense_rows,
    export_filename,
    export_to_csv,
    shopping_list_rows,
    to_csv_text,
)
from trackwise.models.constants import APP_NAME, UNKNOWN_CATEGORY_COLOR
from trackwise.models.entities import BudgetPeriod
from trackwise.reports import (
    budget_performance,
    dashboard_summary,
    monthly_spending_trend,
    spending_by_category,
)
from trackwise.state import AppState
from trackwise.validation import FormValidator


# Page configuration
st.set_page_config(
    page_title=APP_NAME,
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components():
    """Get or create application components (cached per server process)."""
    settings = get_settings()
    configure_logging("DEBUG" if settings.app.debug_mode else settings.app.log_level)
    change_logger = ChangeLogger()
    state = AppState.from_settings(settings.storage, change_logger=change_logger)
    return state, SuggestionAgent()


def get_session() -> SessionProvider:
    """One session provider per browser session."""
    if "session" not in st.session_state:
        st.session_state.session = SessionProvider()
    return st.session_state.session


def money(amount: Decimal) -> str:
    return f"{get_settings().app.currency_symbol}{amount:,.2f}"


def show_issues(validator: FormValidator, result) -> None:
    """Show errors (blocking) and warnings (informational) for a form."""
    summary = validator.get_user_friendly_summary(result)
    if result.has_errors:
        st.error(summary)
    elif result.warnings:
        st.warning(summary)


def take_pending(key: str) -> None:
    """Move a suggestion into its widget before the widget is drawn."""
    pending = f"pending_{key}"
    if pending in st.session_state:
        st.session_state[key] = st.session_state.pop(pending)


def start_editing(kind: str, record_id: str) -> None:
    st.session_state[f"editing_{kind}"] = record_id


def stop_editing(kind: str) -> None:
    st.session_state.pop(f"editing_{kind}", None)


def editing(kind: str):
    """Id of the record being edited on this page, if any."""
    return st.session_state.get(f"editing_{kind}")


def keep_time(picked: date, original: datetime):
    """Date pickers drop the time; keep it when the day is unchanged."""
    return original if picked == original.date() else picked


def main():
    """Main application entry point."""
    state, agent = get_components()
    session = get_session()

    if not session.is_authenticated:
        render_sign_in_page(session)
        return

    st.sidebar.title(f"💰 {APP_NAME}")
    st.sidebar.caption(f"Signed in as {session.current_user.label}")
    if st.sidebar.button("Sign out"):
        session.sign_out()
        st.rerun()
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        [
            "📊 Dashboard",
            "🧾 Expenses",
            "🎯 Budgets",
            "🏠 Household",
            "🛒 Shopping List",
            "📈 Reports",
            "⚙️ Settings",
        ],
        index=0,
    )

    if not state.store_available:
        st.sidebar.warning("Storage is unavailable. Changes last for this session only.")

    validator = FormValidator(state)

    if page == "📊 Dashboard":
        render_dashboard_page(state)
    elif page == "🧾 Expenses":
        render_expenses_page(state, validator, agent)
    elif page == "🎯 Budgets":
        render_budgets_page(state, validator)
    elif page == "🏠 Household":
        render_household_page(state, validator)
    elif page == "🛒 Shopping List":
        render_shopping_list_page(state, validator)
    elif page == "📈 Reports":
        render_reports_page(state)
    elif page == "⚙️ Settings":
        render_settings_page(state, validator)


def render_sign_in_page(session: SessionProvider):
    st.title(f"💰 Welcome to {APP_NAME}")
    st.markdown("Sign in to start tracking your spending.")

    with st.form("sign_in"):
        email = st.text_input("Email")
        display_name = st.text_input("Name (optional)")
        if st.form_submit_button("Sign in", type="primary"):
            try:
                session.sign_in(email, display_name or None)
            except ValueError:
                st.error("Please enter a valid email address.")
            else:
                st.rerun()


def render_dashboard_page(state: AppState):
    st.title("📊 Dashboard")

    summary = dashboard_summary(state)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Total Expenses", money(summary.total_expenses))
    col2.metric("Total Budget", money(summary.total_budget))
    col3.metric("Remaining Budget", money(summary.remaining_budget))
    col4.metric("Average Expense", money(summary.average_expense))

    st.markdown("---")
    st.subheader("Budget Progress")
    goals = state.budget_goals
    if not goals:
        st.info("No budget goals yet. Add some on the Budgets page.")
    for goal in goals:
        label = f"{state.category_label(goal.category_id)} ({goal.period.value})"
        st.markdown(
            f"**{label}**: {money(goal.current_spending)} of {money(goal.amount)}"
            + (" ⚠️ over budget" if goal.is_over_budget else "")
        )
        st.progress(min(goal.percent_used, 100.0) / 100)

    st.markdown("---")
    st.subheader("Spending by Category")
    rows = spending_by_category(state)
    if rows:
        st.bar_chart({row.name: float(row.amount) for row in rows})
    else:
        st.info("No expenses recorded yet.")


def render_expenses_page(state: AppState, validator: FormValidator, agent: SuggestionAgent):
    st.title("🧾 Expenses")

    categories = state.categories
    category_ids = [c.id for c in categories]

    with st.expander("➕ Add Expense", expanded=not state.expenses):
        take_pending("expense_category")
        take_pending("expense_notes")

        description = st.text_input("Description *", key="expense_description")
        col1, col2 = st.columns(2)
        with col1:
            amount = st.number_input("Amount *", min_value=0.0, step=0.01, format="%.2f")
            expense_date = st.date_input("Date *", value=date.today())
        with col2:
            category_id = st.selectbox(
                "Category *",
                options=category_ids,
                format_func=state.category_label,
                key="expense_category",
            )
            if st.button("✨ Suggest category"):
                try:
                    suggestion = run_async(agent.suggest_category(
                        description, [c.name for c in categories]
                    ))
                except SuggestionError as e:
                    st.warning(f"No suggestion available: {e}")
                else:
                    by_name = {c.name: c.id for c in categories}
                    st.session_state.pending_expense_category = by_name[suggestion.suggestion]
                    st.session_state.suggestion_reason = suggestion.reasoning
                    st.rerun()

        notes = st.text_area("Notes (optional)", key="expense_notes")
        if st.button("✨ Suggest notes"):
            try:
                suggestion = run_async(agent.suggest_notes(description, notes))
            except SuggestionError as e:
                st.warning(f"No suggestion available: {e}")
            else:
                st.session_state.pending_expense_notes = suggestion.suggestion
                st.session_state.suggestion_reason = suggestion.reasoning
                st.rerun()

        if st.session_state.get("suggestion_reason"):
            st.caption(f"💡 {st.session_state.suggestion_reason}")

        if st.button("💾 Save Expense", type="primary"):
            result = validator.validate_expense({
                "description": description,
                "amount": Decimal(str(amount)),
                "date": expense_date,
                "category_id": category_id,
                "notes": notes,
            })
            show_issues(validator, result)
            if result.is_valid:
                state.add_expense(result.draft)
                st.session_state.suggestion_reason = None
                st.success("Expense saved.")

    st.markdown("---")
    expenses = sorted(state.expenses, key=lambda e: e.date, reverse=True)
    if not expenses:
        st.info("No expenses yet.")
        return

    st.download_button(
        "⬇️ Export Expenses",
        data=to_csv_text(expense_rows(state)),
        file_name=export_filename("personal_expenses"),
        mime="text/csv",
    )

    editing_expense = state.get_expense_by_id(editing("expense") or "")
    if editing_expense:
        render_expense_edit_form(state, validator, editing_expense)

    for expense in expenses:
        col1, col2, col3, col4, col5 = st.columns([4, 2, 2, 1, 1])
        col1.markdown(f"**{expense.description}**" + (f"  \n{expense.notes}" if expense.notes else ""))
        col2.markdown(state.category_label(expense.category_id))
        col3.markdown(f"{money(expense.amount)}  \n{expense.date:%d %b %Y}")
        if col4.button("✏️", key=f"edit_expense_{expense.id}"):
            start_editing("expense", expense.id)
            st.rerun()
        if col5.button("🗑️", key=f"del_expense_{expense.id}"):
            state.delete_expense(expense.id)
            st.rerun()


def category_options(state: AppState, current: str) -> list[str]:
    """All category ids, plus the current one if it no longer exists."""
    ids = [c.id for c in state.categories]
    if current not in ids:
        ids.append(current)
    return ids


def render_expense_edit_form(state: AppState, validator: FormValidator, expense):
    with st.form(f"edit_expense_{expense.id}"):
        st.markdown("#### ✏️ Edit Expense")
        description = st.text_input("Description *", value=expense.description)
        col1, col2 = st.columns(2)
        amount = col1.number_input(
            "Amount *", min_value=0.0, step=0.01, format="%.2f", value=float(expense.amount)
        )
        expense_date = col1.date_input("Date *", value=expense.date.date())
        options = category_options(state, expense.category_id)
        category_id = col2.selectbox(
            "Category *",
            options=options,
            index=options.index(expense.category_id),
            format_func=state.category_label,
        )
        notes = st.text_area("Notes (optional)", value=expense.notes or "")
        save_col, cancel_col = st.columns(2)
        save = save_col.form_submit_button("💾 Save Changes", type="primary")
        cancel = cancel_col.form_submit_button("Cancel")

    if cancel:
        stop_editing("expense")
        st.rerun()
    if save:
        result = validator.validate_expense({
            "description": description,
            "amount": Decimal(str(amount)),
            "date": keep_time(expense_date, expense.date),
            "category_id": category_id,
            "notes": notes,
        })
        show_issues(validator, result)
        if result.is_valid:
            state.edit_expense(expense.id, result.draft)
            stop_editing("expense")
            st.rerun()


def render_budgets_page(state: AppState, validator: FormValidator):
    st.title("🎯 Budget Goals")

    with st.expander("➕ Add Budget Goal", expanded=not state.budget_goals):
        with st.form("budget_goal"):
            category_id = st.selectbox(
                "Category *",
                options=[c.id for c in state.categories],
                format_func=state.category_label,
            )
            amount = st.number_input("Amount *", min_value=0.0, step=1.0, format="%.2f")
            period = st.selectbox(
                "Period *",
                options=list(BudgetPeriod),
                index=1,
                format_func=lambda p: p.value.title(),
            )
            if st.form_submit_button("💾 Save Goal", type="primary"):
                result = validator.validate_budget_goal({
                    "category_id": category_id,
                    "amount": Decimal(str(amount)),
                    "period": period,
                })
                show_issues(validator, result)
                if result.is_valid:
                    state.add_budget_goal(result.draft)
                    st.success("Budget goal saved.")

    goals = state.budget_goals
    if not goals:
        st.info("No budget goals yet.")
        return

    st.download_button(
        "⬇️ Export Budget Goals",
        data=to_csv_text(budget_goal_rows(state)),
        file_name=export_filename("budget_goals"),
        mime="text/csv",
    )

    editing_goal = state.get_budget_goal_by_id(editing("budget_goal") or "")
    if editing_goal:
        render_budget_goal_edit_form(state, validator, editing_goal)

    for goal in goals:
        col1, col2, col3, col4 = st.columns([4, 3, 1, 1])
        col1.markdown(f"**{state.category_label(goal.category_id)}** ({goal.period.value})")
        col1.progress(min(goal.percent_used, 100.0) / 100)
        col2.markdown(
            f"{money(goal.current_spending)} of {money(goal.amount)}  \n"
            f"Remaining: {money(goal.remaining)}"
        )
        if col3.button("✏️", key=f"edit_goal_{goal.id}"):
            start_editing("budget_goal", goal.id)
            st.rerun()
        if col4.button("🗑️", key=f"del_goal_{goal.id}"):
            state.delete_budget_goal(goal.id)
            st.rerun()


def render_budget_goal_edit_form(state: AppState, validator: FormValidator, goal):
    with st.form(f"edit_goal_{goal.id}"):
        st.markdown("#### ✏️ Edit Budget Goal")
        options = category_options(state, goal.category_id)
        category_id = st.selectbox(
            "Category *",
            options=options,
            index=options.index(goal.category_id),
            format_func=state.category_label,
        )
        amount = st.number_input(
            "Amount *", min_value=0.0, step=1.0, format="%.2f", value=float(goal.amount)
        )
        periods = list(BudgetPeriod)
        period = st.selectbox(
            "Period *",
            options=periods,
            index=periods.index(goal.period),
            format_func=lambda p: p.value.title(),
        )
        save_col, cancel_col = st.columns(2)
        save = save_col.form_submit_button("💾 Save Changes", type="primary")
        cancel = cancel_col.form_submit_button("Cancel")

    if cancel:
        stop_editing("budget_goal")
        st.rerun()
    if save:
        result = validator.validate_budget_goal({
            "category_id": category_id,
            "amount": Decimal(str(amount)),
            "period": period,
        })
        show_issues(validator, result)
        if result.is_valid:
            state.edit_budget_goal(goal.id, result.draft)
            stop_editing("budget_goal")
            st.rerun()


def render_household_page(state: AppState, validator: FormValidator):
    st.title("🏠 Household")

    col1, col2 = st.columns(2)

    with col1:
        st.subheader("Members")
        with st.form("member", clear_on_submit=True):
            name = st.text_input("Name *")
            if st.form_submit_button("➕ Add Member"):
                result = validator.validate_member({"name": name})
                show_issues(validator, result)
                if result.is_valid:
                    state.add_member(result.draft)
                    st.rerun()

        for member in state.members:
            total = state.get_member_total_contribution(member.id)
            mcol1, mcol2 = st.columns([4, 1])
            mcol1.markdown(f"**{member.name}**: {money(total)} contributed")
            if mcol2.button("🗑️", key=f"del_member_{member.id}"):
                # Contributions stay and show as "Unknown Member"
                state.delete_member(member.id)
                st.rerun()

    with col2:
        st.subheader("Contributions")
        members = state.members
        if not members:
            st.info("Add a member before recording contributions.")
        else:
            with st.form("contribution", clear_on_submit=True):
                member_id = st.selectbox(
                    "Member *",
                    options=[m.id for m in members],
                    format_func=state.member_label,
                )
                amount = st.number_input("Amount *", min_value=0.0, step=0.01, format="%.2f")
                contribution_date = st.date_input("Date *", value=date.today())
                notes = st.text_input("Notes (optional)")
                if st.form_submit_button("➕ Add Contribution"):
                    result = validator.validate_contribution({
                        "member_id": member_id,
                        "amount": Decimal(str(amount)),
                        "date": contribution_date,
                        "notes": notes,
                    })
                    show_issues(validator, result)
                    if result.is_valid:
                        state.add_contribution(result.draft)
                        st.rerun()

        contributions = sorted(state.contributions, key=lambda c: c.date, reverse=True)
        if contributions:
            st.download_button(
                "⬇️ Export Contributions",
                data=to_csv_text(contribution_rows(state)),
                file_name=export_filename("household_contributions"),
                mime="text/csv",
            )
        for contribution in contributions:
            ccol1, ccol2 = st.columns([4, 1])
            ccol1.markdown(
                f"{state.member_label(contribution.member_id)}: "
                f"{money(contribution.amount)} on {contribution.date:%d %b %Y}"
            )
            if ccol2.button("🗑️", key=f"del_contribution_{contribution.id}"):
                state.delete_contribution(contribution.id)
                st.rerun()


def render_shopping_list_page(state: AppState, validator: FormValidator):
    st.title("🛒 Shopping List")

    with st.form("shopping_item", clear_on_submit=True):
        col1, col2 = st.columns([3, 1])
        item_name = col1.text_input("Item *")
        quantity = col2.text_input("Quantity", value="1")
        notes = st.text_input("Notes (optional)")
        if st.form_submit_button("➕ Add Item"):
            result = validator.validate_shopping_list_item({
                "item_name": item_name,
                "quantity": quantity,
                "notes": notes,
            })
            show_issues(validator, result)
            if result.is_valid:
                state.add_shopping_list_item(result.draft)
                st.rerun()

    items = state.shopping_list_items
    if not items:
        st.info("The shopping list is empty.")
        return

    st.download_button(
        "⬇️ Export Shopping List",
        data=to_csv_text(shopping_list_rows(state)),
        file_name=export_filename("shopping_list"),
        mime="text/csv",
    )

    # Unpurchased first, newest first within each group
    items = sorted(items, key=lambda i: i.added_at, reverse=True)
    items = sorted(items, key=lambda i: i.is_purchased)

    editing_id = editing("shopping_item")
    editing_item = next((i for i in items if i.id == editing_id), None)
    if editing_item:
        render_shopping_item_edit_form(state, validator, editing_item)

    for item in items:
        col1, col2, col3, col4 = st.columns([1, 5, 1, 1])
        checked = col1.checkbox(
            "Purchased",
            value=item.is_purchased,
            key=f"purchased_{item.id}",
            label_visibility="collapsed",
        )
        if checked != item.is_purchased:
            state.toggle_shopping_list_item_purchased(item.id)
            st.rerun()
        text = f"{item.item_name} × {item.quantity}"
        col2.markdown(f"~~{text}~~" if item.is_purchased else f"**{text}**")
        if item.notes:
            col2.caption(item.notes)
        if col3.button("✏️", key=f"edit_item_{item.id}"):
            start_editing("shopping_item", item.id)
            st.rerun()
        if col4.button("🗑️", key=f"del_item_{item.id}"):
            state.delete_shopping_list_item(item.id)
            st.rerun()


def render_shopping_item_edit_form(state: AppState, validator: FormValidator, item):
    with st.form(f"edit_item_{item.id}"):
        st.markdown("#### ✏️ Edit Item")
        col1, col2 = st.columns([3, 1])
        item_name = col1.text_input("Item *", value=item.item_name)
        quantity = col2.text_input("Quantity", value=item.quantity)
        notes = st.text_input("Notes (optional)", value=item.notes or "")
        save_col, cancel_col = st.columns(2)
        save = save_col.form_submit_button("💾 Save Changes", type="primary")
        cancel = cancel_col.form_submit_button("Cancel")

    if cancel:
        stop_editing("shopping_item")
        st.rerun()
    if save:
        result = validator.validate_shopping_list_item({
            "item_name": item_name,
            "quantity": quantity,
            "notes": notes,
        })
        show_issues(validator, result)
        if result.is_valid:
            draft = result.draft
            state.edit_shopping_list_item(item.id, draft.item_name, draft.quantity, draft.notes)
            stop_editing("shopping_item")
            st.rerun()


def render_reports_page(state: AppState):
    st.title("📈 Reports")

    st.subheader("Monthly Spending Trend")
    months = st.selectbox("Period", options=[6, 12], format_func=lambda m: f"Last {m} months")
    trend = monthly_spending_trend(state.expenses, months=months)
    st.line_chart({point.label: float(point.total) for point in trend})

    st.markdown("---")
    st.subheader(f"Monthly Budget Performance ({date.today():%B %Y})")
    performance = budget_performance(state)
    if not performance:
        st.info("No monthly budget goals set yet. Add some on the Budgets page.")
    else:
        st.dataframe(
            [
                {
                    "Category": row.category_name,
                    "Budgeted": money(row.budgeted),
                    "Spent": money(row.spent),
                    "Difference": money(row.difference),
                    "Status": row.status,
                }
                for row in performance
            ],
            use_container_width=True,
        )


def render_settings_page(state: AppState, validator: FormValidator):
    st.title("⚙️ Settings")

    st.markdown("### Categories")
    with st.form("category", clear_on_submit=True):
        col1, col2, col3 = st.columns(3)
        name = col1.text_input("Name *")
        icon = col2.text_input("Icon *", value="Archive")
        color = col3.color_picker("Color *", value="#6C757D")
        if st.form_submit_button("➕ Add Category"):
            result = validator.validate_category({"name": name, "icon": icon, "color": color})
            show_issues(validator, result)
            if result.is_valid:
                state.add_category(result.draft)
                st.rerun()

    editing_category = state.get_category_by_id(editing("category") or "")
    if editing_category:
        render_category_edit_form(state, validator, editing_category)

    for category in state.categories:
        col1, col2, col3 = st.columns([5, 1, 1])
        col1.markdown(category_badge(category), unsafe_allow_html=True)
        if col2.button("✏️", key=f"edit_category_{category.id}"):
            start_editing("category", category.id)
            st.rerun()
        if col3.button("🗑️", key=f"del_category_{category.id}"):
            state.delete_category(category.id)
            st.rerun()

    st.markdown("---")
    st.markdown("### Connection Status")

    status = validate_all_settings()
    services = [
        ("Local Storage", "storage"),
        ("Gemini (AI Suggestions)", "gemini"),
        ("App Settings", "app"),
    ]
    for name, key in services:
        if status.get(key, False):
            st.success(f"✅ {name} - Configured")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")
    st.caption(f"Environment: {get_settings().app.app_environment}")

    st.markdown("---")
    st.markdown("### Backup")
    if st.button("💾 Save all collections as CSV"):
        directory = get_settings().storage.data_dir / "exports"
        try:
            paths = [
                export_to_csv(export_filename("personal_expenses"), expense_rows(state), directory),
                export_to_csv(export_filename("budget_goals"), budget_goal_rows(state), directory),
                export_to_csv(export_filename("household_contributions"), contribution_rows(state), directory),
                export_to_csv(export_filename("shopping_list"), shopping_list_rows(state), directory),
            ]
        except OSError as e:
            st.error(f"Could not write exports: {e}")
        else:
            st.success("Saved:\n\n" + "\n\n".join(f"`{p}`" for p in paths))

    st.markdown("---")
    st.markdown("### Recent Changes")
    for event in state.recent_changes(10):
        st.caption(f"{event.timestamp:%H:%M:%S} · {event.description}")

    st.markdown("---")
    st.markdown("### Configuration")
    st.markdown(
        "To configure the application, create a `.env` file. "
        "See `.env.example` for the available variables."
    )


def category_badge(category) -> str:
    """Coloured dot and name, safe for unsafe_allow_html."""
    return (
        f"<span style='color:{html.escape(category.color)}'>●</span> "
        f"{html.escape(category.name)}"
    )


def picker_color(color: str) -> str:
    """color_picker only takes #RRGGBB."""
    if re.fullmatch(r"#[0-9a-fA-F]{3}", color):
        return "#" + "".join(c * 2 for c in color[1:])
    if re.fullmatch(r"#[0-9a-fA-F]{6}", color):
        return color
    return UNKNOWN_CATEGORY_COLOR


def render_category_edit_form(state: AppState, validator: FormValidator, category):
    with st.form(f"edit_category_{category.id}"):
        st.markdown("#### ✏️ Edit Category")
        col1, col2, col3 = st.columns(3)
        name = col1.text_input("Name *", value=category.name)
        icon = col2.text_input("Icon *", value=category.icon)
        color = col3.color_picker("Color *", value=picker_color(category.color))
        save_col, cancel_col = st.columns(2)
        save = save_col.form_submit_button("💾 Save Changes", type="primary")
        cancel = cancel_col.form_submit_button("Cancel")

    if cancel:
        stop_editing("category")
        st.rerun()
    if save:
        result = validator.validate_category({"name": name, "icon": icon, "color": color})
        show_issues(validator, result)
        if result.is_valid:
            state.edit_category(category.id, result.draft)
            stop_editing("category")
            st.rerun()


if __name__ == "__main__":
    main()
