"""
Streamlit Frontend for Finança Fácil

A single-user personal finance ledger: record income and expenses,
see the balance, where the money goes, and ask the assistant for tips.

DESIGN PRINCIPLES:
1. Simple, clear interface in Portuguese
2. Every number on screen is recomputed from the ledger on each run
3. Saving never blocks the user; storage problems only show a warning
4. The AI assistant is optional and clearly marked as such
"""

import asyncio
from datetime import date

import streamlit as st

from financa_facil import __version__
from financa_facil.config import validate_all_settings
from financa_facil.formatting import (
    format_currency,
    format_short_date,
    format_signed_amount,
)
from financa_facil.models import DEFAULT_CATEGORIES, TransactionType, find_category
from financa_facil.orchestrator import LedgerSession, create_app_components
from financa_facil.services.chart import render_expense_pie
from financa_facil.validation import TransactionFormValidator, TransactionValidationError


# Page configuration
st.set_page_config(
    page_title="Finança Fácil",
    page_icon="💰",
    layout="centered",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .balance-card {
        padding: 24px;
        background: linear-gradient(135deg, #10b981, #059669);
        border-radius: 16px;
        color: white;
        margin: 10px 0 20px 0;
    }
    .balance-card.negative {
        background: linear-gradient(135deg, #ef4444, #b91c1c);
    }
    .big-number {
        font-size: 2.2em;
        font-weight: bold;
    }
</style>
""", unsafe_allow_html=True)


PAGES = ["🏠 Início", "📜 Histórico", "⚙️ Ajustes"]

TYPE_LABELS = {
    TransactionType.EXPENSE: "Saída",
    TransactionType.INCOME: "Entrada",
}


def run_async(coro):
    """Helper to run async functions in Streamlit."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@st.cache_resource
def get_components() -> LedgerSession:
    """Get or create application components (cached)."""
    try:
        return create_app_components(use_storage=True)
    except Exception as e:
        st.error(f"Falha ao iniciar o armazenamento local: {e}")
        return create_app_components(use_storage=False)


def main():
    """Main application entry point."""
    session = get_components()

    if "entered" not in st.session_state:
        st.session_state.entered = not session.should_show_landing()

    if not st.session_state.entered:
        render_landing_page(session)
        return

    notice = st.session_state.pop("save_warning", None)
    if notice:
        st.warning(notice)

    st.sidebar.title("💰 Finança Fácil")
    st.sidebar.markdown("---")

    page = st.sidebar.radio("Navegar para:", PAGES, index=0, key="page")

    st.sidebar.markdown("---")
    render_add_transaction_form(session)

    if page == "🏠 Início":
        render_dashboard_page(session)
    elif page == "📜 Histórico":
        render_history_page(session)
    elif page == "⚙️ Ajustes":
        render_settings_page()


def render_landing_page(session: LedgerSession):
    """Welcome screen shown to new users."""
    # Entering the app again starts on the dashboard
    st.session_state.pop("page", None)
    st.session_state.pending_delete = None

    st.title("💰 Finança Fácil")
    st.markdown(
        """
        ### Suas finanças, sem complicação.

        - Registre entradas e saídas em segundos
        - Veja para onde vai o seu dinheiro
        - Receba dicas do assistente FinChat

        Seus dados ficam apenas neste computador.
        """
    )

    if st.button("Começar agora", type="primary", key="start"):
        session.enter_app()
        st.session_state.entered = True
        st.rerun()


def render_balance_card(balance):
    css_class = "balance-card" if balance >= 0 else "balance-card negative"
    st.markdown(
        f"""
        <div class="{css_class}">
            <div>Saldo total</div>
            <div class="big-number">{format_currency(balance)}</div>
        </div>
        """,
        unsafe_allow_html=True,
    )


def render_transaction_row(transaction, allow_delete: bool = False, session=None):
    category = find_category(transaction.category)
    icon_label = category.name if category else transaction.category

    cols = st.columns([1, 4, 2, 1] if allow_delete else [1, 4, 2])
    cols[0].markdown(f"**{format_short_date(transaction.date)}**")
    cols[1].markdown(f"{transaction.description}  \n_{icon_label}_")

    amount = format_signed_amount(transaction.amount, transaction.is_income)
    color = "#10b981" if transaction.is_income else "#ef4444"
    cols[2].markdown(
        f"<span style='color:{color};font-weight:bold'>{amount}</span>",
        unsafe_allow_html=True,
    )

    if not allow_delete:
        return

    if cols[3].button("🗑️", key=f"delete_{transaction.id}"):
        st.session_state.pending_delete = transaction.id
        st.rerun()

    if st.session_state.get("pending_delete") == transaction.id:
        render_delete_confirmation(transaction, session)


def render_delete_confirmation(transaction, session: LedgerSession):
    """Nothing is deleted until the user confirms."""
    st.warning("Tem certeza que deseja excluir esta transação?")
    confirm_col, cancel_col = st.columns(2)

    if confirm_col.button("Sim, excluir", type="primary", key=f"confirm_delete_{transaction.id}"):
        st.session_state.pending_delete = None
        session.delete_transaction(transaction.id)
        if not session.last_save_ok:
            st.session_state.save_warning = (
                "Transação excluída, mas não foi possível salvar neste dispositivo."
            )
        st.rerun()

    if cancel_col.button("Cancelar", key=f"cancel_delete_{transaction.id}"):
        st.session_state.pending_delete = None
        st.rerun()


def render_dashboard_page(session: LedgerSession):
    """Balance, totals, spending chart and recent activity."""
    st.title("🏠 Início")

    summary = session.summary()
    render_balance_card(summary.balance)

    col1, col2 = st.columns(2)
    col1.metric("⬆️ Entradas", format_currency(summary.totals.income))
    col2.metric("⬇️ Saídas", format_currency(summary.totals.expenses))

    st.markdown("### Gastos por categoria")
    fig = render_expense_pie(summary.expenses_by_category)
    if fig is None:
        st.info("Nenhum gasto registrado ainda.")
    else:
        st.pyplot(fig)

    st.markdown("### Atividade recente")
    if not summary.recent:
        st.info("Adicione sua primeira transação pela barra lateral.")
    for transaction in summary.recent:
        render_transaction_row(transaction)

    st.markdown("---")
    render_insight_panel(session)


def render_insight_panel(session: LedgerSession):
    """On-demand analysis from the AI assistant."""
    st.markdown("### 🤖 FinChat")

    if not session.insights_available:
        st.caption("Configure GEMINI_API_KEY para receber dicas do assistente.")

    if st.button("Analisar minhas finanças", disabled=not session.transactions):
        with st.spinner("Analisando suas transações..."):
            st.session_state.insight = run_async(session.get_insights())

    if st.session_state.get("insight"):
        st.markdown(st.session_state.insight)


def render_history_page(session: LedgerSession):
    """All transactions, newest first, with delete."""
    st.title("📜 Histórico")

    history = session.history()
    if not history:
        st.info("Nenhuma transação registrada.")
        return

    st.caption(f"{len(history)} transações")
    for transaction in history:
        render_transaction_row(transaction, allow_delete=True, session=session)


def render_add_transaction_form(session: LedgerSession):
    """Sidebar form for a new transaction."""
    st.sidebar.markdown("### ➕ Nova transação")

    with st.sidebar.form("add_transaction", clear_on_submit=True):
        type_ = st.radio(
            "Tipo",
            options=list(TYPE_LABELS),
            format_func=TYPE_LABELS.get,
            horizontal=True,
        )
        amount = st.text_input("Valor (R$)", placeholder="0,00")
        description = st.text_input("Descrição", placeholder="Ex: Mercado")
        category = st.selectbox(
            "Categoria",
            options=[c.id for c in DEFAULT_CATEGORIES],
            format_func=lambda cid: find_category(cid).name,
        )
        when = st.date_input("Data", value=date.today())
        submitted = st.form_submit_button("Salvar")

    if not submitted:
        return

    validator = TransactionFormValidator()
    try:
        draft = validator.build_draft(
            amount=amount,
            description=description,
            type=type_,
            category=category,
            date=when,
        )
    except TransactionValidationError as e:
        st.sidebar.error(validator.get_user_friendly_summary(e.result))
        return

    session.add_transaction(draft)
    if not session.last_save_ok:
        st.session_state.save_warning = (
            "Transação adicionada, mas não foi possível salvar neste dispositivo."
        )
    st.rerun()


def render_settings_page():
    """Render the settings page."""
    st.title("⚙️ Ajustes")

    st.markdown("### Status")

    status = validate_all_settings()

    services = [
        ("Armazenamento local", "storage"),
        ("Gemini (FinChat)", "gemini"),
        ("Aplicação", "app"),
    ]

    for name, key in services:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Não configurado")
            st.error(f"❌ {name} - {error}")

    st.markdown("---")
    st.markdown("### Configuração")
    st.markdown(
        "Para configurar o aplicativo, crie um arquivo `.env`. "
        "Veja `.env.example` para as variáveis disponíveis."
    )

    st.markdown("---")
    st.markdown("### Conta")
    if st.button("🚪 Sair do App", key="logout", help="Voltar para a tela de apresentação"):
        st.session_state.entered = False
        st.rerun()

    st.caption(f"Finança Fácil v{__version__}")


if __name__ == "__main__":
    main()
