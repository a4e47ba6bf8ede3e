"""
Streamlit Frontend for EAZZY

Two pages:
1. Authentication - login and registration tabs
2. Dashboard - month selector, summary cards, transaction list,
   new-transaction form and CSV export

DESIGN PRINCIPLES:
1. One banner when Supabase is unconfigured, never a crash
2. Validation messages are specific and name the problem
3. Saving a transaction always succeeds from the user's point of view
"""

from datetime import date
from decimal import Decimal

import streamlit as st
from pydantic import ValidationError

from eazzy.audit import configure_logging, create_correlation_id
from eazzy.config import get_settings, validate_all_settings
from eazzy.export import format_currency, format_date
from eazzy.models import RegistrationRequest, TransactionType, categories_for
from eazzy.orchestrator import AuthFlow, LedgerFlow, create_app_components
from eazzy.services.storage import StorageError
from eazzy.summary import MONTH_NAMES


# Page configuration
st.set_page_config(
    page_title="EAZZY",
    page_icon="💰",
    layout="centered",
    initial_sidebar_state="collapsed",
)

# Custom CSS for the summary cards
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .income { color: #16a34a; font-weight: bold; }
    .expense { color: #dc2626; font-weight: bold; }
</style>
""", unsafe_allow_html=True)


UNCONFIGURED_BANNER = (
    "Para usar autenticação, conecte sua conta Supabase em "
    "**Configurações do Projeto → Integrações**. "
    "Enquanto isso, as transações ficam salvas apenas neste dispositivo."
)

LOCAL_WRITE_FAILED = (
    "Não foi possível salvar os dados neste dispositivo. "
    "Verifique o espaço em disco e as permissões da pasta de dados."
)


def get_components():
    """
    Get or create this browser session's components.

    The ledger holds the user's in-memory list, so components are kept
    per session rather than shared across sessions.
    """
    if "components" not in st.session_state:
        app_settings = get_settings().app
        configure_logging("DEBUG" if app_settings.debug_mode else app_settings.log_level)
        auth_flow, ledger_flow, app_session = create_app_components()
        auth_flow.restore_session(app_session)
        st.session_state.components = (auth_flow, ledger_flow, app_session)
        st.session_state.loaded_for = None
    return st.session_state.components


def show_message(message) -> None:
    if message is None:
        return
    if message.is_error:
        st.error(message.text)
    else:
        st.success(message.text)


def main():
    """Main application entry point."""
    auth_flow, ledger_flow, app_session = get_components()

    if not app_session.remote_available:
        st.warning(UNCONFIGURED_BANNER)

    render_status_panel()

    if app_session.is_authenticated:
        render_dashboard_page(auth_flow, ledger_flow, app_session)
    else:
        render_auth_page(auth_flow, app_session)


def render_status_panel():
    """Render the configuration status in the sidebar."""
    app_settings = get_settings().app
    status = validate_all_settings()

    with st.sidebar.expander("⚙️ Status"):
        services = [
            ("Supabase (Autenticação e Dados)", "supabase"),
            ("Configuração do App", "app"),
        ]
        for name, key in services:
            if status.get(key, False):
                st.success(f"✅ {name} - Conectado")
            else:
                error = status.get(f"{key}_error", "Não configurado")
                st.error(f"❌ {name} - {error}")

        st.caption(f"Ambiente: {app_settings.environment}")
        st.caption(f"Armazenamento local: {app_settings.local_store_path}")
        if app_settings.debug_mode:
            st.caption("Modo debug ativo")

        st.markdown(
            "Para configurar, crie um arquivo `.env` com as suas chaves. "
            "Veja `.env.example` para as variáveis necessárias."
        )


def render_auth_page(auth_flow: AuthFlow, app_session):
    """Render the login / registration page."""
    st.title("💰 EAZZY")
    st.markdown("Entre na sua conta ou crie uma nova")

    disabled = not auth_flow.is_available

    tab_login, tab_register = st.tabs(["Entrar", "Cadastrar"])

    with tab_login:
        with st.form("login_form"):
            email = st.text_input("Email", placeholder="seu@email.com", disabled=disabled)
            password = st.text_input(
                "Senha", type="password", placeholder="••••••••", disabled=disabled,
            )
            submitted = st.form_submit_button("Entrar", type="primary", disabled=disabled)

        if submitted:
            with st.spinner("Entrando..."):
                message = auth_flow.login(
                    app_session,
                    email=email,
                    password=password,
                    correlation_id=create_correlation_id(),
                )
            show_message(message)
            if not message.is_error:
                st.rerun()

    with tab_register:
        render_register_form(auth_flow, disabled)

    if disabled:
        st.markdown("---")
        if st.button("Continuar sem conta"):
            st.session_state.flash = auth_flow.continue_offline(app_session).text
            st.rerun()


def render_register_form(auth_flow: AuthFlow, disabled: bool):
    """Render the registration form."""
    # Outside the form so the second payday fields react to it
    single_payment = st.checkbox(
        "Recebo em um único pagamento",
        key="single_payment",
        disabled=disabled,
    )

    with st.form("register_form", clear_on_submit=False):
        name = st.text_input("Nome Completo", placeholder="João Silva", disabled=disabled)
        email = st.text_input("Email", placeholder="seu@email.com", disabled=disabled)

        col1, col2 = st.columns(2)
        with col1:
            password = st.text_input("Senha", type="password", disabled=disabled)
        with col2:
            confirm_password = st.text_input("Confirmar Senha", type="password", disabled=disabled)

        col1, col2 = st.columns(2)
        with col1:
            phone = st.text_input("Telefone", placeholder="(11) 99999-9999", disabled=disabled)
        with col2:
            profession = st.text_input("Profissão", placeholder="Desenvolvedor", disabled=disabled)

        salary = st.number_input(
            "Salário Mensal (R$)", min_value=0.0, step=0.01, format="%.2f", disabled=disabled,
        )

        st.markdown("**Dias de Pagamento**")
        col1, col2 = st.columns(2)
        with col1:
            first_day = st.number_input("Dia do pagamento", min_value=0, max_value=31, step=1, disabled=disabled)
        with col2:
            first_amount = st.number_input(
                "Valor (R$)", min_value=0.0, step=0.01, format="%.2f", disabled=disabled,
            )

        second_day = None
        second_amount = None
        if not single_payment:
            col1, col2 = st.columns(2)
            with col1:
                second_day = st.number_input(
                    "Segundo dia do pagamento", min_value=0, max_value=31, step=1, disabled=disabled,
                )
            with col2:
                second_amount = st.number_input(
                    "Segundo valor (R$)", min_value=0.0, step=0.01, format="%.2f", disabled=disabled,
                )

        submitted = st.form_submit_button("Criar Conta", type="primary", disabled=disabled)

    if submitted:
        request = RegistrationRequest(
            name=name,
            email=email,
            password=password,
            confirm_password=confirm_password,
            phone=phone,
            profession=profession,
            salary=Decimal(str(salary)),
            first_payment_day=int(first_day),
            first_payment_amount=Decimal(str(first_amount)),
            second_payment_day=int(second_day) if second_day is not None else None,
            second_payment_amount=Decimal(str(second_amount)) if second_amount is not None else None,
            single_payment=single_payment,
        )
        with st.spinner("Criando conta..."):
            message = auth_flow.register(request, correlation_id=create_correlation_id())
        show_message(message)


def render_dashboard_page(auth_flow: AuthFlow, ledger_flow: LedgerFlow, app_session):
    """Render the monthly dashboard."""
    user = app_session.user

    flash = st.session_state.pop("flash", None)
    if flash:
        st.success(flash)

    # Load once per signed-in user
    if st.session_state.get("loaded_for") != user.user_id:
        ledger_flow.load(app_session, correlation_id=create_correlation_id())
        st.session_state.loaded_for = user.user_id

    col1, col2 = st.columns([4, 1])
    with col1:
        st.title("💰 EAZZY")
        st.markdown(f"Olá, **{user.display_name}**!")
    with col2:
        if st.button("Sair", help="Sair"):
            auth_flow.logout(app_session)
            ledger_flow.reset()
            st.session_state.loaded_for = None
            st.rerun()

    today = date.today()
    col1, col2 = st.columns([3, 1])
    with col1:
        month = st.selectbox(
            "Mês",
            options=list(range(12)),
            index=today.month - 1,
            format_func=lambda idx: MONTH_NAMES[idx],
        )
    with col2:
        year = int(st.number_input("Ano", min_value=1900, max_value=9999, value=today.year, step=1))

    summary = ledger_flow.summary(month, year)

    col1, col2, col3 = st.columns(3)
    col1.metric("Receitas", format_currency(summary.total_income))
    col2.metric("Despesas", format_currency(summary.total_expense))
    col3.metric("Saldo", format_currency(summary.balance))

    render_new_transaction_form(ledger_flow, app_session)

    st.markdown("---")
    header_col, export_col = st.columns([3, 1])
    with header_col:
        st.subheader("Transações")
        st.caption(f"{summary.count} transação(ões) registrada(s)")
    with export_col:
        filename, csv_text = ledger_flow.export(app_session, month, year)
        st.download_button(
            "Exportar CSV",
            csv_text.encode("utf-8"),
            file_name=filename,
            mime="text/csv",
            disabled=summary.count == 0,
        )

    if summary.count == 0:
        st.info("Nenhuma transação registrada neste mês.")
        return

    for transaction in summary.transactions:
        col1, col2, col3 = st.columns([3, 2, 1])
        with col1:
            st.markdown(f"**{transaction.description}**")
            st.caption(f"{transaction.category} · {format_date(transaction.date)}")
        with col2:
            css = "income" if transaction.is_income else "expense"
            sign = "+" if transaction.is_income else "-"
            st.markdown(
                f'<span class="{css}">{sign} {format_currency(transaction.amount)}</span>',
                unsafe_allow_html=True,
            )
        with col3:
            if st.button("Excluir", key=f"delete_{transaction.id}"):
                try:
                    ledger_flow.delete_transaction(
                        app_session,
                        transaction.id,
                        correlation_id=create_correlation_id(),
                    )
                except StorageError:
                    st.error(LOCAL_WRITE_FAILED)
                    return
                st.rerun()


def render_new_transaction_form(ledger_flow: LedgerFlow, app_session):
    """Render the new-transaction form."""
    with st.expander("➕ Nova Transação"):
        # Outside the form so the category list follows the type
        transaction_type = st.radio(
            "Tipo",
            options=[TransactionType.EXPENSE, TransactionType.INCOME],
            format_func=lambda t: "Despesa" if t == TransactionType.EXPENSE else "Receita",
            horizontal=True,
            key="new_tx_type",
        )

        with st.form("transaction_form", clear_on_submit=True):
            description = st.text_input("Descrição", placeholder="Ex: Supermercado, Salário...")
            amount = st.number_input("Valor (R$)", min_value=0.0, step=0.01, format="%.2f")
            category = st.selectbox("Categoria", options=categories_for(transaction_type))
            tx_date = st.date_input("Data", value=date.today())
            submitted = st.form_submit_button("Adicionar Transação", type="primary")

        if submitted:
            try:
                draft = ledger_flow.build_draft(
                    app_session,
                    description=description,
                    amount=Decimal(str(amount)),
                    category=category,
                    date=tx_date,
                    transaction_type=transaction_type,
                )
            except ValidationError as e:
                fields = ", ".join(str(err["loc"][0]) for err in e.errors() if err["loc"])
                st.error(f"Verifique os campos: {fields or 'transação inválida'}")
                return

            try:
                result = ledger_flow.add_transaction(
                    app_session, draft, correlation_id=create_correlation_id(),
                )
            except StorageError:
                st.error(LOCAL_WRITE_FAILED)
                return
            if result.is_remote:
                st.session_state.flash = "Transação adicionada!"
            else:
                st.session_state.flash = "Transação salva neste dispositivo."
            st.rerun()


if __name__ == "__main__":
    main()
