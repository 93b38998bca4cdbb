import pandas as pd
import streamlit as st
import streamlit_antd_components as sac

from expense_tracker.app.components.navigation import AppContext
from expense_tracker.app.services.expenses_service import TransactionsService
from expense_tracker.app.naming_conventions import TransactionsTableFields, TransactionTypes


TYPE_FILTERS = {
    'All': None,
    'Credits': TransactionTypes.CREDIT.value,
    'Debits': TransactionTypes.DEBIT.value,
}


def render_transactions(ctx: AppContext) -> None:
    """The transactions ledger, filtered by transaction type"""
    st.title("Transactions")
    selection = sac.buttons(
        items=list(TYPE_FILTERS.keys()),
        index=0,
        variant='outline',
        direction='horizontal',
        key='transactions_type_filter'
    )

    service = TransactionsService(ctx.gateway, ctx.notifier)
    transactions = service.load(TYPE_FILTERS.get(selection))
    if transactions is None:
        st.error(service.load_error_message)
        return
    if transactions.empty:
        st.info("No transactions recorded.")
        return

    f = TransactionsTableFields
    df = transactions.copy()
    df[f.AMOUNT.value] = service.signed_amounts(df)
    df[f.TRANS_DATE.value] = pd.to_datetime(df[f.TRANS_DATE.value], errors='coerce')
    st.dataframe(
        df,
        column_order=[f.TRANS_DATE.value, f.DESCRIPTION.value, f.TRANSACTION_TYPE.value, f.AMOUNT.value],
        column_config={
            f.TRANS_DATE.value: st.column_config.DateColumn("Date", format="YYYY-MM-DD"),
            f.DESCRIPTION.value: st.column_config.TextColumn("Description"),
            f.TRANSACTION_TYPE.value: st.column_config.TextColumn("Type"),
            f.AMOUNT.value: st.column_config.NumberColumn("Amount", format="$%.2f"),
        },
        hide_index=True,
        use_container_width=True,
    )
