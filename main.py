import logging
import streamlit as st

from expense_tracker import LOG_LEVEL
from expense_tracker.app.data_access import DataGateway
from expense_tracker.app.utils.data import get_db_connection
from expense_tracker.app.components.navigation import get_app_context
from expense_tracker.app.components.router import ViewRouter


logging.basicConfig(level=LOG_LEVEL, format='%(asctime)s %(levelname)s %(name)s: %(message)s')

st.set_page_config(page_title="Expense Tracker", page_icon="💸", layout='wide')

ctx = get_app_context(lambda: DataGateway(get_db_connection()))
ViewRouter(ctx).run()
