import os
import logging
import yaml
import streamlit as st

from copy import deepcopy
from streamlit.connections import SQLConnection

from expense_tracker import DB_PATH, DB_URL, DEFAULT_CATEGORIES_PATH, INCOME_TYPES_PATH


logger = logging.getLogger(__name__)

DEFAULT_EMOJI = '📦'


def get_db_connection() -> SQLConnection:
    """
    Get a connection to the database. The connection named 'data' in the streamlit secrets is used when it is
    configured, otherwise the url from the EXPENSE_TRACKER_DB_URL environment variable (defaults to a sqlite file in
    the user directory).

    Returns
    -------
    SQLConnection
        The connection to the app database
    """
    if 'conn' not in st.session_state:
        if _has_connection_secrets():
            st.session_state['conn'] = st.connection('data', type='sql')
        else:
            if DB_URL.startswith('sqlite:///') and not os.path.exists(DB_PATH):
                os.makedirs(os.path.dirname(DB_PATH), exist_ok=True)
            st.session_state['conn'] = st.connection('data', type='sql', url=DB_URL)
        logger.info("Connected to the app database")
    return st.session_state['conn']


def _has_connection_secrets() -> bool:
    if not st.secrets.load_if_toml_exists():
        return False
    return 'data' in st.secrets.get('connections', {})


def load_yaml_list(path: str) -> list[dict]:
    """
    Load a yaml file holding a list of mappings.

    Parameters
    ----------
    path : str
        The path to the yaml file

    Returns
    -------
    list[dict]
        The entries of the file, an empty list if the file doesn't exist or is empty
    """
    try:
        with open(path, 'r', encoding='utf-8') as file:
            return yaml.safe_load(file) or []
    except FileNotFoundError:
        logger.warning("Resource file %s not found", path)
        return []


def get_category_emojis(copy: bool = False) -> dict[str, str]:
    """
    Get the emoji of each known expense category name

    Returns
    -------
    dict
        category name -> emoji
    """
    if 'category_emojis' not in st.session_state:
        st.session_state['category_emojis'] = {
            category['name']: category.get('emoji', DEFAULT_EMOJI)
            for category in load_yaml_list(DEFAULT_CATEGORIES_PATH)
        }

    if copy:
        return deepcopy(st.session_state['category_emojis'])
    return st.session_state['category_emojis']


def category_emoji(category_name: str | None) -> str:
    return get_category_emojis().get(category_name, DEFAULT_EMOJI)


def get_income_types() -> list[dict]:
    """the income presets offered by the add income dialog"""
    if 'income_types' not in st.session_state:
        st.session_state['income_types'] = load_yaml_list(INCOME_TYPES_PATH)
    return st.session_state['income_types']
