import os

__version__ = "0.1.0"


SRC_PATH = os.path.dirname(os.path.abspath(__file__))
RESOURCES_PATH = os.path.join(SRC_PATH, 'resources')
USER_DIR = os.path.join(os.path.expanduser('~'), '.expense-tracker')
DB_PATH = os.environ.get('EXPENSE_TRACKER_DB_PATH', os.path.join(USER_DIR, 'data.db'))
DB_URL = os.environ.get('EXPENSE_TRACKER_DB_URL', f'sqlite:///{DB_PATH}')
DEFAULT_CATEGORIES_PATH = os.path.join(RESOURCES_PATH, 'default_categories.yaml')
INCOME_TYPES_PATH = os.path.join(RESOURCES_PATH, 'income_types.yaml')
LOG_LEVEL = os.environ.get('EXPENSE_TRACKER_LOG_LEVEL', 'INFO')
