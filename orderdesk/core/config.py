import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the OrderDesk admin.
    Projects provide store credentials and the admin login via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')
    BRAND_NAME = os.getenv('BRAND_NAME', 'OrderDesk')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Persistent application log (LoggingService)
    LOG_DB = os.getenv('LOG_DB', os.path.join(DB_DIR, 'orderdesk_logs.db'))
    LOGS_TABLE = 'app_logs'

    # Admin login - a single configured credential pair
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')
    ADMIN_SESSION_HOURS = int(os.getenv('ADMIN_SESSION_HOURS', '12'))

    # Sanity content store
    # The API token must carry write/delete permission
    SANITY_PROJECT_ID = os.getenv('SANITY_PROJECT_ID') or os.getenv('NEXT_PUBLIC_SANITY_PROJECT_ID')
    SANITY_DATASET = os.getenv('SANITY_DATASET') or os.getenv('NEXT_PUBLIC_SANITY_DATASET')
    SANITY_API_TOKEN = os.getenv('SANITY_API_TOKEN')
    SANITY_API_VERSION = os.getenv('SANITY_API_VERSION', '2024-02-07')
    STORE_TIMEOUT = int(os.getenv('STORE_TIMEOUT', '30'))

    # Origins allowed to call the JSON delete endpoint
    CORS_ORIGINS = [o.strip() for o in os.getenv('CORS_ORIGINS', 'http://localhost:3000').split(',') if o.strip()]


CONFIG_KEYS = [
    'BRAND_NAME', 'DB_DIR', 'LOG_DB',
    'ADMIN_EMAIL', 'ADMIN_PASSWORD', 'ADMIN_SESSION_HOURS',
    'SANITY_PROJECT_ID', 'SANITY_DATASET', 'SANITY_API_TOKEN', 'SANITY_API_VERSION',
    'STORE_TIMEOUT', 'CORS_ORIGINS',
]


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val:
        return val
    return os.getenv(key, default)
