import os
from dotenv import load_dotenv

load_dotenv()

DB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'databases')


class Config:
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')
    BRAND_NAME = 'My Storefront'

    # Application log database
    DB_DIR = DB_DIR
    LOG_DB = os.path.join(DB_DIR, 'orderdesk_logs.db')

    # Admin login
    ADMIN_EMAIL = os.getenv('ADMIN_EMAIL', '')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', '')

    # Sanity content store (token needs write/delete permission)
    SANITY_PROJECT_ID = os.getenv('SANITY_PROJECT_ID', '')
    SANITY_DATASET = os.getenv('SANITY_DATASET', 'production')
    SANITY_API_TOKEN = os.getenv('SANITY_API_TOKEN', '')

    # Storefront origins allowed to call /api/deleteOrder
    CORS_ORIGINS = os.getenv('CORS_ORIGINS', 'http://localhost:3000')
