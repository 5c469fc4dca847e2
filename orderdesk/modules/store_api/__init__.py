"""
Store API Module
================

JSON endpoints the storefront calls directly.

API Endpoints:
- DELETE /api/deleteOrder - Delete an order by id, body {"orderId": "..."}

Usage:
    from orderdesk.modules.store_api import store_api_bp

    app.register_blueprint(store_api_bp)  # Registers at /api
"""

from flask import Blueprint

store_api_bp = Blueprint(
    'store_api',
    __name__,
    url_prefix='/api'
)

from . import routes

__all__ = ['store_api_bp']
