"""
Orders Admin Module
===================

Admin interface for storefront orders held in the content store.
Plugs into the admin dashboard module.

Provides:
- Order listing with status filter
- Cart item detail rows
- Inline order status updates
- Order deletion with confirmation
"""

from flask import Blueprint

orders_bp = Blueprint(
    'orders_admin',
    __name__,
    url_prefix='/admin/orders',
    template_folder='templates'
)

from . import routes

__all__ = ['orders_bp']
