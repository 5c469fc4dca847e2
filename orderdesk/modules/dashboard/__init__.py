"""
Dashboard Module
================

Admin entry point for OrderDesk.

Provides:
- Admin authentication (login/logout)
- Landing redirect to the orders dashboard
- Recent application log entries for the admin

This is the foundation module that the orders admin plugs into.
"""

from flask import Blueprint

# Note: Blueprint name is 'admin' so login urls read 'admin.login'
dashboard_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates'
)

# Import routes after blueprint is created
from . import routes

__all__ = ['dashboard_bp']
