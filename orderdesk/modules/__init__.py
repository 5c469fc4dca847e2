"""
OrderDesk Modules
=================

Flask blueprint modules for the order admin.
"""

__all__ = ['dashboard', 'orders', 'store_api']
