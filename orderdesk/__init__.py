"""
OrderDesk - Storefront Order Admin
==================================

A small Flask admin for a storefront whose orders live in a Sanity
content store:
- Admin login with a signed, expiring session
- Order dashboard with status filter, inline status updates and deletion
- JSON delete endpoint for the storefront

Usage:
    from orderdesk import OrderDesk

    app = Flask(__name__)
    OrderDesk(app)
"""

__version__ = '0.1.0'

from .extension import OrderDesk

__all__ = ['OrderDesk']
