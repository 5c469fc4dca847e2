"""
OrderDesk Starter Template
==========================

A ready-to-run Flask application with the OrderDesk admin mounted.

Run with:
    python app.py

Visit:
    http://localhost:5000/admin/login  - Admin login
    http://localhost:5000/admin/orders - Orders dashboard
"""

from flask import Flask, redirect, url_for
from orderdesk import OrderDesk

from config import Config

# Create Flask app
app = Flask(__name__)
app.config.from_object(Config)

# Initialize OrderDesk - this registers all modules
orderdesk = OrderDesk(app)


@app.route('/')
def index():
    """Send visitors to the admin"""
    return redirect(url_for('admin.dashboard'))


# =============================================================================
# Run the app
# =============================================================================

if __name__ == '__main__':
    print("\n" + "=" * 60)
    print("OrderDesk Starter Template")
    print("=" * 60)
    print(f"Admin Login:     http://localhost:5000/admin/login")
    print(f"Orders:          http://localhost:5000/admin/orders")
    print(f"Delete API:      DELETE http://localhost:5000/api/deleteOrder")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=5000, debug=True)
