"""
OrderDesk Flask extension
=========================

Mounts the admin modules on a host app:

    app = Flask(__name__)
    orderdesk = OrderDesk(app)

Config defaults come from orderdesk.core.Config (env / .env) and never
override values the host app already set.
"""

import os
import secrets
from datetime import timedelta

from flask import jsonify
from flask_cors import CORS

from .core import Config, ContentStoreClient
from .core.config import CONFIG_KEYS
from .modules.orders.controller import ControllerRegistry


class OrderDesk:
    """Registers the dashboard, orders and store API modules on a Flask app"""

    def __init__(self, app=None, config=None, store=None):
        self._config = config or {}
        self._store = store
        self._registered = []
        self.store = None
        self.registry = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        self._apply_config(app)
        self._setup_database_dir(app)

        if self._store is None:
            with app.app_context():
                self._store = ContentStoreClient.from_config()
        self.store = self._store
        self.registry = ControllerRegistry(
            lambda: self.store,
            max_idle=app.config['PERMANENT_SESSION_LIFETIME'].total_seconds(),
        )

        self._register_modules(app)
        self._register_health(app)

        CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})

        @app.context_processor
        def inject_orderdesk():
            return {
                'brand_name': app.config.get('BRAND_NAME') or 'OrderDesk',
                'orderdesk_config': dict(self._config),
            }

        app.extensions['orderdesk'] = self

    def _apply_config(self, app):
        for key in CONFIG_KEYS:
            app.config.setdefault(key, getattr(Config, key))
        for key, value in self._config.items():
            app.config[key.upper()] = value

        origins = app.config['CORS_ORIGINS']
        if isinstance(origins, str):
            app.config['CORS_ORIGINS'] = [o.strip() for o in origins.split(',') if o.strip()]

        if not app.config.get('SECRET_KEY'):
            app.config['SECRET_KEY'] = Config.SECRET_KEY or secrets.token_hex(32)
            if not Config.SECRET_KEY:
                print("WARNING: FLASK_SECRET_KEY is not set, admin sessions will not survive a restart")

        app.config['PERMANENT_SESSION_LIFETIME'] = timedelta(hours=int(app.config['ADMIN_SESSION_HOURS']))

        if not (app.config.get('ADMIN_EMAIL') and app.config.get('ADMIN_PASSWORD')):
            print("No admin credentials configured. Set ADMIN_EMAIL and ADMIN_PASSWORD to enable login.")

    def _setup_database_dir(self, app):
        for path in (app.config['DB_DIR'], os.path.dirname(app.config['LOG_DB'])):
            if path:
                os.makedirs(path, exist_ok=True)

    def _register_modules(self, app):
        from .modules.dashboard import dashboard_bp
        from .modules.orders import orders_bp
        from .modules.store_api import store_api_bp

        for name, blueprint in (
            ('dashboard', dashboard_bp),
            ('orders', orders_bp),
            ('store_api', store_api_bp),
        ):
            app.register_blueprint(blueprint)
            self._registered.append(name)

    def _register_health(self, app):
        store = self.store

        @app.route('/health')
        def health():
            """Liveness plus a check that the content store is configured"""
            configured = bool(getattr(store, 'is_configured', True))
            return jsonify({
                'status': 'ok' if configured else 'warning',
                'checks': {'store': {'configured': configured}},
            })

    def get_registered_modules(self):
        return list(self._registered)
