import hashlib
import hmac
from functools import wraps

from flask import jsonify, redirect, request, session, url_for

from ...core import get_config_value


def hash_password(password):
    """Simple password hashing"""
    return hashlib.sha256(password.encode()).hexdigest()


def credentials_match(email, password):
    """Compare a login attempt with the configured admin credential pair"""
    admin_email = get_config_value('ADMIN_EMAIL')
    admin_password = get_config_value('ADMIN_PASSWORD')

    if not admin_email or not admin_password or not email or not password:
        return False

    email_ok = hmac.compare_digest(email.encode(), admin_email.encode())
    password_ok = hmac.compare_digest(hash_password(password), hash_password(admin_password))
    return email_ok and password_ok


def admin_required(f):
    """Decorator to require admin login"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'admin_id' not in session:
            return redirect(url_for('admin.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function


def api_admin_required(f):
    """Decorator for JSON routes, answers 401 instead of redirecting"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'admin_id' not in session:
            return jsonify({'success': False, 'error': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated_function
