"""
Admin Dashboard Routes
======================

Admin login/logout and the landing page.
The login flag lives in Flask's signed session cookie and expires after
ADMIN_SESSION_HOURS; every protected route checks it.
"""

from flask import current_app, render_template, request, redirect, url_for, flash, session, jsonify
from . import dashboard_bp
from .utils import admin_required, api_admin_required, credentials_match
from ...core import LoggingService


def _safe_next(target):
    """Only follow same-site relative redirects"""
    if target and target.startswith('/') and not target.startswith(('//', '/\\')):
        return target
    return None


@dashboard_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login route"""
    if request.method == 'POST':
        email = request.form.get('email', '')
        password = request.form.get('password', '')

        if not email or not password:
            flash('Please enter both email and password', 'error')
            return render_template('dashboard/login.html', email=email)

        if credentials_match(email, password):
            current_app.extensions['orderdesk'].registry.discard(session.get('view_id'))
            session.clear()
            session.permanent = True
            session['admin_id'] = email
            session['admin_email'] = email
            LoggingService.log_user_action('auth', 'admin login', user_id=email)
            flash('Login successful', 'success')

            next_page = _safe_next(request.args.get('next'))
            return redirect(next_page or url_for('admin.dashboard'))

        LoggingService.log_security_event('Failed admin login', {'email': email})
        flash('Invalid email or password', 'error')
        return render_template('dashboard/login.html', email=email)

    return render_template('dashboard/login.html')


@dashboard_bp.route('/logout')
def logout():
    """Admin logout route"""
    admin_email = session.get('admin_email')
    current_app.extensions['orderdesk'].registry.discard(session.get('view_id'))
    session.clear()
    if admin_email:
        LoggingService.log_user_action('auth', 'admin logout', user_id=admin_email)
    flash('You have been logged out', 'info')
    return redirect(url_for('admin.login'))


@dashboard_bp.route('/')
@dashboard_bp.route('/dashboard')
@admin_required
def dashboard():
    """Admin landing page - the orders dashboard"""
    return redirect(url_for('orders_admin.orders_manager'))


@dashboard_bp.route('/api/logs')
@api_admin_required
def api_logs():
    """Recent application log entries"""
    try:
        limit = min(int(request.args.get('limit', 50)), 500)
    except ValueError:
        return jsonify({'success': False, 'error': 'limit must be a number'}), 400

    try:
        entries = LoggingService.recent(limit=limit, source=request.args.get('source'))
    except Exception as e:
        print(f"Error reading logs: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500

    return jsonify({'success': True, 'logs': entries})
