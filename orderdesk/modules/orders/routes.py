"""
Orders Admin Routes
===================

HTML dashboard and JSON API over the session's OrderViewController.
The order list is fetched from the store when the dashboard is mounted
(first visit in a session, or ?refresh=1); every other route works on the
controller's local state.
"""

from flask import abort, current_app, flash, jsonify, redirect, render_template, request, session, url_for

from . import orders_bp
from .controller import ControllerRegistry
from .models import ORDER_STATUSES, STATUS_FILTERS, STATUS_LABELS
from ..dashboard.utils import admin_required, api_admin_required


def _controller():
    """The OrderViewController bound to this admin session"""
    view_id = session.get('view_id')
    if not view_id:
        view_id = ControllerRegistry.new_view_id()
        session['view_id'] = view_id
    return current_app.extensions['orderdesk'].registry.get(view_id)


def _mounted_controller(refresh=False):
    """Controller with its order list loaded, fetching it if needed"""
    controller = _controller()
    if refresh or not controller.loaded:
        notification = controller.load()
        if notification:
            flash(notification.text, notification.level)
    return controller


def _json_body():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _notification_json(notification):
    return {
        'title': notification.title,
        'text': notification.text,
        'level': notification.level,
    }


# ===== Dashboard page =====

@orders_bp.route('/')
@admin_required
def orders_manager():
    """Order management page"""
    controller = _mounted_controller(refresh=request.args.get('refresh') == '1')

    status_filter = request.args.get('status')
    if status_filter:
        try:
            controller.set_filter(status_filter)
        except ValueError:
            abort(400)

    return render_template(
        'orders/orders_manager.html',
        orders=controller.visible_orders,
        active_filter=controller.active_filter,
        expanded_order_id=controller.expanded_order_id,
        filters=STATUS_FILTERS,
        statuses=ORDER_STATUSES,
        status_labels=STATUS_LABELS,
    )


@orders_bp.route('/<order_id>/status', methods=['POST'])
@admin_required
def change_status(order_id):
    """Inline status change from the orders table"""
    controller = _controller()
    try:
        notification = controller.update_status(order_id, request.form.get('status', ''))
    except ValueError:
        abort(400)

    flash(notification.text, notification.level)
    return redirect(url_for('orders_admin.orders_manager'))


@orders_bp.route('/<order_id>/toggle', methods=['POST'])
@admin_required
def toggle_details(order_id):
    """Expand or collapse an order's cart items"""
    _controller().toggle_details(order_id)
    return redirect(url_for('orders_admin.orders_manager'))


@orders_bp.route('/<order_id>/delete', methods=['GET', 'POST'])
@admin_required
def delete_order(order_id):
    """Confirmation page on GET, deletion on a confirmed POST"""
    controller = _controller()

    if request.method == 'GET':
        return render_template('orders/confirm_delete.html', order=controller.get(order_id), order_id=order_id)

    notification = controller.delete(order_id, confirm=lambda _: request.form.get('confirm') == 'yes')
    if notification:
        flash(notification.text, notification.level)
    return redirect(url_for('orders_admin.orders_manager'))


# ===== JSON API =====

@orders_bp.route('/api/orders')
@api_admin_required
def api_orders():
    """List orders from the local view, optionally filtered by status"""
    refresh = request.args.get('refresh') == '1'
    controller = _controller()
    notification = None
    if refresh or not controller.loaded:
        notification = controller.load()

    status_filter = request.args.get('status')
    if status_filter:
        try:
            controller.set_filter(status_filter)
        except ValueError:
            return jsonify({'success': False, 'error': f'Unknown status filter: {status_filter}'}), 400

    response = {
        'success': notification is None,
        'filter': controller.active_filter,
        'expanded_order_id': controller.expanded_order_id,
        'orders': [order.to_dict() for order in controller.visible_orders],
    }
    if notification:
        response['notification'] = _notification_json(notification)
    return jsonify(response)


@orders_bp.route('/api/orders/<order_id>/status', methods=['POST'])
@api_admin_required
def api_change_status(order_id):
    """Patch an order's status and return the reconciled order"""
    data = _json_body()
    controller = _controller()

    try:
        notification = controller.update_status(order_id, data.get('status'))
    except ValueError:
        return jsonify({
            'success': False,
            'error': f"Status must be one of: {', '.join(ORDER_STATUSES)}"
        }), 400

    order = controller.get(order_id)
    body = {
        'success': notification.level == 'success',
        'notification': _notification_json(notification),
        'order': order.to_dict() if order else None,
    }
    return jsonify(body), 200 if body['success'] else 500


@orders_bp.route('/api/orders/<order_id>/toggle', methods=['POST'])
@api_admin_required
def api_toggle_details(order_id):
    expanded = _controller().toggle_details(order_id)
    return jsonify({'success': True, 'expanded_order_id': expanded})


@orders_bp.route('/api/orders/<order_id>/delete', methods=['POST'])
@api_admin_required
def api_delete_order(order_id):
    """Delete an order; the body must carry {"confirmed": true}"""
    data = _json_body()
    controller = _controller()

    notification = controller.delete(order_id, confirm=lambda _: data.get('confirmed') is True)
    if notification is None:
        return jsonify({'success': False, 'cancelled': True})

    body = {
        'success': notification.level == 'success',
        'notification': _notification_json(notification),
        'remaining': len(controller.orders),
    }
    return jsonify(body), 200 if body['success'] else 500
