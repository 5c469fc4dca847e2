"""
Store API Routes
================

Passthrough from HTTP to the content store's delete operation.
No authorization is applied here; the storefront calls it directly.
"""

import logging

from flask import current_app, jsonify, request

from . import store_api_bp
from ...core import LoggingService

logger = logging.getLogger(__name__)


@store_api_bp.route('/deleteOrder', methods=['DELETE'])
def delete_order():
    """Delete an order document by id"""
    data = request.get_json(silent=True)
    order_id = data.get('orderId') if isinstance(data, dict) else None

    if not order_id:
        return jsonify({'message': 'Order ID is required'}), 400

    store = current_app.extensions['orderdesk'].store
    try:
        result = store.delete(order_id)
    except Exception as e:
        logger.error(f"Error in API route while deleting order: {e}")
        LoggingService.log_error_with_traceback('store_api', e, {'order_id': order_id})
        return jsonify({'message': 'Failed to delete order', 'error': str(e)}), 500

    LoggingService.info('store_api', f"Order {order_id} deleted via API")
    return jsonify({'message': 'Order deleted successfully', 'result': result}), 200
