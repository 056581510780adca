"""
Health check endpoints for monitoring and load balancers
"""
from flask import Blueprint, current_app, jsonify
from doktolib.extensions import db
from doktolib.models.base import isoformat, utcnow

health_bp = Blueprint('health', __name__, url_prefix='/api/v1/health')


@health_bp.route('', methods=['GET'])
def health_check():
    """Basic health check - no database connection"""
    return jsonify({
        'status': 'healthy',
        'timestamp': isoformat(utcnow()),
        'service': current_app.config['SERVICE_NAME']
    }), 200


@health_bp.route('/ready', methods=['GET'])
def readiness_check():
    """Readiness check - includes database connection and storage status"""
    try:
        db.session.execute(db.text('SELECT 1'))
        db_status = 'connected'
    except Exception as e:
        db.session.rollback()
        db_status = f'error: {str(e)}'

    store = current_app.extensions['object_store']

    return jsonify({
        'status': 'ready' if db_status == 'connected' else 'not_ready',
        'database': db_status,
        'storage': 'configured' if store.configured else 'disabled',
        'timestamp': isoformat(utcnow())
    }), 200 if db_status == 'connected' else 503
