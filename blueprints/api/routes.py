"""
API routes for service-level JSON endpoints.
"""

from flask import jsonify, Blueprint, current_app

api_bp = Blueprint('api', __name__)


@api_bp.route('/health')
def health_check():
    """
    Health check endpoint (no authentication required).

    Returns:
        JSON with status, version and database reachability
    """
    import sqlite3
    from database import get_db

    try:
        get_db().execute('SELECT 1').fetchone()
        database = 'ok'
    except sqlite3.Error as e:
        current_app.logger.error(f'Health check database error: {e}')
        database = 'error'

    return jsonify({
        'status': 'ok' if database == 'ok' else 'degraded',
        'database': database,
        'version': current_app.config.get('APP_VERSION', '1.0.0'),
        'app': current_app.config.get('APP_NAME', 'BHUB')
    })
