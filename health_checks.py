"""
Health Check & Monitoring Endpoints
Liveness, readiness and metrics for load balancers and dashboards
"""
import os
import sys
import time
import psutil
from datetime import datetime
from typing import Dict, Any
from flask import Blueprint, jsonify, current_app
import logging

from database import check_db_connection
from planning_types import PricingConfig

logger = logging.getLogger(__name__)

SERVICE_NAME = 'warehouse-planner'
SERVICE_VERSION = '1.0.0'

health_bp = Blueprint('health', __name__)

# Track application start time
START_TIME = time.time()


def get_system_metrics() -> Dict[str, Any]:
    """
    Get basic process metrics

    Returns:
        Dictionary of system metrics, empty if psutil cannot read them
    """
    try:
        process = psutil.Process()

        return {
            'cpu_percent': process.cpu_percent(interval=0.1),
            'memory_mb': process.memory_info().rss / 1024 / 1024,
            'memory_percent': process.memory_percent(),
            'threads': process.num_threads(),
        }
    except Exception as e:
        logger.warning(f"Failed to get system metrics: {e}")
        return {}


def get_uptime() -> Dict[str, Any]:
    uptime_seconds = time.time() - START_TIME

    return {
        'uptime_seconds': round(uptime_seconds, 2),
        'uptime_minutes': round(uptime_seconds / 60, 2),
        'uptime_hours': round(uptime_seconds / 3600, 2),
        'started_at': datetime.fromtimestamp(START_TIME).isoformat()
    }


def check_pricing_config(app) -> Dict[str, Any]:
    """
    Check that the configured rate table parses

    Args:
        app: Flask application instance

    Returns:
        Dictionary with 'healthy' and either tier counts or the error
    """
    try:
        config = PricingConfig.from_dict(app.config['PRICING'])
        return {
            'healthy': True,
            'volume_tiers': len(config.volume_discounts),
            'membership_tiers': len(config.membership_discounts)
        }
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Pricing configuration is invalid: {e}")
        return {'healthy': False, 'error': str(e)}


def check_database() -> Dict[str, Any]:
    """Check that the database answers a trivial query"""
    try:
        check_db_connection()
        return {'healthy': True}
    except RuntimeError as e:
        return {'healthy': False, 'error': str(e)}


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Basic health check endpoint
    Returns 200 if application is running
    """
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.utcnow().isoformat(),
        'service': SERVICE_NAME
    }), 200


@health_bp.route('/ready', methods=['GET'])
def readiness_check():
    """
    Readiness check endpoint
    Returns 200 when the rate table is valid and the database is reachable
    """
    try:
        pricing = check_pricing_config(current_app)
        database = check_database()

        is_ready = pricing['healthy'] and database['healthy']

        response = {
            'status': 'ready' if is_ready else 'not_ready',
            'timestamp': datetime.utcnow().isoformat(),
            'checks': {
                'pricing_config': pricing,
                'database': database
            }
        }

        return jsonify(response), 200 if is_ready else 503

    except Exception as e:
        logger.error(f"Readiness check failed: {e}")
        return jsonify({
            'status': 'error',
            'error': str(e),
            'timestamp': datetime.utcnow().isoformat()
        }), 503


@health_bp.route('/metrics', methods=['GET'])
def metrics():
    """
    Basic metrics endpoint
    Returns process metrics and application statistics
    """
    try:
        response = {
            'timestamp': datetime.utcnow().isoformat(),
            'service': SERVICE_NAME,
            'version': SERVICE_VERSION,
            'environment': os.environ.get('FLASK_ENV', 'production'),
            'uptime': get_uptime(),
            'system': get_system_metrics(),
            'checks': {
                'pricing_config': check_pricing_config(current_app),
                'database': check_database()
            },
            'python_version': sys.version.split()[0]
        }

        return jsonify(response), 200

    except Exception as e:
        logger.error(f"Metrics collection failed: {e}")
        return jsonify({
            'status': 'error',
            'error': str(e),
            'timestamp': datetime.utcnow().isoformat()
        }), 500


@health_bp.route('/ping', methods=['GET'])
def ping():
    return 'pong', 200


def register_health_checks(app):
    """
    Register health check blueprint with Flask app

    Args:
        app: Flask application instance
    """
    app.register_blueprint(health_bp, url_prefix='/api')
    logger.info("Health check endpoints registered")
    logger.info("Available endpoints: /api/health, /api/ready, /api/metrics, /api/ping")
