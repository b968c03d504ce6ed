"""
Warehouse Planner - Application Package

This package contains the HTTP layer:
- api/: Route handlers (Flask Blueprints)

The app factory and core Flask setup remain in app_init.py at the project root.
Calculations live in capacity_calculations.py and pricing_engine.py; database
access lives in services/.
"""

import logging

from app.api.capacity import capacity_bp
from app.api.pricing import pricing_bp
from app.api.availability import availability_bp

logger = logging.getLogger(__name__)


def register_blueprints(app):
    """
    Register all API blueprints with the Flask app.

    Args:
        app: Flask application instance
    """
    app.register_blueprint(capacity_bp)
    app.register_blueprint(pricing_bp)
    app.register_blueprint(availability_bp)
    logger.info("API blueprints registered: capacity, pricing, availability")


__all__ = ['register_blueprints', 'capacity_bp', 'pricing_bp', 'availability_bp']
