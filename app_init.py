"""
Application Initialization Module
Initializes the Flask app with all infrastructure components
"""
import os
from flask import Flask
from config import get_config
from logging_config import setup_logging, get_logger
from security import setup_security
from health_checks import register_health_checks
from database import init_engine, init_db
from planning_types import PricingConfig

logger = get_logger(__name__)


def create_app(config_name=None):
    """
    Application factory that creates and configures Flask app with all infrastructure

    Args:
        config_name: 'development', 'production' or 'testing'; defaults to FLASK_ENV

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)

    config_class = get_config(config_name)
    app.config.from_object(config_class)

    setup_logging(app)

    logger.info("=" * 60)
    logger.info("Initializing Warehouse Planner Application")
    logger.info("=" * 60)
    logger.info(f"Environment: {config_name or os.environ.get('FLASK_ENV', 'development')}")
    logger.info(f"Debug mode: {app.debug}")

    # Setup security (CORS, headers, error handlers)
    setup_security(app, app.config)

    initialize_database(app)

    app.pricing_config = initialize_pricing_config(app)

    register_health_checks(app)

    from app import register_blueprints
    register_blueprints(app)

    logger.info("Application initialization complete")
    logger.info("=" * 60)

    return app


def initialize_database(app):
    """
    Bind the engine to the configured database and create missing tables

    Args:
        app: Flask application instance
    """
    init_engine(app.config['DATABASE_URL'], app.config.get('SQLALCHEMY_ENGINE_OPTIONS'))
    init_db()


def initialize_pricing_config(app):
    """
    Build the rate table from app config

    A malformed rate table is a deployment error, so this raises instead of
    starting with a partial table.

    Args:
        app: Flask application instance

    Returns:
        PricingConfig instance
    """
    try:
        pricing_config = PricingConfig.from_dict(app.config['PRICING'])
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Invalid PRICING configuration: {e}")
        raise

    logger.info(
        f"Pricing configured: {len(pricing_config.volume_discounts)} volume tiers, "
        f"{len(pricing_config.membership_discounts)} membership tiers"
    )
    return pricing_config
