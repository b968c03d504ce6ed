"""
Centralized Configuration for the Warehouse Planner Service
Manages environment-specific settings, the static rate table and floor defaults.
"""
import os


class Config:
    """Base configuration with defaults"""

    # Flask Settings
    SECRET_KEY = os.environ.get('SECRET_KEY') or os.urandom(32).hex()
    MAX_CONTENT_LENGTH = 2 * 1024 * 1024  # floor plans and quotes are small JSON bodies

    # CORS Settings
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')
    CORS_METHODS = ['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS']
    CORS_ALLOW_HEADERS = ['Content-Type', 'Authorization', 'X-Requested-With']

    # Database Settings
    DATABASE_URL = os.environ.get('DATABASE_URL', 'sqlite:///warehouse_planner.db')
    SQLALCHEMY_ENGINE_OPTIONS = {
        'pool_pre_ping': True,
        'pool_recycle': 300,
    }

    # Logging Configuration
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    LOG_FILE = os.environ.get('LOG_FILE', 'app.log')
    LOG_DIR = os.environ.get('LOG_DIR', 'logs')

    # Static rate table (USD)
    PRICING = {
        'pallet_in': 5.00,
        'pallet_out': 5.00,
        'storage_per_pallet_per_month': 17.50,
        'area_rental_per_sq_ft_per_year': 20.00,
        'area_rental_min_sq_ft': 40000,
        'volume_discounts': [
            {'pallet_threshold': 50, 'discount_percent': 10},
            {'pallet_threshold': 100, 'discount_percent': 15},
            {'pallet_threshold': 250, 'discount_percent': 20},
        ],
        'membership_discounts': [
            {'tier': 'bronze', 'discount_percent': 0},
            {'tier': 'silver', 'discount_percent': 5},
            {'tier': 'gold', 'discount_percent': 10},
            {'tier': 'platinum', 'discount_percent': 15},
        ],
    }

    # Defaults applied to new floors (meters unless noted)
    FLOOR_DEFAULTS = {
        'wall_clearance': 0.5,
        'sprinkler_clearance': 0.9,
        'safety_clearance': 0.5,
        'main_aisle': 3.5,
        'side_aisle': 2.5,
        'pedestrian_aisle': 1.0,
        'loading_zone_depth': 3.0,
        'dock_zone_depth': 4.5,
        'standard_pallet_height': 1.5,
        'euro_pallet_height': 1.5,
        'custom_pallet_length_cm': 100,
        'custom_pallet_width_cm': 100,
        'custom_pallet_height_cm': 150,
    }

    # Accepted custom pallet sizes (centimeters)
    CUSTOM_PALLET_LIMITS = {
        'min_length_cm': 80,
        'max_length_cm': 120,
        'min_width_cm': 80,
        'max_width_cm': 120,
        'min_height_cm': 10,
        'max_height_cm': 200,
    }


class DevelopmentConfig(Config):
    """Development-specific configuration"""
    DEBUG = True
    TESTING = False
    LOG_LEVEL = 'DEBUG'
    # Allow all CORS in development
    CORS_ORIGINS = ['*']


class ProductionConfig(Config):
    """Production-specific configuration"""
    DEBUG = False
    TESTING = False
    DATABASE_URL = os.environ.get('DATABASE_URL', 'postgresql://localhost/warehouse_planner')
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', 'https://app.warebnb.com').split(',')
    PREFERRED_URL_SCHEME = 'https'
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'


class TestingConfig(Config):
    """Testing-specific configuration"""
    DEBUG = True
    TESTING = True
    DATABASE_URL = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {}
    LOG_LEVEL = 'WARNING'


# Configuration selector
config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig,
}


def get_config(name=None):
    """Get configuration by name, falling back to the FLASK_ENV environment variable"""
    env = name or os.environ.get('FLASK_ENV', 'development')
    return config_by_name.get(env, DevelopmentConfig)
