"""
WSGI Entry Point for Gunicorn

Run with:
  gunicorn wsgi:app

The Flask application is created by app_init.create_app() using FLASK_ENV.
"""

from app_init import create_app

app = create_app()
