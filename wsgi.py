"""
WSGI entry point for gunicorn:
    gunicorn --bind 0.0.0.0:8080 wsgi:application
Uses the production config unless FLASK_ENV names another one.
"""
import os

from doktolib import create_app

application = app = create_app(os.getenv('FLASK_ENV', 'production'))
