"""
WSGI / Flask CLI entry point.

Usage:
    flask --app wsgi run          # development server
    APP_ENV=production SECRET_KEY=... flask --app wsgi run
"""

from transitdocs import create_app

app = create_app()
