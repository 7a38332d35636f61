"""
WSGI entry point for the API key manager
Use this with production WSGI servers like Gunicorn or uWSGI
"""
import os
import sys

from keymanager import create_app
from keymanager.config import DevelopmentConfig, ProductionConfig
from keymanager.db import ensure_data_dir, init_db

app = create_app(ProductionConfig)

# Initialize database on startup
if __name__ != '__main__':
    # Only initialize when imported (WSGI server or flask CLI), not when run directly
    try:
        ensure_data_dir()
        init_db()
    except Exception as e:
        print(f"Error during initialization: {e}", file=sys.stderr)
        raise

# WSGI application
application = app

if __name__ == '__main__':
    # For development/testing only
    # In production, use: gunicorn -c gunicorn.conf.py wsgi:application
    port = int(os.environ.get('PORT', 5000))
    create_app(DevelopmentConfig).run(host='0.0.0.0', port=port, debug=False)
