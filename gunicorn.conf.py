"""Gunicorn config for container deployment."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Each worker holds its own in-memory ratings snapshot, so a source loaded
# through one worker is not visible to the others. Keep one worker unless the
# data is loaded at startup from the saved URL.
wsgi_app = "ratings_viz.main:app"
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))

# Allow slow CSV downloads from the source URL
timeout = 120
graceful_timeout = 30
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
