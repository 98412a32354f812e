"""Gunicorn config for serving the Retail DB API."""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# One worker: the store lives in process memory
worker_class = "uvicorn.workers.UvicornWorker"
workers = 1

timeout = 60
graceful_timeout = 30
keepalive = 65

accesslog = "-"
errorlog = "-"
loglevel = "info"
