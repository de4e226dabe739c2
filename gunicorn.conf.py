# gunicorn -c gunicorn.conf.py app.main:app
import os

bind = f"0.0.0.0:{os.getenv('PORT', 8000)}"
workers = int(os.getenv('WEB_CONCURRENCY', 2))
worker_class = "uvicorn.workers.UvicornWorker"
# 20MB document uploads are forwarded to Cloudinary inside the request
timeout = int(os.getenv('GUNICORN_TIMEOUT', 120))
graceful_timeout = 30
keepalive = 5
accesslog = "-"
errorlog = "-"
loglevel = os.getenv('LOG_LEVEL', 'info').lower()
