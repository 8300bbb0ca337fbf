# gunicorn.conf.py
import os

bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"
wsgi_app = "qparams.wsgi:application"
workers = int(os.getenv('WEB_CONCURRENCY', '2'))
timeout = 30
keepalive = 5
worker_class = "sync"
preload_app = True
