# gunicorn.conf.py
import multiprocessing, os

wsgi_app = "astrocal.main:create_app()"
bind = f"0.0.0.0:{os.getenv('PORT','5000')}"
# Handlers are pure arithmetic; a few threaded workers cover the load.
workers = int(os.getenv("ASTROCAL_WORKERS", max(2, multiprocessing.cpu_count() // 2)))
threads = int(os.getenv("ASTROCAL_THREADS", 2))
worker_class = "gthread"
timeout = 30
graceful_timeout = 10
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

access_log_format = '%(h)s "%(r)s" %(s)s %(b)s rt:%(L)s req_id:%({X-Request-ID}i)s'
