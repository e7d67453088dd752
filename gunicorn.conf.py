# gunicorn.conf.py
# Serve with: gunicorn -c gunicorn.conf.py
import multiprocessing, os

wsgi_app = "dashagrid.main:app"
bind = f"0.0.0.0:{os.getenv('PORT', '5000')}"

# Timeline generation holds the GIL, so scale with processes, not threads.
workers = int(os.getenv("WEB_CONCURRENCY", max(2, multiprocessing.cpu_count())))
threads = 1
worker_class = "sync"

# A 150-year pratyantardasha request is the slowest call; it finishes well under a second.
timeout = int(os.getenv("GUNICORN_TIMEOUT", "30"))
graceful_timeout = 15
keepalive = 2

accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOGLEVEL", "info")

# remote addr, request line, status, bytes, request id, latency
access_log_format = '%(h)s "%(r)s" %(s)s %(b)s req_id:%({X-Request-ID}i)s rt:%(L)s'
