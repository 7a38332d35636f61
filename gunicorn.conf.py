"""
Gunicorn settings for the API key manager
"""
import os
import multiprocessing

bind = f"0.0.0.0:{os.environ.get('PORT', '5000')}"

# Requests are short SQLite round trips; sync workers are enough
workers = int(os.environ.get('GUNICORN_WORKERS', multiprocessing.cpu_count() * 2 + 1))
worker_class = 'sync'
timeout = int(os.environ.get('GUNICORN_TIMEOUT', '30'))
max_requests = 1000
max_requests_jitter = 50

accesslog = '-'
errorlog = '-'
loglevel = os.environ.get('LOG_LEVEL', 'info').lower()
# Never log request headers; X-API-Key and Authorization carry plaintext keys
access_log_format = '%(h)s %(t)s "%(r)s" %(s)s %(b)s %(L)s'

proc_name = "apikey-manager"

# X-User-Id is trusted only from the gateway in front of this service
forwarded_allow_ips = os.environ.get('FORWARDED_ALLOW_IPS', '127.0.0.1')

limit_request_line = 4094
limit_request_fields = 50
limit_request_field_size = 4096


def when_ready(server):
    server.log.info(f"API key manager listening on {bind} with {workers} workers")
