# Server Socket
bind = "127.0.0.1:8000"  # Only accessible locally, NGINX will proxy requests

# Worker Settings
# The directory and access log live in process memory, so a single worker
# process keeps every request on the same stores. Threads share them under
# the per-store writer locks.
workers = 1
threads = 4
worker_class = "gthread"

# Security & Performance
timeout = 120
graceful_timeout = 90
keepalive = 5

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"

# Process Name
proc_name = "checkin_gunicorn"
