# use in gunicorn as: env/bin/gunicorn esfields.api:app -c gunicorn.conf.py

# Workers
workers = 5
worker_class = 'uvicorn.workers.UvicornWorker'

# Socket
bind = 'localhost:5001'

# Logging
# loglevel = 'debug'
