"""Celery application configuration."""

import ssl

from celery import Celery

from app.config import settings

# Handle Heroku Redis SSL connection (rediss://)
redis_url = settings.redis_url
broker_use_ssl = None
backend_use_ssl = None

if redis_url.startswith("rediss://"):
    # Heroku Redis uses SSL - configure for self-signed certs
    broker_use_ssl = {
        "ssl_cert_reqs": ssl.CERT_NONE,
    }
    backend_use_ssl = {
        "ssl_cert_reqs": ssl.CERT_NONE,
    }

# Create Celery app
celery_app = Celery(
    "transactions",
    broker=redis_url,
    backend=redis_url,
    include=[
        "app.tasks.reseed",
    ],
)

# Celery configuration
celery_config = {
    "task_serializer": "json",
    "accept_content": ["json"],
    "result_serializer": "json",
    "timezone": "UTC",
    "enable_utc": True,
    "task_track_started": True,
    "task_time_limit": 300,  # 5 minute timeout
    "worker_prefetch_multiplier": 1,
    # Seeding is destructive; never run two at once
    "worker_concurrency": 1,
}

# Add SSL config if using rediss://
if broker_use_ssl:
    celery_config["broker_use_ssl"] = broker_use_ssl
    celery_config["redis_backend_use_ssl"] = backend_use_ssl

celery_app.conf.update(**celery_config)

# Beat schedule - periodic re-seed, off by default
celery_app.conf.beat_schedule = {}
if settings.scheduler_enabled:
    celery_app.conf.beat_schedule = {
        "reseed-transactions": {
            "task": "app.tasks.reseed.seed_transactions",
            "schedule": settings.seed_interval_seconds,
        },
    }
