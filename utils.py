import os
import logging
from datetime import datetime
from functools import wraps

logger = logging.getLogger(__name__)


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "y", "on")


def log_processing_time(func):
    """Decorator to log function processing time"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = datetime.now()

        try:
            result = func(*args, **kwargs)
            processing_time = (datetime.now() - start_time).total_seconds()

            logger.info(f"{func.__name__} completed in {processing_time:.2f} seconds")
            return result

        except Exception as e:
            processing_time = (datetime.now() - start_time).total_seconds()

            logger.error(f"{func.__name__} failed after {processing_time:.2f} seconds: {e}")
            raise

    return wrapper


class ConfigHelper:
    """Helper class for configuration management"""

    @staticmethod
    def get_database_config():
        """Get database configuration from environment"""
        return {
            'url': os.getenv('DATABASE_URL', 'sqlite:///recruitment.db'),
            'pool_recycle': int(os.getenv('DATABASE_POOL_RECYCLE', '300'))
        }

    @staticmethod
    def get_app_config():
        return {
            'secret_key': os.getenv('SESSION_SECRET', 'dev-secret-key-change-in-production'),
            'allowed_origins': os.getenv('ALLOWED_ORIGINS', '*'),
            'log_level': os.getenv('LOG_LEVEL', 'INFO').upper()
        }

    @staticmethod
    def get_dedupe_config():
        """Get deduplication job configuration from environment"""
        return {
            'scheduler_enabled': env_bool('DEDUPE_SCHEDULER_ENABLED', False),
            'schedule_time': os.getenv('DEDUPE_SCHEDULE_TIME', '02:00'),
            'name_duplicate_sample': int(os.getenv('NAME_DUPLICATE_SAMPLE', '10'))
        }
