import time
import threading
import logging
import schedule
from batch import run_batch
from store import open_store

logger = logging.getLogger(__name__)


def run_scheduled_cleanup(app):
    """Nightly prospect cleanup. Failures are logged; the next run starts from scratch."""
    try:
        with open_store(app) as store:
            summary = run_batch(store)
        logger.info(f"Scheduled cleanup done: {summary.converted} converted, "
                    f"{summary.phone_matches} phone matches to review, {summary.errors} errors")
        return summary
    except Exception as e:
        logger.error(f"Scheduled cleanup failed: {e}")
        return None


def schedule_tasks(app):
    """Schedule all background tasks"""
    at = app.config['DEDUPE']['schedule_time']
    schedule.every().day.at(at).do(run_scheduled_cleanup, app)
    logger.info(f"Prospect cleanup scheduled daily at {at}")


def run_scheduler():
    """Run the scheduler loop"""
    logger.info("Starting scheduler...")

    while True:
        try:
            schedule.run_pending()
            time.sleep(60)  # Check every minute
        except KeyboardInterrupt:
            logger.info("Scheduler stopped")
            break
        except Exception as e:
            logger.error(f"Scheduler error: {e}")
            time.sleep(300)  # Wait 5 minutes before retrying


def start_background_services(app):
    """Start the scheduler thread if enabled"""
    if not app.config['DEDUPE']['scheduler_enabled']:
        logger.info("Prospect cleanup scheduler disabled")
        return None

    schedule_tasks(app)

    scheduler_thread = threading.Thread(target=run_scheduler, daemon=True)
    scheduler_thread.start()
    logger.info("Scheduler started")
    return scheduler_thread


if __name__ == '__main__':
    from app import create_app

    start_background_services(create_app())

    # Keep main thread alive
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Background services stopped")
