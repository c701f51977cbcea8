"""
Background task scheduler.
Uses APScheduler to run occupancy reconciliation and the overdue payment
sweep without requiring external services.
"""
import logging
import atexit
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.interval import IntervalTrigger
from django.conf import settings
from django.core.management import call_command
from django.utils import timezone

logger = logging.getLogger(__name__)

# Global scheduler instance
scheduler = None


def reconcile_occupancy_job():
    """Recompute every room and property counter from live tenant rows"""
    try:
        logger.info("Starting scheduled occupancy reconciliation...")
        call_command('reconcile_occupancy', verbosity=0)
        logger.info("Scheduled occupancy reconciliation completed successfully")
    except Exception as e:
        logger.error(f"Error in scheduled occupancy reconciliation: {str(e)}", exc_info=True)


def mark_overdue_payments_job():
    """Flip past-due pending payments to overdue. Runs daily at 00:30."""
    try:
        logger.info("Starting scheduled overdue payment sweep...")
        call_command('mark_overdue_payments', verbosity=0)
        logger.info("Scheduled overdue payment sweep completed successfully")
    except Exception as e:
        logger.error(f"Error in scheduled overdue payment sweep: {str(e)}", exc_info=True)


def start_scheduler():
    """
    Initialize and start the background scheduler.
    This should be called once when Django starts.
    """
    global scheduler

    if scheduler is not None and scheduler.running:
        logger.warning("Scheduler is already running")
        return

    try:
        scheduler = BackgroundScheduler()
        tz = timezone.get_current_timezone()
        interval = getattr(settings, 'OCCUPANCY_RECONCILE_INTERVAL_MINUTES', 30)

        scheduler.add_job(
            reconcile_occupancy_job,
            trigger=IntervalTrigger(minutes=interval, timezone=tz),
            id='reconcile_occupancy',
            name='Reconcile Room/Property Occupancy',
            replace_existing=True,
            max_instances=1,  # Prevent overlapping runs
            coalesce=True
        )

        scheduler.add_job(
            mark_overdue_payments_job,
            trigger=CronTrigger(hour=0, minute=30, timezone=tz),
            id='mark_overdue_payments',
            name='Mark Overdue Payments',
            replace_existing=True,
            max_instances=1,
            coalesce=True
        )

        scheduler.start()
        logger.info("Background scheduler started successfully")
        logger.info(f"Occupancy reconciliation every {interval} minutes; overdue sweep daily at 00:30 ({tz})")

        atexit.register(lambda: stop_scheduler())

    except Exception as e:
        logger.error(f"Failed to start scheduler: {str(e)}", exc_info=True)
        scheduler = None


def stop_scheduler():
    """
    Stop the background scheduler.
    Should be called when Django shuts down.
    """
    global scheduler

    if scheduler is not None and scheduler.running:
        try:
            scheduler.shutdown(wait=True)
            logger.info("Background scheduler stopped")
        except Exception as e:
            logger.error(f"Error stopping scheduler: {str(e)}", exc_info=True)
        finally:
            scheduler = None
