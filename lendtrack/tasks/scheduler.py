# lendtrack/tasks/scheduler.py
from __future__ import annotations

import atexit
import os

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger


def start_scheduler(app):
    """
    Hatırlatma job'unu başlatır.
    - SCHEDULER_ENABLED kapalıysa hiçbir şey yapmaz (testlerde kapalı).
    - Debug reloader'da çift çalışmayı engeller.
    - Uygulama kapanırken scheduler'ı kapatır.
    """
    if not app.config.get("SCHEDULER_ENABLED"):
        app.logger.info("[scheduler] Disabled by config.")
        return None

    # Werkzeug reloader varsa WERKZEUG_RUN_MAIN=true olan process gerçek process'tir.
    if app.debug and os.environ.get("WERKZEUG_RUN_MAIN") != "true":
        app.logger.info("[scheduler] Debug reloader secondary process: scheduler skipped.")
        return None

    # circular import olmasın
    from lendtrack.tasks.due_digest import run_due_digest_job

    minutes = int(app.config.get("REMINDER_INTERVAL_MINUTES", 1440))
    scheduler = BackgroundScheduler(timezone="UTC")

    def _job_wrapper():
        try:
            run_due_digest_job(app)
        except Exception as ex:
            app.logger.exception(f"[scheduler] due_digest_job error: {ex}")

    try:
        scheduler.add_job(
            func=_job_wrapper,
            trigger=IntervalTrigger(minutes=minutes),
            id="due_digest_job",
            replace_existing=True,
            max_instances=1,        # aynı job üst üste binmesin
            coalesce=True,          # kaçırılanları tek seferde toparla
            misfire_grace_time=120
        )
        scheduler.start()
    except Exception as e:
        app.logger.warning(f"[scheduler] Scheduler could not be started: {e}")
        return None

    app.logger.info(f"[scheduler] Due digest job started (every {minutes} minutes).")
    app.extensions["apscheduler"] = scheduler

    # process kapanınca scheduler dursun
    atexit.register(lambda: scheduler.shutdown(wait=False))
    return scheduler
