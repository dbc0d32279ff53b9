# ==============================================
# SCHEDULING (deferred one-shot tasks)
# ==============================================
#
# Modules:
# --------
# - scheduler.py  → schedule(), ScheduledTask
#
# ==============================================

from .scheduler import ScheduledTask, schedule

__all__ = ["ScheduledTask", "schedule"]
