# ==============================================
# EVENTS (notification facet)
# ==============================================
#
# Modules:
# --------
# - emitter.py  → Event enum, payload dataclasses, EventEmitter
#
# ==============================================

from .emitter import ConnectedInfo, DeletionInfo, Event, EventEmitter

__all__ = ["Event", "EventEmitter", "ConnectedInfo", "DeletionInfo"]
