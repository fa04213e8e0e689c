"""
Event System - synchronous observer signals.

Provides:
- Signal: connect/disconnect/emit notifications, delivered inline on the
  emitting thread.

Usage:
    from simplebind.core.events import Signal

    changed = Signal("changed")
    changed.connect(on_changed)
    changed.emit("value")
"""
from .observer import Signal


__all__ = ["Signal"]
