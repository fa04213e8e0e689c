"""
simplebind core - shared infrastructure.

Provides:
- Signal: synchronous observer notifications
- ConfigManager / config: pydantic-validated settings
- setup_logging: loguru console/file sinks
- The binding error taxonomy
"""
from .errors import (
    BindingError,
    InvalidExpressionShape,
    MissingNotificationCapability,
    InvalidBindingDirection,
    NoGetter,
    BindingTypeMismatch,
)
from .events import Signal
from .config import ConfigManager, SimpleBindConfig, BindingSettings, LoggingSettings, config
from .logging import setup_logging
