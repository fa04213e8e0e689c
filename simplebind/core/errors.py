"""
Binding Error Taxonomy.

All errors are raised synchronously at the point of violation and are not
retryable. Each one also derives from the closest builtin exception so
callers that already catch ValueError/TypeError/AttributeError keep working.
"""


class BindingError(Exception):
    """Base class for every error raised by simplebind."""
    pass


class InvalidExpressionShape(BindingError, ValueError):
    """Property reference is not a single, direct property access."""
    pass


class MissingNotificationCapability(BindingError, TypeError):
    """Readable property lives on an object that cannot announce changes."""
    pass


class InvalidBindingDirection(BindingError, ValueError):
    """Readability/writability of the two sides does not allow the binding."""
    pass


class NoGetter(BindingError, AttributeError):
    """Attempted to read a property that has no get accessor."""
    pass


class BindingTypeMismatch(BindingError, TypeError):
    """Declared value types of the two sides do not match."""
    pass
