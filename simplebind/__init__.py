"""
simplebind - one-way and two-way property binding.

Usage:
    from simplebind import Binding, ObservableObject, ObservableProperty, ref

    class A(ObservableObject):
        foo = ObservableProperty(default="")

    class B(ObservableObject):
        bar = ObservableProperty(default="")

    a, b = A(), B()
    a.foo = "x"
    binding = Binding.create(ref(a, "foo"), ref(b, "bar"), is_two_way=False)
    assert b.bar == "x"
    binding.dispose()
"""
from simplebind.core.errors import (
    BindingError,
    BindingTypeMismatch,
    InvalidBindingDirection,
    InvalidExpressionShape,
    MissingNotificationCapability,
    NoGetter,
)
from simplebind.core.config import config
from simplebind.core.logging import setup_logging
from simplebind.mvvm import (
    AccessorDescriptor,
    Binding,
    Observable,
    ObservableObject,
    ObservableProperty,
    PropertyAccessor,
    PropertyRef,
    bind,
    ref,
)

__version__ = "0.1.0"

__all__ = [
    "AccessorDescriptor",
    "Binding",
    "BindingError",
    "BindingTypeMismatch",
    "InvalidBindingDirection",
    "InvalidExpressionShape",
    "MissingNotificationCapability",
    "NoGetter",
    "Observable",
    "ObservableObject",
    "ObservableProperty",
    "PropertyAccessor",
    "PropertyRef",
    "bind",
    "config",
    "ref",
    "setup_logging",
]
