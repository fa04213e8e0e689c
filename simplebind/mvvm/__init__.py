"""
MVVM Package - property binding.

Provides:
- Observable / ObservableObject / ObservableProperty: change notification.
- PropertyAccessor, ref(), AccessorDescriptor: resolving property references.
- Binding / bind(): one-way and two-way synchronization with explicit teardown.

The PySide6 adapter lives in simplebind.mvvm.qt and is imported on demand.
"""
from simplebind.mvvm.observable import Observable, ObservableObject, ObservableProperty, Subscription
from simplebind.mvvm.accessor import (
    AccessorDescriptor,
    MemberInfo,
    PropertyAccessor,
    PropertyRef,
    ref,
    resolve_member,
)
from simplebind.mvvm.binding import Binding, bind

__all__ = [
    # Observable objects
    "Observable",
    "ObservableObject",
    "ObservableProperty",
    "Subscription",

    # Accessors
    "AccessorDescriptor",
    "MemberInfo",
    "PropertyAccessor",
    "PropertyRef",
    "ref",
    "resolve_member",

    # Binding
    "Binding",
    "bind",
]
