"""
PySide6 integration.

Requires the `qt` extra. Three ways to put Qt objects into a binding:

- QtBindableBase: QObject base class with a generic
  `propertyChanged(str, object)` signal that implements the Observable
  protocol, so ref(view_model, "name") works as with ObservableObject.
  ObservableProperty descriptors on it announce changes through that signal.
- QtObservable: wraps an existing QObject that already has such a
  `propertyChanged` signal but no subscribe/unsubscribe, so
  ref(QtObservable(view_model), "name") binds it without subclassing.
- widget_property(): an AccessorDescriptor over a widget's Qt-style
  getter/setter/signal triple, e.g. QLineEdit text()/setText()/textChanged.
  A missing getter or setter gives a read-only or write-only side.

Qt delivers these notifications through its own signal dispatch. An
exception raised by a setter while propagating from a Qt signal is printed
by PySide6 and does not reach the code that changed the source value, unlike
ObservableObject sources where it propagates.

Usage:
    class EditorViewModel(QtBindableBase):
        title = ObservableProperty(default="")

    vm = EditorViewModel()
    line_edit = QLineEdit()
    bind(ref(vm, "title"), widget_property(line_edit, "text"))
"""
from typing import Any, Callable, Optional

from PySide6.QtCore import QObject, Signal

from simplebind.core.errors import InvalidExpressionShape, MissingNotificationCapability
from simplebind.mvvm.accessor import AccessorDescriptor
from simplebind.mvvm.observable import ChangeCallback


def _subscribe_to(signal: Any, property_name: str, callback: ChangeCallback) -> Callable:
    def handler(name: str, value: Any) -> None:
        if name == property_name:
            callback(name)

    signal.connect(handler)
    return handler


class QtBindableBase(QObject):
    """
    Base class for Qt ViewModels with property change notification.

    Example:
        class MainViewModel(QtBindableBase):
            username = ObservableProperty(default="")
    """

    # Generic signal emitted for any property change: (property_name, new_value)
    propertyChanged = Signal(str, object)

    def notify_property_changed(self, property_name: str, value: Any = None) -> None:
        """
        Manually emit a property changed notification.

        Use this for properties not using ObservableProperty.
        """
        self.propertyChanged.emit(property_name, value)

    def subscribe(self, property_name: str, callback: ChangeCallback) -> Callable:
        return _subscribe_to(self.propertyChanged, property_name, callback)

    def unsubscribe(self, token: Callable) -> None:
        self.propertyChanged.disconnect(token)


class QtObservable:
    """
    Observable view of a QObject exposing `propertyChanged(str, object)`.

    Attribute reads and writes are forwarded to the wrapped object, and
    bindings look its properties up on the wrapped object's type.

    Example:
        class LegacyViewModel(QObject):
            propertyChanged = Signal(str, object)
            ...

        bind(ref(QtObservable(legacy_vm), "title"), ref(other_vm, "title"))
    """

    def __init__(self, qobject: QObject):
        signal = getattr(qobject, "propertyChanged", None)
        if signal is None or not hasattr(signal, "connect"):
            raise MissingNotificationCapability(
                f"{type(qobject).__name__} has no propertyChanged signal"
            )
        object.__setattr__(self, "__wrapped__", qobject)

    @property
    def qobject(self) -> QObject:
        return self.__wrapped__

    def subscribe(self, property_name: str, callback: ChangeCallback) -> Callable:
        return _subscribe_to(self.__wrapped__.propertyChanged, property_name, callback)

    def unsubscribe(self, token: Callable) -> None:
        self.__wrapped__.propertyChanged.disconnect(token)

    def __getattr__(self, name: str) -> Any:
        return getattr(self.__wrapped__, name)

    def __setattr__(self, name: str, value: Any) -> None:
        setattr(self.__wrapped__, name, value)

    def __repr__(self):
        return f"QtObservable({self.__wrapped__!r})"


def widget_property(
    widget: QObject,
    name: str,
    setter: Optional[str] = None,
    signal: Optional[str] = None,
    value_type: Optional[type] = None,
) -> AccessorDescriptor:
    """
    Describe a Qt-style property of a widget.

    Args:
        widget: The QObject/QWidget instance.
        name: Getter method name, e.g. "text".
        setter: Setter method name. Defaults to "set" + Name ("setText").
        signal: Change signal name. Defaults to name + "Changed" ("textChanged").
        value_type: Optional declared value type.

    A missing getter makes the side write-only and a missing setter makes it
    read-only; the binding then checks whether that suits its direction.

    Raises:
        InvalidExpressionShape: neither the getter nor the setter exists.
        MissingNotificationCapability: a getter exists but the change signal does not.
    """
    if not isinstance(name, str) or not name.isidentifier():
        raise InvalidExpressionShape(f"Property name must be a single identifier, got {name!r}")

    setter_name = setter or f"set{name[0].upper()}{name[1:]}"
    signal_name = signal or f"{name}Changed"

    get_method = getattr(widget, name, None)
    set_method = getattr(widget, setter_name, None)
    if not callable(get_method):
        get_method = None
    if not callable(set_method):
        set_method = None

    if get_method is None and set_method is None:
        raise InvalidExpressionShape(
            f"{type(widget).__name__} has neither getter \"{name}\" nor setter \"{setter_name}\""
        )

    subscribe = None
    if get_method is not None:
        change_signal = getattr(widget, signal_name, None)
        if change_signal is None or not hasattr(change_signal, "connect"):
            raise MissingNotificationCapability(
                f"{type(widget).__name__} has no change signal \"{signal_name}\""
            )

        def subscribe(callback: Callable[[], None]) -> Callable[[], None]:
            def handler(*args) -> None:
                callback()

            change_signal.connect(handler)
            return lambda: change_signal.disconnect(handler)

    return AccessorDescriptor(
        name,
        getter=get_method,
        setter=set_method,
        subscribe=subscribe,
        value_type=value_type,
    )
