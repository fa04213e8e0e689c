"""
Observable Object Capability.

The binding core only needs one thing from the objects it binds: a way to
hear that a named property changed. That capability is the Observable
protocol below. ObservableObject and ObservableProperty are a ready-made
implementation of it, in the spirit of WPF's INotifyPropertyChanged.

Usage:
    class PersonViewModel(ObservableObject):
        name = ObservableProperty(default="", value_type=str)
        age = ObservableProperty(default=0, value_type=int)

    vm = PersonViewModel()
    token = vm.subscribe("name", lambda prop: print(prop, "changed"))
    vm.name = "Alice"       # prints "name changed"
    vm.unsubscribe(token)
"""
from typing import Any, Callable, Generic, Optional, Protocol, TypeVar, runtime_checkable

from simplebind.core.events import Signal

T = TypeVar('T')

ChangeCallback = Callable[[str], None]


@runtime_checkable
class Observable(Protocol):
    """
    Protocol for objects that announce property changes by name.

    Any object with these two methods can sit on the readable side of a
    binding, no inheritance required.
    """

    def subscribe(self, property_name: str, callback: ChangeCallback) -> Any:
        """Call callback(property_name) whenever that property changes. Returns a token."""
        ...

    def unsubscribe(self, token: Any) -> None:
        """Stop the notifications identified by token."""
        ...


class Subscription:
    """Token returned by ObservableObject.subscribe()."""
    __slots__ = ("property_name", "callback", "handler")

    def __init__(self, property_name: str, callback: ChangeCallback, handler: Callable):
        self.property_name = property_name
        self.callback = callback
        self.handler = handler

    def __repr__(self):
        return f"Subscription({self.property_name!r})"


class ObservableProperty(Generic[T]):
    """
    Descriptor that announces a change whenever its value changes.

    Args:
        default: Default value for the property.
        value_type: Optional declared type, checked when two sides are bound.
        coerce: Optional callable to coerce/validate the value before setting.

    Example:
        class UserViewModel(ObservableObject):
            name = ObservableProperty(default="")
            age = ObservableProperty(default=0, coerce=lambda x: max(0, int(x)))
    """

    def __init__(
        self,
        default: T = None,
        value_type: Optional[type] = None,
        coerce: Optional[Callable[[Any], T]] = None
    ):
        self.default = default
        self.value_type = value_type
        self.coerce = coerce
        self._attr_name: str = ""
        self._public_name: str = ""

    @property
    def name(self) -> str:
        return self._public_name

    def __set_name__(self, owner: type, name: str) -> None:
        """Called when the descriptor is assigned to a class attribute."""
        self._public_name = name
        self._attr_name = f"_observable_{name}"

    def __get__(self, obj: Any, objtype: type = None) -> T:
        if obj is None:
            return self  # type: ignore
        return getattr(obj, self._attr_name, self.default)

    def __set__(self, obj: Any, value: Any) -> None:
        """Set the property value and announce it if different."""
        if self.coerce is not None:
            value = self.coerce(value)

        old_value = getattr(obj, self._attr_name, self.default)

        if old_value != value:
            setattr(obj, self._attr_name, value)

            notify = getattr(obj, 'notify_property_changed', None)
            if callable(notify):
                notify(self._public_name, value)


class ObservableObject:
    """
    Base class implementing the Observable protocol.

    Provides:
    - A generic `property_changed` signal emitted with (property_name, value).
    - subscribe()/unsubscribe() filtered by property name.
    - Works with `ObservableProperty` descriptors for automatic notification.

    Subscribers run synchronously inside the setter that changed the value,
    and their errors propagate to that setter's caller.
    """

    @property
    def property_changed(self) -> Signal:
        # Created lazily so subclasses need not call super().__init__()
        signal = self.__dict__.get("_property_changed")
        if signal is None:
            signal = Signal(f"{type(self).__name__}.property_changed", strict=True)
            self.__dict__["_property_changed"] = signal
        return signal

    def notify_property_changed(self, property_name: str, value: Any = None) -> None:
        """
        Manually emit a property changed notification.

        Use this for properties not using the ObservableProperty descriptor.
        """
        self.property_changed.emit(property_name, value)

    def subscribe(self, property_name: str, callback: ChangeCallback) -> Subscription:
        def handler(name: str, value: Any) -> None:
            if name == property_name:
                callback(name)

        self.property_changed.connect(handler)
        return Subscription(property_name, callback, handler)

    def unsubscribe(self, token: Subscription) -> None:
        self.property_changed.disconnect(token.handler)
