"""
Property Accessors.

Resolves a property reference into live get/set/notify capabilities.

A reference is either a (target, name) pair, usually built with ref(), or an
explicit AccessorDescriptor carrying its own closures. The target of a pair
is captured once, so an accessor always talks to the same instance.
"""
import inspect
from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Generic, NamedTuple, Optional, Tuple, TypeVar, Union

from loguru import logger

from simplebind.core.errors import BindingError, InvalidExpressionShape, MissingNotificationCapability, NoGetter
from simplebind.core.events import Signal
from simplebind.mvvm.observable import Observable

T = TypeVar('T')

_MISSING = object()


class PropertyRef(NamedTuple):
    """Reference to `target.name`."""
    target: Any
    name: str


def ref(target: Any, name: str) -> PropertyRef:
    """Build a reference to the property `name` of `target`."""
    return PropertyRef(target, name)


@dataclass(frozen=True)
class AccessorDescriptor(Generic[T]):
    """
    Explicit accessor supplied by the caller instead of a (target, name) pair.

    Attributes:
        name: Property name, used in messages.
        getter: Returns the current value. None if the property is write-only.
        setter: Writes a value. None if the property is read-only.
        subscribe: Takes a zero-argument callback to run on every change and
            returns a zero-argument function that cancels the subscription.
            Required when getter is set.
        value_type: Optional declared value type.
    """
    name: str
    getter: Optional[Callable[[], T]] = None
    setter: Optional[Callable[[T], None]] = None
    subscribe: Optional[Callable[[Callable[[], None]], Callable[[], None]]] = None
    value_type: Optional[type] = None


PropertyReference = Union[PropertyRef, Tuple[Any, str], AccessorDescriptor]


@dataclass(frozen=True)
class MemberInfo:
    """Static description of a bindable property found on a type."""
    name: str
    descriptor: Any
    can_get: bool
    can_set: bool
    value_type: Optional[type] = None


def _type_name(owner: type) -> str:
    return f"{owner.__module__}.{owner.__qualname__}"


def resolve_member(target: Any, name: Any) -> MemberInfo:
    """
    Find the property `name` on the runtime type of `target`.

    The lookup is static: no getter runs here. Only data descriptors
    (property, ObservableProperty, anything with __get__ and __set__ or
    __delete__) count as properties.

    Raises:
        InvalidExpressionShape: name is not one identifier, or the member is a
            field, a method, a plain class attribute, or missing.
    """
    if not isinstance(name, str) or not name.isidentifier():
        raise InvalidExpressionShape(
            f"Property name must be a single identifier, got {name!r}"
        )

    owner = type(target)
    member = inspect.getattr_static(owner, name, _MISSING)

    if member is _MISSING:
        instance_dict = getattr(target, "__dict__", None)
        if isinstance(instance_dict, dict) and name in instance_dict:
            raise InvalidExpressionShape(
                f"The accessed member \"{name}\" of {_type_name(owner)} is a field, it must be a property"
            )
        raise InvalidExpressionShape(f"{_type_name(owner)} has no property \"{name}\"")

    if inspect.ismemberdescriptor(member):
        raise InvalidExpressionShape(
            f"The accessed member \"{name}\" of {_type_name(owner)} is a slot field, it must be a property"
        )

    if inspect.isroutine(member) or isinstance(member, (staticmethod, classmethod)):
        raise InvalidExpressionShape(
            f"The accessed member \"{name}\" of {_type_name(owner)} is a method, it must be a property"
        )

    member_type = type(member)
    is_data_descriptor = hasattr(member_type, "__get__") and (
        hasattr(member_type, "__set__") or hasattr(member_type, "__delete__")
    )
    if not is_data_descriptor:
        raise InvalidExpressionShape(
            f"The accessed member \"{name}\" of {_type_name(owner)} must be property"
        )

    if isinstance(member, property):
        value_type = None
        if member.fget is not None:
            declared = getattr(member.fget, "__annotations__", {}).get("return")
            if isinstance(declared, type):
                value_type = declared
        return MemberInfo(name, member, member.fget is not None, member.fset is not None, value_type)

    return MemberInfo(
        name,
        member,
        True,
        hasattr(member_type, "__set__"),
        getattr(member, "value_type", None),
    )


class PropertyAccessor(Generic[T]):
    """
    Get/set/notify capability bundle for one property.

    `changed` fires with no arguments each time the underlying object reports
    that this specific property changed.
    """

    def __init__(
        self,
        name: str,
        getter: Optional[Callable[[], T]] = None,
        setter: Optional[Callable[[T], None]] = None,
        subscribe: Optional[Callable[[Callable[[], None]], Callable[[], None]]] = None,
        target: Any = None,
        value_type: Optional[type] = None,
        strict: bool = True,
    ):
        self.name = name
        self.target = target
        self.value_type = value_type
        self.changed = Signal(f"{name}.changed", strict=strict)
        self._getter = getter
        self._setter = setter
        self._unsubscribe: Optional[Callable[[], None]] = None

        if getter is not None:
            if subscribe is None:
                raise MissingNotificationCapability(
                    f"Readable property \"{name}\" must provide a change subscription"
                )
            self._unsubscribe = subscribe(self._on_changed)

    @classmethod
    def create(cls, reference: PropertyReference, strict: bool = True) -> "PropertyAccessor":
        """
        Resolve a property reference.

        A target that carries a `__wrapped__` object (see simplebind.mvvm.qt.QtObservable)
        provides the notifications while the property itself is looked up on
        the wrapped object.

        Raises:
            InvalidExpressionShape: reference is not a direct property access.
            MissingNotificationCapability: readable property on an object that
                does not implement Observable.
        """
        try:
            return cls._from_reference(reference, strict)
        except BindingError as e:
            logger.debug(f"Cannot resolve {reference!r}: {e}")
            raise

    @classmethod
    def _from_reference(cls, reference: PropertyReference, strict: bool) -> "PropertyAccessor":
        if isinstance(reference, AccessorDescriptor):
            return cls(
                reference.name,
                getter=reference.getter,
                setter=reference.setter,
                subscribe=reference.subscribe,
                value_type=reference.value_type,
                strict=strict,
            )

        if not isinstance(reference, tuple) or len(reference) != 2:
            raise InvalidExpressionShape(
                "Provided reference must be a (target, property name) pair or an AccessorDescriptor, "
                f"got {reference!r}"
            )

        target, name = reference
        subject = _wrapped(target)
        info = resolve_member(subject, name)
        owner = type(subject)

        getter = None
        setter = None
        subscribe = None

        if info.can_get:
            if not isinstance(target, Observable):
                raise MissingNotificationCapability(
                    f"Type \"{_type_name(type(target))}\" must implement Observable "
                    f"so that its property changes can be notified"
                )
            getter = partial(info.descriptor.__get__, subject, owner)
            subscribe = partial(_subscribe_by_name, target, name)

        if info.can_set:
            setter = partial(info.descriptor.__set__, subject)

        logger.debug(
            f"Resolved {owner.__name__}.{name} (get={info.can_get}, set={info.can_set})"
        )
        return cls(
            name,
            getter=getter,
            setter=setter,
            subscribe=subscribe,
            target=target,
            value_type=info.value_type,
            strict=strict,
        )

    @property
    def can_get(self) -> bool:
        return self._getter is not None

    @property
    def can_set(self) -> bool:
        return self._setter is not None

    @property
    def is_subscribed(self) -> bool:
        return self._unsubscribe is not None

    def get(self) -> T:
        if self._getter is None:
            raise NoGetter(f"Property \"{self.name}\" does not have a getter")
        return self._getter()

    def set(self, value: T) -> None:
        # No setter is legitimate on the source side of a one-way binding
        if self._setter is not None:
            self._setter(value)

    value = property(get, set)

    def _on_changed(self, *args) -> None:
        self.changed.emit()

    def dispose(self) -> None:
        """Stop listening to the target. Safe to call more than once."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def __repr__(self):
        return f"PropertyAccessor({self.name!r}, get={self.can_get}, set={self.can_set})"


def _subscribe_by_name(target: Observable, name: str, callback: Callable[[], None]) -> Callable[[], None]:
    def on_property_changed(property_name: str) -> None:
        if property_name == name:
            callback()

    token = target.subscribe(name, on_property_changed)
    return partial(target.unsubscribe, token)


def _wrapped(target: Any) -> Any:
    instance_dict = getattr(target, "__dict__", None)
    if isinstance(instance_dict, dict) and "__wrapped__" in instance_dict:
        return instance_dict["__wrapped__"]
    return target
