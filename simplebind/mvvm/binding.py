"""
Property Binding.

Keeps two properties synchronized. The left side drives the right side; a
two-way binding also lets the right side drive the left side.

Usage:
    binding = Binding.create(ref(vm, "title"), ref(view, "caption"), is_two_way=False)
    vm.title = "Hello"          # view.caption == "Hello"
    binding.dispose()

    with Binding.create(ref(a, "foo"), ref(b, "bar")):
        ...                      # disposed on exit
"""
from typing import Callable, Generic, Optional, TypeVar

from loguru import logger

from simplebind.core.config import config
from simplebind.core.errors import BindingError, BindingTypeMismatch, InvalidBindingDirection
from simplebind.mvvm.accessor import PropertyAccessor, PropertyReference

T = TypeVar('T')


class Binding(Generic[T]):
    """
    Live synchronization link between two property accessors.

    Propagation is synchronous: when a side announces a change, the other
    side has been written by the time the notification returns. There is no
    cycle breaking unless `binding.reentrancy_guard` is enabled in config, so
    a setter that announces a change even when the value is unchanged
    recurses through a two-way binding.
    """

    def __init__(self, left: PropertyAccessor[T], right: PropertyAccessor[T], reentrancy_guard: bool = False):
        self.left = left
        self.right = right
        self._reentrancy_guard = reentrancy_guard
        self._propagating = False
        self._disposed = False
        self._left_changed_handler: Optional[Callable[[], None]] = None
        self._right_changed_handler: Optional[Callable[[], None]] = None

    @classmethod
    def create(
        cls,
        left: PropertyReference,
        right: PropertyReference,
        is_two_way: bool = True,
        value_type: Optional[type] = None,
    ) -> "Binding[T]":
        """
        Bind `right` to `left`, and `left` to `right` when is_two_way.

        The left value is pushed to the right side once before returning.
        No right-to-left push happens at creation.

        Raises:
            InvalidExpressionShape: a reference is not a direct property access.
            MissingNotificationCapability: a readable side cannot announce changes.
            InvalidBindingDirection: readability/writability does not allow the binding.
            BindingTypeMismatch: the declared value types differ.
        """
        settings = config.data.binding

        left_accessor = PropertyAccessor.create(left, strict=settings.strict_signals)
        try:
            right_accessor = PropertyAccessor.create(right, strict=settings.strict_signals)
        except Exception:
            left_accessor.dispose()
            raise

        binding = cls(left_accessor, right_accessor, reentrancy_guard=settings.reentrancy_guard)
        try:
            binding._wire(is_two_way, value_type)
        except BindingError as e:
            logger.debug(f"Cannot bind {left_accessor.name} to {right_accessor.name}: {e}")
            binding.dispose()
            raise
        except Exception:
            binding.dispose()
            raise

        logger.debug(f"Created {binding!r}")
        return binding

    def _wire(self, is_two_way: bool, value_type: Optional[type]) -> None:
        left, right = self.left, self.right

        if not (left.can_get and right.can_set):
            raise InvalidBindingDirection(
                "For both one-way and two-way binding, the left side should be readable "
                "and right side should be writeable."
            )

        if is_two_way and not (right.can_get and left.can_set):
            raise InvalidBindingDirection(
                "For two-way binding, the right side should be readable and left side should be writeable."
            )

        self._check_types(value_type)

        self._left_changed_handler = lambda: self._propagate(left, right)
        left.changed.connect(self._left_changed_handler)
        self._left_changed_handler()

        if is_two_way:
            self._right_changed_handler = lambda: self._propagate(right, left)
            right.changed.connect(self._right_changed_handler)

    def _check_types(self, value_type: Optional[type]) -> None:
        for side, accessor in (("left", self.left), ("right", self.right)):
            declared = accessor.value_type
            if value_type is not None and declared is not None and declared is not value_type:
                raise BindingTypeMismatch(
                    f"The {side} side \"{accessor.name}\" declares {declared.__name__}, "
                    f"expected {value_type.__name__}"
                )

        left_type, right_type = self.left.value_type, self.right.value_type
        if left_type is not None and right_type is not None and left_type is not right_type:
            raise BindingTypeMismatch(
                f"Cannot bind \"{self.left.name}\" ({left_type.__name__}) "
                f"to \"{self.right.name}\" ({right_type.__name__})"
            )

    def _propagate(self, changing_side: PropertyAccessor[T], propagating_side: PropertyAccessor[T]) -> None:
        if not self._reentrancy_guard:
            propagating_side.set(changing_side.get())
            return

        if self._propagating:
            return
        self._propagating = True
        try:
            propagating_side.set(changing_side.get())
        finally:
            self._propagating = False

    @property
    def is_two_way(self) -> bool:
        return self._right_changed_handler is not None

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Stop synchronization and release both accessors."""
        if self._left_changed_handler is not None:
            self.left.changed.disconnect(self._left_changed_handler)
        self.left.dispose()

        if self._right_changed_handler is not None:
            self.right.changed.disconnect(self._right_changed_handler)
        self.right.dispose()

        if not self._disposed:
            self._disposed = True
            logger.debug(f"Disposed {self!r}")

    def __enter__(self) -> "Binding[T]":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def __repr__(self):
        arrow = "<->" if self.is_two_way else "->"
        return f"Binding({self.left.name} {arrow} {self.right.name})"


def bind(
    left: PropertyReference,
    right: PropertyReference,
    is_two_way: bool = True,
    value_type: Optional[type] = None,
) -> Binding:
    """Shortcut for Binding.create()."""
    return Binding.create(left, right, is_two_way=is_two_way, value_type=value_type)
