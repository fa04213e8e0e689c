"""
Tests for the PySide6 adapter.

Skipped when PySide6 is not installed.
"""
import pytest

pytest.importorskip("PySide6")

from unittest.mock import MagicMock
from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QApplication, QLabel, QLineEdit

from simplebind.core.errors import InvalidBindingDirection, InvalidExpressionShape, MissingNotificationCapability
from simplebind.mvvm import Binding, ObservableProperty, ref
from simplebind.mvvm.observable import Observable
from simplebind.mvvm.qt import QtBindableBase, QtObservable, widget_property


# Ensure QApplication exists for Qt tests
@pytest.fixture(scope="module")
def qapp():
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


class EditorViewModel(QtBindableBase):
    title = ObservableProperty(default="", value_type=str)
    count = ObservableProperty(default=0, value_type=int)



class LegacyViewModel(QObject):
    """View-model with a generic propertyChanged signal and no subscribe/unsubscribe."""
    propertyChanged = Signal(str, object)

    title = ObservableProperty(default="", value_type=str)

    def __init__(self):
        super().__init__()
        self._status = ""

    def notify_property_changed(self, property_name, value=None):
        self.propertyChanged.emit(property_name, value)

    @property
    def status(self):
        return self._status

    @status.setter
    def status(self, value):
        if value != self._status:
            self._status = value
            self.propertyChanged.emit("status", value)


class Gauge(QObject):
    """Read-only Qt-style property: level() and levelChanged, no setLevel."""
    levelChanged = Signal(int)

    def __init__(self):
        super().__init__()
        self._level = 0

    def level(self):
        return self._level

    def raise_level(self, value):
        self._level = value
        self.levelChanged.emit(value)


class Banner(QObject):
    """Write-only Qt-style property: setCaption() only."""

    def __init__(self):
        super().__init__()
        self.captions = []

    def setCaption(self, value):
        self.captions.append(value)


class TestQtBindableBase:

    def test_is_observable(self, qapp):
        assert isinstance(EditorViewModel(), Observable)

    def test_emits_property_changed(self, qapp):
        vm = EditorViewModel()
        callback = MagicMock()
        vm.propertyChanged.connect(callback)

        vm.count = 42

        callback.assert_called_once_with("count", 42)

    def test_subscribe_filters_by_name(self, qapp):
        vm = EditorViewModel()
        callback = MagicMock()
        token = vm.subscribe("title", callback)

        vm.count = 1
        callback.assert_not_called()

        vm.title = "Draft"
        callback.assert_called_once_with("title")

        vm.unsubscribe(token)
        vm.title = "Final"
        assert callback.call_count == 1

    def test_bind_two_view_models(self, qapp):
        first, second = EditorViewModel(), EditorViewModel()
        first.title = "Initial"

        binding = Binding.create(ref(first, "title"), ref(second, "title"))
        assert second.title == "Initial"

        second.title = "Edited"
        assert first.title == "Edited"

        binding.dispose()
        first.title = "After"
        assert second.title == "Edited"


class TestWidgetProperty:

    def test_one_way_to_label(self, qapp):
        vm = EditorViewModel()
        vm.title = "Hello"
        label = QLabel()

        # QLabel has no textChanged; any signal works as the change source
        Binding.create(ref(vm, "title"), widget_property(label, "text", signal="linkActivated"), is_two_way=False)
        assert label.text() == "Hello"

        vm.title = "World"
        assert label.text() == "World"

    def test_two_way_with_line_edit(self, qapp):
        vm = EditorViewModel()
        line_edit = QLineEdit()

        Binding.create(ref(vm, "title"), widget_property(line_edit, "text"))

        # VM -> Widget
        vm.title = "From VM"
        assert line_edit.text() == "From VM"

        # Widget -> VM
        line_edit.setText("From Widget")
        assert vm.title == "From Widget"

    def test_custom_signal_object(self, qapp):
        class Slider(QObject):
            positionChanged = Signal(int)

            def __init__(self):
                super().__init__()
                self._position = 0

            def position(self):
                return self._position

            def setPosition(self, value):
                if value != self._position:
                    self._position = value
                    self.positionChanged.emit(value)

        vm = EditorViewModel()
        slider = Slider()
        binding = Binding.create(widget_property(slider, "position", value_type=int), ref(vm, "count"))

        slider.setPosition(7)
        assert vm.count == 7

        vm.count = 3
        assert slider.position() == 3

        binding.dispose()
        slider.setPosition(9)
        assert vm.count == 3

    def test_neither_getter_nor_setter(self, qapp):
        with pytest.raises(InvalidExpressionShape, match="neither getter"):
            widget_property(QLineEdit(), "caption")

    def test_getter_only_property_drives_one_way_binding(self, qapp):
        gauge = Gauge()
        vm = EditorViewModel()

        accessor_source = widget_property(gauge, "level", value_type=int)
        assert accessor_source.setter is None

        binding = Binding.create(accessor_source, ref(vm, "count"), is_two_way=False)
        assert vm.count == 0

        gauge.raise_level(5)
        assert vm.count == 5

        binding.dispose()

    def test_getter_only_property_cannot_be_two_way(self, qapp):
        with pytest.raises(InvalidBindingDirection, match="left side should be writeable"):
            Binding.create(widget_property(Gauge(), "level"), ref(EditorViewModel(), "count"))

    def test_setter_only_property_receives_one_way_binding(self, qapp):
        vm = EditorViewModel()
        vm.title = "Hello"
        banner = Banner()

        target_side = widget_property(banner, "caption")
        assert target_side.getter is None
        assert target_side.subscribe is None

        Binding.create(ref(vm, "title"), target_side, is_two_way=False)
        vm.title = "World"

        assert banner.captions == ["Hello", "World"]

    def test_setter_only_property_cannot_be_left_side(self, qapp):
        with pytest.raises(InvalidBindingDirection, match="left side should be readable"):
            Binding.create(widget_property(Banner(), "caption"), ref(EditorViewModel(), "title"), is_two_way=False)

    def test_missing_signal(self, qapp):
        with pytest.raises(MissingNotificationCapability, match="no change signal"):
            widget_property(QLineEdit(), "text", signal="captionChanged")

    def test_dotted_name(self, qapp):
        with pytest.raises(InvalidExpressionShape):
            widget_property(QLineEdit(), "text.upper")


class TestQtObservable:

    def test_plain_view_model_is_not_observable(self, qapp):
        with pytest.raises(MissingNotificationCapability):
            Binding.create(ref(LegacyViewModel(), "title"), ref(EditorViewModel(), "title"))

    def test_wrapper_is_observable(self, qapp):
        assert isinstance(QtObservable(LegacyViewModel()), Observable)

    def test_forwards_attributes(self, qapp):
        legacy = LegacyViewModel()
        wrapper = QtObservable(legacy)

        wrapper.title = "Draft"

        assert legacy.title == "Draft"
        assert wrapper.title == "Draft"
        assert wrapper.qobject is legacy

    def test_binds_plain_view_model(self, qapp):
        legacy = LegacyViewModel()
        legacy.title = "Initial"
        vm = EditorViewModel()

        binding = Binding.create(ref(QtObservable(legacy), "title"), ref(vm, "title"))
        assert vm.title == "Initial"

        legacy.title = "From legacy"
        assert vm.title == "From legacy"

        vm.title = "From vm"
        assert legacy.title == "From vm"

        binding.dispose()
        legacy.title = "After"
        assert vm.title == "From vm"

    def test_binds_python_property_of_plain_view_model(self, qapp):
        legacy = LegacyViewModel()
        vm = EditorViewModel()
        Binding.create(ref(QtObservable(legacy), "status"), ref(vm, "title"), is_two_way=False)

        legacy.status = "busy"

        assert vm.title == "busy"

    def test_subscription_filters_by_name(self, qapp):
        wrapper = QtObservable(LegacyViewModel())
        callback = MagicMock()
        token = wrapper.subscribe("status", callback)

        wrapper.title = "ignored"
        callback.assert_not_called()

        wrapper.status = "ready"
        callback.assert_called_once_with("status")

        wrapper.unsubscribe(token)
        wrapper.status = "done"
        assert callback.call_count == 1

    def test_requires_property_changed_signal(self, qapp):
        with pytest.raises(MissingNotificationCapability, match="no propertyChanged signal"):
            QtObservable(QObject())
