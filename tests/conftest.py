import os

import pytest

# Headless Qt for the PySide6 adapter tests
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from simplebind.core.config import config
from simplebind.mvvm import ObservableObject, ObservableProperty


class SourceViewModel(ObservableObject):
    """Observable object with a string property `foo`."""
    foo = ObservableProperty(default="", value_type=str)


class TargetViewModel(ObservableObject):
    """Observable object with a string property `bar`."""
    bar = ObservableProperty(default="", value_type=str)


@pytest.fixture(autouse=True)
def reset_config():
    """Every test starts and ends with default settings."""
    config.reset()
    yield
    config.reset()


@pytest.fixture
def source():
    return SourceViewModel()


@pytest.fixture
def target():
    return TargetViewModel()
