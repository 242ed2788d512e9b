from ...utils.signal import ObservableProperty, Signal
from .base import BaseViewModel

__all__ = [
    "BaseViewModel",
    "ObservableProperty",
    "Signal",
]
