from .backend import DialogBackend, TkBackend
from .core import Dialog
from .options import ButtonSet, DialogType, Importance, Input, ReturnType

__all__ = [
    "Dialog",
    "DialogBackend",
    "TkBackend",
    "DialogType",
    "ButtonSet",
    "Importance",
    "Input",
    "ReturnType",
]
