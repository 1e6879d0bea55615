"""Fuzz sessions and their reversible configuration options."""

from .options import BindField, Option, SetZeroValueFallthrough, UnbindField, apply_option
from .registry import BindingRegistry
from .results import Applied, Produced
from .session import Session, new_session

__all__ = [
    "Applied",
    "BindField",
    "BindingRegistry",
    "Option",
    "Produced",
    "Session",
    "SetZeroValueFallthrough",
    "UnbindField",
    "apply_option",
    "new_session",
]
