"""
Application Services

Service classes for handling use cases.
"""

from .dispatcher import ActionDispatcher
from .reporter import OutcomeReporter
from .reconciler import Reconciler

__all__ = [
    "ActionDispatcher",
    "OutcomeReporter",
    "Reconciler",
]
