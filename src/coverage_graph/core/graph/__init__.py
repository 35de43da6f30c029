"""Graph core: storage, transactions, events and the builder extension hooks."""

from .base import GraphBase
from .events import GraphEvent, GraphEventListener, GraphEventManager
from .state import GraphState

__all__ = [
    "GraphBase",
    "GraphEvent",
    "GraphEventListener",
    "GraphEventManager",
    "GraphState",
]
