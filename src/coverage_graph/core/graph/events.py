"""
Graph event system.

This module provides an event system for graph mutations, allowing components
to subscribe to and be notified of changes in the graph state. Builders and
callers use it to observe node insertions, rollbacks and connectivity resets.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from threading import RLock
from typing import Any, Dict, List, Protocol

logger = logging.getLogger(__name__)


class GraphEvent(Enum):
    """Events that can occur in the graph."""

    NODE_ADDED = auto()
    # Edges written by the failed hook were already reported as EDGE_ADDED;
    # their identifiers are listed under "undone_edges" in the details.
    NODE_ROLLED_BACK = auto()
    EDGE_ADDED = auto()
    EDGES_CLEARED = auto()
    GRAPH_CLEARED = auto()


class GraphEventListener(Protocol):
    """Protocol for objects that listen to graph state changes."""

    def on_state_change(self, event: GraphEvent, details: Dict[str, Any]) -> None:
        """
        Called when the graph state changes.

        Args:
            event (GraphEvent): Type of event that occurred
            details (Dict[str, Any]): Additional information about the event
        """
        ...


@dataclass
class GraphEventManager:
    """
    Manages graph event subscriptions and notifications.

    Attributes:
        _listeners (List[GraphEventListener]): Registered event listeners
        _lock (RLock): Lock guarding the listener list
    """

    _listeners: List[GraphEventListener] = field(default_factory=list)
    _lock: RLock = field(default_factory=RLock)

    def add_listener(self, listener: GraphEventListener) -> None:
        """Add a listener for graph events."""
        with self._lock:
            if listener not in self._listeners:
                self._listeners.append(listener)

    def remove_listener(self, listener: GraphEventListener) -> None:
        """Remove a graph event listener."""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def notify(self, event: GraphEvent, details: Dict[str, Any]) -> None:
        """
        Notify all listeners of a graph event.

        A failing listener is logged and does not prevent the remaining
        listeners from being notified.

        Args:
            event (GraphEvent): The type of event that occurred
            details (Dict[str, Any]): Additional information about the event
        """
        with self._lock:
            listeners = self._listeners.copy()

        for listener in listeners:
            try:
                listener.on_state_change(event, details)
            except Exception:
                logger.exception("Error notifying listener %r of %s", listener, event.name)

    def clear_listeners(self) -> None:
        """Remove all event listeners."""
        with self._lock:
            self._listeners.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)
