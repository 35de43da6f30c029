"""
Custom exceptions for the coverage graph system.

This module defines the hierarchy of custom exceptions used throughout the package.
The graph core itself reports failures as return values; these exceptions are
raised by the opt-in ``*_safe`` accessors, by builders rejecting invalid
configuration, and by extension hooks that want to abort an insertion or a
heuristic computation.
"""


class ValidationError(Exception):
    """
    Raised when data validation fails.

    Examples:
        * Negative or NaN edge cost
        * Malformed solution sequence
    """

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"


class GraphOperationError(Exception):
    """
    Raised when graph operations fail.

    Extension hooks raise this (or a subclass) to signal that the current
    insertion or search must fail. The graph core catches it and converts it
    into a failure result.

    Examples:
        * Edge generation failure for a new node
        * Node rejected by a builder
    """

    def __str__(self) -> str:
        """Format graph operation error message."""
        return f"Graph Operation Error: {super().__str__()}"


class HeuristicError(GraphOperationError):
    """
    Raised when a heuristic cannot be computed for a goal.

    Examples:
        * Goal node has no domain property
        * Goal node outside the builder's domain
    """


class ConfigurationError(Exception):
    """
    Raised when configuration is invalid.

    Examples:
        * Non-positive cell size
        * Unsupported grid connectivity
        * Negative memory budget
    """


class ResourceNotFoundError(Exception):
    """
    Raised when a requested resource is not found.

    Examples:
        * Node not found
        * Edge not found
    """


class NodeNotFoundError(ResourceNotFoundError):
    """
    Raised when a requested node or node property is not found.

    Examples:
        * Property lookup for an index that was never assigned
        * Property lookup for a rolled back node
    """


class EdgeNotFoundError(ResourceNotFoundError):
    """
    Raised when a requested edge is not found.

    Examples:
        * Cost lookup for a missing edge
        * Edge property lookup after ``clear_edges``
    """
