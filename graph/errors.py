"""
errors.py — Graph & Engine Errors
==================================
Every failure the core can report.  All of them are local validation
failures raised BEFORE anything is mutated, so the caller can show a
message and carry on with corrected input.

    GraphError
      ├── InvalidNodeReference   start / target not in the graph
      ├── DuplicateEdge          pair already connected
      ├── SelfLoopEdge           both endpoints are the same node
      ├── MissingEndpoints       run() without start / target
      ├── InvalidWeight          negative, non-finite or non-numeric weight
      └── MalformedAdjacencyList text import with no usable line
"""


class GraphError(ValueError):
    """Base class so callers (and the web layer) can catch everything at once."""


class InvalidNodeReference(GraphError):
    pass


class DuplicateEdge(GraphError):
    pass


class SelfLoopEdge(GraphError):
    pass


class MissingEndpoints(GraphError):
    pass


class InvalidWeight(GraphError):
    pass


class MalformedAdjacencyList(GraphError):
    pass
