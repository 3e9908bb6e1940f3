"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Node, Edge
    from graph import GraphError, DuplicateEdge, SelfLoopEdge, …
"""

from graph.errors import (
    GraphError,
    InvalidNodeReference,
    DuplicateEdge,
    SelfLoopEdge,
    MissingEndpoints,
    InvalidWeight,
    MalformedAdjacencyList,
)
from graph.node  import Node, INF
from graph.edge  import Edge
from graph.graph import Graph, DEMO_EDGES

__all__ = [
    "Node",      "INF",
    "Edge",
    "Graph",     "DEMO_EDGES",
    "GraphError",
    "InvalidNodeReference",
    "DuplicateEdge",
    "SelfLoopEdge",
    "MissingEndpoints",
    "InvalidWeight",
    "MalformedAdjacencyList",
]
