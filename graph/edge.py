"""
edge.py — Graph Edge
====================
Connects two distinct nodes with a non-negative weight.

Design decisions:
  - `source` and `target` are node-id strings, NOT Node references.
    This keeps edges serialisable and avoids circular references.
  - Undirected: `source` / `target` only record the order the edge was
    created in.  `key` is the unordered pair and is what the Graph
    dedups on.
  - Frozen.  An edge never changes after construction, so Steps can hold
    on to it safely after the run.
  - Validation happens here, at construction time: self-loops and bad
    weights never make it into a Graph.
"""

import math
from dataclasses import dataclass, field
from typing import FrozenSet, Optional, Dict, Any

from graph.errors import InvalidWeight, SelfLoopEdge


@dataclass(frozen=True)
class Edge:
    """
    Attributes:
        source : ID of the first endpoint.
        target : ID of the second endpoint.
        weight : Non-negative cost of traversing the edge (either way).
    """

    source: str
    target: str
    weight: float = 1.0
    key:    FrozenSet[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "source", str(self.source))
        object.__setattr__(self, "target", str(self.target))
        if self.source == self.target:
            raise SelfLoopEdge(f"Edge {self.source}-{self.target} would be a self-loop")

        if isinstance(self.weight, bool):
            raise InvalidWeight(f"Edge weight must be a number, got {self.weight!r}")
        try:
            weight = float(self.weight)
        except (TypeError, ValueError):
            raise InvalidWeight(f"Edge weight must be a number, got {self.weight!r}") from None
        if not math.isfinite(weight) or weight < 0:
            raise InvalidWeight(f"Edge weight must be a finite non-negative number, got {self.weight!r}")

        object.__setattr__(self, "weight", weight)
        object.__setattr__(self, "key", frozenset((self.source, self.target)))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def id(self) -> str:
        return f"{self.source}-{self.target}"

    def connects(self, node_a: str, node_b: str) -> bool:
        """True if this edge links node_a ↔ node_b, in either order."""
        return self.key == {node_a, node_b}

    def other_end(self, node_id: str) -> Optional[str]:
        """Given one endpoint, return the other. None if node_id isn't an endpoint."""
        if node_id == self.source:
            return self.target
        if node_id == self.target:
            return self.source
        return None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":     self.id,
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    def __str__(self) -> str:
        return f"{self.source} ↔ {self.target} (w={self.weight:g})"
