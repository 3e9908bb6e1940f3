import math
from typing import Optional, Dict, Any


INF = math.inf


# ---------------------------------------------------------------------------
# Node
# ---------------------------------------------------------------------------
class Node:
    """
    Immutable identity (id, label), mutable position and algorithm state.

    Attributes:
        id          : Stable identifier, unique within a graph.
        label       : Human-readable name shown on the canvas (defaults to id).
        x, y        : Canvas coordinates. Never read by the algorithm.
        distance    : Tentative distance from the start node (INF = unreached).
        visited     : True once the node's distance is final for this run.
        predecessor : ID of the node that led to the best known distance.
                      An id, not a Node, so nodes never own each other.
    """

    __slots__ = ("id", "label", "x", "y", "distance", "visited", "predecessor")

    def __init__(
        self,
        node_id: str,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
    ):
        self.id: str                    = str(node_id)
        self.label: str                 = label or self.id
        self.x: float                   = x
        self.y: float                   = y
        self.distance: float            = INF
        self.visited: bool              = False
        self.predecessor: Optional[str] = None

    # ------------------------------------------------------------------
    # State helpers
    # ------------------------------------------------------------------
    def reset(self) -> None:
        """Wipe algorithm state back to defaults.  Called between runs."""
        self.distance    = INF
        self.visited     = False
        self.predecessor = None

    @property
    def reached(self) -> bool:
        return self.distance != INF

    # ------------------------------------------------------------------
    # Serialisation  (for the JSON API)
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "id":          self.id,
            "label":       self.label,
            "x":           self.x,
            "y":           self.y,
            "distance":    self.distance if self.reached else None,
            "visited":     self.visited,
            "predecessor": self.predecessor,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        dist = f"{self.distance:.2f}" if self.reached else "∞"
        return f"Node(id={self.id}, distance={dist}, visited={self.visited})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Node) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
