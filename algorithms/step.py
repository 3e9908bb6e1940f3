"""
step.py — Algorithm Step Snapshot
==================================
The Dijkstra generator yields Step objects.  A Step is a frozen-in-time
picture of one decision the algorithm made:

    • What happened, in plain English   (description)
    • Which node is being examined      (highlighted_node)
    • Which edge is being examined      (highlighted_edge)
    • Whose distance just improved      (updated_node)
    • Every node's distance right now   (distances, the snapshot)
    • Which line of pseudocode this is  (pseudocode_line)

Design decisions:
  - Step is a frozen dataclass.  It is a SNAPSHOT: the algorithm generator
    is the only writer; the stepper / renderer are pure readers.
  - `distances` covers EVERY node in the graph (unreached = inf), so a
    renderer can apply any single Step without replaying the ones before
    it.  It is wrapped in a read-only mapping proxy over a private copy.
  - The optional fields are plain Optionals, never sentinel objects.
"""

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from graph import Edge


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        step_number      : 0-based index of this step in the run.
        description      : Human-readable account of what just happened.
        highlighted_node : ID of the node being started from / visited (or None).
        highlighted_edge : Edge being relaxed right now (or None).
        updated_node     : ID of the node whose distance just improved (or None).
        distances        : {node_id: float} for every node, inf if unreached.
        visited          : IDs of finalised nodes, in visit order.
        pseudocode_line  : 0-based index of the pseudocode line executing now.
        is_final         : True on the very last step (path found or not).
    """

    step_number:      int                  = 0
    description:      str                  = ""
    highlighted_node: Optional[str]        = None
    highlighted_edge: Optional[Edge]       = None
    updated_node:     Optional[str]        = None
    distances:        Mapping[str, float]  = field(default_factory=dict)
    visited:          Tuple[str, ...]      = ()
    pseudocode_line:  int                  = 0
    is_final:         bool                 = False

    def __post_init__(self):
        object.__setattr__(self, "distances", MappingProxyType(dict(self.distances)))
        object.__setattr__(self, "visited", tuple(self.visited))

    def distance_to(self, node_id: str) -> float:
        return self.distances.get(node_id, math.inf)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_number":      self.step_number,
            "description":      self.description,
            "highlighted_node": self.highlighted_node,
            "highlighted_edge": self.highlighted_edge.to_dict() if self.highlighted_edge else None,
            "updated_node":     self.updated_node,
            "distances":        {nid: (None if d == math.inf else d) for nid, d in self.distances.items()},
            "visited":          list(self.visited),
            "pseudocode_line":  self.pseudocode_line,
            "is_final":         self.is_final,
        }
