"""
graph.py — Graph Container & Builders
======================================
Single source of truth for the graph.  The Dijkstra engine and the
renderer both talk to this object.

Responsibilities:
  1. CRUD on nodes & edges                  (add / get)
  2. Adjacency queries                      (edges_for, edge_between)
  3. Start / target selection               (validated membership)
  4. Builders                               (triples, demo, random, adjacency-list text)
  5. Reset helpers                          (wipe algo state, keep structure)

Design decisions:
  - Nodes stored in a dict keyed by id; dict insertion order IS the
    deterministic iteration order.
  - Edges stored in a dict keyed by the unordered pair (frozenset), which
    makes "one edge per pair" a dict-membership check.
  - A separate adjacency dict `_adj[node_id] → [edge_key, …]` is maintained
    incrementally, in edge insertion order, so incident-edge queries are
    O(degree), not O(E).
  - Every validation runs before the first mutation.
"""

import logging
import math
import random
from typing import (
    Dict, FrozenSet, Iterable, Iterator, List, Optional, Sequence, Set, Tuple, Union
)

from graph.node import Node
from graph.edge import Edge
from graph.errors import DuplicateEdge, InvalidNodeReference, MalformedAdjacencyList


logger = logging.getLogger(__name__)

NodeRef = Union[Node, str]


# ---------------------------------------------------------------------------
# Fixed demonstration dataset: 10 nodes, every pair connected, weights 1–20
# ---------------------------------------------------------------------------
DEMO_EDGES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 12), (0, 2, 7), (0, 3, 3), (0, 4, 15), (0, 5, 9), (0, 6, 17), (0, 7, 6), (0, 8, 11), (0, 9, 4),
    (1, 2, 14), (1, 3, 5), (1, 4, 8), (1, 5, 19), (1, 6, 2), (1, 7, 13), (1, 8, 10), (1, 9, 16),
    (2, 3, 6), (2, 4, 12), (2, 5, 1), (2, 6, 18), (2, 7, 7), (2, 8, 20), (2, 9, 3),
    (3, 4, 11), (3, 5, 14), (3, 6, 8), (3, 7, 2), (3, 8, 15), (3, 9, 5),
    (4, 5, 17), (4, 6, 6), (4, 7, 13), (4, 8, 9), (4, 9, 10),
    (5, 6, 4), (5, 7, 12), (5, 8, 7), (5, 9, 18),
    (6, 7, 1), (6, 8, 16), (6, 9, 3),
    (7, 8, 19), (7, 9, 11),
    (8, 9, 2),
)
DEMO_NODE_COUNT = 10


def _node_id(ref: NodeRef) -> str:
    return ref.id if isinstance(ref, Node) else str(ref)


class Graph:
    """
    Attributes:
        nodes       : {node_id: Node}               (insertion ordered)
        edges       : {frozenset(a, b): Edge}       (insertion ordered)
        start_node  : Node or None
        target_node : Node or None
        _adj        : {node_id: [edge_key, …]}
    """

    def __init__(self):
        self.nodes:       Dict[str, Node]             = {}
        self.edges:       Dict[FrozenSet[str], Edge]  = {}
        self.start_node:  Optional[Node]              = None
        self.target_node: Optional[Node]              = None
        self._adj:        Dict[str, List[FrozenSet[str]]] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        """Insert unless a node with the same id is already present.  Idempotent."""
        existing = self.nodes.get(node.id)
        if existing is not None:
            return existing
        self.nodes[node.id] = node
        self._adj[node.id] = []
        return node

    def create_node(self, node_id: str, x: float = 0.0, y: float = 0.0, label: Optional[str] = None) -> Node:
        """Convenience: create + add in one call."""
        return self.add_node(Node(node_id, x=x, y=y, label=label))

    def get_node(self, node_id: str) -> Optional[Node]:
        return self.nodes.get(node_id)

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        """
        Insert `edge`, adding any missing endpoint as a fresh Node.

        Raises DuplicateEdge if the unordered pair is already connected;
        the graph is left exactly as it was.  (Self-loops never get this
        far: Edge itself refuses them.)
        """
        if edge.key in self.edges:
            existing = self.edges[edge.key]
            raise DuplicateEdge(
                f"Nodes {edge.source} and {edge.target} are already connected "
                f"(weight {existing.weight:g})"
            )

        self.add_node(Node(edge.source))
        self.add_node(Node(edge.target))
        self.edges[edge.key] = edge
        self._adj[edge.source].append(edge.key)
        self._adj[edge.target].append(edge.key)
        return edge

    def create_edge(self, source: NodeRef, target: NodeRef, weight: float = 1.0) -> Edge:
        return self.add_edge(Edge(_node_id(source), _node_id(target), weight))

    def edge_between(self, a: NodeRef, b: NodeRef) -> Optional[Edge]:
        """The edge connecting a and b in either order, or None."""
        return self.edges.get(frozenset((_node_id(a), _node_id(b))))

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def edges_for(self, node: NodeRef) -> Iterator[Edge]:
        """Lazily yield every edge touching `node`, in edge insertion order."""
        for key in self._adj.get(_node_id(node), ()):
            yield self.edges[key]

    def neighbours(self, node: NodeRef) -> List[Tuple[str, Edge]]:
        """Return [(neighbour_id, edge)] for every incident edge."""
        nid = _node_id(node)
        return [(edge.other_end(nid), edge) for edge in self.edges_for(nid)]

    # ==================================================================
    # START / TARGET
    # ==================================================================
    def set_start_and_target(self, start: NodeRef, target: NodeRef) -> None:
        start_id, target_id = _node_id(start), _node_id(target)
        missing = [nid for nid in (start_id, target_id) if nid not in self.nodes]
        if missing:
            raise InvalidNodeReference(
                f"Start and target must be in the graph; unknown: {', '.join(missing)}"
            )
        self.start_node  = self.nodes[start_id]
        self.target_node = self.nodes[target_id]

    # ==================================================================
    # RESET (keep structure, wipe algo state)
    # ==================================================================
    def reset_node_states(self) -> None:
        for node in self.nodes.values():
            node.reset()

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "nodes":  [n.to_dict() for n in self.nodes.values()],
            "edges":  [e.to_dict() for e in self.edges.values()],
            "start":  self.start_node.id if self.start_node else None,
            "target": self.target_node.id if self.target_node else None,
        }

    # ==================================================================
    # LAYOUT
    # ==================================================================
    def layout_circle(self, canvas_w: float = 800, canvas_h: float = 500) -> None:
        """Place nodes evenly on a circle, in insertion order, starting at 12 o'clock."""
        n = len(self.nodes)
        if n == 0:
            return
        cx, cy = canvas_w / 2, canvas_h / 2
        radius = min(canvas_w, canvas_h) * 0.38
        for i, node in enumerate(self.nodes.values()):
            angle = 2 * math.pi * i / n - math.pi / 2
            node.x = round(cx + radius * math.cos(angle), 2)
            node.y = round(cy + radius * math.sin(angle), 2)

    # ==================================================================
    # BUILDERS: Factory class-methods
    # ==================================================================
    @classmethod
    def from_triples(cls, triples: Iterable[Sequence]) -> "Graph":
        """Build from (node, node, weight) triples.  Duplicates raise DuplicateEdge."""
        g = cls()
        for a, b, w in triples:
            g.create_edge(str(a), str(b), weight=w)
        return g

    # ---------- Demo Graph ----------
    @classmethod
    def demo(cls, canvas_w: float = 800, canvas_h: float = 500) -> "Graph":
        """The fixed 10-node / 45-edge demonstration graph, start "0", target "9"."""
        g = cls()
        for i in range(DEMO_NODE_COUNT):
            g.create_node(str(i))
        for a, b, w in DEMO_EDGES:
            g.create_edge(str(a), str(b), weight=w)
        g.layout_circle(canvas_w, canvas_h)
        g.set_start_and_target("0", str(DEMO_NODE_COUNT - 1))
        return g

    # ---------- Random Graph ----------
    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 8,
        edge_probability: float = 0.3,
        weight_range: Tuple[int, int] = (1, 20),
        seed: Optional[int] = None,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Erdős–Rényi style random graph.
        Each possible pair is connected with probability `edge_probability`,
        then a random spanning backbone guarantees connectivity.
        """
        rng = random.Random(seed)
        g = cls()

        ids = [str(i) for i in range(num_nodes)]
        for nid in ids:
            g.create_node(nid)

        for i in range(num_nodes):
            for j in range(i + 1, num_nodes):
                if rng.random() < edge_probability:
                    g.create_edge(ids[i], ids[j], weight=rng.randint(*weight_range))

        # guarantee connectivity: add a spanning-tree backbone
        shuffled = list(ids)
        rng.shuffle(shuffled)
        for k in range(1, len(shuffled)):
            if not g.edge_between(shuffled[k - 1], shuffled[k]):
                g.create_edge(shuffled[k - 1], shuffled[k], weight=rng.randint(*weight_range))

        g.layout_circle(canvas_w, canvas_h)
        if num_nodes >= 2:
            g.set_start_and_target(ids[0], ids[-1])
        logger.debug("generated random graph: %s", g)
        return g

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(
        cls,
        text: str,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            A: B C D            → A connects to B, C, D  (weight 1)
            A: B(3) C(7)        → A–B weight 3, A–C weight 7
            0 -> 1(5), 2(3)     → alternate arrow syntax, comma-separated

        Edges are undirected, so "A: B(3)" and "B: A(3)" describe the same
        edge; the first weight seen for a pair wins.  Nodes are laid out in
        a circle.  Bad weights raise InvalidWeight, "A: A" raises SelfLoopEdge.
        A line without a separator, a token like "B(3" or text with no
        nodes at all raises MalformedAdjacencyList.
        """
        adjacency: Dict[str, List[Tuple[str, str]]] = {}

        for lineno, line in enumerate(text.strip().splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            # split on ':' or '→' or '->'
            for sep in (":", "→", "->"):
                if sep in line:
                    parts = line.split(sep, 1)
                    break
            else:
                raise MalformedAdjacencyList(f"Line {lineno}: expected 'node: neighbours', got {line!r}")

            src = parts[0].strip()
            if not src:
                raise MalformedAdjacencyList(f"Line {lineno}: missing node before {sep!r}")
            adjacency.setdefault(src, [])

            for token in parts[1].replace(",", " ").split():
                # optional weight: "B(3)" or "B"
                if "(" in token and token.endswith(")"):
                    tgt, w_str = token[:-1].split("(", 1)
                elif "(" in token or ")" in token:
                    raise MalformedAdjacencyList(f"Line {lineno}: cannot read neighbour {token!r}")
                else:
                    tgt, w_str = token, "1"
                if not tgt:
                    raise MalformedAdjacencyList(f"Line {lineno}: cannot read neighbour {token!r}")
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, w_str))

        if not adjacency:
            raise MalformedAdjacencyList("Adjacency list has no nodes")

        g = cls()
        for label in adjacency:
            g.create_node(label)

        seen: Set[FrozenSet[str]] = set()
        for src, targets in adjacency.items():
            for tgt, w_str in targets:
                edge = Edge(src, tgt, w_str)
                if edge.key in seen:
                    continue
                seen.add(edge.key)
                g.add_edge(edge)

        g.layout_circle(canvas_w, canvas_h)
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return len(self.edges)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def __contains__(self, node: NodeRef) -> bool:
        return _node_id(node) in self.nodes

    def __repr__(self) -> str:
        return f"Graph(nodes={self.node_count()}, edges={self.edge_count()})"
