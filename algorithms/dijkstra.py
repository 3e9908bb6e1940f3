"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra using a min-heap (heapq).

Yields a Step at:
  1. Initialise distances                    →  "starting from <start>"
  2. Pop the closest unvisited node          →  "visiting <node>"
  3. Each relaxation that improves a node    →  "improved distance to <nbr> …"
  4. Each relaxation that does not           →  "no improvement for <nbr> …"
  5. Heap empty                              →  "shortest distance to …" / "no path found"

The run explores the WHOLE reachable component; it does not stop early
when the target is popped, so the snapshot in the last Step holds the
final distance of every reachable node.

Node state (distance / visited / predecessor on each Node) is written as
a side effect, exactly once per run, by this generator alone.

Frontier ordering: heap entries are (distance, sequence, node_id).  The
sequence number only ever increases, so nodes with equal distance come
out in the order they were pushed (FIFO).

Stale entries: a node can be pushed again each time its distance
improves.  Older entries stay in the heap and are discarded when popped
because the node is already visited by then.

Correctness note: Dijkstra requires non-negative weights.  Edge refuses
negative weights at construction, so the graph can never hold one.
"""

import heapq
import itertools
from typing import Generator, List, Optional, Set, Tuple

from graph import Edge, Graph, MissingEndpoints
from algorithms.step import Step


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, source, target):",           # 0
    "    for v in V: dist[v] ← ∞; prev[v] ← None",    # 1
    "    dist[source] ← 0",                           # 2
    "    pq ← [(0, source)]",                         # 3
    "    while pq is not empty:",                     # 4
    "        node ← pq.pop_min()",                    # 5
    "        if node is visited: continue",           # 6
    "        mark node visited",                      # 7
    "        for (neighbour, w) in adj(node):",       # 8
    "            if neighbour is visited: continue",  # 9
    "            new_dist ← dist[node] + w",          # 10
    "            if new_dist < dist[neighbour]:",     # 11
    "                dist[neighbour] ← new_dist",     # 12
    "                prev[neighbour] ← node",         # 13
    "                pq.push((new_dist, neighbour))", # 14
    "    return dist[target], prev",                  # 15
]

LINE_INIT      = 2
LINE_VISIT     = 7
LINE_NO_UPDATE = 11
LINE_UPDATE    = 14
LINE_DONE      = 15


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(graph: Graph) -> Generator[Step, None, None]:
    """
    Validate `graph` and return the step generator for one run.

    Validation is eager (MissingEndpoints is raised by this call, not by
    the first next()), and happens before any node state is touched.
    """
    if graph.start_node is None or graph.target_node is None:
        raise MissingEndpoints("Set both start and target nodes before running.")
    return _run(graph)


def _run(graph: Graph) -> Generator[Step, None, None]:
    start  = graph.start_node
    target = graph.target_node
    nodes  = graph.nodes

    step_no = itertools.count()
    visited: List[str] = []

    def snapshot(description: str, line: int, node: Optional[str] = None,
                 edge: Optional[Edge] = None, updated: Optional[str] = None,
                 is_final: bool = False) -> Step:
        return Step(
            step_number=next(step_no),
            description=description,
            highlighted_node=node,
            highlighted_edge=edge,
            updated_node=updated,
            distances={nid: n.distance for nid, n in nodes.items()},
            visited=visited,
            pseudocode_line=line,
            is_final=is_final,
        )

    # --- initialise ---
    graph.reset_node_states()
    start.distance = 0.0

    yield snapshot(f"starting from {start.label}", LINE_INIT, node=start.id)

    seq = itertools.count()
    frontier: List[Tuple[float, int, str]] = [(0.0, next(seq), start.id)]

    # --- main loop ---
    while frontier:
        _, _, nid = heapq.heappop(frontier)
        node = nodes[nid]
        if node.visited:
            continue                      # stale entry

        node.visited = True
        visited.append(nid)
        yield snapshot(f"visiting {node.label}", LINE_VISIT, node=nid)

        # -- relax neighbours --
        for edge in graph.edges_for(nid):
            nbr = nodes[edge.other_end(nid)]
            if nbr.visited:
                continue

            new_dist = node.distance + edge.weight
            if new_dist < nbr.distance:
                nbr.distance    = new_dist
                nbr.predecessor = nid
                heapq.heappush(frontier, (new_dist, next(seq), nbr.id))
                yield snapshot(
                    f"improved distance to {nbr.label} through {node.label} "
                    f"(new distance: {new_dist:.2f})",
                    LINE_UPDATE, edge=edge, updated=nbr.id,
                )
            else:
                yield snapshot(
                    f"no improvement for {nbr.label} through {node.label} "
                    f"({new_dist:.2f} ≥ {nbr.distance:.2f})",
                    LINE_NO_UPDATE, edge=edge,
                )

    # --- finished ---
    if target.reached:
        description = f"shortest distance to {target.label}: {target.distance:.2f}"
    else:
        description = "no path found"
    yield snapshot(description, LINE_DONE, node=target.id, is_final=True)


# ---------------------------------------------------------------------------
def reconstruct_path(graph: Graph) -> List[Edge]:
    """
    Walk predecessor links back from the target, collecting the edge of
    every hop, and return them in start → target order.  Empty when the
    target has no predecessor (unreachable, or the target is the start).
    """
    target = graph.target_node
    if target is None:
        return []

    path: List[Edge] = []
    seen: Set[str] = set()
    cur = target
    while cur.predecessor is not None and cur.id not in seen:
        seen.add(cur.id)
        edge = graph.edge_between(cur.predecessor, cur.id)
        if edge is not None:
            path.append(edge)
        cur = graph.nodes[cur.predecessor]
    path.reverse()
    return path
