"""
algorithms/
-----------
The Dijkstra step generator and the Step snapshot it yields.

    from algorithms import dijkstra, Step, PSEUDOCODE

`dijkstra(graph)` is a generator: pulling from it drives the algorithm
forward one decision at a time.  The engine layer drains it into a step
log; nothing else should call it directly.
"""

from algorithms.step     import Step
from algorithms.dijkstra import dijkstra, reconstruct_path, PSEUDOCODE

LABEL            = "Dijkstra's Algorithm"
COMPLEXITY_TIME  = "O((V + E) log V)"
COMPLEXITY_SPACE = "O(V)"

__all__ = [
    "Step",
    "dijkstra",
    "reconstruct_path",
    "PSEUDOCODE",
    "LABEL",
    "COMPLEXITY_TIME",
    "COMPLEXITY_SPACE",
]
