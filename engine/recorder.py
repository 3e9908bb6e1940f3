"""
recorder.py — Dijkstra Run Recorder
====================================
Runs Dijkstra once over a Graph, records every Step into an immutable
step log, and computes the analytics the UI shows next to it.

Usage:
    rec = Recorder(Graph.demo())
    rec.set_start_and_target("0", "9")
    steps = rec.run()                # the full step log, cursor at -1
    rec.stepper.advance()            # walk it …
    rec.final_path()                 # [Edge, …] start → target
    rec.metrics                      # the analytics card
    rec.export()                     # JSON-ready snapshot (served at /api/export)

Rules:
  - run() is all-or-nothing.  Preconditions are checked before anything
    is cleared or mutated; a failed run() leaves the previous log, cursor
    and node state exactly as they were.
  - Every run() starts from a clean slate: the old log is discarded and
    the cursor is reloaded at -1.  Callers never have to reset first.
  - Node state is written only while run() executes.  Between runs,
    readers (the renderer) must not touch it; they read distances from
    the Step snapshots instead.
"""

import logging
import math
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from graph import Edge, Graph
from graph.graph import NodeRef
from algorithms import dijkstra, reconstruct_path, LABEL
from algorithms.step import Step
from engine.stepper import Stepper


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass: what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_label:      str   = LABEL
    source:          str   = ""
    target:          str   = ""
    nodes_visited:   int   = 0
    edges_examined:  int   = 0          # every relaxation attempt
    edges_relaxed:   int   = 0          # attempts that improved a distance
    path_length:     int   = 0          # number of edges on the final path
    path_cost:       float = 0.0        # total weight of the final path
    total_steps:     int   = 0          # number of Steps recorded
    wall_time_ms:    float = 0.0        # wall-clock time to run to completion
    path_found:      bool  = False


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        graph       : The Graph being run over.
        steps       : Full step log of the latest run (empty tuple before any run).
        metrics     : RunMetrics of the latest run (None before any run).
        stepper     : Playback cursor over `steps`.
    """

    def __init__(self, graph: Optional[Graph] = None, stepper: Optional[Stepper] = None):
        self.graph:   Graph                = graph if graph is not None else Graph.demo()
        self.steps:   Tuple[Step, ...]     = ()
        self.metrics: Optional[RunMetrics] = None
        self.stepper: Stepper              = stepper or Stepper()

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def set_start_and_target(self, start: NodeRef, target: NodeRef) -> None:
        """Pick new endpoints.  On success the previous run is discarded."""
        self.graph.set_start_and_target(start, target)
        self.clear()

    def run(self) -> Tuple[Step, ...]:
        """Run the algorithm to completion and return the full step log."""
        generator = dijkstra(self.graph)          # raises before any mutation

        started = time.monotonic()
        self.clear()
        self.steps = tuple(generator)
        wall_ms = (time.monotonic() - started) * 1000

        self.stepper.load(self.steps)
        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "dijkstra %s → %s: %d steps, %d nodes visited, %s",
            self.metrics.source, self.metrics.target, self.metrics.total_steps,
            self.metrics.nodes_visited, self.steps[-1].description,
        )
        return self.steps

    def run_to_completion(self) -> RunMetrics:
        """Instant mode: run, then park the cursor on the final step."""
        self.run()
        self.stepper.jump_to_end()
        return self.metrics

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------
    def final_path(self) -> List[Edge]:
        """Edges of the shortest path, start → target.  Empty if unreachable."""
        return reconstruct_path(self.graph)

    def shortest_distance(self) -> float:
        """Distance to the target as recorded by the last step (inf if none)."""
        if not self.steps or self.graph.target_node is None:
            return math.inf
        return self.steps[-1].distance_to(self.graph.target_node.id)

    @property
    def has_run(self) -> bool:
        return bool(self.steps)

    # ------------------------------------------------------------------
    # Reset
    # ------------------------------------------------------------------
    def clear(self) -> None:
        """Drop the step log, cursor, metrics and node state.  Keeps the graph."""
        self.steps   = ()
        self.metrics = None
        self.stepper.reset()
        self.graph.reset_node_states()

    def reset(self, rebuild: bool = False) -> None:
        """
        Clear everything the last run produced.  With `rebuild`, also throw
        the graph away and start over from the demonstration graph.
        """
        self.clear()
        if rebuild:
            self.graph = Graph.demo()
        logger.debug("recorder reset (rebuild=%s): %s", rebuild, self.graph)

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "graph":   self.graph.to_dict(),
            "metrics": asdict(self.metrics) if self.metrics else {},
            "path":    [e.to_dict() for e in self.final_path()] if self.has_run else [],
            "steps":   [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        last = self.steps[-1]
        path = self.final_path()

        examined = sum(1 for s in self.steps if s.highlighted_edge is not None)
        relaxed  = sum(1 for s in self.steps if s.updated_node is not None)

        return RunMetrics(
            source=self.graph.start_node.id,
            target=self.graph.target_node.id,
            nodes_visited=len(last.visited),
            edges_examined=examined,
            edges_relaxed=relaxed,
            path_length=len(path),
            path_cost=sum(e.weight for e in path),
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
            path_found=self.graph.target_node.reached,
        )
