"""
Tests for the Dijkstra step generator and the Step snapshots it yields.
"""

import math
import random

import pytest

from graph import Graph, MissingEndpoints
from algorithms import PSEUDOCODE, Step, dijkstra, reconstruct_path


# ==================== Helpers ====================

def brute_force_distance(graph, start, target):
    """Cheapest simple path by exhaustive enumeration (small graphs only)."""
    best = math.inf

    def walk(node, cost, seen):
        nonlocal best
        if cost >= best:
            return
        if node == target:
            best = cost
            return
        for nbr, edge in graph.neighbours(node):
            if nbr not in seen:
                walk(nbr, cost + edge.weight, seen | {nbr})

    walk(start, 0.0, {start})
    return best


def random_graph(rng, num_nodes):
    g = Graph()
    for i in range(num_nodes):
        g.create_node(str(i))
    for i in range(num_nodes):
        for j in range(i + 1, num_nodes):
            if rng.random() < 0.4:
                g.create_edge(str(i), str(j), rng.choice([0, 1, 2, 3, 5, 8, 13, 2.5]))
    return g


# ==================== The worked example ====================

def test_chain_step_sequence(chain_graph):
    steps = list(dijkstra(chain_graph))
    assert [s.description for s in steps] == [
        "starting from A",
        "visiting A",
        "improved distance to B through A (new distance: 1.00)",
        "improved distance to C through A (new distance: 5.00)",
        "visiting B",
        "improved distance to C through B (new distance: 3.00)",
        "visiting C",
        "improved distance to D through C (new distance: 4.00)",
        "visiting D",
        "shortest distance to D: 4.00",
    ]
    assert [s.step_number for s in steps] == list(range(10))


def test_chain_first_step(chain_graph):
    first = next(dijkstra(chain_graph))
    assert first.highlighted_node == "A"
    assert first.highlighted_edge is None
    assert first.updated_node is None
    assert dict(first.distances) == {"A": 0.0, "B": math.inf, "C": math.inf, "D": math.inf}


def test_improvement_step_fields(chain_graph):
    steps = list(dijkstra(chain_graph))
    improved_c = steps[5]
    assert improved_c.highlighted_edge is chain_graph.edge_between("B", "C")
    assert improved_c.updated_node == "C"
    assert improved_c.highlighted_node is None
    assert improved_c.distances["C"] == 3.0


def test_chain_final_state(chain_graph):
    steps = list(dijkstra(chain_graph))
    last = steps[-1]
    assert last.is_final
    assert last.highlighted_node == "D"
    assert last.distances["D"] == 4.0
    assert not any(s.is_final for s in steps[:-1])
    assert chain_graph.nodes["D"].predecessor == "C"
    assert [e.id for e in reconstruct_path(chain_graph)] == ["A-B", "B-C", "C-D"]


def test_no_improvement_step_and_tie_order():
    g = Graph.from_triples([("A", "B", 1), ("A", "C", 1), ("B", "C", 5)])
    g.set_start_and_target("A", "C")
    steps = list(dijkstra(g))

    visits = [s.highlighted_node for s in steps if s.description.startswith("visiting")]
    assert visits == ["A", "B", "C"]             # B and C tie at 1: pushed first, popped first

    no_gain = [s for s in steps if s.description.startswith("no improvement")]
    assert len(no_gain) == 1
    assert no_gain[0].highlighted_edge is g.edge_between("B", "C")
    assert no_gain[0].updated_node is None
    assert no_gain[0].distances["C"] == 1.0


# ==================== Edge cases ====================

def test_unreachable_target(isolated_graph):
    steps = list(dijkstra(isolated_graph))
    assert steps[-1].description == "no path found"
    assert steps[-1].distances["E"] == math.inf
    assert reconstruct_path(isolated_graph) == []


def test_start_equals_target(chain_graph):
    chain_graph.set_start_and_target("B", "B")
    steps = list(dijkstra(chain_graph))
    assert steps[-1].description == "shortest distance to B: 0.00"
    assert reconstruct_path(chain_graph) == []


def test_single_node_graph():
    g = Graph()
    g.create_node("solo")
    g.set_start_and_target("solo", "solo")
    steps = list(dijkstra(g))
    assert [s.description for s in steps] == [
        "starting from solo", "visiting solo", "shortest distance to solo: 0.00",
    ]


def test_missing_endpoints_raises_before_mutation():
    g = Graph.from_triples([("A", "B", 1)])
    g.nodes["A"].distance = 42.0
    with pytest.raises(MissingEndpoints):
        dijkstra(g)                               # eager: no next() needed
    assert g.nodes["A"].distance == 42.0


def test_zero_weight_edges():
    g = Graph.from_triples([("A", "B", 0), ("B", "C", 0), ("A", "C", 1)])
    g.set_start_and_target("A", "C")
    steps = list(dijkstra(g))
    assert steps[-1].distances["C"] == 0.0


def test_demo_graph_result(demo_graph):
    steps = list(dijkstra(demo_graph))
    assert steps[-1].description == "shortest distance to 9: 4.00"
    assert [e.id for e in reconstruct_path(demo_graph)] == ["0-9"]


# ==================== Step log invariants ====================

def test_every_snapshot_covers_every_node(demo_graph):
    ids = set(demo_graph.node_ids())
    for step in dijkstra(demo_graph):
        assert set(step.distances) == ids


def test_distances_never_increase(demo_graph):
    steps = list(dijkstra(demo_graph))
    for nid in demo_graph.node_ids():
        series = [s.distances[nid] for s in steps]
        assert all(later <= earlier for earlier, later in zip(series, series[1:]))


def test_visited_distance_is_final(demo_graph):
    steps = list(dijkstra(demo_graph))
    final = steps[-1].distances
    for step in steps:
        for nid in step.visited:
            assert step.distances[nid] == final[nid]


def test_snapshots_are_read_only(chain_graph):
    step = next(dijkstra(chain_graph))
    with pytest.raises(TypeError):
        step.distances["A"] = 99.0


def test_snapshots_survive_later_mutation(chain_graph):
    steps = list(dijkstra(chain_graph))
    chain_graph.reset_node_states()
    assert steps[-1].distances["D"] == 4.0


def test_pseudocode_lines_in_range(demo_graph):
    assert all(0 <= s.pseudocode_line < len(PSEUDOCODE) for s in dijkstra(demo_graph))


def test_step_to_dict_is_json_ready(isolated_graph):
    data = list(dijkstra(isolated_graph))[-1].to_dict()
    assert data["distances"]["E"] is None
    assert data["is_final"] is True
    assert data["highlighted_edge"] is None


def test_step_defaults():
    step = Step()
    assert dict(step.distances) == {}
    assert step.distance_to("anything") == math.inf


# ==================== Against brute force ====================

@pytest.mark.parametrize("seed", range(25))
def test_matches_brute_force(seed):
    rng = random.Random(seed)
    g = random_graph(rng, rng.randint(2, 7))
    ids = g.node_ids()
    start, target = rng.choice(ids), rng.choice(ids)
    g.set_start_and_target(start, target)

    steps = list(dijkstra(g))
    expected = brute_force_distance(g, start, target)
    assert steps[-1].distances[target] == pytest.approx(expected)

    path = reconstruct_path(g)
    if expected == math.inf:
        assert path == []
        assert steps[-1].description == "no path found"
    else:
        assert sum(e.weight for e in path) == pytest.approx(expected)
