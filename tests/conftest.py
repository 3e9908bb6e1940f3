"""
Shared pytest fixtures.

Graphs used across the suite:
    chain      A–B(1), B–C(2), A–C(5), C–D(1)      start A, target D
    isolated   chain + a node E with no edges       start A, target E
    demo       the fixed 10-node demonstration graph
"""

import pytest

from graph import Graph
from engine import Recorder
from main import create_app


@pytest.fixture
def chain_graph():
    g = Graph.from_triples([("A", "B", 1), ("B", "C", 2), ("A", "C", 5), ("C", "D", 1)])
    g.set_start_and_target("A", "D")
    return g


@pytest.fixture
def isolated_graph(chain_graph):
    chain_graph.create_node("E")
    chain_graph.set_start_and_target("A", "E")
    return chain_graph


@pytest.fixture
def demo_graph():
    return Graph.demo()


@pytest.fixture
def recorder(chain_graph):
    return Recorder(chain_graph)


@pytest.fixture
def app():
    return create_app({"TESTING": True, "LOG_LEVEL": "WARNING"})


@pytest.fixture
def client(app):
    return app.test_client()
