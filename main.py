"""
main.py — Dijkstra Visualizer Flask App
========================================
The web server that powers the visualizer.

Routes:
  GET  /                       – main UI
  GET  /api/state              – current frame (svg, panels, cursor) + graph
  POST /api/graph/demo         – back to the fixed demonstration graph
  POST /api/graph/generate     – generate a random graph
  POST /api/graph/import       – import from adjacency-list text
  POST /api/graph/node         – add a node
  POST /api/graph/edge         – add a weighted edge
  POST /api/endpoints          – set start / target
  POST /api/run                – run Dijkstra ("instant" or "step" mode)
  POST /api/step/next          – advance one step
  POST /api/step/prev          – rewind one step
  POST /api/step/goto          – jump to step N (-1 = before the first)
  GET  /api/path               – final shortest path
  GET  /api/export             – graph, metrics, path and full step log as JSON
  POST /api/reset              – clear step log, cursor and node state

State management:
  Each app instance owns ONE Recorder (graph + step log + cursor) in
  app.extensions.  The engine is single-threaded and non-reentrant, so
  the dev server runs with threaded=False.  Nothing is persisted.

Configuration:
  DEFAULT_CONFIG below, then DIJKSTRA_* environment variables
  (e.g. DIJKSTRA_PLAYBACK_SPEED=fast), then the mapping passed to
  create_app().
"""

import logging
import secrets
from typing import Any, Dict, Optional

from flask import Blueprint, Flask, current_app, jsonify, render_template_string, request
from werkzeug.exceptions import BadRequest

from graph import Graph, GraphError
from algorithms import PSEUDOCODE
from engine import Recorder, SPEED_PRESETS
from ui import (
    CanvasConfig,
    render_canvas,
    playback_controls,
    source_target_picker,
    edge_form,
    analytics_panel,
    pseudocode_viewer,
    explanation_panel,
)


logger = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "CANVAS_WIDTH":   800,
    "CANVAS_HEIGHT":  500,
    "PLAYBACK_SPEED": "slow",
    "LOG_LEVEL":      "INFO",
}

bp = Blueprint("visualizer", __name__)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_CONFIG, SECRET_KEY=secrets.token_hex(32))
    app.config.from_prefixed_env("DIJKSTRA")
    if config:
        app.config.from_mapping(config)

    if app.config["PLAYBACK_SPEED"] not in SPEED_PRESETS:
        raise ValueError(f"PLAYBACK_SPEED must be one of {', '.join(SPEED_PRESETS)}")

    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.extensions["recorder"] = Recorder(
        Graph.demo(app.config["CANVAS_WIDTH"], app.config["CANVAS_HEIGHT"])
    )
    app.register_blueprint(bp)
    return app


# ---------------------------------------------------------------------------
# State Helpers
# ---------------------------------------------------------------------------
def get_recorder() -> Recorder:
    return current_app.extensions["recorder"]


def canvas_config() -> CanvasConfig:
    return CanvasConfig(current_app.config["CANVAS_WIDTH"], current_app.config["CANVAS_HEIGHT"])


def relayout(graph: Graph) -> None:
    graph.layout_circle(current_app.config["CANVAS_WIDTH"], current_app.config["CANVAS_HEIGHT"])


def json_body() -> Dict[str, Any]:
    """The request body as a dict.  No body is {}; anything unparsable is a 400."""
    if not request.get_data():
        return {}
    data = request.get_json(force=True)
    if not isinstance(data, dict):
        raise BadRequest("Request body must be a JSON object")
    return data


def require_run(rec: Recorder) -> None:
    if not rec.has_run:
        raise BadRequest("Run the algorithm first")


def frame(rec: Recorder) -> Dict[str, Any]:
    """Everything the page needs to redraw itself for the cursor's position."""
    stepper = rec.stepper
    step = stepper.current()
    path = rec.final_path() if stepper.at_end else []

    return {
        "svg":          render_canvas(rec.graph, step, path=path, config=canvas_config()),
        "pseudocode":   pseudocode_viewer(PSEUDOCODE, step.pseudocode_line if step else -1),
        "explanation":  explanation_panel(step.description if step else "", step.step_number if step else None),
        "analytics":    analytics_panel(rec.metrics),
        "step":         step.to_dict() if step else None,
        "current_step": stepper.position,
        "total_steps":  stepper.total_steps,
        "finished":     stepper.is_finished,
    }


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------
@bp.app_errorhandler(GraphError)
def handle_graph_error(exc: GraphError):
    logger.warning("rejected %s %s: %s", request.method, request.path, exc)
    return jsonify({"error": str(exc), "kind": type(exc).__name__}), 400


@bp.app_errorhandler(BadRequest)
def handle_bad_request(exc: BadRequest):
    logger.warning("bad request %s %s: %s", request.method, request.path, exc.description)
    return jsonify({"error": exc.description, "kind": "BadRequest"}), 400


# ---------------------------------------------------------------------------
# Main UI Route
# ---------------------------------------------------------------------------
@bp.route("/")
def index():
    rec = get_recorder()
    graph = rec.graph
    current = frame(rec)

    return render_template_string(
        INDEX_TEMPLATE,
        svg=current["svg"],
        playback=playback_controls(
            current_step=rec.stepper.position,
            total_steps=rec.stepper.total_steps,
            speed=current_app.config["PLAYBACK_SPEED"],
            is_finished=rec.stepper.is_finished,
        ),
        picker=source_target_picker(
            node_ids=graph.node_ids(),
            source=graph.start_node.id if graph.start_node else None,
            target=graph.target_node.id if graph.target_node else None,
        ),
        build=edge_form(),
        analytics=current["analytics"],
        pseudocode=current["pseudocode"],
        explanation=current["explanation"],
    )


@bp.route("/api/state")
def api_state():
    rec = get_recorder()
    return jsonify({**frame(rec), "graph": rec.graph.to_dict()})


# ---------------------------------------------------------------------------
# API: Graph Building
# ---------------------------------------------------------------------------
@bp.route("/api/graph/demo", methods=["POST"])
def api_graph_demo():
    rec = get_recorder()
    rec.reset(rebuild=True)
    relayout(rec.graph)
    return jsonify({**frame(rec), "node_ids": rec.graph.node_ids()})


@bp.route("/api/graph/generate", methods=["POST"])
def api_graph_generate():
    data = json_body()
    try:
        num_nodes = int(data.get("nodes", 8))
        prob      = float(data.get("prob", 0.3))
        seed      = data.get("seed")
        seed      = int(seed) if seed is not None else None
    except (TypeError, ValueError):
        raise BadRequest("nodes, prob and seed must be numbers") from None
    if not 2 <= num_nodes <= 30:
        raise BadRequest("nodes must be between 2 and 30")

    g = Graph.generate_random(
        num_nodes=num_nodes,
        edge_probability=prob,
        seed=seed,
        canvas_w=current_app.config["CANVAS_WIDTH"],
        canvas_h=current_app.config["CANVAS_HEIGHT"],
    )
    rec = get_recorder()
    rec.graph = g
    rec.clear()
    return jsonify({**frame(rec), "node_ids": g.node_ids()})


@bp.route("/api/graph/import", methods=["POST"])
def api_graph_import():
    text = json_body().get("text", "")
    if not isinstance(text, str) or not text.strip():
        raise BadRequest("text must be a non-empty adjacency list")

    g = Graph.from_adjacency_list(
        text,
        canvas_w=current_app.config["CANVAS_WIDTH"],
        canvas_h=current_app.config["CANVAS_HEIGHT"],
    )
    ids = g.node_ids()
    if len(ids) >= 2:
        g.set_start_and_target(ids[0], ids[-1])

    rec = get_recorder()
    rec.graph = g
    rec.clear()
    return jsonify({**frame(rec), "node_ids": ids})


@bp.route("/api/graph/node", methods=["POST"])
def api_graph_node():
    node_id = str(json_body().get("id", "")).strip()
    if not node_id:
        raise BadRequest("id is required")

    rec = get_recorder()
    if node_id in rec.graph:
        raise BadRequest(f"Node {node_id} already exists")
    rec.graph.create_node(node_id)
    relayout(rec.graph)
    rec.clear()
    return jsonify({**frame(rec), "node_ids": rec.graph.node_ids()})


@bp.route("/api/graph/edge", methods=["POST"])
def api_graph_edge():
    data = json_body()
    source = str(data.get("source", "")).strip()
    target = str(data.get("target", "")).strip()
    if not source or not target:
        raise BadRequest("source and target are required")

    rec = get_recorder()
    before = rec.graph.node_count()
    edge = rec.graph.create_edge(source, target, data.get("weight"))
    if rec.graph.node_count() != before:
        relayout(rec.graph)
    rec.clear()
    logger.info("added edge %s", edge)
    return jsonify({**frame(rec), "edge": edge.to_dict(), "node_ids": rec.graph.node_ids()})


@bp.route("/api/endpoints", methods=["POST"])
def api_endpoints():
    data = json_body()
    rec = get_recorder()
    rec.set_start_and_target(data.get("source", ""), data.get("target", ""))
    return jsonify({**frame(rec), "source": rec.graph.start_node.id, "target": rec.graph.target_node.id})


# ---------------------------------------------------------------------------
# API: Run Algorithm
# ---------------------------------------------------------------------------
@bp.route("/api/run", methods=["POST"])
def api_run():
    mode = json_body().get("mode", "instant")
    if mode not in ("instant", "step"):
        raise BadRequest("mode must be 'instant' or 'step'")

    rec = get_recorder()
    if mode == "instant":
        rec.run_to_completion()
    else:
        rec.run()
    return jsonify(frame(rec))


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@bp.route("/api/step/next", methods=["POST"])
def api_step_next():
    rec = get_recorder()
    require_run(rec)
    rec.stepper.advance()
    return jsonify(frame(rec))


@bp.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    rec = get_recorder()
    require_run(rec)
    rec.stepper.retreat()
    return jsonify(frame(rec))


@bp.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    rec = get_recorder()
    require_run(rec)
    try:
        idx = int(json_body().get("index", -1))
    except (TypeError, ValueError):
        raise BadRequest("index must be an integer") from None
    if not rec.stepper.seek(idx):
        raise BadRequest(f"index must be between -1 and {rec.stepper.total_steps - 1}")
    return jsonify(frame(rec))


@bp.route("/api/path")
def api_path():
    rec = get_recorder()
    require_run(rec)
    distance = rec.shortest_distance()
    found = rec.metrics.path_found
    return jsonify({
        "path":     [e.to_dict() for e in rec.final_path()],
        "distance": distance if found else None,
        "found":    found,
    })


@bp.route("/api/export")
def api_export():
    return jsonify(get_recorder().export())


@bp.route("/api/reset", methods=["POST"])
def api_reset():
    rec = get_recorder()
    rec.reset()
    return jsonify(frame(rec))


# ---------------------------------------------------------------------------
# HTML Template
# ---------------------------------------------------------------------------
INDEX_TEMPLATE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Dijkstra Visualizer</title>
  <style>
    * { margin: 0; padding: 0; box-sizing: border-box; }

    :root {
      --bg-dark: #0d1117;
      --bg-darker: #010409;
      --bg-panel: #161b22;
      --border: #30363d;
      --text-primary: #e6edf3;
      --text-secondary: #7d8590;
      --accent-cyan: #0ea5e9;
      --accent-teal: #06b6d4;
      --accent-rose: #f43f5e;
    }

    body {
      font-family: -apple-system, BlinkMacSystemFont, sans-serif;
      background: var(--bg-darker);
      color: var(--text-primary);
      display: flex;
      height: 100vh;
      overflow: hidden;
    }

    #sidebar {
      width: 320px;
      background: var(--bg-dark);
      border-right: 1px solid var(--border);
      overflow-y: auto;
      padding: 20px 16px;
    }

    #main { flex: 1; display: flex; flex-direction: column; }

    #canvas-container {
      flex: 1;
      display: flex;
      align-items: center;
      justify-content: center;
      border-bottom: 1px solid var(--border);
    }

    #canvas-svg { max-width: 100%; max-height: 100%; }

    #bottom-panel {
      display: grid;
      grid-template-columns: 1fr 1fr;
      gap: 20px;
      padding: 20px;
      background: var(--bg-dark);
      max-height: 340px;
      overflow: auto;
    }

    .panel, #pseudocode-container, #explanation-container {
      background: var(--bg-panel);
      border: 1px solid var(--border);
      border-radius: 10px;
      padding: 14px;
      margin-bottom: 14px;
    }

    h3 { font-size: 13px; text-transform: uppercase; color: var(--accent-cyan); margin-bottom: 10px; }
    button, select, input {
      background: var(--bg-darker); color: var(--text-primary);
      border: 1px solid var(--border); border-radius: 6px; padding: 6px 10px; margin: 2px;
    }
    button:hover { border-color: var(--accent-teal); cursor: pointer; }
    .code-line { font-family: monospace; font-size: 12px; color: var(--text-secondary); padding: 1px 6px; white-space: pre; }
    .code-line.highlight { background: rgba(6, 182, 212, 0.2); color: var(--text-primary); }
    .finished-badge { color: var(--accent-teal); font-weight: 700; margin-left: 6px; }
    .error { color: var(--accent-rose); font-size: 12px; margin-top: 6px; }
    table { width: 100%; font-size: 13px; }
    table td:last-child { text-align: right; color: var(--accent-cyan); font-family: monospace; }
  </style>
</head>
<body>
  <div id="sidebar">
    <div id="picker">{{ picker|safe }}</div>
    <div id="playback">{{ playback|safe }}</div>
    <div id="build">{{ build|safe }}</div>
    <div id="analytics">{{ analytics|safe }}</div>
  </div>

  <div id="main">
    <div id="canvas-container">
      <div id="canvas-svg">{{ svg|safe }}</div>
    </div>

    <div id="bottom-panel">
      <div id="pseudocode-container">
        <h3>Pseudocode</h3>
        <div id="pseudocode">{{ pseudocode|safe }}</div>
      </div>
      <div id="explanation-container">
        <h3>Step Explanation</h3>
        <div id="explanation">{{ explanation|safe }}</div>
      </div>
    </div>
  </div>

  <script>
    let timer = null;

    async function post(url, data) {
      const res = await fetch(url, {
        method: 'POST',
        headers: {'Content-Type': 'application/json'},
        body: JSON.stringify(data || {}),
      });
      return await res.json();
    }

    function show(data) {
      if (data.error) {
        document.getElementById('build-error').textContent = data.error;
        return false;
      }
      document.getElementById('build-error').textContent = '';
      if (data.svg) document.getElementById('canvas-svg').innerHTML = data.svg;
      if (data.pseudocode) document.getElementById('pseudocode').innerHTML = data.pseudocode;
      if (data.explanation) document.getElementById('explanation').innerHTML = data.explanation;
      if (data.analytics) document.getElementById('analytics').innerHTML = data.analytics;
      document.getElementById('current-step').textContent = data.current_step + 1;
      document.getElementById('total-steps').textContent = data.total_steps;
      document.getElementById('finished-badge').hidden = !data.finished;
      return true;
    }

    function stop() {
      if (timer) clearInterval(timer);
      timer = null;
    }

    async function graphChanged(data) {
      if (show(data) && data.node_ids) location.reload();
    }

    const on = (id, fn) => document.getElementById(id)?.addEventListener('click', fn);

    on('btn-run',      async () => { stop(); show(await post('/api/run', {mode: 'instant'})); });
    on('btn-run-step', async () => { stop(); show(await post('/api/run', {mode: 'step'})); });
    on('btn-next',     async () => { stop(); show(await post('/api/step/next')); });
    on('btn-prev',     async () => { stop(); show(await post('/api/step/prev')); });
    on('btn-rewind',   async () => { stop(); show(await post('/api/step/goto', {index: -1})); });
    on('btn-end',      async () => {
      stop();
      const total = +document.getElementById('total-steps').textContent;
      show(await post('/api/step/goto', {index: total - 1}));
    });
    on('btn-reset',    async () => { stop(); show(await post('/api/reset')); });
    on('btn-demo',     async () => { stop(); graphChanged(await post('/api/graph/demo')); });

    on('btn-play', () => {
      if (timer) return stop();
      const sel = document.getElementById('speed-selector');
      const seconds = +sel.options[sel.selectedIndex].dataset.seconds;
      timer = setInterval(async () => {
        const data = await post('/api/step/next');
        if (!show(data) || data.finished) stop();
      }, seconds * 1000);
    });

    on('btn-add-node', async () => {
      graphChanged(await post('/api/graph/node', {id: document.getElementById('node-id').value}));
    });
    on('btn-add-edge', async () => {
      graphChanged(await post('/api/graph/edge', {
        source: document.getElementById('edge-a').value,
        target: document.getElementById('edge-b').value,
        weight: document.getElementById('edge-w').value,
      }));
    });

    for (const id of ['source-selector', 'target-selector']) {
      document.getElementById(id)?.addEventListener('change', async () => {
        stop();
        show(await post('/api/endpoints', {
          source: document.getElementById('source-selector').value,
          target: document.getElementById('target-selector').value,
        }));
      });
    }
  </script>
</body>
</html>
"""


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app = create_app()
    logger.info("Dijkstra Visualizer on http://localhost:5000")
    app.run(debug=True, host="0.0.0.0", port=5000, threaded=False)
