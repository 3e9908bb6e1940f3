"""
controls.py — UI Control Panels
=================================
Every UI panel is a pure function that takes state and returns HTML.

Panels:
  • playback_controls       – run / next / prev / rewind / end / play / speed
  • source_target_picker    – dropdowns for start and target
  • edge_form               – add a node or a weighted edge
  • analytics_panel         – nodes visited, edges relaxed, path cost, …
  • pseudocode_viewer       – with live line highlighting
  • explanation_panel       – the current step's description

Design:
  - All panels are stateless render functions.
  - State is passed in as kwargs.
  - Output is raw HTML strings (no templating engine).  Anything that can
    carry user input (node labels, step descriptions) goes through escape().
  - The main app stitches them together.
"""

from typing import Dict, List, Optional

from markupsafe import escape

from algorithms import COMPLEXITY_SPACE, COMPLEXITY_TIME
from engine import RunMetrics, SPEED_PRESETS


# ---------------------------------------------------------------------------
# Playback Controls
# ---------------------------------------------------------------------------
def playback_controls(
    current_step: int = -1,
    total_steps: int = 0,
    speed: str = "slow",
    is_finished: bool = False,
) -> str:
    speed_options = "".join(
        f'<option value="{key}" data-seconds="{secs}" {"selected" if key == speed else ""}>{key.title()}</option>'
        for key, secs in SPEED_PRESETS.items()
    )
    return f"""
    <div class="panel playback-controls">
      <h3>Playback</h3>
      <div class="button-row">
        <button id="btn-run" title="Run and show the result">Run</button>
        <button id="btn-run-step" title="Run and step through it">Step mode</button>
      </div>
      <div class="button-row">
        <button id="btn-rewind" title="Rewind to start">⏮</button>
        <button id="btn-prev" title="Previous step">◀</button>
        <button id="btn-play" title="Play / pause">⏯</button>
        <button id="btn-next" title="Next step">▶</button>
        <button id="btn-end" title="Jump to end">⏭</button>
      </div>
      <div class="step-info">
        Step <span id="current-step">{current_step + 1}</span> / <span id="total-steps">{total_steps}</span>
        <span class="finished-badge" id="finished-badge" {'' if is_finished else 'hidden'}>FINISHED</span>
      </div>
      <div class="speed-control">
        <label>Speed:</label>
        <select id="speed-selector">{speed_options}</select>
      </div>
      <button id="btn-reset" class="btn-secondary">Reset</button>
      <button id="btn-demo" class="btn-secondary">Demo graph</button>
    </div>
    """


# ---------------------------------------------------------------------------
# Source / Target Picker
# ---------------------------------------------------------------------------
def source_target_picker(
    node_ids: List[str],
    source: Optional[str] = None,
    target: Optional[str] = None,
) -> str:
    src_options = ['<option value="">-- start --</option>']
    tgt_options = ['<option value="">-- target --</option>']

    for nid in node_ids:
        safe = escape(nid)
        src_sel = 'selected' if nid == source else ''
        tgt_sel = 'selected' if nid == target else ''
        src_options.append(f'<option value="{safe}" {src_sel}>{safe}</option>')
        tgt_options.append(f'<option value="{safe}" {tgt_sel}>{safe}</option>')

    return f"""
    <div class="panel source-target-picker">
      <h3>Start &amp; Target</h3>
      <label>Start:
        <select id="source-selector">
          {''.join(src_options)}
        </select>
      </label>
      <label>Target:
        <select id="target-selector">
          {''.join(tgt_options)}
        </select>
      </label>
    </div>
    """


# ---------------------------------------------------------------------------
# Edge Form
# ---------------------------------------------------------------------------
def edge_form() -> str:
    return """
    <div class="panel edge-form">
      <h3>Build</h3>
      <div class="form-row">
        <input id="node-id" placeholder="node">
        <button id="btn-add-node">Add node</button>
      </div>
      <div class="form-row">
        <input id="edge-a" placeholder="from" size="4">
        <input id="edge-b" placeholder="to" size="4">
        <input id="edge-w" placeholder="weight" size="5" type="number" min="0" step="any">
        <button id="btn-add-edge">Add edge</button>
      </div>
      <p class="error" id="build-error"></p>
    </div>
    """


# ---------------------------------------------------------------------------
# Analytics Panel
# ---------------------------------------------------------------------------
def analytics_panel(metrics: Optional[RunMetrics] = None) -> str:
    if not metrics:
        return """
        <div class="panel analytics-panel">
          <h3>Analytics</h3>
          <p class="placeholder">Run the algorithm to see metrics.</p>
        </div>
        """

    path_status = "Found" if metrics.path_found else "Not found"
    rows: Dict[str, str] = {
        "Start → Target": f"{escape(metrics.source)} → {escape(metrics.target)}",
        "Nodes Visited":  str(metrics.nodes_visited),
        "Edges Examined": str(metrics.edges_examined),
        "Edges Relaxed":  str(metrics.edges_relaxed),
        "Path Length":    f"{metrics.path_length} edges",
        "Path Cost":      f"{metrics.path_cost:.2f}",
        "Total Steps":    str(metrics.total_steps),
        "Wall Time":      f"{metrics.wall_time_ms:.2f} ms",
        "Path":           path_status,
        "Complexity":     f"{COMPLEXITY_TIME} time, {COMPLEXITY_SPACE} space",
    }
    body = "".join(f"<tr><td>{k}:</td><td><strong>{v}</strong></td></tr>" for k, v in rows.items())
    return f"""
    <div class="panel analytics-panel">
      <h3>Analytics: {escape(metrics.algo_label)}</h3>
      <table>{body}</table>
    </div>
    """


# ---------------------------------------------------------------------------
# Pseudocode Viewer
# ---------------------------------------------------------------------------
def pseudocode_viewer(pseudocode_lines: List[str], current_line: int = -1) -> str:
    lines_html = []
    for i, line in enumerate(pseudocode_lines):
        highlight = 'highlight' if i == current_line else ''
        lines_html.append(f'<div class="code-line {highlight}" data-line="{i}">{escape(line)}</div>')

    return f"""
    <div class="code-block">
      {''.join(lines_html)}
    </div>
    """


# ---------------------------------------------------------------------------
# Explanation Panel
# ---------------------------------------------------------------------------
def explanation_panel(description: str = "", step_number: Optional[int] = None) -> str:
    if not description:
        return (
            '<div class="explanation-text">Click <strong>Run</strong> for the result, '
            'or <strong>Step mode</strong> to walk through every decision.</div>'
        )
    prefix = f"Step {step_number + 1}: " if step_number is not None else ""
    return f'<div class="explanation-text">{prefix}{escape(description)}</div>'
