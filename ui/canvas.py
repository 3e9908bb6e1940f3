"""
canvas.py — SVG Graph Renderer
================================
Pure rendering function: Graph + Step → SVG string.

The renderer consumes:
  • graph      – the Graph object (node positions, edges, start / target)
  • step       – the current Step snapshot (highlights, distances)
  • path       – edges of the final shortest path, when known
  • config     – visual config (canvas size, colors, fonts, …)

And produces an SVG string ready to inject into the DOM.

Design decisions:
  - NO mutation.  Distances are read from the Step snapshot, never
    written back onto the nodes; without a step the node state is shown.
  - Role-based coloring is a simple dict lookup: role → hex color.
  - The distances table is a separate SVG <g> group in a fixed spot.
"""

import math
from typing import Dict, Iterable, Optional, Set

from markupsafe import escape

from graph import Graph, Node, Edge
from algorithms.step import Step


# ---------------------------------------------------------------------------
# Visual Config: color palette, dimensions, fonts
# ---------------------------------------------------------------------------
class CanvasConfig:
    # canvas
    width:  int = 900
    height: int = 600
    bg:     str = "#0d1117"

    # node colors (role → fill)
    node_colors: Dict[str, str] = {
        "unvisited":  "#1c2128",   # dark grey
        "visited":    "#10b981",   # emerald green: distance is final
        "current":    "#06b6d4",   # bright teal: the node being visited
        "updated":    "#f59e0b",   # amber: distance just improved
        "start":      "#0ea5e9",   # cyan
        "target":     "#ec4899",   # pink
    }

    # edge colors
    edge_colors: Dict[str, str] = {
        "default":  "#30363d",   # medium grey
        "active":   "#06b6d4",   # edge being relaxed right now
        "path":     "#a855f7",   # purple: on the final path
    }

    # node
    node_radius:        int = 20
    node_stroke:        str = "#30363d"
    node_stroke_width:  int = 2
    node_label_color:   str = "#e6edf3"
    node_label_size:    int = 13
    dist_label_color:   str = "#f59e0b"

    # edge
    edge_width:         int = 2
    edge_width_path:    int = 4
    edge_weight_color:  str = "#7d8590"
    edge_weight_size:   int = 12
    edge_weight_bg:     str = "#161b22"

    # overlay panel
    overlay_bg:         str = "#161b22"
    overlay_header:     str = "#e6edf3"
    overlay_text:       str = "#7d8590"
    overlay_font_size:  int = 13

    def __init__(self, width: Optional[int] = None, height: Optional[int] = None):
        if width:
            self.width = width
        if height:
            self.height = height


CONFIG = CanvasConfig()


def format_distance(d: float) -> str:
    return "∞" if d == math.inf else f"{d:g}"


# ---------------------------------------------------------------------------
# Main Render Function
# ---------------------------------------------------------------------------
def render_canvas(
    graph: Graph,
    step: Optional[Step] = None,
    path: Iterable[Edge] = (),
    config: CanvasConfig = CONFIG,
    show_overlays: bool = True,
) -> str:
    """
    Returns an SVG string.

    Args:
        graph         : The graph to render.
        step          : Current algorithm step (or None for the plain graph).
        path          : Final-path edges to draw emphasised.
        config        : Visual config.
        show_overlays : If True, render the distances panel.
    """
    path_keys = {e.key for e in path}

    svg_parts = [
        f'<svg width="{config.width}" height="{config.height}" '
        f'viewBox="0 0 {config.width} {config.height}" '
        f'xmlns="http://www.w3.org/2000/svg" style="background: {config.bg};">',
        f'<rect width="{config.width}" height="{config.height}" fill="{config.bg}"/>',
    ]

    # -- edges (draw first so nodes sit on top) --
    for edge in graph.edges.values():
        svg_parts.append(_render_edge(graph, edge, step, path_keys, config))

    # -- nodes --
    visited: Set[str] = set(step.visited) if step else {n.id for n in graph.nodes.values() if n.visited}
    for node in graph.nodes.values():
        svg_parts.append(_render_node(graph, node, step, visited, config))

    # -- overlays --
    if show_overlays and step:
        svg_parts.append(_render_distances_panel(graph, step, config, x=config.width - 180, y=20))

    svg_parts.append("</svg>")
    return "\n".join(svg_parts)


# ---------------------------------------------------------------------------
# Node Rendering
# ---------------------------------------------------------------------------
def _node_role(graph: Graph, node: Node, step: Optional[Step], visited: Set[str]) -> str:
    if step and step.updated_node == node.id:
        return "updated"
    if step and step.highlighted_node == node.id and not step.is_final:
        return "current"
    if graph.start_node is not None and node.id == graph.start_node.id:
        return "start"
    if graph.target_node is not None and node.id == graph.target_node.id:
        return "target"
    if node.id in visited:
        return "visited"
    return "unvisited"


def _render_node(graph: Graph, node: Node, step: Optional[Step], visited: Set[str], config: CanvasConfig) -> str:
    role = _node_role(graph, node, step, visited)
    fill = config.node_colors[role]
    dist = step.distance_to(node.id) if step else node.distance

    stroke, stroke_width, glow = config.node_stroke, config.node_stroke_width, ""
    if role == "current":
        stroke, stroke_width = config.node_colors["current"], 3
        glow = (
            f'<circle cx="{node.x}" cy="{node.y}" r="{config.node_radius + 8}" fill="none" '
            f'stroke="{config.node_colors["current"]}" stroke-width="2" opacity="0.3"/>'
        )

    cx, cy, r = node.x, node.y, config.node_radius
    parts = [
        f'<g class="node {role}" data-id="{escape(node.id)}">',
        glow,
        f'  <circle cx="{cx}" cy="{cy}" r="{r}" '
        f'fill="{fill}" stroke="{stroke}" stroke-width="{stroke_width}"/>',
        f'  <text x="{cx}" y="{cy + 5}" text-anchor="middle" '
        f'font-size="{config.node_label_size}" font-family="sans-serif" '
        f'fill="{config.node_label_color}" font-weight="600">{escape(node.label)}</text>',
        f'  <text x="{cx}" y="{cy - r - 6}" text-anchor="middle" font-size="11" '
        f'font-family="monospace" fill="{config.dist_label_color}">{format_distance(dist)}</text>',
        '</g>',
    ]
    return "\n".join(parts)


# ---------------------------------------------------------------------------
# Edge Rendering
# ---------------------------------------------------------------------------
def _render_edge(graph: Graph, edge: Edge, step: Optional[Step], path_keys: Set, config: CanvasConfig) -> str:
    src_node = graph.get_node(edge.source)
    tgt_node = graph.get_node(edge.target)
    if not src_node or not tgt_node:
        return ""

    stroke, stroke_width, role = config.edge_colors["default"], config.edge_width, "default"
    if edge.key in path_keys:
        stroke, stroke_width, role = config.edge_colors["path"], config.edge_width_path, "path"
    if step and step.highlighted_edge is not None and step.highlighted_edge.key == edge.key:
        stroke, stroke_width, role = config.edge_colors["active"], 4, "active"

    x1, y1 = src_node.x, src_node.y
    x2, y2 = tgt_node.x, tgt_node.y

    # shorten the line by node_radius on both ends
    dx, dy = x2 - x1, y2 - y1
    length = math.hypot(dx, dy)
    if length < 0.001:
        return ""  # nodes share a position, nothing sensible to draw

    ux, uy = dx / length, dy / length
    r = config.node_radius

    # weight label at the midpoint, offset perpendicular to the edge
    mx = (x1 + x2) / 2 - uy * 12
    my = (y1 + y2) / 2 + ux * 12

    return "\n".join([
        f'<g class="edge {role}" data-id="{escape(edge.id)}">',
        f'  <line x1="{x1 + ux * r}" y1="{y1 + uy * r}" x2="{x2 - ux * r}" y2="{y2 - uy * r}" '
        f'stroke="{stroke}" stroke-width="{stroke_width}"/>',
        f'  <circle cx="{mx}" cy="{my}" r="12" fill="{config.edge_weight_bg}" opacity="0.9"/>',
        f'  <text x="{mx}" y="{my + 4}" text-anchor="middle" '
        f'font-size="{config.edge_weight_size}" font-family="sans-serif" '
        f'fill="{config.edge_weight_color}" font-weight="600">{edge.weight:g}</text>',
        '</g>',
    ])


# ---------------------------------------------------------------------------
# Overlay Panel
# ---------------------------------------------------------------------------
def _render_distances_panel(graph: Graph, step: Step, config: CanvasConfig, x: int, y: int) -> str:
    height = 36 + 16 * len(step.distances)
    parts = [
        f'<g class="distances-panel" transform="translate({x},{y})">',
        f'  <rect width="160" height="{height}" fill="{config.overlay_bg}" rx="6" opacity="0.95"/>',
        f'  <text x="10" y="20" font-size="14" font-weight="700" fill="{config.overlay_header}">Distances</text>',
    ]
    for i, (nid, d) in enumerate(step.distances.items()):
        node = graph.get_node(nid)
        label = node.label if node else nid
        parts.append(
            f'  <text x="15" y="{40 + i * 16}" font-size="{config.overlay_font_size}" '
            f'font-family="monospace" fill="{config.overlay_text}">{escape(label)}: {format_distance(d)}</text>'
        )
    parts.append('</g>')
    return "\n".join(parts)
