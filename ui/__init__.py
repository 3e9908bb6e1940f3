"""
ui/
---
Presentation layer.

    from ui import render_canvas
    from ui import playback_controls, source_target_picker, …
"""

from ui.canvas import render_canvas, CanvasConfig

from ui.controls import (
    playback_controls,
    source_target_picker,
    edge_form,
    analytics_panel,
    pseudocode_viewer,
    explanation_panel,
)

__all__ = [
    "render_canvas",
    "CanvasConfig",
    "playback_controls",
    "source_target_picker",
    "edge_form",
    "analytics_panel",
    "pseudocode_viewer",
    "explanation_panel",
]
