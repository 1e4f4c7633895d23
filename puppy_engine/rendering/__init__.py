"""
Rendering for the engine.
This package turns layout trees into text.
"""

from .renderer import (TagRenderer, register_tag_renderer, unregister_tag_renderer,
                       get_tag_renderer, render, render_text, render_styled)

__all__ = [
    'TagRenderer', 'register_tag_renderer', 'unregister_tag_renderer',
    'get_tag_renderer', 'render', 'render_text', 'render_styled'
]
