from .console import Align, Console
from .render import Renderer, render_bar

__all__ = ["Align", "Console", "Renderer", "render_bar"]
