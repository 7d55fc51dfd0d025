"""Grid components."""

from gridpick.components.grid_view import GridView, GridViewTheme
from gridpick.components.panel import BottomPanel

__all__ = [
    "BottomPanel",
    "GridView",
    "GridViewTheme",
]
