from .draw import draw_reduction

__all__ = ["draw_reduction"]
