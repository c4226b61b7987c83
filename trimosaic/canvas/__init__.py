from .canvas import Canvas, composite

__all__ = ['Canvas', 'composite']
