"""Image output for pyrtle screens."""

from .png import encode_png, write_png

__all__ = ['encode_png', 'write_png']
