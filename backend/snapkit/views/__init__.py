"""
Views Module

Toolkit-independent view bindings that drive the image loader.
"""

from .image_view import ImageView

__all__ = ["ImageView"]
