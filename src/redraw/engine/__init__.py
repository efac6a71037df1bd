"""
engine
======

Row selection and output assembly.

This subpackage provides:
- draw : draw_indices() picks row indices per draw and group.
- assemble : assemble() builds the augmented output frame.
"""

from .assemble import assemble
from .draw import Selection, draw_indices

__all__ = ["Selection", "draw_indices", "assemble"]
