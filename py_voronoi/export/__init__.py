"""
Serialization of export primitives to CAD file formats.
"""

from .dxf import to_dxf_string, write_dxf

__all__ = ['to_dxf_string', 'write_dxf']
