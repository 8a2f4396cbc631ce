"""Voxel field bases, world/local/voxel mappings and interpolators."""

__version__ = "0.1.0"

__all__ = [
    "fields",
    "interp",
    "interp_core",
    "mac_interp",
    "mapping",
    "mapping_io",
    "msg",
    "vecmath",
]