"""
RF_Libs - Raster Forge Library Modules

This package contains the raster transformation engine,
organized into specialized sub-packages:

- ImageLib: Image entity, raster primitives, geometry and file I/O
- ActionsLib: Geometric actions (orientation, crop, resize, rotate, copy)
- FiltersLib: Convolution filters (sharpen, unsharp mask)
- PipelineLib: Operation registry and sequential runner
"""

__version__ = "0.1.0"
