"""Job and G-code I/O layer for routerpath.

This module handles reading job files and writing G-code programs. It
provides a clean abstraction layer between the file formats and the domain
models.

Key responsibilities:
- Load and validate JSON job files
- Render toolpaths as G-code
- Save G-code programs

Key classes:
- JobReader: Load job files into settings and operations
- GCodeWriter: Render and save G-code
"""

from routerpath.io.gcode import GCodeWriter, format_number
from routerpath.io.reader import JobReader

__all__ = [
    "GCodeWriter",
    "JobReader",
    "format_number",
]
