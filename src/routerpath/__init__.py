"""Routerpath - Toolpath generation for CNC routers.

Routerpath computes the ordered waypoints a router bit follows to cut along
paths, polygons and circles, or to clear (pocket) their interior, in several
depth passes. Tabs can be left along the cut so pieces cut through do not
break loose before the job ends.

Example:
    $ routerpath generate sign.json

This will create sign.nc with the G-code for every operation in the job.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
