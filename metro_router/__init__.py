"""Top-level package for the metro route planner.

Given a static transit network (stations, lines, directional line paths
and a line-tagged adjacency graph), the package enumerates candidate
routes between two stations, ranks them by transfers then stations,
and derives bilingual (Persian/English) rider guidance from them.
"""

__version__ = "0.1.0"
