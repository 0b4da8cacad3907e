"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Dataset storage (JSON bundle)
- Route search strategies (depth-first, best-first)
- Recent routes history (in-memory, JSON file)
- Rendering engines (Folium)
"""
