# File: src/building_compliance/__init__.py
"""
Building compliance engine.

Element configuration rules, the layer material catalog, the layer
editing state machine and the thermal compliance check.
"""

__version__ = "0.1.0"
