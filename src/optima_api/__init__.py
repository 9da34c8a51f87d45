"""
Optima API: REST service around the weekly scheduling engine.
"""

__version__ = "0.1.0"
