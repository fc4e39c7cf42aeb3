"""
autostubs — page class stubs with machine-derived @property annotations.
"""

__version__ = "0.1.0"
