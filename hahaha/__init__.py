"""
hahaha

Shuts down the platform-injected sidecars of pods whose main container
has finished, so that Jobs can complete.
"""

__version__ = "1.0.0"
