"""Analytical helpers for the interaction region.

Functions exposed here implement the beta-function optics model and the
Lorentz boost to the head-on collision frame.
"""

# Importing * is a bad practice and you should be punished for using it
__all__: list[str] = []
