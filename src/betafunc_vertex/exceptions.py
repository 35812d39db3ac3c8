"""Errors raised while configuring or driving the vertex smearing model."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when beam-spot parameters cannot be accepted by the model."""


class LogicError(RuntimeError):
    """Raised when the model is driven in a way that breaks its invariants."""
