"""Utility functions and classes for kubetrack."""

from kubetrack.utils.clock import Clock, system_clock

__all__ = [
    "Clock",
    "system_clock",
]
