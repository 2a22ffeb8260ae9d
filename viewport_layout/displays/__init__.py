"""
Display modules for the vplayout CLI.
"""

from . import context_display
from . import viewport_display

__all__ = ['context_display', 'viewport_display']
