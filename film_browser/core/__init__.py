"""
Core domain layer: record normalisation, filtering, scales, selection,
view synchronisation, the update cycle, the view base class and the view registry
"""

from .record import Record
from .normalizer import normalize
from .filter_state import FilterState
from .base_view import BaseView
from .view_registry import ViewRegistry

__all__ = ["Record", "normalize", "FilterState", "BaseView", "ViewRegistry"]
