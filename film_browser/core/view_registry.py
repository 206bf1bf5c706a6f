from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Type

from film_browser.config.model import ChartGeometry

from .base_view import BaseView
from .record import Record


class ViewRegistry:
    """
    Registered view classes by id.

    The Dash layer builds its tabs from `all_classes()` and instantiates each
    view over the loaded records with `create`. Ids are unique and only
    BaseView subclasses are accepted.
    """

    def __init__(self):
        self._views: Dict[str, Type[BaseView]] = {}

    def register(self, view_cls: Type[BaseView]) -> None:
        """
        :raises TypeError: if view_cls is not a BaseView subclass
        :raises ValueError: if its id is already taken
        """
        if not isinstance(view_cls, type) or not issubclass(view_cls, BaseView):
            raise TypeError(f"View '{getattr(view_cls, 'id', view_cls)}' must be a subclass of BaseView")

        if view_cls.id in self._views:
            raise ValueError(f"View '{view_cls.id}' already registered")

        self._views[view_cls.id] = view_cls

    def create(
        self,
        view_id: str,
        records: Sequence[Record],
        geometry: Optional[ChartGeometry] = None,
    ) -> BaseView:
        """
        Build the view `view_id` over `records`, drawn at `geometry`
        (the view's default geometry when None).

        :raises KeyError: if no view is registered under view_id
        """
        try:
            cls = self._views[view_id]
        except KeyError:
            raise KeyError(f"View '{view_id}' not found")
        return cls(records, geometry)

    def all_classes(self) -> List[Type[BaseView]]:
        """Registered classes in registration order (scatter tab first)."""
        return list(self._views.values())
