from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from film_browser.config.model import GlobalConfig
from film_browser.core.base_view import BaseView
from film_browser.core.orchestrator import LoadResult, Status
from film_browser.core.view_registry import ViewRegistry


@dataclass
class AppConfig:
    """
    Shared, read-only state of the Dash app: configuration, the loaded records,
    the view registry and one instantiated view per registered id. Passed into
    layout + callback registration instead of module-level globals; per-user
    control values live in dcc.Store, never here.
    """
    config_root: Path
    global_config: GlobalConfig
    load: LoadResult
    registry: Optional[ViewRegistry] = None
    views: Dict[str, BaseView] = field(default_factory=dict)
    readiness: Dict[str, Status] = field(default_factory=dict)

    def validate(self) -> None:
        """Ensure all required services are attached before the app starts."""
        if self.registry is None:
            raise RuntimeError("AppConfig.registry must be initialized.")

    def view(self, view_id: str) -> BaseView:
        return self.views[view_id]

    def is_ready(self, view_id: str) -> bool:
        status = self.readiness.get(view_id)
        return status is not None and not status.is_error
