from .scatter_view import ScatterView
from .dashboard_view import DashboardView

__all__ = ["ScatterView", "DashboardView"]
