from .model import ChartGeometry, GlobalConfig
from .loader import load_global_config

__all__ = ["ChartGeometry", "GlobalConfig", "load_global_config"]
