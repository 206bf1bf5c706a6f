"""
Top-level package for the film browser.

This package exposes the core architecture (domain, views, UI adapters).
Most code should import from submodules such as:
    film_browser.core
    film_browser.views
    film_browser.ui
"""

__all__: list[str] = []
