"""
Core package for pagepath.
Lightweight package init to avoid import cycles.

Consumers should import submodules directly, e.g.:
  from pagepath.core.page import PageObject
  from pagepath.core.resolver import GraphResolver
  from pagepath.core.page_loader import load_page
"""

__all__: list[str] = []
