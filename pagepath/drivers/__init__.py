"""
Drivers package
---------------
The capability interface the resolver composes locators through, plus the
dry-run chain driver. The Playwright driver is imported from its submodule:
  from pagepath.drivers.playwright_driver import PlaywrightDriver
"""

from .base import DriverAdapter, TextFetcher
from .chain import Chain, ChainDriver

__all__ = [
    "DriverAdapter",
    "TextFetcher",
    "Chain",
    "ChainDriver",
]
