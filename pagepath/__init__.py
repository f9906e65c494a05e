"""
pagepath
--------
Resolve page-object paths such as "Header > #2 of Links" into driver locators.
"""

__version__ = "0.1.0"
