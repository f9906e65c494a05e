"""
Utilities package
-----------------
Settings, logging and timing helpers shared by the resolver and the CLI.
Consumers import submodules directly, e.g.:
  from pagepath.utils.config import get_settings
  from pagepath.utils.logger import get_logger
"""

__all__: list[str] = []
