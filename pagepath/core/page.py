from __future__ import annotations

"""Page objects
---------------
A page is the root component of a graph. Define elements, collections and
components on it, then address any node with a path:

    class LoginPage(PageObject):
        def __init__(self, driver):
            super().__init__(driver)
            self.define_collection("Buttons", "button")
            self.define_component(Header())

    await LoginPage(driver).get_element("Header > #Home in Links")
"""

from typing import Any, Optional

from pagepath.core.model import Component
from pagepath.core.resolver import GraphResolver
from pagepath.drivers.base import DriverAdapter
from pagepath.utils.logger import get_logger, log_with_context

log = get_logger(__name__)


class PageObject(Component):
    def __init__(self, driver: Optional[DriverAdapter] = None, alias: Optional[str] = None) -> None:
        super().__init__(alias=alias or type(self).__name__)
        self.driver = driver

    def resolver(self) -> GraphResolver:
        if self.driver is None:
            raise RuntimeError(f"page '{self.alias}' has no driver attached")
        return GraphResolver(self.driver)

    async def get_element(self, path: str) -> Any:
        """Resolve ``path`` from this page and return the driver's native locator."""
        scoped = log_with_context(log, page=self.alias, path=path)
        scoped.debug(f"get_element({path!r})")
        resolver = self.resolver()
        locator = await resolver.resolve_path(self, path)
        return resolver.driver.unwrap(locator)

