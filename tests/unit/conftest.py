import pytest

from pagepath.core.model import Component
from pagepath.core.page import PageObject
from pagepath.drivers.chain import ChainDriver


class RecordingDriver(ChainDriver):
    """Chain driver that records rewrites, enumerations and text fetches."""

    def __init__(self, texts=None, rewritable=True):
        super().__init__(root_selector="html", js_engine="pagepath-js", texts=texts)
        self.rewritable = rewritable
        self.rewrites = []
        self.enumerated = []
        self.fetched = []

    def rewrite_with_text(self, collection, substring):
        self.rewrites.append((str(collection), substring))
        if not self.rewritable:
            return None
        return super().rewrite_with_text(collection, substring)

    async def filter_by_text(self, collection):
        self.enumerated.append(str(collection))
        async for element, fetch in super().filter_by_text(collection):
            yield element, self._recording(element, fetch)

    def _recording(self, element, fetch):
        async def fetch_and_record():
            self.fetched.append(str(element))
            return await fetch()
        return fetch_and_record


@pytest.fixture
def make_driver():
    return RecordingDriver


@pytest.fixture
def driver():
    return RecordingDriver()


@pytest.fixture
def shop_page(driver):
    page = PageObject(driver, alias="Shop")
    page.define_collection("Items", ".item")
    page.define_element("Title", "//h1", "xpath")

    header = Component("Header", "header")
    header.define_collection("Links", "a")
    header.define_element("Logo", "img.logo")
    page.define_component(header)

    rows = Component("Rows", "tr", collection=True)
    rows.define_element("Name", "td.name")
    rows.define_collection("Cells", "td")
    page.define_component(rows)
    return page


@pytest.fixture
def lookups(monkeypatch):
    """Aliases looked up through Component.lookup, in order."""
    seen = []
    original = Component.lookup

    def counting(self, alias):
        seen.append(alias)
        return original(self, alias)

    monkeypatch.setattr(Component, "lookup", counting)
    return seen
