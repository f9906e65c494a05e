import asyncio

from pagepath.core.page import PageObject
from pagepath.core.resolver import GraphResolver
from pagepath.drivers.chain import Chain
from pagepath.selectors.text_match import TextMatchOptimizer

LINK_TEXTS = {"html >> xpath=//a": ["About", "Home page", "Home", "Contact"]}


def links_page(driver):
    page = PageObject(driver)
    page.define_collection("CssLinks", "a")
    page.define_collection("XpathLinks", "//a", "xpath")
    return page


def resolve(page, path, optimizer=None):
    resolver = GraphResolver(page.driver, optimizer=optimizer)
    return str(asyncio.run(resolver.resolve_path(page, path)))


def test_css_collection_is_rewritten_without_enumeration(make_driver):
    driver = make_driver(texts={"html >> a": ["About", "Home"]})
    page = links_page(driver)
    assert resolve(page, "#Home in CssLinks") == "html >> a >> internal:has-text=/Home/ >> nth=0"
    assert driver.rewrites == [("html >> a", "Home")]
    assert driver.enumerated == []
    assert driver.fetched == []


def test_non_rewritable_collection_is_scanned_in_order_until_first_match(make_driver):
    driver = make_driver(texts=LINK_TEXTS)
    page = links_page(driver)
    assert resolve(page, "#Home in XpathLinks") == "html >> xpath=//a >> nth=1"
    assert driver.enumerated == ["html >> xpath=//a"]
    # "Home" and "Contact" are never read once "Home page" matched
    assert driver.fetched == ["html >> xpath=//a >> nth=0", "html >> xpath=//a >> nth=1"]


def test_scan_is_case_sensitive(make_driver):
    driver = make_driver(texts=LINK_TEXTS)
    page = links_page(driver)
    assert resolve(page, "#home in XpathLinks") == "html >> xpath=//a >> internal:has-text=/home/ >> nth=0"
    assert len(driver.fetched) == 4


def test_scan_without_match_keeps_the_text_condition(make_driver):
    driver = make_driver(texts=LINK_TEXTS)
    page = links_page(driver)
    # Not a bare position: the locator only ever matches an element containing the text
    assert resolve(page, "#Careers in XpathLinks") == "html >> xpath=//a >> internal:has-text=/Careers/ >> nth=0"
    assert len(driver.fetched) == 4


def test_scan_of_empty_collection(make_driver):
    driver = make_driver()
    page = links_page(driver)
    assert resolve(page, "#Home in XpathLinks") == "html >> xpath=//a >> internal:has-text=/Home/ >> nth=0"
    assert driver.enumerated == ["html >> xpath=//a"]
    assert driver.fetched == []


def test_driver_refusing_rewrite_falls_back_to_scan(make_driver):
    driver = make_driver(texts={"html >> a": ["About", "Home"]}, rewritable=False)
    page = links_page(driver)
    assert resolve(page, "#Home in CssLinks") == "html >> a >> nth=1"
    assert driver.rewrites == [("html >> a", "Home")]


def test_rewrite_disabled_forces_scan(make_driver):
    driver = make_driver(texts={"html >> a": ["About", "Home"]})
    page = links_page(driver)
    optimizer = TextMatchOptimizer(driver, rewrite=False)
    assert resolve(page, "#Home in CssLinks", optimizer=optimizer) == "html >> a >> nth=1"
    assert driver.rewrites == []


def test_text_value_with_marker_is_matched_literally(make_driver):
    driver = make_driver(texts={"html >> xpath=//a": ["Pay", "$5 off"]})
    page = links_page(driver)
    assert resolve(page, "#$5 in XpathLinks") == "html >> xpath=//a >> nth=1"


def test_optimizer_directly(make_driver):
    driver = make_driver()
    collection = Chain(("html", ".card"), "css")
    result = asyncio.run(TextMatchOptimizer(driver).match_by_text(collection, "Sale"))
    assert str(result) == "html >> .card >> internal:has-text=/Sale/ >> nth=0"


def test_rewrite_matches_case_sensitively_like_the_scan(make_driver):
    driver = make_driver(texts={"html >> a": ["Home"]})
    page = links_page(driver)
    assert resolve(page, "#home in CssLinks") == "html >> a >> internal:has-text=/home/ >> nth=0"
    optimizer = TextMatchOptimizer(driver, rewrite=False)
    assert resolve(page, "#home in CssLinks", optimizer=optimizer) == "html >> a >> internal:has-text=/home/ >> nth=0"


def test_text_pattern_is_escaped(make_driver):
    driver = make_driver()
    page = links_page(driver)
    assert resolve(page, "#$5 in CssLinks") == r"html >> a >> internal:has-text=/\$5/ >> nth=0"
    assert resolve(page, "#a/b in CssLinks") == r"html >> a >> internal:has-text=/a\/b/ >> nth=0"
