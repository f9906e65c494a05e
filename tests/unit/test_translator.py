import pytest

from pagepath.core.errors import MissingText, UnknownSelectorType
from pagepath.core.model import Component, LeafDescriptor, NodeKind, Query, SelectorType
from pagepath.selectors.translator import translate


@pytest.mark.parametrize(
    "selector_type, expected",
    [("css", SelectorType.css), ("xpath", SelectorType.xpath), ("js", SelectorType.js)],
)
def test_plain_types_pass_through(selector_type, expected):
    leaf = LeafDescriptor("Save", "button.save", selector_type)
    assert translate(leaf) == Query(expected, "button.save")


def test_css_containing_text_carries_text():
    leaf = LeafDescriptor("Save", "button", "cssContainingText", text="Save")
    assert translate(leaf) == Query(SelectorType.cssContainingText, "button", "Save")


@pytest.mark.parametrize("text", [None, ""])
def test_css_containing_text_without_text(text):
    leaf = LeafDescriptor("Save", "button", "cssContainingText", text=text)
    with pytest.raises(MissingText) as exc:
        translate(leaf)
    assert "Save" in str(exc.value)


def test_unknown_selector_type():
    leaf = LeafDescriptor("Save", "button", "sizzle", kind=NodeKind.multiple)
    with pytest.raises(UnknownSelectorType) as exc:
        translate(leaf)
    assert "sizzle" in str(exc.value) and "Save" in str(exc.value)


def test_components_translate_like_leaves():
    assert translate(Component("Header", "//header", SelectorType.xpath)) == Query(SelectorType.xpath, "//header")


def test_registration_accepts_enum_members_and_defers_checks():
    page = Component("Page")
    leaf = page.define_element("Save", "button", SelectorType.cssContainingText)
    assert leaf.selector_type == "cssContainingText"
    assert leaf.text is None
    assert page.define_collection("Odd", "x", "made-up").selector_type == "made-up"
