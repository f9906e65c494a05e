from __future__ import annotations

"""Page definition loader
-------------------------
Defines the pydantic models for page definition files and builds component
graphs from YAML, including ${ENV} substitution and multi-doc files.

    version: "1"
    page: Shop
    nodes:
      - type: collection
        alias: Items
        selector: .item
      - type: component
        alias: Header
        selector: header
        nodes:
          - type: collection
            alias: Links
            selector: a
"""

from pathlib import Path
from typing import Annotated, Iterator, List, Literal, Optional, Union
import os
import re

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from pagepath.core.errors import PagePathError
from pagepath.core.model import Component, LeafDescriptor, SelectorType
from pagepath.core.page import PageObject
from pagepath.selectors.translator import translate


# ---------- Node models (discriminated union by 'type') ----------


class NodeDefBase(BaseModel):
    alias: str = Field(..., description="Name used in paths")
    selector_type: str = Field(default=SelectorType.css.value)
    text: Optional[str] = Field(default=None, description="Text for cssContainingText selectors")

    @field_validator("alias")
    @classmethod
    def _alias_non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("alias cannot be empty")
        if ">" in v:
            raise ValueError("alias cannot contain '>' (hop separator)")
        return v


class ElementDef(NodeDefBase):
    type: Literal["element"]
    selector: str

    @field_validator("selector")
    @classmethod
    def _selector_non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("selector cannot be empty")
        return v


class CollectionDef(ElementDef):
    type: Literal["collection"]


class ComponentDef(NodeDefBase):
    type: Literal["component"]
    selector: Optional[str] = Field(default=None, description="Omit for a grouping without its own scope")
    collection: bool = Field(default=False, description="Selector matches repeated blocks (rows, cards)")
    nodes: List["NodeDef"] = Field(default_factory=list)

    @model_validator(mode="after")
    def _collection_needs_selector(self) -> "ComponentDef":
        if self.collection and not self.selector:
            raise ValueError("a repeated component needs a selector")
        return self


NodeDef = Annotated[Union[ElementDef, CollectionDef, ComponentDef], Field(discriminator="type")]
ComponentDef.model_rebuild()


class PageDef(BaseModel):
    version: str = Field(default="1")
    page: str = Field(..., description="Page name, e.g. 'LoginPage'")
    description: Optional[str] = None
    nodes: List[NodeDef] = Field(default_factory=list)

    @field_validator("page")
    @classmethod
    def _page_non_empty(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("page cannot be empty")
        return v


# ---------- Building ----------


def _populate(component: Component, nodes: List[NodeDef]) -> None:
    for node in nodes:
        if isinstance(node, ComponentDef):
            child = Component(node.alias, node.selector, node.selector_type, node.text, collection=node.collection)
            _populate(child, node.nodes)
            component.define_component(child)
        elif isinstance(node, CollectionDef):
            component.define_collection(node.alias, node.selector, node.selector_type, node.text)
        else:
            component.define_element(node.alias, node.selector, node.selector_type, node.text)


def build_page(definition: PageDef) -> PageObject:
    page = PageObject(alias=definition.page)
    _populate(page, definition.nodes)
    return page


def check_definitions(component: Component, prefix: str = "") -> Iterator[tuple[str, PagePathError]]:
    """
    Translate every selector in the graph and yield ``(path, error)`` for the
    ones resolution would reject. Resolution itself only checks what it reaches.
    """
    for alias, node in component.children():
        path = f"{prefix} > {alias}" if prefix else alias
        if isinstance(node, LeafDescriptor) or node.has_selector:
            try:
                translate(node)
            except PagePathError as e:
                yield path, e
        if isinstance(node, Component):
            yield from check_definitions(node, path)


# ---------- Public API ----------


_ENV_REF = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def _subst_env(obj):
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), m.group(0)), obj)
    if isinstance(obj, list):
        return [_subst_env(x) for x in obj]
    if isinstance(obj, dict):
        return {k: _subst_env(v) for k, v in obj.items()}
    return obj


def _validation_message(ve: ValidationError, header: str) -> str:
    lines = [header]
    for e in ve.errors():
        loc = ".".join(str(p) for p in e.get("loc", []))
        msg = e.get("msg", "invalid value")
        lines.append(f"  - {loc}: {msg}")
    return "\n".join(lines)


def load_pages_file(path: Path | str) -> list[PageDef]:
    """Load one or more page definitions from a YAML file (supports multi-document)."""
    page_path = Path(path)
    if not page_path.exists():
        raise FileNotFoundError(f"Page definition file not found: {page_path}")
    try:
        docs = list(yaml.safe_load_all(page_path.read_text(encoding="utf-8")))
    except yaml.YAMLError as ye:
        raise ValueError(f"YAML parse error in {page_path}: {ye}") from ye

    out: list[PageDef] = []
    for idx, data in enumerate(docs, start=1):
        if data is None:
            continue
        if not isinstance(data, dict):
            raise ValueError(f"Document {idx} in {page_path} must be a mapping/object.")
        try:
            out.append(PageDef.model_validate(_subst_env(data)))
        except ValidationError as ve:
            raise ValueError(_validation_message(ve, f"Invalid page definition '{page_path}' (document {idx}):")) from ve
    if not out:
        raise ValueError(f"No page definitions found in {page_path}")
    return out


def load_page(path: Path | str, name: Optional[str] = None) -> PageObject:
    """Build the page named ``name`` (or the only/first page) from a definition file."""
    definitions = load_pages_file(path)
    if name is None:
        return build_page(definitions[0])
    for definition in definitions:
        if definition.page == name:
            return build_page(definition)
    known = ", ".join(d.page for d in definitions)
    raise ValueError(f"No page '{name}' in {path} (found: {known})")


__all__ = [
    "ElementDef",
    "CollectionDef",
    "ComponentDef",
    "PageDef",
    "build_page",
    "check_definitions",
    "load_page",
    "load_pages_file",
]
