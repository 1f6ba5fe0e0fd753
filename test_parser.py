#!/usr/bin/env python3
"""
Tests for the catalog builder: the whole reference page → base name → Command.

Uses a small hand-written page with the same layout as the Selenium
reference (one <dl> of actions, the "accessors" anchor, one <dl> of accessors).
"""

import pytest

from selenium_doc.parser import CatalogBuilder, Catalog, build_catalog
from selenium_doc.classifier import Category, Subcategory
from selenium_doc.schemas import ASSERT_NOTE
from selenium_doc.exceptions import DuplicateKeyError, ShapeViolation


ACTIONS = """
<dt><strong><a name="click"></a>click(locator)</strong></dt>
<dd>Clicks on a link.
    <p>Arguments:</p>
    <ul>
        <li>locator - an element locator</li>
    </ul>
</dd>
<dt><strong><a name="waitForPageToLoad"></a>waitForPageToLoad(timeout)</strong></dt>
<dd>Waits for a new page to load.
    <p>Arguments:</p>
    <ul><li>timeout - a timeout in milliseconds</li></ul>
</dd>
"""

ACCESSORS = """
<dt><strong><a name="storeTitle"></a>storeTitle(variableName)</strong></dt>
<dd>Gets the title of the current page.
    <p>Arguments:</p>
    <ul><li>variableName - the name of a variable</li></ul>
    <dl><dt>Returns:</dt><dd>the title of the current page</dd></dl>
    <p>Related Assertions, automatically generated:</p>
    <ul><li>assertTitle ( pattern )</li></ul>
</dd>
<dt><strong><a name="assertSelected"></a>assertSelected(selectLocator)</strong></dt>
<dd>Deprecated, documented for compatibility only.</dd>
"""


def make_page(actions: str = ACTIONS, accessors: str = ACCESSORS) -> str:
    return f"""<html><body>
<h1>Selenium Reference</h1>
<h2>Selenium Actions</h2>
<dl>{actions}</dl>
<a name="accessors"></a>
<h2>Selenium Accessors</h2>
<dl>{accessors}</dl>
<h2>Parameter construction and Variables</h2>
</body></html>"""


@pytest.fixture
def catalog() -> Catalog:
    return CatalogBuilder().build(make_page())


def test_catalog_keys_are_lower_case_base_names(catalog):
    assert sorted(catalog.keys()) == ["click", "title", "waitforpagetoload"]
    assert "Title" in catalog
    assert catalog.get("TITLE").name == "storeTitle"


def test_click_end_to_end(catalog):
    click = catalog["click"]

    assert click.name == "click"
    assert click.category is Category.ACTION
    assert click.subcategory is Subcategory.BASE
    assert click.description == "Clicks on a link."
    assert len(click.arguments) == 1
    assert click.arguments[0].name == "locator"
    assert click.arguments[0].type == "string"
    assert click.derived_commands == {}


def test_wait_for_page_to_load_is_an_action(catalog):
    command = catalog["waitforpagetoload"]
    assert command.category is Category.ACTION
    assert command.subcategory is Subcategory.BASE


def test_accessor_has_derived_assertions(catalog):
    store_title = catalog["title"]

    assert store_title.category is Category.ACCESSOR
    assert store_title.subcategory is Subcategory.STORE
    assert store_title.description == "Gets the title of the current page."
    assert sorted(store_title.derived_commands) == [
        "assertNotTitle", "assertTitle",
        "verifyNotTitle", "verifyTitle",
        "waitForNotTitle", "waitForTitle",
    ]

    assert_title = store_title.derived_commands["assertTitle"]
    assert assert_title.subcategory is Subcategory.ASSERT
    assert assert_title.argument_names() == []
    assert "{@link storeTitle}" in assert_title.description
    assert assert_title.description.endswith(ASSERT_NOTE)
    # the source keeps its own argument
    assert store_title.argument_names() == ["variableName"]


def test_excluded_commands_are_skipped(catalog):
    assert "selected" not in catalog
    assert all(command.name != "assertSelected" for command in catalog.commands)


def test_by_category(catalog):
    assert [c.name for c in catalog.by_category(Category.ACCESSOR)] == ["storeTitle"]
    assert sorted(c.name for c in catalog.by_category(Category.ACTION)) == ["click", "waitForPageToLoad"]


def test_duplicate_base_name_across_regions_is_fatal():
    accessors = ACCESSORS + """
<dt><a name="storeClick"></a>storeClick(variableName)</dt>
<dd>Clashes with the click action.</dd>
"""
    with pytest.raises(DuplicateKeyError) as exc_info:
        build_catalog(make_page(accessors=accessors))
    assert exc_info.value.keys == ["click"]
    assert "click" in str(exc_info.value)


def test_duplicate_base_name_within_region_is_fatal():
    actions = ACTIONS + """
<dt><a name="clickAndWait"></a>clickAndWait(locator)</dt>
<dd>Clicks and waits.</dd>
"""
    with pytest.raises(DuplicateKeyError) as exc_info:
        build_catalog(make_page(actions=actions))
    assert exc_info.value.keys == ["click"]
    assert exc_info.value.details["commands"] == ["click", "clickAndWait"]


def test_builder_starts_clean_on_every_build():
    builder = CatalogBuilder()
    first = builder.build(make_page())
    second = builder.build(make_page())

    assert first.keys() == second.keys()
    assert first["click"] is not second["click"]


def test_custom_exclusion_list():
    catalog = CatalogBuilder(exclusion_commands=["click", "assertSelected"]).build(make_page())
    assert "click" not in catalog


def test_page_without_regions_is_fatal():
    with pytest.raises(ShapeViolation):
        build_catalog("<html><body><h2>Nothing here</h2></body></html>")


def test_bad_argument_aborts_whole_build():
    actions = ACTIONS.replace("locator - an element locator", "locator: an element locator")
    with pytest.raises(ShapeViolation) as exc_info:
        build_catalog(make_page(actions=actions))
    assert "locator: an element locator" in exc_info.value.fragment


def test_catalog_to_dict_is_json_ready(catalog):
    data = catalog.to_dict()
    assert data["click"]["category"] == "action"
    assert data["title"]["derived_commands"]["verifyTitle"]["subcategory"] == "verifyAssertion"


def test_accessors_region_ends_at_next_heading():
    """A definition list in a later section is not part of the accessors."""
    page = make_page().replace("</body>", """<dl>
<dt><a name="storeGlossary"></a>storeGlossary</dt>
<dd>Not a command.</dd>
</dl>
<h2>Appendix</h2>
</body>""")
    catalog = build_catalog(page)

    assert "glossary" not in catalog
    assert sorted(catalog.keys()) == ["click", "title", "waitforpagetoload"]
