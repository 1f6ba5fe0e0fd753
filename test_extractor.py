"""
Tests for whitespace normalization, sectioning and command/argument extraction.

Fragments are built inline with lxml, the same way Preprocessor.sectionize()
hands them to the Extractor.
"""

import pytest
from lxml import etree

from selenium_doc.preprocessor import Preprocessor, plain_text
from selenium_doc.extractor import Extractor
from selenium_doc.schemas import DEFAULT_ARGUMENT_TYPE, ReturnType
from selenium_doc.exceptions import ShapeViolation, DuplicateKeyError


def entry(dt_dd: str):
    """(dt, dd) elements of a one-entry definition list."""
    dl = etree.fromstring(f"<dl>{dt_dd}</dl>")
    return dl.find("dt"), dl.find("dd")


# --- plain_text ---

def test_plain_text_collapses_layout_whitespace():
    assert plain_text("a\r\n\tb") == "a b"
    assert plain_text("Clicks   on\n    a link.") == "Clicks on a link."


def test_plain_text_collapses_at_most_fifteen_spaces_per_run():
    assert plain_text("a" + " " * 15 + "b") == "a b"
    assert plain_text("a" + " " * 16 + "b") == "a  b"


# --- Preprocessor.sectionize ---

SECTIONED_PAGE = """
<h2>Selenium Actions</h2>
<dl><dt><a name="click"></a>click(locator)</dt><dd>Clicks on a link.<br>Really.</dd></dl>
<a name="accessors"></a>
<h2>Selenium Accessors</h2>
<dl><dt><a name="storeTitle"></a>storeTitle(variableName)</dt><dd>Gets the title&nbsp;text.</dd></dl>
<h2>Parameter construction and Variables</h2>
"""


def test_sectionize_builds_labeled_regions():
    sections = Preprocessor().sectionize(SECTIONED_PAGE)

    assert sections["actions"].tag == "actions"
    assert sections["accessors"].tag == "accessors"
    assert [a.get("name") for a in sections["actions"].iter("a")] == ["click"]
    assert [a.get("name") for a in sections["accessors"].iter("a")] == ["storeTitle"]


def test_sectionize_strips_line_breaks_and_named_entities():
    sections = Preprocessor().sectionize(SECTIONED_PAGE)

    action_dd = sections["actions"].find(".//dd")
    assert action_dd.find("br") is None
    accessor_dd = sections["accessors"].find(".//dd")
    assert accessor_dd.text == "Gets the title\u00a0text."


def test_sectionize_without_accessors_region_is_fatal():
    page = SECTIONED_PAGE.replace("<h2>Selenium Accessors</h2>", "<h2>Other</h2>")
    with pytest.raises(ShapeViolation) as exc_info:
        Preprocessor().sectionize(page)
    # the diagnostic shows the page itself, not the expected layout
    assert exc_info.value.fragment == page[:500]


def test_sectionize_without_actions_region_is_fatal():
    page = SECTIONED_PAGE.replace('<a name="accessors"></a>', "")
    with pytest.raises(ShapeViolation):
        Preprocessor().sectionize(page)


def test_sectionize_malformed_region_is_fatal():
    page = SECTIONED_PAGE.replace("Clicks on a link.", "Clicks <b>on a link.")
    with pytest.raises(ShapeViolation):
        Preprocessor().sectionize(page)


def test_detect_charset_from_bytes():
    assert Preprocessor.detect_charset_from_bytes(b'<meta charset="ISO-8859-1">') == "windows-1252"
    assert Preprocessor.detect_charset_from_bytes(b"<html><body>") == "utf-8"


# --- Extractor.parse_argument ---

def test_parse_argument():
    li = etree.fromstring("<li>locator - an element locator</li>")
    argument = Extractor().parse_argument(li)

    assert argument.name == "locator"
    assert argument.description == "an element locator"
    assert argument.type == DEFAULT_ARGUMENT_TYPE == "string"


def test_parse_argument_keeps_markup_and_later_hyphens():
    li = etree.fromstring(
        "<li>\n    functionDefinition   -   a string - for example <code>return x;</code>\n  </li>"
    )
    argument = Extractor().parse_argument(li)

    assert argument.name == "functionDefinition"
    assert argument.description == "a string - for example <code>return x;</code>"


@pytest.mark.parametrize("markup", [
    "<li>locator an element locator</li>",
    "<li>locator - </li>",
    "<li> - an element locator</li>",
])
def test_parse_argument_shape_violation(markup):
    with pytest.raises(ShapeViolation) as exc_info:
        Extractor().parse_argument(etree.fromstring(markup))
    assert exc_info.value.fragment.startswith("<li")


# --- Extractor.parse_command ---

def test_parse_command_with_arguments():
    dt, dd = entry(
        '<dt><strong><a name="type"></a>type(locator, value)</strong></dt>'
        "<dd>Sets the value of an input field.\n"
        "  <p>Arguments:</p>\n"
        "  <ul><li>locator - an element locator</li><li>value - the value to type</li></ul>\n"
        "</dd>"
    )
    command = Extractor().parse_command(dt, dd)

    assert command.name == "type"
    assert command.description == "Sets the value of an input field."
    assert command.argument_names() == ["locator", "value"]
    assert command.return_value.type == ReturnType.VOID
    assert command.category is None


def test_parse_command_stops_at_returns_block():
    dt, dd = entry(
        '<dt><a name="storeTitle"></a>storeTitle()</dt>'
        "<dd>Gets the title of the current page.<dl><dt>Returns:</dt><dd>the title</dd></dl></dd>"
    )
    command = Extractor().parse_command(dt, dd)

    assert command.description == "Gets the title of the current page."
    assert command.arguments == []


def test_parse_command_stops_at_related_assertions():
    dt, dd = entry(
        '<dt><a name="storeAlertPresent"></a>storeAlertPresent()</dt>'
        "<dd>Has an alert occurred?"
        "<p>Related Assertions, automatically generated:</p>"
        "<ul><li>assertAlertPresent ( )</li></ul></dd>"
    )
    command = Extractor().parse_command(dt, dd)

    assert command.description == "Has an alert occurred?"
    assert command.arguments == []


def test_parse_command_without_markers_keeps_whole_description():
    dt, dd = entry('<dt><a name="refresh"></a>refresh()</dt><dd>Simulates the <b>refresh</b> button.</dd>')
    command = Extractor().parse_command(dt, dd)

    assert command.description == "Simulates the <b>refresh</b> button."


def test_parse_command_ignores_lists_before_arguments():
    """Only the list right after "Arguments:" holds arguments."""
    dt, dd = entry(
        '<dt><a name="addLocationStrategy"></a>addLocationStrategy()</dt>'
        "<dd>Defines a strategy. We pass:<ul><li>locator: the string</li></ul>"
        "<p>Arguments:</p><ul><li>strategyName - the name of the strategy</li></ul>"
        "<ul><li>unrelated - list</li></ul></dd>"
    )
    command = Extractor().parse_command(dt, dd)

    assert command.argument_names() == ["strategyName"]
    assert command.description.startswith("Defines a strategy. We pass:<ul>")


def test_parse_command_duplicate_argument_is_fatal():
    dt, dd = entry(
        '<dt><a name="dragAndDrop"></a>dragAndDrop()</dt>'
        "<dd>Drags.<p>Arguments:</p>"
        "<ul><li>locator - first</li><li>locator - second</li><li>offset - third</li></ul></dd>"
    )
    with pytest.raises(DuplicateKeyError) as exc_info:
        Extractor().parse_command(dt, dd)
    assert exc_info.value.keys == ["locator"]


def test_parse_command_empty_description_is_fatal():
    dt, dd = entry('<dt><a name="close"></a>close()</dt><dd></dd>')
    with pytest.raises(ShapeViolation):
        Extractor().parse_command(dt, dd)


def test_parse_command_without_anchor_is_fatal():
    dt, dd = entry("<dt>close()</dt><dd>Closes.</dd>")
    with pytest.raises(ShapeViolation):
        Extractor().parse_command(dt, dd)
