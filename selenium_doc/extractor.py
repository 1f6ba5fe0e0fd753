"""
Module 2: Rule-based command extractor.

Turns one <dt>/<dd> pair of the reference page into a Command, and one
argument <li> into an Argument.

Typical markup of a command entry (after sectioning):

    <dt><strong><a name="type"></a>type(locator, value)</strong></dt>
    <dd>Sets the value of an input field, as though you typed it in.
        <p>Arguments:</p>
        <ul>
            <li>locator - an <a href="#locators">element locator</a></li>
            <li>value - the value to type</li>
        </ul>
    </dd>

Accessor entries additionally carry a "Returns:" block and a
"Related Assertions, automatically generated:" list after the arguments.

Pipeline position: Stage 2 of 3 (Preprocessor → Extractor → CatalogBuilder).
Input:  lxml elements from Preprocessor.sectionize()
Output: unclassified Command models
"""

import re
from lxml import etree

from .schemas import Command, Argument, ReturnValue, DEFAULT_ARGUMENT_TYPE
from .preprocessor import plain_text
from .exceptions import ShapeViolation
from .logger import get_module_logger

logger = get_module_logger("extractor")

# "<li> name - description </li>"; the name is a plain identifier, the
# description is everything up to the closing tag (markup included).
ARGUMENT_PATTERN = re.compile(
    r'^<li[^>]*>\s*(?P<name>[a-zA-Z0-9]+)\s*-\s*(?P<description>.*\S)\s*</li>$',
    re.DOTALL
)

# Sections that end the free-text description, in priority order. The first
# marker present in the entry is the stop point.
DESCRIPTION_STOP_MARKERS = (
    r'<p>Arguments:</p>',
    r'<dl>\s*<dt>Returns:</dt>',
    r'<p>Related Assertions, automatically generated:</p>',
)
DESCRIPTION_END = r'</dd>$'
DESCRIPTION_PATTERN = r'^<dd[^>]*>\s*(?P<description>.+?)\s*{stop}'

ARGUMENTS_XPATH = "p[text()='Arguments:']/following-sibling::ul[1]/li"
ANCHOR_XPATH = "descendant::a[@name]"


def serialize(element) -> str:
    """Serialized markup of an element (without its tail) as plain text."""
    return plain_text(etree.tostring(element, encoding="unicode", with_tail=False))


class Extractor:
    """Extracts Command and Argument models from definition-list entries."""

    def parse_argument(self, li) -> Argument:
        """
        Parse one argument list item.

        Args:
            li: <li> element of the list that follows "Arguments:"

        Returns:
            Argument with the default type (no type is stated in the docs)

        Raises:
            ShapeViolation: if the item is not "name - description"
        """
        text = serialize(li)
        match = ARGUMENT_PATTERN.match(text)
        if not match:
            raise ShapeViolation("Error at parse argument description", fragment=text)

        return Argument(
            name=match.group("name"),
            type=DEFAULT_ARGUMENT_TYPE,
            description=match.group("description"),
        )

    def parse_name(self, dt) -> str:
        """Command name: the name attribute of the anchor inside the <dt>."""
        anchors = dt.xpath(ANCHOR_XPATH)
        if not anchors:
            raise ShapeViolation("Command definition has no named anchor", fragment=serialize(dt))
        return anchors[0].get("name")

    def parse_description(self, dd) -> str:
        """
        Free-text description of a command: the <dd> content up to the first
        of "Arguments:", "Returns:" or "Related Assertions..." (or the end).
        """
        text = serialize(dd)

        stop = DESCRIPTION_END
        for marker in DESCRIPTION_STOP_MARKERS:
            if re.search(marker, text):
                stop = marker
                break

        match = re.match(DESCRIPTION_PATTERN.format(stop=stop), text, re.DOTALL)
        if not match:
            raise ShapeViolation("Error at parse command description", fragment=text)
        return match.group("description")

    def parse_command(self, dt, dd) -> Command:
        """
        Parse a command from its definition (<dt>) and description (<dd>) nodes.

        The return value is a placeholder: the "Returns:" block is not parsed,
        the type comes from the driver command list during reconciliation.

        Raises:
            ShapeViolation: if the name, description or an argument does not match
            DuplicateKeyError: if two arguments share a name
        """
        command = Command(
            name=self.parse_name(dt),
            description=self.parse_description(dd),
            return_value=ReturnValue(),
        )

        for li in dd.xpath(ARGUMENTS_XPATH):
            command.add_argument(self.parse_argument(li))

        logger.debug(f"Parsed '{command.name}' with arguments {command.argument_names()}")
        return command


def parse_argument(li) -> Argument:
    """Convenience function to parse one argument <li>."""
    return Extractor().parse_argument(li)


def parse_command(dt, dd) -> Command:
    """Convenience function to parse one <dt>/<dd> pair."""
    return Extractor().parse_command(dt, dd)
