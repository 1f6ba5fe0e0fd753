"""
Preprocessor module: string-level cleanup and sectioning of the reference page.

- plain_text() collapses layout whitespace so regexes over serialized
  fragments do not depend on how the page was indented.
- Preprocessor.sectionize() carves the "Selenium Actions" and
  "Selenium Accessors" regions out of the raw page and turns them into one
  small XML tree that the Extractor can walk with XPath.

Design principle: FAIL FAST. The page is a fixed snapshot; if a region is
missing or does not parse, the layout changed and nothing downstream can be
trusted.

Pipeline position: Stage 1 of 3 (Preprocessor → Extractor → CatalogBuilder).
Input:  raw HTML string of the reference page
Output: dict with the XML document root and its "actions"/"accessors" nodes
"""

import re
from html.entities import name2codepoint

from lxml import etree

from .logger import get_module_logger
from .exceptions import ShapeViolation

logger = get_module_logger("preprocessor")


# Single anchored matches over the whole page. The actions body is greedy up to
# the "accessors" anchor; the accessors body stops at the first </dl> followed
# by a heading (nested "Returns:" lists never are).
ACTIONS_PATTERN = re.compile(
    r'<h2>Selenium Actions</h2>\s*(<dl>.+</dl>)\s*<a name="accessors"></a>', re.DOTALL
)
ACCESSORS_PATTERN = re.compile(
    r'<h2>Selenium Accessors</h2>\s*(<dl>.+?</dl>)\s*<h2>', re.DOTALL
)

# <br> is valid HTML but not well-formed XML
LINE_BREAK_PATTERN = re.compile(r'<br\s*/?>', re.IGNORECASE)

# Named HTML entities beyond the five XML predefined ones are unknown to an
# XML parser; they are rewritten to numeric references.
ENTITY_PATTERN = re.compile(r'&([a-zA-Z][a-zA-Z0-9]*);')
XML_ENTITIES = frozenset(['amp', 'lt', 'gt', 'quot', 'apos'])

# Runs of 2..15 spaces, longest first (a longer run leaves a remainder)
SPACE_RUN_PATTERN = re.compile(r' {2,15}')

DOCUMENT_TEMPLATE = (
    "<?xml version='1.0' standalone='yes'?>\n"
    "<doc>\n"
    "<actions>\n{actions}\n</actions>\n"
    "<accessors>\n{accessors}\n</accessors>\n"
    "</doc>"
)


def plain_text(text: str) -> str:
    """
    Strip layout whitespace: CR, LF and TAB become spaces, then each run of
    2-15 spaces becomes a single space.
    """
    text = text.replace('\r', ' ').replace('\n', ' ').replace('\t', ' ')
    return SPACE_RUN_PATTERN.sub(' ', text)


class Preprocessor:
    """
    Turns the raw reference page into a navigable tree of its two command regions.
    """

    # Browsers treat these declared charsets as their windows-* supersets
    WHATWG_CHARSET_MAP = {
        'iso-8859-1': 'windows-1252',
        'iso8859-1': 'windows-1252',
        'latin-1': 'windows-1252',
        'latin1': 'windows-1252',
        'us-ascii': 'windows-1252',
        'ascii': 'windows-1252',
    }

    @staticmethod
    def detect_charset_from_bytes(raw_bytes: bytes) -> str:
        """
        Detect charset from raw HTML bytes by scanning the first 2048 bytes
        for <meta charset=...> or <meta http-equiv="Content-Type" content="...; charset=...">.

        Returns the browser-equivalent charset or 'utf-8' as default.
        """
        head_str = raw_bytes[:2048].decode('ascii', errors='ignore')

        m = re.search(r'<meta[^>]+charset=["\']?\s*([^\s"\';>]+)', head_str, re.IGNORECASE)
        if not m:
            return 'utf-8'

        charset = m.group(1).strip().lower()
        return Preprocessor.WHATWG_CHARSET_MAP.get(charset, charset)

    def _extract_region(self, html: str, pattern: re.Pattern, label: str) -> str:
        match = pattern.search(html)
        if not match:
            raise ShapeViolation(
                f"Reference page has no '{label}' region",
                fragment=html[:500]
            )
        return match.group(1)

    def _to_xml_text(self, html: str) -> str:
        """Make an HTML fragment acceptable to a strict XML parser."""
        html = LINE_BREAK_PATTERN.sub('', html)

        def numeric_entity(match: re.Match) -> str:
            name = match.group(1)
            if name in XML_ENTITIES or name not in name2codepoint:
                return match.group(0)
            return f"&#{name2codepoint[name]};"

        return ENTITY_PATTERN.sub(numeric_entity, html)

    def sectionize(self, html: str) -> dict:
        """
        Split the reference page into its action and accessor regions.

        Args:
            html: Raw HTML of the reference page

        Returns:
            dict with:
                - document:  root <doc> element
                - actions:   <actions> element wrapping the actions <dl>
                - accessors: <accessors> element wrapping the accessors <dl>

        Raises:
            ShapeViolation: if a region is missing or the regions are not well-formed
        """
        actions_html = self._extract_region(html, ACTIONS_PATTERN, "Selenium Actions")
        accessors_html = self._extract_region(html, ACCESSORS_PATTERN, "Selenium Accessors")
        logger.debug(
            f"Regions found: actions={len(actions_html)} chars, "
            f"accessors={len(accessors_html)} chars"
        )

        xml_text = DOCUMENT_TEMPLATE.format(
            actions=self._to_xml_text(actions_html),
            accessors=self._to_xml_text(accessors_html),
        )

        try:
            document = etree.fromstring(xml_text.encode('utf-8'))
        except etree.XMLSyntaxError as e:
            raise ShapeViolation(
                f"Command regions are not well-formed: {e}",
                fragment=xml_text[:500]
            ) from e

        return {
            "document": document,
            "actions": document.find("actions"),
            "accessors": document.find("accessors"),
        }


def sectionize(html: str) -> dict:
    """Convenience function to sectionize a reference page."""
    return Preprocessor().sectionize(html)
