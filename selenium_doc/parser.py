"""
Catalog builder: parses the whole reference page into commands keyed by base name.

Pipeline position: Stage 3 of 3 (Preprocessor → Extractor → CatalogBuilder).
Input:  raw HTML of the reference page
Output: Catalog (lower-cased base name → Command)

Base names must be unique across both regions. "click" documented as an
action and "storeClick" documented as an accessor would both claim the key
"click", and any later lookup by base name would be ambiguous, so the build
fails instead of picking one.
"""

from typing import Iterator, Optional

from .schemas import Command
from .classifier import Category, auto_generated_names
from .preprocessor import Preprocessor
from .extractor import Extractor
from .exceptions import DuplicateKeyError, ShapeViolation
from .logger import get_module_logger

logger = get_module_logger("parser")

# Commands documented on the page but skipped: assert* entries listed among
# the accessors (their accessor forms are covered elsewhere).
EXCLUDED_COMMANDS = (
    "assertErrorOnNext",
    "assertFailureOnNext",
    "assertSelected",
)

DEFINITIONS_XPATH = "descendant::a[@name]/ancestor::dt"
DESCRIPTION_XPATH = "following-sibling::dd[1]"

REGION_CATEGORIES = {
    "actions": Category.ACTION,
    "accessors": Category.ACCESSOR,
}


class Catalog:
    """Read-only mapping of lower-cased base name → Command."""

    def __init__(self, commands: dict[str, Command]):
        self._commands = dict(commands)

    def get(self, base_name: str) -> Optional[Command]:
        """Look a command up by base name (case-insensitive)."""
        return self._commands.get(base_name.lower())

    def by_category(self, category: Category) -> list[Command]:
        return [command for command in self._commands.values() if command.category is category]

    @property
    def commands(self) -> list[Command]:
        return list(self._commands.values())

    def keys(self) -> list[str]:
        return list(self._commands)

    def to_dict(self) -> dict:
        return {key: command.model_dump(mode="json") for key, command in self._commands.items()}

    def __contains__(self, base_name: str) -> bool:
        return base_name.lower() in self._commands

    def __getitem__(self, base_name: str) -> Command:
        return self._commands[base_name.lower()]

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)


class CatalogBuilder:
    """
    Builds a Catalog from the reference page.

    Each build() call is an independent pass; the builder keeps no state
    between calls.
    """

    def __init__(
        self,
        exclusion_commands=EXCLUDED_COMMANDS,
        preprocessor: Optional[Preprocessor] = None,
        extractor: Optional[Extractor] = None
    ):
        self.exclusion_commands = frozenset(exclusion_commands)
        self.preprocessor = preprocessor or Preprocessor()
        self.extractor = extractor or Extractor()

    def build(self, html: str) -> Catalog:
        """
        Parse every command of the page.

        Raises:
            ShapeViolation: if the page does not have the expected layout
            DuplicateKeyError: if two commands share a base name
            ClassificationGap: if a command name cannot be classified
        """
        logger.info("Building command catalog")
        sections = self.preprocessor.sectionize(html)

        actions = self._parse_region(sections["actions"], "actions")
        accessors = self._parse_region(sections["accessors"], "accessors")

        duplicates = sorted(set(actions) & set(accessors))
        if duplicates:
            raise DuplicateKeyError("Commands share a base name across regions", keys=duplicates)

        catalog = Catalog({**actions, **accessors})
        logger.info(
            f"Catalog complete: {len(catalog)} commands "
            f"({len(actions)} from actions, {len(accessors)} from accessors)"
        )
        return catalog

    def _parse_region(self, region, label: str) -> dict[str, Command]:
        commands = {}

        for dt in region.xpath(DEFINITIONS_XPATH):
            descriptions = dt.xpath(DESCRIPTION_XPATH)
            if not descriptions:
                raise ShapeViolation(
                    f"Command definition in the {label} region has no description",
                    fragment=self.extractor.parse_name(dt)
                )

            command = self.extractor.parse_command(dt, descriptions[0])
            if command.name in self.exclusion_commands:
                logger.debug(f"Skipping excluded command '{command.name}'")
                continue

            command.classify()
            if command.category is not REGION_CATEGORIES[label]:
                logger.debug(f"'{command.name}' classified as {command.category.value}, "
                             f"found among {label}")

            if command.category is Category.ACCESSOR:
                command.derived_commands = self._derive(command)

            key = command.base_name(lower=True)
            if key in commands:
                raise DuplicateKeyError(
                    f"Commands share a base name in the {label} region",
                    keys=[key],
                    details={"commands": [commands[key].name, command.name]}
                )
            commands[key] = command

        logger.info(f"Parsed {len(commands)} commands from {label}")
        return commands

    def _derive(self, accessor: Command) -> dict[str, Command]:
        """Auto-generated store/assert/verify/waitFor variants of an accessor."""
        return {
            name: accessor.create_with_name(name)
            for name in auto_generated_names(accessor.base_name())
            if name != accessor.name
        }


def build_catalog(html: str) -> Catalog:
    """Convenience function to build a catalog from a reference page."""
    return CatalogBuilder().build(html)
