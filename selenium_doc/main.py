"""
Main orchestrator for the Selenium doc generator.

Coordinates the pipeline: CatalogBuilder (Preprocessor → Extractor) →
reconciliation with the driver command list → CodeGenerator.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from .parser import Catalog, CatalogBuilder
from .preprocessor import Preprocessor
from .driver_commands import DriverCommands
from .code_generator import CodeGenerator
from .schemas import Command
from .logger import get_module_logger, setup_logger

logger = get_module_logger("main")


@dataclass
class Reconciliation:
    """Commands to render, plus the driver commands nothing describes (grouped by base name)."""
    commands: list[Command] = field(default_factory=list)
    not_found: dict[str, list[str]] = field(default_factory=dict)


class DocGenerator:
    """
    Main orchestrator.

    1. CatalogBuilder: parses the reference page into a Catalog
    2. reconcile():    matches the driver's commands against manual
                       descriptions and the Catalog
    3. CodeGenerator:  renders the stub class
    """

    def __init__(
        self,
        manual_descriptions: Optional[dict[str, Command]] = None,
        catalog_builder: Optional[CatalogBuilder] = None,
        code_generator: Optional[CodeGenerator] = None,
        log_level: int = None
    ):
        if log_level is not None:
            setup_logger(level=log_level)

        self.manual_descriptions = manual_descriptions or {}
        self.catalog_builder = catalog_builder or CatalogBuilder()
        self.code_generator = code_generator or CodeGenerator()

    def parse(self, html: str) -> Catalog:
        return self.catalog_builder.build(html)

    def parse_file(self, file_path: Union[str, Path]) -> Catalog:
        """Parse a reference page from disk, decoding it with its declared charset."""
        raw_bytes = Path(file_path).read_bytes()
        charset = Preprocessor.detect_charset_from_bytes(raw_bytes)
        return self.parse(raw_bytes.decode(charset, errors='replace'))

    def reconcile(self, catalog: Catalog, driver_commands: DriverCommands) -> Reconciliation:
        """
        Find a description for every command the driver supports.

        Lookup order per command: manual description of that exact name, then
        the catalog entry with the same base name (converted to the command
        with create_with_name and given the driver's return type). Commands
        found in neither are reported under their base name.
        """
        result = Reconciliation()

        for name, return_type in driver_commands.items():
            if name in self.manual_descriptions:
                result.commands.append(self.manual_descriptions[name])
                continue

            # classify() only needs the name
            probe = Command(name=name).classify()
            documented = catalog.get(probe.base_name(lower=True))
            if documented is None:
                result.not_found.setdefault(probe.base_name(), []).append(name)
                continue

            command = documented.create_with_name(name)
            command.return_value.type = return_type
            result.commands.append(command)

        logger.info(f"Reconciled {len(result.commands)} of {len(driver_commands)} driver commands")
        if result.not_found:
            logger.warning(f"Not found description for commands: {result.not_found}")
        return result

    def catalog_commands(self, catalog: Catalog) -> list[Command]:
        """Every catalog command followed by its derived commands (no driver list)."""
        commands = []
        for command in catalog.commands:
            commands.append(command)
            commands.extend(command.derived_commands.values())
        return commands

    def generate(self, html: str, driver_commands: Optional[DriverCommands] = None) -> str:
        """
        Parse the reference page and render the stub class.

        Without a driver command list, the catalog itself (with derived
        commands) is rendered.
        """
        logger.info("Starting pipeline")
        catalog = self.parse(html)

        if driver_commands is None:
            commands = self.catalog_commands(catalog)
        else:
            commands = self.reconcile(catalog, driver_commands).commands

        return self.code_generator.generate(commands)


def generate_doc(html: str, driver_source: Optional[str] = None) -> str:
    """Convenience function: reference page (+ driver source) → stub class."""
    driver_commands = DriverCommands.from_source(driver_source) if driver_source else None
    return DocGenerator().generate(html, driver_commands)
