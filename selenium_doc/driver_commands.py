"""
Authoritative list of supported commands, read from the PHPUnit Selenium driver.

PHPUnit_Extensions_SeleniumTestCase_Driver dispatches every Selenium command
through __call() and declares them in that method's docblock:

    * @method unknown  click(string $locator)
    * @method string   getTitle()
    * @method boolean  isTextPresent(string $pattern)

The driver also answers the store/assert/verify/waitFor commands it
generates from every get*/is* command, and a few commands that its docblock
forgets. Together they form the command list the generated stub must cover.
"""

import re
from pathlib import Path
from typing import Union

from .classifier import auto_generated_names
from .schemas import ReturnType
from .exceptions import DriverSourceError
from .logger import get_module_logger

logger = get_module_logger("driver_commands")

METHOD_PATTERN = re.compile(r'@method\s+(\w+)\s+(\w+)\((.*)\)')
ACCESSOR_NAME_PATTERN = re.compile(r'^(get|is)([A-Z].+)$')

# Handled by the driver but not declared in its docblock
MANUAL_ADDED_COMMANDS = {
    "captureEntirePageScreenshotToString": ReturnType.VOID,  # docblock only has the *AndWait version
    "captureScreenshot": ReturnType.VOID,                    # docblock only has the *AndWait version
    "captureScreenshotToString": ReturnType.VOID,            # docblock only has the *AndWait version
    "waitForFrameToLoad": ReturnType.VOID,
}

# PHPUnit docblock types → phpDoc types
RETURN_TYPE_MAP = {
    "unknown": ReturnType.VOID,
    "boolean": ReturnType.BOOL,
    "integer": ReturnType.INT,   # actually a string holding an integer
    "array": ReturnType.STRING_LIST,
}


def convert_return_type(phpunit_type: str) -> str:
    """Convert a PHPUnit docblock return type to its phpDoc equivalent."""
    return RETURN_TYPE_MAP.get(phpunit_type, phpunit_type)


class DriverCommands:
    """
    Command name → return type, in driver order.

    Base (docblock) commands come first, then auto-generated ones, then the
    manual additions; a name keeps the type of its first occurrence.
    """

    def __init__(self, base_commands: dict[str, str],
                 manual_commands: dict[str, str] = None):
        if manual_commands is None:
            manual_commands = MANUAL_ADDED_COMMANDS

        commands = dict(base_commands)
        for name, return_type in self.auto_generated(base_commands).items():
            commands.setdefault(name, return_type)
        for name, return_type in manual_commands.items():
            commands.setdefault(name, return_type)
        self.commands = commands

    @staticmethod
    def parse_docblock(source: str) -> dict[str, str]:
        """
        Read every "@method <type> <name>(<args>)" declaration.

        Raises:
            DriverSourceError: if the source declares no commands
        """
        methods = {}
        for return_type, name, _ in METHOD_PATTERN.findall(source):
            methods.setdefault(name, convert_return_type(return_type))

        if not methods:
            raise DriverSourceError("Driver source declares no @method commands")
        return methods

    @staticmethod
    def auto_generated(base_commands: dict[str, str]) -> dict[str, str]:
        """Commands the driver derives from each get*/is* command (all return void)."""
        generated = {}
        for name in base_commands:
            match = ACCESSOR_NAME_PATTERN.match(name)
            if not match:
                continue
            for generated_name in auto_generated_names(match.group(2)):
                generated.setdefault(generated_name, ReturnType.VOID)
        return generated

    @classmethod
    def from_source(cls, source: str) -> "DriverCommands":
        commands = cls(cls.parse_docblock(source))
        logger.info(f"Driver declares {len(commands)} commands")
        return commands

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "DriverCommands":
        return cls.from_source(Path(path).read_text(encoding="utf-8"))

    def items(self):
        return self.commands.items()

    def __contains__(self, name: str) -> bool:
        return name in self.commands

    def __getitem__(self, name: str) -> str:
        return self.commands[name]

    def __iter__(self):
        return iter(self.commands)

    def __len__(self) -> int:
        return len(self.commands)
