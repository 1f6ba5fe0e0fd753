"""
Hand-written command descriptions.

Some commands the driver supports are missing from the reference page, or
documented there in a way that reads badly as phpDoc. Their descriptions
live in a JSON file and take precedence over parsed ones:

    [
        {
            "name": "attachFile",
            "description": "Sets a file input (upload) field to the file listed in fileLocator.",
            "arguments": [{"name": "fieldLocator", "description": "an element locator"}],
            "return_value": {"type": "void"},
            "derived": []
        }
    ]

"derived" lists related command names built from the entry with
Command.create_with_name() (e.g. "selectAndWait" from "select").
"""

import json
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from .schemas import Command, Argument, ReturnValue
from .exceptions import DuplicateKeyError
from .logger import get_module_logger

logger = get_module_logger("manual_descriptions")

DEFAULT_MANUAL_PATH = Path(__file__).parent / "manual_descriptions.json"


class ManualCommand(BaseModel):
    """One entry of the manual descriptions file."""
    name: str
    description: str = ""
    arguments: list[Argument] = Field(default_factory=list)
    return_value: ReturnValue = Field(default_factory=ReturnValue)
    derived: list[str] = Field(default_factory=list)

    def to_commands(self) -> list[Command]:
        """The described command followed by its derived commands."""
        command = Command(
            name=self.name,
            description=self.description.strip(),
            return_value=self.return_value.model_copy(),
        ).classify()
        for argument in self.arguments:
            command.add_argument(argument.model_copy())
        return [command] + [command.create_with_name(name) for name in self.derived]


_entries_adapter = TypeAdapter(list[ManualCommand])


def parse_manual_descriptions(text: str) -> dict[str, Command]:
    """
    Parse manual descriptions JSON into commands, indexed by command name.

    Raises:
        DuplicateKeyError: if a command name is described twice
    """
    commands = {}
    for entry in _entries_adapter.validate_python(json.loads(text)):
        for command in entry.to_commands():
            if command.name in commands:
                raise DuplicateKeyError("Command described twice in manual descriptions",
                                        keys=[command.name])
            commands[command.name] = command
    return commands


def load_manual_descriptions(path: Optional[Union[str, Path]] = None) -> dict[str, Command]:
    """Load manual descriptions from a file (the packaged one by default)."""
    path = Path(path) if path else DEFAULT_MANUAL_PATH
    commands = parse_manual_descriptions(path.read_text(encoding="utf-8"))
    logger.info(f"Loaded {len(commands)} manual descriptions from {path.name}")
    return commands
