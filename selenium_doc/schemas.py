"""
Pydantic schemas for the command model.

Command:     one Selenium command (name, classification, description, arguments, return value)
Argument:    one named argument of a command
ReturnValue: what the command returns

Data flow through the pipeline:
  Preprocessor → sections (lxml tree) → Extractor → Command
  CatalogBuilder → Catalog (base name → Command) → DocGenerator → CodeGenerator
"""

from typing import Optional
from pydantic import BaseModel, Field

from .classifier import (
    Category,
    Subcategory,
    determine_category,
    determine_subcategory,
    get_base_name,
    cut_prefix,
)
from .exceptions import ClassificationGap, DuplicateKeyError


DEFAULT_ARGUMENT_TYPE = "string"

# Argument dropped when an accessor is turned into anything but store*
VARIABLE_NAME_ARGUMENT = "variableName"

AND_WAIT_NOTE = (
    "<b>Note:</b> After execution of this action, Selenium wait for a new page to load "
    "(see {@link waitForPageToLoad})"
)
ASSERT_NOTE = (
    "<b>Note:</b> If assertion will fail the test, it will abort the current test case "
    "(in contrast to the verify*)."
)
VERIFY_NOTE = (
    "<b>Note:</b> If assertion will fail the test, it will continue to run the test case "
    "(in contrast to the assert*)."
)
WAIT_FOR_NOTE = "<b>Note:</b> This command will succeed immediately if the condition is already true."


class ReturnType:
    """Known return types (any raw hint from the driver is accepted as well)."""
    VOID = "void"
    BOOL = "bool"
    INT = "int"
    STRING = "string"
    STRING_LIST = "string[]"


class Argument(BaseModel):
    """A single argument of a command."""
    name: str
    type: str = DEFAULT_ARGUMENT_TYPE
    description: Optional[str] = None   # None = not documented; the renderer has fallbacks


class ReturnValue(BaseModel):
    """Value returned by a command."""
    type: str = ReturnType.VOID
    description: str = ""


class Command(BaseModel):
    """
    A Selenium command.

    Arguments keep document order and their names are unique within the
    command (enforced by add_argument). derived_commands is only filled for
    accessors: the commands Selenium generates from them automatically.
    """
    name: str
    category: Optional[Category] = None
    subcategory: Optional[Subcategory] = None
    description: str = ""
    arguments: list[Argument] = Field(default_factory=list)
    return_value: ReturnValue = Field(default_factory=ReturnValue)
    derived_commands: dict[str, "Command"] = Field(default_factory=dict)

    def classify(self) -> "Command":
        """Assign category and subcategory from the name."""
        self.category = determine_category(self.name)
        self.subcategory = determine_subcategory(self.name)
        return self

    def base_name(self, lower: bool = False) -> str:
        return get_base_name(self.category, self.name, lower=lower)

    def argument_names(self) -> list[str]:
        return [argument.name for argument in self.arguments]

    def get_argument(self, name: str) -> Optional[Argument]:
        for argument in self.arguments:
            if argument.name == name:
                return argument
        return None

    def add_argument(self, argument: Argument) -> "Command":
        """
        Append an argument.

        Raises:
            DuplicateKeyError: if the command already has an argument with this name
        """
        if self.get_argument(argument.name) is not None:
            raise DuplicateKeyError(
                f"Argument cannot be added to command '{self.name}', "
                f"it already has an argument with the same name",
                keys=[argument.name]
            )
        self.arguments.append(argument)
        return self

    def delete_argument(self, name: str) -> "Command":
        self.arguments = [argument for argument in self.arguments if argument.name != name]
        return self

    def create_with_name(self, new_name: str) -> "Command":
        """
        Derive a related command from this one (e.g. clickAndWait from click,
        verifyTitle from storeTitle).

        The result is a deep copy: the source keeps its arguments and
        description, the copy gets the new name, the classification of the
        new name and the description/arguments that name implies.

        Raises:
            ClassificationGap: if this command cannot be turned into the requested one
        """
        new_subcategory = determine_subcategory(new_name)
        command = self.model_copy(deep=True)
        command.name = new_name
        command.category = determine_category(new_name)
        command.subcategory = new_subcategory
        command.derived_commands = {}

        if self.category is Category.ACTION and self.subcategory is Subcategory.BASE:
            if new_subcategory is Subcategory.BASE:
                return command
            if new_subcategory is Subcategory.AND_WAIT:
                command.description = _join_paragraphs(command.description, AND_WAIT_NOTE)
                return command
            raise ClassificationGap(
                f"Action '{self.name}' can only be converted to an action, not '{new_name}'",
                name=new_name
            )

        if self.category is Category.ACCESSOR:
            if new_subcategory is Subcategory.STORE:
                return command

            command.delete_argument(VARIABLE_NAME_ARGUMENT)

            if new_subcategory is Subcategory.GET:
                return command

            if new_subcategory is Subcategory.IS:
                rest = cut_prefix(["Retrieves", "Returns", "Return"], command.description)
                command.description = "Returns =true, if" + rest
                return command

            if new_subcategory in (Subcategory.ASSERT, Subcategory.ASSERT_NOT):
                command.description = _join_paragraphs(
                    f"Assertion, automatically generated from accessor {{@link {self.name}}}:",
                    command.description,
                    ASSERT_NOTE,
                )
                return command

            if new_subcategory in (Subcategory.VERIFY, Subcategory.VERIFY_NOT):
                command.description = _join_paragraphs(
                    f"Assertion, automatically generated from accessor {{@link {self.name}}}:",
                    command.description,
                    VERIFY_NOTE,
                )
                return command

            if new_subcategory in (Subcategory.WAIT_FOR, Subcategory.WAIT_FOR_NOT):
                command.description = _join_paragraphs(
                    f"Assertion, automatically generated from accessor {{@link {self.name}}}. "
                    "This command wait for some condition to become true:",
                    command.description,
                    WAIT_FOR_NOTE,
                )
                return command

            raise ClassificationGap(
                f"Accessor '{self.name}' can only be converted to an accessor or an assertion, "
                f"not '{new_name}'",
                name=new_name
            )

        raise ClassificationGap(
            f"Cannot derive '{new_name}' from '{self.name}': only base actions and "
            f"accessors can be converted",
            name=new_name
        )


def _join_paragraphs(*parts: str) -> str:
    return "\n\n".join(part for part in parts if part)


Command.model_rebuild()
