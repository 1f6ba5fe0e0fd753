"""
Generates the PHP stub class with a phpDoc block for every command.

Templates (package directory "templates/"):
  class.tpl   placeholders: %methods%, %date%
  method.tpl  placeholders: %method.name%, %method.arguments:list%, %method.doc_block%
"""

import re
import textwrap
from datetime import date
from pathlib import Path
from typing import Optional, Union

from bs4 import BeautifulSoup, NavigableString

from .schemas import Command
from .exceptions import TemplateError
from .logger import get_module_logger

logger = get_module_logger("code_generator")

TEMPLATE_DIR = Path(__file__).parent / "templates"
TPL_CLASS = "class.tpl"
TPL_METHOD = "method.tpl"

EOL = "\n"

# Prefix for each line of the DocBlock of a method
METHOD_DOC_BLOCK_PREFIX = " * "
# Indentation of methods inside the class body
METHOD_LEFT_SPACE_OFFSET = 4
# Useful width of the DocBlock of a method (characters)
DOC_BLOCK_WIDTH = 112

# Tags that start on their own line in a description
BLOCK_TAGS = ['p', 'ul', 'ol', 'li', 'dl', 'dt', 'dd', 'pre', 'table', 'tr', 'blockquote']
# Block tags whose children also start on their own lines
CONTAINER_TAGS = ['ul', 'ol', 'dl', 'table']

LINK_PATTERN = re.compile(r'\{@link\s+[^}]+\}')
FIRST_LINE_LINK_PATTERN = re.compile(r'(\(see\s+)?\{@link\s+\w+\}\)?')
# Stands in for spaces inside {@link ...} so wrapping never splits a link
LINK_SPACE = "\ue000"

# Straight replacements in command descriptions
DESCRIPTION_REPLACEMENTS = {
    '@see #doSelect': '{@link select}',    # addSelection + removeSelection
    '<code>': '[<b>',
    '</code>': '</b>]',
}


def fill_template(template: str, replacements: dict[str, str]) -> str:
    """Replace all placeholders in one pass (replaced text is never rescanned)."""
    pattern = re.compile('|'.join(re.escape(key) for key in replacements))
    return pattern.sub(lambda m: replacements[m.group(0)], template)


def format_as_html(text: str) -> str:
    """
    Lay description markup out over lines: every block-level tag starts on
    its own line, inline markup stays where it is. Blank lines in the source
    separate paragraphs and are kept.
    """
    paragraphs = []
    for paragraph in re.split(r'\n\s*\n', text.strip()):
        soup = BeautifulSoup(paragraph, 'html5lib')
        body = soup.find('body')
        if body is None:
            continue

        for tag in body.find_all(BLOCK_TAGS):
            tag.insert_before(NavigableString(EOL))
            tag.insert_after(NavigableString(EOL))
            if tag.name in CONTAINER_TAGS:
                tag.insert(0, NavigableString(EOL))
                tag.append(NavigableString(EOL))

        lines = [line.strip() for line in body.decode_contents().split(EOL)]
        formatted = EOL.join(line for line in lines if line)
        if formatted:
            paragraphs.append(formatted)

    return (EOL + EOL).join(paragraphs)


class CodeGenerator:
    """Renders commands into the stub class."""

    # Descriptions for arguments the reference page leaves undocumented
    # (variableName of store*, pattern of derived assertions)
    MANUAL_ARGUMENT_DESCRIPTION = {
        'variableName': 'the name of a variable in which the result is to be stored '
                        '(see {@link doc_Stored_Variables})',
        'pattern': 'the String-match Patterns (see {@link doc_String_match_Patterns})',
    }

    def __init__(self, template_dir: Optional[Union[str, Path]] = None):
        """
        Load templates.

        Raises:
            TemplateError: if a template file is missing
        """
        template_dir = Path(template_dir) if template_dir else TEMPLATE_DIR
        self._tpl_class = self._load_template(template_dir / TPL_CLASS)
        self._tpl_method = self._load_template(template_dir / TPL_METHOD)

    @staticmethod
    def _load_template(path: Path) -> str:
        if not path.is_file():
            raise TemplateError("Not found template for code generator", path=str(path))
        return path.read_text(encoding="utf-8").replace('\r\n', EOL).replace('\r', EOL)

    def generate(self, commands: list[Command], generated_on: Optional[date] = None) -> str:
        """
        Render the stub class for the given commands (in the given order).

        Returns:
            PHP source code
        """
        generated_on = generated_on or date.today()
        code = ''
        for command in commands:
            code += fill_template(self._tpl_method, {
                '%method.name%': command.name,
                '%method.arguments:list%': self.get_argument_list(command),
                '%method.doc_block%': self.get_doc_block(command),
            })

        logger.info(f"Generated code for {len(commands)} commands")
        return fill_template(self._tpl_class, {
            '%methods%': self._add_in_line_beginning(code, ' ' * METHOD_LEFT_SPACE_OFFSET),
            '%date%': generated_on.isoformat(),
        })

    def get_doc_block(self, command: Command) -> str:
        doc_block = (
            self._wrap_around_if_exist(self.phpdoc_description(command)) +
            self._wrap_around_if_exist(self.phpdoc_arguments(command), EOL) +
            self._wrap_around_if_exist(self.phpdoc_return_value(command), EOL)
        )
        return self._add_in_line_beginning(doc_block.strip())

    def get_argument_list(self, command: Command) -> str:
        """Argument list as PHP source, e.g. "$locator, $value"."""
        return ', '.join('$' + name for name in command.argument_names())

    def phpdoc_description(self, command: Command) -> str:
        description = fill_template(command.description, DESCRIPTION_REPLACEMENTS) \
            if command.description else ''
        return self._word_wrap(format_as_html(description), DOC_BLOCK_WIDTH)

    def phpdoc_arguments(self, command: Command) -> str:
        """@param lines, with descriptions aligned in one column."""
        if not command.arguments:
            return ''

        heads = {
            argument.name: f"@param {argument.type}   ${argument.name}  "
            for argument in command.arguments
        }
        max_length = max(len(head) for head in heads.values())
        description_width = DOC_BLOCK_WIDTH - max_length
        first_spaces = ' ' * max_length

        lines = []
        for argument in command.arguments:
            description = argument.description
            if description is None:
                description = self.MANUAL_ARGUMENT_DESCRIPTION.get(argument.name, '')
            if not description.strip():
                logger.warning(f"Command '{command.name}': argument '{argument.name}' has no description")

            description = self._word_wrap(format_as_html(description), description_width)
            description = self._fix_phpdoc_links(description)
            description = self._add_in_line_beginning(description, first_spaces).strip()
            lines.append(heads[argument.name].ljust(max_length) + description)

        return EOL.join(lines)

    def phpdoc_return_value(self, command: Command) -> str:
        head = f"@return  {command.return_value.type}  "
        description = self._word_wrap(command.return_value.description, DOC_BLOCK_WIDTH - len(head))
        phpdoc = self._fix_phpdoc_links(head + description)
        return self._add_in_line_beginning(phpdoc, ' ' * len(head)).strip()

    @staticmethod
    def _add_in_line_beginning(multi_line_text: str, add_string: str = METHOD_DOC_BLOCK_PREFIX) -> str:
        """Prefix every line (trailing whitespace is dropped)."""
        return EOL.join((add_string + line).rstrip() for line in multi_line_text.split(EOL))

    @staticmethod
    def _wrap_around_if_exist(text: str, before: str = '', after: str = EOL) -> str:
        return before + text + after if text else text

    @staticmethod
    def _word_wrap(text: str, width: int) -> str:
        """Wrap each line to width; {@link ...} tags are never split, long words are not cut."""
        if not text:
            return text
        text = LINK_PATTERN.sub(lambda m: m.group(0).replace(' ', LINK_SPACE), text)

        lines = []
        for line in text.split(EOL):
            wrapped = textwrap.wrap(line, width, break_long_words=False, break_on_hyphens=False)
            lines.extend(wrapped or [''])

        return EOL.join(lines).replace(LINK_SPACE, ' ')

    @staticmethod
    def _fix_phpdoc_links(text: str) -> str:
        """
        phpDoc cannot follow a {@link} placed on the first line of @param or
        @return, so such a link (with an enclosing "(see ...)") moves to the
        next line.
        """
        if not text:
            return text
        lines = text.split(EOL)
        m = FIRST_LINE_LINK_PATTERN.search(lines[0])
        if m:
            link_tag = m.group(0)
            lines[0] = lines[0].replace(link_tag, EOL + link_tag).rstrip()
        return EOL.join(lines)
