"""
Naming-convention classifier for Selenium commands.

Selenium names encode what a command does:
  - Actions     manipulate the page ("click", "type"); most also exist as
                "<action>AndWait", which waits for a new page to load.
  - Accessors   read state ("storeTitle", "getText", "isTextPresent").
  - Assertions  check state in three modes ("assert", "verify", "waitFor"),
                each with a negated form ("assertNotTitle", "verifyTextNotPresent").

Rules are kept as small ordered tables evaluated by pure functions, so the
taxonomy can be tested on its own without any HTML.
"""

from enum import Enum

from .exceptions import ClassificationGap


class Category(str, Enum):
    """Primary command category."""
    ACTION = "action"
    ACCESSOR = "accessor"
    ASSERTION = "assertion"


class Subcategory(str, Enum):
    """Finer tag within a Category."""
    # action
    BASE = "action"
    AND_WAIT = "actionAndWait"
    # accessor
    STORE = "storeAccessor"
    GET = "getAccessor"
    IS = "isAccessor"
    # assertion
    ASSERT = "assertAssertion"
    ASSERT_NOT = "assertNotAssertion"
    VERIFY = "verifyAssertion"
    VERIFY_NOT = "verifyNotAssertion"
    WAIT_FOR = "waitForAssertion"
    WAIT_FOR_NOT = "waitForNotAssertion"


SUBCATEGORIES = {
    Category.ACTION: (Subcategory.BASE, Subcategory.AND_WAIT),
    Category.ACCESSOR: (Subcategory.STORE, Subcategory.GET, Subcategory.IS),
    Category.ASSERTION: (
        Subcategory.ASSERT, Subcategory.ASSERT_NOT,
        Subcategory.VERIFY, Subcategory.VERIFY_NOT,
        Subcategory.WAIT_FOR, Subcategory.WAIT_FOR_NOT,
    ),
}

AND_WAIT = "AndWait"
NEGATION = "Not"

# waitFor* commands that are real actions, not auto-generated assertions.
# A command named exactly "store" needs no entry: has_prefix() rejects it.
FORCED_ACTIONS = frozenset([
    "waitForCondition",
    "waitForFrameToLoad",
    "waitForPageToLoad",
    "waitForPopUp",
])

# First matching prefix wins
CATEGORY_PREFIXES = (
    ("store", Category.ACCESSOR),
    ("get", Category.ACCESSOR),
    ("is", Category.ACCESSOR),
    ("assert", Category.ASSERTION),
    ("verify", Category.ASSERTION),
    ("waitFor", Category.ASSERTION),
)

ACCESSOR_PREFIXES = (
    ("store", Subcategory.STORE),
    ("get", Subcategory.GET),
    ("is", Subcategory.IS),
)

# prefix -> (positive subcategory, negated subcategory)
ASSERTION_PREFIXES = (
    ("assert", Subcategory.ASSERT, Subcategory.ASSERT_NOT),
    ("verify", Subcategory.VERIFY, Subcategory.VERIFY_NOT),
    ("waitFor", Subcategory.WAIT_FOR, Subcategory.WAIT_FOR_NOT),
)


def has_prefix(prefix: str, name: str) -> bool:
    """True if name starts with prefix and is longer than it (a prefix equal to the name is not a prefix)."""
    return name.startswith(prefix) and len(name) != len(prefix)


def has_suffix(suffix: str, name: str) -> bool:
    """True if name ends with suffix and is longer than it."""
    return name.endswith(suffix) and len(name) != len(suffix)


def cut_prefix(prefixes, name: str) -> str:
    """Remove each prefix in turn, in list order (a prefix that does not match is skipped)."""
    for prefix in prefixes:
        if has_prefix(prefix, name):
            name = name[len(prefix):]
    return name


def cut_suffix(suffixes, name: str) -> str:
    """Remove each suffix in turn, in list order (a suffix that does not match is skipped)."""
    for suffix in suffixes:
        if has_suffix(suffix, name):
            name = name[:-len(suffix)]
    return name


def determine_category(name: str) -> Category:
    """
    Determine the category of a command by its name.

    Order: exact-name exceptions, then ordered prefixes, then Action.
    """
    if name in FORCED_ACTIONS:
        return Category.ACTION

    for prefix, category in CATEGORY_PREFIXES:
        if has_prefix(prefix, name):
            return category

    return Category.ACTION


def determine_subcategory(name: str) -> Subcategory:
    """
    Determine the subcategory of a command by its name.

    Raises:
        ClassificationGap: if the name has a category but no subcategory rule matches
    """
    category = determine_category(name)

    if category is Category.ACTION:
        return Subcategory.AND_WAIT if has_suffix(AND_WAIT, name) else Subcategory.BASE

    if category is Category.ACCESSOR:
        for prefix, subcategory in ACCESSOR_PREFIXES:
            if has_prefix(prefix, name):
                return subcategory

    if category is Category.ASSERTION:
        negated = NEGATION in name
        for prefix, positive, negative in ASSERTION_PREFIXES:
            if has_prefix(prefix, name):
                return negative if negated else positive

    raise ClassificationGap(f"Cannot evaluate subcategory for command: {name}", name=name)


def get_base_name(category: Category, name: str, lower: bool = False) -> str:
    """
    Strip the category-specific affix from a command name.

    Actions lose the "AndWait" suffix, Accessors the store/get/is prefix,
    Assertions every "Not" and then the assert/verify/waitFor prefix.

    Args:
        category: Category the name was classified into
        name: Literal command name
        lower: If True, the result is lower-cased (catalog key form)
    """
    if category is Category.ACTION:
        base_name = cut_suffix([AND_WAIT], name)
    elif category is Category.ACCESSOR:
        base_name = cut_prefix([prefix for prefix, _ in ACCESSOR_PREFIXES], name)
    elif category is Category.ASSERTION:
        base_name = cut_prefix([prefix for prefix, _, _ in ASSERTION_PREFIXES],
                               name.replace(NEGATION, ""))
    else:
        raise ClassificationGap(
            f"Cannot determine base name without a category: {name}", name=name
        )
    return base_name.lower() if lower else base_name


def negated_base_name(base_name: str) -> str:
    """"TextPresent" -> "TextNotPresent", "Title" -> "NotTitle"."""
    if has_suffix("Present", base_name):
        return base_name[:-len("Present")] + "NotPresent"
    return NEGATION + base_name


def auto_generated_names(base_name: str) -> list[str]:
    """
    Names Selenium generates automatically for an accessor with the given base name:
    the store variant plus every assertion mode in positive and negated form.
    """
    negated = negated_base_name(base_name)
    names = [f"store{base_name}"]
    for prefix, _, _ in ASSERTION_PREFIXES:
        names.append(f"{prefix}{base_name}")
        names.append(f"{prefix}{negated}")
    return names
