"""
Locators - Typed locator strategies and field descriptors.

A FieldDescriptor names a logical form field and lists the strategies that
can find it, in the order they should be tried. Strategies are structured
values (role + accessible name, placeholder attribute, label text, ...)
turned into Playwright locators through the locator API; free text is only
ever embedded as a quoted literal, never spliced into a query.

Example:
    >>> gender = FieldDescriptor(
    ...     name="Gender",
    ...     strategies=(
    ...         LocatorStrategy.by_label("Gender"),
    ...         LocatorStrategy.by_role("combobox", "Gender"),
    ...     ),
    ... )
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page


# Class of the caption span DevExtreme renders next to every form editor
LABEL_CLASS = "dx-field-item-label-text"
DROPDOWN_BUTTON_CLASS = "dx-dropdowneditor-button"
DROPDOWN_INPUT_CLASS = "dx-dropdowneditor-input-wrapper"

MASKED_VALUE = "***"

# Option lists of an open dropdown, most specific first
DEFAULT_OPTION_SELECTORS: Tuple[str, ...] = (
    ".dx-dropdowneditor-overlay .dx-overlay-content:not(.dx-state-invisible) .dx-list-item-content",
    ".dx-overlay-content:not(.dx-state-invisible) .dx-scrollview-content .dx-item-content",
    ".dx-overlay-wrapper .dx-list-item-content",
)


def css_string(value: str) -> str:
    """Quote a value as a CSS string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\a ")
    return f'"{escaped}"'


def xpath_literal(value: str) -> str:
    """
    Quote a value as an XPath 1.0 string literal.

    XPath has no escape sequences, so values holding both quote kinds
    are assembled with concat().
    """
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    parts = value.split('"')
    pieces = []
    for i, part in enumerate(parts):
        if part:
            pieces.append(f'"{part}"')
        if i < len(parts) - 1:
            pieces.append("'\"'")
    return "concat(" + ", ".join(pieces) + ")"


class LocatorKind(Enum):
    """How a strategy finds its element."""
    ROLE = "role"
    PLACEHOLDER = "placeholder"
    LABEL = "label"
    TEXT = "text"
    CSS = "css"


@dataclass(frozen=True)
class LocatorStrategy:
    """
    One way of finding an element.

    Attributes:
        kind: Strategy type
        value: Role, placeholder text, label text, visible text or CSS selector
        name: Accessible name (ROLE only)
        exact: Whole-text match (True) or substring match (False)
        editor_class: LABEL only - class of the editor element following the label
        within: Optional CSS selector scoping the search
        ancestor_class: Climb from the match to the nearest ancestor with this class
    """
    kind: LocatorKind
    value: str
    name: Optional[str] = None
    exact: bool = True
    editor_class: Optional[str] = None
    within: Optional[str] = None
    ancestor_class: Optional[str] = None

    # Constructors

    @classmethod
    def by_role(cls, role: str, name: str, exact: bool = True) -> "LocatorStrategy":
        return cls(LocatorKind.ROLE, role, name=name, exact=exact)

    @classmethod
    def by_placeholder(
        cls,
        placeholder: str,
        within: Optional[str] = None,
        ancestor_class: Optional[str] = None,
    ) -> "LocatorStrategy":
        """Element carrying DevExtreme's data-dx_placeholder attribute."""
        return cls(
            LocatorKind.PLACEHOLDER,
            placeholder,
            within=within,
            ancestor_class=ancestor_class,
        )

    @classmethod
    def by_label(
        cls,
        label: str,
        editor_class: str = DROPDOWN_BUTTON_CLASS,
        exact: bool = True,
    ) -> "LocatorStrategy":
        """First editor element of editor_class after the field caption."""
        return cls(LocatorKind.LABEL, label, exact=exact, editor_class=editor_class)

    @classmethod
    def by_text(
        cls,
        text: str,
        within: Optional[str] = None,
        exact: bool = False,
    ) -> "LocatorStrategy":
        return cls(LocatorKind.TEXT, text, exact=exact, within=within)

    @classmethod
    def by_css(cls, selector: str, within: Optional[str] = None) -> "LocatorStrategy":
        return cls(LocatorKind.CSS, selector, within=within)

    def locate(self, page: "Page") -> "Locator":
        """Build the Playwright locator for this strategy."""
        scope: Any = page.locator(self.within) if self.within else page

        if self.kind is LocatorKind.ROLE:
            locator = scope.get_by_role(self.value, name=self.name, exact=self.exact)
        elif self.kind is LocatorKind.PLACEHOLDER:
            locator = scope.locator(f"[data-dx_placeholder={css_string(self.value)}]")
        elif self.kind is LocatorKind.LABEL:
            locator = scope.locator(f"xpath={self._label_xpath()}")
        elif self.kind is LocatorKind.TEXT:
            locator = scope.get_by_text(self.value, exact=self.exact)
        else:
            locator = scope.locator(self.value)

        if self.ancestor_class:
            locator = locator.locator(
                f"xpath=ancestor::*[contains(concat(' ', normalize-space(@class), ' '), "
                f"{xpath_literal(' ' + self.ancestor_class + ' ')})][1]"
            )
        return locator

    def _label_xpath(self) -> str:
        text = xpath_literal(self.value)
        if self.exact:
            caption = f"normalize-space()={text}"
        else:
            caption = f"contains(normalize-space(), {text})"
        editor = xpath_literal(self.editor_class or DROPDOWN_BUTTON_CLASS)
        return (
            f"//span[contains(@class, {xpath_literal(LABEL_CLASS)}) and {caption}]"
            f"/following::div[contains(@class, {editor})][1]"
        )

    def describe(self) -> str:
        """Short human-readable form used in logs and errors."""
        if self.kind is LocatorKind.ROLE:
            return f"role={self.value}[name={self.name!r}]"
        if self.kind is LocatorKind.LABEL:
            return f"label={self.value!r} -> .{self.editor_class}"
        scope = f" within {self.within}" if self.within else ""
        return f"{self.kind.value}={self.value!r}{scope}"


@dataclass(frozen=True)
class FieldDescriptor:
    """
    Static description of a logical UI field.

    Attributes:
        name: Logical name used in logs and errors (e.g. "Age group")
        strategies: Locator strategies, tried strictly in order
        option_selectors: Where the field's options render once opened
        reveal: Special handling for fields inside scroll containers -
            centre the field in its container before checking visibility
        sensitive: Values entered into the field are masked in logs and errors
    """
    name: str
    strategies: Tuple[LocatorStrategy, ...]
    option_selectors: Tuple[str, ...] = field(default=DEFAULT_OPTION_SELECTORS)
    reveal: bool = False
    sensitive: bool = False

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("FieldDescriptor requires a name")
        if not self.strategies:
            raise ValueError(f"FieldDescriptor '{self.name}' needs at least one locator strategy")
        if not self.option_selectors:
            raise ValueError(f"FieldDescriptor '{self.name}' needs at least one option selector")
        # Lists are accepted for convenience but stored immutably
        object.__setattr__(self, "strategies", tuple(self.strategies))
        object.__setattr__(self, "option_selectors", tuple(self.option_selectors))

    def describe_strategies(self) -> Tuple[str, ...]:
        return tuple(s.describe() for s in self.strategies)

    def display_value(self, value: Optional[str]) -> Optional[str]:
        """Value as it may appear in logs and error details."""
        if self.sensitive and value:
            return MASKED_VALUE
        return value
