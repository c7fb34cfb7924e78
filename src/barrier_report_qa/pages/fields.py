"""
Field catalog - FieldDescriptors for every element the suite touches.

Strategies are listed most specific first. Labels and option texts come
from constants; nothing here is built by pasting text into a selector.
"""

from typing import Dict

from barrier_report_qa.constants import FIELD_LABELS, REPORT_FILTERS, TB_BARRIERS, UI_TEXT
from barrier_report_qa.engine.locators import (
    DEFAULT_OPTION_SELECTORS,
    DROPDOWN_INPUT_CLASS,
    FieldDescriptor,
    LocatorStrategy,
    css_string,
)


# Lists rendered by the report panel's toolbar select boxes
REPORT_OPTION_SELECTORS = (
    ".dx-overlay-content:not(.dx-state-invisible) .dx-scrollview-content .dx-item-content",
    ".dx-overlay-wrapper .dx-list-item-content",
)

# Barrier dropdowns open list items directly under the overlay
BARRIER_OPTION_SELECTORS = (
    ".dx-overlay-content:not(.dx-state-invisible) .dx-list-item-content",
) + DEFAULT_OPTION_SELECTORS[1:]


def _aria_input(label: str) -> LocatorStrategy:
    return LocatorStrategy.by_css(f"input[aria-label={css_string(label)}]")


# =============================================================================
# NAVIGATION
# =============================================================================

def menu_entry(text: str, css_class: str) -> FieldDescriptor:
    """Side menu link (collapsible header or sub-item) by its text."""
    return FieldDescriptor(
        name=f"{text} menu",
        strategies=(
            LocatorStrategy.by_text(text, within=f"a.{css_class}"),
            LocatorStrategy.by_role("link", text, exact=False),
        ),
    )


def dx_button(text: str) -> FieldDescriptor:
    """DevExtreme button by its caption."""
    return FieldDescriptor(
        name=f"{text} button",
        strategies=(
            LocatorStrategy.by_role("button", text),
            LocatorStrategy.by_text(text, within=".dx-button-content .dx-button-text", exact=True),
        ),
    )


LANGUAGE_MENU = FieldDescriptor(
    name="Language menu",
    strategies=(LocatorStrategy.by_css("#navbarDropdown_clang"),),
)

USER_MENU = FieldDescriptor(
    name="User menu",
    strategies=(LocatorStrategy.by_css("#navbarDropdown_cUser"),),
)


def language_option(code: str) -> FieldDescriptor:
    return FieldDescriptor(
        name=f"Language '{code}'",
        strategies=(
            LocatorStrategy.by_text(code, within="[aria-labelledby='navbarDropdown_clang']", exact=True),
            LocatorStrategy.by_text(code, exact=True),
        ),
    )


# =============================================================================
# LOGIN
# =============================================================================

LOGIN_BUTTON = FieldDescriptor(
    name="Login button",
    strategies=(
        LocatorStrategy.by_css("a.btn.btn-elegant.btn-rounded"),
        LocatorStrategy.by_role("link", "Login", exact=False),
    ),
)

LOGIN_MODAL = FieldDescriptor(
    name="Login form",
    strategies=(LocatorStrategy.by_css("#modalLRForm"),),
)

EMAIL_INPUT = FieldDescriptor(
    name="E-mail",
    strategies=(
        LocatorStrategy.by_css("input#UserName", within="#modalLRForm"),
        LocatorStrategy.by_css("input#UserName"),
    ),
)

PASSWORD_INPUT = FieldDescriptor(
    name="Password",
    strategies=(
        LocatorStrategy.by_css("input#Password", within="#modalLRForm"),
        LocatorStrategy.by_css("input#Password"),
    ),
    sensitive=True,
)

LOGIN_SUBMIT = FieldDescriptor(
    name="Login submit",
    strategies=(
        LocatorStrategy.by_css("#panel7 button.btn-light-green"),
        LocatorStrategy.by_css("button.btn-light-green", within="#modalLRForm"),
    ),
)


# =============================================================================
# BARRIER FORM
# =============================================================================

BARRIERS_MENU = menu_entry(UI_TEXT["barriers_menu"], "collapsible-header")
ANONYMOUS_REPORTING = menu_entry(UI_TEXT["anonymous_reporting"], "waves-effect")
ADD_BUTTON = dx_button(UI_TEXT["add_button"])
RIGHTS_BUTTON = dx_button(UI_TEXT["rights_button"])
SAVE_BUTTON = dx_button(UI_TEXT["save_button"])


def form_dropdown(label: str, exact: bool = True) -> FieldDescriptor:
    """
    Dropdown editor of the barrier form.

    Tried in order: the dropdown button after the caption, the input
    wrapper after the caption, then the combobox's accessible name.
    """
    return FieldDescriptor(
        name=label,
        strategies=(
            LocatorStrategy.by_label(label, exact=exact),
            LocatorStrategy.by_label(label, editor_class=DROPDOWN_INPUT_CLASS, exact=exact),
            LocatorStrategy.by_role("combobox", label, exact=exact),
        ),
    )


AGE_GROUP = form_dropdown(FIELD_LABELS["age_group"])
GENDER = form_dropdown(FIELD_LABELS["gender"])
LOCATION = form_dropdown(FIELD_LABELS["location"])
LOCATION_TYPE = form_dropdown(FIELD_LABELS["location_type"])
STUDIES_LEVEL = form_dropdown(FIELD_LABELS["studies_level"])

# The identity editor only opens from its input wrapper
IDENTITY = FieldDescriptor(
    name=FIELD_LABELS["identity"],
    strategies=(
        LocatorStrategy.by_label(FIELD_LABELS["identity"], editor_class=DROPDOWN_INPUT_CLASS),
        LocatorStrategy.by_label(FIELD_LABELS["identity"]),
        LocatorStrategy.by_role("combobox", FIELD_LABELS["identity"]),
    ),
)

# Caption carries extra text around "TypeOfUser"
TYPE_OF_USER = FieldDescriptor(
    name=FIELD_LABELS["type_of_user"],
    strategies=(
        LocatorStrategy.by_role("combobox", FIELD_LABELS["type_of_user"]),
        LocatorStrategy.by_label(FIELD_LABELS["type_of_user"], exact=False),
        LocatorStrategy.by_label(FIELD_LABELS["type_of_user"], editor_class=DROPDOWN_INPUT_CLASS, exact=False),
    ),
)

PHONE = FieldDescriptor(
    name=FIELD_LABELS["phone"],
    strategies=(
        LocatorStrategy.by_role("textbox", FIELD_LABELS["phone"]),
        _aria_input(FIELD_LABELS["phone"]),
    ),
)

OTHER_DETAILS = FieldDescriptor(
    name=UI_TEXT["other_details"],
    strategies=(
        LocatorStrategy.by_role("textbox", UI_TEXT["other_details"]),
        _aria_input(UI_TEXT["other_details"]),
    ),
)


def barrier_field(label: str) -> FieldDescriptor:
    """TB barrier dropdown; these sit deep in the form's scroll container."""
    return FieldDescriptor(
        name=label,
        strategies=(
            LocatorStrategy.by_role("combobox", label),
            _aria_input(label),
        ),
        option_selectors=BARRIER_OPTION_SELECTORS,
        reveal=True,
    )


TB_BARRIER_FIELDS: Dict[str, FieldDescriptor] = {
    label: barrier_field(label) for label in TB_BARRIERS
}

# Shown on the Save button while the record is written
SAVE_INDICATOR = ".button-indicator"


# =============================================================================
# REPORT PANEL
# =============================================================================

REPORTS_MENU = menu_entry(UI_TEXT["reports_menu"], "collapsible-header")
DEMOGRAPHIC_MENU = menu_entry(UI_TEXT["demographic"], "waves-effect")

REPORT_TOOLBAR = ".dx-toolbar-before"
REPORT_GRID = "[role='grid']"


def report_filter(placeholder: str) -> FieldDescriptor:
    """
    Toolbar select box of the report panel.

    Tried in order: combobox by accessible name, the placeholder element,
    then the placeholder inside the toolbar climbing to its select box.
    """
    return FieldDescriptor(
        name=placeholder,
        strategies=(
            LocatorStrategy.by_role("combobox", placeholder),
            LocatorStrategy.by_placeholder(placeholder),
            LocatorStrategy.by_placeholder(
                placeholder,
                within=f"{REPORT_TOOLBAR} .dx-selectbox",
                ancestor_class="dx-selectbox",
            ),
        ),
        option_selectors=REPORT_OPTION_SELECTORS,
    )


REPORT_FILTER_FIELDS: Dict[str, FieldDescriptor] = {
    name: report_filter(placeholder) for name, placeholder in REPORT_FILTERS.items()
}

DATE_FROM = FieldDescriptor(
    name=f"{UI_TEXT['date_from']} date",
    strategies=(
        LocatorStrategy.by_css(
            "input[role='combobox']",
            within=f".dx-datebox:has(div[data-dx_placeholder={css_string(UI_TEXT['date_from'])}])",
        ),
    ),
)
