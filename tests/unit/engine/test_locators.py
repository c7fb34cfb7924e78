"""
Tests for locator strategies and field descriptors.
"""

import pytest

from barrier_report_qa.engine.locators import (
    DEFAULT_OPTION_SELECTORS,
    FieldDescriptor,
    LocatorKind,
    LocatorStrategy,
    css_string,
    xpath_literal,
)


class TestQuoting:
    """Test literal quoting helpers."""

    def test_css_string_plain(self):
        assert css_string("Age") == '"Age"'

    def test_css_string_escapes_quotes_and_backslashes(self):
        assert css_string('say "hi"') == '"say \\"hi\\""'
        assert css_string("a\\b") == '"a\\\\b"'

    def test_xpath_literal_prefers_double_quotes(self):
        assert xpath_literal("Gender") == '"Gender"'

    def test_xpath_literal_single_quotes_when_value_has_double(self):
        assert xpath_literal('The "Age" field') == "'The \"Age\" field'"

    def test_xpath_literal_both_quotes_uses_concat(self):
        literal = xpath_literal('it\'s "fine"')
        assert literal == 'concat("it\'s ", \'"\', "fine", \'"\')'


class TestLocatorStrategy:
    """Test strategy construction and locator building."""

    def test_role_locate(self, fake_page):
        strategy = LocatorStrategy.by_role("combobox", "Gender")
        assert strategy.kind is LocatorKind.ROLE
        assert strategy.locate(fake_page).key == "role=combobox[Gender]"

    def test_placeholder_locate(self, fake_page):
        strategy = LocatorStrategy.by_placeholder("Age")
        assert strategy.locate(fake_page).key == '[data-dx_placeholder="Age"]'

    def test_text_within_scope(self, fake_page):
        strategy = LocatorStrategy.by_text("Barriers", within="a.nav-link")
        assert strategy.locate(fake_page).key == "a.nav-link >> text=Barriers"

    def test_css_locate(self, fake_page):
        assert LocatorStrategy.by_css("#modalLRForm").locate(fake_page).key == "#modalLRForm"

    def test_label_builds_xpath(self, fake_page):
        strategy = LocatorStrategy.by_label("Gender")
        key = strategy.locate(fake_page).key

        assert key.startswith("xpath=//span[contains(@class, \"dx-field-item-label-text\")")
        assert 'normalize-space()="Gender"' in key
        assert "dx-dropdowneditor-button" in key

    def test_label_substring_match(self, fake_page):
        key = LocatorStrategy.by_label("Type of", exact=False).locate(fake_page).key
        assert 'contains(normalize-space(), "Type of")' in key

    def test_ancestor_class(self, fake_page):
        strategy = LocatorStrategy.by_placeholder("Age", within=".dx-toolbar-before", ancestor_class="dx-selectbox")
        key = strategy.locate(fake_page).key

        assert key.startswith('.dx-toolbar-before >> [data-dx_placeholder="Age"] >> xpath=ancestor::*')
        assert '" dx-selectbox "' in key

    def test_user_text_is_quoted(self, fake_page):
        """Quotes inside a value never break out of the literal."""
        key = LocatorStrategy.by_placeholder('Age"] , body [x="').locate(fake_page).key
        assert key == '[data-dx_placeholder="Age\\"] , body [x=\\""]'

    def test_describe(self):
        assert LocatorStrategy.by_role("button", "Save").describe() == "role=button[name='Save']"
        assert LocatorStrategy.by_label("Age").describe() == "label='Age' -> .dx-dropdowneditor-button"
        assert LocatorStrategy.by_text("Add", within=".dx-button").describe() == "text='Add' within .dx-button"

    def test_strategies_are_hashable(self):
        assert len({LocatorStrategy.by_css("a"), LocatorStrategy.by_css("a")}) == 1


class TestFieldDescriptor:
    """Test descriptor validation."""

    def test_defaults(self):
        descriptor = FieldDescriptor("Gender", (LocatorStrategy.by_label("Gender"),))

        assert descriptor.option_selectors == DEFAULT_OPTION_SELECTORS
        assert descriptor.reveal is False
        assert descriptor.sensitive is False

    def test_lists_are_stored_as_tuples(self):
        descriptor = FieldDescriptor(
            "Gender",
            [LocatorStrategy.by_label("Gender")],
            option_selectors=[".dx-list-item"],
        )

        assert isinstance(descriptor.strategies, tuple)
        assert descriptor.option_selectors == (".dx-list-item",)

    def test_requires_name(self):
        with pytest.raises(ValueError):
            FieldDescriptor("", (LocatorStrategy.by_css("a"),))

    def test_requires_strategies(self):
        with pytest.raises(ValueError, match="at least one locator strategy"):
            FieldDescriptor("Gender", ())

    def test_requires_option_selectors(self):
        with pytest.raises(ValueError, match="option selector"):
            FieldDescriptor("Gender", (LocatorStrategy.by_css("a"),), option_selectors=())

    def test_describe_strategies_in_order(self):
        descriptor = FieldDescriptor(
            "Gender",
            (LocatorStrategy.by_role("combobox", "Gender"), LocatorStrategy.by_css("#gender")),
        )
        assert descriptor.describe_strategies() == ("role=combobox[name='Gender']", "css='#gender'")

    def test_display_value_masks_sensitive_fields(self):
        password = FieldDescriptor("Password", (LocatorStrategy.by_css("#pw"),), sensitive=True)
        phone = FieldDescriptor("Phone", (LocatorStrategy.by_css("#phone"),))

        assert password.display_value("secret") == "***"
        assert password.display_value("") == ""
        assert phone.display_value("71234567") == "71234567"
