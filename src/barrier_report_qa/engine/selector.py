"""
Resilient Selector - Resolve logical fields and drive dropdown selections.

Selection pipeline (select_option):
1. Resolve the field through its ordered locator strategies and open it
2. Wait for the option list to stabilize (StabilityPoller)
3. Match the requested value against the stable list (match strategy)
4. Activate the matched option through the interaction fallback list
5. Confirm the dropdown overlay closed and the loading panel is gone

Interaction fallbacks are distinct mechanisms tried in order, not retries:
direct click -> programmatic element.click() -> click at the element's
centre coordinates. The first one that does not raise wins.
"""

from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple, TYPE_CHECKING
import logging

from playwright.async_api import Error as PlaywrightError

from barrier_report_qa.engine.locators import FieldDescriptor, LocatorStrategy
from barrier_report_qa.engine.match_strategy import MatchKind, OptionCandidate, match
from barrier_report_qa.engine.stability import StabilityOptions, StabilityPoller
from barrier_report_qa.exceptions import (
    BrowserError,
    FieldNotFoundError,
    InteractionFailedError,
    OptionNotFoundError,
    StabilityTimeoutError,
)

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page
    from barrier_report_qa.config.settings import Settings

logger = logging.getLogger(__name__)


# Text and layout visibility of every element matched by an option selector
OPTION_STATE_JS = """els => els.map(el => {
    const style = window.getComputedStyle(el);
    const rect = el.getBoundingClientRect();
    return {
        text: (el.textContent || '').trim(),
        visible: style.display !== 'none'
            && style.visibility !== 'hidden'
            && style.opacity !== '0'
            && rect.width > 0 && rect.height > 0,
    };
})"""

# True when nothing matching the selector is showing
ALL_HIDDEN_JS = """selector => Array.from(document.querySelectorAll(selector)).every(el => {
    const style = window.getComputedStyle(el);
    const rect = el.getBoundingClientRect();
    return style.display === 'none'
        || style.visibility === 'hidden'
        || el.classList.contains('dx-state-invisible')
        || rect.width === 0 || rect.height === 0;
})"""

# Centre a field inside the scroll container of a long DevExtreme form
REVEAL_JS = """el => {
    const container = el.closest('.dx-scrollable-container') || el.closest('.dx-scrollview-content');
    if (container) {
        const containerRect = container.getBoundingClientRect();
        const elementRect = el.getBoundingClientRect();
        container.scrollTop += elementRect.top - containerRect.top - 150;
    } else {
        el.scrollIntoView({ block: 'center' });
    }
}"""


Activate = Callable[["Page", "Locator", int], Awaitable[None]]


@dataclass(frozen=True)
class InteractionFallback:
    """A named mechanism for activating an element."""
    name: str
    activate: Activate


async def _direct_click(page: "Page", element: "Locator", timeout_ms: int) -> None:
    await element.scroll_into_view_if_needed(timeout=timeout_ms)
    await element.click(force=True, timeout=timeout_ms)


async def _programmatic_click(page: "Page", element: "Locator", timeout_ms: int) -> None:
    await element.evaluate("el => el.click()", timeout=timeout_ms)


async def _coordinate_click(page: "Page", element: "Locator", timeout_ms: int) -> None:
    box = await element.bounding_box(timeout=timeout_ms)
    if not box:
        raise BrowserError("Element has no bounding box to click")
    await page.mouse.click(box["x"] + box["width"] / 2, box["y"] + box["height"] / 2)


DEFAULT_INTERACTIONS: Tuple[InteractionFallback, ...] = (
    InteractionFallback("direct", _direct_click),
    InteractionFallback("programmatic", _programmatic_click),
    InteractionFallback("coordinate", _coordinate_click),
)


@dataclass(frozen=True)
class SelectorConfig:
    """
    Budgets and page-level selectors used by the ResilientSelector.

    Attributes:
        interval_ms: Polling interval for every wait
        stability_timeout_ms: Budget for an option list to settle
        min_stable_rounds: Consecutive unchanged rounds required
        resolve_timeout_ms: Budget for resolving a field
        overlay_timeout_ms: Budget for the overlay to close after a pick
        loading_timeout_ms: Budget for the loading panel to go away
        action_timeout_ms: Timeout passed to each individual browser action
        overlay_selector: Dropdown overlay whose disappearance confirms a pick
        loading_selector: Loading panel shown while the page refreshes data
    """
    interval_ms: int = 250
    stability_timeout_ms: int = 10000
    min_stable_rounds: int = 2
    resolve_timeout_ms: int = 10000
    overlay_timeout_ms: int = 5000
    loading_timeout_ms: int = 10000
    action_timeout_ms: int = 5000
    overlay_selector: str = ".dx-dropdowneditor-overlay .dx-overlay-content"
    loading_selector: str = ".dx-loadpanel-wrapper"

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SelectorConfig":
        polling = settings.polling
        return cls(
            interval_ms=polling.interval_ms,
            stability_timeout_ms=polling.stability_timeout_ms,
            min_stable_rounds=polling.min_stable_rounds,
            resolve_timeout_ms=polling.resolve_timeout_ms,
            overlay_timeout_ms=polling.overlay_timeout_ms,
            loading_timeout_ms=polling.loading_timeout_ms,
            action_timeout_ms=settings.browser.action_timeout_ms,
        )

    def wait(self, timeout_ms: int) -> StabilityOptions:
        return StabilityOptions(
            interval_ms=self.interval_ms,
            timeout_ms=timeout_ms,
            min_stable_rounds=self.min_stable_rounds,
        )


@dataclass
class ResolvedField:
    """A field resolved to a single live element."""
    descriptor: FieldDescriptor
    strategy: LocatorStrategy
    element: "Locator"


@dataclass
class SelectionOutcome:
    """
    Result of a successful select_option call.

    Attributes:
        field_name: Logical field name
        requested: Value the caller asked for
        selected_text: Text of the option actually activated
        match_kind: How the option matched
        interaction: Name of the interaction fallback that worked
        candidates: Option texts that were on screen
    """
    field_name: str
    requested: str
    selected_text: str
    match_kind: MatchKind
    interaction: str
    candidates: List[str] = field(default_factory=list)


class ResilientSelector:
    """
    Resolve fields by ordered strategies and select dropdown options.

    Each call reads live page state; nothing is cached between calls.

    Example:
        >>> selector = ResilientSelector(page, SelectorConfig.from_settings(settings))
        >>> outcome = await selector.select_option(AGE_FIELD, "25 - 34 years")
        >>> outcome.match_kind
        <MatchKind.EXACT: 'exact'>
    """

    def __init__(
        self,
        page: "Page",
        config: Optional[SelectorConfig] = None,
        interactions: Sequence[InteractionFallback] = DEFAULT_INTERACTIONS,
    ):
        if not interactions:
            raise ValueError("At least one interaction fallback is required")
        self._page = page
        self.config = config or SelectorConfig()
        self.interactions = tuple(interactions)
        self._poller = StabilityPoller(self.config.wait(self.config.stability_timeout_ms))

    @property
    def poller(self) -> StabilityPoller:
        return self._poller

    # =========================================================================
    # RESOLUTION
    # =========================================================================

    async def resolve_field(
        self,
        descriptor: FieldDescriptor,
        value: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> "Locator":
        """
        Resolve a field to exactly one visible element.

        Strategies are swept in declared order until one yields exactly one
        visible element; sweeps repeat until the resolution budget ends
        (timeout_ms, defaulting to the configured resolve timeout).

        Raises:
            FieldNotFoundError: No strategy resolved within the budget
        """
        resolved = await self._resolve(descriptor, value, timeout_ms)
        return resolved.element

    async def _resolve(
        self,
        descriptor: FieldDescriptor,
        value: Optional[str] = None,
        timeout_ms: Optional[int] = None,
    ) -> ResolvedField:
        budget = timeout_ms if timeout_ms is not None else self.config.resolve_timeout_ms

        async def sweep() -> Optional[ResolvedField]:
            for strategy in descriptor.strategies:
                element = await self._single_visible(descriptor, strategy)
                if element is not None:
                    return ResolvedField(descriptor, strategy, element)
            return None

        try:
            resolved = await self._poller.poll_until(
                sweep,
                self.config.wait(budget),
                description=f"field '{descriptor.name}'",
            )
        except StabilityTimeoutError:
            raise FieldNotFoundError(
                descriptor.name,
                descriptor.describe_strategies(),
                budget,
                value=value,
            ) from None

        logger.debug(f"Resolved '{descriptor.name}' via {resolved.strategy.describe()}")
        return resolved

    async def _single_visible(
        self,
        descriptor: FieldDescriptor,
        strategy: LocatorStrategy,
    ) -> Optional["Locator"]:
        locator = strategy.locate(self._page)
        count = await locator.count()
        if count == 0:
            return None

        if descriptor.reveal and count == 1:
            await locator.first.evaluate(REVEAL_JS)

        visible = []
        for i in range(count):
            candidate = locator.nth(i)
            if await candidate.is_visible():
                visible.append(candidate)

        if len(visible) == 1:
            return visible[0]
        if len(visible) > 1:
            logger.debug(
                f"{strategy.describe()} is ambiguous for '{descriptor.name}' "
                f"({len(visible)} visible elements)"
            )
        return None

    # =========================================================================
    # INTERACTION
    # =========================================================================

    async def activate(self, element: "Locator") -> str:
        """
        Activate an element through the interaction fallbacks.

        Returns:
            Name of the fallback that succeeded

        Raises:
            PlaywrightError/BrowserError: The last failure if every fallback failed
        """
        last_error: Optional[Exception] = None
        for fallback in self.interactions:
            try:
                await fallback.activate(self._page, element, self.config.action_timeout_ms)
                return fallback.name
            except (PlaywrightError, BrowserError) as e:
                logger.debug(f"{fallback.name} activation failed: {e}")
                last_error = e
        raise last_error

    async def _activate_or_fail(
        self,
        element: "Locator",
        field_name: str,
        value: str,
        candidates: Sequence[str],
    ) -> str:
        try:
            return await self.activate(element)
        except (PlaywrightError, BrowserError) as e:
            raise InteractionFailedError(
                field_name,
                value,
                candidates,
                [f.name for f in self.interactions],
                last_error=str(e),
            ) from e

    async def click_field(self, descriptor: FieldDescriptor) -> str:
        """Resolve a field (button, menu entry, ...) and activate it."""
        element = await self.resolve_field(descriptor)
        interaction = await self._activate_or_fail(element, descriptor.name, "", [])
        logger.debug(f"Clicked '{descriptor.name}' ({interaction})")
        return interaction

    async def read_options(
        self,
        descriptor: FieldDescriptor,
    ) -> Tuple[Optional["Locator"], List[OptionCandidate]]:
        """
        Snapshot the options currently rendered for a field.

        The first option selector that matches anything wins.
        """
        for selector in descriptor.option_selectors:
            options = self._page.locator(selector)
            states = await options.evaluate_all(OPTION_STATE_JS)
            if states:
                return options, [
                    OptionCandidate(text=s["text"], index=i, visible=bool(s["visible"]))
                    for i, s in enumerate(states)
                ]
        return None, []

    async def select_option(self, descriptor: FieldDescriptor, value: str) -> SelectionOutcome:
        """
        Open a dropdown field and select the option best matching value.

        Raises:
            FieldNotFoundError: The field could not be resolved
            StabilityTimeoutError: The option list never settled
            OptionNotFoundError: No option matched value
            InteractionFailedError: The field or option could not be activated
        """
        logger.info(f"Selecting \"{value}\" in {descriptor.name}")

        field_element = await self.resolve_field(descriptor, value)
        await self._activate_or_fail(field_element, descriptor.name, value, [])

        source: dict = {"options": None}

        async def fetch() -> List[OptionCandidate]:
            source["options"], candidates = await self.read_options(descriptor)
            return candidates

        stable = await self._poller.wait_for_stable(
            fetch,
            self.config.wait(self.config.stability_timeout_ms),
            description=f"options of '{descriptor.name}'",
        )
        texts = [c.text for c in stable]
        logger.debug(f"Options for {descriptor.name}: {texts}")

        # Hidden entries belong to lists that are not open
        visible = [c for c in stable if c.visible] or stable
        result = match(visible, value)
        if not result.found:
            raise OptionNotFoundError(descriptor.name, value, texts)

        option = source["options"].nth(result.candidate.index)
        interaction = await self._activate_or_fail(option, descriptor.name, value, texts)

        await self.wait_hidden(
            self.config.overlay_selector,
            self.config.overlay_timeout_ms,
            description=f"'{descriptor.name}' dropdown to close",
        )
        await self.wait_for_loading()

        logger.info(
            f"Selected \"{result.candidate.text}\" in {descriptor.name} "
            f"({result.kind.value}, {interaction})"
        )
        return SelectionOutcome(
            field_name=descriptor.name,
            requested=value,
            selected_text=result.candidate.text,
            match_kind=result.kind,
            interaction=interaction,
            candidates=texts,
        )

    async def fill_text(
        self,
        descriptor: FieldDescriptor,
        value: str,
        type_delay_ms: int = 0,
        commit_key: Optional[str] = None,
    ) -> str:
        """
        Resolve a text input, clear it and type value.

        Args:
            descriptor: The input field
            value: Text to enter
            type_delay_ms: Per-key delay; 0 fills in one step
            commit_key: Key pressed afterwards to commit (e.g. "Tab")

        Returns:
            The input's value after typing
        """
        shown = descriptor.display_value(value)
        element = await self.resolve_field(descriptor, shown)
        await self._activate_or_fail(element, descriptor.name, shown, [])
        await element.fill("", timeout=self.config.action_timeout_ms)
        if type_delay_ms:
            await element.press_sequentially(value, delay=type_delay_ms)
        else:
            await element.fill(value, timeout=self.config.action_timeout_ms)
        if commit_key:
            await element.press(commit_key)
        entered = await element.input_value()
        logger.debug(f"Filled '{descriptor.name}' with {descriptor.display_value(entered)!r}")
        return entered

    # =========================================================================
    # WAITS
    # =========================================================================

    async def wait_hidden(self, selector: str, timeout_ms: int, description: str) -> None:
        """Wait until nothing matching selector is showing."""
        async def hidden() -> bool:
            return bool(await self._page.evaluate(ALL_HIDDEN_JS, selector))

        await self._poller.poll_until(hidden, self.config.wait(timeout_ms), description=description)

    async def wait_shown(self, selector: str, timeout_ms: int, description: str) -> None:
        """Wait until something matching selector is showing."""
        async def shown() -> bool:
            return not await self._page.evaluate(ALL_HIDDEN_JS, selector)

        await self._poller.poll_until(shown, self.config.wait(timeout_ms), description=description)

    async def wait_for_loading(self) -> None:
        """Wait for the loading panel (if any) to go away."""
        await self.wait_hidden(
            self.config.loading_selector,
            self.config.loading_timeout_ms,
            description="loading panel to disappear",
        )

