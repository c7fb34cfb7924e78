"""
Pytest configuration and fixtures.
"""

import os
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import pytest
from playwright.async_api import Error as PlaywrightError


# =============================================================================
# FAKE PLAYWRIGHT OBJECTS
# =============================================================================

class FakeElement:
    """
    One fake DOM element.

    ``fails`` names the activation mechanisms that raise for this element:
    "direct", "programmatic" and/or "coordinate".
    """

    def __init__(
        self,
        name: str,
        text: str = "",
        visible: bool = True,
        fails: Sequence[str] = (),
        box: Optional[Dict[str, float]] = None,
    ):
        self.name = name
        self.text = text
        self.visible = visible
        self.fails = set(fails)
        self.box = box if box is not None else {"x": 10, "y": 20, "width": 100, "height": 30}
        self.value = ""


class FakeMouse:
    def __init__(self, page: "FakePage"):
        self._page = page

    async def click(self, x: float, y: float) -> None:
        self._page.actions.append(f"mouse:{x:g},{y:g}")


class FakeNavigation:
    def __init__(self, page: "FakePage"):
        self._page = page

    async def __aenter__(self) -> "FakeNavigation":
        self._page.actions.append("expect_navigation")
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


ElementSource = Union[List[FakeElement], Callable[[], List[FakeElement]]]


class FakeLocator:
    """Lazy locator: elements are looked up on every call, like Playwright's."""

    def __init__(self, page: "FakePage", key: str, index: Optional[int] = None):
        self._page = page
        self.key = key
        self._index = index

    def _all(self) -> List[FakeElement]:
        return self._page.lookup(self.key)

    def _element(self) -> FakeElement:
        elements = self._all()
        index = self._index or 0
        if index >= len(elements):
            raise PlaywrightError(f"No element for {self.key} [{index}]")
        return elements[index]

    # Locator building

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self._page, f"{self.key} >> {selector}")

    def get_by_role(self, role: str, name: Optional[str] = None, exact: bool = False) -> "FakeLocator":
        return FakeLocator(self._page, f"{self.key} >> role={role}[{name}]")

    def get_by_text(self, text: str, exact: bool = False) -> "FakeLocator":
        return FakeLocator(self._page, f"{self.key} >> text={text}")

    @property
    def first(self) -> "FakeLocator":
        return self.nth(0)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self._page, self.key, index)

    # Queries

    async def count(self) -> int:
        return len(self._all())

    async def is_visible(self) -> bool:
        try:
            return self._element().visible
        except PlaywrightError:
            return False

    async def evaluate_all(self, script: str) -> List[Dict[str, Any]]:
        return [{"text": e.text, "visible": e.visible} for e in self._all()]

    async def text_content(self) -> str:
        return self._element().text

    async def input_value(self) -> str:
        return self._element().value

    async def bounding_box(self, timeout: Optional[float] = None) -> Optional[Dict[str, float]]:
        return self._element().box

    # Actions

    async def evaluate(self, script: str, arg: Any = None, timeout: Optional[float] = None) -> Any:
        element = self._element()
        if "el.click()" in script:
            if "programmatic" in element.fails:
                raise PlaywrightError(f"programmatic click failed on {element.name}")
            self._page.actions.append(f"js-click:{element.name}")
            self._page.on_activate(element)
        else:
            self._page.actions.append(f"evaluate:{element.name}")
        return None

    async def scroll_into_view_if_needed(self, timeout: Optional[float] = None) -> None:
        self._element()

    async def click(self, force: bool = False, timeout: Optional[float] = None) -> None:
        element = self._element()
        if "direct" in element.fails:
            raise PlaywrightError(f"Element is outside of the viewport: {element.name}")
        self._page.actions.append(f"click:{element.name}")
        self._page.on_activate(element)

    async def fill(self, value: str, timeout: Optional[float] = None) -> None:
        element = self._element()
        element.value = value
        if value:
            self._page.actions.append(f"fill:{element.name}={value}")

    async def press_sequentially(self, text: str, delay: float = 0) -> None:
        element = self._element()
        element.value += text
        self._page.actions.append(f"type:{element.name}={text}")

    async def press(self, key: str) -> None:
        self._page.actions.append(f"press:{self._element().name}={key}")


class FakePage(FakeLocator):
    """
    Fake Playwright page.

    Elements are registered per locator key; ``register`` computes the key
    from a LocatorStrategy so tests never spell selectors out by hand.
    ``shown`` maps a CSS selector to the sequence of "is something showing"
    answers page-level waits will see (the last answer repeats), and
    ``script_results`` maps a page script to what evaluate() returns for it.
    """

    def __init__(self):
        self.actions: List[str] = []
        self.shown: Dict[str, List[bool]] = {}
        self.activated: List[str] = []
        self.script_results: Dict[str, Any] = {}
        self._sources: Dict[str, ElementSource] = {}
        self.mouse = FakeMouse(self)
        self.url = "about:blank"
        super().__init__(self, "page")

    # Registration

    def add(self, key: str, elements: ElementSource) -> None:
        self._sources[key] = elements

    def register(self, strategy: Any, elements: ElementSource) -> None:
        self.add(strategy.locate(self).key, elements)

    def lookup(self, key: str) -> List[FakeElement]:
        source = self._sources.get(key, [])
        return list(source() if callable(source) else source)

    def on_activate(self, element: FakeElement) -> None:
        self.activated.append(element.name)

    # Page API

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def get_by_role(self, role: str, name: Optional[str] = None, exact: bool = False) -> FakeLocator:
        return FakeLocator(self, f"role={role}[{name}]")

    def get_by_text(self, text: str, exact: bool = False) -> FakeLocator:
        return FakeLocator(self, f"text={text}")

    async def evaluate(self, script: str, arg: Any = None, timeout: Optional[float] = None) -> Any:
        if isinstance(arg, str):
            answers = self.shown.get(arg, [False])
            showing = answers.pop(0) if len(answers) > 1 else answers[0]
            # The page-level script answers "is everything hidden?"
            return not showing
        return self.script_results.get(script)

    def expect_navigation(self, timeout: Optional[float] = None) -> FakeNavigation:
        return FakeNavigation(self)

    async def goto(self, url: str, timeout: Optional[float] = None) -> None:
        self.url = url
        self.actions.append(f"goto:{url}")

    async def title(self) -> str:
        return "Barrier reporting"

    async def screenshot(self, path: str, full_page: bool = False) -> None:
        with open(path, "wb") as f:
            f.write(b"\x89PNG")
        self.actions.append(f"screenshot:{path}")


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def fake_page() -> FakePage:
    """Provide an empty fake page."""
    return FakePage()


@pytest.fixture
def make_element() -> Callable[..., FakeElement]:
    """Factory for fake elements."""
    return FakeElement


@pytest.fixture
def selector_config():
    """Selector budgets small enough for unit tests."""
    from barrier_report_qa.engine.selector import SelectorConfig

    return SelectorConfig(
        interval_ms=1,
        stability_timeout_ms=300,
        min_stable_rounds=2,
        resolve_timeout_ms=200,
        overlay_timeout_ms=200,
        loading_timeout_ms=200,
        action_timeout_ms=100,
    )


@pytest.fixture
def settings(tmp_path):
    """Provide test settings with credentials and fast polling."""
    from barrier_report_qa.config import Settings, AppSettings, PollingSettings, ReportingSettings

    return Settings(
        app=AppSettings(email="tester@example.com", password="secret"),
        polling=PollingSettings(
            interval_ms=10,
            stability_timeout_ms=300,
            min_stable_rounds=2,
            resolve_timeout_ms=200,
            overlay_timeout_ms=200,
            loading_timeout_ms=200,
        ),
        reporting=ReportingSettings(output_dir=str(tmp_path / "output")),
    )


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with no credential or BARRIER_QA__ variables."""
    for name in list(os.environ):
        if name in ("EMAIL", "PASSWORD") or name.upper().startswith("BARRIER_QA__"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    from barrier_report_qa.config import reset_settings
    reset_settings()
    yield tmp_path
    reset_settings()
