"""
In-memory stand-ins for the playwright Page / Locator surface used by the
framework. Selectors are matched by exact string against `FakePage.dom`.
"""

import time
from typing import Callable, Dict, List, Optional

from playwright.sync_api import Error as PlaywrightError


class FakeElement:
    def __init__(
        self,
        visible=True,
        enabled=True,
        checked=False,
        text="",
        value="",
        attributes=None,
        box=None,
        click_error=None,
        script_error=None,
        on_click: Optional[Callable[["FakeElement"], None]] = None,
    ):
        self.visible = visible
        self.enabled = enabled
        self.checked = checked
        self.text = text
        self.value = value
        self.attributes = attributes or {}
        self.box = box
        self.click_error = click_error
        self.script_error = script_error
        self.on_click = on_click
        self.clicks: List[str] = []

    def activate(self, how: str) -> None:
        self.clicks.append(how)
        if self.on_click:
            self.on_click(self)


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str, index: Optional[int] = None):
        self.page = page
        self.selector = selector
        self.index = index

    def __repr__(self):
        return f"FakeLocator({self.selector!r}, {self.index})"

    # Resolution

    def _matches(self) -> List[FakeElement]:
        return list(self.page.dom.get(self.selector, []))

    def _element(self) -> FakeElement:
        matches = self._matches()
        index = self.index or 0
        if index >= len(matches):
            raise PlaywrightError(f"Timeout: no element for {self.selector}")
        return matches[index]

    @property
    def first(self) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, 0)

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self.page, self.selector, index)

    def count(self) -> int:
        return len(self._matches()) if self.index is None else int(self.index < len(self._matches()))

    def all(self) -> List["FakeLocator"]:
        return [self.nth(i) for i in range(len(self._matches()))]

    # Waits and state

    def wait_for(self, state="visible", timeout=None) -> None:
        self.page.waits.append((self.selector, state))
        element = self._element()
        if state == "visible" and not element.visible:
            raise PlaywrightError(f"Timeout: {self.selector} not visible")

    def is_visible(self) -> bool:
        try:
            return self._element().visible
        except PlaywrightError:
            return False

    def is_enabled(self) -> bool:
        return self._element().enabled

    def is_checked(self) -> bool:
        return self._element().checked

    def inner_text(self) -> str:
        return self._element().text

    def input_value(self) -> str:
        return self._element().value

    def get_attribute(self, name: str) -> Optional[str]:
        return self._element().attributes.get(name)

    def bounding_box(self):
        return self._element().box

    # Actions

    def scroll_into_view_if_needed(self, timeout=None) -> None:
        self._element()

    def click(self, timeout=None, position=None) -> None:
        element = self._element()
        if element.click_error:
            raise element.click_error
        element.activate("native")

    def evaluate(self, script: str):
        element = self._element()
        if element.script_error:
            raise element.script_error
        element.activate("script")

    def clear(self, timeout=None) -> None:
        self._element().value = ""

    def fill(self, value: str, timeout=None) -> None:
        self._element().value = value


class FakeKeyboard:
    def __init__(self, page: "FakePage"):
        self.page = page
        self.pressed: List[str] = []

    def press(self, key: str) -> None:
        self.pressed.append(key)
        if key in self.page.key_handlers:
            self.page.key_handlers[key]()


class FakeMouse:
    def __init__(self, page: "FakePage"):
        self.page = page
        self.clicks = []

    def move(self, x, y) -> None:
        pass

    def click(self, x, y) -> None:
        self.clicks.append((x, y))
        if self.page.pointer_target is not None:
            self.page.pointer_target.activate("pointer")


class FakePage:
    def __init__(self, url: str = "https://app.example.com/en/create-account"):
        self.url = url
        self.dom: Dict[str, List[FakeElement]] = {}
        self.key_handlers: Dict[str, Callable[[], None]] = {}
        self.pointer_target: Optional[FakeElement] = None
        self.keyboard = FakeKeyboard(self)
        self.mouse = FakeMouse(self)
        self.waits = []
        self.timeouts: List[float] = []
        self.load_states: List[str] = []
        self.evaluated: List[str] = []
        self.closed = False
        self.listeners = {}

    def add(self, selector: str, *elements: FakeElement) -> FakeElement:
        self.dom.setdefault(selector, []).extend(elements)
        return elements[0]

    def remove(self, selector: str) -> None:
        self.dom.pop(selector, None)

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def wait_for_timeout(self, ms: float) -> None:
        self.timeouts.append(ms)
        time.sleep(0.001)

    def wait_for_load_state(self, state: str = "load", timeout=None) -> None:
        self.load_states.append(state)

    def wait_for_url(self, predicate, timeout=None, wait_until=None) -> None:
        if not predicate(self.url):
            raise PlaywrightError(f"Timeout {timeout}ms exceeded waiting for URL")

    def evaluate(self, script: str):
        if self.closed:
            raise PlaywrightError("Target page, context or browser has been closed")
        self.evaluated.append(script)
        return self.url

    def is_closed(self) -> bool:
        return self.closed

    def on(self, event: str, callback) -> None:
        self.listeners.setdefault(event, []).append(callback)

    def emit(self, event: str, payload) -> None:
        for callback in self.listeners.get(event, []):
            callback(payload)

    def title(self) -> str:
        return "Create account"

    def screenshot(self, path=None, full_page=False) -> bytes:
        return b"\x89PNG fake"

    def content(self) -> str:
        return "<html><body>fake</body></html>"


class FakeConsoleMessage:
    def __init__(self, type: str, text: str):
        self.type = type
        self.text = text


class FakeContext:
    def __init__(self):
        self.cookies_cleared = 0
        self.closed = False

    def clear_cookies(self) -> None:
        self.cookies_cleared += 1

    def close(self) -> None:
        self.closed = True


class FakeBrowser:
    def __init__(self):
        self.connected = True

    def is_connected(self) -> bool:
        return self.connected

    def close(self) -> None:
        self.connected = False
