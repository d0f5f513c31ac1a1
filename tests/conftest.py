import copy

import pytest
from fastapi.testclient import TestClient

from accessibility_api import app as app_module
from accessibility_api.core import browser as browser_module

SAMPLE_RESULTS = {
    "passes": [
        {
            "id": "document-title",
            "impact": None,
            "description": "Ensures each HTML document contains a non-empty <title> element",
            "help": "Documents must have <title> element to aid in navigation",
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/document-title",
            "tags": ["cat.text-alternatives", "wcag2a", "wcag242"],
            "nodes": [{"html": "<html>", "target": ["html"], "any": [{"message": "Document has a non-empty <title> element"}]}],
        },
        {
            "id": "html-has-lang",
            "description": "Ensures every HTML document has a lang attribute",
            "help": "<html> element must have a lang attribute",
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/html-has-lang",
            "tags": ["cat.language", "wcag2a", "wcag311"],
            "nodes": [{"html": "<html lang=\"en\">", "target": ["html"], "any": []}],
        },
    ],
    "violations": [
        {
            "id": "image-alt",
            "impact": "critical",
            "description": "Ensures <img> elements have alternate text or a role of none or presentation",
            "help": "Images must have alternate text",
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/image-alt",
            "tags": ["cat.text-alternatives", "wcag2a", "wcag111"],
            "nodes": [
                {
                    "html": "<img src=\"logo.png\">",
                    "target": ["img"],
                    "any": [
                        {"message": "Element does not have an alt attribute"},
                        {"message": "aria-label attribute does not exist or is empty"},
                    ],
                }
            ],
        }
    ],
    "incomplete": [
        {
            "id": "color-contrast",
            "impact": "serious",
            "description": "Ensures the contrast between foreground and background colors meets WCAG 2 AA",
            "help": "Elements must meet minimum color contrast ratio thresholds",
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/color-contrast",
            "tags": ["cat.color", "wcag2aa", "wcag143"],
            "nodes": [{"html": "<p class=\"muted\">Fine print</p>", "target": [".muted"]}],
        }
    ],
    "inapplicable": [
        {
            "id": "video-caption",
            "description": "Ensures <video> elements have captions",
            "help": "<video> elements must have captions",
            "helpUrl": "https://dequeuniversity.com/rules/axe/4.8/video-caption",
            "tags": ["cat.text-alternatives", "wcag2a", "wcag122"],
            "nodes": [],
        }
    ],
}


class FakePage:
    def __init__(self, goto_error=None):
        self.goto_error = goto_error
        self.visited = None
        self.goto_kwargs = None

    async def goto(self, url, **kwargs):
        self.visited = url
        self.goto_kwargs = kwargs
        if self.goto_error:
            raise self.goto_error


class FakeBrowser:
    version = "fake-chromium"

    def __init__(self, page=None, new_page_error=None):
        self.page = page or FakePage()
        self.new_page_error = new_page_error
        self.closed = False

    async def new_page(self):
        if self.new_page_error:
            raise self.new_page_error
        return self.page

    async def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, browser, launch_error=None):
        self.browser = browser
        self.launch_error = launch_error
        self.launch_kwargs = None

    async def launch(self, **kwargs):
        self.launch_kwargs = kwargs
        if self.launch_error:
            raise self.launch_error
        return self.browser


class FakePlaywright:
    def __init__(self, browser, launch_error=None):
        self.chromium = FakeChromium(browser, launch_error)
        self.stopped = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        self.stopped = True
        return False


@pytest.fixture
def sample_results():
    return copy.deepcopy(SAMPLE_RESULTS)


@pytest.fixture
def fake_browser():
    return FakeBrowser()


@pytest.fixture
def playwright_stub(monkeypatch, fake_browser):
    stub = FakePlaywright(fake_browser)
    monkeypatch.setattr(browser_module, "async_playwright", lambda: stub)
    return stub


@pytest.fixture
def client():
    with TestClient(app_module.app) as test_client:
        yield test_client
    app_module.app.dependency_overrides.clear()
