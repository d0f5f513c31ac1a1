from typing import Any, Dict

from axe_playwright_python.async_playwright import Axe
from playwright.async_api import Page

CATEGORIES = ("passes", "violations", "incomplete", "inapplicable")

axe = Axe()


async def analyze_page(page: Page) -> Dict[str, Any]:
    """Inject axe-core into the loaded page and return its raw result categories."""
    results = await axe.run(page)
    response = results.response or {}
    return {category: response.get(category) or [] for category in CATEGORIES}
