import asyncio
import json
import logging
import sys
from typing import Any, Dict

from playwright.async_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from accessibility_api import config
from .browser import launch_browser
from .engine import analyze_page
from .errors import AuditError, ErrorKind
from .formatter import format_results, summarize_test

log = logging.getLogger("accessibility-audit")

# testsRun lists inapplicable before incomplete
TESTS_RUN_ORDER = ("passes", "violations", "inapplicable", "incomplete")


async def run_audit(url: str) -> Dict[str, Any]:
    """
    Audit one page in its own browser:
      launch -> navigate -> analyze -> close -> format
    The browser is closed before this returns or raises.
    """
    async with launch_browser() as browser:
        try:
            page = await browser.new_page()
        except PlaywrightError as e:
            raise AuditError(ErrorKind.LAUNCH_FAILURE, f"could not open a page: {e}") from e

        try:
            await page.goto(url, wait_until="load", timeout=config.NAVIGATION_TIMEOUT_MS)
        except PlaywrightTimeoutError as e:
            raise AuditError(ErrorKind.TIMEOUT, f"navigation to {url} timed out") from e
        except PlaywrightError as e:
            raise AuditError(ErrorKind.NAVIGATION_FAILURE, f"navigation to {url} failed: {e}") from e
        log.info("Loaded %s", url)

        try:
            results = await asyncio.wait_for(analyze_page(page), timeout=config.ANALYSIS_TIMEOUT)
        except asyncio.TimeoutError as e:
            raise AuditError(ErrorKind.TIMEOUT, f"analysis of {url} timed out") from e
        except Exception as e:
            raise AuditError(ErrorKind.ANALYSIS_FAILURE, f"analysis of {url} failed: {e}") from e

    return build_report(url, results)


def build_report(url: str, results: Dict[str, Any]) -> Dict[str, Any]:
    categories = {name: results.get(name) or [] for name in TESTS_RUN_ORDER}
    log.info(
        "Audit of %s: %d passes, %d violations, %d incomplete, %d inapplicable",
        url,
        len(categories["passes"]),
        len(categories["violations"]),
        len(categories["incomplete"]),
        len(categories["inapplicable"]),
    )
    return {
        "url": url,
        "passes": format_results(categories["passes"], url),
        "violations": format_results(categories["violations"], url),
        "incomplete": format_results(categories["incomplete"], url),
        "inapplicable": format_results(categories["inapplicable"], url),
        "testsRun": [summarize_test(item) for name in TESTS_RUN_ORDER for item in categories[name]],
    }


# Run standalone for a quick audit
if __name__ == "__main__":
    logging.basicConfig(level=config.LOG_LEVEL)
    target = sys.argv[1] if len(sys.argv) > 1 else "https://example.com"
    report = asyncio.run(run_audit(target))
    print(json.dumps(report, indent=2))
