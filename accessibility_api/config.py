# config.py
import os

PORT = int(os.getenv("PORT", 3000))
HOST = os.getenv("HOST", "0.0.0.0")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# for containers without the bundled Playwright Chromium
BROWSER_EXECUTABLE_PATH = os.getenv("BROWSER_EXECUTABLE_PATH") or os.getenv("PUPPETEER_EXECUTABLE_PATH")

BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]

NAVIGATION_TIMEOUT_MS = int(os.getenv("NAVIGATION_TIMEOUT_MS", 60000))
ANALYSIS_TIMEOUT = float(os.getenv("ANALYSIS_TIMEOUT", 60))  # seconds

MAX_CONCURRENT_AUDITS = int(os.getenv("MAX_CONCURRENT_AUDITS", 4))
AUDIT_QUEUE_TIMEOUT = float(os.getenv("AUDIT_QUEUE_TIMEOUT", 30))  # seconds
