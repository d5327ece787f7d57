"""
Health Team QA - UI and API test automation built on Playwright.
"""

__version__ = "0.1.0"
