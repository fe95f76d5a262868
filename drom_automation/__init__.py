"""
Drom automation service - stealth Playwright workflows behind a FastAPI endpoint
"""

__version__ = "1.0.0"
SERVICE_NAME = "drom-automation"
