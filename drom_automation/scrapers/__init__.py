"""
Browser automation for drom.ru workflows
"""

from .browser_session import BrowserSession
from .drom_client import DromClient

__all__ = ["BrowserSession", "DromClient"]
