"""
Exceptions raised by the automation workflows
"""


class DromAutomationError(Exception):
    """Base class for all service errors."""


class ConfigError(DromAutomationError):
    """Configuration file could not be used."""


class BrowserLaunchError(DromAutomationError):
    """Chromium could not be started."""


class NavigationError(DromAutomationError):
    """Page navigation failed or timed out."""


class LoginError(DromAutomationError):
    """Login form could not be filled or submitted."""


class ChatNotFoundError(DromAutomationError):
    """Chat page has no message input."""
