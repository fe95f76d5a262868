"""
Domain Boundary Checker - Keep chat URLs on the marketplace domain
"""

import re
from urllib.parse import urlparse


class DomainBoundaryChecker:
    """Check if URLs are within allowed domain boundaries"""

    def __init__(self, base_domain: str = 'drom.ru', allow_subdomains: bool = True):
        """
        Initialize domain boundary checker.

        Args:
            base_domain: Base domain (e.g., 'drom.ru')
            allow_subdomains: Allow subdomains (e.g., my.drom.ru)
        """
        self.base_domain = self._normalize_domain(base_domain)
        self.allow_subdomains = allow_subdomains

    def _normalize_domain(self, domain: str) -> str:
        """Normalize domain name."""
        domain = re.sub(r'^https?://', '', domain.strip())
        domain = domain.rstrip('/')
        domain = re.sub(r'^www\.', '', domain)
        parsed = urlparse(f'http://{domain}')
        return (parsed.hostname or '').lower()

    def is_within_boundary(self, url: str) -> bool:
        """
        Check if URL is within allowed boundaries.

        Args:
            url: URL to check

        Returns:
            True if within boundary, False otherwise
        """
        if not url:
            return False

        try:
            parsed = urlparse(url.strip())
        except ValueError:
            return False

        if parsed.scheme not in ('http', 'https'):
            return False

        url_domain = (parsed.hostname or '').lower()
        if not url_domain:
            return False

        if url_domain == self.base_domain or url_domain == f'www.{self.base_domain}':
            return True

        if self.allow_subdomains and url_domain.endswith(f'.{self.base_domain}'):
            return True

        return False
