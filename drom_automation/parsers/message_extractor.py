"""
Message Extractor - Collect chat/message elements from a rendered messages page
"""

from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup

from ..config import DEFAULT_CONFIG


class MessageExtractor:
    """Extract chat-like elements from HTML using CSS substring selectors."""

    DEFAULT_SELECTORS = DEFAULT_CONFIG['drom']['message_selectors']

    def __init__(
        self,
        selectors: Optional[List[str]] = None,
        limit: int = 20,
        text_length: int = 150,
        html_length: int = 200
    ):
        """
        Initialize message extractor.

        Args:
            selectors: CSS selectors tried in order
            limit: Maximum number of elements returned
            text_length: Maximum characters of element text kept
            html_length: Maximum characters of element HTML kept
        """
        self.selectors = list(selectors or self.DEFAULT_SELECTORS)
        self.limit = limit
        self.text_length = text_length
        self.html_length = html_length

    def extract(self, html_content: Optional[str]) -> List[Dict[str, Any]]:
        """
        Extract message elements from HTML content.

        An element matching several selectors is reported once per selector.
        'id' is the element's position among all matches of its selector,
        so skipped (empty) elements leave gaps.

        Args:
            html_content: Rendered HTML of the messages page

        Returns:
            List of dicts with 'id', 'selector', 'text' and 'html'
        """
        if not html_content:
            return []

        soup = BeautifulSoup(html_content, 'lxml')
        chats = []

        for selector in self.selectors:
            for idx, element in enumerate(soup.select(selector)):
                text = element.get_text().strip()
                if not text:
                    continue
                chats.append({
                    'id': idx,
                    'selector': selector,
                    'text': text[:self.text_length],
                    'html': str(element)[:self.html_length]
                })

        return chats[:self.limit]
