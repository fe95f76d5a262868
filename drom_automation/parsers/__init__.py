"""
Content parsers for rendered pages
"""

from .message_extractor import MessageExtractor

__all__ = ["MessageExtractor"]
