"""Request models for the HTTP API."""

from .requests import Credentials, SendMessageRequest

__all__ = ['Credentials', 'SendMessageRequest']
