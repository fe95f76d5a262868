"""
Request bodies accepted by the HTTP API.

Fields are optional so that missing values reach the route handlers,
which answer with the service's own 400 messages.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    """Drom account credentials."""

    login: Optional[str] = None
    password: Optional[str] = None

    def is_complete(self) -> bool:
        return bool(self.login) and bool(self.password)


class SendMessageRequest(Credentials):
    """Body of POST /drom/send-message."""

    model_config = ConfigDict(populate_by_name=True)

    chat_url: Optional[str] = Field(default=None, alias='chatUrl')
    text: Optional[str] = None

    def is_complete(self) -> bool:
        return super().is_complete() and bool(self.chat_url) and bool(self.text)
