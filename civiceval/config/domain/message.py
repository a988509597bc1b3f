"""ConversationMessage — one turn of a chat transcript."""

from typing import Literal

from pydantic import BaseModel

type Role = Literal["system", "user", "assistant"]


class ConversationMessage(BaseModel, frozen=True):
    role: Role
    content: str
