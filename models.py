"""Records produced by one parse pass over an archived note page.

Everything here is immutable: a record is built once per note and thrown
away after its SQL has been written.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class IdentityProvider(Enum):
    """How a commenter's identity and avatar were established."""

    NONE = "none"
    EMAIL = "email"
    VK = "vk"


@dataclass(frozen=True)
class TagRef:
    """One keyword attached to a note."""

    slug: str
    text: str


@dataclass(frozen=True)
class CommentRecord:
    author: str
    text: str
    timestamp: datetime
    provider: IdentityProvider = IdentityProvider.NONE
    account_key: Optional[str] = None
    avatar_url: Optional[str] = None
    avatar_name: Optional[str] = None


@dataclass(frozen=True)
class NoteRecord:
    ctime: datetime
    title: str
    body: str
    tags: Tuple[TagRef, ...] = ()
    images: Tuple[str, ...] = ()
    comments: Tuple[CommentRecord, ...] = ()
    alias: Optional[str] = None

    @property
    def stamp(self):
        """Unix timestamp the target schema uses to identify the note."""
        return int(self.ctime.timestamp())
