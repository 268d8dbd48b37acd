"""Aggregate roots persisted by the portal."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from services.repository import AggregateRoot


@dataclass
class ContactMessage(AggregateRoot):
    __tablename__ = 'contact_messages'

    name: str
    email: str
    message: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: Optional[int] = None
