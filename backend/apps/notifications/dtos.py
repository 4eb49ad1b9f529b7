from dataclasses import dataclass
from typing import List, Optional


@dataclass
class NotificationDTO:
    id: int
    title: str
    message: str
    kind: str
    is_read: bool
    created_at: Optional[str]


@dataclass
class NotificationFeedDTO:
    items: List[NotificationDTO]
    unread_count: int
