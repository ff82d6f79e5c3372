"""Image domain entity. Images are read here, never written."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Image:
    id: Optional[int]
    attraction_id: int
    filename: str
    path: str
    alt_text: Optional[str] = None
    is_primary: bool = False
    created_at: Optional[datetime] = None
