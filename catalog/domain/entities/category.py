"""Category domain entity."""
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

HEX_COLOR = re.compile(r"^#[0-9A-Fa-f]{6}$")


@dataclass
class Category:
    """Category domain entity."""
    id: Optional[int]
    name: str
    slug: str
    description: Optional[str] = None
    color: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    attractions_count: Optional[int] = None

    def is_valid(self) -> bool:
        """Validate category business rules."""
        return bool(
            self.name and
            2 <= len(self.name.strip()) <= 100 and
            self.slug and
            (self.color is None or HEX_COLOR.match(self.color))
        )
