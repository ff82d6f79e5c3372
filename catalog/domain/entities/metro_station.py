"""Metro station domain entity - read-only reference data."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class MetroStation:
    """Metro station domain entity."""
    id: Optional[int]
    name: str
    line_color: str
    line_name: str
