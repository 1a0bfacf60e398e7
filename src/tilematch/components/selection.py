from dataclasses import dataclass
from typing import Optional, Tuple

@dataclass(slots=True)
class Selection:
    """At most one selected cell; None when nothing is selected."""
    cell: Optional[Tuple[int, int]] = None
