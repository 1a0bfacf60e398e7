from dataclasses import dataclass

@dataclass(slots=True)
class Token:
    """One colored token occupying a grid cell.

    token_id stays fixed for the token's lifetime so presentation layers can key
    their renderables on it. row/col follow the token as it is swapped or falls.
    """
    token_id: int
    color: str
    row: int = -1
    col: int = -1

    @property
    def position(self) -> tuple[int, int]:
        return (self.row, self.col)
