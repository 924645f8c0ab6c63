from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class WantEntry:
    """
    One line of a want-list.

    Attributes:
        quantity: Copies wanted, always positive
        name: Card name as written by the customer
    """

    quantity: int
    name: str

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValueError(f"Wanted quantity must be positive: {self.quantity}")
