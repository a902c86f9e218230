"""Order domain model"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass(frozen=True)
class Order:
    """Trading order decoded from one line of the transaction log"""

    order_id: str
    symbol: str
    side: str
    quantity: int = 0
    price: Decimal = Decimal("0")
    timestamp: datetime | None = None

    def matches(self, symbol: str, side: str) -> bool:
        """True when both the symbol and the side equal the filter values"""
        return self.symbol == symbol and self.side == side

    def describe(self) -> str:
        return (
            f"{self.order_id}: {self.side} {self.quantity} {self.symbol} "
            f"at ${self.price:.2f}"
        )
