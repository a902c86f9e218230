"""Pydantic models for transaction log records

Decoding is intentionally shallow: a line is accepted when it is a JSON
object carrying the identifying keys with the right JSON types. Business
rules (which symbols or sides are valid) are not enforced here.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    field_validator,
)

from order_processor.domain.models import Order


class OrderRecord(BaseModel):
    """One line of the transaction log"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    order_id: StrictStr = Field(..., description="Unique order identifier")
    symbol: StrictStr = Field(..., description="Ticker symbol")
    side: StrictStr = Field(..., description="Order side (buy/sell)")
    quantity: StrictInt = Field(0, description="Order quantity")
    price: Decimal = Field(Decimal("0"), description="Order price")
    timestamp: datetime | None = Field(None, description="RFC3339 timestamp")

    @field_validator("quantity", "price", mode="before")
    @classmethod
    def null_as_zero(cls, v, info):
        """Treat JSON null as the zero value of informational fields"""
        if v is None:
            return 0 if info.field_name == "quantity" else Decimal("0")
        return v

    def to_domain(self) -> Order:
        """Convert to the immutable domain order"""
        return Order(
            order_id=self.order_id,
            symbol=self.symbol,
            side=self.side,
            quantity=self.quantity,
            price=self.price,
            timestamp=self.timestamp,
        )
