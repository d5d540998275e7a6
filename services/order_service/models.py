import enum

from sqlalchemy import JSON, Column, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import validates
from sqlalchemy.sql import func

from shared.config.database import Base


class OrderStatus(str, enum.Enum):
    NOT_PROCESSED = "Not Processed"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


# Administrators may move an order between any two statuses, including
# backwards (Delivered -> Not Processed). Narrow this table to restrict them.
ALLOWED_TRANSITIONS = {current: frozenset(OrderStatus) for current in OrderStatus}


class Order(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    # Product ids as submitted at checkout. Not a foreign key: deleting a
    # product leaves a dangling id behind.
    products = Column(JSON, nullable=False, default=list)
    payment = Column(JSON, nullable=True)
    transaction_id = Column(String(64), unique=True, nullable=True, index=True)
    buyer_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)
    status = Column(
        Enum(
            OrderStatus,
            name="order_status",
            values_callable=lambda statuses: [s.value for s in statuses],
            validate_strings=True,
        ),
        nullable=False,
        default=OrderStatus.NOT_PROCESSED,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __init__(self, **kwargs):
        kwargs.setdefault("status", OrderStatus.NOT_PROCESSED)
        kwargs.setdefault("products", [])
        super().__init__(**kwargs)

    @validates("status")
    def validate_status(self, key, value):
        # Raises ValueError for anything outside the enumeration, "" included.
        return OrderStatus(value)
