"""Order and Customer Domain Entities

Records created when a purchase charge settles.
"""

from datetime import datetime
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, ForeignKey, String, UniqueConstraint
from src.domain.base import BaseModel, generate_uuid


class Order(BaseModel, table=True):
    """
    Order - One purchased line item

    Domain Rules:
    - reference_no is the provider charge reference (shared by all items of a cart)
    - user_id is the owner (gift recipient if any, otherwise the buyer)
    - total_amount = price * quantity
    - One order per (reference_no, product_id)
    """

    __tablename__ = "orders"
    __table_args__ = (
        Index('ix_orders_reference_no', 'reference_no'),
        Index('ix_orders_seller_id', 'seller_id'),
        UniqueConstraint('reference_no', 'product_id', name='uq_orders_reference_product'),
    )

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    reference_no: str = Field(sa_column=Column(String(100), nullable=False))

    user_id: str = Field(sa_column=Column(String(36), nullable=False))

    seller_id: str = Field(sa_column=Column(String(36), nullable=False))

    product_id: str = Field(sa_column=Column(String(36), nullable=False))

    quantity: int = Field(default=1)

    total_amount: int = Field(sa_column=Column(BigInteger, nullable=False))

    created_at: datetime = Field(default_factory=datetime.utcnow)


class Customer(BaseModel, table=True):
    """Customer - buyer/merchant relationship created per order"""

    __tablename__ = "customers"

    id: str = Field(default_factory=generate_uuid, primary_key=True)

    user_id: str = Field(sa_column=Column(String(36), nullable=False, index=True))

    merchant_id: str = Field(sa_column=Column(String(36), nullable=False, index=True))

    order_id: str = Field(
        sa_column=Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False)
    )

    created_at: datetime = Field(default_factory=datetime.utcnow)
