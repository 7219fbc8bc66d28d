from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class UserAccountRow(Base):
    __tablename__ = "users"

    uid = Column(String(128), primary_key=True)
    email = Column(String(255), nullable=False, default="")
    display_name = Column(String(255), nullable=False, default="")
    created_at = Column(DateTime, nullable=False)
    total_receipts = Column(Integer, nullable=False, default=0)
    total_revenue = Column(BigInteger, nullable=False, default=0)


class ReceiptRow(Base):
    __tablename__ = "receipts"

    id = Column(String(36), primary_key=True)
    user_id = Column(String(128), ForeignKey("users.uid"), nullable=False, index=True)
    image_url = Column(String, nullable=True)
    store_name = Column(String(255), nullable=False)
    date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    total_amount = Column(BigInteger, nullable=False)
    items = Column(JSON, nullable=False, default=list)
    category = Column(String(120), nullable=True)
    payment_method = Column(String(60), nullable=True)
    created_at = Column(DateTime, nullable=False, index=True)
    updated_at = Column(DateTime, nullable=False)
