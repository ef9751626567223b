"""
SQLAlchemy Database Models

Two independent tables: registered users and submitted orders.
An order's name and email are free text, not a reference to a user.

Author: Khalil Bannouri
Version: 1.0.0
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from cookhouse.database import Base


class User(Base):
    """
    Registered customer account.

    Created on registration and never updated; the password is kept only as
    a bcrypt hash.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    username = Column(String(100), nullable=False, unique=True, index=True)
    email = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<User {self.username}>"


class Order(Base):
    """Dish order submitted from the website. Immutable once stored."""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    quantity = Column(Integer, nullable=False)
    dish = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Order #{self.id} - {self.quantity} x {self.dish} - {self.name}>"
