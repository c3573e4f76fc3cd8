"""SQLAlchemy models for pocketledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    account_type = Column(String, nullable=False, default="checking")
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    transactions = relationship(
        "Transaction",
        back_populates="account",
        foreign_keys="Transaction.account_id",
    )


class Payee(Base):
    """Payee model."""

    __tablename__ = "payees"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Category(Base):
    """Category model with budget/total participation flags."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    name = Column(String(40), nullable=False)
    description = Column(String(140), nullable=True)
    is_income = Column(Boolean, default=False, nullable=False)
    exclude_from_budget = Column(Boolean, default=False, nullable=False)
    exclude_from_totals = Column(Boolean, default=False, nullable=False)
    order = Column("order", Integer, default=0, nullable=False)
    archived = Column(Boolean, default=False, nullable=False)
    archived_on = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    budget = relationship(
        "Budget", back_populates="category", uselist=False, cascade="all, delete-orphan"
    )


class Budget(Base):
    """Planned amount for a category; one row per category."""

    __tablename__ = "budgets"

    category_id = Column(Integer, ForeignKey("categories.id"), primary_key=True)
    amount = Column(Numeric(14, 2), nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    category = relationship("Category", back_populates="budget")


class RecurringTransaction(Base):
    """Recurring transaction definition."""

    __tablename__ = "recurring_transactions"

    id = Column(Integer, primary_key=True)
    description = Column(String, nullable=False)
    # Stored as text so the entered precision survives round trips
    amount = Column(String, nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    frequency = Column(String, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    payee_id = Column(Integer, ForeignKey("payees.id"), nullable=True)
    next_occurrence = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    description = Column(String, nullable=False, default="")
    amount = Column(Numeric(14, 2), nullable=False)
    currency = Column(String(3), nullable=False, default="USD")
    date = Column(Date, nullable=False)
    type = Column(String, nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    payee_id = Column(Integer, ForeignKey("payees.id"), nullable=True)
    transfer_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    notes = Column(String, nullable=True)
    recurring_id = Column(
        Integer, ForeignKey("recurring_transactions.id"), nullable=True
    )
    occurrence_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # One materialized transaction per recurring occurrence
    __table_args__ = (
        UniqueConstraint(
            "recurring_id", "occurrence_date", name="uq_recurring_occurrence"
        ),
    )

    account = relationship(
        "Account", back_populates="transactions", foreign_keys=[account_id]
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
