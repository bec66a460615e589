"""SQLAlchemy models for the SQLite account store."""

from datetime import datetime, UTC
from decimal import Decimal

from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class DecimalString(TypeDecorator):
    """Money amount stored as its exact decimal string.

    SQLite keeps NUMERIC values as floats, which rounds large or sub-cent
    amounts.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


class Account(Base):
    """Bank account model."""

    __tablename__ = "accounts"

    account_number = Column(String, primary_key=True)
    customer_name = Column(String, nullable=False)
    balance = Column(DecimalString, nullable=False, default=Decimal("0"))
    password_hash = Column(String, nullable=True)
    pin = Column(String, nullable=True)
    is_locked = Column(Boolean, default=False, nullable=False)

    # Relationships
    transactions = relationship(
        "Transaction",
        back_populates="account",
        cascade="all, delete-orphan",
        order_by="Transaction.position",
    )


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_number = Column(String, ForeignKey("accounts.account_number"), nullable=False)
    position = Column(Integer, nullable=False)
    kind = Column(String, nullable=False)
    amount = Column(DecimalString, nullable=False)
    timestamp = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # History order within an account
    __table_args__ = (
        UniqueConstraint("account_number", "position", name="uq_account_position"),
    )

    # Relationships
    account = relationship("Account", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
