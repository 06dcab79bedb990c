"""SQLAlchemy models for paycycle database."""

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


class Household(Base):
    """Household model."""

    __tablename__ = "households"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    members = relationship("Member", back_populates="household")
    categories = relationship("Category", back_populates="household")


class Member(Base):
    """Household member model."""

    __tablename__ = "members"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, ForeignKey("households.id"), nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    payday_day = Column(Integer, default=1, nullable=False)
    split_percentage = Column(Numeric(5, 2), nullable=True)
    status = Column(String, default="active", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    household = relationship("Household", back_populates="members")
    accounts = relationship("Account", back_populates="owner")


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    owner_member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    name = Column(String, nullable=False)
    balance = Column(Numeric(12, 2), default=0, nullable=False)
    is_excluded_from_budget = Column(Boolean, default=False, nullable=False)
    is_primary = Column(Boolean, default=False, nullable=False)
    account_type = Column(String, default="checking", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("owner_member_id", "name", name="uq_owner_account_name"),)

    # Relationships
    owner = relationship("Member", back_populates="accounts")


class Category(Base):
    """Budget category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, ForeignKey("households.id"), nullable=False)
    name = Column(String, nullable=False)
    group_name = Column(String, default="General", nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("household_id", "name", name="uq_household_category_name"),)

    # Relationships
    household = relationship("Household", back_populates="categories")


class CategoryBudget(Base):
    """Per-member category allocation model."""

    __tablename__ = "category_budgets"

    id = Column(Integer, primary_key=True)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    allocated_amount = Column(Numeric(12, 2), default=0, nullable=False)
    spent_amount = Column(Numeric(12, 2), default=0, nullable=False)

    __table_args__ = (UniqueConstraint("member_id", "category_id", name="uq_member_category"),)

    # Relationships
    category = relationship("Category")


class BudgetSummary(Base):
    """Per-member budget totals model."""

    __tablename__ = "budget_summaries"

    id = Column(Integer, primary_key=True)
    member_id = Column(Integer, ForeignKey("members.id"), unique=True, nullable=False)
    total_allocated = Column(Numeric(12, 2), default=0, nullable=False)
    total_spent = Column(Numeric(12, 2), default=0, nullable=False)
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, ForeignKey("households.id"), nullable=False)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    date = Column(Date, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=True)
    is_shared = Column(Boolean, default=False, nullable=False)
    is_settled = Column(Boolean, default=False, nullable=False)
    settlement_id = Column(Integer, ForeignKey("settlements.id"), nullable=True)
    recurring_template_id = Column(Integer, ForeignKey("recurring_templates.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class SharedExpenseSplit(Base):
    """Shared expense split model."""

    __tablename__ = "shared_expense_splits"

    id = Column(Integer, primary_key=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id"), nullable=False)
    ower_member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    owed_to_member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    split_amount = Column(Numeric(12, 2), nullable=False)
    split_percentage = Column(Numeric(5, 2), nullable=True)
    is_paid = Column(Boolean, default=False, nullable=False)
    settlement_id = Column(Integer, ForeignKey("settlements.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("transaction_id", "ower_member_id", name="uq_transaction_ower"),
    )


class Settlement(Base):
    """Settlement audit record model."""

    __tablename__ = "settlements"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, ForeignKey("households.id"), nullable=False)
    payer_member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    receiver_member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    payer_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    receiver_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    note = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class AccountTransfer(Base):
    """Transfer between two accounts of the same member."""

    __tablename__ = "account_transfers"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, ForeignKey("households.id"), nullable=False)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    from_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    to_account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    note = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class RecurringTemplate(Base):
    """Monthly recurring transaction template model."""

    __tablename__ = "recurring_templates"

    id = Column(Integer, primary_key=True)
    household_id = Column(Integer, ForeignKey("households.id"), nullable=False)
    member_id = Column(Integer, ForeignKey("members.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    amount = Column(Numeric(12, 2), nullable=False)
    recurring_day = Column(Integer, nullable=False)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    last_created_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
