"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic so the domain entities stay stable
when the storage schema changes.
"""

from decimal import Decimal

from paycycle.domain import entities as domain
from paycycle.database.models import (
    Household as ORMHousehold,
    Member as ORMMember,
    Account as ORMAccount,
    Category as ORMCategory,
    CategoryBudget as ORMCategoryBudget,
    BudgetSummary as ORMBudgetSummary,
    Transaction as ORMTransaction,
    SharedExpenseSplit as ORMSharedExpenseSplit,
    Settlement as ORMSettlement,
    AccountTransfer as ORMAccountTransfer,
    RecurringTemplate as ORMRecurringTemplate,
)


def _money(value) -> Decimal:
    # SQLite hands Numeric columns back as Decimal, defaults may still be int
    return Decimal(value if value is not None else 0)


def household_to_domain(orm_household: ORMHousehold) -> domain.Household:
    """Convert SQLAlchemy Household model to domain Household entity."""
    return domain.Household(
        id=orm_household.id,
        name=orm_household.name,
        created_at=orm_household.created_at,
    )


def member_to_domain(orm_member: ORMMember) -> domain.Member:
    """Convert SQLAlchemy Member model to domain Member entity."""
    return domain.Member(
        id=orm_member.id,
        household_id=orm_member.household_id,
        name=orm_member.name,
        email=orm_member.email,
        payday_day=orm_member.payday_day,
        split_percentage=(
            Decimal(orm_member.split_percentage)
            if orm_member.split_percentage is not None
            else None
        ),
        status=orm_member.status,
        created_at=orm_member.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        owner_member_id=orm_account.owner_member_id,
        name=orm_account.name,
        balance=_money(orm_account.balance),
        is_excluded_from_budget=orm_account.is_excluded_from_budget,
        is_primary=orm_account.is_primary,
        account_type=orm_account.account_type,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        household_id=orm_category.household_id,
        name=orm_category.name,
        group_name=orm_category.group_name,
        created_at=orm_category.created_at,
    )


def category_budget_to_domain(orm_budget: ORMCategoryBudget) -> domain.CategoryBudget:
    """Convert SQLAlchemy CategoryBudget model to domain CategoryBudget entity."""
    return domain.CategoryBudget(
        id=orm_budget.id,
        member_id=orm_budget.member_id,
        category_id=orm_budget.category_id,
        category_group=orm_budget.category.group_name,
        allocated_amount=_money(orm_budget.allocated_amount),
        spent_amount=_money(orm_budget.spent_amount),
    )


def budget_summary_to_domain(orm_summary: ORMBudgetSummary) -> domain.BudgetSummary:
    """Convert SQLAlchemy BudgetSummary model to domain BudgetSummary entity."""
    return domain.BudgetSummary(
        id=orm_summary.id,
        member_id=orm_summary.member_id,
        total_allocated=_money(orm_summary.total_allocated),
        total_spent=_money(orm_summary.total_spent),
        updated_at=orm_summary.updated_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        household_id=orm_transaction.household_id,
        member_id=orm_transaction.member_id,
        account_id=orm_transaction.account_id,
        category_id=orm_transaction.category_id,
        date=orm_transaction.date,
        amount=_money(orm_transaction.amount),
        description=orm_transaction.description,
        is_shared=orm_transaction.is_shared,
        is_settled=orm_transaction.is_settled,
        created_at=orm_transaction.created_at,
        settlement_id=orm_transaction.settlement_id,
        recurring_template_id=orm_transaction.recurring_template_id,
    )


def split_to_domain(orm_split: ORMSharedExpenseSplit) -> domain.SharedExpenseSplit:
    """Convert SQLAlchemy SharedExpenseSplit model to domain entity."""
    return domain.SharedExpenseSplit(
        id=orm_split.id,
        transaction_id=orm_split.transaction_id,
        ower_member_id=orm_split.ower_member_id,
        owed_to_member_id=orm_split.owed_to_member_id,
        split_amount=_money(orm_split.split_amount),
        split_percentage=(
            Decimal(orm_split.split_percentage)
            if orm_split.split_percentage is not None
            else None
        ),
        is_paid=orm_split.is_paid,
        settlement_id=orm_split.settlement_id,
        created_at=orm_split.created_at,
    )


def settlement_to_domain(orm_settlement: ORMSettlement) -> domain.Settlement:
    """Convert SQLAlchemy Settlement model to domain Settlement entity."""
    return domain.Settlement(
        id=orm_settlement.id,
        household_id=orm_settlement.household_id,
        payer_member_id=orm_settlement.payer_member_id,
        receiver_member_id=orm_settlement.receiver_member_id,
        amount=_money(orm_settlement.amount),
        category_id=orm_settlement.category_id,
        payer_account_id=orm_settlement.payer_account_id,
        receiver_account_id=orm_settlement.receiver_account_id,
        note=orm_settlement.note,
        created_at=orm_settlement.created_at,
    )


def transfer_to_domain(orm_transfer: ORMAccountTransfer) -> domain.AccountTransfer:
    """Convert SQLAlchemy AccountTransfer model to domain entity."""
    return domain.AccountTransfer(
        id=orm_transfer.id,
        household_id=orm_transfer.household_id,
        member_id=orm_transfer.member_id,
        from_account_id=orm_transfer.from_account_id,
        to_account_id=orm_transfer.to_account_id,
        amount=_money(orm_transfer.amount),
        note=orm_transfer.note,
        created_at=orm_transfer.created_at,
    )


def recurring_template_to_domain(orm_template: ORMRecurringTemplate) -> domain.RecurringTemplate:
    """Convert SQLAlchemy RecurringTemplate model to domain entity."""
    return domain.RecurringTemplate(
        id=orm_template.id,
        household_id=orm_template.household_id,
        member_id=orm_template.member_id,
        account_id=orm_template.account_id,
        category_id=orm_template.category_id,
        amount=_money(orm_template.amount),
        recurring_day=orm_template.recurring_day,
        description=orm_template.description,
        is_active=orm_template.is_active,
        last_created_date=orm_template.last_created_date,
        created_at=orm_template.created_at,
    )
