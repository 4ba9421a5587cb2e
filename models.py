"""
Entity schemas for the finance tracker.

Every collection has three shapes: the stored entity, the payload accepted on
create, and the partial payload accepted on update. Money is held as Decimal
and written to JSON as a canonical two-place decimal string.
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal, ROUND_HALF_UP
from typing import Annotated, Literal, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    PlainSerializer,
    StringConstraints,
)
from pydantic.alias_generators import to_camel

CENT = Decimal('0.01')
MONEY_LIMIT = Decimal('100000000')

INCOME_CATEGORIES = (
    "Salary",
    "Freelance",
    "Investment",
    "Business",
    "Rental",
    "Other",
)

EXPENSE_CATEGORIES = (
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Insurance",
    "Other",
)


def _canonical(value: Decimal) -> Decimal:
    if not value.is_finite():
        raise ValueError("must be a finite number")
    if value.adjusted() >= 8:
        raise ValueError("must be less than 100000000")
    result = value.quantize(CENT, rounding=ROUND_HALF_UP)
    # columns are decimal(10, 2)
    if abs(result) >= MONEY_LIMIT:
        raise ValueError("must be less than 100000000")
    return result


def _date_only(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and len(value) > 10:
        try:
            return datetime.fromisoformat(value.replace('Z', '+00:00')).date()
        except ValueError:
            return value
    return value


def _today() -> date:
    return date.today()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


Money = Annotated[
    Decimal,
    AfterValidator(_canonical),
    PlainSerializer(str, return_type=str, when_used='json'),
]
NonNegativeMoney = Annotated[Money, Field(ge=0)]
CalendarDate = Annotated[date, BeforeValidator(_date_only)]
Name = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
TransactionType = Literal['income', 'expense']


class Schema(BaseModel):
    """camelCase on the wire, snake_case in Python; unknown keys are dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
        frozen=True,
    )

    def to_json(self) -> dict:
        return self.model_dump(mode='json', by_alias=True)


# -- subscriptions ---------------------------------------------------------

class SubscriptionCreate(Schema):
    name: Name
    cost: NonNegativeMoney
    next_payment_date: CalendarDate
    is_active: bool = True


class Subscription(SubscriptionCreate):
    id: str
    created_at: datetime


class SubscriptionUpdate(Schema):
    name: Name = None
    cost: NonNegativeMoney = None
    next_payment_date: CalendarDate = None
    is_active: bool = None


# -- transactions ----------------------------------------------------------

class TransactionCreate(Schema):
    description: Name
    amount: NonNegativeMoney
    type: TransactionType
    category: Name
    date: CalendarDate = Field(default_factory=_today)


class Transaction(TransactionCreate):
    id: str
    created_at: datetime


class TransactionUpdate(Schema):
    description: Name = None
    amount: NonNegativeMoney = None
    type: TransactionType = None
    category: Name = None
    date: CalendarDate = None


# -- savings accounts ------------------------------------------------------

class SavingsAccountCreate(Schema):
    name: Name
    balance: Money = Decimal('0.00')
    target_amount: Optional[NonNegativeMoney] = None
    interest_rate: Optional[Money] = Decimal('0.00')


class SavingsAccount(SavingsAccountCreate):
    id: str
    created_at: datetime


class SavingsAccountUpdate(Schema):
    name: Name = None
    balance: Money = None
    target_amount: Optional[NonNegativeMoney] = None
    interest_rate: Optional[Money] = None


# -- financial goals -------------------------------------------------------

class FinancialGoalCreate(Schema):
    name: Name
    target_amount: NonNegativeMoney
    current_amount: Money = Decimal('0.00')
    target_date: Optional[CalendarDate] = None
    is_completed: bool = False


class FinancialGoal(FinancialGoalCreate):
    id: str
    created_at: datetime


class FinancialGoalUpdate(Schema):
    name: Name = None
    target_amount: NonNegativeMoney = None
    current_amount: Money = None
    target_date: Optional[CalendarDate] = None
    is_completed: bool = None


@dataclass(frozen=True)
class Resource:
    """Everything the store, the routes and the client need about a collection."""

    name: str
    label: str
    table: str
    model: type
    create_model: type
    update_model: type
    newest_first_by: Optional[str] = None

    @property
    def fields(self):
        return [f for f in self.model.model_fields if f not in ('id', 'created_at')]


SUBSCRIPTIONS = Resource(
    'subscriptions', 'Subscription', 'subscriptions',
    Subscription, SubscriptionCreate, SubscriptionUpdate,
)
TRANSACTIONS = Resource(
    'transactions', 'Transaction', 'transactions',
    Transaction, TransactionCreate, TransactionUpdate,
    newest_first_by='date',
)
SAVINGS = Resource(
    'savings', 'Savings account', 'savings_accounts',
    SavingsAccount, SavingsAccountCreate, SavingsAccountUpdate,
)
GOALS = Resource(
    'goals', 'Goal', 'financial_goals',
    FinancialGoal, FinancialGoalCreate, FinancialGoalUpdate,
)

RESOURCES = {r.name: r for r in (SUBSCRIPTIONS, TRANSACTIONS, SAVINGS, GOALS)}
