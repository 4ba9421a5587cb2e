"""Pure functions deriving dashboard figures from collection snapshots.

Nothing here touches storage or formatting. Every function takes the full
list it needs, recomputes from scratch and treats an empty list as "no data".
All arithmetic stays in Decimal.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

ZERO = Decimal('0')
HUNDRED = Decimal('100')
TENTH = Decimal('0.1')


@dataclass(frozen=True)
class MonthlyTotals:
    income: Decimal
    expenses: Decimal
    net: Decimal


@dataclass(frozen=True)
class CategoryShare:
    category: str
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class MonthBucket:
    year: int
    month: int
    income: Decimal
    expenses: Decimal

    @property
    def net(self) -> Decimal:
        return self.income - self.expenses


@dataclass(frozen=True)
class CategoryGroup:
    category: str
    type: str
    count: int
    total: Decimal


@dataclass(frozen=True)
class SubscriptionSummary:
    monthly_total: Decimal
    active_count: int
    next_payment: Optional[date]


@dataclass(frozen=True)
class GoalSummary:
    active_count: int
    total_target: Decimal
    total_saved: Decimal
    average_progress: Decimal


@dataclass(frozen=True)
class Insights:
    expense_count: int
    top_expense_category: Optional[str]
    goal_count: int
    completed_goal_count: int


def _expenses(transactions):
    return [t for t in transactions if t.type == 'expense']


def monthly_totals(transactions, now: Optional[date] = None) -> MonthlyTotals:
    """Income, expenses and net for the calendar month containing `now`."""
    now = now or date.today()
    income = expenses = ZERO
    for t in transactions:
        if t.date.year != now.year or t.date.month != now.month:
            continue
        if t.type == 'income':
            income += t.amount
        elif t.type == 'expense':
            expenses += t.amount
    return MonthlyTotals(income=income, expenses=expenses, net=income - expenses)


def category_breakdown(transactions) -> list[CategoryShare]:
    """Expense totals per category, largest first, with their share of all expenses.

    Shares are rounded half-up to one decimal place. Categories compare as
    exact strings. Equal totals keep first-seen order.
    """
    totals: dict[str, Decimal] = {}
    for t in _expenses(transactions):
        totals[t.category] = totals.get(t.category, ZERO) + t.amount

    grand_total = sum(totals.values(), ZERO)
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    shares = []
    for category, amount in ranked:
        percentage = ZERO
        if grand_total:
            percentage = (amount / grand_total * HUNDRED).quantize(TENTH, rounding=ROUND_HALF_UP)
        shares.append(CategoryShare(category=category, amount=amount, percentage=percentage))
    return shares


def monthly_series(transactions) -> list[MonthBucket]:
    """Income and expenses per (year, month), oldest first; empty months are skipped."""
    buckets: dict[tuple[int, int], list[Decimal]] = {}
    for t in transactions:
        sums = buckets.setdefault((t.date.year, t.date.month), [ZERO, ZERO])
        if t.type == 'income':
            sums[0] += t.amount
        else:
            sums[1] += t.amount
    return [
        MonthBucket(year=year, month=month, income=income, expenses=expenses)
        for (year, month), (income, expenses) in sorted(buckets.items())
    ]


def progress_ratio(current, target) -> Optional[Decimal]:
    """Percent of `target` reached, capped at 100. None when there is no usable target."""
    if target is None or current is None or target == 0:
        return None
    return min(HUNDRED, current / target * HUNDRED)


def goal_progress(goal) -> Decimal:
    return progress_ratio(goal.current_amount, goal.target_amount) or ZERO


def account_progress(account) -> Optional[Decimal]:
    return progress_ratio(account.balance, account.target_amount)


def monthly_interest(accounts) -> Decimal:
    """Projected interest for one month across all accounts (annual percent / 12)."""
    total = ZERO
    for account in accounts:
        rate = account.interest_rate or ZERO
        total += account.balance * rate / HUNDRED / 12
    return total


def total_savings(accounts) -> Decimal:
    return sum((a.balance for a in accounts), ZERO)


def category_groups(transactions) -> list[CategoryGroup]:
    """Transaction count and total per (category, type), in first-seen order.

    The same category name under income and expense yields two groups.
    """
    groups: dict[tuple[str, str], list] = {}
    for t in transactions:
        group = groups.setdefault((t.category, t.type), [0, ZERO])
        group[0] += 1
        group[1] += t.amount
    return [
        CategoryGroup(category=category, type=type_, count=count, total=total)
        for (category, type_), (count, total) in groups.items()
    ]


def top_expense_category(transactions) -> Optional[str]:
    """Most frequent expense category by count; ties go to the first seen."""
    counts = Counter(t.category for t in _expenses(transactions))
    if not counts:
        return None
    # Counter preserves insertion order and max() returns the first maximum
    return max(counts, key=counts.__getitem__)


def recent_transactions(transactions, limit=5):
    return list(transactions)[:limit]


def subscription_summary(subscriptions) -> SubscriptionSummary:
    return SubscriptionSummary(
        monthly_total=sum((s.cost for s in subscriptions), ZERO),
        active_count=sum(1 for s in subscriptions if s.is_active),
        next_payment=min((s.next_payment_date for s in subscriptions), default=None),
    )


def goal_summary(goals) -> GoalSummary:
    average = ZERO
    if goals:
        average = sum((goal_progress(g) for g in goals), ZERO) / len(goals)
    return GoalSummary(
        active_count=sum(1 for g in goals if not g.is_completed),
        total_target=sum((g.target_amount for g in goals), ZERO),
        total_saved=sum((g.current_amount for g in goals), ZERO),
        average_progress=average,
    )


def insights(transactions, goals) -> Insights:
    return Insights(
        expense_count=len(_expenses(transactions)),
        top_expense_category=top_expense_category(transactions),
        goal_count=len(goals),
        completed_goal_count=sum(1 for g in goals if g.is_completed),
    )
