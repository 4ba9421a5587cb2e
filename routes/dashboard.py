from datetime import date

from flask import Blueprint, current_app, jsonify, request

import aggregation as agg
import presentation as fmt
from errors import ValidationError, failure_message
from routes.settings import current_currency

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api')


def _reference_date():
    value = request.args.get('now')
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError([{
            "field": "now",
            "message": "Expected a date in YYYY-MM-DD format",
            "type": "date_from_datetime_parsing",
        }])


def _goal_rows(goals, currency):
    rows = []
    for goal in goals:
        row = fmt.progress_row(goal.name, goal.current_amount, goal.target_amount,
                               agg.goal_progress(goal), currency)
        row.update(
            id=goal.id,
            targetDate=goal.target_date.isoformat() if goal.target_date else None,
            isCompleted=goal.is_completed,
        )
        rows.append(row)
    return rows


@dashboard_bp.route('/dashboard')
@failure_message("Failed to build dashboard")
def index():
    storage = current_app.storage
    currency = current_currency()
    now = _reference_date()
    transactions = storage.transactions.list()
    savings = storage.savings.list()

    totals = agg.monthly_totals(transactions, now)
    total_savings = agg.total_savings(savings)

    cards = [
        fmt.metric_card("Total Balance", fmt.format_currency(totals.net, currency),
                        "Current month" if transactions else "No transactions yet"),
        fmt.metric_card("Monthly Income", fmt.format_currency(totals.income, currency)),
        fmt.metric_card("Monthly Expenses", fmt.format_currency(totals.expenses, currency)),
        fmt.metric_card("Total Savings", fmt.format_currency(total_savings, currency),
                        f"{len(savings)} accounts" if savings else "Start saving today"),
    ]
    return jsonify(
        currency=currency,
        cards=cards,
        incomeVsExpenses=fmt.monthly_chart(agg.monthly_series(transactions)),
        expenseBreakdown=fmt.breakdown_chart(agg.category_breakdown(transactions), currency),
        recentTransactions=[
            fmt.transaction_row(t, currency) for t in agg.recent_transactions(transactions)
        ],
    )


@dashboard_bp.route('/analytics')
@failure_message("Failed to build analytics")
def analytics():
    storage = current_app.storage
    currency = current_currency()
    transactions = storage.transactions.list()
    goals = storage.goals.list()
    found = agg.insights(transactions, goals)

    messages = []
    if transactions:
        messages.append(
            f"You have {found.expense_count} expense transactions recorded. "
            f"Your most frequent expense category is {found.top_expense_category or 'None'}."
        )
    if goals:
        text = f"You have {found.goal_count} financial goal{'s' if found.goal_count > 1 else ''} set up."
        if found.completed_goal_count:
            n = found.completed_goal_count
            text += f" {n} goal{'s' if n > 1 else ''} completed."
        messages.append(text + " Keep up the great work!")

    return jsonify(
        currency=currency,
        hasData=bool(transactions or goals),
        monthlyTrend=fmt.monthly_chart(agg.monthly_series(transactions)),
        expenseBreakdown=fmt.breakdown_chart(agg.category_breakdown(transactions), currency),
        goals=_goal_rows(goals, currency),
        insights={
            "expenseCount": found.expense_count,
            "topExpenseCategory": found.top_expense_category,
            "goalCount": found.goal_count,
            "completedGoalCount": found.completed_goal_count,
            "messages": messages,
        },
    )


@dashboard_bp.route('/money-manager')
@failure_message("Failed to build money manager")
def money_manager():
    currency = current_currency()
    transactions = current_app.storage.transactions.list()
    totals = agg.monthly_totals(transactions, _reference_date())
    return jsonify(
        currency=currency,
        totals={
            "income": fmt.format_currency(totals.income, currency),
            "expenses": fmt.format_currency(totals.expenses, currency),
            "net": fmt.format_currency(totals.net, currency),
        },
        categories=fmt.category_panel(agg.category_groups(transactions), currency),
        transactions=[fmt.transaction_row(t, currency)
                      for t in agg.recent_transactions(transactions, limit=10)],
    )


@dashboard_bp.route('/summary/savings')
@failure_message("Failed to summarize savings accounts")
def savings_summary():
    currency = current_currency()
    accounts = current_app.storage.savings.list()
    rows = []
    for account in accounts:
        row = fmt.progress_row(account.name, account.balance, account.target_amount,
                               agg.account_progress(account), currency)
        row.update(id=account.id, interestRate=fmt.interest_rate_label(account.interest_rate))
        rows.append(row)
    return jsonify(
        currency=currency,
        cards=[
            fmt.metric_card("Total Saved", fmt.format_currency(agg.total_savings(accounts), currency)),
            fmt.metric_card("Active Accounts", len(accounts)),
            fmt.metric_card("Interest Earned",
                            fmt.format_currency(agg.monthly_interest(accounts), currency),
                            "Projected this month"),
        ],
        accounts=rows,
    )


@dashboard_bp.route('/summary/goals')
@failure_message("Failed to summarize goals")
def goals_summary():
    currency = current_currency()
    goals = current_app.storage.goals.list()
    summary = agg.goal_summary(goals)
    return jsonify(
        currency=currency,
        cards=[
            fmt.metric_card("Active Goals", summary.active_count),
            fmt.metric_card("Total Target", fmt.format_currency(summary.total_target, currency)),
            fmt.metric_card("Goals Saved", fmt.format_currency(summary.total_saved, currency)),
            fmt.metric_card("Average Progress", fmt.format_percentage(summary.average_progress)),
        ],
        goals=_goal_rows(goals, currency),
    )


@dashboard_bp.route('/summary/subscriptions')
@failure_message("Failed to summarize subscriptions")
def subscriptions_summary():
    currency = current_currency()
    subscriptions = current_app.storage.subscriptions.list()
    summary = agg.subscription_summary(subscriptions)
    return jsonify(
        currency=currency,
        cards=[
            fmt.metric_card("Monthly Total", fmt.format_currency(summary.monthly_total, currency)),
            fmt.metric_card("Active Services", summary.active_count),
            fmt.metric_card("Next Payment",
                            summary.next_payment.isoformat() if summary.next_payment else "--"),
        ],
        subscriptions=[
            {
                "id": s.id,
                "name": s.name,
                "cost": f"{fmt.format_currency(s.cost, currency)}/month",
                "nextPaymentDate": s.next_payment_date.isoformat(),
                "isActive": s.is_active,
            }
            for s in subscriptions
        ],
    )
