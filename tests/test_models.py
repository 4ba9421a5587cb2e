"""
Test suite for entity schemas.
Tests cover decimal canonicalisation, defaults, aliases and date coercion.
"""

import pytest
from datetime import date
from decimal import Decimal

import pydantic

from models import (
    FinancialGoalCreate,
    FinancialGoalUpdate,
    RESOURCES,
    SavingsAccountCreate,
    SubscriptionCreate,
    TransactionCreate,
    TransactionUpdate,
)


class TestMoneyFields:
    """Test monetary field coercion."""

    def test_numeric_string_is_canonicalised(self):
        """Amounts should be stored with two decimal places."""
        tx = TransactionCreate(description="Lunch", amount="12.5", type="expense", category="Food & Dining")
        assert tx.amount == Decimal('12.50')
        assert tx.to_json()['amount'] == "12.50"

    def test_numbers_are_accepted(self):
        """JSON numbers should be accepted alongside strings."""
        sub = SubscriptionCreate(name="Music", cost=9.99, next_payment_date="2026-11-01")
        assert sub.cost == Decimal('9.99')

    def test_rounds_half_up_to_cents(self):
        """Extra precision should round half up."""
        sub = SubscriptionCreate(name="Music", cost="1.005", next_payment_date="2026-11-01")
        assert sub.cost == Decimal('1.01')

    def test_negative_amount_rejected(self):
        """Transaction amounts carry no sign."""
        with pytest.raises(pydantic.ValidationError):
            TransactionCreate(description="Refund", amount="-5", type="income", category="Other")

    def test_non_numeric_rejected(self):
        """Garbage strings should fail validation."""
        with pytest.raises(pydantic.ValidationError):
            SubscriptionCreate(name="Music", cost="ten", next_payment_date="2026-11-01")

    def test_nan_rejected(self):
        """Non-finite amounts should fail validation."""
        with pytest.raises(pydantic.ValidationError):
            SubscriptionCreate(name="Music", cost="NaN", next_payment_date="2026-11-01")

    def test_too_large_rejected(self):
        """Amounts beyond decimal(10, 2) should fail validation."""
        with pytest.raises(pydantic.ValidationError):
            TransactionCreate(description="Lottery", amount="123456789", type="income", category="Other")

    def test_rounding_past_limit_rejected(self):
        """A value that only reaches the limit after rounding to cents is still too large."""
        with pytest.raises(pydantic.ValidationError):
            TransactionCreate(description="Lottery", amount="99999999.995", type="income", category="Other")
        assert TransactionCreate(description="Lottery", amount="99999999.994", type="income",
                                 category="Other").amount == Decimal("99999999.99")


class TestDefaults:
    """Test optional fields and their defaults."""

    def test_savings_defaults(self):
        """Balance and rate default to zero; target is optional."""
        account = SavingsAccountCreate(name="Emergency")
        assert account.balance == Decimal('0.00')
        assert account.interest_rate == Decimal('0.00')
        assert account.target_amount is None

    def test_goal_defaults(self):
        """Goals start with nothing saved and not completed."""
        goal = FinancialGoalCreate(name="Car", target_amount="5000")
        assert goal.current_amount == Decimal('0.00')
        assert goal.is_completed is False
        assert goal.target_date is None

    def test_subscription_active_by_default(self):
        sub = SubscriptionCreate(name="Video", cost="15", next_payment_date="2026-11-01")
        assert sub.is_active is True

    def test_transaction_date_defaults_to_today(self):
        tx = TransactionCreate(description="Pay", amount="100", type="income", category="Salary")
        assert tx.date == date.today()


class TestAliasesAndDates:
    """Test camelCase wire names and date-only semantics."""

    def test_camel_case_input(self):
        """camelCase keys from the wire should populate snake_case fields."""
        goal = FinancialGoalCreate.model_validate(
            {"name": "Trip", "targetAmount": "800", "currentAmount": "200", "targetDate": "2027-06-01"}
        )
        assert goal.target_amount == Decimal('800.00')
        assert goal.target_date == date(2027, 6, 1)

    def test_camel_case_output(self):
        sub = SubscriptionCreate(name="Music", cost="9.99", next_payment_date="2026-11-01")
        body = sub.to_json()
        assert body['nextPaymentDate'] == "2026-11-01"
        assert body['isActive'] is True

    def test_timestamp_keeps_date_component(self):
        """Full ISO timestamps should reduce to their calendar date."""
        tx = TransactionCreate(
            description="Pay", amount="100", type="income", category="Salary",
            date="2026-03-31T23:30:00.000Z",
        )
        assert tx.date == date(2026, 3, 31)

    def test_invalid_type_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            TransactionCreate(description="Pay", amount="100", type="transfer", category="Salary")

    def test_blank_name_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            SubscriptionCreate(name="   ", cost="1", next_payment_date="2026-11-01")


class TestPartialUpdates:
    """Test update payloads."""

    def test_only_set_fields_are_dumped(self):
        update = TransactionUpdate.model_validate({"amount": "7"})
        assert update.model_dump(exclude_unset=True) == {"amount": Decimal('7.00')}

    def test_explicit_null_rejected_for_required_field(self):
        """A required field cannot be cleared through an update."""
        with pytest.raises(pydantic.ValidationError):
            TransactionUpdate.model_validate({"amount": None})

    def test_explicit_null_allowed_for_optional_field(self):
        update = FinancialGoalUpdate.model_validate({"targetDate": None})
        assert update.model_dump(exclude_unset=True) == {"target_date": None}

    def test_id_and_created_at_ignored(self):
        update = TransactionUpdate.model_validate({"id": "x", "createdAt": "2020-01-01"})
        assert update.model_dump(exclude_unset=True) == {}


class TestResources:
    """Test the resource registry."""

    def test_all_resources_registered(self):
        assert set(RESOURCES) == {'subscriptions', 'transactions', 'savings', 'goals'}

    def test_only_transactions_have_an_order(self):
        assert RESOURCES['transactions'].newest_first_by == 'date'
        assert RESOURCES['goals'].newest_first_by is None

    def test_fields_exclude_generated_columns(self):
        assert RESOURCES['savings'].fields == ['name', 'balance', 'target_amount', 'interest_rate']
