"""Turns aggregation results into chart- and card-ready records."""

from collections import namedtuple
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

Currency = namedtuple('Currency', ['code', 'symbol', 'name'])

CURRENCIES = [
    Currency('USD', '$', 'US Dollar'),
    Currency('EUR', '€', 'Euro'),
    Currency('GBP', '£', 'British Pound'),
    Currency('CAD', 'C$', 'Canadian Dollar'),
    Currency('JPY', '¥', 'Japanese Yen'),
    Currency('AUD', 'A$', 'Australian Dollar'),
    Currency('CHF', 'CHF', 'Swiss Franc'),
    Currency('CNY', '¥', 'Chinese Yuan'),
    Currency('INR', '₹', 'Indian Rupee'),
    Currency('KRW', '₩', 'South Korean Won'),
    Currency('BRL', 'R$', 'Brazilian Real'),
    Currency('MXN', 'MX$', 'Mexican Peso'),
    Currency('SGD', 'S$', 'Singapore Dollar'),
    Currency('HKD', 'HK$', 'Hong Kong Dollar'),
    Currency('NOK', 'kr', 'Norwegian Krone'),
    Currency('SEK', 'kr', 'Swedish Krona'),
    Currency('DKK', 'kr', 'Danish Krone'),
    Currency('PLN', 'zł', 'Polish Złoty'),
    Currency('CZK', 'Kč', 'Czech Koruna'),
    Currency('HUF', 'Ft', 'Hungarian Forint'),
]
CURRENCY_BY_CODE = {c.code: c for c in CURRENCIES}
DEFAULT_CURRENCY = 'USD'
ZERO_DECIMAL_CURRENCIES = {'JPY', 'KRW', 'HUF'}

PALETTE = [
    'hsl(217, 91%, 60%)',
    'hsl(158, 64%, 52%)',
    'hsl(43, 96%, 56%)',
    'hsl(0, 84%, 60%)',
    'hsl(283, 67%, 68%)',
    'hsl(215, 32%, 27%)',
]

CENT = Decimal('0.01')
UNIT = Decimal('1')
TENTH = Decimal('0.1')


def to_decimal(amount) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        return Decimal(repr(amount))
    return Decimal(amount)


def get_currency(code) -> Currency:
    return CURRENCY_BY_CODE.get(code, CURRENCY_BY_CODE[DEFAULT_CURRENCY])


def currency_symbol(code=DEFAULT_CURRENCY) -> str:
    return get_currency(code).symbol


def format_currency(amount, code=DEFAULT_CURRENCY) -> str:
    """'¥1,235' for zero-decimal currencies, '$1234.50' for everything else."""
    value = to_decimal(amount)
    if code in ZERO_DECIMAL_CURRENCIES:
        formatted = f"{value.quantize(UNIT, rounding=ROUND_HALF_UP):,f}"
    else:
        formatted = f"{value.quantize(CENT, rounding=ROUND_HALF_UP):f}"
    return f"{currency_symbol(code)}{formatted}"


def round_percentage(value) -> Decimal:
    return to_decimal(value).quantize(TENTH, rounding=ROUND_HALF_UP)


def format_percentage(value) -> str:
    return f"{round_percentage(value):f}%"


def series_color(index) -> str:
    return PALETTE[index % len(PALETTE)]


def money_value(amount) -> float:
    """Numeric value for chart axes; only ever used for drawing."""
    return float(to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP))


def month_label(year, month) -> str:
    return date(year, month, 1).strftime('%b %Y')


def metric_card(title, value, description=None):
    return {"title": title, "value": value, "description": description}


def breakdown_chart(shares, currency=DEFAULT_CURRENCY):
    return [
        {
            "name": share.category,
            "value": money_value(share.amount),
            "formatted": format_currency(share.amount, currency),
            "percentage": f"{share.percentage:f}",
            "color": series_color(i),
        }
        for i, share in enumerate(shares)
    ]


def monthly_chart(buckets):
    return [
        {
            "month": month_label(b.year, b.month),
            "income": money_value(b.income),
            "expenses": money_value(b.expenses),
            "net": money_value(b.net),
        }
        for b in buckets
    ]


def category_panel(groups, currency=DEFAULT_CURRENCY):
    return [
        {
            "name": g.category,
            "type": g.type,
            "count": g.count,
            "total": format_currency(g.total, currency),
            "color": series_color(i),
        }
        for i, g in enumerate(groups)
    ]


def transaction_row(t, currency=DEFAULT_CURRENCY):
    sign = '+' if t.type == 'income' else '-'
    return {
        "id": t.id,
        "description": t.description,
        "category": t.category,
        "type": t.type,
        "date": t.date.isoformat(),
        "amount": f"{sign}{format_currency(t.amount, currency)}",
    }


def progress_row(name, current, target, progress, currency=DEFAULT_CURRENCY):
    """Progress bar record; `progress` is None when the target is missing or zero."""
    return {
        "name": name,
        "current": format_currency(current, currency),
        "target": format_currency(target, currency) if target is not None else None,
        "progress": float(round_percentage(progress)) if progress is not None else 0.0,
        "progressLabel": format_percentage(progress) if progress is not None else None,
    }


def interest_rate_label(rate):
    if not rate:
        return "No interest"
    return f"{to_decimal(rate).quantize(CENT):f}% APY"
