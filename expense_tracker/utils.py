# expense_tracker/utils.py
from datetime import date

CURRENCY_SYMBOLS = {
    'INR': '₹',
    'USD': '$',
    'EUR': '€',
    'GBP': '£',
}


def filter_transactions_by_month(transactions, month_str):
    """
    Return only those transactions whose date falls in the given YYYY-MM.
    """
    year, month = map(int, month_str.split('-'))
    return [tx for tx in transactions if tx.date.year == year and tx.date.month == month]


def format_currency(amount, currency='INR'):
    """
    Render an amount the way en-US locales show currency: ₹2,500.00
    """
    symbol = CURRENCY_SYMBOLS.get(currency, f'{currency} ')
    sign = '-' if amount < 0 else ''
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_date(value: date):
    """
    Render a date as 'Oct 18, 2026'.
    """
    return f"{value.strftime('%b')} {value.day}, {value.year}"
