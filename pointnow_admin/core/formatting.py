"""
Shared formatting and derivation helpers
========================================

Pure functions used by every page: subscription status, status badges,
date and money formatting, and date ranges for metric requests.
"""

from datetime import date, datetime, timezone

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

FREE_PLAN_TYPE = 'FREE'

SUBSCRIPTION_STATUSES = ('active', 'trial', 'expired', 'none')

QUERY_DATE_FORMAT = '%Y-%m-%d'


# ============================================
# Subscriptions
# ============================================

class Subscription:
    """A business's latest subscription, decoded from the upstream payload"""

    def __init__(self, id=None, type=None, provider=None, start_date=None, end_date=None, is_active=False):
        self.id = id
        self.type = type
        self.provider = provider
        self.start_date = start_date
        self.end_date = end_date
        self.is_active = bool(is_active)

    @classmethod
    def from_dict(cls, data):
        return cls(
            id=data.get('id'),
            type=data.get('type'),
            provider=data.get('provider'),
            start_date=data.get('start_date'),
            end_date=data.get('end_date'),
            is_active=data.get('is_active', False),
        )

    def __eq__(self, other):
        return isinstance(other, Subscription) and vars(self) == vars(other)

    def __repr__(self):
        return f"<Subscription {self.type} active={self.is_active}>"


def decode_subscription(raw):
    """
    Decode upstream latest_subscription into a Subscription or None.

    Upstream sends {} when a business has no subscription; a missing key
    and null mean the same thing.
    """
    if isinstance(raw, Subscription):
        return raw
    if not raw or not isinstance(raw, dict):
        return None
    return Subscription.from_dict(raw)


def subscription_status(subscription):
    """none / expired / trial / active for a Subscription, raw dict or None"""
    subscription = decode_subscription(subscription)
    if subscription is None:
        return 'none'
    if not subscription.is_active:
        return 'expired'
    if subscription.type == FREE_PLAN_TYPE:
        return 'trial'
    return 'active'


# ============================================
# Badges
# ============================================

class Badge:
    """Label and colour tone for a status pill"""

    def __init__(self, label, tone):
        self.label = label
        self.tone = tone

    def __eq__(self, other):
        return isinstance(other, Badge) and (self.label, self.tone) == (other.label, other.tone)

    def __repr__(self):
        return f"<Badge {self.label} ({self.tone})>"


STATUS_BADGES = {
    # subscription statuses
    'active': Badge('Active', 'success'),
    'trial': Badge('Trial', 'warning'),
    'expired': Badge('Expired', 'danger'),
    'none': Badge('No Subscription', 'muted'),
    # charge statuses
    'succeeded': Badge('Succeeded', 'success'),
    'pending': Badge('Pending', 'warning'),
    'failed': Badge('Failed', 'danger'),
}


def status_badge(status):
    return STATUS_BADGES.get(status) or Badge(str(status), 'neutral')


# ============================================
# Dates
# ============================================

def parse_datetime(value):
    """datetime for an ISO string, date or datetime; None if it cannot be read"""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    try:
        return date_parser.isoparse(str(value))
    except (ValueError, OverflowError):
        return None


def format_date(value):
    """Jan 5, 2024 style date, or - when empty"""
    parsed = parse_datetime(value)
    if parsed is None:
        return '-'
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def format_datetime(value):
    parsed = parse_datetime(value)
    if parsed is None:
        return '-'
    return f"{format_date(parsed)}, {parsed:%I:%M %p}"


def format_timestamp(seconds):
    """Format an epoch-seconds timestamp (payment provider style)"""
    if seconds in (None, ''):
        return '-'
    try:
        return format_date(datetime.fromtimestamp(int(seconds), tz=timezone.utc))
    except (TypeError, ValueError, OverflowError):
        return '-'


# ============================================
# Numbers and money
# ============================================

CURRENCY_SYMBOLS = {
    'myr': 'RM',
    'usd': '$',
    'sgd': 'S$',
}


def format_amount(amount, currency='myr'):
    """Minor units (cents/sen) to a display string, e.g. 123450 -> RM 1,234.50"""
    try:
        major = (amount or 0) / 100
    except TypeError:
        return '-'
    symbol = CURRENCY_SYMBOLS.get((currency or 'myr').lower(), (currency or '').upper())
    return f"{symbol} {major:,.2f}"


def format_number(value):
    try:
        return f"{value:,}"
    except (TypeError, ValueError):
        return '0' if value is None else str(value)


# ============================================
# Date ranges
# ============================================

class DateRange:
    """Inclusive day range; a range with only a start covers that single day"""

    def __init__(self, start=None, end=None):
        self.start = _as_date(start)
        self.end = _as_date(end)

    @property
    def is_set(self):
        return self.start is not None

    def contains(self, value):
        if not self.is_set:
            return True
        parsed = parse_datetime(value)
        if parsed is None:
            return False
        return self.start <= parsed.date() <= (self.end or self.start)

    def to_query(self, start_key='start_date', end_key='end_date'):
        params = {}
        if self.start:
            params[start_key] = self.start.strftime(QUERY_DATE_FORMAT)
        if self.end:
            params[end_key] = self.end.strftime(QUERY_DATE_FORMAT)
        return params

    def __eq__(self, other):
        return isinstance(other, DateRange) and (self.start, self.end) == (other.start, other.end)

    def __repr__(self):
        return f"<DateRange {self.start} - {self.end}>"


def _as_date(value):
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def default_date_range(now=None):
    """One year ago through now"""
    now = now or datetime.now()
    return DateRange(now - relativedelta(years=1), now)


def parse_date_range(args, start_key, end_key, default=None):
    """Read a DateRange from request args; falls back to default when the start is missing"""
    date_range = DateRange(args.get(start_key), args.get(end_key))
    if not date_range.is_set and default is not None:
        return default
    return date_range
