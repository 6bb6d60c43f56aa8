"""
Client-side refinement of an already-fetched page.

These filters never trigger a new upstream request and only narrow the rows
of the current page; the reported total stays the server total.
"""

from .formatting import DateRange, decode_subscription, subscription_status

ALL = 'all'


def _text_matches(needle, *haystacks):
    needle = (needle or '').strip().lower()
    if not needle:
        return True
    return any(needle in (value or '').lower() for value in haystacks)


class BusinessFilter:
    """Subscription status, active flag, created date and subscription end date"""

    def __init__(self, status=ALL, active=ALL, created=None, subscription_end=None, search=''):
        self.status = status or ALL
        self.active = active or ALL
        self.created = created or DateRange()
        self.subscription_end = subscription_end or DateRange()
        self.search = search or ''

    @classmethod
    def from_args(cls, args):
        return cls(
            status=args.get('status', ALL),
            active=args.get('active', ALL),
            created=DateRange(args.get('created_from'), args.get('created_to')),
            subscription_end=DateRange(args.get('end_from'), args.get('end_to')),
        )

    @property
    def is_active(self):
        return (self.status != ALL or self.active != ALL or self.created.is_set
                or self.subscription_end.is_set or bool(self.search))

    def matches(self, business):
        subscription = decode_subscription(business.get('latest_subscription'))

        if self.status != ALL and subscription_status(subscription) != self.status:
            return False

        if self.active != ALL:
            is_active = business.get('status') == 'active'
            if (self.active == 'active') != is_active:
                return False

        if not self.created.contains(business.get('created_at')):
            return False

        if self.subscription_end.is_set:
            if subscription is None or not self.subscription_end.contains(subscription.end_date):
                return False

        return _text_matches(self.search, business.get('name'), business.get('registration_number'))

    def apply(self, businesses):
        return [b for b in businesses if self.matches(b)]


class CustomerFilter:
    """Verification flag and free text over the fetched customers"""

    def __init__(self, verified=ALL, search=''):
        self.verified = verified or ALL
        self.search = search or ''

    @classmethod
    def from_args(cls, args):
        return cls(verified=args.get('verified', ALL))

    @property
    def is_active(self):
        return self.verified != ALL or bool(self.search)

    def matches(self, customer):
        if self.verified != ALL:
            if (self.verified == 'verified') != bool(customer.get('is_verified')):
                return False
        return _text_matches(self.search, customer.get('name'), customer.get('email'),
                             customer.get('phone_number'))

    def apply(self, customers):
        return [c for c in customers if self.matches(c)]


class ChargeFilter:
    """Billing name, billing email or charge id search plus charge status"""

    def __init__(self, search='', status=ALL):
        self.search = search or ''
        self.status = status or ALL

    @classmethod
    def from_args(cls, args):
        return cls(search=args.get('search', ''), status=args.get('status', ALL))

    @property
    def is_active(self):
        return self.status != ALL or bool(self.search)

    def matches(self, charge):
        if self.status != ALL and charge.get('status') != self.status:
            return False
        billing = charge.get('billing_details') or {}
        return _text_matches(self.search, billing.get('name'), billing.get('email'), charge.get('id'))

    def apply(self, charges):
        return [c for c in charges if self.matches(c)]
