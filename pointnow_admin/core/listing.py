"""
List retrieval state
====================

ListView keeps the state one paginated, filterable list page needs:
page cursor, debounced search text, server-side filters, the fetched
rows and pagination metadata, and a loading/error flag.

Each fetch takes a ticket from a monotonic counter; only the response
holding the latest ticket is committed, so a slow superseded request can
never overwrite a newer result.

The admin pages build one ListView per request and call load() once;
the browser debounces search itself. set_search, set_filters,
next_page and previous_page drive a long-lived ListView from Python,
for scripts and background jobs that page through the same endpoints.
"""

import itertools
import logging
import threading

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 500


class Pagination:
    """Pagination metadata echoed from the upstream list endpoints"""

    def __init__(self, page=1, limit=10, total=0, total_pages=0, has_next=False, has_previous=False):
        self.page = max(1, int(page or 1))
        self.limit = int(limit or 10)
        self.total = int(total or 0)
        self.total_pages = int(total_pages or 0)
        self.has_next = bool(has_next)
        self.has_previous = bool(has_previous)

    @classmethod
    def from_metadata(cls, metadata, page=1, limit=10):
        metadata = metadata or {}
        return cls(
            page=metadata.get('page', page),
            limit=metadata.get('limit', limit),
            total=metadata.get('total', 0),
            total_pages=metadata.get('total_pages', 0),
            has_next=metadata.get('has_next', False),
            # the business leaderboard spells it has_prev
            has_previous=metadata.get('has_previous', metadata.get('has_prev', False)),
        )

    @property
    def can_previous(self):
        return self.has_previous and self.page > 1

    @property
    def can_next(self):
        return self.has_next

    @property
    def previous_page(self):
        return max(1, self.page - 1)

    @property
    def next_page(self):
        return self.page + 1 if self.can_next else self.page

    @property
    def first_item(self):
        if not self.total:
            return 0
        return (self.page - 1) * self.limit + 1

    @property
    def last_item(self):
        return min(self.page * self.limit, self.total)

    def __repr__(self):
        return f"<Pagination page={self.page}/{self.total_pages} total={self.total}>"


def _thread_timer(delay, callback):
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


class Debouncer:
    """
    Run a callable once input has been quiet for delay_ms.

    schedule(delay_seconds, callback) must return a handle with cancel();
    the default uses threading.Timer.
    """

    def __init__(self, delay_ms=DEFAULT_DEBOUNCE_MS, schedule=None):
        self.delay = delay_ms / 1000
        self._schedule = schedule or _thread_timer
        self._pending = None
        self._lock = threading.Lock()

    @property
    def pending(self):
        return self._pending is not None

    def call(self, fn, *args, **kwargs):
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
            handle = None

            def fire():
                with self._lock:
                    if self._pending is not handle:
                        return
                    self._pending = None
                fn(*args, **kwargs)

            handle = self._pending = self._schedule(self.delay, fire)

    def cancel(self):
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None


class ListView:
    """
    Fetch/filter/paginate state for one list page.

    Args:
        fetcher: callable(params) returning the upstream body
            ({'data': {<collection_key>: [...], 'metadata': {...}}}); raises on failure
        collection_key: key of the rows inside data, e.g. 'businesses'
        limit: page size
        search_param: upstream name of the free-text parameter
        filters: extra server-side parameters sent with every request
        debounce_ms: quiet period before search text is sent
        schedule: timer factory for the debouncer (tests inject a fake clock)
    """

    def __init__(self, fetcher, collection_key, limit=10, page=1, search='',
                 search_param='query', filters=None, debounce_ms=DEFAULT_DEBOUNCE_MS, schedule=None):
        self.fetcher = fetcher
        self.collection_key = collection_key
        self.limit = limit
        self.page = max(1, int(page or 1))
        self.search = search or ''
        self.search_param = search_param
        self.filters = dict(filters or {})

        self.items = []
        self.pagination = Pagination(page=self.page, limit=limit)
        self.loading = False
        self.error = None

        self._debouncer = Debouncer(debounce_ms, schedule)
        self._tickets = itertools.count(1)
        self._latest_ticket = 0
        self._lock = threading.Lock()

    def params(self):
        params = {'page': str(self.page), 'limit': str(self.limit)}
        if self.search and self.search_param:
            params[self.search_param] = self.search
        for key, value in self.filters.items():
            if value not in (None, ''):
                params[key] = value
        return params

    def load(self):
        """Fetch the current page; True when the result was committed"""
        with self._lock:
            ticket = next(self._tickets)
            self._latest_ticket = ticket
            self.loading = True
            params = self.params()

        try:
            body = self.fetcher(params)
        except Exception as e:
            with self._lock:
                if ticket != self._latest_ticket:
                    return False
                self.error = getattr(e, 'message', None) or str(e) or 'An unexpected error occurred'
                self.loading = False
            logger.warning("List fetch for %s failed: %s", self.collection_key, self.error)
            return False

        with self._lock:
            if ticket != self._latest_ticket:
                logger.debug("Dropping superseded %s response (ticket %s)", self.collection_key, ticket)
                return False
            data = (body or {}).get('data') or {}
            self.items = data.get(self.collection_key) or []
            self.pagination = Pagination.from_metadata(data.get('metadata'), self.page, self.limit)
            self.error = None
            self.loading = False
        return True

    def set_page(self, page):
        self.page = max(1, int(page))
        return self.load()

    def next_page(self):
        if not self.pagination.can_next:
            return False
        return self.set_page(self.page + 1)

    def previous_page(self):
        if not self.pagination.can_previous:
            return False
        return self.set_page(self.page - 1)

    def set_search(self, text):
        """Debounced: the request goes out once typing has paused"""
        self._debouncer.call(self._apply_search, text or '')

    def _apply_search(self, text):
        self.search = text
        self.page = 1
        self.load()

    def set_filters(self, **filters):
        self.filters.update(filters)
        self.page = 1
        return self.load()

    def visible_items(self, client_filter=None):
        """Rows of the current page after client-side refinement"""
        if client_filter is None:
            return list(self.items)
        return client_filter.apply(self.items)
