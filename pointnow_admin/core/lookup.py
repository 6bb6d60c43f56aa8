"""
Single-record lookup over paginated list endpoints.

The upstream API has no get-by-id for businesses or customers, so detail
pages walk the list endpoint page by page until the id turns up.
"""

import logging

logger = logging.getLogger(__name__)

LOOKUP_PAGE_SIZE = 100


class RecordNotFound(Exception):
    """Raised when every page was scanned without finding the id"""

    def __init__(self, message, pages_scanned=0):
        super().__init__(message)
        self.message = message
        self.pages_scanned = pages_scanned


def find_by_id(fetch_page, record_id, collection_key, limit=LOOKUP_PAGE_SIZE, label='Record'):
    """
    Scan a paginated list endpoint for one record

    Args:
        fetch_page: callable(params) returning the upstream list body; raises on failure
        record_id: id to look for
        collection_key: key of the rows inside data, e.g. 'customers'
        limit: page size used for the scan
        label: noun for the not-found message

    Returns:
        The matching record dict

    Raises:
        RecordNotFound: pages exhausted without a match
    """
    page = 1
    while True:
        body = fetch_page({'limit': str(limit), 'page': str(page)})
        data = (body or {}).get('data') or {}
        records = data.get(collection_key)
        if records is None:
            break

        for record in records:
            if str(record.get('id')) == str(record_id):
                logger.debug("Found %s %s on page %s", label.lower(), record_id, page)
                return record

        if not (data.get('metadata') or {}).get('has_next'):
            break
        page += 1

    raise RecordNotFound(f"{label} not found", pages_scanned=page)
