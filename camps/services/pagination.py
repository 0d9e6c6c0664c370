from typing import Optional


def paginate(qs, page: Optional[int]=None, size: Optional[int]=None):
    """Apply zero-based ``page``/``size`` paging (``skip = page * size``).

    Without a ``size`` the queryset is returned whole.  Pages past the
    end slice to an empty result.
    """
    if not size:
        return qs
    start = (page or 0) * size
    return qs[start:start + size]
