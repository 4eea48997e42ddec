"""Query-string helpers for building resource endpoints."""

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


def add_query_params(endpoint, params):
    """Merge ``(key, value)`` pairs into the endpoint's query string.

    Keys are sorted and values form-encoded; repeated keys keep their order.
    """
    parts = urlsplit(endpoint)
    query = parse_qsl(parts.query, keep_blank_values=True)
    query.extend((key, str(value)) for key, value in params)
    query.sort(key=lambda kv: kv[0])
    return urlunsplit(parts._replace(query=urlencode(query)))


def add_pagination_params(endpoint, opts=None, extra=()):
    """Append Bitbucket ``page``/``pagelen``/``q`` options plus any ``extra`` pairs."""
    params = []
    if opts is not None:
        if opts.page > 0:
            params.append(('page', opts.page))
        if opts.page_len > 0:
            params.append(('pagelen', opts.page_len))
        if opts.q:
            params.append(('q', opts.q))
    params.extend(extra)
    return add_query_params(endpoint, params)
