"""
Common helpers for query parsing and list responses.
"""
from rest_framework.response import Response

from .exceptions import BadRequest

TRUE_VALUES = {'true', '1', 't', 'yes', 'y'}
FALSE_VALUES = {'false', '0', 'f', 'no', 'n'}


def get_client_ip(request):
    """Get client IP address"""
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR', '127.0.0.1')


def query_param(request, name):
    """Look a query parameter up case-insensitively (``showFull`` == ``showfull``)."""
    params = request.query_params
    if name in params:
        return params.get(name)
    lowered = name.lower()
    for key in params:
        if key.lower() == lowered:
            return params.get(key)
    return None


def parse_bool(value):
    """Parse a query string boolean. Unrecognised values yield None (filter ignored)."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    return None


def parse_positive_int(value, default=None):
    """Parse a positive integer query parameter; anything else is a 400."""
    if value is None or value == '':
        if default is None:
            raise BadRequest()
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise BadRequest()
    if number <= 0:
        raise BadRequest()
    return number


def get_page_params(request):
    """Return ``(page, limit)`` from the query string (defaults 1 / 10)."""
    page = parse_positive_int(query_param(request, 'page'), default=1)
    limit = parse_positive_int(query_param(request, 'limit'), default=10)
    return page, limit


def paginated_response(queryset, request, serialize):
    """
    Standard list response: ``{"count": total, "results": [...]}``.

    ``serialize`` turns one page (a list of instances) into the results list.
    """
    page, limit = get_page_params(request)
    start = (page - 1) * limit
    count = queryset.count()
    rows = list(queryset[start:start + limit])
    return Response({'count': count, 'results': serialize(rows)})
