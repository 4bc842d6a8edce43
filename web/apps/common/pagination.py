from django.core.paginator import Paginator

from .errors import InvalidArgument

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def page_params(request) -> tuple[int, int]:
    """Read ``page`` and ``page_size`` from the query string.

    ``page_size`` is capped at ``MAX_PAGE_SIZE``.

    Raises:
        InvalidArgument: Either value is not an integer or is below 1.
    """
    try:
        page = int(request.GET.get("page", 1))
        page_size = int(request.GET.get("page_size", DEFAULT_PAGE_SIZE))
    except ValueError:
        raise InvalidArgument("page and page_size must be integers")
    if page < 1 or page_size < 1:
        raise InvalidArgument("page and page_size must be positive")
    return page, min(page_size, MAX_PAGE_SIZE)


def paginated_body(request, objects, dump) -> dict:
    """Slice ``objects`` by the ``page``/``page_size`` query params.

    ``objects`` only needs ``count()`` and slicing, so a queryset or a lazy
    listing works without loading every row. ``dump`` turns one object into
    its JSON-ready dict.
    """
    page, page_size = page_params(request)
    p = Paginator(objects, page_size)
    page_obj = p.get_page(page)

    return {
        "count": p.count,
        "page": page_obj.number,
        "page_size": page_size,
        "results": [dump(o) for o in page_obj.object_list],
    }
