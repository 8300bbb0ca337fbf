# core/sources.py
from typing import Protocol

from django.utils.encoding import escape_uri_path

from .params import parse_query


class RequestSource(Protocol):
    """Read-only view of the request currently being served."""

    def get_current_path(self) -> str:
        ...

    def get_current_query_params(self) -> dict:
        ...


class DjangoRequestSource:
    """Reads the path and query parameters of a Django ``HttpRequest``"""

    def __init__(self, request):
        self.request = request

    def get_current_path(self) -> str:
        # request.path is decoded; re-quote it so it matches explicit URLs
        return escape_uri_path(self.request.path).lstrip('/')

    def get_current_query_params(self) -> dict:
        # Decode the raw string so bracketed keys become lists, same as explicit URLs
        return parse_query(self.request.META.get('QUERY_STRING', ''))


class StaticRequestSource:
    """Fixed path and parameters, for rendering outside a request cycle"""

    def __init__(self, path='', params=None):
        self.path = path
        self.params = dict(params or {})

    def get_current_path(self) -> str:
        return self.path.lstrip('/')

    def get_current_query_params(self) -> dict:
        return dict(self.params)
