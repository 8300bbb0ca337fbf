# core/transformer.py
import logging
from urllib.parse import urlsplit

from django.core.exceptions import ImproperlyConfigured

from .params import (
    coerce_params,
    coerce_value,
    loosely_equal,
    merge_params,
    parse_query,
    serialize_query,
    unpack,
)

logger = logging.getLogger(__name__)


def _split(url, operation):
    if not isinstance(url, str):
        raise TypeError(f"{operation}: url must be a string, got {type(url).__name__}")
    try:
        return urlsplit(url)
    except ValueError as e:
        # urlsplit only rejects malformed hosts such as an unclosed IPv6 bracket
        raise ValueError(f"{operation}: cannot parse url {url!r}: {e}") from e


def _as_key(key, operation):
    if isinstance(key, bool) or not isinstance(key, (str, int)):
        raise TypeError(f"{operation}: keys must be strings, got {type(key).__name__}")
    return str(key)


class QueryTransformer:
    """
    Rewrites the query string of a URL, or of the current request when no URL
    is given. Every operation parses a fresh parameter set, applies one change
    and returns a new ``/path?query`` string; nothing is kept between calls.
    """

    def __init__(self, source=None):
        self.source = source

    def _require_source(self, operation):
        if self.source is None:
            raise ImproperlyConfigured(
                f"{operation} needs a URL or a request to work from. Pass a url "
                f"argument or enable 'django.template.context_processors.request'."
            )
        return self.source

    def extract_params(self, url=None):
        """Return the ParameterSet of ``url`` (or of the current request)."""
        if url is None:
            return dict(self._require_source('extractParams').get_current_query_params())
        return parse_query(_split(url, 'extractParams').query)

    def build(self, params, url=None):
        """Serialize ``params`` onto the path of ``url`` (or of the current request)."""
        if url is None:
            path = self._require_source('build').get_current_path()
        else:
            path = _split(url, 'build').path
        return f"/{path.lstrip('/')}?{serialize_query(params)}"

    def add_params(self, additions, url=None):
        """
        Merge one parameter set (``Single``) or several (``Many``) into the
        current ones. Later sets win on key collisions.
        """
        sets = [coerce_params(item, 'addParams') for item in unpack(additions, 'addParams')]
        merged = self.extract_params(url)
        for params in sets:
            merged = merge_params(merged, params)
        logger.debug("addParams merged %d set(s) into %s", len(sets), url or 'current request')
        return self.build(merged, url)

    def remove_params(self, pairs, url=None):
        """Drop entries whose key and value both match an entry in ``pairs``."""
        pairs = coerce_params(pairs, 'removeParams')
        current = self.extract_params(url)
        remaining = {
            key: value
            for key, value in current.items()
            if not (key in pairs and loosely_equal(pairs[key], value))
        }
        logger.debug("removeParams dropped %d entr(ies)", len(current) - len(remaining))
        return self.build(remaining, url)

    def remove_keys(self, keys, url=None):
        """Drop every listed key, whatever its value."""
        keys = {_as_key(key, 'removeKeys') for key in unpack(keys, 'removeKeys')}
        remaining = {
            key: value
            for key, value in self.extract_params(url).items()
            if key not in keys
        }
        logger.debug("removeKeys %s", sorted(keys))
        return self.build(remaining, url)

    def remove_values(self, values, url=None):
        """Drop every key whose value loosely equals one of ``values``."""
        values = [coerce_value(value, 'removeValues') for value in unpack(values, 'removeValues')]
        remaining = {
            key: current
            for key, current in self.extract_params(url).items()
            if not any(loosely_equal(current, value) for value in values)
        }
        logger.debug("removeValues %s", values)
        return self.build(remaining, url)

    def replace_params(self, params, url=None):
        """Overwrite the given keys in place; keys not present yet are appended."""
        params = coerce_params(params, 'replaceParams')
        merged = merge_params(self.extract_params(url), params)
        logger.debug("replaceParams %s", list(params))
        return self.build(merged, url)
