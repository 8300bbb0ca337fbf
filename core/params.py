# core/params.py
"""
Parameter sets: decoding a query string into an ordered dict, encoding it
back, and the small helpers the transformer needs to compare and merge values.

A parameter set is a plain ``dict`` mapping each key to either a string or a
list of strings. Bracketed keys (``tag[]=a&tag[]=b``) become lists under the
bare key (``{"tag": ["a", "b"]}``); repeated plain keys keep the last value.
"""
import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from django.conf import settings
from django.http import QueryDict

LIST_SUFFIX = '[]'
DEFAULT_SAFE_CHARS = '[]'

SCALAR_TYPES = (str, int, float, Decimal)

# Plain decimal literals only; no underscores, infinities or padding
NUMERIC_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class Single:
    """One value, one key or one parameter set."""
    value: object

    def as_list(self):
        return [self.value]


@dataclass(frozen=True)
class Many:
    """An ordered sequence of values, keys or parameter sets."""
    values: tuple

    def __post_init__(self):
        object.__setattr__(self, 'values', tuple(self.values))

    def as_list(self):
        return list(self.values)


def single_or_many(value, operation='argument'):
    """
    Normalize a template-supplied argument into ``Single`` or ``Many``.

    Strings, numbers and mappings are a single item; lists and tuples are
    many. Anything else is rejected so a typo in a template fails loudly.
    """
    if isinstance(value, (Single, Many)):
        return value
    if isinstance(value, (list, tuple)):
        return Many(value)
    if isinstance(value, (Mapping,) + SCALAR_TYPES):
        return Single(value)
    raise TypeError(
        f"{operation}: expected a value, a mapping or a list of them, "
        f"got {type(value).__name__}"
    )


def unpack(argument, operation):
    """Return the items of a ``Single``/``Many`` argument as a list."""
    if not isinstance(argument, (Single, Many)):
        raise TypeError(
            f"{operation}: expected Single(...) or Many([...]), "
            f"got {type(argument).__name__}"
        )
    return argument.as_list()


def as_text(value):
    """Render a scalar the way a form encoder would."""
    if isinstance(value, bool):
        return '1' if value else '0'
    return str(value)


def coerce_value(value, operation='argument'):
    """Convert a caller-supplied value into a ParameterValue (or ``None``)."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return [_coerce_scalar(item, operation) for item in value if item is not None]
    return _coerce_scalar(value, operation)


def _coerce_scalar(value, operation):
    if isinstance(value, SCALAR_TYPES):
        return as_text(value)
    raise TypeError(
        f"{operation}: unsupported parameter value of type {type(value).__name__}"
    )


def coerce_params(params, operation='argument'):
    """Validate a caller-supplied mapping and return a new ParameterSet."""
    if not isinstance(params, Mapping):
        raise TypeError(
            f"{operation}: expected a mapping of parameters, "
            f"got {type(params).__name__}"
        )
    return {str(key): coerce_value(value, operation) for key, value in params.items()}


def merge_params(current, additions):
    """Shallow merge; a ``None`` value deletes the key instead of setting it."""
    merged = dict(current)
    for key, value in additions.items():
        if value is None:
            merged.pop(key, None)
        else:
            merged[key] = value
    return merged


def _as_number(text):
    if not NUMERIC_RE.fullmatch(text):
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    return None if number.is_nan() else number


def loosely_equal(left, right):
    """
    Compare two parameter values without caring whether they came in as
    strings or numbers: ``"1"``, ``1`` and ``"1.0"`` are all equal.
    """
    left_is_list = isinstance(left, (list, tuple))
    right_is_list = isinstance(right, (list, tuple))
    if left_is_list or right_is_list:
        if not (left_is_list and right_is_list) or len(left) != len(right):
            return False
        return all(loosely_equal(a, b) for a, b in zip(left, right))

    if left is None or right is None:
        return left is right

    left_text, right_text = as_text(left), as_text(right)
    if left_text == right_text:
        return True

    left_number, right_number = _as_number(left_text), _as_number(right_text)
    if left_number is None or right_number is None:
        return False
    return left_number == right_number


def parse_query(query):
    """Decode a raw query string (no leading ``?``) into a ParameterSet."""
    params = {}
    if not query:
        return params

    for key, values in QueryDict(query).lists():
        if key.endswith(LIST_SUFFIX) and len(key) > len(LIST_SUFFIX):
            params[key[:-len(LIST_SUFFIX)]] = values
        else:
            params[key] = values[-1]
    return params


def serialize_query(params):
    """Encode a ParameterSet, keeping its order and writing lists as ``key[]``."""
    query = QueryDict(mutable=True)
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            if value:
                query.setlist(f'{key}{LIST_SUFFIX}', [as_text(item) for item in value])
        else:
            query[key] = as_text(value)

    safe = getattr(settings, 'QUERY_PARAMS_SAFE_CHARS', DEFAULT_SAFE_CHARS)
    return query.urlencode(safe=safe or None)
