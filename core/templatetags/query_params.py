# core/templatetags/query_params.py
import logging
from collections.abc import Mapping

from django import template
from django.core.exceptions import ImproperlyConfigured

from core.params import Many, single_or_many
from core.sources import DjangoRequestSource
from core.transformer import QueryTransformer

logger = logging.getLogger(__name__)

register = template.Library()


def _transformer(context, url):
    request = context.get('request')
    if request is None and url is None:
        logger.error("Query string tag used without a request in the template context")
        raise ImproperlyConfigured(
            "Query string tags need 'django.template.context_processors.request' "
            "or an explicit url argument."
        )
    return QueryTransformer(DjangoRequestSource(request) if request is not None else None)


def _param_sets(args, kwargs, operation):
    """Positional parameter sets plus keyword pairs, in that order."""
    sets = []
    for arg in args:
        sets.extend(single_or_many(arg, operation).as_list())
    if kwargs:
        sets.append(kwargs)
    return sets


def _single_set(args, kwargs, operation):
    merged = {}
    for params in _param_sets(args, kwargs, operation):
        if not isinstance(params, Mapping):
            raise TypeError(f"{operation}: expected a mapping, got {type(params).__name__}")
        merged.update(params)
    return merged


def _flatten(args, operation):
    items = []
    for arg in args:
        items.extend(single_or_many(arg, operation).as_list())
    return items


@register.simple_tag(takes_context=True, name='addParams')
def add_params(context, *additions, url=None, **params):
    """
    Add or overwrite parameters on the current URL (or on ``url``).
    Usage: <a href="{% addParams page=2 %}">
           <a href="{% addParams extra_filters sort='name' url=link %}">

    The ``url`` keyword is always the URL to rewrite, on every tag here. To
    set a query parameter literally named ``url``, pass it inside a mapping:
    {% addParams next_params %} with next_params = {'url': '/next'}.
    """
    sets = _param_sets(additions, params, 'addParams')
    return _transformer(context, url).add_params(Many(sets), url)


@register.simple_tag(takes_context=True, name='removeParams')
def remove_params(context, *pairs, url=None, **params):
    """
    Remove parameters only where both key and value match.
    Usage: <a href="{% removeParams tag='red' %}">
    ``url`` is reserved for the URL to rewrite; match a ``url`` parameter via a mapping.
    """
    merged = _single_set(pairs, params, 'removeParams')
    return _transformer(context, url).remove_params(merged, url)


@register.simple_tag(takes_context=True, name='removeKeys')
def remove_keys(context, *keys, url=None):
    """
    Remove parameters by key.
    Usage: <a href="{% removeKeys 'page' 'sort' %}">
    """
    return _transformer(context, url).remove_keys(Many(_flatten(keys, 'removeKeys')), url)


@register.simple_tag(takes_context=True, name='removeValues')
def remove_values(context, *values, url=None):
    """
    Remove every parameter holding one of the given values.
    Usage: <a href="{% removeValues 'draft' %}">
    """
    return _transformer(context, url).remove_values(Many(_flatten(values, 'removeValues')), url)


@register.simple_tag(takes_context=True, name='replaceParams')
def replace_params(context, *replacements, url=None, **params):
    """
    Replace parameters on the current URL, keeping their position.
    Usage: <a href="{% replaceParams sort='price' %}">
    ``url`` is reserved for the URL to rewrite; replace a ``url`` parameter via a mapping.
    """
    merged = _single_set(replacements, params, 'replaceParams')
    return _transformer(context, url).replace_params(merged, url)


@register.filter(name='addParams')
def add_params_filter(additions, url=None):
    """
    Filter form of addParams; filters have no request, so the URL is required.
    Usage: {{ extra_filters|addParams:request.get_full_path }}
    """
    return QueryTransformer().add_params(single_or_many(additions, 'addParams'), url)


@register.filter(name='removeParams')
def remove_params_filter(pairs, url=None):
    """
    Filter form of removeParams.
    Usage: {{ pairs|removeParams:request.get_full_path }}
    """
    return QueryTransformer().remove_params(pairs, url)
