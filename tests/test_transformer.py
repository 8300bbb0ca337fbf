"""Tests for core.transformer - the query string operations."""

import pytest
from django.core.exceptions import ImproperlyConfigured

from core.params import Many, Single
from core.sources import DjangoRequestSource, StaticRequestSource
from core.transformer import QueryTransformer


@pytest.fixture
def transformer():
    return QueryTransformer()


class TestExtractParams:
    """Test reading the parameter set of a URL."""

    def test_with_query(self, transformer):
        assert transformer.extract_params('/x?a=1&tag[]=b') == {'a': '1', 'tag': ['b']}

    def test_without_query(self, transformer):
        assert transformer.extract_params('/x') == {}

    def test_fragment_ignored(self, transformer):
        assert transformer.extract_params('/x?a=1#top') == {'a': '1'}

    def test_absolute_url(self, transformer):
        assert transformer.extract_params('https://example.com/shop?a=1') == {'a': '1'}

    def test_url_must_be_string(self, transformer):
        with pytest.raises(TypeError, match='url'):
            transformer.extract_params(42)

    def test_malformed_host_names_operation(self, transformer):
        with pytest.raises(ValueError, match='extractParams'):
            transformer.extract_params('http://[::1/x?a=0')
        with pytest.raises(ValueError, match='addParams|extractParams'):
            transformer.add_params(Single({'a': '1'}), 'http://[::1/x?a=0')

    def test_ambient_request(self):
        transformer = QueryTransformer(StaticRequestSource('/shop', {'a': '1'}))
        assert transformer.extract_params() == {'a': '1'}

    def test_no_url_and_no_source(self, transformer):
        with pytest.raises(ImproperlyConfigured):
            transformer.extract_params()


class TestBuild:
    """Test rebuilding a URL from a parameter set."""

    def test_empty_params_keep_question_mark(self, transformer):
        assert transformer.build({}, '/x?a=1') == '/x?'

    def test_path_from_url(self, transformer):
        assert transformer.build({'a': '1'}, '/shop/list?b=2') == '/shop/list?a=1'

    def test_absolute_url_keeps_only_path(self, transformer):
        assert transformer.build({'a': '1'}, 'https://example.com/shop') == '/shop?a=1'

    def test_no_path_component(self, transformer):
        assert transformer.build({'a': '1'}, '?b=2') == '/?a=1'

    def test_ambient_path(self):
        transformer = QueryTransformer(StaticRequestSource('shop', {}))
        assert transformer.build({'a': '1'}) == '/shop?a=1'

    def test_round_trip(self, transformer):
        params = {'a': '1', 'tag': ['x', 'y'], 'q': 'red brick'}
        assert transformer.extract_params(transformer.build(params, '/x')) == params


class TestAddParams:
    """Test merging parameter sets into a URL."""

    def test_overwrites_existing_key(self, transformer):
        assert transformer.add_params(Single({'a': '1'}), '/x?a=0') == '/x?a=1'

    def test_appends_new_key(self, transformer):
        assert transformer.add_params(Single({'page': 2}), '/x?q=red') == '/x?q=red&page=2'

    def test_later_sets_win(self, transformer):
        url = transformer.add_params(Many([{'a': '1', 'b': '1'}, {'a': '2'}]), '/x?c=0')
        assert url == '/x?c=0&a=2&b=1'

    def test_keeps_list_values(self, transformer):
        assert transformer.add_params(Single({'page': 2}), '/x?tag[]=a&tag[]=b') == '/x?tag[]=a&tag[]=b&page=2'

    def test_list_addition(self, transformer):
        assert transformer.add_params(Single({'tag': ['a', 'b']}), '/x') == '/x?tag[]=a&tag[]=b'

    def test_none_removes_key(self, transformer):
        assert transformer.add_params(Single({'page': None}), '/x?page=3&q=a') == '/x?q=a'

    def test_empty_is_noop(self, transformer):
        assert transformer.add_params(Single({}), '/x?a=1') == '/x?a=1'
        assert transformer.add_params(Many([]), '/x?a=1') == '/x?a=1'

    def test_no_query_in_url(self, transformer):
        assert transformer.add_params(Single({'a': '1'}), '/x') == '/x?a=1'

    def test_requires_explicit_union(self, transformer):
        with pytest.raises(TypeError, match='addParams'):
            transformer.add_params({'a': '1'}, '/x')

    def test_rejects_non_mapping_set(self, transformer):
        with pytest.raises(TypeError, match='mapping'):
            transformer.add_params(Single('a'), '/x')

    def test_does_not_mutate_input(self, transformer):
        additions = {'a': '1', 'tag': ['x']}
        transformer.add_params(Single(additions), '/x?a=0')
        assert additions == {'a': '1', 'tag': ['x']}


class TestRemoveParams:
    """Test removing exact key/value pairs."""

    def test_matching_pair(self, transformer):
        assert transformer.remove_params({'a': '1'}, '/x?a=1&b=2') == '/x?b=2'

    def test_value_mismatch_keeps_key(self, transformer):
        assert transformer.remove_params({'a': '9'}, '/x?a=1&b=2') == '/x?a=1&b=2'

    def test_loose_comparison(self, transformer):
        assert transformer.remove_params({'page': 1}, '/x?page=1&q=a') == '/x?q=a'

    def test_list_value(self, transformer):
        assert transformer.remove_params({'tag': ['a', 'b']}, '/x?tag[]=a&tag[]=b&q=1') == '/x?q=1'

    def test_list_value_mismatch(self, transformer):
        assert transformer.remove_params({'tag': 'a'}, '/x?tag[]=a') == '/x?tag[]=a'

    def test_uses_path_of_url(self):
        transformer = QueryTransformer(StaticRequestSource('/elsewhere', {}))
        assert transformer.remove_params({'a': '1'}, '/x?a=1') == '/x?'

    def test_empty_is_noop(self, transformer):
        assert transformer.remove_params({}, '/x?a=1') == '/x?a=1'

    def test_rejects_non_mapping(self, transformer):
        with pytest.raises(TypeError, match='removeParams'):
            transformer.remove_params(['a'], '/x?a=1')


class TestRemoveKeys:
    """Test removing parameters by key."""

    def test_single_key(self, transformer):
        assert transformer.remove_keys(Single('a'), '/x?a=1&b=2') == '/x?b=2'

    def test_many_keys(self, transformer):
        assert transformer.remove_keys(Many(['a', 'c']), '/x?a=1&b=2&c=3') == '/x?b=2'

    def test_idempotent(self, transformer):
        once = transformer.remove_keys(Single('a'), '/x?a=1&b=2')
        assert transformer.remove_keys(Single('a'), once) == once

    def test_list_valued_key(self, transformer):
        assert transformer.remove_keys(Single('tag'), '/x?tag[]=a&tag[]=b&q=1') == '/x?q=1'

    def test_preserves_order_of_other_keys(self, transformer):
        assert transformer.remove_keys(Single('b'), '/x?c=3&b=2&a=1') == '/x?c=3&a=1'

    def test_requires_explicit_union(self, transformer):
        with pytest.raises(TypeError, match='removeKeys'):
            transformer.remove_keys('a', '/x?a=1')

    def test_rejects_non_string_key(self, transformer):
        with pytest.raises(TypeError, match='removeKeys'):
            transformer.remove_keys(Single(['a', 'b']), '/x?a=1&b=2')
        with pytest.raises(TypeError, match='removeKeys'):
            transformer.remove_keys(Many([{'a': '1'}]), '/x?a=1')

    def test_numeric_key(self, transformer):
        assert transformer.remove_keys(Single(2), '/x?2=a&b=1') == '/x?b=1'


class TestRemoveValues:
    """Test removing parameters by value."""

    def test_removes_every_matching_key(self, transformer):
        assert transformer.remove_values(Single('1'), '/x?a=1&b=1&c=2') == '/x?c=2'

    def test_many_values(self, transformer):
        assert transformer.remove_values(Many(['1', '2']), '/x?a=1&b=2&c=3') == '/x?c=3'

    def test_number_matches_string(self, transformer):
        assert transformer.remove_values(Single(1), '/x?a=1&b=01&c=x') == '/x?c=x'

    def test_no_match(self, transformer):
        assert transformer.remove_values(Single('z'), '/x?a=1') == '/x?a=1'

    def test_underscored_number_is_not_numeric(self, transformer):
        assert transformer.remove_values(Single('1000'), '/x?a=1_000&b=1000') == '/x?a=1_000'

    def test_infinity_spellings_do_not_match(self, transformer):
        assert transformer.remove_params({'a': 'inf'}, '/x?a=Infinity') == '/x?a=Infinity'

    def test_empty_is_noop(self, transformer):
        assert transformer.remove_values(Many([]), '/x?a=1') == '/x?a=1'

    def test_rejects_nested_value(self, transformer):
        with pytest.raises(TypeError, match='removeValues'):
            transformer.remove_values(Single({'a': '1'}), '/x?a=1')


class TestReplaceParams:
    """Test replacing parameters."""

    def test_replaces_in_place(self, transformer):
        assert transformer.replace_params({'a': '9'}, '/x?a=1&b=2') == '/x?a=9&b=2'

    def test_appends_new_key(self, transformer):
        assert transformer.replace_params({'c': '3'}, '/x?a=1') == '/x?a=1&c=3'

    def test_list_replaces_scalar(self, transformer):
        assert transformer.replace_params({'a': ['1', '2']}, '/x?a=0&b=1') == '/x?a[]=1&a[]=2&b=1'

    def test_none_removes_key(self, transformer):
        assert transformer.replace_params({'a': None}, '/x?a=1&b=2') == '/x?b=2'

    def test_empty_is_noop(self, transformer):
        assert transformer.replace_params({}, '/x?a=1') == '/x?a=1'


class TestAmbientRequest:
    """Test operations that fall back to the current request."""

    def test_static_source(self):
        transformer = QueryTransformer(StaticRequestSource('/shop', {'a': '1'}))
        assert transformer.add_params(Single({'b': '2'})) == '/shop?a=1&b=2'

    def test_django_request(self, rf):
        request = rf.get('/shop/list', {'tag[]': ['a', 'b'], 'page': '2'})
        transformer = QueryTransformer(DjangoRequestSource(request))
        assert transformer.remove_keys(Single('page')) == '/shop/list?tag[]=a&tag[]=b'

    def test_explicit_url_ignores_request(self, rf):
        transformer = QueryTransformer(DjangoRequestSource(rf.get('/shop', {'a': '1'})))
        assert transformer.remove_keys(Single('b'), '/other?b=2') == '/other?'

    def test_django_request_path_stays_encoded(self, rf):
        transformer = QueryTransformer(DjangoRequestSource(rf.get('/a%20b', {'q': '1'})))
        assert transformer.add_params(Single({'page': 2})) == '/a%20b?q=1&page=2'
        assert transformer.build({}, '/a%20b?q=1') == '/a%20b?'

    def test_static_source_is_not_mutated(self):
        source = StaticRequestSource('/shop', {'a': '1'})
        QueryTransformer(source).remove_keys(Single('a'))
        assert source.get_current_query_params() == {'a': '1'}
