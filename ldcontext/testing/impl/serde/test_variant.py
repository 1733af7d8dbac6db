import pytest

from ldcontext.errors import (EmptyKeyError, EmptyMultiError, InvalidKindError,
                              InvalidTypeError, MalformedMetaError,
                              MissingFieldError)
from ldcontext.impl.model.attribute_ref import AttributeRef
from ldcontext.impl.serde.shapes import (LegacyUser, MultiKindShape,
                                         SingleKindStandalone)
from ldcontext.impl.serde.variant import parse_variant


def test_absent_kind_is_legacy_user():
    v = parse_variant({'key': 'a'})
    assert isinstance(v, LegacyUser)
    assert v.key == 'a'


def test_string_kind_is_single_kind():
    v = parse_variant({'kind': 'org', 'key': 'a'})
    assert isinstance(v, SingleKindStandalone)
    assert v.kind == 'org'
    assert v.context.key == 'a'


def test_multi_kind():
    v = parse_variant({'kind': 'multi', 'org': {'key': 'a'}, 'user': {'key': 'b'}})
    assert isinstance(v, MultiKindShape)
    assert v.kind == 'multi'
    assert sorted(v.contexts.keys()) == ['org', 'user']
    assert v.contexts['user'].key == 'b'


def test_kind_is_case_sensitive():
    v = parse_variant({'kind': 'Multi', 'key': 'a'})
    assert isinstance(v, SingleKindStandalone)
    assert v.kind == 'Multi'


def test_kind_is_not_trimmed():
    v = parse_variant({'kind': ' org ', 'key': 'a'})
    assert v.kind == ' org '


def test_null_kind():
    with pytest.raises(InvalidKindError) as e:
        parse_variant({'kind': None, 'key': 'b'})
    assert str(e.value) == 'context kind cannot be null'


# A boolean kind must not fall through to the legacy user format, where it would be ignored as an
# unrecognized property.
@pytest.mark.parametrize('kind', [True, False, {}, 1, 0, [], ['user']])
def test_non_string_kind(kind):
    with pytest.raises(InvalidKindError):
        parse_variant({'kind': kind, 'key': 'a'})


def test_empty_kind():
    with pytest.raises(InvalidKindError) as e:
        parse_variant({'kind': '', 'key': 'a'})
    assert str(e.value) == 'context kind cannot be empty string'


def test_kind_named_kind():
    with pytest.raises(InvalidKindError) as e:
        parse_variant({'kind': 'kind', 'key': 'a'})
    assert str(e.value) == "context kind cannot be 'kind'"


@pytest.mark.parametrize('data', [[], 'a', 1, None, True])
def test_document_must_be_object(data):
    with pytest.raises(InvalidTypeError) as e:
        parse_variant(data)
    assert e.value.property_name is None


class TestSingleKindShape:
    def test_built_in_properties_and_attributes(self):
        v = parse_variant({
            'kind': 'org',
            'key': 'a',
            'name': 'b',
            'anonymous': True,
            'c': {'d': 1},
            '_meta': {'secondary': 's', 'privateAttributes': ['c'], 'other': 1},
        })
        n = v.context
        assert n.key == 'a'
        assert n.name == 'b'
        assert n.anonymous is True
        assert n.attributes == {'c': {'d': 1}}
        assert n.meta.secondary == 's'
        assert n.meta.private_attributes == ['c']

    def test_optional_properties_absent(self):
        n = parse_variant({'kind': 'org', 'key': 'a'}).context
        assert n.name is None
        assert n.anonymous is None
        assert n.meta is None
        assert n.attributes == {}

    def test_null_optional_properties_are_absent(self):
        n = parse_variant({'kind': 'org', 'key': 'a', 'name': None, 'anonymous': None, '_meta': None}).context
        assert n.name is None
        assert n.anonymous is None
        assert n.meta is None

    def test_missing_key(self):
        with pytest.raises(MissingFieldError) as e:
            parse_variant({'kind': 'user'})
        assert e.value.property_name == 'key'

    def test_empty_key(self):
        with pytest.raises(EmptyKeyError):
            parse_variant({'kind': 'user', 'key': ''})

    @pytest.mark.parametrize('meta', ['string', 1, True, []])
    def test_meta_must_be_object(self, meta):
        with pytest.raises(MalformedMetaError):
            parse_variant({'kind': 'user', 'key': 'a', '_meta': meta})

    @pytest.mark.parametrize('data', [
        {'kind': 'user', 'key': None},
        {'kind': 'user', 'key': 1},
        {'kind': 'user', 'key': 'a', 'name': 1},
        {'kind': 'user', 'key': 'a', 'anonymous': 'true'},
        {'kind': 'user', 'key': 'a', '_meta': {'secondary': 1}},
        {'kind': 'user', 'key': 'a', '_meta': {'privateAttributes': 'a'}},
        {'kind': 'user', 'key': 'a', '_meta': {'privateAttributes': ['a', 1]}},
    ])
    def test_wrong_property_types(self, data):
        with pytest.raises(InvalidTypeError):
            parse_variant(data)


class TestMultiKindShape:
    def test_no_nested_contexts(self):
        with pytest.raises(EmptyMultiError):
            parse_variant({'kind': 'multi'})

    @pytest.mark.parametrize('value', ['a', 1, None, [], True])
    def test_nested_context_must_be_object(self, value):
        with pytest.raises(InvalidTypeError) as e:
            parse_variant({'kind': 'multi', 'org': value})
        assert e.value.property_name == 'org'

    def test_nested_kind_cannot_be_empty(self):
        with pytest.raises(InvalidKindError):
            parse_variant({'kind': 'multi', '': {'key': 'a'}})

    def test_nested_context_is_parsed_strictly(self):
        with pytest.raises(EmptyKeyError):
            parse_variant({'kind': 'multi', 'org': {'key': 'a'}, 'user': {'key': ''}})
        with pytest.raises(MalformedMetaError):
            parse_variant({'kind': 'multi', 'org': {'key': 'a', '_meta': 'x'}})


class TestLegacyUserShape:
    def test_all_properties(self):
        v = parse_variant({
            'key': 'a',
            'name': 'b',
            'secondary': 'c',
            'anonymous': True,
            'firstName': 'd',
            'lastName': 'e',
            'avatar': 'f',
            'email': 'g',
            'country': 'h',
            'ip': 'i',
            'custom': {'j': [1]},
            'privateAttributeNames': ['ip', 'j'],
        })
        assert isinstance(v, LegacyUser)
        assert (v.key, v.name, v.secondary, v.anonymous) == ('a', 'b', 'c', True)
        assert (v.first_name, v.last_name, v.avatar, v.email, v.country, v.ip) == ('d', 'e', 'f', 'g', 'h', 'i')
        assert v.custom == {'j': [1]}
        assert v.private_attribute_names == [AttributeRef.from_literal('ip'), AttributeRef.from_literal('j')]

    def test_empty_key_is_allowed(self):
        assert parse_variant({'key': ''}).key == ''

    def test_missing_key(self):
        with pytest.raises(MissingFieldError):
            parse_variant({'a': 'b'})

    def test_unrecognized_properties_are_ignored(self):
        v = parse_variant({'key': 'foo', 'ip': 'b', 'unknown-1': 'ignored', 'unknown-2': 'ignored', 'unknown-3': 'ignored'})
        assert v.ip == 'b'

    @pytest.mark.parametrize('data', [
        {'key': None},
        {'key': 'a', 'firstName': 1},
        {'key': 'a', 'ip': True},
        {'key': 'a', 'anonymous': 'yes'},
        {'key': 'a', 'custom': 'x'},
        {'key': 'a', 'privateAttributeNames': 'ip'},
    ])
    def test_wrong_property_types(self, data):
        with pytest.raises(InvalidTypeError):
            parse_variant(data)
