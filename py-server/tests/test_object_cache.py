from decimal import Decimal

import pytest
from pikepdf import Array, Dictionary, Name, String

from processors.object_cache import (
    ExtGStateCache, ShadingCache, StructuralObjectCache, structurally_equal,
)


def _gstate(alpha, blend_mode='/Compatible'):
    return Dictionary({
        '/Type': Name('/ExtGState'),
        '/CA': alpha,
        '/ca': alpha,
        '/BM': Name(blend_mode),
    })


def _shading(shading_type, coords):
    return Dictionary({
        '/ShadingType': shading_type,
        '/ColorSpace': Name('/DeviceRGB'),
        '/Coords': Array(coords),
        '/Extend': Array([True, True]),
    })


def test_equal_dictionaries_share_one_instance():
    cache = ExtGStateCache()
    first = _gstate(0.5)
    second = _gstate(0.5)
    assert cache.make_unique(first) is first
    assert cache.make_unique(second) is first
    assert len(cache) == 1
    assert cache.hits == 1


def test_different_values_stay_distinct():
    cache = ExtGStateCache()
    first = cache.make_unique(_gstate(0.5))
    second = cache.make_unique(_gstate(0.25))
    third = cache.make_unique(_gstate(0.5, '/Normal'))
    assert second is not first
    assert third is not first
    assert len(cache) == 3


def test_nested_array_difference_is_detected():
    cache = ShadingCache()
    first = cache.make_unique(_shading(2, [0, 0, 100, 0]))
    second = cache.make_unique(_shading(2, [0, 0, 100, 1]))
    assert second is not first
    assert cache.make_unique(_shading(2, [0, 0, 100, 1])) is second


def test_shading_key_includes_shading_type():
    cache = ShadingCache()
    assert cache.structural_key(_shading(2, [0, 0, 1, 1])) == (4, 2)
    assert cache.structural_key(_shading(3, [0, 0, 0, 1, 1, 1])) == (4, 3)
    assert cache.structural_key(Dictionary({'/Foo': 1})) == (1, None)


def test_clear_forgets_entries():
    cache = ExtGStateCache()
    first = cache.make_unique(_gstate(0.5))
    cache.clear()
    assert len(cache) == 0
    assert cache.make_unique(_gstate(0.5)) is not first


def test_numbers_compare_by_value():
    assert structurally_equal(1, 1.0)
    assert structurally_equal(Decimal('0.5'), 0.5)
    assert not structurally_equal(1, 2)


def test_booleans_never_equal_numbers():
    assert not structurally_equal(True, 1)
    assert structurally_equal(True, True)


def test_names_and_strings_are_different_variants():
    assert not structurally_equal(Name('/A'), String('/A'))
    assert structurally_equal(String('abc'), String('abc'))
    assert structurally_equal(Name('/A'), Name('/A'))


def test_plain_containers_compare_structurally():
    assert structurally_equal({'/A': [1, 2]}, Dictionary({'/A': Array([1, 2])}))
    assert structurally_equal({'A': 1}, {'/A': 1})
    assert not structurally_equal([1, 2], [1, 2, 3])
    assert not structurally_equal({'/A': 1}, {'/A': 1, '/B': 2})


def test_null_equals_only_null():
    assert structurally_equal(None, None)
    assert not structurally_equal(None, 0)


def test_streams_compare_data(pdf):
    first = pdf.make_stream(b'0 0 1 rg')
    second = pdf.make_stream(b'0 0 1 rg')
    third = pdf.make_stream(b'1 0 0 rg')
    assert structurally_equal(first, second)
    assert not structurally_equal(first, third)


def test_same_indirect_object_is_equal(pdf):
    shared = pdf.make_indirect(_shading(2, [0, 0, 1, 1]))
    assert structurally_equal(Array([shared]), Array([shared]))


def test_generic_cache_buckets_by_key_count():
    cache = StructuralObjectCache("test")
    a = cache.make_unique({'/A': 1})
    b = cache.make_unique({'/A': 1, '/B': 2})
    assert a is not b
    assert cache.make_unique({'/B': 2, '/A': 1}) is b
    assert "1 hits" in repr(cache)


@pytest.mark.parametrize('value', [Array([1]), Dictionary({'/A': 1}), 'x', 1])
def test_object_equals_itself(value):
    assert structurally_equal(value, value)


@pytest.mark.parametrize('a, b', [
    (Decimal('0.1'), 0.1),
    (Decimal('0.501961'), 128 / 255),
    (Decimal('3'), 3),
    (2, 2.0),
])
def test_reals_compare_across_representations(a, b):
    assert structurally_equal(a, b)
    assert structurally_equal(b, a)


@pytest.mark.parametrize('a, b', [
    (Decimal('0.1'), 0.2),
    (Decimal('0.5'), 0.501),
    (1, 2),
])
def test_distinct_reals_differ(a, b):
    assert not structurally_equal(a, b)


def test_plain_mapping_matches_cached_pikepdf_gstate():
    cache = ExtGStateCache()
    cached = cache.make_unique(_gstate(0.1))
    candidate = {'/Type': Name('/ExtGState'), '/CA': 0.1, '/ca': 0.1, '/BM': Name('/Compatible')}
    assert cache.make_unique(candidate) is cached
    assert cache.hits == 1
