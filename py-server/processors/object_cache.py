"""
Structural object cache.

Deduplicates emitted PDF objects by deep value equality so that repeated
equivalent paints share one object. Candidates are bucketed by a cheap
structural key first; full comparison only runs inside a bucket.

NOTE: caches are stateful and not thread safe. Use one per document session.
"""

import logging
import math
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Dict, Generic, Hashable, List, Set, Tuple, TypeVar

from pikepdf import Array, Dictionary, Name, Stream, String

from constants.pdf_keys import KEY_SHADING_TYPE

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Reals read back from pikepdf may be rounded; numbers closer than this are equal
REAL_TOLERANCE = 5e-7

# Variant tags of the closed set compared by structurally_equal
STREAM = 'stream'
DICTIONARY = 'dictionary'
ARRAY = 'array'
NAME = 'name'
STRING = 'string'
BOOLEAN = 'boolean'
NUMBER = 'number'
NULL = 'null'
OTHER = 'other'


def _variant(obj: Any) -> str:
    if obj is None:
        return NULL
    if isinstance(obj, bool):
        return BOOLEAN
    if isinstance(obj, (int, float, Decimal)):
        return NUMBER
    if isinstance(obj, Stream):
        return STREAM
    if isinstance(obj, Dictionary) or isinstance(obj, Mapping):
        return DICTIONARY
    if isinstance(obj, Array) or isinstance(obj, (list, tuple)):
        return ARRAY
    if isinstance(obj, Name):
        return NAME
    if isinstance(obj, (String, str, bytes)):
        return STRING
    return OTHER


def _objgen(obj: Any) -> Tuple[int, int]:
    try:
        return tuple(obj.objgen) if obj.is_indirect else (0, 0)
    except AttributeError:
        return (0, 0)


def _keys(obj: Any) -> Set[str]:
    return {"/" + str(key).lstrip("/") for key in obj.keys()}


def _item(obj: Any, key: str) -> Any:
    if isinstance(obj, Mapping) and key not in obj:
        # Plain mappings may use bare keys instead of "/Key"
        return obj.get(key.lstrip('/'))
    return obj[key]


def _numbers_equal(a: Any, b: Any) -> bool:
    if isinstance(a, int) and isinstance(b, int):
        return a == b
    return math.isclose(float(a), float(b), rel_tol=1e-9, abs_tol=REAL_TOLERANCE)


def _as_bytes(obj: Any) -> bytes:
    if isinstance(obj, str):
        return obj.encode('utf-8')
    return bytes(obj)


def structurally_equal(a: Any, b: Any, _seen: Set[Tuple] = None) -> bool:
    """
    Compare two PDF object graphs by value.

    Dictionaries compare key sets and values, arrays compare element-wise,
    streams compare their dictionaries and raw data. Numbers compare by value
    regardless of int/float/Decimal representation, within the precision
    pikepdf keeps for reals; booleans never equal
    numbers.
    """
    if a is b:
        return True

    kind = _variant(a)
    if kind != _variant(b):
        return False

    if kind == NULL:
        return True
    if kind == NUMBER:
        return _numbers_equal(a, b)
    if kind in (BOOLEAN, NAME, OTHER):
        return a == b
    if kind == STRING:
        return _as_bytes(a) == _as_bytes(b)

    # Containers: identical indirect objects are equal, and pairs already
    # under comparison are assumed equal (cycle guard)
    gen_a, gen_b = _objgen(a), _objgen(b)
    if gen_a != (0, 0) and gen_a == gen_b:
        return True
    if _seen is None:
        _seen = set()
    if gen_a != (0, 0) and gen_b != (0, 0):
        pair = (gen_a, gen_b)
        if pair in _seen:
            return True
        _seen.add(pair)

    if kind == ARRAY:
        if len(a) != len(b):
            return False
        return all(structurally_equal(x, y, _seen) for x, y in zip(a, b))

    keys = _keys(a)
    if keys != _keys(b):
        return False
    if not all(structurally_equal(_item(a, key), _item(b, key), _seen) for key in keys):
        return False

    if kind == STREAM:
        return a.read_raw_bytes() == b.read_raw_bytes()
    return True


class StructuralObjectCache(Generic[T]):
    """Cache returning a previously seen, structurally equal object if one exists."""

    def __init__(self, name: str = "objects"):
        self.name = name
        self._buckets: Dict[Hashable, List[T]] = {}
        self.hits = 0
        self.misses = 0

    def structural_key(self, obj: T) -> Hashable:
        """Cheap bucketing key; equal objects must share a key."""
        return len(_keys(obj))

    def make_unique(self, candidate: T) -> T:
        key = self.structural_key(candidate)
        bucket = self._buckets.setdefault(key, [])
        for existing in bucket:
            if structurally_equal(existing, candidate):
                self.hits += 1
                logger.debug(f"{self.name} cache hit (bucket {key!r}, {len(bucket)} entries)")
                return existing
        bucket.append(candidate)
        self.misses += 1
        return candidate

    def clear(self) -> None:
        self._buckets.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._buckets.values())

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)} entries, {self.hits} hits)"


class ExtGStateCache(StructuralObjectCache[Dictionary]):
    """Deduplicates /ExtGState dictionaries."""

    def __init__(self):
        super().__init__("ExtGState")


class ShadingCache(StructuralObjectCache[Dictionary]):
    """Deduplicates shading dictionaries and streams."""

    def __init__(self):
        super().__init__("Shading")

    def structural_key(self, obj: Dictionary) -> Hashable:
        shading_type = obj.get(KEY_SHADING_TYPE)
        return (len(_keys(obj)), int(shading_type) if shading_type is not None else None)
