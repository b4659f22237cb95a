# RUN: python -m unittest discover -s py/tests -k properties

"""Property based testing for the path and structure utilities."""

import re
import unittest
from datetime import datetime, timedelta

import hypothesis
import hypothesis.strategies as st

from objutils import classify, clone, equals, rdelete, rget, rset


KINDS = {
    'null', 'boolean', 'number', 'string', 'function',
    'array', 'regex', 'date', 'object',
}

SEGMENT_REGEX = re.compile(r'[_a-zA-Z][_a-zA-Z0-9]*')
segments = st.from_regex(SEGMENT_REGEX, fullmatch=True)
paths = st.lists(segments, min_size=1, max_size=4)

scalars = (
    st.none()
    | st.booleans()
    | st.integers()
    | st.floats(allow_nan=False)
    | st.text(max_size=16)
)
extras = (
    st.datetimes(min_value=datetime(1970, 1, 1))
    | st.sampled_from([re.compile('a+'), re.compile('^b$', re.M)])
)
trees = st.recursive(
    scalars | extras,
    lambda children: (
        st.lists(children, max_size=4)
        | st.dictionaries(segments, children, max_size=4)
    ),
    max_leaves=12,
)
maps = st.dictionaries(segments, trees, max_size=4)


def split(path):
    return '.'.join(path)


def present(target, path):
    node = target
    for part in path:
        if not isinstance(node, dict) or part not in node:
            return False
        node = node[part]
    return node is not None


def writable(target, path):
    node = target
    for part in path[:-1]:
        if not isinstance(node, dict):
            return False
        if part not in node:
            return True
        node = node[part]
    return isinstance(node, dict)


class TestProperties(unittest.TestCase):

    @hypothesis.given(trees)
    def test_clone_equals(self, val):
        self.assertTrue(equals(val, clone(val)))

    @hypothesis.given(maps)
    def test_clone_independent(self, val):
        before = clone(val)
        cpy = clone(val)
        cpy['new-key'] = 1
        for key in list(cpy):
            if isinstance(cpy[key], (dict, list)):
                cpy[key].clear()
        self.assertNotIn('new-key', val)
        self.assertTrue(equals(before, val))

    @hypothesis.given(trees, trees)
    def test_equals_symmetric(self, a, b):
        self.assertEqual(equals(a, b), equals(b, a))

    @hypothesis.given(trees)
    def test_equals_reflexive(self, val):
        self.assertTrue(equals(val, val))

    @hypothesis.given(maps, segments)
    def test_equals_undefined_is_absent(self, val, key):
        hypothesis.assume(key not in val)
        with_none = dict(val)
        with_none[key] = None
        self.assertTrue(equals(with_none, val))
        self.assertTrue(equals(val, with_none))

    @hypothesis.given(trees | st.functions() | st.binary() | st.frozensets(st.integers()))
    def test_classify_total(self, val):
        kind = classify(val)
        self.assertIsInstance(kind, str)
        if kind not in KINDS:
            self.assertEqual(kind, type(val).__name__)

    @hypothesis.given(maps, paths)
    def test_rget_absent(self, target, path):
        hypothesis.assume(not present(target, path))
        self.assertIsNone(rget(target, split(path)))

    @hypothesis.given(maps, paths, trees)
    def test_rset_rget_round_trip(self, target, path, val):
        hypothesis.assume(writable(target, path))
        rset(target, split(path), val)
        self.assertTrue(equals(rget(target, split(path)), val))

    @hypothesis.given(maps, paths, st.sampled_from(['/', '::', '|']), st.sampled_from(['', '_', 'x-']))
    def test_rset_rget_options(self, target, path, separator, prefix):
        options = {'separator': separator, 'prefix': prefix}
        hypothesis.assume(writable(target, [prefix + p for p in path]))
        rset(target, separator.join(path), 1, options)
        self.assertEqual(rget(target, separator.join(path), options), 1)

    @hypothesis.given(maps, paths)
    def test_rdelete_iff_present(self, target, path):
        was = present(target, path)
        ok = rdelete(target, split(path))
        if was:
            self.assertTrue(ok)
        self.assertIsNone(rget(target, split(path)))

    @hypothesis.given(maps, paths)
    def test_rdelete_absent(self, target, path):
        node = target
        for part in path[:-1]:
            node = node.get(part) if isinstance(node, dict) else None
        hypothesis.assume(not isinstance(node, dict) or path[-1] not in node)
        before = clone(target)
        self.assertFalse(rdelete(target, split(path)))
        self.assertTrue(equals(before, target))

    @hypothesis.given(
        st.datetimes(max_value=datetime(9000, 1, 1)),
        st.integers(min_value=1, max_value=10**6),
    )
    def test_equals_date_instant(self, d, micros):
        self.assertTrue(equals(d, clone(d)))
        self.assertFalse(equals(d, d + timedelta(microseconds=micros)))


if __name__ == "__main__":
    unittest.main()
