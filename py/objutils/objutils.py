# Copyright (c) 2025 The objutils Authors. MIT LICENSE.
#
# ObjUtils
# ========
#
# A toolbox of commonly and repetitively needed routines for in-memory
# data: nested maps, lists, plain objects, dates, patterns and scalars.
#
# Main utilities
# - rget: get the value at a key path deep inside a node.
# - rset: set the value at a key path, creating intermediate maps.
# - rdelete: delete the value at a key path.
# - equals: structural deep equality.
# - clone: deep copy, deferring to a value's own clone() when present.
# - classify: fine-grained kind of a value.
#
# Minor utilities
# - isnode, ismap, islist, isobject, isfunc: identify value kinds.
# - getprop: safely get a property value by key.
# - hasprop: true if the node owns the property.
# - setprop: set a property value by key.
# - delprop: delete a property by key.
# - splitpath: split a path string into prefixed segments.
# - joinpath: join segments back into a path string.


from typing import *
from collections.abc import Mapping, MutableMapping
from datetime import date
import numbers
import logging
import copy
import re


log = logging.getLogger(__name__)


# Kinds returned by classify.
S_array = 'array'
S_boolean = 'boolean'
S_date = 'date'
S_function = 'function'
S_null = 'null'
S_number = 'number'
S_object = 'object'
S_regex = 'regex'
S_string = 'string'

# Option keys.
S_separator = 'separator'
S_prefix = 'prefix'

# General strings.
S_MT = ''
S_DT = '.'


# The standard undefined value for this language.
UNDEF = None

# Kinds that can hold named or indexed children.
CONTAINER_KINDS = (S_object, S_array)


class ObjUtilsError(Exception):
    """Base class for errors raised by objutils."""


class InvalidTargetError(ObjUtilsError, TypeError):
    """Raised when a write or delete needs a container and gets something else."""


class InvalidIntermediateError(ObjUtilsError, TypeError):
    """Raised when a path passes through an existing value that is not a container."""

    def __init__(self, path: str) -> None:
        super().__init__(
            'all parts of the path must be objects. '
            'cannot set a property on a non object at ' + path
        )
        self.path = path


@runtime_checkable
class Cloneable(Protocol):
    """A value that knows how to copy itself."""

    def clone(self) -> Any:
        ...


class PathOptions:
    """
    Options for the path utilities. A plain dict with the same keys is
    accepted anywhere a PathOptions is.
    """
    def __init__(
        self,
        separator: str = S_DT,        # Splits the path into segments.
        prefix: str = S_MT            # Prepended to each segment before lookup.
    ) -> None:
        self.separator = separator
        self.prefix = prefix

    def __repr__(self) -> str:
        return f'PathOptions(separator={self.separator!r}, prefix={self.prefix!r})'


def isnode(val: Any = UNDEF) -> bool:
    "Value is a node - a container with named (map, object) or indexed (list) children."
    return classify(val) in CONTAINER_KINDS


def ismap(val: Any = UNDEF) -> bool:
    "Value is a mapping."
    return isinstance(val, Mapping)


def islist(val: Any = UNDEF) -> bool:
    "Value is a list or tuple."
    return isinstance(val, (list, tuple))


def isobject(val: Any = UNDEF) -> bool:
    "Value is a plain object: not a map, but has instance attributes."
    return S_object == classify(val) and not ismap(val)


def isfunc(val: Any = UNDEF) -> bool:
    "Value is a function."
    return S_function == classify(val)


def classify(val: Any = UNDEF) -> str:
    """
    Determine the detailed kind of a value. Values outside the known
    kinds are named by their type, verbatim.
    """
    if val is UNDEF:
        return S_null
    if isinstance(val, bool):
        return S_boolean
    if isinstance(val, numbers.Number):
        return S_number
    if isinstance(val, str):
        return S_string
    if isinstance(val, (list, tuple)):
        return S_array
    if isinstance(val, re.Pattern):
        return S_regex
    if isinstance(val, date):
        return S_date
    if isinstance(val, Mapping):
        return S_object
    if callable(val):
        return S_function
    if hasattr(val, '__dict__'):
        return S_object
    return type(val).__name__


def _index(key: Any) -> Optional[int]:
    # Non-negative integer index, or None.
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key if 0 <= key else None
    # Canonical decimal strings only: "1", not "01" or non-ASCII digits.
    if isinstance(key, str) and key.isascii() and key.isdecimal() and str(int(key)) == key:
        return int(key)
    return None


def getprop(val: Any = UNDEF, key: Any = UNDEF, alt: Any = UNDEF) -> Any:
    """
    Safely get a property of a node. Undefined arguments return undefined.
    If the key is not found, return the alternative value.
    """
    if val is UNDEF or key is UNDEF:
        return alt

    out = UNDEF

    if ismap(val):
        out = val.get(key, UNDEF)

    elif islist(val):
        i = _index(key)
        if i is not None and i < len(val):
            out = val[i]

    elif isobject(val) and isinstance(key, str):
        out = getattr(val, key, UNDEF)

    if out is UNDEF:
        return alt

    return out


def hasprop(val: Any = UNDEF, key: Any = UNDEF) -> bool:
    "Node val owns a property named key."
    if ismap(val):
        return key in val
    elif islist(val):
        i = _index(key)
        return i is not None and i < len(val)
    elif isobject(val) and isinstance(key, str):
        return key in vars(val)
    return False


def setprop(parent: Any, key: Any, val: Any):
    """
    Set a property on a map, list or object.
    - For lists, the key must be an index no greater than the list length;
      the list length itself appends.
    """
    if isinstance(parent, MutableMapping):
        parent[key] = val

    elif isinstance(parent, list):
        i = _index(key)
        if i is None or len(parent) < i:
            raise InvalidTargetError(
                f'cannot set property {key!r} on a list of length {len(parent)}')
        if i == len(parent):
            parent.append(val)
        else:
            parent[i] = val

    elif isobject(parent) and isinstance(key, str):
        setattr(parent, key, val)

    else:
        raise InvalidTargetError(
            f'cannot set property {key!r} on a {classify(parent)}')

    return parent


def delprop(parent: Any, key: Any) -> bool:
    """
    Delete an owned property from a map, list or object.
    For lists, the element at the index is removed and remaining elements shift down.
    """
    if not hasprop(parent, key):
        return False

    if isinstance(parent, MutableMapping):
        del parent[key]
    elif isinstance(parent, list):
        del parent[_index(key)]
    elif isobject(parent):
        delattr(parent, key)
    else:
        return False

    return True


def _options(options: Any) -> Tuple[str, str]:
    # An empty separator falls back to the default.
    separator = getprop(options, S_separator) or S_DT
    prefix = getprop(options, S_prefix) or S_MT
    return separator, prefix


def splitpath(path: Any, options: Any = UNDEF) -> List[str]:
    "Split a path into segments, each with the prefix prepended."
    separator, prefix = _options(options)

    if islist(path):
        parts = list(path)
    else:
        parts = str(path).split(separator)

    return [prefix + str(part) for part in parts]


def joinpath(parts: Iterable[Any], options: Any = UNDEF) -> str:
    "Join path segments with the separator. Segments are used as given."
    separator, _prefix = _options(options)
    return separator.join(str(part) for part in parts)


def rget(target: Any, path: Any, options: Any = UNDEF, alt: Any = UNDEF) -> Any:
    """
    Recursive property getter. Missing paths, and paths through
    non-container values, give the alternative value (None by default).
    """
    val = target
    for part in splitpath(path, options):
        if not isnode(val):
            return alt
        val = getprop(val, part)

    if val is UNDEF:
        return alt

    return val


def rset(target: Any, path: Any, value: Any, options: Any = UNDEF) -> None:
    """
    Recursive property setter. Missing intermediate properties are
    created as empty maps; the final property is always overwritten.

    NOTE: not atomic. A failure partway leaves already created
    intermediates in place.
    """
    if not isnode(target):
        raise InvalidTargetError(f'target must be an object, not {classify(target)}')

    parts = splitpath(path, options)
    attr = parts.pop()

    node = target
    for part in parts:
        if not hasprop(node, part):
            log.debug('rset: creating map at %r in path %r', part, path)
            setprop(node, part, {})
        elif not isnode(getprop(node, part)):
            raise InvalidIntermediateError(joinpath(parts + [attr], options))
        node = getprop(node, part)

    setprop(node, attr, value)


def rdelete(target: Any, path: Any, options: Any = UNDEF) -> bool:
    """
    Recursive property deleter. Returns True if a property was deleted.
    The prefix applies to every segment, including the last, as in rset.
    """
    if not isnode(target):
        raise InvalidTargetError(f'target must be an object, not {classify(target)}')

    parts = splitpath(path, options)
    attr = parts.pop()

    node = target
    for part in parts:
        node = getprop(node, part) if hasprop(node, part) else UNDEF
        if not isnode(node):
            log.debug('rdelete: no container at %r in path %r', part, path)
            return False

    return delprop(node, attr)


def _ownprops(val: Any) -> Dict[Any, Any]:
    # Own properties, omitting undefined values.
    props = val.items() if ismap(val) else vars(val).items()
    return {k: v for k, v in props if v is not UNDEF}


def equals(a: Any, b: Any) -> bool:
    """
    Deep structural equality of maps, lists, objects, dates, patterns
    and scalars. Object classes are ignored, and a property with an
    undefined value is the same as a missing property.
    """
    if a is b:
        return True

    kind = classify(a)
    if kind != classify(b):
        return False

    if S_array == kind:
        return len(a) == len(b) and all(equals(x, y) for x, y in zip(a, b))

    elif S_regex == kind:
        return a.pattern == b.pattern and a.flags == b.flags

    elif S_object == kind:
        aprops = _ownprops(a)
        bprops = _ownprops(b)
        if aprops.keys() != bprops.keys():
            return False
        return all(equals(v, bprops[k]) for k, v in aprops.items())

    elif S_function == kind:
        return False

    try:
        return bool(a == b)
    except (TypeError, ValueError):
        return False


def _blank(cls: type) -> Any:
    # An uninitialised instance of cls. Python level __new__ overrides are
    # skipped, so no constructor arguments are needed.
    for base in cls.__mro__:
        new = vars(base).get('__new__')
        if new is not None and not isinstance(new, staticmethod):
            return new(cls)
    return object.__new__(cls)


def clone(val: Any = UNDEF):
    """
    Clone (deep copy) a data structure. Clones are separate values that
    still compare True with equals().

    If an object has its own clone() method, it is used instead.
    NOTE: functions and unknown kinds are copied by reference, *not* cloned.
    """
    kind = classify(val)

    if S_array == kind:
        items = [clone(item) for item in val]
        if isinstance(val, list):
            # Shallow copy keeps the list subclass and its instance state.
            cpy = copy.copy(val)
            cpy[:] = items
            return cpy
        # Named tuples take their fields positionally.
        return val._make(items) if hasattr(val, '_make') else type(val)(items)

    elif S_regex == kind:
        return re.compile(val.pattern, val.flags)

    elif S_date == kind:
        return copy.copy(val)

    elif S_object == kind:
        if isinstance(val, Cloneable) and callable(val.clone):
            log.debug('clone: using own clone() of %s', type(val).__name__)
            return val.clone()

        if isinstance(val, dict):
            # Shallow copy keeps the dict subclass and its instance state.
            cpy = copy.copy(val)
            for k, v in val.items():
                cpy[k] = clone(v)
            return cpy

        if ismap(val):
            return type(val)({k: clone(v) for k, v in val.items()})

        cpy = _blank(type(val))
        for k, v in vars(val).items():
            cpy.__dict__[k] = clone(v)
        return cpy

    return val


# Create an ObjUtility class with all utility functions as attributes
class ObjUtility:
    def __init__(self):
        self.classify = classify
        self.clone = clone
        self.delprop = delprop
        self.equals = equals
        self.getprop = getprop
        self.hasprop = hasprop
        self.isfunc = isfunc
        self.islist = islist
        self.ismap = ismap
        self.isnode = isnode
        self.isobject = isobject
        self.joinpath = joinpath
        self.rdelete = rdelete
        self.rget = rget
        self.rset = rset
        self.setprop = setprop
        self.splitpath = splitpath


__all__ = [
    'Cloneable',
    'InvalidIntermediateError',
    'InvalidTargetError',
    'ObjUtilsError',
    'ObjUtility',
    'PathOptions',
    'classify',
    'clone',
    'delprop',
    'equals',
    'getprop',
    'hasprop',
    'isfunc',
    'islist',
    'ismap',
    'isnode',
    'isobject',
    'joinpath',
    'rdelete',
    'rget',
    'rset',
    'setprop',
    'splitpath',
]
