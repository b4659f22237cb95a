# objutils init

import logging

from .objutils import (
    Cloneable,
    InvalidIntermediateError,
    InvalidTargetError,
    ObjUtilsError,
    ObjUtility,
    PathOptions,
    classify,
    clone,
    delprop,
    equals,
    getprop,
    hasprop,
    isfunc,
    islist,
    ismap,
    isnode,
    isobject,
    joinpath,
    rdelete,
    rget,
    rset,
    setprop,
    splitpath
)


logging.getLogger(__name__).addHandler(logging.NullHandler())


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
