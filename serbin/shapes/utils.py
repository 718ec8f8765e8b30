# Copyright 2025 Hathor Labs
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from collections.abc import Hashable, Mapping
from dataclasses import dataclass, is_dataclass
from enum import IntEnum
from functools import reduce
from operator import or_
from types import NoneType, UnionType
from typing import TYPE_CHECKING, Any, Iterator, NamedTuple, TypeAlias, TypeVar, Union

from structlog import get_logger

from serbin.exception import UnsupportedTypeError
from serbin.types import Record
from serbin.utils.typing import ParametrizedMixin, get_args, get_origin, is_subclass

if TYPE_CHECKING:
    from serbin.shapes.shape import Shape


logger = get_logger()

T = TypeVar('T')
TypeAliasMap: TypeAlias = Mapping[Any, Any]
TypeToShapeMap: TypeAlias = Mapping[Any, type['Shape']]

# base classes that user types extend to opt into a shape, checked in this order
_EXTENSION_BASES: tuple[type, ...] = (Record, IntEnum)


def is_union(type_: Any) -> bool:
    """ Whether the given annotation is a union, either written as `A | B` or as `Union[A, B]`.

    >>> is_union(int | None), is_union(Union[int, str]), is_union(int)
    (True, True, False)
    """
    return get_origin(type_) in (Union, UnionType)


def get_origin_classes(type_: Any) -> Iterator[Any]:
    """ This util function is useful to generalize over a type T and unions A | B.

    A simple type T would be yielded directly, and an union will yield each type in it. Only origin types are yielded,
    arguments are discarded.

    >>> list(get_origin_classes(int))
    [<class 'int'>]
    >>> list(get_origin_classes(set[int] | dict[int, str]))
    [<class 'set'>, <class 'dict'>]
    """
    if is_union(type_):
        for arg_type in get_args(type_):
            yield get_origin(arg_type) or arg_type
    else:
        yield get_origin(type_) or type_


def is_origin_hashable(type_: Any) -> bool:
    """ Checks whether the given type signature satisfies `collections.abc.Hashable`.

    This check ignores type arguments, but takes into account all types of an union.

    >>> is_origin_hashable(int | str | bytes)
    True
    >>> is_origin_hashable(frozenset[int])
    True
    >>> is_origin_hashable(set[int])
    False
    >>> is_origin_hashable(list)
    False

    Even though list is not hashable, a frozenset[list] is, simply because arguments are ignored:
    >>> is_origin_hashable(frozenset[list])
    True

    Callers should recurse on their own if they need to deal with type arguments. In practice when building a Shape
    from a type the recursion of the build process will deal with that.
    """
    return all(_is_origin_hashable(origin_class) for origin_class in get_origin_classes(type_))


def _is_origin_hashable(origin_class: Any) -> bool:
    """ Inner implementation of is_origin_hashable, only checks a single origin class. """
    if origin_class is NoneType:
        return True
    try:
        return is_subclass(origin_class, Hashable)
    except TypeError:
        return False


def pretty_type(type_: Any) -> str:
    """ Shows a cleaner string representation for a type.

    >>> pretty_type(int), pretty_type(None), pretty_type(list[int])
    ('int', 'None', 'list[int]')
    """
    if type_ is NoneType or type_ is None:
        return 'None'
    elif hasattr(type_, '__args__'):
        return str(type_)
    else:
        return getattr(type_, '__name__', repr(type_))


# XXX: _verbose argument is used to help with doctest
def get_aliased_type(type_: Any, alias_map: TypeAliasMap, *, _verbose: bool = True) -> Any:
    """ Map a type to its usable alias including the type's arguments.

    For example, abstract collections are mapped to concrete ones in the default alias map, wherever they appear:

    >>> from collections.abc import Sequence
    >>> from serbin.shapes import DEFAULT_TYPE_ALIAS_MAP as alias_map
    >>> get_aliased_type(dict[str, Sequence[bytearray]], alias_map, _verbose=False)
    dict[str, list[bytes]]
    >>> get_aliased_type(int, alias_map, _verbose=False)
    serbin.types.Int64
    >>> get_aliased_type(tuple[()], alias_map, _verbose=False)
    tuple[()]
    """
    new_type, replaced = _get_aliased_type(type_, alias_map)
    if replaced and _verbose:
        logger.debug('type replaced', old=pretty_type(type_), new=pretty_type(new_type))
    return new_type


def _get_aliased_type(type_: Any, alias_map: TypeAliasMap) -> tuple[Any, bool]:
    """ Implementation of get_aliased_type with indication of whether there was a replacement.
    """
    # XXX: parametrized classes are kept as given, their arguments are aliased when their own shape is resolved
    if isinstance(type_, type) and issubclass(type_, ParametrizedMixin):
        return type_, False

    origin_type = get_origin(type_) or type_
    replaced = False

    # XXX: special case, replace typing.Union with types.UnionType
    if origin_type is Union:
        aliased_origin = UnionType
    elif isinstance(origin_type, Hashable) and origin_type in alias_map:
        aliased_origin = alias_map[origin_type]
        replaced = True
    else:
        aliased_origin = origin_type

    if not hasattr(type_, '__args__'):
        # normal case when there aren't type arguments
        return aliased_origin, replaced

    type_args = get_args(type_)
    if not type_args:
        # XXX: tuple[()] is the only annotation that has an empty __args__
        return aliased_origin[()], replaced

    # use _get_aliased_type for recursion so we don't log multiple times when a replacement happens
    aliased_args_replaced = [_get_aliased_type(arg, alias_map) for arg in type_args]
    aliased_args = [arg for arg, _ in aliased_args_replaced]
    replaced |= any(arg_replaced for _, arg_replaced in aliased_args_replaced)

    # XXX: special case, UnionType can't be instantiated directly, this is the simplest way to do it
    if aliased_origin is UnionType:
        return reduce(or_, aliased_args), replaced

    assert hasattr(aliased_origin, '__class_getitem__'), 'we must have an indexable class at this point'
    return aliased_origin[*aliased_args], replaced


def get_usable_origin_type(type_: Any, /, *, type_map: 'Shape.TypeMap', _verbose: bool = True) -> Any:
    """ The purpose of this function is to map a given type into a type that is usable in a Shape.TypeMap

    It takes into account type-aliasing according to Shape.TypeMap.alias_map. If the given type cannot be used in the
    given type_map, an UnsupportedTypeError exception will be raised.

    The returned type is such that it is guaranteed to exist in `type_map.shapes_map`:

    >>> from collections.abc import Sequence
    >>> from serbin.shapes import DEFAULT_TYPE_MAP as default_type_map
    >>> get_usable_origin_type(Sequence[int], type_map=default_type_map, _verbose=False)
    <class 'list'>
    >>> class Point(NamedTuple):
    ...     x: int
    ...     y: int
    >>> get_usable_origin_type(Point, type_map=default_type_map, _verbose=False) is NamedTuple
    True
    >>> get_usable_origin_type(complex, type_map=default_type_map, _verbose=False)
    Traceback (most recent call last):
    ...
    serbin.exception.UnsupportedTypeError: type complex is not supported by any Shape class
    """
    if isinstance(type_, str):
        raise UnsupportedTypeError('string annotations are not supported')

    shapes_map = type_map.shapes_map
    aliased_type = get_aliased_type(type_, type_map.alias_map, _verbose=_verbose)
    origin_aliased_type = get_origin(aliased_type) or aliased_type

    if is_union(aliased_type):
        # XXX: only `T | None` is supported, any other union is indexed by its args so it will not be found
        args = get_args(aliased_type)
        if NoneType not in args:
            origin_aliased_type = args

    if isinstance(origin_aliased_type, Hashable) and origin_aliased_type in shapes_map:
        return origin_aliased_type

    if isinstance(type_, type):
        if NamedTuple in shapes_map and NamedTuple in getattr(type_, '__orig_bases__', tuple()):
            return NamedTuple
        for base in _EXTENSION_BASES:
            if base in shapes_map and issubclass(type_, base):
                return base
        if dataclass in shapes_map and is_dataclass(type_):
            return dataclass

    raise UnsupportedTypeError(f'type {pretty_type(type_)} is not supported by any Shape class')
