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

from __future__ import annotations

from types import UnionType
from typing import Any, get_args as _typing_get_args, get_origin as _typing_get_origin
from weakref import WeakValueDictionary

from typing_extensions import Self


def get_origin(t: Any, /) -> Any:
    """Extension of typing.get_origin to also work with classes that use ParametrizedMixin

    >>> get_origin(list[int]) is list
    True
    >>> get_origin(int) is None
    True
    """
    if isinstance(t, type) and issubclass(t, ParametrizedMixin):
        return getattr(t, '__origin__', None)
    return _typing_get_origin(t)


def get_args(t: Any, /) -> tuple[Any, ...]:
    """Extension of typing.get_args to also work with classes that use ParametrizedMixin

    >>> get_args(dict[str, bool])
    (<class 'str'>, <class 'bool'>)
    >>> get_args(int)
    ()
    """
    if isinstance(t, type) and issubclass(t, ParametrizedMixin):
        return getattr(t, '__args__', ())
    return _typing_get_args(t)


class ParametrizedMixin:
    """
    Mixin for classes that are subscripted with parameters that have to be known at runtime, like `Array[int, 3]`.

    Subscripting creates (and caches) a subclass that exposes the parameters through `__origin__` and `__args__`,
    the same attributes typing's generic aliases use, so `get_origin` and `get_args` above work on them. Unlike a
    typing alias the result is a real class, it can be instantiated and used with `isinstance`.

    >>> class Pair(ParametrizedMixin):
    ...     @classmethod
    ...     def __check_params__(cls, args):
    ...         if len(args) != 2:
    ...             raise TypeError(f'{cls.__name__}[...] expects 2 arguments; got {len(args)}')
    ...         return args
    ...
    >>> Pair[int, str] is Pair[int, str]
    True
    >>> get_origin(Pair[int, str]) is Pair
    True
    >>> get_args(Pair[int, str])
    (<class 'int'>, <class 'str'>)
    >>> get_args(Pair)
    ()
    >>> isinstance(Pair[int, str](), Pair)
    True
    >>> try:
    ...     Pair[int]
    ... except TypeError as e:
    ...     print(e)
    Pair[...] expects 2 arguments; got 1
    """

    # cache shared by all subclasses, maps (class, params) -> subclass, but doesn't keep subclasses alive if it has no
    # live references anymore, this keeps the cache from growing indefinitely
    __type_cache: WeakValueDictionary[tuple[type, tuple[Any, ...]], type[Self]] = WeakValueDictionary()

    @classmethod
    def __check_params__(cls, args: tuple[Any, ...], /) -> tuple[Any, ...]:
        """Validate and normalize the subscription parameters, subclasses are expected to override this."""
        return args

    @classmethod
    def __class_getitem__(cls, params: Any) -> type[Self]:
        if getattr(cls, '__origin__', None) is not None:
            raise TypeError(f'{cls.__name__}[...] is already parametrized')

        args = params if isinstance(params, tuple) else (params,)
        args = cls.__check_params__(args)

        cache = cls.__type_cache
        key = (cls, args)
        sub = cache.get(key)
        if sub is None:
            # subclass keeps the same name for clean repr
            sub = type(cls.__name__, (cls,), {})
            sub.__origin__ = cls  # type: ignore[attr-defined]
            sub.__args__ = args  # type: ignore[attr-defined]
            sub.__module__ = cls.__module__
            cache[key] = sub
        return sub


def is_subclass(cls: type, class_or_tuple: type | tuple[type, ...] | UnionType, /) -> bool:
    """ Reimplements issubclass() with support for recursive NewType classes.

    Normal behavior from `issubclass`:

    >>> is_subclass(bool, int)
    True
    >>> is_subclass(str, int)
    False

    But `is_subclass` also works when a NewType is given as arg 1:

    >>> from typing import NewType
    >>> N = NewType('N', int)
    >>> is_subclass(N, int)
    True
    >>> M = NewType('M', N)
    >>> is_subclass(M, int | str)
    True
    >>> is_subclass(M, bytes)
    False
    """
    while (super_type := getattr(cls, '__supertype__', None)) is not None:
        cls = super_type
    return issubclass(cls, class_or_tuple)
