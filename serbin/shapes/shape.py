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

from abc import ABC, abstractmethod
from collections.abc import Collection
from typing import Any, Generic, NamedTuple, TypeVar, final

from typing_extensions import Self

from serbin.serialization import Deserializer, Serializer
from serbin.serialization.encoding.native import decode_native_array, encode_native_array
from serbin.shapes.utils import TypeAliasMap, TypeToShapeMap, get_aliased_type, get_usable_origin_type

T = TypeVar('T')


class Shape(ABC, Generic[T]):
    """ This class is used to model a type with a known type signature and how it will be (de)serialized.

    A shape tree is resolved once from a type annotation, and then used for any number of values: there is no type
    dispatch when a value is processed, every node already knows the shapes of its children.

    The public methods are final, subclasses implement the `_`-prefixed counterparts.
    """

    class TypeMap(NamedTuple):
        alias_map: TypeAliasMap
        shapes_map: TypeToShapeMap
        # whether containers of trivially copyable items process them in a single block
        bulk_copy: bool = True

    # XXX: subclasses must override this if they need any properties
    __slots__ = ()

    # XXX: subclasses must initialize this property
    _is_hashable: bool

    @final
    @staticmethod
    def from_type(type_: type[T], /, *, type_map: TypeMap) -> Shape[T]:
        """ Instantiate a Shape instance from a type signature using the given maps.

        A `shapes_map` associates concrete types to concrete Shape classes, while an `alias_map` associates types with
        substitute types to use instead. Raises `UnsupportedTypeError` when the type has no shape.
        """
        usable_origin = get_usable_origin_type(type_, type_map=type_map, _verbose=False)
        shape_class = type_map.shapes_map[usable_origin]
        aliased_type = get_aliased_type(type_, type_map.alias_map)
        return shape_class._from_type(aliased_type, type_map=type_map)

    @classmethod
    def _from_type(cls, type_: type[T], /, *, type_map: TypeMap) -> Self:
        """ Instantiate a Shape instance from a type signature.

        The implementation is expected to inspect the given type's origin and args to check for compatibility and to
        call `Shape.from_type` for its arguments, forwarding the given `type_map`, this is the case for every compound
        shape, like OptionalShape or DictShape.
        """
        # XXX: a Shape that is only meant for local use does not need to implement _from_type
        raise TypeError(f'{cls} is not compatible with use in a Shape.TypeMap')

    @final
    def is_hashable(self) -> bool:
        """ Indicates whether the values of this shape are expected to be hashable.

        This is used to prevent unhashable types from being used as keys in dicts or members in sets."""
        return self._is_hashable

    @property
    def struct_format(self) -> str | None:
        """ The packed `struct` format of a value of this shape, only for trivially copyable shapes.

        The format has one code per leaf value, with no repeat counts, so `len(struct_format)` is the number of values
        that `_flatten` produces.
        """
        return None

    @final
    def is_trivially_copyable(self) -> bool:
        """ Whether values of this shape can be copied as raw bytes, with no per-value logic."""
        return self.struct_format is not None

    def fixed_size(self) -> int | None:
        """ The size in bytes of every value of this shape, or None if it depends on the value."""
        return None

    def children(self) -> tuple[Shape, ...]:
        """ The shapes this shape delegates to, in wire order."""
        return ()

    def __repr__(self) -> str:
        return f'{type(self).__name__}({", ".join(repr(child) for child in self.children())})'

    @final
    def check_value(self, value: T, /) -> None:
        """ Raise a TypeError (or ValueError for out of range numbers) if the value is not compatible.

        A value being compatible is more than just having the correct instance, for example if the value is a dict, all
        the dict's keys and values must be checked for compatibility.
        """
        # XXX: subclasses must implement Shape._check_value, not Shape.check_value
        self._check_value(value, deep=True)

    @final
    def serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Serialize a value instance according to the signature that was abstracted.

        Serialization includes calling check_value while the value is being serialized, so calling check_value before
        calling serialize is not needed.
        """
        # XXX: subclasses must implement Shape._serialize, not Shape.serialize
        self._check_value(value, deep=False)
        self._serialize(serializer, value)

    @final
    def deserialize(self, deserializer: Deserializer, /) -> T:
        """ Deserialize a value instance according to the signature that was abstracted.

        Deserialization is expected to produce valid values, the bytes themselves are only validated where a pattern
        can be invalid (presence flags, enum values, character data).
        """
        # XXX: subclasses must implement Shape._deserialize, not Shape.deserialize
        return self._deserialize(deserializer)

    @final
    def serialize_many(self, serializer: Serializer, values: Collection[T], /, *, bulk: bool) -> None:
        """ Serialize all the values back-to-back, with no count.

        When `bulk=True` and this shape is trivially copyable, all values are packed and written in a single block.
        The result is byte-identical to serializing each value.
        """
        struct_format = self.struct_format
        if bulk and struct_format is not None:
            flat_values: list[Any] = []
            for value in values:
                self._check_value(value, deep=True)
                flat_values.extend(self._flatten(value))
            encode_native_array(serializer, flat_values, format=struct_format, count=len(values))
        else:
            for value in values:
                self.serialize(serializer, value)

    @final
    def deserialize_many(self, deserializer: Deserializer, count: int, /, *, bulk: bool) -> list[T]:
        """ Deserialize `count` values written back-to-back, the inverse of `serialize_many`.
        """
        struct_format = self.struct_format
        if bulk and struct_format is not None:
            items = decode_native_array(deserializer, format=struct_format, count=count)
            return [self._unflatten(item) for item in items]
        return [self.deserialize(deserializer) for _ in range(count)]

    @final
    def to_bytes(self, value: T, /) -> bytes:
        """ Shortcut to quickly convert a value T to `bytes` and avoid using the serialization system.
        """
        serializer = Serializer.build_bytes_serializer()
        self.serialize(serializer, value)
        return bytes(serializer.finalize())

    @final
    def from_bytes(self, data: bytes, /) -> T:
        """ Shortcut to quickly parse a value T from `bytes`, all of the data must be consumed.
        """
        deserializer = Deserializer.build_bytes_deserializer(data)
        value = self.deserialize(deserializer)
        deserializer.finalize()
        return value

    @abstractmethod
    def _check_value(self, value: T, /, *, deep: bool) -> None:
        """ Inner implementation of `Shape.check_value`.

        If `deep=True` then the check should recurse for compound types (like lists/maps) to check each value. It is
        expected that `deep=False` is used in a context where the recursion would be made externally (by `serialize`
        on the children), so to avoid checking the same value multiple times `deep=False` is used.
        """
        raise NotImplementedError

    @abstractmethod
    def _serialize(self, serializer: Serializer, value: T, /) -> None:
        """ Inner implementation of `serialize`, you can assume that the give value has been "shallow checked".

        When implementing the serialization with compound encoders, `Shape.serialize` should be passed as an `Encoder`
        instead of `Shape._serialize`, that way the next `_serialize` implementation can assume that the value was
        checked.
        """
        raise NotImplementedError

    @abstractmethod
    def _deserialize(self, deserializer: Deserializer, /) -> T:
        """ Inner implementation of `deserialize`."""
        raise NotImplementedError

    # these only need to be implemented by trivially copyable shapes

    def _flatten(self, value: T, /) -> tuple[Any, ...]:
        """ Convert a value into the leaf values that `struct_format` packs."""
        raise TypeError(f'{type(self).__name__} is not trivially copyable')

    def _unflatten(self, items: tuple[Any, ...], /) -> T:
        """ Inverse of `_flatten`."""
        raise TypeError(f'{type(self).__name__} is not trivially copyable')
