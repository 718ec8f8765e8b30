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

r"""
The codec surface: a `Writer` turns values into bytes and a `Reader` turns bytes back into values.

The caller always says which type is being written or read, that type (an annotation like `list[int | None]`) is
resolved once into a shape tree which decides the byte layout. Nothing about the type is written to the stream, so
a value must be read back with the same type it was written with.

>>> from serbin.types import Int32
>>> data = dumps(list[Int32 | None], [None, 456, 7890])
>>> loads(list[Int32 | None], data)
[None, 456, 7890]

Values can be written one after the other and read back in the same order:

>>> se = Serializer.build_bytes_serializer()
>>> _ = Writer(se).write(str, 'Club').write(bool, True)
>>> reader = Reader(Deserializer.build_bytes_deserializer(se.finalize()))
>>> reader.read_many(str, bool)
('Club', True)
>>> reader.is_empty()
True
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType
from typing import Any, Optional, TypeVar, Union

from structlog import get_logger
from typing_extensions import Self

from serbin.conf import SerbinSettings, get_global_settings
from serbin.serialization import Deserializer, SerializationError, Serializer, WriteError
from serbin.shapes import Shape, make_shape

logger = get_logger()

T = TypeVar('T')

PathLike = Union[str, Path]


def _resolve_shape(type_or_shape: Any, *, bulk_copy: bool) -> Shape:
    if isinstance(type_or_shape, Shape):
        return type_or_shape
    return make_shape(type_or_shape, bulk_copy=bulk_copy)


class Writer:
    """Write handle over a byte sink.

    A writer built with `Writer.open` owns its file and closes it on `close()`, it can be used as a context manager so
    the file is closed also when a write fails. There is no rollback, whatever was written before a failure stays in
    the file.
    """

    def __init__(
        self,
        serializer: Serializer,
        *,
        settings: Optional[SerbinSettings] = None,
        bulk_copy: Optional[bool] = None,
    ) -> None:
        if bulk_copy is None:
            bulk_copy = (settings or get_global_settings()).BULK_COPY
        self._serializer = serializer
        self._bulk_copy = bulk_copy
        self.log = logger.new()

    @classmethod
    def open(cls, path: PathLike, *, settings: Optional[SerbinSettings] = None) -> Self:
        """Open a file for writing, truncating it."""
        settings = settings or get_global_settings()
        try:
            file = open(path, 'wb', buffering=settings.STREAM_BUFFER_SIZE)
        except OSError as e:
            raise WriteError(f'could not open {path} for writing') from e
        serializer = Serializer.build_stream_serializer(file, owns_stream=True)
        writer = cls(serializer.with_optional_max_bytes(settings.MAX_WRITE_BYTES), settings=settings)
        writer.log = writer.log.bind(path=str(path))
        writer.log.debug('writer opened')
        return writer

    @property
    def serializer(self) -> Serializer:
        return self._serializer

    @property
    def bulk_copy(self) -> bool:
        return self._bulk_copy

    def write(self, type_: Any, value: Any, /) -> Self:
        """Write a value of the given type (or an already resolved `Shape`) and return this writer for chaining."""
        shape = _resolve_shape(type_, bulk_copy=self._bulk_copy)
        shape.serialize(self._serializer, value)
        return self

    def close(self) -> None:
        self._serializer.close()
        self.log.debug('writer closed')

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Union[type[BaseException], None],
        exc_value: Union[BaseException, None],
        traceback: Union[TracebackType, None],
    ) -> None:
        self.close()


class Reader:
    """Read handle over a byte source.

    A reader built with `Reader.open` owns its file and closes it on `close()`, it can be used as a context manager so
    the file is closed also when a read fails. A failed read leaves the source where the failure happened.
    """

    def __init__(
        self,
        deserializer: Deserializer,
        *,
        settings: Optional[SerbinSettings] = None,
        bulk_copy: Optional[bool] = None,
    ) -> None:
        if bulk_copy is None:
            bulk_copy = (settings or get_global_settings()).BULK_COPY
        self._deserializer = deserializer
        self._bulk_copy = bulk_copy
        self.log = logger.new()

    @classmethod
    def open(cls, path: PathLike, *, settings: Optional[SerbinSettings] = None) -> Self:
        """Open a file for reading."""
        settings = settings or get_global_settings()
        try:
            file = open(path, 'rb', buffering=settings.STREAM_BUFFER_SIZE)
        except OSError as e:
            raise SerializationError(f'could not open {path} for reading') from e
        deserializer = Deserializer.build_stream_deserializer(
            file,
            owns_stream=True,
            chunk_size=settings.STREAM_BUFFER_SIZE,
        )
        reader = cls(deserializer.with_optional_max_bytes(settings.MAX_READ_BYTES), settings=settings)
        reader.log = reader.log.bind(path=str(path))
        reader.log.debug('reader opened')
        return reader

    @property
    def deserializer(self) -> Deserializer:
        return self._deserializer

    @property
    def bulk_copy(self) -> bool:
        return self._bulk_copy

    def read(self, type_: Any, /) -> Any:
        """Read a value of the given type (or an already resolved `Shape`)."""
        shape = _resolve_shape(type_, bulk_copy=self._bulk_copy)
        return shape.deserialize(self._deserializer)

    def read_many(self, *types: Any) -> tuple[Any, ...]:
        """Read one value for each of the given types, in order."""
        return tuple(self.read(type_) for type_ in types)

    def is_empty(self) -> bool:
        return self._deserializer.is_empty()

    def finalize(self) -> None:
        """Check that every byte of the source was read, raises `TrailingDataError` otherwise."""
        self._deserializer.finalize()

    def close(self) -> None:
        self._deserializer.close()
        self.log.debug('reader closed')

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: Union[type[BaseException], None],
        exc_value: Union[BaseException, None],
        traceback: Union[TracebackType, None],
    ) -> None:
        self.close()


def dumps(type_: Any, value: Any, /, *, settings: Optional[SerbinSettings] = None) -> bytes:
    """Encode a single value of the given type into bytes."""
    settings = settings or get_global_settings()
    serializer = Serializer.build_bytes_serializer()
    Writer(serializer.with_optional_max_bytes(settings.MAX_WRITE_BYTES), settings=settings).write(type_, value)
    return bytes(serializer.finalize())


def loads(type_: Any, data: bytes, /, *, settings: Optional[SerbinSettings] = None) -> Any:
    """Decode a single value of the given type, all of the data must be consumed."""
    settings = settings or get_global_settings()
    deserializer = Deserializer.build_bytes_deserializer(data)
    reader = Reader(deserializer.with_optional_max_bytes(settings.MAX_READ_BYTES), settings=settings)
    value = reader.read(type_)
    reader.finalize()
    return value


def dump(type_: Any, value: Any, path: PathLike, /, *, settings: Optional[SerbinSettings] = None) -> None:
    """Write a single value of the given type to a file, truncating it."""
    with Writer.open(path, settings=settings) as writer:
        writer.write(type_, value)


def load(type_: Any, path: PathLike, /, *, settings: Optional[SerbinSettings] = None) -> Any:
    """Read a single value of the given type from a file, all of the file must be consumed."""
    with Reader.open(path, settings=settings) as reader:
        value = reader.read(type_)
        reader.finalize()
    return value
