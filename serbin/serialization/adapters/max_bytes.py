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

from typing import TypeVar

from typing_extensions import override

from serbin.serialization.deserializer import Deserializer
from serbin.serialization.exceptions import SerializationError
from serbin.serialization.serializer import Serializer

from ..types import Buffer
from .generic_adapter import GenericDeserializerAdapter, GenericSerializerAdapter

S = TypeVar('S', bound=Serializer)
D = TypeVar('D', bound=Deserializer)


class MaxBytesExceededError(SerializationError):
    """ This error is raised when the adapted serializer reached its maximum bytes write/read.

    The budget is checked before touching the inner (de)serializer, so the bytes that would cross the limit are never
    written nor consumed. Even so, the value being processed was only partially handled and the whole operation
    should be considered failed, handlers should not try to use the same adapter again.
    """
    pass


class MaxBytesSerializer(GenericSerializerAdapter[S]):
    """Serializer adapter that refuses to write more than `max_bytes` in total.

    >>> se = MaxBytesSerializer(Serializer.build_bytes_serializer(), 3)
    >>> se.write_bytes(b'ab')
    >>> se.write_bytes(b'cd')
    Traceback (most recent call last):
    ...
    serbin.serialization.adapters.max_bytes.MaxBytesExceededError: cannot write 2 bytes, only 1 left
    >>> bytes(se.finalize())
    b'ab'
    """

    def __init__(self, serializer: S, max_bytes: int) -> None:
        super().__init__(serializer)
        self._bytes_left = max_bytes

    @property
    def bytes_left(self) -> int:
        return self._bytes_left

    def _check_update_exceeds(self, write_size: int) -> None:
        if write_size > self._bytes_left:
            raise MaxBytesExceededError(f'cannot write {write_size} bytes, only {self._bytes_left} left')
        self._bytes_left -= write_size

    @override
    def write_byte(self, data: int) -> None:
        self._check_update_exceeds(1)
        super().write_byte(data)

    @override
    def write_bytes(self, data: Buffer) -> None:
        data_view = memoryview(data)
        self._check_update_exceeds(len(data_view))
        super().write_bytes(data_view)


class MaxBytesDeserializer(GenericDeserializerAdapter[D]):
    """Deserializer adapter that refuses to read more than `max_bytes` in total.

    This is what protects a reader against absurd length prefixes on untrusted input.

    >>> de = MaxBytesDeserializer(Deserializer.build_bytes_deserializer(b'abcdef'), 4)
    >>> bytes(de.read_bytes(3))
    b'abc'
    >>> de.read_bytes(2)
    Traceback (most recent call last):
    ...
    serbin.serialization.adapters.max_bytes.MaxBytesExceededError: cannot read 2 bytes, only 1 left
    """

    def __init__(self, deserializer: D, max_bytes: int) -> None:
        super().__init__(deserializer)
        self._bytes_left = max_bytes

    @property
    def bytes_left(self) -> int:
        return self._bytes_left

    def _check_update_exceeds(self, read_size: int) -> None:
        if read_size > self._bytes_left:
            raise MaxBytesExceededError(f'cannot read {read_size} bytes, only {self._bytes_left} left')
        self._bytes_left -= read_size

    @override
    def read_byte(self) -> int:
        self._check_update_exceeds(1)
        return super().read_byte()

    @override
    def read_bytes(self, n: int) -> Buffer:
        self._check_update_exceeds(n)
        return super().read_bytes(n)
