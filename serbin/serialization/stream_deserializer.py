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

from typing import IO

from typing_extensions import override

from .deserializer import Deserializer
from .exceptions import OutOfDataError, SerializationError, TrailingDataError

DEFAULT_CHUNK_SIZE = 65536


class StreamDeserializer(Deserializer):
    """Implementation of Deserializer that reads sequentially from a binary file-like object.

    The stream is never seeked and never asked for more than `chunk_size` bytes at once, so a length read from corrupt
    data runs into the end of the stream instead of allocating the whole length up front. Bytes read while checking
    `is_empty` or by a read that ran out of data are kept and returned by the next read.
    """

    def __init__(self, stream: IO[bytes], *, owns_stream: bool = False, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError('chunk size must be positive')
        self._stream = stream
        self._owns_stream = owns_stream
        self._chunk_size = chunk_size
        self._pending = b''

    @override
    def finalize(self) -> None:
        if not self.is_empty():
            raise TrailingDataError('trailing data')

    @override
    def close(self) -> None:
        if self._owns_stream and not self._stream.closed:
            self._stream.close()

    def _read_chunk(self, n: int) -> bytes:
        try:
            chunk = self._stream.read(n)
        except (OSError, ValueError) as e:
            # XXX: ValueError is what a closed file raises
            raise SerializationError(f'could not read {n} bytes') from e
        # XXX: raw streams return None when no data is available yet, there is no waiting
        return chunk or b''

    @override
    def is_empty(self) -> bool:
        if not self._pending:
            self._pending = self._read_chunk(1)
        return not self._pending

    @override
    def read_byte(self) -> int:
        return self.read_bytes(1)[0]

    @override
    def read_bytes(self, n: int) -> bytes:
        if n < 0:
            raise ValueError('value cannot be negative')
        parts = [self._pending]
        size = len(self._pending)
        while size < n:
            chunk = self._read_chunk(min(n - size, self._chunk_size))
            if not chunk:
                self._pending = b''.join(parts)
                raise OutOfDataError('not enough bytes to read')
            parts.append(chunk)
            size += len(chunk)
        data = b''.join(parts)
        self._pending = data[n:]
        return data[:n]
