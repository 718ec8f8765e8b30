import shutil
import tempfile
from typing import Any, Optional, TypeVar
from unittest import TestCase as _TestCase, main as ut_main

from structlog import get_logger

from serbin.conf import SerbinSettings
from serbin.conf.get_settings import _reset_settings_singleton
from serbin.serialization import Deserializer, Serializer
from serbin.shapes import Shape, make_shape

logger = get_logger()
main = ut_main

T = TypeVar('T')


class TestCase(_TestCase):
    # XXX: None means the global settings (the defaults, unless SERBIN_CONFIG_YAML is set)
    settings: Optional[SerbinSettings] = None

    def setUp(self) -> None:
        self.tmpdirs: list[str] = []
        self.log = logger.new()
        _reset_settings_singleton()

    def tearDown(self) -> None:
        self.clean_tmpdirs()
        _reset_settings_singleton()

    def mkdtemp(self) -> str:
        tmpdir = tempfile.mkdtemp()
        self.tmpdirs.append(tmpdir)
        return tmpdir

    def clean_tmpdirs(self) -> None:
        for tmpdir in self.tmpdirs:
            shutil.rmtree(tmpdir)
        self.tmpdirs.clear()

    def encode(self, type_or_shape: Any, value: Any, *, bulk_copy: bool = True) -> bytes:
        shape = self._get_shape(type_or_shape, bulk_copy=bulk_copy)
        serializer = Serializer.build_bytes_serializer()
        shape.serialize(serializer, value)
        return bytes(serializer.finalize())

    def decode(self, type_or_shape: Any, data: bytes, *, bulk_copy: bool = True) -> Any:
        shape = self._get_shape(type_or_shape, bulk_copy=bulk_copy)
        deserializer = Deserializer.build_bytes_deserializer(data)
        value = shape.deserialize(deserializer)
        deserializer.finalize()
        return value

    def assertRoundTrip(self, type_or_shape: Any, value: T, *, bulk_copy: bool = True) -> T:
        """Encode and decode the value, check it is equal to the original and return the decoded copy."""
        data = self.encode(type_or_shape, value, bulk_copy=bulk_copy)
        result = self.decode(type_or_shape, data, bulk_copy=bulk_copy)
        self.assertEqual(result, value)
        return result

    def _get_shape(self, type_or_shape: Any, *, bulk_copy: bool) -> Shape:
        if isinstance(type_or_shape, Shape):
            return type_or_shape
        return make_shape(type_or_shape, bulk_copy=bulk_copy)
