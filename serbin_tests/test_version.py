import re
from pathlib import Path

import serbin


def test_version_is_readable_by_setup() -> None:
    source = (Path(serbin.__file__).parent / 'version.py').read_text()
    match = re.search(r"^BASE_VERSION = '([^']+)'$", source, re.MULTILINE)
    assert match is not None
    assert match.group(1) == serbin.__version__
    assert re.fullmatch(r'\d+\.\d+\.\d+', serbin.__version__)
