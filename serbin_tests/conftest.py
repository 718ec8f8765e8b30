import os

import pytest

from serbin.conf.get_settings import CONFIG_YAML_ENV_VAR, _reset_settings_singleton

# tests always start from the default settings, the ones that need a yaml set it themselves
os.environ.pop(CONFIG_YAML_ENV_VAR, None)


@pytest.fixture(autouse=True)
def reset_settings():
    _reset_settings_singleton()
    yield
    _reset_settings_singleton()
