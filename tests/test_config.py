import importlib
import warnings

from storefront.core import config
from storefront.core.config import Settings


def test_settings_read_dotenv_and_ignore_unknown_keys():
    assert Settings.model_config["env_file"] == ".env"
    assert Settings.model_config["extra"] == "ignore"

    settings = Settings(_env_file=None, UNRELATED_OPTION="x", LOG_LEVEL="DEBUG")

    assert settings.LOG_LEVEL == "DEBUG"
    assert not hasattr(settings, "UNRELATED_OPTION")


def test_config_module_loads_without_deprecation_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error", DeprecationWarning)
        importlib.reload(config)

    assert config.settings.API_V1_PREFIX == "/api/v1"
