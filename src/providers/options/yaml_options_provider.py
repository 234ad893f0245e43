"""Subtitle options read from the ``subtitles:`` block of config.yaml.

The file is re-read on every call, so edits made between scheduled runs
take effect on the next run without a restart.  A missing file or a
missing block yields the model defaults, which disable both item types.
"""

from __future__ import annotations

import structlog
import yaml
from pydantic import ValidationError

from src.config.loader import load_config
from src.config.settings import Settings
from src.interfaces.options_provider import IOptionsProvider
from src.models.options import AcquisitionOptions
from src.utils.errors import ConfigurationError
from src.utils.logging import get_logger


class YamlOptionsProvider(IOptionsProvider):
    """Reads :class:`AcquisitionOptions` from a YAML config file.

    Parameters
    ----------
    config_path:
        Path to the YAML configuration file.
    section:
        Top-level key holding the subtitle options.
    settings:
        Settings used for the environment overrides applied by
        :func:`load_config`.
    """

    def __init__(
        self,
        config_path: str = "config/config.yaml",
        section: str = "subtitles",
        settings: Settings | None = None,
    ) -> None:
        self._config_path = config_path
        self._section = section
        self._settings = settings
        self._logger: structlog.BoundLogger = get_logger(__name__)

    def get_acquisition_options(self) -> AcquisitionOptions:
        try:
            config = load_config(self._config_path, settings=self._settings)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigurationError(
                message=f"Could not read {self._config_path}: {exc}",
                provider_name="yaml_options",
            ) from exc

        block = config.get(self._section) or {}
        if not isinstance(block, dict):
            raise ConfigurationError(
                message=f"'{self._section}' in {self._config_path} must be a mapping",
                provider_name="yaml_options",
            )

        try:
            options = AcquisitionOptions.model_validate(block)
        except ValidationError as exc:
            raise ConfigurationError(
                message=f"Invalid subtitle options in {self._config_path}: {exc}",
                provider_name="yaml_options",
            ) from exc

        self._logger.debug(
            "subtitle_options_loaded",
            config_path=self._config_path,
            enabled_types=options.enabled_item_types(),
            languages=list(options.download_languages),
        )
        return options
