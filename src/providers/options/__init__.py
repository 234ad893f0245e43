"""Subtitle options providers."""

from src.providers.options.yaml_options_provider import YamlOptionsProvider

__all__ = ["YamlOptionsProvider"]
