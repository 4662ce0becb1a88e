"""Errors raised while loading brokersync settings from the environment."""

from __future__ import annotations


class ConfigurationError(RuntimeError):
    """Raised when a ``BROKERSYNC_*`` or ``CF_*`` value is present but unusable."""


class MissingConfigurationError(ConfigurationError):
    """Raised when required registry, proxy or Cloud Foundry settings are unset or blank."""
