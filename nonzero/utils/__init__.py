"""Utility functions for NonZero."""

from .helpers import generate_id, load_config, load_settings

__all__ = ['generate_id', 'load_config', 'load_settings']
