"""Environment-driven configuration."""

from common.config.settings import FormGenSettings

__all__ = ["FormGenSettings"]
