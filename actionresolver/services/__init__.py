"""Services: JSON config storage and YAML catalog loading."""

from actionresolver.services.config_service import ConfigService

__all__ = ["ConfigService"]
