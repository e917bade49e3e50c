from .settings import Settings, check_production_settings, get_settings, reload_settings

__all__ = ["Settings", "check_production_settings", "get_settings", "reload_settings"]
