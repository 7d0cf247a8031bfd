from app.core.configs.app import AppConfig, app_config

__all__ = ['AppConfig', 'app_config']
