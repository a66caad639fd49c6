"""
/**
 * @file image_translator/config/__init__.py
 * @description 配置模块导出。
 */
"""

from .settings import (
    CONFIG_LOCAL_PATH,
    CONFIG_PATH,
    ClientConfig,
    Settings,
    load_settings,
    reload_settings,
)

__all__ = ["ClientConfig", "Settings", "load_settings", "reload_settings", "CONFIG_PATH", "CONFIG_LOCAL_PATH"]
