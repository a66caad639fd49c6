"""
/**
 * @file image_translator/utils/__init__.py
 * @description 工具函数导出。
 */
"""

from .file_utils import TimestampNamer, file_to_base64, original_extension

__all__ = ["TimestampNamer", "file_to_base64", "original_extension"]
