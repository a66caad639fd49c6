"""
/**
 * @file image_translator/__init__.py
 * @description 图片上传与阿里云图片翻译转发服务。
 */
"""

__version__ = "1.0.0"
