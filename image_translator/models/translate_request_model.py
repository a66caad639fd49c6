"""
/**
 * @file image_translator/models/translate_request_model.py
 * @description 图片翻译请求/响应模型（Pydantic）。
 */
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TranslateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # 空路径交给读取文件时报错（500），不在边界拒绝
    image_path: str = Field(..., alias="imagePath")
    # 语言代码原样透传，不做校验
    source_language: str = Field(..., alias="sourceLanguage")
    target_language: str = Field(..., alias="targetLanguage")


class TranslateResponse(BaseModel):
    success: bool = True
    result: Any
