"""
/**
 * @file image_translator/models/upload_model.py
 * @description 上传文件记录与响应模型（Pydantic）。
 */
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field


class UploadedFile(BaseModel):
    path: str
    name: str


class UploadResponse(BaseModel):
    success: bool = True
    files: List[UploadedFile] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    details: Optional[List[Any]] = None
