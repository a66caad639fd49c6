"""
/**
 * @file image_translator/controllers/deps.py
 * @description 路由依赖：从应用状态中取得配置、文件名生成器与翻译客户端。
 */
"""

from __future__ import annotations

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from image_translator.config import Settings, load_settings
from image_translator.models import ErrorResponse
from image_translator.services import AlimtClient
from image_translator.utils import TimestampNamer


def get_settings(request: Request) -> Settings:
    return request.app.state.settings or load_settings()


def get_namer(request: Request) -> TimestampNamer:
    return request.app.state.namer


def get_translator(request: Request) -> AlimtClient:
    # 客户端在调用时才创建 SDK 实例，凭证错误会在控制器内被捕获
    return request.app.state.translator or AlimtClient(settings=request.app.state.settings)


def error_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc) or exc.__class__.__name__


def error_response(status_code: int, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=message, details=details)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body, exclude_none=True))
