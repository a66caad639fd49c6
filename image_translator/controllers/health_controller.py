"""
/**
 * @file image_translator/controllers/health_controller.py
 * @description 健康检查控制器：凭证、上传目录可写性与翻译客户端配置。
 */
"""

from __future__ import annotations

import os
from typing import Any, Dict

from fastapi import APIRouter, Depends

from image_translator.config import Settings
from image_translator.controllers.deps import get_settings


router = APIRouter()


def _upload_dir_status(upload_dir: str) -> Dict[str, Any]:
    # 目录在首次上传时才创建：不存在时检查能否在其父目录下创建
    path = os.path.abspath(upload_dir)
    exists = os.path.isdir(path)
    target = path if exists else os.path.dirname(path)
    blocked = os.path.exists(path) and not exists
    return {
        "upload_dir": path,
        "exists": exists,
        "writable": not blocked and os.path.isdir(target) and os.access(target, os.W_OK | os.X_OK),
    }


@router.get("/health")
def health(settings: Settings = Depends(get_settings)):
    credentials = {
        "access_key_id": bool(settings.resolve_access_key_id()),
        "access_key_secret": bool(settings.resolve_access_key_secret()),
    }
    storage = _upload_dir_status(settings.upload_dir)
    client = settings.translation

    is_healthy = all(credentials.values()) and storage["writable"]

    return {
        "status": "ok" if is_healthy else "degraded",
        "checks": {
            "credentials": credentials,
            "storage": storage,
            "translation": {
                "endpoint": client.endpoint,
                "connect_timeout_ms": client.connect_timeout_ms,
                "read_timeout_ms": client.read_timeout_ms,
                "max_attempts": client.max_attempts,
            },
        },
    }
