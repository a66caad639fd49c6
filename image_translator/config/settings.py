"""
/**
 * @file image_translator/config/settings.py
 * @description 后端配置加载与合并（config.json + config.local.json + 环境变量）。
 */
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional


PACKAGE_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_PATH = os.path.join(PACKAGE_ROOT, "config.json")
CONFIG_LOCAL_PATH = os.path.join(PACKAGE_ROOT, "config.local.json")
CONFIG_EXAMPLE_PATH = os.path.join(PACKAGE_ROOT, "config.example.json")

DEFAULT_PORT = 3000
DEFAULT_UPLOAD_DIR = "uploads"
DEFAULT_ENDPOINT = "mt.cn-hangzhou.aliyuncs.com"
DEFAULT_CONNECT_TIMEOUT_MS = 15000
DEFAULT_READ_TIMEOUT_MS = 30000
DEFAULT_MAX_ATTEMPTS = 3

logger = logging.getLogger("config_loader")


def _load_json(path: str) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            value = json.load(f)
            return value if isinstance(value, dict) else {}
    except FileNotFoundError:
        return {}


def _merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = _merge_dicts(base[key], value)
        else:
            base[key] = value
    return base


def _positive_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int) and value > 0:
        return value
    return default


@dataclass(frozen=True)
class ClientConfig:
    """机器翻译客户端配置：端点、超时（毫秒）与最大尝试次数。"""

    endpoint: str = DEFAULT_ENDPOINT
    connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS
    read_timeout_ms: int = DEFAULT_READ_TIMEOUT_MS
    max_attempts: int = DEFAULT_MAX_ATTEMPTS


@dataclass(frozen=True)
class Settings:
    raw: Dict[str, Any]

    @property
    def api_keys(self) -> Dict[str, Any]:
        value = self.raw.get("api_keys", {})
        return value if isinstance(value, dict) else {}

    @property
    def upload_dir(self) -> str:
        storage = self.raw.get("storage", {})
        if isinstance(storage, dict) and isinstance(storage.get("upload_dir"), str) and storage["upload_dir"]:
            return storage["upload_dir"]
        return DEFAULT_UPLOAD_DIR

    @property
    def log_level(self) -> str:
        logging_cfg = self.raw.get("logging", {})
        if isinstance(logging_cfg, dict) and isinstance(logging_cfg.get("level"), str):
            level = logging_cfg["level"].upper()
            if isinstance(logging.getLevelName(level), int):
                return level
            logger.warning(f"Unknown log level {logging_cfg['level']!r}, using INFO")
        return "INFO"

    @property
    def cors_origins(self) -> List[str]:
        server = self.raw.get("server", {})
        origins = server.get("cors_origins") if isinstance(server, dict) else None
        if isinstance(origins, list) and origins:
            return [str(o) for o in origins]
        return ["*"]

    @property
    def translation(self) -> ClientConfig:
        value = self.raw.get("translation", {})
        if not isinstance(value, dict):
            value = {}
        endpoint = value.get("endpoint")
        return ClientConfig(
            endpoint=endpoint if isinstance(endpoint, str) and endpoint else DEFAULT_ENDPOINT,
            connect_timeout_ms=_positive_int(value.get("connect_timeout_ms"), DEFAULT_CONNECT_TIMEOUT_MS),
            read_timeout_ms=_positive_int(value.get("read_timeout_ms"), DEFAULT_READ_TIMEOUT_MS),
            max_attempts=_positive_int(value.get("max_attempts"), DEFAULT_MAX_ATTEMPTS),
        )

    def _alibaba_key(self, name: str) -> Optional[str]:
        section = self.api_keys.get("alibaba_cloud")
        if isinstance(section, dict) and isinstance(section.get(name), str) and section[name]:
            return section[name]
        return None

    def resolve_access_key_id(self) -> Optional[str]:
        return os.getenv("ALIBABA_CLOUD_ACCESS_KEY_ID") or self._alibaba_key("access_key_id")

    def resolve_access_key_secret(self) -> Optional[str]:
        return os.getenv("ALIBABA_CLOUD_ACCESS_KEY_SECRET") or self._alibaba_key("access_key_secret")

    def resolve_host(self) -> str:
        server = self.raw.get("server", {})
        configured = server.get("host") if isinstance(server, dict) else None
        return os.getenv("HOST") or (configured if isinstance(configured, str) and configured else "0.0.0.0")

    def resolve_port(self) -> int:
        """
        Listening port: PORT env var, then server.port in config, then 3000.
        Raises ValueError when the value is not a valid TCP port.
        """
        server = self.raw.get("server", {})
        configured = server.get("port") if isinstance(server, dict) else None
        value = os.getenv("PORT") or configured
        if value in (None, ""):
            return DEFAULT_PORT
        try:
            port = int(value)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid port: {value!r}")
        if not 0 < port < 65536:
            raise ValueError(f"Port out of range: {port}")
        return port


_CACHED_SETTINGS: Optional[Settings] = None
_LAST_LOAD_TIME = 0.0
_CONFIG_HASH = ""
_SETTINGS_LOCK = threading.Lock()


def _deep_diff(d1: Dict[str, Any], d2: Dict[str, Any], path="") -> list:
    diffs = []
    for k in set(d1.keys()) | set(d2.keys()):
        p = f"{path}.{k}" if path else k
        if k not in d1:
            diffs.append(f"Added: {p}")
        elif k not in d2:
            diffs.append(f"Removed: {p}")
        elif isinstance(d1[k], dict) and isinstance(d2[k], dict):
            diffs.extend(_deep_diff(d1[k], d2[k], p))
        elif d1[k] != d2[k]:
            diffs.append(f"Changed: {p}")
    return diffs


def reload_settings(
    base_path: str = CONFIG_PATH,
    local_path: str = CONFIG_LOCAL_PATH,
    example_path: str = CONFIG_EXAMPLE_PATH,
    force: bool = False,
) -> Settings:
    global _CACHED_SETTINGS, _LAST_LOAD_TIME, _CONFIG_HASH

    with _SETTINGS_LOCK:
        now = time.time()
        # Debounce: 500ms
        if not force and _CACHED_SETTINGS and (now - _LAST_LOAD_TIME < 0.5):
            return _CACHED_SETTINGS

        try:
            if os.path.exists(base_path):
                base_cfg = _load_json(base_path)
            else:
                base_cfg = _load_json(example_path)
            local_cfg = _load_json(local_path)
            merged = _merge_dicts(base_cfg, local_cfg)

            new_hash = hashlib.md5(json.dumps(merged, sort_keys=True).encode("utf-8")).hexdigest()
            if _CACHED_SETTINGS and new_hash == _CONFIG_HASH:
                _LAST_LOAD_TIME = now
                return _CACHED_SETTINGS

            is_reload = _CACHED_SETTINGS is not None
            if is_reload:
                # Values may hold secrets, only key paths are logged
                diffs = _deep_diff(_CACHED_SETTINGS.raw, merged)
                if diffs:
                    logger.info(f"Config changes detected: {'; '.join(diffs)}")

            _CACHED_SETTINGS = Settings(raw=merged)
            _CONFIG_HASH = new_hash
            _LAST_LOAD_TIME = now

            if is_reload:
                logger.info("Configuration reloaded successfully.")

        except (OSError, ValueError) as e:
            logger.error(f"Failed to reload config: {e}. Keeping old config.")
            if not _CACHED_SETTINGS:
                logger.warning("Initializing with empty settings due to load failure.")
                _CACHED_SETTINGS = Settings(raw={})

    return _CACHED_SETTINGS


def load_settings() -> Settings:
    """
    Get current settings. Lazy loads on first call.
    Subsequent reloads are handled by the file watcher calling reload_settings().
    """
    if _CACHED_SETTINGS is None:
        return reload_settings()
    return _CACHED_SETTINGS
