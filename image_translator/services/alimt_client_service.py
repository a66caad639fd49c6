"""
/**
 * @file image_translator/services/alimt_client_service.py
 * @description 阿里云机器翻译（alimt 2018-10-12）调用封装：图片翻译。
 */
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from alibabacloud_alimt20181012 import models as alimt_models
from alibabacloud_alimt20181012.client import Client as AlimtSdkClient
from alibabacloud_credentials.client import Client as CredentialClient
from alibabacloud_credentials.models import Config as CredentialConfig
from alibabacloud_tea_openapi import models as open_api_models
from alibabacloud_tea_util import models as util_models

from image_translator.config import ClientConfig, Settings, load_settings


logger = logging.getLogger("alimt_client")


class AlimtClient:
    def __init__(self, settings: Optional[Settings] = None, client_config: Optional[ClientConfig] = None):
        self._initial_settings = settings
        self._client_config = client_config

    @property
    def settings(self) -> Settings:
        return self._initial_settings or load_settings()

    @property
    def client_config(self) -> ClientConfig:
        return self._client_config or self.settings.translation

    def _credential(self) -> CredentialClient:
        key_id = self.settings.resolve_access_key_id()
        key_secret = self.settings.resolve_access_key_secret()
        if not key_id or not key_secret:
            raise ValueError(
                "Missing Alibaba Cloud credentials. Set ALIBABA_CLOUD_ACCESS_KEY_ID and "
                "ALIBABA_CLOUD_ACCESS_KEY_SECRET or config.local.json"
            )
        config = CredentialConfig(
            type="access_key",
            access_key_id=key_id,
            access_key_secret=key_secret,
        )
        return CredentialClient(config)

    def create_client(self) -> AlimtSdkClient:
        cfg = self.client_config
        config = open_api_models.Config(credential=self._credential())
        config.endpoint = cfg.endpoint
        config.connect_timeout = cfg.connect_timeout_ms
        config.read_timeout = cfg.read_timeout_ms
        return AlimtSdkClient(config)

    def runtime_options(self) -> util_models.RuntimeOptions:
        # 重试策略交给 SDK 运行时处理
        cfg = self.client_config
        return util_models.RuntimeOptions(
            autoretry=True,
            max_attempts=cfg.max_attempts,
            connect_timeout=cfg.connect_timeout_ms,
            read_timeout=cfg.read_timeout_ms,
        )

    def translate_image(self, image_base64: str, source_language: str, target_language: str) -> Dict[str, Any]:
        client = self.create_client()
        logger.info("Alibaba Cloud client created")
        request = alimt_models.TranslateImageRequest(
            source_language=source_language,
            target_language=target_language,
            image_base_64=image_base64,
        )
        logger.info("Sending translate request...")
        response = client.translate_image_with_options(request, self.runtime_options())
        return response.to_map()
