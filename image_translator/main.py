"""
/**
 * @file image_translator/main.py
 * @description FastAPI 应用装配（路由、中间件、配置监听）与启动入口。
 */
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from image_translator.config import CONFIG_LOCAL_PATH, CONFIG_PATH, Settings, load_settings, reload_settings
from image_translator.controllers import health_router, translate_router, upload_router
from image_translator.controllers.deps import error_response
from image_translator.services import AlimtClient
from image_translator.utils import TimestampNamer


logger = logging.getLogger("image_translator")

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


class ConfigEventHandler(FileSystemEventHandler):
    """Handler for config file changes"""
    def on_modified(self, event):
        if event.is_directory:
            return
        if event.src_path in (CONFIG_PATH, CONFIG_LOCAL_PATH):
            reload_settings()


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return error_response(422, "Invalid request body", details=exc.errors())


def create_app(
    settings: Optional[Settings] = None,
    translator: Optional[AlimtClient] = None,
    watch_config: bool = True,
) -> FastAPI:
    """
    Build the application. ``settings`` pins the configuration (the cached,
    file-watched settings are used otherwise); ``translator`` replaces the
    Alibaba Cloud client.
    """
    if settings is None:
        load_dotenv()

    app = FastAPI(title="Image Translator")
    app.state.settings = settings
    app.state.translator = translator
    app.state.namer = TimestampNamer()
    app.state.observer = None

    effective = settings or load_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=effective.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(health_router)
    app.include_router(upload_router)
    app.include_router(translate_router)

    if watch_config and settings is None:
        @app.on_event("startup")
        async def start_config_watcher():
            config_dir = os.path.dirname(CONFIG_PATH)
            try:
                observer = Observer()
                observer.schedule(ConfigEventHandler(), config_dir, recursive=False)
                observer.start()
            except OSError as e:
                logger.warning(f"Failed to start config watcher: {e}")
                return
            app.state.observer = observer
            logger.info(f"Config watcher started on {config_dir}")

        @app.on_event("shutdown")
        async def stop_config_watcher():
            observer = app.state.observer
            if observer:
                observer.stop()
                observer.join()
                app.state.observer = None

    return app


def log_startup(settings: Settings, port: int) -> None:
    logger.info(f"Server starting, listening on port {port}")
    logger.info("Environment check:")
    logger.info(f"- AccessKey ID: {'set' if settings.resolve_access_key_id() else 'not set'}")
    logger.info(f"- AccessKey Secret: {'set' if settings.resolve_access_key_secret() else 'not set'}")


def run() -> None:
    load_dotenv()
    settings = load_settings()
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    # 端口无法解析是唯一的致命错误
    port = settings.resolve_port()
    app = create_app()
    log_startup(settings, port)
    uvicorn.run(app, host=settings.resolve_host(), port=port)


if __name__ == "__main__":
    run()
