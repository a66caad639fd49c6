"""
/**
 * @file image_translator/services/upload_service.py
 * @description 图片上传流水线：解析 -> 分配文件名 -> 落盘 -> 生成响应记录。
 */
"""

from __future__ import annotations

import logging
import os
import shutil
from dataclasses import dataclass, field
from typing import BinaryIO, Callable, List, Optional, Sequence, Tuple

from image_translator.models import UploadedFile
from image_translator.utils import TimestampNamer


logger = logging.getLogger("upload_service")

# 跨进程同名冲突时重新取号的上限
_MAX_NAME_RETRIES = 5


@dataclass
class IncomingFile:
    original_name: str
    stream: BinaryIO


@dataclass
class UploadContext:
    upload_dir: str
    files: List[IncomingFile]
    namer: TimestampNamer


@dataclass
class UploadSink:
    planned: List[Tuple[IncomingFile, str]] = field(default_factory=list)
    files: List[UploadedFile] = field(default_factory=list)


Stage = Callable[[UploadContext, UploadSink], None]


def ensure_upload_dir(upload_dir: str) -> bool:
    """Create the upload directory if absent. Returns True when it was created."""
    if os.path.isdir(upload_dir):
        return False
    # 并发的首次上传可能同时创建目录
    os.makedirs(upload_dir, exist_ok=True)
    logger.info(f"Created upload directory {upload_dir}")
    return True


def assign_filenames(ctx: UploadContext, sink: UploadSink) -> None:
    for incoming in ctx.files:
        sink.planned.append((incoming, ctx.namer.filename_for(incoming.original_name)))


def _open_exclusive(ctx: UploadContext, incoming: IncomingFile, filename: str) -> Tuple[BinaryIO, str]:
    for _ in range(_MAX_NAME_RETRIES):
        path = os.path.join(ctx.upload_dir, filename)
        try:
            return open(path, "xb"), path
        except FileExistsError:
            logger.warning(f"Stored name {filename} already taken, drawing a new one")
            filename = ctx.namer.filename_for(incoming.original_name)
    raise FileExistsError(f"Could not allocate a unique name for {incoming.original_name}")


def persist(ctx: UploadContext, sink: UploadSink) -> None:
    ensure_upload_dir(ctx.upload_dir)
    for incoming, filename in sink.planned:
        logger.info(f"Processing file: {incoming.original_name}")
        out, path = _open_exclusive(ctx, incoming, filename)
        with out:
            shutil.copyfileobj(incoming.stream, out)
        sink.files.append(UploadedFile(path=path, name=incoming.original_name))


DEFAULT_STAGES: Tuple[Stage, ...] = (assign_filenames, persist)


def run_upload_pipeline(ctx: UploadContext, stages: Optional[Sequence[Stage]] = None) -> List[UploadedFile]:
    sink = UploadSink()
    for stage in stages or DEFAULT_STAGES:
        stage(ctx, sink)
    return sink.files


def save_uploads(files: List[IncomingFile], upload_dir: str, namer: Optional[TimestampNamer] = None) -> List[UploadedFile]:
    logger.info(f"Received upload request, file count: {len(files)}")
    ctx = UploadContext(upload_dir=upload_dir, files=files, namer=namer or TimestampNamer())
    stored = run_upload_pipeline(ctx)
    logger.info("Files uploaded successfully")
    return stored
