"""上传文件处理

提供文件类型/大小校验、唯一文件名生成以及本地磁盘存储。

使用示例:
    from folio.uploads import LocalUploadStorage, validate_upload

    validate_upload("image/png", len(data), "image")
    storage = LocalUploadStorage.from_settings(settings.upload)
    url = storage.save("projects", "cover.png", data)
"""

import os
import random
import re
import string
import time
from typing import Dict, List, Optional

from folio.config import UploadSettings
from folio.exceptions import Err, ErrorCode
from folio.log import get_logger

logger = get_logger()

IMAGE_TYPES = ["image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"]
DOCUMENT_TYPES = ["application/pdf"]

ALLOWED_FILE_TYPES: Dict[str, List[str]] = {
    "images": IMAGE_TYPES,
    "documents": DOCUMENT_TYPES,
    "all": IMAGE_TYPES + DOCUMENT_TYPES,
}

# MIME 类型 -> 允许的扩展名（小写，不带点）
FILE_EXTENSIONS: Dict[str, List[str]] = {
    "image/jpeg": ["jpg", "jpeg"],
    "image/jpg": ["jpg", "jpeg"],
    "image/png": ["png"],
    "image/gif": ["gif"],
    "image/webp": ["webp"],
    "application/pdf": ["pdf"],
}

_DEFAULT_UPLOAD = UploadSettings()

MAX_FILE_SIZES: Dict[str, int] = {
    "image": _DEFAULT_UPLOAD.parsed_max_image_size,
    "document": _DEFAULT_UPLOAD.parsed_max_document_size,
}

STORAGE_PATHS: Dict[str, str] = {
    "profile": "profile",
    "projects": "projects",
    "certificates": "certificates",
    "gallery": "gallery",
    "blog": "blog",
    "resumes": "resumes",
    "achievements": "achievements",
    "testimonials": "testimonials",
}

_KIND_TYPES = {
    "image": "images",
    "document": "documents",
    "all": "all",
}

_RANDOM_ALPHABET = string.ascii_lowercase + string.digits


def _split_name(original: str):
    """拆出文件名和扩展名，扩展名只保留字母数字"""
    if "." in original:
        base_name, extension = original.rsplit(".", 1)
    else:
        base_name, extension = "", original
    return base_name, re.sub(r"[^a-zA-Z0-9]", "", extension)


def _size_kind(content_type: str) -> str:
    return "document" if content_type in DOCUMENT_TYPES else "image"


def validate_upload(
    content_type: str,
    size: int,
    kind: str = "all",
    max_sizes: Optional[Dict[str, int]] = None,
    filename: Optional[str] = None,
) -> None:
    """校验上传文件

    Args:
        content_type: MIME 类型
        size: 文件字节数
        kind: "image" / "document" / "all"
        max_sizes: 覆盖默认的大小上限 {"image": ..., "document": ...}
        filename: 客户端文件名，传入时扩展名必须与 MIME 类型一致

    Raises:
        ValidationException: 类型不允许 (INVALID_FILE_TYPE) 或超出大小 (FILE_TOO_LARGE)
    """
    if kind not in _KIND_TYPES:
        raise Err.invalid(f"未知的上传类型: {kind}", code=ErrorCode.INVALID_PARAMETER)

    allowed = ALLOWED_FILE_TYPES[_KIND_TYPES[kind]]
    if content_type not in allowed:
        raise Err.invalid(
            f"Invalid file type. Allowed types: {', '.join(allowed)}",
            code=ErrorCode.INVALID_FILE_TYPE,
            content_type=content_type,
        )

    if filename is not None:
        extension = _split_name(filename)[1].lower()
        if extension not in FILE_EXTENSIONS.get(content_type, []):
            raise Err.invalid(
                "File extension does not match file type",
                code=ErrorCode.INVALID_FILE_TYPE,
                content_type=content_type,
                filename=filename,
            )

    limits = max_sizes or MAX_FILE_SIZES
    limit = limits[_size_kind(content_type)]
    if size > limit:
        raise Err.invalid(
            f"File too large. Maximum size: {limit // (1024 * 1024)}MB",
            code=ErrorCode.FILE_TOO_LARGE,
            size=size,
            limit=limit,
        )


def generate_file_name(original: str, timestamp: Optional[int] = None) -> str:
    """生成唯一文件名: {净化后的文件名}_{毫秒时间戳}_{随机串}.{扩展名}"""
    base_name, extension = _split_name(original)
    sanitized = re.sub(r"[^a-zA-Z0-9\-_]", "_", base_name)
    if timestamp is None:
        timestamp = int(time.time() * 1000)
    suffix = "".join(random.choices(_RANDOM_ALPHABET, k=13))
    name = f"{sanitized}_{timestamp}_{suffix}"
    return f"{name}.{extension}" if extension else name


class LocalUploadStorage:
    """本地磁盘存储

    文件保存到 ``{root_dir}/{storage_path}/{生成的文件名}``，
    返回 ``{base_url}/{storage_path}/{文件名}``。
    """

    def __init__(self, root_dir: str, base_url: str = "/uploads"):
        self.root_dir = os.path.abspath(root_dir)
        self.base_url = base_url.rstrip("/")

    @classmethod
    def from_settings(cls, settings: UploadSettings) -> "LocalUploadStorage":
        return cls(settings.root_dir, settings.base_url)

    def _directory(self, path_key: str) -> str:
        if path_key not in STORAGE_PATHS:
            raise Err.invalid(f"未知的存储路径: {path_key}", code=ErrorCode.INVALID_PARAMETER)
        return os.path.join(self.root_dir, STORAGE_PATHS[path_key])

    def save(self, path_key: str, filename: str, data: bytes) -> str:
        """保存文件，返回访问 URL"""
        directory = self._directory(path_key)
        os.makedirs(directory, exist_ok=True)

        name = generate_file_name(filename)
        with open(os.path.join(directory, name), "wb") as f:
            f.write(data)

        logger.info(f"文件已上传: {STORAGE_PATHS[path_key]}/{name} ({len(data)} bytes)")
        return self.public_url(f"{STORAGE_PATHS[path_key]}/{name}")

    def public_url(self, relative_path: str) -> str:
        return f"{self.base_url}/{relative_path.lstrip('/')}"

    def _resolve(self, relative_path: str) -> str:
        full_path = os.path.abspath(os.path.join(self.root_dir, relative_path))
        if os.path.commonpath([full_path, self.root_dir]) != self.root_dir:
            raise Err.invalid("非法的文件路径", code=ErrorCode.INVALID_PARAMETER)
        return full_path

    def delete(self, relative_path: str) -> bool:
        """删除文件，文件不存在返回 False"""
        full_path = self._resolve(relative_path)
        if not os.path.isfile(full_path):
            return False
        os.remove(full_path)
        logger.info(f"文件已删除: {relative_path}")
        return True

    def list_files(self, path_key: str) -> List[str]:
        directory = self._directory(path_key)
        if not os.path.isdir(directory):
            return []
        return sorted(
            name for name in os.listdir(directory)
            if os.path.isfile(os.path.join(directory, name))
        )


__all__ = [
    "ALLOWED_FILE_TYPES",
    "FILE_EXTENSIONS",
    "MAX_FILE_SIZES",
    "STORAGE_PATHS",
    "validate_upload",
    "generate_file_name",
    "LocalUploadStorage",
]
