from __future__ import annotations

from .client import ApiHandler, JsonPayload, httpx, requests
from .exceptions import ApiError, ErrorKind
from .logger import ApiLogger, get_logger
from .structures import RequestArgs, UploadFile
from .utils import (
    JSON_CONTENT_TYPE,
    build_headers,
    build_multipart_files,
    build_url,
    decode_body,
    empty_multipart_body,
    encode_body,
    extract_message,
)

__all__ = [
    "ApiHandler",
    "JsonPayload",
    "ApiError",
    "ErrorKind",
    "ApiLogger",
    "get_logger",
    "UploadFile",
    "RequestArgs",
    "JSON_CONTENT_TYPE",
    "build_url",
    "build_headers",
    "encode_body",
    "decode_body",
    "extract_message",
    "build_multipart_files",
    "empty_multipart_body",
    "httpx",
    "requests",
]
