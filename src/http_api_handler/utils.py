from __future__ import annotations

import json
import os
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
from urllib.parse import urlencode

from .structures import MultipartFiles, UploadFile

JSON_CONTENT_TYPE = "application/json; charset=UTF-8"


def build_url(base_url: str, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """Append endpoint verbatim to base URL and attach query parameters."""

    if not isinstance(endpoint, str):
        raise TypeError("endpoint must be str")
    url = f"{base_url}{endpoint}"
    if not params:
        return url
    clean = {k: v for k, v in params.items() if v is not None}
    if not clean:
        return url
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{urlencode(clean, doseq=True)}"


def build_headers(
    auth_token: Optional[str] = None,
    additional: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Build a fresh header set; fixed headers override additional ones."""

    fixed = {"Content-Type": JSON_CONTENT_TYPE}
    if auth_token is not None:
        fixed["Authorization"] = f"Bearer {auth_token}"

    fixed_names = {name.lower() for name in fixed}
    headers = {k: v for k, v in (additional or {}).items() if k.lower() not in fixed_names}
    headers.update(fixed)
    return headers


def encode_body(body: Any) -> Optional[str]:
    """Serialize request body to JSON; absent body means no payload."""

    if body is None:
        return None
    return json.dumps(body)


def decode_body(text: str) -> Any:
    """Decode a JSON response body; empty body decodes to None."""

    if not text.strip():
        return None
    return json.loads(text)


def extract_message(body: Any) -> Optional[str]:
    if isinstance(body, Mapping):
        message = body.get("message")
        if message is not None:
            return str(message)
    return None


def build_multipart_files(
    files: Optional[Iterable[UploadFile]],
    single_file: bool = False,
    fields: Optional[Mapping[str, Any]] = None,
) -> MultipartFiles:
    """Convert form fields and upload descriptors into transport ``files`` tuples.

    Fields use a ``None`` filename so the transport renders them as plain
    multipart form fields.
    """

    parts: MultipartFiles = [(name, (None, str(value))) for name, value in (fields or {}).items()]
    files = list(files or [])
    if single_file:
        files = files[:1]
        field = "file"
    else:
        field = "files[]"
    parts.extend((field, (item.name, item.content or b"")) for item in files)
    return parts


def empty_multipart_body() -> Tuple[str, str]:
    """Return content and content type of a multipart body with no parts."""

    boundary = os.urandom(16).hex()
    return f"--{boundary}--\r\n", f"multipart/form-data; boundary={boundary}"


__all__ = [
    "JSON_CONTENT_TYPE",
    "build_url",
    "build_headers",
    "encode_body",
    "decode_body",
    "extract_message",
    "build_multipart_files",
    "empty_multipart_body",
]
