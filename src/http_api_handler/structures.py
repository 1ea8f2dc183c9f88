from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class UploadFile:
    """File picked by the caller for a multipart upload."""

    name: str
    content: Optional[bytes] = None

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "UploadFile":
        path = Path(path)
        return cls(name=path.name, content=path.read_bytes())


MultipartFiles = List[Tuple[str, Tuple[Optional[str], Union[str, bytes]]]]


class RequestArgs(dict):
    """Transport kwargs for a single request, with validation."""

    def __init__(
        self,
        *,
        method: str,
        url: str,
        headers: Dict[str, str],
        content: Optional[str] = None,
        data: Optional[Dict[str, Any]] = None,
        files: Optional[MultipartFiles] = None,
    ) -> None:
        if not isinstance(method, str):
            raise TypeError("method must be str")
        if not isinstance(url, str):
            raise TypeError("url must be str")
        if not isinstance(headers, dict):
            raise TypeError("headers must be dict")
        if content is not None and not isinstance(content, str):
            raise TypeError("content must be str or None")
        if data is not None and not isinstance(data, dict):
            raise TypeError("data must be dict or None")
        if files is not None and not isinstance(files, list):
            raise TypeError("files must be list or None")
        super().__init__(method=method.upper(), url=url, headers=headers)
        if content is not None:
            self["content"] = content
        if data is not None:
            self["data"] = data
        if files is not None:
            self["files"] = files


__all__ = ["UploadFile", "RequestArgs", "MultipartFiles"]
