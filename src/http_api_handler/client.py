from __future__ import annotations

from contextlib import asynccontextmanager, contextmanager
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, AsyncIterator, Dict, Iterable, Iterator, List, Mapping, Optional, Union

import httpx

from .exceptions import ApiError
from .logger import ApiLogger, get_logger
from .structures import RequestArgs, UploadFile
from .utils import (
    build_headers,
    build_multipart_files,
    build_url,
    decode_body,
    empty_multipart_body,
    encode_body,
    extract_message,
)

try:
    import requests
except ImportError:  # pragma: no cover - depends on installed extra
    requests = None  # type: ignore[assignment]

JsonPayload = Union[Dict[str, Any], List[Any]]

if requests is not None:
    TRANSPORT_ERRORS: tuple = (httpx.HTTPError, requests.RequestException)
else:  # pragma: no cover - depends on installed extra
    TRANSPORT_ERRORS = (httpx.HTTPError,)

SUCCESS_CODES = (HTTPStatus.OK, HTTPStatus.CREATED)


def _is_requests_session(client: Any) -> bool:
    return requests is not None and isinstance(client, requests.Session)


@dataclass(frozen=True)
class ApiHandler:
    """JSON API client with request logging and typed failures.

    Every operation has a blocking form and an ``*_async`` coroutine. Injected
    ``client``/``async_client`` instances are reused and never closed; without
    them a short-lived httpx client is opened per request.
    """

    base_url: str
    auth_token: Optional[str] = None
    enable_logs: bool = True
    client: Any = None
    async_client: Optional[httpx.AsyncClient] = None
    timeout: float = 10.0
    additional_headers: Optional[Dict[str, str]] = None
    logger: Optional[ApiLogger] = None

    def __post_init__(self) -> None:
        if not isinstance(self.base_url, str) or not self.base_url:
            raise ValueError("base_url must be a non-empty string")
        if self.additional_headers is not None:
            object.__setattr__(self, "additional_headers", dict(self.additional_headers))
        if self.logger is None:
            object.__setattr__(self, "logger", get_logger())

    @property
    def _headers(self) -> Dict[str, str]:
        return build_headers(self.auth_token, self.additional_headers)

    def _log_request(self, args: RequestArgs) -> None:
        if not self.enable_logs:
            return
        self.logger.info(f"REQUEST [{args['method']}] {args['url']}")
        if "files" in args or args["headers"].get("Content-Type", "").startswith("multipart/"):
            parts = args.get("files", [])
            fields = {name: value for name, (filename, value) in parts if filename is None}
            names = [filename for _, (filename, _) in parts if filename is not None]
            self.logger.debug(f"Request Body: fields={fields} files={names}")
        elif "content" in args:
            self.logger.debug(f"Request Body: {args['content']}")

    def _log_response(self, args: RequestArgs, response: Any, binary: bool = False) -> None:
        if not self.enable_logs:
            return
        self.logger.info(f"RESPONSE [{response.status_code}] {args['url']}")
        if binary:
            self.logger.debug(f"Response Body: <{len(response.content)} bytes>")
        else:
            self.logger.debug(f"Response Body: {response.text}")

    @contextmanager
    def _sync_transport(self) -> Iterator[Any]:
        if self.client is not None:
            yield self.client
            return
        with httpx.Client(timeout=self.timeout) as client:
            yield client

    @asynccontextmanager
    async def _async_transport(self) -> AsyncIterator[Any]:
        if self.async_client is not None:
            yield self.async_client
            return
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            yield client

    def _call_transport(self, client: Any, args: RequestArgs) -> Any:
        if _is_requests_session(client):
            kwargs = dict(args)
            if "content" in kwargs:
                kwargs["data"] = kwargs.pop("content")
            return client.request(timeout=self.timeout, **kwargs)
        return client.request(**args)

    def _send(self, args: RequestArgs, failure: str, binary: bool = False) -> Any:
        self._log_request(args)
        try:
            with self._sync_transport() as client:
                response = self._call_transport(client, args)
        except TRANSPORT_ERRORS as exc:
            self.logger.error(failure, exc)
            raise ApiError.network(str(exc)) from exc
        self._log_response(args, response, binary)
        return response

    async def _send_async(self, args: RequestArgs, failure: str, binary: bool = False) -> Any:
        self._log_request(args)
        try:
            async with self._async_transport() as client:
                response = await client.request(**args)
        except httpx.HTTPError as exc:
            self.logger.error(failure, exc)
            raise ApiError.network(str(exc)) from exc
        self._log_response(args, response, binary)
        return response

    @staticmethod
    def _handle_response(response: Any) -> JsonPayload:
        status_code = int(response.status_code)
        try:
            body = decode_body(response.text)
        except ValueError as exc:
            raise ApiError("Invalid JSON response", status_code) from exc

        if status_code in SUCCESS_CODES:
            if isinstance(body, (dict, list)):
                return body
            raise ApiError("Invalid response format", status_code)
        raise ApiError.for_status(status_code, extract_message(body))

    @staticmethod
    def _handle_download(response: Any) -> bytes:
        status_code = int(response.status_code)
        if status_code == HTTPStatus.OK:
            return response.content
        raise ApiError.bad_request(f"File download failed with status code: {status_code}")

    def _get_props(self, endpoint: str, query_parameters: Optional[Mapping[str, Any]] = None) -> RequestArgs:
        return RequestArgs(
            method="GET",
            url=build_url(self.base_url, endpoint, query_parameters),
            headers=self._headers,
        )

    def get(self, endpoint: str, query_parameters: Optional[Mapping[str, Any]] = None) -> JsonPayload:
        response = self._send(self._get_props(endpoint, query_parameters), "GET Request Failed")
        return self._handle_response(response)

    async def get_async(self, endpoint: str, query_parameters: Optional[Mapping[str, Any]] = None) -> JsonPayload:
        response = await self._send_async(self._get_props(endpoint, query_parameters), "GET Request Failed")
        return self._handle_response(response)

    def _post_props(self, endpoint: str, body: Any = None, custom_base_url: Optional[str] = None) -> RequestArgs:
        return RequestArgs(
            method="POST",
            url=build_url(custom_base_url or self.base_url, endpoint),
            headers=self._headers,
            content=encode_body(body),
        )

    def post(self, endpoint: str, body: Any = None, custom_base_url: Optional[str] = None) -> JsonPayload:
        response = self._send(self._post_props(endpoint, body, custom_base_url), "POST Request Failed")
        return self._handle_response(response)

    async def post_async(self, endpoint: str, body: Any = None, custom_base_url: Optional[str] = None) -> JsonPayload:
        response = await self._send_async(self._post_props(endpoint, body, custom_base_url), "POST Request Failed")
        return self._handle_response(response)

    def _put_props(self, endpoint: str, body: Any) -> RequestArgs:
        return RequestArgs(
            method="PUT",
            url=build_url(self.base_url, endpoint),
            headers=self._headers,
            content=encode_body(body),
        )

    def put(self, endpoint: str, body: Any) -> JsonPayload:
        response = self._send(self._put_props(endpoint, body), "PUT Request Failed")
        return self._handle_response(response)

    async def put_async(self, endpoint: str, body: Any) -> JsonPayload:
        response = await self._send_async(self._put_props(endpoint, body), "PUT Request Failed")
        return self._handle_response(response)

    def _delete_props(self, endpoint: str, body: Any = None) -> RequestArgs:
        return RequestArgs(
            method="DELETE",
            url=build_url(self.base_url, endpoint),
            headers=self._headers,
            content=encode_body(body),
        )

    def delete(self, endpoint: str, body: Any = None) -> JsonPayload:
        response = self._send(self._delete_props(endpoint, body), "DELETE Request Failed")
        return self._handle_response(response)

    async def delete_async(self, endpoint: str, body: Any = None) -> JsonPayload:
        response = await self._send_async(self._delete_props(endpoint, body), "DELETE Request Failed")
        return self._handle_response(response)

    def _download_props(self, endpoint: str, body: Any = None, custom_base_url: Optional[str] = None) -> RequestArgs:
        return RequestArgs(
            method="GET",
            url=build_url(custom_base_url or self.base_url, endpoint),
            headers=self._headers,
            content=encode_body(body),
        )

    def download_file(self, endpoint: str, body: Any = None, custom_base_url: Optional[str] = None) -> bytes:
        args = self._download_props(endpoint, body, custom_base_url)
        response = self._send(args, "File Download Failed", binary=True)
        return self._handle_download(response)

    async def download_file_async(
        self, endpoint: str, body: Any = None, custom_base_url: Optional[str] = None
    ) -> bytes:
        args = self._download_props(endpoint, body, custom_base_url)
        response = await self._send_async(args, "File Download Failed", binary=True)
        return self._handle_download(response)

    def _upload_props(
        self,
        endpoint: str,
        fields: Optional[Mapping[str, str]] = None,
        files: Optional[Iterable[UploadFile]] = None,
        single_file: bool = False,
    ) -> RequestArgs:
        # The transport sets the multipart content type with its boundary.
        headers = {k: v for k, v in self._headers.items() if k.lower() != "content-type"}
        parts = build_multipart_files(files, single_file, fields)
        if parts:
            return RequestArgs(method="POST", url=build_url(self.base_url, endpoint), headers=headers, files=parts)

        content, headers["Content-Type"] = empty_multipart_body()
        return RequestArgs(method="POST", url=build_url(self.base_url, endpoint), headers=headers, content=content)

    def upload_files(
        self,
        endpoint: str,
        fields: Optional[Mapping[str, str]] = None,
        files: Optional[Iterable[UploadFile]] = None,
        single_file: bool = False,
    ) -> JsonPayload:
        args = self._upload_props(endpoint, fields, files, single_file)
        return self._handle_response(self._send(args, "File Upload Failed"))

    async def upload_files_async(
        self,
        endpoint: str,
        fields: Optional[Mapping[str, str]] = None,
        files: Optional[Iterable[UploadFile]] = None,
        single_file: bool = False,
    ) -> JsonPayload:
        args = self._upload_props(endpoint, fields, files, single_file)
        return self._handle_response(await self._send_async(args, "File Upload Failed"))


__all__ = ["ApiHandler", "JsonPayload", "TRANSPORT_ERRORS", "httpx", "requests"]
