from __future__ import annotations

import logging
from http.client import HTTPException
from pathlib import Path
from typing import Any

from . import http_client
from .http_client import CancelToken, JsonResponse, RequestCancelled, build_base_url
from .types import (
    AggregatePage,
    ApiError,
    CountResult,
    Failure,
    FailureReason,
    SubmissionRequest,
    SubmitSuccess,
    json_truthy,
)

logger = logging.getLogger(__name__)

DEFAULT_API_BASE = "https://api.badwords.milliytech.uz"
COLLECTION_PATH = "/api/v1/badword/"
CSV_EXPORT_PATH = "/media/words/bad_words.csv"

COUNT_BAD_RESPONSE = "Server returned unexpected response when fetching count"
COUNT_API_ERROR = "Failed to fetch words"
COUNT_NETWORK_ERROR = "Could not fetch total words"
SUBMIT_GENERIC_ERROR = "Xatolik juqildi"
SUBMIT_NETWORK_ERROR = "Tarmoq xatosi. Qayta urinib ko'ring."


def extract_error_message(payload: Any) -> str:
    """Prefer the field-level ``data.word`` error, then ``message``."""
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, dict):
            word_error = data.get("word")
            if isinstance(word_error, list):
                word_error = next((item for item in word_error if item), None)
            if word_error:
                return str(word_error)
        message = payload.get("message")
        if message:
            return str(message)
    return SUBMIT_GENERIC_ERROR


def _submit_accepted(response: JsonResponse) -> bool:
    # Any parsed 2xx body except an explicit success:false counts as accepted, arrays included.
    if not response.ok or response.parse_error is not None:
        return False
    if not json_truthy(response.payload):
        return False
    payload = response.json_object()
    return payload is None or payload.get("success") is not False


class AggregateClient:
    def __init__(self, base_url: str = DEFAULT_API_BASE, *, timeout_s: float = 10.0) -> None:
        self.base_url = build_base_url(base_url) or DEFAULT_API_BASE
        self.timeout_s = timeout_s

    @property
    def collection_url(self) -> str:
        return f"{self.base_url}{COLLECTION_PATH}"

    @property
    def csv_url(self) -> str:
        return f"{self.base_url}{CSV_EXPORT_PATH}"

    def fetch_count(self, cancel: CancelToken | None = None) -> CountResult | Failure:
        try:
            response = http_client.request_json(
                "GET",
                f"{self.collection_url}?page=1",
                timeout_s=self.timeout_s,
                cancel=cancel,
            )
        except RequestCancelled:
            return Failure(FailureReason.ABORTED)
        except (OSError, HTTPException) as exc:
            logger.warning("count fetch failed", exc_info=exc)
            return Failure(FailureReason.NETWORK, COUNT_NETWORK_ERROR)
        except Exception as exc:
            logger.exception("count fetch failed unexpectedly", exc_info=exc)
            return Failure(FailureReason.NETWORK, COUNT_NETWORK_ERROR)
        payload = response.json_object()
        if payload is None:
            logger.warning(
                "count fetch returned a malformed body: %s",
                response.parse_error or type(response.payload).__name__,
            )
            return Failure(FailureReason.BAD_RESPONSE, COUNT_BAD_RESPONSE)
        if not json_truthy(payload.get("success")):
            return Failure(
                FailureReason.API_ERROR, str(payload.get("message") or COUNT_API_ERROR)
            )
        page = AggregatePage.from_payload(payload)
        return CountResult(total=page.total_items, page=page)

    def submit(
        self, request: SubmissionRequest, cancel: CancelToken | None = None
    ) -> SubmitSuccess | Failure:
        try:
            response = http_client.request_json(
                "POST",
                self.collection_url,
                body=request.to_body(),
                timeout_s=self.timeout_s,
                cancel=cancel,
            )
        except RequestCancelled:
            return Failure(FailureReason.ABORTED)
        except (OSError, HTTPException) as exc:
            logger.warning("word submit failed", exc_info=exc)
            return Failure(FailureReason.NETWORK, SUBMIT_NETWORK_ERROR)
        except Exception as exc:
            logger.exception("word submit failed unexpectedly", exc_info=exc)
            return Failure(FailureReason.NETWORK, SUBMIT_NETWORK_ERROR)
        if _submit_accepted(response):
            return SubmitSuccess(status=response.status, payload=response.payload)
        return Failure(FailureReason.API_ERROR, extract_error_message(response.payload))

    def download_csv(self, dest: Path) -> Path:
        dest.parent.mkdir(parents=True, exist_ok=True)
        tmp = dest.with_name(f"{dest.name}.part")
        try:
            with tmp.open("wb") as handle:
                status = http_client.download_to(self.csv_url, handle, timeout_s=self.timeout_s)
            if not 200 <= status < 300:
                raise ApiError(status, "csv export unavailable")
            tmp.replace(dest)
        finally:
            if tmp.exists():
                tmp.unlink()
        return dest
