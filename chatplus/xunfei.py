"""Helpers for the XunFei Spark chat API: request signing, bodies and reply chunks."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from datetime import datetime, timezone
from typing import Any
from urllib.parse import urlencode, urlsplit

from chatplus.chat_types import ApiRequest

MODEL_TO_VERSION: dict[str, str] = {
    "general": "v1.1",
    "generalv2": "v2.1",
    "generalv3": "v3.1",
}

STATUS_FIRST = 0
STATUS_LAST = 2

TITLE_MAX_CHARS = 30

_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def model_version(model: str) -> str:
    """Return the API version path segment for a model, empty when unknown."""
    return MODEL_TO_VERSION.get(model, "")


def hmac_with_sha256(data: str, key: str) -> str:
    """Sign data with HMAC-SHA256 and return the base64 digest."""
    digest = hmac.new(key.encode("utf-8"), data.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def _rfc1123(moment: datetime) -> str:
    utc = moment.astimezone(timezone.utc)
    return (
        f"{_DAYS[utc.weekday()]}, {utc.day:02d} {_MONTHS[utc.month - 1]} "
        f"{utc.year:04d} {utc.hour:02d}:{utc.minute:02d}:{utc.second:02d} UTC"
    )


def assemble_auth_url(
    host_url: str, api_key: str, api_secret: str, now: datetime | None = None
) -> str:
    """Append the signed host, date and authorization parameters to a websocket URL."""
    parts = urlsplit(host_url)
    if not parts.scheme or not parts.netloc:
        raise ValueError(f"invalid API URL: {host_url!r}")
    moment = datetime.now(timezone.utc) if now is None else now
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    date = _rfc1123(moment)
    sign_str = "\n".join(
        [f"host: {parts.netloc}", f"date: {date}", f"GET {parts.path} HTTP/1.1"]
    )
    signature = hmac_with_sha256(sign_str, api_secret)
    auth = (
        f'hmac username="{api_key}", algorithm="hmac-sha256", '
        f'headers="host date request-line", signature="{signature}"'
    )
    authorization = base64.b64encode(auth.encode("utf-8")).decode("ascii")
    query = urlencode(
        sorted({"host": parts.netloc, "date": date, "authorization": authorization}.items())
    )
    return f"{host_url}?{query}"


def build_request(app_id: str, request: ApiRequest) -> dict[str, Any]:
    """Build the websocket request body for a chat request."""
    return {
        "header": {"app_id": app_id},
        "parameter": {
            "chat": {
                "domain": request.model,
                "temperature": float(request.temperature),
                "top_k": 6,
                "max_tokens": int(request.max_tokens),
                "auditing": "default",
            }
        },
        "payload": {"message": {"text": request.to_dict().get("messages")}},
    }


def split_api_key(value: str) -> tuple[str, str, str]:
    """Split an "app_id|api_key|api_secret" key into its three parts."""
    parts = value.split("|")
    if len(parts) != 3:
        raise ValueError("非法的 API KEY！")
    app_id, api_key, api_secret = parts
    return app_id, api_key, api_secret


def chunk_content(message: bytes | str) -> tuple[str, int]:
    """Decode one reply frame into its text and status.

    An empty text becomes a newline; the status is 0 for the first frame
    and 2 for the last.
    """
    try:
        result = json.loads(message)
    except (ValueError, TypeError) as exc:
        raise ValueError(f"解析数据行失败：{exc}") from exc
    if not isinstance(result, dict):
        raise ValueError("解析数据行失败：reply is not an object")
    header = result.get("header") or {}
    code = header.get("code", 0)
    if code != 0:
        raise RuntimeError(f"请求 API 返回错误：{header.get('message', '')}")
    choices = (result.get("payload") or {}).get("choices") or {}
    texts = choices.get("text") or []
    if not texts:
        raise ValueError("解析数据行失败：reply has no text")
    content = texts[0].get("content", "") or ""
    if not content:
        content = "\n"
    return content, int(choices.get("status", 0))


def chat_title(prompt: str) -> str:
    """Title for a new chat: the prompt, cut to 30 characters with an ellipsis."""
    if len(prompt) > TITLE_MAX_CHARS:
        return prompt[:TITLE_MAX_CHARS] + "..."
    return prompt