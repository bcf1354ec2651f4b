"""Request processing shared by every route: auth, CORS, trimming, thumbnails."""

from __future__ import annotations

import io
import time
from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import urlsplit

import jwt
from PIL import Image, UnidentifiedImageError

from chatplus.config import ADMIN_AUTH_HEADER, USER_AUTH_HEADER

PUBLIC_PATHS = frozenset(
    {
        "/api/user/login",
        "/api/user/resetPass",
        "/api/admin/login",
        "/api/user/register",
        "/api/chat/history",
        "/api/chat/detail",
        "/api/role/list",
        "/api/mj/jobs",
        "/api/mj/client",
        "/api/invite/hits",
        "/api/sd/jobs",
        "/api/upload",
        "/api/admin/config/get",
    }
)

PUBLIC_PREFIXES = (
    "/api/test",
    "/api/function/",
    "/api/sms/",
    "/api/captcha/",
    "/api/payment/",
    "/static/",
)

CACHE_CONTROL = "max-age=31536000, public"
DEFAULT_QUALITY = 75

_HMAC_ALGORITHMS = ["HS256", "HS384", "HS512"]


class AuthError(Exception):
    """Raised when a request carries no valid authorization token."""


@dataclass(frozen=True)
class ThumbArgs:
    """Thumbnail request taken from a static URL's imageView2 query."""

    path: str
    width: int = 0
    height: int = 0
    quality: int = DEFAULT_QUALITY


def is_public_path(path: str) -> bool:
    """Return True when the path can be served without a login token."""
    return path in PUBLIC_PATHS or path.startswith(PUBLIC_PREFIXES)


def _lookup(mapping: Mapping[str, Any], name: str) -> str:
    lowered = name.lower()
    for key, value in mapping.items():
        if key.lower() == lowered:
            if isinstance(value, (list, tuple)):
                return str(value[0]) if value else ""
            return "" if value is None else str(value)
    return ""


def select_token(path: str, headers: Mapping[str, Any], query: Mapping[str, Any]) -> str:
    """Pick the token a request must carry for its path; empty when missing."""
    if "/api/admin/" in path:
        return _lookup(headers, ADMIN_AUTH_HEADER)
    if path == "/api/chat/new":
        value = query.get("token", "")
        if isinstance(value, (list, tuple)):
            return str(value[0]) if value else ""
        return "" if value is None else str(value)
    return _lookup(headers, USER_AUTH_HEADER)


def _int_value(value: Any, default: int = 0) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else default
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def verify_token(token: str, secret: str, now: float | None = None) -> dict[str, Any]:
    """Check an HMAC-signed token and its "expired" claim; return the claims."""
    if not token:
        raise AuthError("You should put Authorization in request headers")
    try:
        claims = jwt.decode(token, secret, algorithms=_HMAC_ALGORITHMS)
    except jwt.PyJWTError as exc:
        raise AuthError(f"Error with parse auth token: {exc}") from exc
    if not isinstance(claims, dict):
        raise AuthError("Token is invalid")
    current = time.time() if now is None else now
    expired = _int_value(claims.get("expired"), 0)
    if expired > 0 and expired < int(current):
        raise AuthError("Token is expired")
    return claims


def cors_headers(origin: str) -> dict[str, str]:
    """Headers granting cross-origin access to the given origin."""
    if not origin:
        return {}
    return {
        "Access-Control-Allow-Origin": origin,
        "Access-Control-Allow-Methods": "POST, GET, OPTIONS, PUT, DELETE, UPDATE",
        "Access-Control-Allow-Headers": (
            "Authorization, Content-Length, Content-Type, Chat-Token, Admin-Authorization"
        ),
        "Access-Control-Expose-Headers": (
            "Content-Length, Access-Control-Allow-Origin, Access-Control-Allow-Headers"
        ),
        "Access-Control-Max-Age": "172800",
        "Access-Control-Allow-Credentials": "true",
    }


def trim_json_strings(data: Any) -> Any:
    """Return a copy of decoded JSON with every string value stripped."""
    if isinstance(data, str):
        return data.strip()
    if isinstance(data, dict):
        return {key: trim_json_strings(value) for key, value in data.items()}
    if isinstance(data, list):
        return [trim_json_strings(value) for value in data]
    return data


def trim_query(params: Mapping[str, Any]) -> dict[str, list[str]]:
    """Strip whitespace from every query parameter value."""
    trimmed: dict[str, list[str]] = {}
    for key, values in params.items():
        items = [values] if isinstance(values, str) else list(values)
        trimmed[key] = [str(value).strip() for value in items]
    return trimmed


def parse_thumb_args(url: str) -> ThumbArgs | None:
    """Read thumbnail arguments from a static URL, or None if it asks for none."""
    if not url.startswith("/static/") or "?imageView2" not in url:
        return None
    spec = url.split("imageView2")[1]
    size = spec.split("/")
    if len(size) != 8:
        raise ValueError("invalid thumb args")
    path = urlsplit(url).path.lstrip("/")
    return ThumbArgs(
        path=path,
        width=_int_value(size[3], 0),
        height=_int_value(size[5], 0),
        quality=_int_value(size[7], DEFAULT_QUALITY),
    )


def _resize(img: Image.Image, width: int, height: int) -> Image.Image:
    orig_w, orig_h = img.size
    if width == 0 and height == 0:
        return img
    if width == 0:
        width = max(1, round(height * orig_w / orig_h))
    elif height == 0:
        height = max(1, round(width * orig_h / orig_w))
    return img.resize((width, height), Image.LANCZOS)


def _thumbnail(img: Image.Image, max_w: int, max_h: int) -> Image.Image:
    orig_w, orig_h = img.size
    if orig_w <= max_w and orig_h <= max_h:
        return img
    new_w, new_h = orig_w, orig_h
    if new_w > max_w:
        new_h = new_h * max_w // new_w
        new_w = max_w
    if new_h > max_h:
        new_w = new_w * max_h // new_h
        new_h = max_h
    return _resize(img, max(new_w, 1), max(new_h, 1))


def make_thumbnail(path: str, args: ThumbArgs) -> bytes:
    """Scale the image at path as the arguments ask and encode it as JPEG."""
    with open(path, "rb") as fh:
        raw = fh.read()
    try:
        with Image.open(io.BytesIO(raw)) as opened:
            img = opened.convert("RGB")
    except (UnidentifiedImageError, OSError) as exc:
        raise ValueError("Error decoding image") from exc
    if args.width == 0 or args.height == 0:
        result = _resize(img, args.width, args.height)
    else:
        result = _thumbnail(img, args.width, args.height)
    buffer = io.BytesIO()
    result.save(buffer, format="JPEG", quality=args.quality)
    return buffer.getvalue()