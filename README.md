# chatplus

Building blocks for an AI chat and drawing web service: request and response
types, configuration, a thread-safe map, a websocket client wrapper, request
middleware helpers, XunFei chat API signing, drawing prompt construction and
order/reward billing rules.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `chatplus.chat_types` – `ApiRequest` (with `to_dict()`, which leaves out
  empty optional fields), `Message`, `ChatModel`, `ChatSession`, `ToolCall`,
  `Function` and `get_model_max_token(model)`, which gives the context window
  of a model (4096 when the model is unknown).
- `chatplus.locked_map` – `LockedMap`, a dictionary guarded by a lock with
  `put`, `get` (None for a missing key), `has`, `delete` and `to_list`.
- `chatplus.ws_client` – `WsClient`, which wraps a connection object with
  `send`, `receive` and `close` methods. `send` writes bytes, `send_json`
  writes JSON text, writes are serialised by a lock, and every call after
  `close()` raises `ConnectionClosedError`.
- `chatplus.config` – `AppConfig`, `ChatConfig` and `SystemConfig`, each built
  from a mapping with `from_dict` (keys match field names ignoring case and
  underscores), plus `RedisConfig` (`url()` gives `host:port`),
  `SessionConfig`, `ModelApiConfig`, the storage and payment configuration
  dataclasses and the `Platform` enum.
- `chatplus.web` – the `BizVo` response envelope with `BizCode`, websocket
  messages (`WsMessage`, `WsMsgType`), orders (`OrderStatus`, `OrderRemark`)
  and drawing tasks (`TaskType`, `MjTask`, `SdTask`, `SdTaskParams`).
- `chatplus.middleware` – `is_public_path`, `select_token` (admin header,
  `token` query for `/api/chat/new`, or the user header), `verify_token`
  (HMAC-signed JWT with an `expired` claim; raises `AuthError`),
  `cors_headers`, `trim_query`, `trim_json_strings`, and thumbnails:
  `parse_thumb_args` reads an `imageView2` URL into `ThumbArgs` and
  `make_thumbnail` returns the scaled image as JPEG bytes.
- `chatplus.logger` – `get_logger()` returns a shared logger writing to
  `logs/app.log` (rotated at 10 MB, five backups) and to standard output;
  `log_level(name)` maps `DEBUG`, `WARN` and `ERROR`, anything else being
  INFO. The level is read from the `LOG_LEVEL` environment variable.
- `chatplus.xunfei` – `assemble_auth_url` (signed websocket URL),
  `hmac_with_sha256`, `build_request`, `split_api_key`, `model_version`,
  `chunk_content` (decodes one reply frame into text and status) and
  `chat_title`.
- `chatplus.functions` – `format_weibo` and `format_zaobao` render
  hot-search and morning-news results as markdown; `translate_prompt`,
  `dalle_request` and `dalle_content` cover DALL·E 3 drawing.
- `chatplus.drawing` – `MjImageRequest` and `build_mj_prompt` for MidJourney
  prompts, `apply_sd_defaults` for Stable Diffusion parameters (raises
  `ValueError` on an empty prompt) and `job_expired`.
- `chatplus.billing` – `Account`, `apply_order` (credits a paid order),
  `order_remark`, `pay_way_name`, `hupi_pay_params`, `reward_calls` and
  `normalize_tx_id`.

## Example

```python
from chatplus.chat_types import get_model_max_token
from chatplus.middleware import AuthError, verify_token

print(get_model_max_token("gpt-4"))  # 8192

try:
    claims = verify_token("token", "secret", now=0)
except AuthError as exc:
    print("rejected:", exc)
```

## What this package does not do

It holds no web server, routes or command-line program, and no database or
cache storage: users, orders, jobs and API keys are not persisted anywhere.
It makes no network calls to chat, drawing or payment services; it builds the
URLs, request bodies and results that such calls use, and applies the
business rules to values passed in.