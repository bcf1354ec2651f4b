"""Response, websocket message, order and drawing task types."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum, IntEnum
from typing import Any, Mapping

OK_MSG = "Success"
ERROR_MSG = "系统开小差了"
INVALID_ARGS = "非法参数或参数解析失败"
NO_DATA = "No Data"


class BizCode(IntEnum):
    SUCCESS = 0
    FAILED = 1
    NOT_AUTHORIZED = 400


@dataclass
class BizVo:
    """Business response envelope."""

    code: BizCode = BizCode.SUCCESS
    page: int = 0
    page_size: int = 0
    total: int = 0
    message: str = ""
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"code": int(self.code)}
        if self.page:
            body["page"] = self.page
        if self.page_size:
            body["page_size"] = self.page_size
        if self.total:
            body["total"] = self.total
        if self.message:
            body["message"] = self.message
        if self.data is not None:
            body["data"] = self.data
        return body


class WsMsgType(str, Enum):
    START = "start"
    MIDDLE = "middle"
    END = "end"
    MJ_IMG = "mj"


@dataclass
class WsMessage:
    type: WsMsgType
    content: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "content": self.content}


class OrderStatus(IntEnum):
    NOT_PAID = 0
    SCANNED = 1
    PAID_SUCCESS = 2


@dataclass
class OrderRemark:
    """Product details recorded with an order."""

    days: int = 0
    calls: int = 0
    img_calls: int = 0
    name: str = ""
    price: float = 0.0
    discount: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OrderRemark:
        return cls(
            days=int(data.get("days", 0)),
            calls=int(data.get("calls", 0)),
            img_calls=int(data.get("img_calls", 0)),
            name=str(data.get("name", "")),
            price=float(data.get("price", 0.0)),
            discount=float(data.get("discount", 0.0)),
        )


class TaskType(str, Enum):
    IMAGE = "image"
    UPSCALE = "upscale"
    VARIATION = "variation"

    def __str__(self) -> str:
        return self.value


@dataclass
class MjTask:
    """A MidJourney drawing task."""

    type: TaskType
    id: int = 0
    channel_id: str = ""
    session_id: str = ""
    user_id: int = 0
    prompt: str = ""
    index: int = 0
    message_id: str = ""
    message_hash: str = ""
    retry_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "id": self.id,
            "channel_id": self.channel_id,
            "session_id": self.session_id,
            "type": self.type.value,
            "user_id": self.user_id,
        }
        if self.prompt:
            body["prompt"] = self.prompt
        if self.index:
            body["index"] = self.index
        if self.message_id:
            body["message_id"] = self.message_id
        if self.message_hash:
            body["message_hash"] = self.message_hash
        body["retry_count"] = self.retry_count
        return body


@dataclass
class SdTaskParams:
    task_id: str = ""
    prompt: str = ""
    negative_prompt: str = ""
    steps: int = 0
    sampler: str = ""
    face_fix: bool = False
    cfg_scale: float = 0.0
    seed: int = 0
    height: int = 0
    width: int = 0
    hd_fix: bool = False
    hd_redraw_rate: float = 0.0
    hd_scale: int = 0
    hd_scale_alg: str = ""
    hd_steps: int = 0


@dataclass
class SdTask:
    """A Stable Diffusion drawing task."""

    type: TaskType
    id: int = 0
    session_id: str = ""
    user_id: int = 0
    prompt: str = ""
    params: SdTaskParams = field(default_factory=SdTaskParams)
    retry_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "id": self.id,
            "session_id": self.session_id,
            "type": self.type.value,
            "user_id": self.user_id,
        }
        if self.prompt:
            body["prompt"] = self.prompt
        body["params"] = asdict(self.params)
        body["retry_count"] = self.retry_count
        return body