"""Application, chat and system configuration types."""

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Mapping, get_args, get_origin

LOGIN_USER_ID = "LOGIN_USER_ID"
LOGIN_USER_CACHE = "LOGIN_USER_CACHE"
USER_AUTH_HEADER = "Authorization"
ADMIN_AUTH_HEADER = "Admin-Authorization"
CHAT_TOKEN_HEADER = "Chat-Token"


class Platform(str, Enum):
    OPENAI = "OpenAI"
    AZURE = "Azure"
    CHATGLM = "ChatGLM"
    BAIDU = "Baidu"
    XUNFEI = "XunFei"


def _norm(name: str) -> str:
    return name.replace("_", "").lower()


def _convert(tp: Any, value: Any) -> Any:
    if isinstance(tp, type) and is_dataclass(tp):
        return _decode(tp, value)
    origin = get_origin(tp)
    if origin is list:
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise TypeError(f"expected a list, got {type(value).__name__}")
        (item_type,) = get_args(tp)
        return [_convert(item_type, v) for v in value]
    if origin is dict:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise TypeError(f"expected a mapping, got {type(value).__name__}")
        return dict(value)
    if isinstance(tp, type) and issubclass(tp, Enum):
        return tp(value)
    if tp is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return value


def _decode(cls: type, data: Any) -> Any:
    """Build a dataclass from a mapping, matching keys case-insensitively."""
    if not isinstance(data, Mapping):
        raise TypeError(f"{cls.__name__} expects a mapping, got {type(data).__name__}")
    lookup = {_norm(str(k)): v for k, v in data.items()}
    kwargs: dict[str, Any] = {}
    for f in fields(cls):
        if f.metadata.get("skip"):
            continue
        key = _norm(f.name)
        if key in lookup:
            kwargs[f.name] = _convert(f.type, lookup[key])
    return cls(**kwargs)


@dataclass
class SessionConfig:
    secret_key: str = ""
    max_age: int = 0


@dataclass
class RedisConfig:
    host: str = ""
    port: int = 0
    password: str = ""
    db: int = 0

    def url(self) -> str:
        return f"{self.host}:{self.port}"


@dataclass
class Manager:
    username: str = ""
    password: str = ""


@dataclass
class ChatPlusApiConfig:
    api_url: str = ""
    app_id: str = ""
    token: str = ""


@dataclass
class MidJourneyConfig:
    enabled: bool = False
    user_token: str = ""
    bot_token: str = ""
    guild_id: str = ""
    chanel_id: str = ""
    use_cdn: bool = False
    discord_api: str = ""
    discord_cdn: str = ""
    discord_gateway: str = ""


@dataclass
class StableDiffusionConfig:
    enabled: bool = False
    api_url: str = ""
    api_key: str = ""
    txt2img_json_path: str = ""


@dataclass
class AliYunSmsConfig:
    access_key: str = ""
    access_secret: str = ""
    product: str = ""
    domain: str = ""
    sign: str = ""
    code_temp_id: str = ""


@dataclass
class AlipayConfig:
    enabled: bool = False
    sand_box: bool = False
    app_id: str = ""
    user_id: str = ""
    private_key: str = ""
    public_key: str = ""
    alipay_public_key: str = ""
    root_cert: str = ""
    notify_url: str = ""


@dataclass
class HuPiPayConfig:
    enabled: bool = False
    name: str = ""
    app_id: str = ""
    app_secret: str = ""
    notify_url: str = ""
    pay_url: str = ""


@dataclass
class XXLConfig:
    enabled: bool = False
    server_addr: str = ""
    executor_ip: str = ""
    executor_port: str = ""
    access_token: str = ""
    registry_key: str = ""


@dataclass
class LocalStorageConfig:
    base_path: str = ""
    base_url: str = ""


@dataclass
class MinioOssConfig:
    endpoint: str = ""
    access_key: str = ""
    access_secret: str = ""
    bucket: str = ""
    sub_dir: str = ""
    use_ssl: bool = False
    domain: str = ""


@dataclass
class QiNiuOssConfig:
    zone: str = ""
    access_key: str = ""
    access_secret: str = ""
    bucket: str = ""
    sub_dir: str = ""
    domain: str = ""


@dataclass
class AliYunOssConfig:
    endpoint: str = ""
    access_key: str = ""
    access_secret: str = ""
    bucket: str = ""
    sub_dir: str = ""
    domain: str = ""


@dataclass
class OSSConfig:
    active: str = ""
    local: LocalStorageConfig = field(default_factory=LocalStorageConfig)
    minio: MinioOssConfig = field(default_factory=MinioOssConfig)
    qi_niu: QiNiuOssConfig = field(default_factory=QiNiuOssConfig)
    ali_yun: AliYunOssConfig = field(default_factory=AliYunOssConfig)


@dataclass
class ModelApiConfig:
    temperature: float = 0.0
    max_tokens: int = 0
    api_key: str = ""


@dataclass
class ChatConfig:
    """Default chat settings stored under the "chat" config marker."""

    open_ai: ModelApiConfig = field(default_factory=ModelApiConfig)
    azure: ModelApiConfig = field(default_factory=ModelApiConfig)
    chat_gml: ModelApiConfig = field(default_factory=ModelApiConfig)
    baidu: ModelApiConfig = field(default_factory=ModelApiConfig)
    xun_fei: ModelApiConfig = field(default_factory=ModelApiConfig)
    enable_context: bool = False
    enable_history: bool = False
    context_deep: int = 0
    dall_api_url: str = ""
    dall_img_num: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ChatConfig":
        return _decode(cls, data)


@dataclass
class UserChatConfig:
    api_keys: dict[str, str] = field(default_factory=dict)


@dataclass
class InviteReward:
    chat_calls: int = 0
    img_calls: int = 0


@dataclass
class SystemConfig:
    """System settings stored under the "system" config marker."""

    title: str = ""
    admin_title: str = ""
    models: list[str] = field(default_factory=list)
    init_chat_calls: int = 0
    init_img_calls: int = 0
    vip_month_calls: int = 0
    vip_month_img_calls: int = 0
    enabled_register: bool = False
    enabled_msg: bool = False
    reward_img: str = ""
    enabled_reward: bool = False
    chat_call_price: float = 0.0
    img_call_price: float = 0.0
    enabled_alipay: bool = False
    order_pay_timeout: int = 0
    default_models: list[str] = field(default_factory=list)
    order_pay_info_text: str = ""
    invite_chat_calls: int = 0
    invite_img_calls: int = 0
    force_invite: bool = False
    show_demo_notice: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SystemConfig":
        return _decode(cls, data)


@dataclass
class AppConfig:
    """Top-level application configuration, as read from the config file."""

    path: str = field(default="", metadata={"skip": True})
    listen: str = ""
    session: SessionConfig = field(default_factory=SessionConfig)
    proxy_url: str = ""
    mysql_dns: str = ""
    manager: Manager = field(default_factory=Manager)
    static_dir: str = ""
    static_url: str = ""
    redis: RedisConfig = field(default_factory=RedisConfig)
    api_config: ChatPlusApiConfig = field(default_factory=ChatPlusApiConfig)
    sms_config: AliYunSmsConfig = field(default_factory=AliYunSmsConfig)
    oss: OSSConfig = field(default_factory=OSSConfig)
    mj_configs: list[MidJourneyConfig] = field(default_factory=list)
    we_chat_bot: bool = False
    sd_configs: list[StableDiffusionConfig] = field(default_factory=list)
    xxl_config: XXLConfig = field(default_factory=XXLConfig)
    alipay_config: AlipayConfig = field(default_factory=AlipayConfig)
    hu_pi_pay_config: HuPiPayConfig = field(default_factory=HuPiPayConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "AppConfig":
        return _decode(cls, data)