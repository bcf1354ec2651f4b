import pytest

from chatplus.config import (
    AppConfig,
    ChatConfig,
    ModelApiConfig,
    Platform,
    RedisConfig,
    SystemConfig,
)


def test_redis_url_joins_host_and_port():
    cfg = RedisConfig(host="localhost", port=6379)
    assert cfg.url() == "localhost:6379"


def test_platform_values():
    assert Platform("OpenAI") is Platform.OPENAI
    assert Platform.XUNFEI == "XunFei"


def test_app_config_from_file_style_keys():
    secret = "secret"
    password = "password"
    data = {
        "Path": "ignored.toml",
        "Listen": "0.0.0.0:5678",
        "ProxyURL": "http://127.0.0.1:7777",
        "Session": {"SecretKey": secret, "MaxAge": 86400},
        "Redis": {"Host": "localhost", "Port": 6379, "Password": password, "DB": 0},
        "OSS": {"Active": "local", "Local": {"BasePath": "./static/upload", "BaseURL": "/static/upload"}},
        "MjConfigs": [{"Enabled": True, "GuildId": "guild", "UseCDN": True}],
        "SdConfigs": [{"Enabled": False, "Txt2ImgJsonPath": "res/text2img.json"}],
        "HuPiPayConfig": {"Enabled": True, "Name": "wechat"},
        "AlipayConfig": {"SandBox": True, "NotifyURL": "http://localhost/api/payment/alipay/notify"},
        "WeChatBot": True,
    }
    cfg = AppConfig.from_dict(data)
    assert cfg.path == ""
    assert cfg.listen == "0.0.0.0:5678"
    assert cfg.proxy_url == data["ProxyURL"]
    assert cfg.session.secret_key == secret
    assert cfg.session.max_age == 86400
    assert cfg.redis.password == password
    assert cfg.redis.url() == "localhost:6379"
    assert cfg.oss.active == "local"
    assert cfg.oss.local.base_path == "./static/upload"
    assert len(cfg.mj_configs) == 1
    assert cfg.mj_configs[0].use_cdn is True
    assert cfg.mj_configs[0].guild_id == "guild"
    assert cfg.sd_configs[0].txt2img_json_path == "res/text2img.json"
    assert cfg.hu_pi_pay_config.name == "wechat"
    assert cfg.alipay_config.sand_box is True
    assert cfg.we_chat_bot is True


def test_app_config_missing_sections_default():
    cfg = AppConfig.from_dict({})
    assert cfg == AppConfig()


def test_chat_config_from_json_keys():
    cfg = ChatConfig.from_dict(
        {
            "open_ai": {"temperature": 1, "max_tokens": 1024},
            "enable_context": True,
            "context_deep": 4,
            "dall_img_num": 1,
            "unknown": "ignored",
        }
    )
    assert cfg.open_ai == ModelApiConfig(temperature=1.0, max_tokens=1024)
    assert cfg.enable_context is True
    assert cfg.context_deep == 4
    assert cfg.azure == ModelApiConfig()


def test_system_config_from_json_keys():
    cfg = SystemConfig.from_dict(
        {"title": "ChatPlus", "default_models": ["gpt-3.5-turbo"], "vip_month_calls": 1000}
    )
    assert cfg.title == "ChatPlus"
    assert cfg.default_models == ["gpt-3.5-turbo"]
    assert cfg.vip_month_calls == 1000
    assert cfg.force_invite is False


def test_nested_section_must_be_mapping():
    with pytest.raises(TypeError):
        AppConfig.from_dict({"Session": "not a table"})


def test_list_section_must_be_list():
    with pytest.raises(TypeError):
        AppConfig.from_dict({"MjConfigs": {"Enabled": True}})