"""Built-in chat functions: hot-search lists, morning news and DALL-E drawing."""

from __future__ import annotations

from typing import Any, Mapping

TRANSLATE_PROMPT_TEMPLATE = (
    "Translate the following painting prompt words into English keyword phrases. "
    "Without any explanation, directly output the keyword phrases separated by commas. "
    "The content to be translated is: [{}]"
)

DEFAULT_DALL_API_URL = "https://api.openai.com/v1/images/generations"
DALL_MODEL = "dall-e-3"
DALL_SIZE = "1024x1024"


def _items(data: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    return list(data.get("items") or [])


def format_weibo(data: Mapping[str, Any]) -> str:
    """Render the Weibo hot-search list as markdown."""
    lines = [f"**{data.get('title', '')}**，最新更新：{data.get('updated_at', '')}"]
    lines.extend(
        f"{number}、 [{item.get('title', '')}]({item.get('url', '')}) "
        f"[热度：{item.get('remark', '')}]"
        for number, item in enumerate(_items(data), start=1)
    )
    return "\n\n".join(lines)


def format_zaobao(data: Mapping[str, Any]) -> str:
    """Render the morning news list as markdown."""
    lines = [f"**{data.get('updated_at', '')} 早报：**"]
    lines.extend(str(item.get("title", "")) for item in _items(data))
    lines.append(str(data.get("title", "")))
    return "\n\n".join(lines)


def translate_prompt(prompt: str) -> str:
    """Instruction asking a chat model to translate a painting prompt to English."""
    return TRANSLATE_PROMPT_TEMPLATE.format(prompt)


def dalle_request(prompt: str, image_count: int) -> dict[str, Any]:
    """Body of a DALL-E 3 image generation request; at least one image."""
    return {
        "model": DALL_MODEL,
        "prompt": prompt,
        "n": image_count if image_count > 0 else 1,
        "size": DALL_SIZE,
    }


def dalle_content(prompt: str, image_url: str) -> str:
    """Chat reply presenting a generated image."""
    return f"下面是根据您的描述创作的图片，它描绘了 【{prompt}】 的场景。 \n\n![]({image_url})\n"