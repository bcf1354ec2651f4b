"""Drawing task helpers: MidJourney prompt building and Stable Diffusion defaults."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Mapping

from chatplus.web import INVALID_ARGS, SdTaskParams

SD_DEFAULT_WIDTH = 512
SD_DEFAULT_HEIGHT = 512
SD_DEFAULT_CFG_SCALE = 7.0
SD_DEFAULT_SEED = -1
SD_DEFAULT_STEPS = 20
SD_DEFAULT_SAMPLER = "Euler a"

MJ_JOB_TIMEOUT_MINUTES = 10
SD_JOB_TIMEOUT_MINUTES = 5


@dataclass
class MjImageRequest:
    """Options of a MidJourney image request as sent by the client."""

    session_id: str = ""
    prompt: str = ""
    neg_prompt: str = ""
    rate: str = ""
    model: str = ""
    chaos: int = 0
    raw: bool = False
    seed: int = 0
    stylize: int = 0
    img: str = ""
    tile: bool = False
    quality: float = 0.0
    weight: float = 0.0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MjImageRequest:
        return cls(
            session_id=str(data.get("session_id", "") or ""),
            prompt=str(data.get("prompt", "") or ""),
            neg_prompt=str(data.get("neg_prompt", "") or ""),
            rate=str(data.get("rate", "") or ""),
            model=str(data.get("model", "") or ""),
            chaos=int(data.get("chaos", 0) or 0),
            raw=bool(data.get("raw", False)),
            seed=int(data.get("seed", 0) or 0),
            stylize=int(data.get("stylize", 0) or 0),
            img=str(data.get("img", "") or ""),
            tile=bool(data.get("tile", False)),
            quality=float(data.get("quality", 0.0) or 0.0),
            weight=float(data.get("weight", 0.0) or 0.0),
        )


def build_mj_prompt(request: MjImageRequest) -> str:
    """Append the MidJourney parameters the request asks for to its prompt.

    A parameter already written into the prompt by the user is left alone.
    """
    prompt = request.prompt
    if request.rate and "--ar" not in prompt:
        prompt += " --ar " + request.rate
    if request.seed > 0 and "--seed" not in prompt:
        prompt += f" --seed {request.seed}"
    if request.stylize > 0 and "--s" not in prompt and "--stylize" not in prompt:
        prompt += f" --s {request.stylize}"
    if request.chaos > 0 and "--c" not in prompt and "--chaos" not in prompt:
        prompt += f" --c {request.chaos}"
    if request.img:
        prompt = f"{request.img} {prompt}"
        if request.weight > 0:
            prompt += f" --iw {request.weight:f}"
    if request.raw:
        prompt += " --style raw"
    if request.quality > 0:
        prompt += f" --q {request.quality:.2f}"
    if request.neg_prompt:
        prompt += f" --no {request.neg_prompt}"
    if request.tile:
        prompt += " --tile "
    if request.model and "--v" not in prompt and "--niji" not in prompt:
        prompt += f" {request.model}"
    return prompt


def apply_sd_defaults(params: SdTaskParams) -> SdTaskParams:
    """Return a copy of the parameters with unset values filled with defaults.

    Raises ValueError when the prompt is empty.
    """
    if not params.prompt:
        raise ValueError(INVALID_ARGS)
    return replace(
        params,
        width=params.width if params.width > 0 else SD_DEFAULT_WIDTH,
        height=params.height if params.height > 0 else SD_DEFAULT_HEIGHT,
        cfg_scale=params.cfg_scale if params.cfg_scale > 0 else SD_DEFAULT_CFG_SCALE,
        seed=params.seed if params.seed != 0 else SD_DEFAULT_SEED,
        steps=params.steps if params.steps > 0 else SD_DEFAULT_STEPS,
        sampler=params.sampler or SD_DEFAULT_SAMPLER,
    )


def job_expired(
    created_at: datetime, now: datetime | None = None, minutes: int = MJ_JOB_TIMEOUT_MINUTES
) -> bool:
    """True when an unfinished job is older than the given number of minutes."""
    current = datetime.now(created_at.tzinfo) if now is None else now
    return current - created_at > timedelta(minutes=minutes)