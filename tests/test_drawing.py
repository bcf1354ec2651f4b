from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from chatplus.drawing import (
    MJ_JOB_TIMEOUT_MINUTES,
    SD_JOB_TIMEOUT_MINUTES,
    MjImageRequest,
    apply_sd_defaults,
    build_mj_prompt,
    job_expired,
)
from chatplus.web import INVALID_ARGS, SdTaskParams


def test_plain_prompt_unchanged():
    assert build_mj_prompt(MjImageRequest(prompt="a cat")) == "a cat"


def test_rate_appended_when_absent():
    request = MjImageRequest(prompt="a cat", rate="16:9")
    assert build_mj_prompt(request) == "a cat" + " --ar " + "16:9"


def test_rate_skipped_when_prompt_has_ar():
    prompt = "a cat --ar 1:1"
    assert build_mj_prompt(MjImageRequest(prompt=prompt, rate="16:9")) == prompt


def test_seed_stylize_chaos_appended_in_order():
    request = MjImageRequest(prompt="dog", seed=42, stylize=100, chaos=5)
    assert build_mj_prompt(request) == f"dog --seed {42} --s {100} --c {5}"


def test_stylize_skipped_when_prompt_has_s():
    prompt = "dog --s 250"
    assert build_mj_prompt(MjImageRequest(prompt=prompt, stylize=100)) == prompt


def test_image_prefixed_with_weight():
    request = MjImageRequest(prompt="dog", img="http://localhost/a.png", weight=0.5)
    result = build_mj_prompt(request)
    assert result.startswith("http://localhost/a.png dog")
    assert result.endswith(" --iw 0.500000")


def test_weight_ignored_without_image():
    assert build_mj_prompt(MjImageRequest(prompt="dog", weight=0.5)) == "dog"


def test_flags_raw_quality_no_tile_model():
    request = MjImageRequest(
        prompt="dog", raw=True, quality=0.5, neg_prompt="cats", tile=True, model="--v 5.2"
    )
    result = build_mj_prompt(request)
    assert result.startswith("dog --style raw")
    assert " --q 0.50" in result
    assert " --no cats" in result
    assert " --tile " in result
    assert result.endswith(" --v 5.2")


def test_model_skipped_when_prompt_has_niji():
    prompt = "dog --niji 5"
    assert build_mj_prompt(MjImageRequest(prompt=prompt, model="--v 5.2")) == prompt


def test_request_from_dict():
    request = MjImageRequest.from_dict({"prompt": "dog", "seed": 7, "raw": True})
    assert request.prompt == "dog"
    assert request.seed == 7
    assert request.raw is True
    assert request.chaos == 0


def test_sd_defaults_fill_unset_values():
    params = apply_sd_defaults(SdTaskParams(prompt="a house"))
    assert params.width == 512
    assert params.height == 512
    assert params.cfg_scale == 7
    assert params.seed == -1
    assert params.steps == 20
    assert params.sampler == "Euler a"
    assert params.prompt == "a house"


def test_sd_defaults_keep_given_values():
    given = SdTaskParams(
        prompt="a house", width=768, height=640, cfg_scale=9.5, seed=123, steps=30,
        sampler="DPM++ 2M",
    )
    assert apply_sd_defaults(given) == given


def test_sd_defaults_do_not_mutate_input():
    given = SdTaskParams(prompt="a house")
    original = replace(given)
    apply_sd_defaults(given)
    assert given == original


def test_sd_defaults_reject_empty_prompt():
    with pytest.raises(ValueError, match=INVALID_ARGS):
        apply_sd_defaults(SdTaskParams())


def test_job_expired_after_timeout():
    created = datetime(2024, 1, 1, 12, 0, 0)
    later = created + timedelta(minutes=MJ_JOB_TIMEOUT_MINUTES, seconds=1)
    assert job_expired(created, later, MJ_JOB_TIMEOUT_MINUTES) is True


def test_job_not_expired_at_boundary():
    created = datetime(2024, 1, 1, 12, 0, 0)
    at_limit = created + timedelta(minutes=SD_JOB_TIMEOUT_MINUTES)
    assert job_expired(created, at_limit, SD_JOB_TIMEOUT_MINUTES) is False


def test_job_expired_defaults_to_now():
    created = datetime.now() - timedelta(hours=1)
    assert job_expired(created) is True
    assert job_expired(datetime.now()) is False