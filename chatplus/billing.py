"""Order fulfilment and reward redemption rules."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Mapping

from chatplus.web import OrderRemark

PAY_WAY_ALIPAY = "支付宝"
PAY_WAY_XUNHU = "虎皮椒"

HUPI_VERSION = "1.1"
HUPI_WAP_NAME = "极客学长"

NON_VIP_CARD_DAYS = 30


@dataclass
class Account:
    """The part of a user record that orders and rewards change."""

    id: int = 0
    vip: bool = False
    expired_time: int = 0
    calls: int = 0
    img_calls: int = 0


def pay_way_name(pay_way: str) -> str:
    """Display name stored with an order for the client's pay way."""
    return PAY_WAY_XUNHU if pay_way == "hupi" else PAY_WAY_ALIPAY


def order_remark(product: Mapping[str, Any]) -> OrderRemark:
    """Snapshot of a product's details to record with an order."""
    return OrderRemark.from_dict(product)


def hupi_pay_params(
    order_no: str, amount: float, subject: str, notify_url: str
) -> dict[str, str]:
    """Request parameters for the HuPiJiao payment gateway."""
    return {
        "version": HUPI_VERSION,
        "trade_order_id": order_no,
        "total_fee": f"{amount:f}",
        "title": subject,
        "notify_url": notify_url,
        "return_url": "",
        "wap_name": HUPI_WAP_NAME,
        "callback_url": "",
    }


def _add_days(timestamp: float, days: int) -> int:
    moment = datetime.fromtimestamp(timestamp) + timedelta(days=days)
    return int(moment.timestamp())


def apply_order(
    account: Account,
    remark: OrderRemark,
    vip_month_calls: int,
    vip_month_img_calls: int,
    now: float | None = None,
) -> Account:
    """Return the account as it stands after a paid order is credited.

    A product with days extends the membership and makes the user a VIP;
    a call card given to a non-VIP user grants 30 days of validity.
    Products without calls credit the monthly VIP allowance instead.
    """
    current = int(time.time() if now is None else now)
    expired_time = account.expired_time
    vip = account.vip
    if remark.days > 0:
        base = expired_time if expired_time > current else current
        expired_time = _add_days(base, remark.days)
        vip = True
    elif not vip:
        expired_time = _add_days(current, NON_VIP_CARD_DAYS)

    calls = account.calls + (remark.calls if remark.calls > 0 else vip_month_calls)
    img_calls = account.img_calls + (
        remark.img_calls if remark.img_calls > 0 else vip_month_img_calls
    )
    return replace(
        account, vip=vip, expired_time=expired_time, calls=calls, img_calls=img_calls
    )


def reward_calls(amount: float, price: float) -> int:
    """Number of calls a reward amount buys, rounded up."""
    if price <= 0:
        raise ValueError("call price must be positive")
    return int(math.ceil(amount / price))


def normalize_tx_id(tx_id: str) -> str:
    """Remove the spaces a user may have copied along with a transaction id."""
    return tx_id.replace(" ", "")