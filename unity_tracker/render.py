from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, Optional, Union

from .models import AccountInfo, DisplayFields, LookupState, Phase, ResultPanel


DEFAULT_BALANCE = "0"
DEFAULT_ACCOUNT_NAME = "Active"
DEFAULT_SEQUENCE = "N/A"

# Browsers' toLocaleString() keeps at most three fraction digits.
_FRACTION_STEP = Decimal("0.001")


def render(state: LookupState) -> DisplayFields:
    """Project a lookup state into the fields the page shows. Pure."""
    if state.phase == Phase.LOADING:
        return DisplayFields(busy=True)
    if state.phase == Phase.FAILED:
        return DisplayFields(error=state.error_message)
    if state.phase == Phase.SUCCESS:
        return DisplayFields(result=render_account(state.result))
    return DisplayFields()


def render_account(info: AccountInfo) -> ResultPanel:
    return ResultPanel(
        balance=format_balance(info.xrp_balance),
        account_name=_account_name(info.account_name),
        sequence=str(info.sequence) if info.sequence else DEFAULT_SEQUENCE,
        account=info.account or "",
    )


def format_balance(value: Optional[Union[str, int, float]]) -> str:
    """Group thousands with commas, en-US style. Unparseable input is returned as is."""
    if value is None:
        return DEFAULT_BALANCE
    raw = str(value).strip()
    if not raw:
        return DEFAULT_BALANCE
    try:
        amount = Decimal(raw)
        if not amount.is_finite():
            return raw
        rounded = amount.quantize(_FRACTION_STEP, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return raw
    if rounded.is_zero():
        return DEFAULT_BALANCE
    text = f"{rounded:,f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _account_name(value: Optional[Union[str, Dict[str, Any]]]) -> str:
    if isinstance(value, dict):
        value = value.get("name")
    return value or DEFAULT_ACCOUNT_NAME
