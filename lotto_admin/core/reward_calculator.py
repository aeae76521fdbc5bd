from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional, Union

from lotto_admin.core.game_logic import WinType

# A "standard" prize configuration row pays the straight win type
CONFIG_BET_TYPE_TO_WIN_TYPE = {
    "standard": WinType.STRAIGHT.value,
    "straight": WinType.STRAIGHT.value,
    "rambolito": WinType.RAMBOLITO.value,
}


class MalformedBetError(ValueError):
    """Bet data that cannot be priced (missing combination, bad stake...)."""


def to_decimal(value: Any) -> Decimal:
    if value is None or isinstance(value, bool):
        raise MalformedBetError(f"Not a money amount: {value!r}")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            # str() first so floats don't carry binary noise into the totals
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise MalformedBetError(f"Not a money amount: {value!r}")
    # NUMERIC columns can hold NaN and Infinity
    if not amount.is_finite():
        raise MalformedBetError(f"Not a money amount: {value!r}")
    return amount


def build_rate_table(
    defaults: Mapping[str, Any],
    overrides: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Decimal]:
    """
    Merge persisted multipliers over the configured defaults.

    Override keys may use prize-configuration names ("standard") or win
    type names ("straight"); unknown keys are ignored.
    """
    table = {key: to_decimal(val) for key, val in defaults.items()}
    for key, val in (overrides or {}).items():
        win_type = CONFIG_BET_TYPE_TO_WIN_TYPE.get(str(key).lower())
        if win_type is None:
            continue
        table[win_type] = to_decimal(val)
    return table


class PrizeCalculator:
    def __init__(self, rates: Mapping[str, Any]):
        # e.g. {"straight": 4500, "rambolito": 750}
        self.rates = {str(key): to_decimal(val) for key, val in rates.items()}

    def rate_for(self, win_type: Union[WinType, str]) -> Decimal:
        key = win_type.value if isinstance(win_type, WinType) else str(win_type)
        return self.rates.get(key, Decimal("0"))

    def calculate(self, win_type: Union[WinType, str], stake: Any) -> Decimal:
        """Payout = multiplier x stake. Unknown win types pay nothing."""
        amount = to_decimal(stake)
        if amount < 0:
            raise MalformedBetError(f"Negative stake: {amount}")
        return self.rate_for(win_type) * amount
