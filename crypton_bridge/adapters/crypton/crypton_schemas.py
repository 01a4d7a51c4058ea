"""
Esquemas de los payloads crudos de Crypton.

Cada campo es opcional: un numero ausente o no parseable se
decodifica como None, nunca como 0. Los campos desconocidos se
conservan (extra="allow").
"""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _to_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _to_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str) and value.lower() in ("true", "1", "yes"):
        return True
    if isinstance(value, str) and value.lower() in ("false", "0", "no"):
        return False
    return None


OptionalFloat = Annotated[Optional[float], BeforeValidator(to_float)]
OptionalBool = Annotated[Optional[bool], BeforeValidator(_to_bool)]
OptionalStr = Annotated[Optional[str], BeforeValidator(_to_str)]


class RawPayload(BaseModel):
    """Base de los esquemas crudos"""
    model_config = ConfigDict(extra="allow", populate_by_name=True, frozen=True)


class RawMarket(RawPayload):
    base: OptionalStr = None
    quote: OptionalStr = None
    enabled: OptionalBool = None
    min_size: OptionalFloat = Field(default=None, alias="minSize")
    # Se conserva como texto para derivar la precision de su forma decimal
    price_step: OptionalStr = Field(default=None, alias="priceStep")


class RawCurrency(RawPayload):
    id: OptionalStr = None
    name: OptionalStr = None
    enabled: OptionalBool = None
    precision: OptionalFloat = None


class RawTicker(RawPayload):
    bid: OptionalFloat = None
    ask: OptionalFloat = None
    last: OptionalFloat = None
    change24h: OptionalFloat = None
    volume24h: OptionalFloat = None


class RawTrade(RawPayload):
    id: OptionalStr = None
    time: OptionalStr = None
    market: OptionalStr = None
    side: OptionalStr = None
    price: OptionalFloat = None
    size: OptionalFloat = None
    fee: OptionalFloat = None
    fee_currency: OptionalStr = Field(default=None, alias="feeCurrency")
    order_id: OptionalStr = Field(default=None, alias="orderId")


class RawOrder(RawPayload):
    id: OptionalStr = None
    status: OptionalStr = None
    side: OptionalStr = None
    type: OptionalStr = None
    market: OptionalStr = None
    created_at: OptionalStr = Field(default=None, alias="createdAt")
    price: OptionalFloat = None
    size: OptionalFloat = None
    filled_size: OptionalFloat = Field(default=None, alias="filledSize")
    fee: OptionalFloat = None
    fee_currency: OptionalStr = Field(default=None, alias="feeCurrency")


class RawBalance(RawPayload):
    total: OptionalFloat = None
    free: OptionalFloat = None
    locked: OptionalFloat = None


class RawDepositAddress(RawPayload):
    address: OptionalStr = None
    tag: OptionalStr = None


class RawDeposit(RawPayload):
    id: OptionalStr = None
    currency: OptionalStr = None
    amount: OptionalFloat = None
    status: OptionalStr = None
    address: OptionalStr = None
    tag: OptionalStr = None
    txid: OptionalStr = None
    created_at: OptionalStr = Field(default=None, alias="createdAt")
    time: OptionalStr = None
