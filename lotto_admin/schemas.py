from typing import Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from decimal import Decimal

PRIZE_BET_TYPES = ("standard", "rambolito")


def _validate_bet_type(v: str) -> str:
    v = (v or "").strip().lower()
    if v not in PRIZE_BET_TYPES:
        raise ValueError("Invalid bet type (standard or rambolito)")
    return v


# --- Prize Configuration Schemas ---
class PrizeConfigurationUpsert(BaseModel):
    bet_type: str = Field(alias="betType")
    multiplier: Decimal
    base_amount: Decimal = Field(default=Decimal("1"), alias="baseAmount")
    base_prize: Decimal = Field(default=Decimal("0"), alias="basePrize")
    description: Optional[str] = None

    class Config:
        populate_by_name = True

    @field_validator('bet_type')
    @classmethod
    def validate_bet_type(cls, v):
        return _validate_bet_type(v)

    @field_validator('multiplier', 'base_amount', 'base_prize')
    @classmethod
    def validate_non_negative(cls, v):
        if v < 0:
            raise ValueError("Must be a positive number")
        return v


class PrizeConfigurationResponse(BaseModel):
    id: int
    bet_type: str = Field(serialization_alias="betType")
    multiplier: Decimal
    base_amount: Decimal = Field(serialization_alias="baseAmount")
    base_prize: Decimal = Field(serialization_alias="basePrize")
    description: Optional[str] = None
    is_active: bool = Field(serialization_alias="isActive")
    created_at: Optional[datetime] = Field(default=None, serialization_alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, serialization_alias="updatedAt")

    class Config:
        from_attributes = True


class PrizeCalculationRequest(BaseModel):
    bet_type: str = Field(alias="betType")
    bet_amount: Decimal = Field(alias="betAmount")

    class Config:
        populate_by_name = True

    @field_validator('bet_type')
    @classmethod
    def validate_bet_type(cls, v):
        return _validate_bet_type(v)

    @field_validator('bet_amount')
    @classmethod
    def validate_amount(cls, v):
        if v < 0:
            raise ValueError("Bet amount must be a positive number")
        return v
