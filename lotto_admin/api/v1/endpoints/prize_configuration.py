import logging

from fastapi import APIRouter, Depends, HTTPException

from lotto_admin.api import deps
from lotto_admin.api.responses import server_error
from lotto_admin.core.config import settings
from lotto_admin.core.reward_calculator import CONFIG_BET_TYPE_TO_WIN_TYPE, PrizeCalculator, build_rate_table
from lotto_admin.repositories.prize_config_repository import PrizeConfigRepository
from lotto_admin.schemas import (
    PrizeCalculationRequest,
    PrizeConfigurationResponse,
    PrizeConfigurationUpsert,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _serialize(config) -> dict:
    return PrizeConfigurationResponse.model_validate(config).model_dump(by_alias=True)


def _get_or_404(repo: PrizeConfigRepository, bet_type: str):
    config = repo.get(bet_type.lower())
    if not config:
        raise HTTPException(status_code=404, detail="Prize configuration not found")
    return config


@router.get("")
def list_prize_configurations(repo: PrizeConfigRepository = Depends(deps.get_prize_config_repository)):
    try:
        configs = repo.list_all()
    except Exception as exc:
        return server_error("Error fetching prize configurations", exc)
    return {"success": True, "data": [_serialize(c) for c in configs]}


@router.post("/calculate")
def calculate_prize(
    data: PrizeCalculationRequest,
    repo: PrizeConfigRepository = Depends(deps.get_prize_config_repository),
):
    """Prize a single winning bet of `betAmount` would pay under the stored configuration."""
    try:
        config = _get_or_404(repo, data.bet_type)
    except HTTPException:
        raise
    except Exception as exc:
        return server_error("Error calculating prize", exc)

    if not config.is_active:
        raise HTTPException(status_code=400, detail=f"Prize configuration for {data.bet_type} betting is inactive")

    win_type = CONFIG_BET_TYPE_TO_WIN_TYPE[data.bet_type]
    calculator = PrizeCalculator(build_rate_table(settings.PRIZE_RATES, {data.bet_type: config.multiplier}))

    return {
        "success": True,
        "data": {
            "betType": data.bet_type,
            "betAmount": data.bet_amount,
            "winType": win_type,
            "multiplier": config.multiplier,
            "prizeAmount": calculator.calculate(win_type, data.bet_amount),
            "configuration": {
                "id": config.id,
                "baseAmount": config.base_amount,
                "basePrize": config.base_prize,
                "description": config.description,
            },
        },
    }


@router.get("/{bet_type}")
def get_prize_configuration(
    bet_type: str,
    repo: PrizeConfigRepository = Depends(deps.get_prize_config_repository),
):
    try:
        config = _get_or_404(repo, bet_type)
    except HTTPException:
        raise
    except Exception as exc:
        return server_error("Error fetching prize configuration", exc)
    return {"success": True, "data": _serialize(config)}


@router.post("")
def upsert_prize_configuration(
    data: PrizeConfigurationUpsert,
    repo: PrizeConfigRepository = Depends(deps.get_prize_config_repository),
):
    try:
        config, created = repo.upsert(
            bet_type=data.bet_type,
            multiplier=data.multiplier,
            base_amount=data.base_amount,
            base_prize=data.base_prize,
            description=data.description,
        )
    except Exception as exc:
        repo.rollback()
        return server_error("Error creating/updating prize configuration", exc)

    logger.info("Prize configuration %s %s (multiplier=%s)", config.bet_type,
                "created" if created else "updated", config.multiplier)
    return {
        "success": True,
        "message": "Prize configuration created successfully" if created else "Prize configuration updated successfully",
        "data": _serialize(config),
    }


@router.put("/{bet_type}/toggle")
def toggle_prize_configuration(
    bet_type: str,
    repo: PrizeConfigRepository = Depends(deps.get_prize_config_repository),
):
    try:
        config = repo.toggle(_get_or_404(repo, bet_type))
    except HTTPException:
        raise
    except Exception as exc:
        repo.rollback()
        return server_error("Error toggling prize configuration", exc)

    state = "activated" if config.is_active else "deactivated"
    return {
        "success": True,
        "message": f"Prize configuration {state} successfully",
        "data": _serialize(config),
    }


@router.delete("/{bet_type}")
def delete_prize_configuration(
    bet_type: str,
    repo: PrizeConfigRepository = Depends(deps.get_prize_config_repository),
):
    try:
        repo.delete(_get_or_404(repo, bet_type))
    except HTTPException:
        raise
    except Exception as exc:
        repo.rollback()
        return server_error("Error deleting prize configuration", exc)
    return {"success": True, "message": "Prize configuration deleted successfully"}
