from decimal import Decimal
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from lotto_admin.models.lotto import PrizeConfiguration


class PrizeConfigRepository:
    """CRUD over prize_configurations (one row per bet type)."""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[PrizeConfiguration]:
        return self.db.query(PrizeConfiguration).order_by(PrizeConfiguration.bet_type.asc()).all()

    def get(self, bet_type: str) -> Optional[PrizeConfiguration]:
        return self.db.query(PrizeConfiguration).filter(PrizeConfiguration.bet_type == bet_type).first()

    def upsert(
        self,
        bet_type: str,
        multiplier: Decimal,
        base_amount: Decimal,
        base_prize: Decimal,
        description: Optional[str] = None,
    ) -> Tuple[PrizeConfiguration, bool]:
        """Returns (configuration, created)."""
        config = self.get(bet_type)
        created = config is None
        if created:
            config = PrizeConfiguration(bet_type=bet_type, is_active=True)
            self.db.add(config)

        config.multiplier = multiplier
        config.base_amount = base_amount
        config.base_prize = base_prize
        config.description = description

        self.db.commit()
        self.db.refresh(config)
        return config, created

    def toggle(self, config: PrizeConfiguration) -> PrizeConfiguration:
        config.is_active = not config.is_active
        self.db.commit()
        self.db.refresh(config)
        return config

    def delete(self, config: PrizeConfiguration) -> None:
        self.db.delete(config)
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
