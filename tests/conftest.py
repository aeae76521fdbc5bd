from collections.abc import Iterator

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from lotto_admin.core.reward_calculator import PrizeCalculator
from lotto_admin.db.base_class import Base
from lotto_admin.models import lotto, user  # noqa: F401

from factories import DEFAULT_RATES


@pytest.fixture
def calculator() -> PrizeCalculator:
    return PrizeCalculator(DEFAULT_RATES)


@pytest.fixture
def db_session() -> Iterator[Session]:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()
