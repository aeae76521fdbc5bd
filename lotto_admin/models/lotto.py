import enum
from sqlalchemy import Column, String, Boolean, ForeignKey, Numeric, DateTime, Date, Integer, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from lotto_admin.db.base_class import Base


class TicketStatus(str, enum.Enum):
    PENDING = "pending"
    WON = "won"
    LOST = "lost"
    CLAIMED = "claimed"
    CANCELLED = "cancelled"


class DrawStatus(str, enum.Enum):
    OPEN = "open"
    CLOSED = "closed"
    SETTLED = "settled"
    COMPLETED = "completed"


class BetType(str, enum.Enum):
    STANDARD = "standard"
    STRAIGHT = "straight"
    RAMBOLITO = "rambolito"


class Draw(Base):
    __tablename__ = "draws"

    id = Column(Integer, primary_key=True, index=True)
    draw_date = Column(Date, nullable=False, index=True)
    draw_time = Column(String(10), nullable=True)  # "2PM", "5PM", "9PM"
    status = Column(String(20), default=DrawStatus.OPEN.value, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    results = relationship("DrawResult", back_populates="draw", order_by="DrawResult.id")
    tickets = relationship("Ticket", back_populates="draw")


class DrawResult(Base):
    __tablename__ = "draw_results"

    id = Column(Integer, primary_key=True, index=True)
    draw_id = Column(Integer, ForeignKey("draws.id"), nullable=False, index=True)
    winning_number = Column(String(10), nullable=False)
    prize_tier = Column(String(20), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    draw = relationship("Draw", back_populates="results")


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    ticket_number = Column(String(40), unique=True, nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    draw_id = Column(Integer, ForeignKey("draws.id"), nullable=True, index=True)
    total_amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(20), default=TicketStatus.PENDING.value, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    claimed_at = Column(DateTime(timezone=True), nullable=True)

    bets = relationship("Bet", back_populates="ticket", cascade="all, delete-orphan", order_by="Bet.id")
    user = relationship("User", back_populates="tickets")
    draw = relationship("Draw", back_populates="tickets")


class Bet(Base):
    __tablename__ = "bets"

    id = Column(Integer, primary_key=True, index=True)
    ticket_id = Column(Integer, ForeignKey("tickets.id"), nullable=False, index=True)
    bet_combination = Column(String(10), nullable=False)
    bet_type = Column(String(20), nullable=False, default=BetType.STANDARD.value)
    bet_amount = Column(Numeric(12, 2), nullable=False)

    ticket = relationship("Ticket", back_populates="bets")


# Persisted prize table; overrides Settings.PRIZE_RATES per bet type
class PrizeConfiguration(Base):
    __tablename__ = "prize_configurations"

    id = Column(Integer, primary_key=True, index=True)
    bet_type = Column(String(20), unique=True, nullable=False)  # "standard" | "rambolito"
    multiplier = Column(Numeric(12, 2), nullable=False)
    base_amount = Column(Numeric(12, 2), nullable=False, default=1)
    base_prize = Column(Numeric(14, 2), nullable=False, default=0)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
