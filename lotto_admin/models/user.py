import enum
from sqlalchemy import Column, String, Boolean, Enum as SAEnum, DateTime, Integer
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from lotto_admin.db.base_class import Base


class UserRole(str, enum.Enum):
    superadmin = "superadmin"
    admin = "admin"
    area_coordinator = "area_coordinator"
    coordinator = "coordinator"
    agent = "agent"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, nullable=False, index=True)
    full_name = Column(String, nullable=True)
    role = Column(SAEnum(UserRole), nullable=False, default=UserRole.agent)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    tickets = relationship("Ticket", back_populates="user")
