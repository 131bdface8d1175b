from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum
from sqlalchemy.sql import func
from bakery.db.session import Base
import enum


class UserRole(enum.Enum):
    admin = "admin"
    social_media = "social_media"


class User(Base):
    __tablename__ = "users"


    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(256), nullable=False)
    email = Column(String(256), unique=True, index=True, nullable=False)
    password_hash = Column(String(512), nullable=False)
    role = Column(Enum(UserRole), nullable=True)  # No back-office access until a role is assigned
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
