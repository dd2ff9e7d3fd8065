# safespace/models/professional.py
from sqlalchemy import Column, String, Text, DateTime, JSON, UniqueConstraint

from safespace.core.timezone import utc_now
from safespace.db.base import Base, new_id


class Professional(Base):
    __tablename__ = "professionals"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, unique=True, index=True)
    full_name = Column(String(200), nullable=False)
    title = Column(String(200), nullable=False)
    specializations = Column(JSON, nullable=False, default=list)
    languages = Column(JSON, nullable=False, default=list)
    bio = Column(Text, nullable=True)
    certification_details = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    verified_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utc_now)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now)


class UserRole(Base):
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    role = Column(String(20), nullable=False)
