# Database Models for the Linkp Platform
# Identity and workspace tables. These are owned by the profile/onboarding
# services; the promotional flow only references them.

from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, Text, JSON, Enum, CheckConstraint
from sqlalchemy.orm import declarative_base, relationship
from sqlalchemy.sql import func
import uuid
import enum

Base = declarative_base()

def generate_uuid():
    return str(uuid.uuid4())

# Enums
class UserType(str, enum.Enum):
    BUSINESS = "business"
    CREATOR = "creator"
    ADMIN = "admin"


# Models
class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    email = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255))
    user_type = Column(Enum(UserType, values_callable=lambda x: [e.value for e in x], name="usertype"), default=UserType.CREATOR)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    business = relationship("Business", back_populates="user", uselist=False)
    creator = relationship("Creator", back_populates="user", uselist=False)
    workspaces = relationship("Workspace", back_populates="user", cascade="all, delete-orphan")


class Business(Base):
    """Business profile. budget_cents is the ceiling for promotional spend."""
    __tablename__ = "businesses"
    __table_args__ = (
        CheckConstraint("budget_cents >= 0", name="ck_business_budget_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    company_name = Column(String(255), nullable=False)
    industry = Column(String(255))
    website = Column(String(500))
    budget_cents = Column(Integer, nullable=False, default=0)  # In cents
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="business")


class Creator(Base):
    __tablename__ = "creators"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    bio = Column(Text)
    categories = Column(JSON)  # ["fitness", "travel"]
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="creator")
    workspaces = relationship("Workspace", back_populates="creator")


class Workspace(Base):
    """A creator's link-in-bio page."""
    __tablename__ = "workspaces"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    creator_id = Column(String(36), ForeignKey("creators.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, nullable=False)
    avatar_url = Column(String(500))
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="workspaces")
    creator = relationship("Creator", back_populates="workspaces")
    links = relationship("WorkspaceLink", back_populates="workspace", cascade="all, delete-orphan")
