# Promotional Marketplace Models
# Proposals, the workspace links they materialize into, link metrics and campaigns.
# Import these in addition to the identity models in database/models.py

from sqlalchemy import (
    Column, String, Integer, DateTime, ForeignKey, Text, JSON, Enum, Boolean,
    CheckConstraint, Index,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from datetime import datetime
import enum

# Use the same Base from existing models
from database.models import Base, generate_uuid


# ============================================================================
# ENUMS
# ============================================================================

class ProposalStatusDB(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


class WorkspaceLinkTypeDB(str, enum.Enum):
    STANDARD = "standard"
    PROMOTIONAL = "promotional"


class CampaignStatusDB(str, enum.Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"


# ============================================================================
# WORKSPACE LINK
# ============================================================================

class WorkspaceLink(Base):
    """A link shown on a creator's workspace page."""
    __tablename__ = "workspace_links"
    __table_args__ = (
        Index("workspace_links_workspace_id_idx", "workspace_id"),
        Index("workspace_links_order_idx", "order"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    workspace_id = Column(String(36), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False)

    type = Column(Enum(WorkspaceLinkTypeDB, values_callable=lambda x: [e.value for e in x], name="workspacelinktypedb"), nullable=False, default=WorkspaceLinkTypeDB.STANDARD)
    title = Column(String(255), nullable=False)
    url = Column(String(2048), nullable=False)
    icon = Column(String(50))
    background_color = Column(String(20))
    text_color = Column(String(20))
    order = Column(Integer, nullable=False)
    is_active = Column(Boolean, default=True)
    config = Column(JSON)  # {analyticsEnabled, customization: {...}}

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    workspace = relationship("Workspace", back_populates="links")
    metrics = relationship("PromotionalLinkMetrics", back_populates="workspace_link", uselist=False, cascade="all, delete-orphan")


# ============================================================================
# PROPOSAL
# ============================================================================

class PromotionalLinkProposal(Base):
    """A business's paid offer to host a promotional link on a creator's workspace.

    workspace_link_id is populated exactly when the proposal is accepted.
    """
    __tablename__ = "promotional_link_proposals"
    __table_args__ = (
        CheckConstraint("price_cents >= 0", name="ck_proposal_price_non_negative"),
        CheckConstraint("end_date >= start_date", name="ck_proposal_date_range"),
        CheckConstraint(
            "(status = 'accepted') = (workspace_link_id IS NOT NULL)",
            name="ck_proposal_link_iff_accepted",
        ),
        Index("proposals_business_id_idx", "business_id"),
        Index("proposals_workspace_id_idx", "workspace_id"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    business_id = Column(String(36), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    creator_id = Column(String(36), ForeignKey("creators.id", ondelete="CASCADE"), nullable=False)
    workspace_id = Column(String(36), ForeignKey("workspaces.id", ondelete="CASCADE"), nullable=False)

    title = Column(String(255), nullable=False)
    url = Column(String(2048), nullable=False)
    start_date = Column(DateTime, nullable=False)
    end_date = Column(DateTime, nullable=False)
    price_cents = Column(Integer, nullable=False)  # In cents

    status = Column(Enum(ProposalStatusDB, values_callable=lambda x: [e.value for e in x], name="proposalstatusdb"), nullable=False, default=ProposalStatusDB.PENDING)
    workspace_link_id = Column(String(36), ForeignKey("workspace_links.id", ondelete="SET NULL"), unique=True, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    updated_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), onupdate=datetime.utcnow)

    # Relationships
    business = relationship("Business", backref="proposals")
    creator = relationship("Creator", backref="proposals")
    workspace = relationship("Workspace", backref="proposals")
    workspace_link = relationship("WorkspaceLink", foreign_keys=[workspace_link_id])


# ============================================================================
# PROMOTIONAL LINK METRICS
# ============================================================================

class PromotionalLinkMetrics(Base):
    """Counters for a promotional link. Zeroed on acceptance, accrued by analytics ingestion."""
    __tablename__ = "promotional_link_metrics"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    workspace_link_id = Column(String(36), ForeignKey("workspace_links.id", ondelete="CASCADE"), unique=True, nullable=False)
    business_id = Column(String(36), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)

    clicks = Column(Integer, nullable=False, default=0)
    conversions = Column(Integer, nullable=False, default=0)
    revenue_cents = Column(Integer, nullable=False, default=0)
    impressions = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    workspace_link = relationship("WorkspaceLink", back_populates="metrics")
    business = relationship("Business")


# ============================================================================
# CAMPAIGN
# ============================================================================

class Campaign(Base):
    """A business/creator collaboration tracked on the business dashboard."""
    __tablename__ = "campaigns"
    __table_args__ = (
        Index("campaigns_business_id_idx", "business_id"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    business_id = Column(String(36), ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False)
    creator_id = Column(String(36), ForeignKey("creators.id", ondelete="CASCADE"), nullable=False)

    title = Column(String(255), nullable=False)
    description = Column(Text)
    start_date = Column(DateTime)
    end_date = Column(DateTime)

    status = Column(Enum(CampaignStatusDB, values_callable=lambda x: [e.value for e in x], name="campaignstatusdb"), nullable=False, default=CampaignStatusDB.DRAFT)
    metrics = Column(JSON)  # Opaque aggregate blob maintained by analytics

    created_at = Column(DateTime, default=datetime.utcnow, server_default=func.now())
    updated_at = Column(DateTime, default=datetime.utcnow, server_default=func.now(), onupdate=datetime.utcnow)

    # Relationships
    business = relationship("Business", backref="campaigns")
    creator = relationship("Creator", backref="campaigns")
