# Pydantic Schemas for Promotional Proposals and Campaigns
# Request bodies use the camelCase keys the dashboard sends; responses are
# built by the *_to_dict helpers at the bottom of this module.

from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from services.money import format_cents


# ============================================================================
# ENUMS
# ============================================================================

class ProposalStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


class ProposalDecision(str, Enum):
    """Statuses a creator may set on a pending proposal."""
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class CampaignStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    COMPLETED = "completed"


def _to_naive_utc(v: Optional[datetime]) -> Optional[datetime]:
    if v is not None and v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


# ============================================================================
# PROPOSAL SCHEMAS
# ============================================================================

class ProposalCreate(BaseModel):
    """Schema for proposing a promotional link to a creator."""
    title: str = Field(..., min_length=1, max_length=255)
    url: str = Field(..., min_length=1, max_length=2048)
    start_date: datetime = Field(..., alias="startDate")
    end_date: datetime = Field(..., alias="endDate")
    price_in_dollars: Decimal = Field(..., alias="priceInDollars")
    creator_id: str = Field(..., alias="creatorId")
    workspace_id: str = Field(..., alias="workspaceId")
    business_id: Optional[str] = Field(None, alias="businessId")

    class Config:
        populate_by_name = True

    @validator('url')
    def validate_url(cls, v):
        if not v.startswith(('http://', 'https://')):
            raise ValueError('Must be a valid URL')
        return v

    @validator('start_date', 'end_date')
    def normalize_dates(cls, v):
        return _to_naive_utc(v)


class ProposalStatusUpdate(BaseModel):
    status: ProposalDecision


# ============================================================================
# CAMPAIGN SCHEMAS
# ============================================================================

class CampaignCreate(BaseModel):
    """Schema for creating a campaign."""
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    start_date: Optional[datetime] = Field(None, alias="startDate")
    end_date: Optional[datetime] = Field(None, alias="endDate")
    creator_id: str = Field(..., alias="creatorId")
    status: CampaignStatus = CampaignStatus.DRAFT

    class Config:
        populate_by_name = True

    @validator('start_date', 'end_date')
    def normalize_dates(cls, v):
        return _to_naive_utc(v)


class CampaignStatusUpdate(BaseModel):
    status: CampaignStatus


# ============================================================================
# RESPONSE HELPERS
# ============================================================================

def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _enum_value(value):
    return value.value if isinstance(value, Enum) else value


def business_summary(business) -> Optional[dict]:
    if business is None:
        return None
    return {
        "id": business.id,
        "companyName": business.company_name,
        "industry": business.industry,
    }


def creator_summary(creator) -> Optional[dict]:
    if creator is None:
        return None
    return {
        "id": creator.id,
        "bio": creator.bio,
        "categories": creator.categories or [],
    }


def workspace_summary(workspace) -> Optional[dict]:
    if workspace is None:
        return None
    return {
        "id": workspace.id,
        "name": workspace.name,
        "slug": workspace.slug,
        "avatarUrl": workspace.avatar_url,
    }


_PARTY_SUMMARIES = {
    "business": business_summary,
    "creator": creator_summary,
    "workspace": workspace_summary,
}


def proposal_to_dict(proposal, include=()) -> dict:
    """
    Convert PromotionalLinkProposal model to response dict.
    `include` names related parties ("business", "creator", "workspace") to nest.
    """
    data = {
        "id": proposal.id,
        "businessId": proposal.business_id,
        "creatorId": proposal.creator_id,
        "workspaceId": proposal.workspace_id,
        "title": proposal.title,
        "url": proposal.url,
        "startDate": _iso(proposal.start_date),
        "endDate": _iso(proposal.end_date),
        "priceCents": proposal.price_cents,
        "price": format_cents(proposal.price_cents),
        "status": _enum_value(proposal.status),
        "workspaceLinkId": proposal.workspace_link_id,
        "createdAt": _iso(proposal.created_at),
        "updatedAt": _iso(proposal.updated_at),
    }
    for name in include:
        data[name] = _PARTY_SUMMARIES[name](getattr(proposal, name))
    return data


def campaign_to_dict(campaign) -> dict:
    """Convert Campaign model to response dict."""
    return {
        "id": campaign.id,
        "businessId": campaign.business_id,
        "creatorId": campaign.creator_id,
        "title": campaign.title,
        "description": campaign.description,
        "startDate": _iso(campaign.start_date),
        "endDate": _iso(campaign.end_date),
        "status": _enum_value(campaign.status),
        "metrics": campaign.metrics or {},
        "createdAt": _iso(campaign.created_at),
        "updatedAt": _iso(campaign.updated_at),
    }


def budget_to_dict(budget) -> dict:
    return {
        "totalCents": budget.total_cents,
        "spentCents": budget.spent_cents,
        "pendingCents": budget.pending_cents,
        "availableCents": budget.available_cents,
        "total": format_cents(budget.total_cents),
        "spent": format_cents(budget.spent_cents),
        "pending": format_cents(budget.pending_cents),
        "available": format_cents(budget.available_cents),
    }


def metrics_to_dict(metrics) -> dict:
    """Convert PromotionalLinkMetrics to response dict with derived rates."""
    clicks = metrics.clicks or 0
    impressions = metrics.impressions or 0
    conversions = metrics.conversions or 0
    return {
        "workspaceLinkId": metrics.workspace_link_id,
        "businessId": metrics.business_id,
        "clicks": clicks,
        "conversions": conversions,
        "impressions": impressions,
        "revenueCents": metrics.revenue_cents or 0,
        "revenue": format_cents(metrics.revenue_cents or 0),
        "ctr": round(clicks / impressions * 100, 2) if impressions else 0.0,
        "conversionRate": round(conversions / clicks * 100, 2) if clicks else 0.0,
    }
