# Campaigns Router for the Linkp Platform
# Business dashboard overview plus campaign create and status updates

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import datetime

from auth.decorators import get_current_business
from database.config import get_db
from database.models import Business
from schemas.promotions import (
    CampaignCreate, CampaignStatusUpdate,
    campaign_to_dict, proposal_to_dict,
)
from services.budget_ledger import campaign_progress
from services.campaign_aggregator import CampaignAggregator

router = APIRouter(prefix="/campaigns", tags=["Campaigns"])


@router.get("/business", response_model=dict)
async def get_business_campaigns(
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business)
):
    """
    Get the current business's campaigns grouped by status,
    budget stats, and its pending/rejected proposals.
    """
    now = datetime.utcnow()
    overview = CampaignAggregator(db).get_business_overview(business, now=now)
    stats = overview.stats

    return {
        "status": 200,
        "data": {
            "stats": {
                "activeCampaigns": stats.active_campaigns,
                "totalBudgetCents": stats.budget.total_cents,
                "spentCents": stats.budget.spent_cents,
                "pendingCents": stats.budget.pending_cents,
                "availableCents": stats.budget.available_cents,
                "avgCompletion": stats.avg_completion,
            },
            "activeCampaigns": [
                {**campaign_to_dict(c), "progress": campaign_progress(c, now)}
                for c in overview.active_campaigns
            ],
            "draftCampaigns": [campaign_to_dict(c) for c in overview.draft_campaigns],
            "completedCampaigns": [campaign_to_dict(c) for c in overview.completed_campaigns],
            "proposals": [
                proposal_to_dict(p, include=("creator", "workspace"))
                for p in overview.proposals
            ],
        },
    }


@router.post("/create", response_model=dict)
async def create_campaign(
    campaign_data: CampaignCreate,
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business)
):
    """Create a campaign with a creator. Defaults to draft."""
    campaign = CampaignAggregator(db).create_campaign(
        business=business,
        title=campaign_data.title,
        creator_id=campaign_data.creator_id,
        description=campaign_data.description,
        start_date=campaign_data.start_date,
        end_date=campaign_data.end_date,
        status=campaign_data.status.value,
    )
    return {
        "status": 200,
        "message": "Campaign created successfully",
        "data": campaign_to_dict(campaign),
    }


@router.patch("/{campaign_id}/status", response_model=dict)
async def update_campaign_status(
    campaign_id: str,
    status_data: CampaignStatusUpdate,
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business)
):
    campaign = CampaignAggregator(db).update_campaign_status(
        business, campaign_id, status_data.status.value
    )
    return {
        "status": 200,
        "message": f"Campaign status updated to {status_data.status.value}",
        "data": campaign_to_dict(campaign),
    }
