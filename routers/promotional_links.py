"""
Promotional Links Router
Businesses propose paid promotional links to creators; creators accept or reject them.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from auth.decorators import get_current_business, get_current_creator
from core.errors import NotFoundError
from database.config import get_db
from database.models import Business, Creator
from database.marketplace_models import PromotionalLinkMetrics
from schemas.promotions import (
    ProposalCreate, ProposalStatusUpdate, ProposalStatus,
    proposal_to_dict, budget_to_dict, metrics_to_dict,
)
from services.acceptance_workflow import AcceptanceWorkflow
from services.budget_ledger import BudgetLedger
from services.money import dollars_to_cents
from services.proposal_store import ProposalStore

router = APIRouter(prefix="/business/promotional-links", tags=["Promotional Links"])


@router.post("/propose", response_model=dict)
async def propose_promotional_link(
    proposal_data: ProposalCreate,
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business)
):
    """
    Propose a promotional link to a creator's workspace.
    Price arrives in dollars and is stored in cents.
    """
    if proposal_data.business_id and proposal_data.business_id != business.id:
        raise NotFoundError("Business not found")

    proposal = ProposalStore(db).create_proposal(
        business=business,
        creator_id=proposal_data.creator_id,
        workspace_id=proposal_data.workspace_id,
        title=proposal_data.title,
        url=proposal_data.url,
        start_date=proposal_data.start_date,
        end_date=proposal_data.end_date,
        price_cents=dollars_to_cents(proposal_data.price_in_dollars),
    )

    return {
        "status": 200,
        "message": "Proposal created successfully",
        "data": proposal_to_dict(proposal),
    }


@router.patch("/{proposal_id}/status", response_model=dict)
async def update_proposal_status(
    proposal_id: str,
    status_data: ProposalStatusUpdate,
    db: Session = Depends(get_db),
    creator: Creator = Depends(get_current_creator)
):
    """Accept or reject a pending proposal (receiving creator only)."""
    proposal = AcceptanceWorkflow(db).transition_status(
        proposal_id, status_data.status.value, creator_id=creator.id
    )
    return {
        "status": 200,
        "message": f"Proposal {status_data.status.value} successfully",
        "data": proposal_to_dict(proposal),
    }


@router.get("", response_model=dict)
@router.get("/proposals", response_model=dict)
async def list_business_proposals(
    business_id: Optional[str] = Query(None, alias="businessId"),
    status: Optional[ProposalStatus] = Query(None),
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business)
):
    """Get proposals sent by the current business, newest first."""
    if business_id and business_id != business.id:
        raise NotFoundError("Business not found")

    proposals = ProposalStore(db).list_proposals(
        business_id=business.id,
        statuses=[status.value] if status else None,
    )
    return {
        "status": 200,
        "data": [proposal_to_dict(p) for p in proposals],
    }


@router.get("/budget", response_model=dict)
async def get_budget(
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business)
):
    """Total, spent, pending and available promotional budget."""
    budget = BudgetLedger(db).for_business(business)
    return {"status": 200, "data": budget_to_dict(budget)}


@router.get("/{link_id}/analytics", response_model=dict)
async def get_link_analytics(
    link_id: str,
    db: Session = Depends(get_db),
    business: Business = Depends(get_current_business)
):
    """Counters for a promotional link paid for by the current business."""
    metrics = db.query(PromotionalLinkMetrics).filter(
        PromotionalLinkMetrics.workspace_link_id == link_id,
        PromotionalLinkMetrics.business_id == business.id
    ).first()
    if not metrics:
        raise NotFoundError("Promotional link not found")

    return {"status": 200, "data": metrics_to_dict(metrics)}
