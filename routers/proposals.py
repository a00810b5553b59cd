"""
Proposals Router
Creator-side views of promotional link proposals.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from auth.dependencies import get_current_user
from auth.decorators import get_current_creator
from core.errors import NotFoundError
from database.config import get_db
from database.models import User, Creator, Business, Workspace
from schemas.promotions import ProposalStatus, proposal_to_dict
from services.proposal_store import ProposalStore

router = APIRouter(prefix="/proposals", tags=["Proposals"])


@router.get("/workspace/{workspace_id}", response_model=dict)
async def get_workspace_proposals(
    workspace_id: str,
    status: Optional[ProposalStatus] = Query(None),
    db: Session = Depends(get_db),
    creator: Creator = Depends(get_current_creator)
):
    """Get proposals sent to one of the current creator's workspaces."""
    workspace = db.query(Workspace).filter(
        Workspace.id == workspace_id,
        Workspace.user_id == creator.user_id
    ).first()
    if not workspace:
        raise NotFoundError("Workspace not found")

    proposals = ProposalStore(db).list_proposals(
        workspace_id=workspace.id,
        statuses=[status.value] if status else None,
        with_parties=True,
    )
    return {
        "status": 200,
        "data": [proposal_to_dict(p, include=("business",)) for p in proposals],
    }


@router.get("/{proposal_id}", response_model=dict)
async def get_proposal(
    proposal_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get a single proposal. Visible to the proposing business and the receiving creator."""
    proposal = ProposalStore(db).get_proposal(proposal_id)

    business = db.query(Business).filter(Business.user_id == current_user.id).first()
    creator = db.query(Creator).filter(Creator.user_id == current_user.id).first()
    is_party = (
        (business is not None and business.id == proposal.business_id)
        or (creator is not None and creator.id == proposal.creator_id)
    )
    if not is_party:
        raise NotFoundError("Proposal not found")

    return {"status": 200, "data": proposal_to_dict(proposal)}
