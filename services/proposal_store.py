"""
Proposal Store
Validates and persists promotional link proposals.
"""

from datetime import datetime
from typing import List, Optional, Iterable
import logging

from sqlalchemy.orm import Session, joinedload

from core.errors import ValidationError, NotFoundError
from database.models import Business, Creator, Workspace
from database.marketplace_models import PromotionalLinkProposal, ProposalStatusDB

logger = logging.getLogger(__name__)


class ProposalStore:
    """
    Creation and reads of proposals.
    Status changes after creation belong to the AcceptanceWorkflow.
    """

    def __init__(self, db: Session):
        self.db = db

    def create_proposal(
        self,
        business: Business,
        creator_id: str,
        workspace_id: str,
        title: str,
        url: str,
        start_date: datetime,
        end_date: datetime,
        price_cents: int,
    ) -> PromotionalLinkProposal:
        """
        Create a pending proposal from `business` to a creator's workspace.

        Raises:
            ValidationError: missing fields, negative price or inverted date range
            NotFoundError: unknown creator, or a workspace the creator doesn't own
        """
        title = (title or "").strip()
        url = (url or "").strip()
        if business is None or not creator_id or not workspace_id or not title or not url:
            raise ValidationError("Missing required fields")
        if start_date is None or end_date is None:
            raise ValidationError("Missing required fields")
        if price_cents is None or price_cents < 0:
            raise ValidationError("Price must be zero or greater")
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        creator = self.db.query(Creator).filter(Creator.id == creator_id).first()
        if not creator:
            raise NotFoundError("Creator not found")

        workspace = self.db.query(Workspace).filter(
            Workspace.id == workspace_id,
            Workspace.user_id == creator.user_id
        ).first()
        if not workspace:
            raise NotFoundError("Workspace not found or does not belong to creator")

        proposal = PromotionalLinkProposal(
            business_id=business.id,
            creator_id=creator.id,
            workspace_id=workspace.id,
            title=title,
            url=url,
            start_date=start_date,
            end_date=end_date,
            price_cents=price_cents,
            status=ProposalStatusDB.PENDING,
            workspace_link_id=None,
        )
        self.db.add(proposal)
        self.db.commit()
        self.db.refresh(proposal)

        logger.info(
            f"Proposal {proposal.id} created by business {business.id} "
            f"for workspace {workspace.id} at {price_cents} cents"
        )
        return proposal

    def get_proposal(self, proposal_id: str) -> PromotionalLinkProposal:
        proposal = self.db.query(PromotionalLinkProposal).filter(
            PromotionalLinkProposal.id == proposal_id
        ).first()
        if not proposal:
            raise NotFoundError("Proposal not found")
        return proposal

    def list_proposals(
        self,
        business_id: Optional[str] = None,
        workspace_id: Optional[str] = None,
        statuses: Optional[Iterable] = None,
        with_parties: bool = False,
    ) -> List[PromotionalLinkProposal]:
        """
        List proposals for exactly one business or workspace, newest first.

        with_parties joins the business, creator and workspace rows into the
        same query.
        """
        if bool(business_id) == bool(workspace_id):
            raise ValidationError("Provide exactly one of businessId or workspaceId")

        query = self.db.query(PromotionalLinkProposal)
        if business_id:
            query = query.filter(PromotionalLinkProposal.business_id == business_id)
        else:
            query = query.filter(PromotionalLinkProposal.workspace_id == workspace_id)

        if statuses:
            try:
                wanted = [ProposalStatusDB(s) for s in statuses]
            except ValueError:
                raise ValidationError("Invalid status filter")
            query = query.filter(PromotionalLinkProposal.status.in_(wanted))

        if with_parties:
            query = query.options(
                joinedload(PromotionalLinkProposal.business),
                joinedload(PromotionalLinkProposal.creator),
                joinedload(PromotionalLinkProposal.workspace),
            )

        return query.order_by(PromotionalLinkProposal.created_at.desc()).all()
