"""
Acceptance Workflow
State machine for promotional link proposals.

    pending -> accepted   creator accepts; a live promotional link and its
                          metrics row are created in the same transaction
    pending -> rejected   creator rejects; status only
    pending -> expired    end date passed while still pending

Accepted, rejected and expired are terminal. The proposal row is only ever
written with a conditional UPDATE ... WHERE status = 'pending', so when two
requests race on the same proposal exactly one of them matches a row. The
loser rolls back whatever it had staged and gets a ConflictError.
"""

from datetime import datetime
from typing import Dict, Optional, Set
import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from config.app_config import (
    PROMOTIONAL_LINK_ICON, PROMOTIONAL_LINK_BACKGROUND, PROMOTIONAL_LINK_TEXT_COLOR,
)
from core.errors import ValidationError, NotFoundError, ConflictError, InternalError
from database.marketplace_models import (
    PromotionalLinkProposal, ProposalStatusDB,
    WorkspaceLink, WorkspaceLinkTypeDB, PromotionalLinkMetrics,
)

logger = logging.getLogger(__name__)


ALLOWED_TRANSITIONS: Dict[ProposalStatusDB, Set[ProposalStatusDB]] = {
    ProposalStatusDB.PENDING: {
        ProposalStatusDB.ACCEPTED,
        ProposalStatusDB.REJECTED,
        ProposalStatusDB.EXPIRED,
    },
    ProposalStatusDB.ACCEPTED: set(),
    ProposalStatusDB.REJECTED: set(),
    ProposalStatusDB.EXPIRED: set(),
}


def parse_status(value) -> ProposalStatusDB:
    try:
        return ProposalStatusDB(value)
    except ValueError:
        raise ValidationError(f"Invalid status provided: {value!r}")


def ensure_transition(current, target) -> None:
    """
    Raise unless `current -> target` is an allowed transition.

    Raises:
        ValidationError: target is not a state a proposal can move into
        ConflictError: current state is terminal
    """
    current = parse_status(current)
    target = parse_status(target)
    if target == ProposalStatusDB.PENDING:
        raise ValidationError("Proposals cannot be moved back to pending")
    if target not in ALLOWED_TRANSITIONS[current]:
        raise ConflictError(f"Proposal is already {current.value}")


class AcceptanceWorkflow:

    def __init__(self, db: Session):
        self.db = db

    def transition_status(
        self,
        proposal_id: str,
        new_status,
        creator_id: Optional[str] = None,
    ) -> PromotionalLinkProposal:
        """
        Move a pending proposal to `new_status` and return it refreshed.

        When `creator_id` is given the proposal must belong to that creator;
        otherwise it is reported as not found.

        Raises:
            ValidationError, NotFoundError, ConflictError, InternalError
        """
        target = parse_status(new_status)

        proposal = self.db.query(PromotionalLinkProposal).filter(
            PromotionalLinkProposal.id == proposal_id
        ).first()
        if not proposal or (creator_id is not None and proposal.creator_id != creator_id):
            raise NotFoundError("Proposal not found")

        ensure_transition(proposal.status, target)

        now = datetime.utcnow()
        values = {
            PromotionalLinkProposal.status: target,
            PromotionalLinkProposal.updated_at: now,
        }

        try:
            if target == ProposalStatusDB.ACCEPTED:
                link = self._create_promotional_link(proposal)
                self._create_link_metrics(link, proposal)
                values[PromotionalLinkProposal.workspace_link_id] = link.id

            claimed = self._claim_pending(proposal.id, values)
            if not claimed:
                self.db.rollback()
                logger.warning(f"Proposal {proposal_id} was processed concurrently; {target.value} discarded")
                raise ConflictError()

            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Rolled back {target.value} of proposal {proposal_id}: {e}")
            raise InternalError("Failed to update proposal status") from e

        self.db.refresh(proposal)
        logger.info(f"Proposal {proposal.id} {target.value} (link={proposal.workspace_link_id})")
        return proposal

    def expire_overdue(self, now: Optional[datetime] = None) -> int:
        """Mark pending proposals whose end date has passed as expired. Returns the count."""
        now = now or datetime.utcnow()
        try:
            count = self.db.query(PromotionalLinkProposal).filter(
                PromotionalLinkProposal.status == ProposalStatusDB.PENDING,
                PromotionalLinkProposal.end_date < now
            ).update({
                PromotionalLinkProposal.status: ProposalStatusDB.EXPIRED,
                PromotionalLinkProposal.updated_at: now,
            }, synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Proposal expiry sweep failed: {e}")
            raise InternalError("Failed to expire proposals") from e

        if count:
            logger.info(f"Expired {count} overdue proposal(s)")
        return count

    def _claim_pending(self, proposal_id: str, values: dict) -> bool:
        """Compare-and-swap on status. True if this caller won the row."""
        updated = self.db.query(PromotionalLinkProposal).filter(
            PromotionalLinkProposal.id == proposal_id,
            PromotionalLinkProposal.status == ProposalStatusDB.PENDING
        ).update(values, synchronize_session=False)
        return updated == 1

    def _create_promotional_link(self, proposal: PromotionalLinkProposal) -> WorkspaceLink:
        max_order = self.db.query(
            func.coalesce(func.max(WorkspaceLink.order), 0)
        ).filter(WorkspaceLink.workspace_id == proposal.workspace_id).scalar()

        link = WorkspaceLink(
            workspace_id=proposal.workspace_id,
            type=WorkspaceLinkTypeDB.PROMOTIONAL,
            title=proposal.title,
            url=proposal.url,
            order=(max_order or 0) + 1,
            is_active=True,
            icon=PROMOTIONAL_LINK_ICON,
            background_color=PROMOTIONAL_LINK_BACKGROUND,
            text_color=PROMOTIONAL_LINK_TEXT_COLOR,
            config={
                "analyticsEnabled": True,
                "customization": {
                    "promotionalDetails": {
                        "businessId": proposal.business_id,
                        "startDate": proposal.start_date.isoformat(),
                        "endDate": proposal.end_date.isoformat(),
                        "priceCents": proposal.price_cents,
                        "proposalId": proposal.id,
                    },
                },
            },
        )
        self.db.add(link)
        self.db.flush()  # Get the link ID without committing
        return link

    def _create_link_metrics(self, link: WorkspaceLink, proposal: PromotionalLinkProposal) -> PromotionalLinkMetrics:
        metrics = PromotionalLinkMetrics(
            workspace_link_id=link.id,
            business_id=proposal.business_id,
            clicks=0,
            conversions=0,
            revenue_cents=0,
            impressions=0,
        )
        self.db.add(metrics)
        self.db.flush()
        return metrics
