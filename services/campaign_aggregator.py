"""
Campaign Aggregator
Builds the business dashboard view and handles campaign create/status updates.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
import logging

from sqlalchemy.orm import Session

from core.errors import ValidationError, NotFoundError
from database.models import Business, Creator
from database.marketplace_models import (
    Campaign, CampaignStatusDB, PromotionalLinkProposal, ProposalStatusDB,
)
from services.budget_ledger import BudgetLedger, BudgetSummary, avg_completion
from services.proposal_store import ProposalStore

logger = logging.getLogger(__name__)


@dataclass
class OverviewStats:
    active_campaigns: int
    budget: BudgetSummary
    avg_completion: int


@dataclass
class BusinessOverview:
    stats: OverviewStats
    active_campaigns: List[Campaign] = field(default_factory=list)
    draft_campaigns: List[Campaign] = field(default_factory=list)
    completed_campaigns: List[Campaign] = field(default_factory=list)
    # Only pending and rejected; accepted proposals surface as live links
    proposals: List[PromotionalLinkProposal] = field(default_factory=list)


def _parse_campaign_status(value) -> CampaignStatusDB:
    try:
        return CampaignStatusDB(value)
    except ValueError:
        raise ValidationError(f"Invalid status provided: {value!r}")


class CampaignAggregator:

    def __init__(self, db: Session):
        self.db = db

    def get_business_overview(self, business: Business, now: Optional[datetime] = None) -> BusinessOverview:
        now = now or datetime.utcnow()

        campaigns = self.db.query(Campaign).filter(
            Campaign.business_id == business.id
        ).order_by(Campaign.created_at.desc()).all()

        active = [c for c in campaigns if c.status == CampaignStatusDB.ACTIVE]
        drafts = [c for c in campaigns if c.status == CampaignStatusDB.DRAFT]
        completed = [c for c in campaigns if c.status == CampaignStatusDB.COMPLETED]

        budget = BudgetLedger(self.db).for_business(business)
        proposals = ProposalStore(self.db).list_proposals(
            business_id=business.id,
            statuses=[ProposalStatusDB.PENDING, ProposalStatusDB.REJECTED],
            with_parties=True,
        )

        return BusinessOverview(
            stats=OverviewStats(
                active_campaigns=len(active),
                budget=budget,
                avg_completion=avg_completion(active, now),
            ),
            active_campaigns=active,
            draft_campaigns=drafts,
            completed_campaigns=completed,
            proposals=proposals,
        )

    def create_campaign(
        self,
        business: Business,
        title: str,
        creator_id: str,
        description: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        status=CampaignStatusDB.DRAFT,
    ) -> Campaign:
        title = (title or "").strip()
        if not title or not creator_id:
            raise ValidationError("Missing required fields")
        if start_date and end_date and end_date < start_date:
            raise ValidationError("End date must be on or after start date")
        status = _parse_campaign_status(status or CampaignStatusDB.DRAFT)

        creator = self.db.query(Creator).filter(Creator.id == creator_id).first()
        if not creator:
            raise NotFoundError("Creator not found")

        campaign = Campaign(
            business_id=business.id,
            creator_id=creator.id,
            title=title,
            description=description or None,
            start_date=start_date,
            end_date=end_date,
            status=status,
            metrics={},
        )
        self.db.add(campaign)
        self.db.commit()
        self.db.refresh(campaign)

        logger.info(f"Campaign {campaign.id} created by business {business.id} ({status.value})")
        return campaign

    def update_campaign_status(self, business: Business, campaign_id: str, new_status) -> Campaign:
        new_status = _parse_campaign_status(new_status)

        # Another business's campaign is reported as missing
        campaign = self.db.query(Campaign).filter(
            Campaign.id == campaign_id,
            Campaign.business_id == business.id
        ).first()
        if not campaign:
            raise NotFoundError("Campaign not found")

        campaign.status = new_status
        campaign.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(campaign)

        logger.info(f"Campaign {campaign.id} status updated to {new_status.value}")
        return campaign
