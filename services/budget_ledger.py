"""
Budget Ledger
Derives a business's promotional budget position from its proposals and
the completion of its active campaigns.

Nothing here is cached or persisted: every figure is recomputed from the
current rows so the ledger cannot drift from the proposals it describes.
"""

from dataclasses import dataclass, asdict
from datetime import datetime
from typing import Iterable, List, Optional
import math

from sqlalchemy.orm import Session

from database.models import Business
from database.marketplace_models import (
    PromotionalLinkProposal, ProposalStatusDB, Campaign, CampaignStatusDB,
)


@dataclass(frozen=True)
class BudgetSummary:
    total_cents: int
    spent_cents: int
    pending_cents: int
    available_cents: int

    def to_dict(self) -> dict:
        return asdict(self)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_budget(total_cents: int, proposals: Iterable) -> BudgetSummary:
    """
    Sum accepted proposals into spent and pending ones into pending.
    Rejected and expired proposals hold no budget. Available is floored
    at zero if the business is overcommitted.
    """
    spent = 0
    pending = 0
    for proposal in proposals:
        status = ProposalStatusDB(proposal.status)
        if status == ProposalStatusDB.ACCEPTED:
            spent += proposal.price_cents or 0
        elif status == ProposalStatusDB.PENDING:
            pending += proposal.price_cents or 0

    total = total_cents or 0
    return BudgetSummary(
        total_cents=total,
        spent_cents=spent,
        pending_cents=pending,
        available_cents=max(0, total - spent - pending),
    )


def campaign_progress(campaign, now: datetime) -> int:
    """Percent of the campaign's date range elapsed at `now`, clamped to [0, 100]."""
    start, end = campaign.start_date, campaign.end_date
    if start is None or end is None:
        return 0
    total = (end - start).total_seconds()
    if total <= 0:
        return 0
    elapsed = (now - start).total_seconds()
    return min(100, max(0, _round_half_up(elapsed / total * 100)))


def avg_completion(active_campaigns: List, now: datetime) -> int:
    """Mean progress over active campaigns, 0 when there are none."""
    if not active_campaigns:
        return 0
    total = sum(campaign_progress(c, now) for c in active_campaigns)
    return _round_half_up(total / len(active_campaigns))


class BudgetLedger:
    """Loads a business's rows and applies the pure ledger functions."""

    def __init__(self, db: Session):
        self.db = db

    def for_business(self, business: Business) -> BudgetSummary:
        proposals = self.db.query(PromotionalLinkProposal).filter(
            PromotionalLinkProposal.business_id == business.id,
            PromotionalLinkProposal.status.in_([ProposalStatusDB.ACCEPTED, ProposalStatusDB.PENDING])
        ).all()
        return compute_budget(business.budget_cents, proposals)

    def avg_completion_for_business(self, business: Business, now: Optional[datetime] = None) -> int:
        active = self.db.query(Campaign).filter(
            Campaign.business_id == business.id,
            Campaign.status == CampaignStatusDB.ACTIVE
        ).all()
        return avg_completion(active, now or datetime.utcnow())
