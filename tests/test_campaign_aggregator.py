"""Campaign Aggregator — dashboard overview and campaign lifecycle."""

from datetime import datetime, timedelta

import pytest

from core.errors import NotFoundError, ValidationError
from database.marketplace_models import Campaign, CampaignStatusDB, ProposalStatusDB
from services.acceptance_workflow import AcceptanceWorkflow
from services.campaign_aggregator import CampaignAggregator


def test_overview_partitions_campaigns_by_status(db, seed):
    now = datetime(2026, 6, 15, 12, 0, 0)
    aggregator = CampaignAggregator(db)
    aggregator.create_campaign(seed.business, "Draft", seed.creator.id)
    aggregator.create_campaign(
        seed.business, "Live", seed.creator.id,
        start_date=now - timedelta(days=10), end_date=now + timedelta(days=10),
        status="active",
    )
    aggregator.create_campaign(seed.business, "Done", seed.creator.id, status=CampaignStatusDB.COMPLETED)
    aggregator.create_campaign(seed.rival, "Not ours", seed.creator.id, status="active")

    overview = aggregator.get_business_overview(seed.business, now=now)

    assert [c.title for c in overview.active_campaigns] == ["Live"]
    assert [c.title for c in overview.draft_campaigns] == ["Draft"]
    assert [c.title for c in overview.completed_campaigns] == ["Done"]
    assert overview.stats.active_campaigns == 1
    assert overview.stats.avg_completion == 50


def test_overview_lists_only_pending_and_rejected_proposals(db, seed, make_proposal):
    make_proposal(title="Waiting", price_cents=10000)
    rejected = make_proposal(title="Declined", price_cents=20000)
    accepted = make_proposal(title="Live link", price_cents=30000)
    workflow = AcceptanceWorkflow(db)
    workflow.transition_status(rejected.id, "rejected")
    workflow.transition_status(accepted.id, "accepted")

    overview = CampaignAggregator(db).get_business_overview(seed.business)

    assert sorted(p.title for p in overview.proposals) == ["Declined", "Waiting"]
    assert all(p.status != ProposalStatusDB.ACCEPTED for p in overview.proposals)
    # Accepted spend still counts in the budget
    assert overview.stats.budget.spent_cents == 30000
    assert overview.stats.budget.pending_cents == 10000
    assert overview.stats.budget.available_cents == 60000


def test_overview_empty_business(db, seed):
    overview = CampaignAggregator(db).get_business_overview(seed.rival)

    assert overview.stats.active_campaigns == 0
    assert overview.stats.avg_completion == 0
    assert overview.proposals == []


def test_create_campaign_defaults_to_draft(db, seed):
    campaign = CampaignAggregator(db).create_campaign(
        seed.business, "  Autumn  ", seed.creator.id, description="Coffee pairing"
    )

    assert campaign.status == CampaignStatusDB.DRAFT
    assert campaign.title == "Autumn"
    assert campaign.metrics == {}


def test_create_campaign_validation(db, seed):
    aggregator = CampaignAggregator(db)
    now = datetime.utcnow()

    with pytest.raises(ValidationError):
        aggregator.create_campaign(seed.business, "", seed.creator.id)
    with pytest.raises(ValidationError):
        aggregator.create_campaign(seed.business, "Backwards", seed.creator.id,
                                   start_date=now, end_date=now - timedelta(days=1))
    with pytest.raises(ValidationError):
        aggregator.create_campaign(seed.business, "Odd", seed.creator.id, status="paused")
    with pytest.raises(NotFoundError):
        aggregator.create_campaign(seed.business, "Ghost", "no-such-creator")

    assert db.query(Campaign).count() == 0


def test_update_campaign_status(db, seed):
    aggregator = CampaignAggregator(db)
    campaign = aggregator.create_campaign(seed.business, "Go live", seed.creator.id)

    updated = aggregator.update_campaign_status(seed.business, campaign.id, "active")
    assert updated.status == CampaignStatusDB.ACTIVE


def test_update_campaign_status_of_other_business_is_not_found(db, seed):
    aggregator = CampaignAggregator(db)
    campaign = aggregator.create_campaign(seed.business, "Mine", seed.creator.id)

    with pytest.raises(NotFoundError):
        aggregator.update_campaign_status(seed.rival, campaign.id, "completed")

    db.expire_all()
    assert db.query(Campaign).one().status == CampaignStatusDB.DRAFT
