"""Proposal Store — creation rules and scoped listing."""

from datetime import datetime, timedelta

import pytest
from sqlalchemy import inspect

from core.errors import NotFoundError, ValidationError
from database.marketplace_models import PromotionalLinkProposal, ProposalStatusDB
from services.acceptance_workflow import AcceptanceWorkflow
from services.budget_ledger import BudgetLedger
from services.proposal_store import ProposalStore


def _create(db, seed, **overrides):
    now = datetime.utcnow()
    fields = dict(
        business=seed.business,
        creator_id=seed.creator.id,
        workspace_id=seed.workspace.id,
        title="Spring Launch",
        url="https://acme.example.com/spring",
        start_date=now,
        end_date=now + timedelta(days=14),
        price_cents=4999,
    )
    fields.update(overrides)
    return ProposalStore(db).create_proposal(**fields)


def test_create_proposal_is_pending_without_link(db, seed):
    proposal = _create(db, seed)

    assert proposal.id
    assert proposal.status == ProposalStatusDB.PENDING
    assert proposal.workspace_link_id is None
    assert proposal.business_id == seed.business.id
    assert proposal.price_cents == 4999


def test_create_accepts_same_day_range(db, seed):
    now = datetime.utcnow()
    proposal = _create(db, seed, start_date=now, end_date=now)
    assert proposal.start_date == proposal.end_date


def test_create_rejects_inverted_dates(db, seed):
    now = datetime.utcnow()
    with pytest.raises(ValidationError):
        _create(db, seed, start_date=now, end_date=now - timedelta(days=1))
    assert db.query(PromotionalLinkProposal).count() == 0


def test_create_rejects_negative_price(db, seed):
    with pytest.raises(ValidationError):
        _create(db, seed, price_cents=-1)


@pytest.mark.parametrize("field", ["title", "url", "creator_id", "workspace_id"])
def test_create_rejects_missing_fields(db, seed, field):
    with pytest.raises(ValidationError):
        _create(db, seed, **{field: ""})


def test_create_unknown_creator_is_not_found(db, seed):
    with pytest.raises(NotFoundError) as exc_info:
        _create(db, seed, creator_id="missing-creator")
    assert exc_info.value.message == "Creator not found"


def test_create_workspace_must_belong_to_creator(db, seed):
    with pytest.raises(NotFoundError):
        _create(db, seed, workspace_id=seed.other_workspace.id)


def test_create_allows_price_above_available_budget(db, seed):
    """Overcommitting is allowed; the ledger floors available at zero."""
    proposal = _create(db, seed, price_cents=150000)
    AcceptanceWorkflow(db).transition_status(proposal.id, "accepted")

    summary = BudgetLedger(db).for_business(seed.business)
    assert summary.spent_cents == 150000
    assert summary.available_cents == 0


def test_business_without_budget_can_propose(db, seed):
    seed.rival.budget_cents = 0
    db.commit()

    proposal = _create(db, seed, business=seed.rival, price_cents=100)

    assert proposal.status == ProposalStatusDB.PENDING
    summary = BudgetLedger(db).for_business(seed.rival)
    assert summary.pending_cents == 100
    assert summary.available_cents == 0


def test_get_proposal_missing(db, seed):
    with pytest.raises(NotFoundError):
        ProposalStore(db).get_proposal("nope")


def test_list_requires_exactly_one_scope(db, seed):
    store = ProposalStore(db)
    with pytest.raises(ValidationError):
        store.list_proposals()
    with pytest.raises(ValidationError):
        store.list_proposals(business_id=seed.business.id, workspace_id=seed.workspace.id)


def test_list_newest_first(db, seed):
    older = _create(db, seed, title="Older")
    newer = _create(db, seed, title="Newer")
    older.created_at = datetime.utcnow() - timedelta(days=2)
    newer.created_at = datetime.utcnow() - timedelta(days=1)
    db.commit()

    by_business = ProposalStore(db).list_proposals(business_id=seed.business.id)
    by_workspace = ProposalStore(db).list_proposals(workspace_id=seed.workspace.id)

    assert [p.title for p in by_business] == ["Newer", "Older"]
    assert [p.title for p in by_workspace] == ["Newer", "Older"]


def test_list_filters_by_status(db, seed):
    kept = _create(db, seed, title="Kept")
    dropped = _create(db, seed, title="Dropped")
    AcceptanceWorkflow(db).transition_status(dropped.id, "rejected")

    pending = ProposalStore(db).list_proposals(business_id=seed.business.id, statuses=["pending"])
    assert [p.id for p in pending] == [kept.id]

    with pytest.raises(ValidationError):
        ProposalStore(db).list_proposals(business_id=seed.business.id, statuses=["bogus"])


def test_list_is_scoped_to_business(db, seed):
    _create(db, seed)
    assert ProposalStore(db).list_proposals(business_id=seed.rival.id) == []


def test_list_with_parties_loads_related_rows(db, seed):
    _create(db, seed)
    db.expire_all()

    plain = ProposalStore(db).list_proposals(workspace_id=seed.workspace.id)
    assert {"business", "creator", "workspace"} <= inspect(plain[0]).unloaded

    db.expire_all()
    joined = ProposalStore(db).list_proposals(workspace_id=seed.workspace.id, with_parties=True)
    state = inspect(joined[0])
    assert not ({"business", "creator", "workspace"} & state.unloaded)
    assert joined[0].business.company_name == "Acme Coffee"
    assert joined[0].workspace.slug == "jane"
