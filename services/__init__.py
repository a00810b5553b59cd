# Services Module for the Linkp Platform
# Contains the promotional proposal business logic

from services.proposal_store import ProposalStore
from services.acceptance_workflow import AcceptanceWorkflow, ensure_transition
from services.budget_ledger import BudgetLedger, BudgetSummary, compute_budget, campaign_progress, avg_completion
from services.campaign_aggregator import CampaignAggregator, BusinessOverview

__all__ = [
    'ProposalStore',
    'AcceptanceWorkflow',
    'ensure_transition',
    'BudgetLedger',
    'BudgetSummary',
    'compute_budget',
    'campaign_progress',
    'avg_completion',
    'CampaignAggregator',
    'BusinessOverview',
]
