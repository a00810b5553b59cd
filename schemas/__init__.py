# Schemas module for the Linkp Platform
# Pydantic request schemas and response helpers for the promotional flow

from schemas.promotions import (
    # Enums
    ProposalStatus,
    ProposalDecision,
    CampaignStatus,

    # Request schemas
    ProposalCreate,
    ProposalStatusUpdate,
    CampaignCreate,
    CampaignStatusUpdate,

    # Response helpers
    business_summary,
    creator_summary,
    workspace_summary,
    proposal_to_dict,
    campaign_to_dict,
    budget_to_dict,
    metrics_to_dict,
)

__all__ = [
    # Enums
    "ProposalStatus",
    "ProposalDecision",
    "CampaignStatus",

    # Requests
    "ProposalCreate",
    "ProposalStatusUpdate",
    "CampaignCreate",
    "CampaignStatusUpdate",

    # Responses
    "business_summary",
    "creator_summary",
    "workspace_summary",
    "proposal_to_dict",
    "campaign_to_dict",
    "budget_to_dict",
    "metrics_to_dict",
]
