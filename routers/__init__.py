# Routers Module
# Exports the API routers for the promotional marketplace

from routers.promotional_links import router as promotional_links_router
from routers.proposals import router as proposals_router
from routers.campaigns import router as campaigns_router

__all__ = [
    'promotional_links_router',
    'proposals_router',
    'campaigns_router',
]
