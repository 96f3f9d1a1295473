"""Resource-specific convenience wrappers."""
from .accounts import AccountsResource
from .campaigns import CampaignsResource
from .catalogs import CatalogsResource
from .line_items import LineItemsResource
from .reports import ReportsResource
from .statistics import StatisticsResource

__all__ = [
    "AccountsResource",
    "CatalogsResource",
    "CampaignsResource",
    "LineItemsResource",
    "ReportsResource",
    "StatisticsResource",
]
