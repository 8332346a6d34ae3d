from .campaign import Campaign, CampaignStatus
from .donation import Donation, ANONYMOUS_DONOR

__all__ = [
    "Campaign",
    "CampaignStatus",
    "Donation",
    "ANONYMOUS_DONOR",
]
