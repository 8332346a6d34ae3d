from dataclasses import dataclass
from datetime import datetime


ANONYMOUS_DONOR = "Anonymous"


@dataclass(frozen=True)
class Donation:
    """Single contribution recorded against one campaign"""
    id: int
    campaign_id: int  # Campaign being donated to
    amount: float
    donor_name: str  # "Anonymous" when anonymous is set
    message: str  # Empty string when no message was given
    created_at: datetime
    anonymous: bool = False

    def __repr__(self):
        return f"<Donation(id={self.id}, campaign_id={self.campaign_id}, amount={self.amount})>"
