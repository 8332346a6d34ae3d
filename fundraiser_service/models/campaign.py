from dataclasses import dataclass
from datetime import datetime
import enum


class CampaignStatus(enum.Enum):
    """Campaign status; moves one way from ACTIVE to COMPLETED"""
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass
class Campaign:
    """Fundraising campaign held in the in-memory store"""
    id: int
    title: str
    description: str
    goal: float
    raised: float
    image_url: str
    created_at: datetime
    category: str
    organizer: str
    status: CampaignStatus = CampaignStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status is CampaignStatus.ACTIVE

    def apply_donation(self, amount: float) -> bool:
        """Add amount to raised; return True if this completed the campaign"""
        self.raised += amount
        if self.raised >= self.goal and self.status is CampaignStatus.ACTIVE:
            self.status = CampaignStatus.COMPLETED
            return True
        return False

    def __repr__(self):
        return f"<Campaign(id={self.id}, title='{self.title}', status='{self.status.value}')>"
