from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any, List, Optional
from enum import Enum

from fundraiser_service.models.campaign import Campaign
from fundraiser_service.models.donation import Donation


class CampaignStatusEnum(str, Enum):
    """Campaign status enumeration for Pydantic"""
    ACTIVE = "active"
    COMPLETED = "completed"


class CamelModel(BaseModel):
    """Base schema emitting camelCase keys on the wire"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FundraiserResponse(CamelModel):
    """Response schema for campaign data"""
    id: int
    title: str
    description: str
    goal: float
    raised: float
    image_url: str
    created_at: datetime
    status: CampaignStatusEnum
    category: str
    organizer: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "title": "Save the Ocean",
                "description": "Help us clean up our oceans and protect marine life.",
                "goal": 50000,
                "raised": 32500,
                "imageUrl": "https://images.unsplash.com/photo-1559827260-dc66d52bef19?w=400",
                "createdAt": "2024-01-15T10:00:00Z",
                "status": "active",
                "category": "Environment",
                "organizer": "Ocean Conservation Society"
            }
        }
    )

    @classmethod
    def from_campaign(cls, campaign: Campaign) -> "FundraiserResponse":
        return cls(
            id=campaign.id,
            title=campaign.title,
            description=campaign.description,
            goal=campaign.goal,
            raised=campaign.raised,
            image_url=campaign.image_url,
            created_at=campaign.created_at,
            status=campaign.status.value,
            category=campaign.category,
            organizer=campaign.organizer,
        )


class DonationResponse(CamelModel):
    """Response schema for donation data"""
    id: int
    fundraiser_id: int
    amount: float
    donor_name: str
    message: str
    created_at: datetime
    anonymous: bool

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 1,
                "fundraiserId": 1,
                "amount": 50,
                "donorName": "John Doe",
                "message": "Great cause!",
                "createdAt": "2024-01-20T14:30:00Z",
                "anonymous": False
            }
        }
    )

    @classmethod
    def from_donation(cls, donation: Donation) -> "DonationResponse":
        return cls(
            id=donation.id,
            fundraiser_id=donation.campaign_id,
            amount=donation.amount,
            donor_name=donation.donor_name,
            message=donation.message,
            created_at=donation.created_at,
            anonymous=donation.anonymous,
        )


class CreateDonationRequest(CamelModel):
    """
    Request schema for a donation.

    Fields are untyped; the store validates them and reports every
    violation at once.
    """
    amount: Any = Field(None, description="Donation amount, positive and at most 100,000")
    donor_name: Any = Field(None, description="Donor display name, 2 to 100 characters")
    message: Any = Field(None, description="Optional message from donor")
    anonymous: Any = Field(False, description="Hide donor identity")

    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "example": {
                "amount": 50,
                "donorName": "Jane Doe",
                "message": "Hope this helps!",
                "anonymous": False
            }
        }
    )


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class DonationSummary(CamelModel):
    total_amount: float
    total_count: int
    average_amount: float


class FundraiserListResponse(CamelModel):
    success: bool = True
    data: List[FundraiserResponse]
    pagination: Pagination


class FundraiserDetailResponse(CamelModel):
    success: bool = True
    data: FundraiserResponse


class DonationListResponse(CamelModel):
    success: bool = True
    data: List[DonationResponse]
    summary: DonationSummary
    pagination: Pagination


class DonationCreatedResponse(CamelModel):
    success: bool = True
    message: str = "Donation created successfully"
    data: DonationResponse


class FundraiserCounts(CamelModel):
    total: int
    active: int
    completed: int


class FundraisingTotals(CamelModel):
    total_raised: float
    total_goal: float
    percentage: float


class DonationTotals(CamelModel):
    total_count: int
    total_amount: float
    average_amount: float


class StatsData(CamelModel):
    fundraisers: FundraiserCounts
    fundraising: FundraisingTotals
    donations: DonationTotals


class StatsResponse(CamelModel):
    success: bool = True
    data: StatsData


class CategoryListResponse(CamelModel):
    success: bool = True
    data: List[str]


class ErrorResponse(CamelModel):
    """Error envelope; errors is only present for validation failures"""
    success: bool = False
    message: str
    errors: Optional[List[str]] = None
    error: Optional[str] = None
