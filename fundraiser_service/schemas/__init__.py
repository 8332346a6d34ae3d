from .fundraiser import (
    CreateDonationRequest,
    FundraiserResponse,
    DonationResponse,
    FundraiserListResponse,
    FundraiserDetailResponse,
    DonationListResponse,
    DonationCreatedResponse,
    StatsResponse,
    CategoryListResponse,
    ErrorResponse,
)

__all__ = [
    "CreateDonationRequest",
    "FundraiserResponse",
    "DonationResponse",
    "FundraiserListResponse",
    "FundraiserDetailResponse",
    "DonationListResponse",
    "DonationCreatedResponse",
    "StatsResponse",
    "CategoryListResponse",
    "ErrorResponse",
]
