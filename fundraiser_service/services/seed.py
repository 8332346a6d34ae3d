"""
Fixed data the store is seeded with at startup
"""
from datetime import datetime, timezone
from typing import List

from fundraiser_service.models.campaign import Campaign, CampaignStatus
from fundraiser_service.models.donation import Donation


def _utc(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=timezone.utc)


def seed_campaigns() -> List[Campaign]:
    return [
        Campaign(
            id=1,
            title="Save the Ocean",
            description="Help us clean up our oceans and protect marine life. Every dollar counts in our mission to preserve the beauty of our planet.",
            goal=50000,
            raised=32500,
            image_url="https://images.unsplash.com/photo-1559827260-dc66d52bef19?w=400",
            created_at=_utc("2024-01-15T10:00:00"),
            status=CampaignStatus.ACTIVE,
            category="Environment",
            organizer="Ocean Conservation Society",
        ),
        Campaign(
            id=2,
            title="Education for All",
            description="Providing educational resources to underserved communities. Help us build a brighter future through education.",
            goal=75000,
            raised=42000,
            image_url="https://images.unsplash.com/photo-1503676260728-1c00da094a0b?w=400",
            created_at=_utc("2024-02-01T10:00:00"),
            status=CampaignStatus.ACTIVE,
            category="Education",
            organizer="Education Foundation",
        ),
        Campaign(
            id=3,
            title="Food Bank Support",
            description="Helping local food banks feed families in need. Your donation helps put food on the table for those who need it most.",
            goal=30000,
            raised=18500,
            image_url="https://images.unsplash.com/photo-1488521787991-ed7bbaae773c?w=400",
            created_at=_utc("2024-02-10T10:00:00"),
            status=CampaignStatus.ACTIVE,
            category="Hunger Relief",
            organizer="Community Food Bank",
        ),
        Campaign(
            id=4,
            title="Animal Shelter Renovation",
            description="Renovating our local animal shelter to provide better care for rescued animals. Help us create a safe haven for our furry friends.",
            goal=40000,
            raised=28000,
            image_url="https://images.unsplash.com/photo-1601758228041-f3b2795255f1?w=400",
            created_at=_utc("2024-01-20T10:00:00"),
            status=CampaignStatus.ACTIVE,
            category="Animals",
            organizer="Paws & Claws Rescue",
        ),
        Campaign(
            id=5,
            title="Clean Water Initiative",
            description="Bringing clean, safe drinking water to communities in need. Every donation helps us install water filtration systems.",
            goal=100000,
            raised=67500,
            image_url="https://images.unsplash.com/photo-1542601906990-b4d3fb778b09?w=400",
            created_at=_utc("2024-01-05T10:00:00"),
            status=CampaignStatus.ACTIVE,
            category="Health",
            organizer="Water for All Foundation",
        ),
        Campaign(
            id=6,
            title="Youth Sports Program",
            description="Supporting youth sports programs in underserved areas. Help kids stay active and learn valuable life skills through sports.",
            goal=25000,
            raised=25000,
            image_url="https://images.unsplash.com/photo-1574629810360-7efbbe195018?w=400",
            created_at=_utc("2024-02-15T10:00:00"),
            status=CampaignStatus.COMPLETED,
            category="Sports",
            organizer="Youth Sports Alliance",
        ),
    ]


def seed_donations() -> List[Donation]:
    rows = [
        (1, 1, 50, "John Doe", "Great cause!", "2024-01-20T14:30:00", False),
        (2, 1, 100, "Jane Smith", "Keep up the good work!", "2024-01-21T09:15:00", False),
        (3, 2, 25, "Bob Johnson", "", "2024-02-05T16:45:00", False),
        (4, 1, 250, "Sarah Williams", "This is so important!", "2024-01-22T11:20:00", False),
        (5, 3, 75, "Mike Davis", "Happy to help!", "2024-02-11T08:30:00", False),
        (6, 2, 500, "Anonymous", "Keep doing great work!", "2024-02-06T14:00:00", True),
        (7, 4, 100, "Emily Chen", "Love animals!", "2024-01-21T15:45:00", False),
        (8, 5, 1000, "Robert Taylor", "Water is life", "2024-01-10T10:00:00", False),
        (9, 1, 30, "Lisa Anderson", "", "2024-01-23T13:15:00", False),
        (10, 4, 200, "David Brown", "Thank you for all you do!", "2024-01-22T09:30:00", False),
    ]
    return [
        Donation(
            id=donation_id,
            campaign_id=campaign_id,
            amount=float(amount),
            donor_name=donor_name,
            message=message,
            created_at=_utc(created_at),
            anonymous=anonymous,
        )
        for donation_id, campaign_id, amount, donor_name, message, created_at, anonymous in rows
    ]
