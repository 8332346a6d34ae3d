"""
In-memory campaign and donation store.

The store owns both collections for the lifetime of the process. Reads hand
out copies taken under the lock; the donation workflow holds the lock for
its whole read-modify-write so no reader sees ``raised`` incremented
without the goal-completion check applied.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from operator import attrgetter
from typing import Any, Callable, Dict, Generic, List, Optional, Tuple, TypeVar
import math
import threading

from fastapi import Request
import structlog

from fundraiser_service.core.exceptions import NotFoundError, InvalidStateError, ValidationError
from fundraiser_service.models.campaign import Campaign, CampaignStatus
from fundraiser_service.models.donation import Donation, ANONYMOUS_DONOR
from fundraiser_service.services.seed import seed_campaigns, seed_donations

logger = structlog.get_logger(__name__)

T = TypeVar("T")

DEFAULT_MAX_DONATION_AMOUNT = 100_000
MIN_DONOR_NAME_LENGTH = 2
MAX_DONOR_NAME_LENGTH = 100

SORT_ORDERS = ("asc", "desc")

# Wire field name -> key function
CAMPAIGN_SORT_FIELDS: Dict[str, Callable[[Campaign], Any]] = {
    "id": attrgetter("id"),
    "title": attrgetter("title"),
    "goal": attrgetter("goal"),
    "raised": attrgetter("raised"),
    "createdAt": attrgetter("created_at"),
    "category": attrgetter("category"),
    "organizer": attrgetter("organizer"),
    "status": lambda campaign: campaign.status.value,
}

DONATION_SORT_FIELDS: Dict[str, Callable[[Donation], Any]] = {
    "id": attrgetter("id"),
    "amount": attrgetter("amount"),
    "donorName": attrgetter("donor_name"),
    "createdAt": attrgetter("created_at"),
}


@dataclass
class Page(Generic[T]):
    """One slice of a filtered, sorted collection"""
    items: List[T]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit)


@dataclass
class DonationSummary:
    total_amount: float
    total_count: int
    average_amount: float


@dataclass
class Statistics:
    total_campaigns: int
    active_campaigns: int
    completed_campaigns: int
    total_raised: float
    total_goal: float
    percentage: float
    total_donations: int
    total_donation_amount: float
    average_donation: float


@dataclass
class _DonationInput:
    amount: Optional[float] = None
    errors: List[str] = field(default_factory=list)


def _parse_amount(value: Any) -> Optional[float]:
    """Coerce a raw amount to float; None when missing or not a number"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        parsed = float(value)
    elif isinstance(value, str):
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(parsed):
        return None
    return parsed


def validate_donation(amount: Any, donor_name: Any,
                      max_amount: float = DEFAULT_MAX_DONATION_AMOUNT) -> _DonationInput:
    """Check donation input, collecting every violated rule"""
    result = _DonationInput(amount=_parse_amount(amount))

    if result.amount is None or result.amount <= 0:
        result.errors.append("Amount must be a positive number")

    if result.amount is not None and result.amount > max_amount:
        result.errors.append(f"Amount cannot exceed ${max_amount:,.0f}")

    name = donor_name if isinstance(donor_name, str) else None
    if not name or not name.strip():
        result.errors.append("Donor name is required")

    # A whitespace-only name also fails the length check
    if name:
        length = len(name.strip())
        if length < MIN_DONOR_NAME_LENGTH:
            result.errors.append(f"Donor name must be at least {MIN_DONOR_NAME_LENGTH} characters")
        if length > MAX_DONOR_NAME_LENGTH:
            result.errors.append(f"Donor name must be less than {MAX_DONOR_NAME_LENGTH} characters")

    return result


def _sort(items: List[T], fields: Dict[str, Callable[[T], Any]],
          sort_by: str, sort_order: str) -> List[T]:
    errors = []
    if sort_by not in fields:
        errors.append(f"sortBy must be one of: {', '.join(fields)}")
    if sort_order not in SORT_ORDERS:
        errors.append(f"sortOrder must be one of: {', '.join(SORT_ORDERS)}")
    if errors:
        raise ValidationError(errors, message="Invalid sort parameters")

    # Stable sort on id first keeps ties in ascending id order either way
    ordered = sorted(items, key=attrgetter("id"))
    ordered.sort(key=fields[sort_by], reverse=sort_order == "desc")
    return ordered


def _paginate(items: List[T], page: int, limit: int, default_limit: int) -> Page[T]:
    # Out-of-range values fall back to the first page and the default size
    page = page if page >= 1 else 1
    limit = limit if limit >= 1 else default_limit
    start = (page - 1) * limit
    return Page(items=items[start:start + limit], page=page, limit=limit, total=len(items))


def _average(total: float, count: int) -> float:
    return round(total / count, 2) if count > 0 else 0


class CampaignStore:
    """Owner of the campaign and donation collections"""

    def __init__(self,
                 campaigns: Optional[List[Campaign]] = None,
                 donations: Optional[List[Donation]] = None,
                 max_donation_amount: float = DEFAULT_MAX_DONATION_AMOUNT,
                 clock: Optional[Callable[[], datetime]] = None):
        self._campaigns: List[Campaign] = list(campaigns or [])
        self._donations: List[Donation] = list(donations or [])
        self._lock = threading.RLock()
        self.max_donation_amount = max_donation_amount
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @classmethod
    def seeded(cls, **kwargs) -> "CampaignStore":
        """Store preloaded with the fixed startup campaigns and donations"""
        store = cls(seed_campaigns(), seed_donations(), **kwargs)
        logger.info("Campaign store seeded",
                    campaigns=len(store._campaigns),
                    donations=len(store._donations))
        return store

    def _find_campaign(self, campaign_id: int) -> Campaign:
        for campaign in self._campaigns:
            if campaign.id == campaign_id:
                return campaign
        logger.info("Fundraiser not found", campaign_id=campaign_id)
        raise NotFoundError("Fundraiser not found")

    def _next_donation_id(self) -> int:
        return max((donation.id for donation in self._donations), default=0) + 1

    # ------------------------------------------------------------------
    # Campaign queries
    # ------------------------------------------------------------------

    def list_campaigns(self,
                       status: Optional[str] = None,
                       category: Optional[str] = None,
                       search: Optional[str] = None,
                       sort_by: str = "createdAt",
                       sort_order: str = "desc",
                       page: int = 1,
                       limit: int = 10) -> Page[Campaign]:
        """Filter, sort and paginate campaigns"""
        with self._lock:
            result = [replace(campaign) for campaign in self._campaigns]

        if status:
            result = [c for c in result if c.status.value == status]
        if category:
            result = [c for c in result if c.category == category]
        if search:
            term = search.lower()
            result = [
                c for c in result
                if term in c.title.lower() or term in c.description.lower()
            ]

        result = _sort(result, CAMPAIGN_SORT_FIELDS, sort_by, sort_order)
        return _paginate(result, page, limit, default_limit=10)

    def get_campaign(self, campaign_id: int) -> Campaign:
        with self._lock:
            return replace(self._find_campaign(campaign_id))

    def list_categories(self) -> List[str]:
        """Distinct non-empty categories in first-seen order"""
        with self._lock:
            categories = [campaign.category for campaign in self._campaigns]
        return [category for category in dict.fromkeys(categories) if category]

    def get_statistics(self) -> Statistics:
        with self._lock:
            campaigns = [replace(campaign) for campaign in self._campaigns]
            donations = list(self._donations)

        total = len(campaigns)
        active = sum(1 for campaign in campaigns if campaign.is_active)
        total_raised = sum(campaign.raised for campaign in campaigns)
        total_goal = sum(campaign.goal for campaign in campaigns)
        donation_amount = sum(donation.amount for donation in donations)

        return Statistics(
            total_campaigns=total,
            active_campaigns=active,
            # Anything not active counts as completed
            completed_campaigns=total - active,
            total_raised=total_raised,
            total_goal=total_goal,
            percentage=round(total_raised / total_goal * 100, 2) if total_goal > 0 else 0,
            total_donations=len(donations),
            total_donation_amount=donation_amount,
            average_donation=_average(donation_amount, len(donations)),
        )

    # ------------------------------------------------------------------
    # Donations
    # ------------------------------------------------------------------

    def list_donations(self,
                       campaign_id: int,
                       sort_by: str = "createdAt",
                       sort_order: str = "desc",
                       page: int = 1,
                       limit: int = 20) -> Tuple[Page[Donation], DonationSummary]:
        """Donations for one campaign plus a summary over all of them"""
        with self._lock:
            self._find_campaign(campaign_id)
            result = [d for d in self._donations if d.campaign_id == campaign_id]

        result = _sort(result, DONATION_SORT_FIELDS, sort_by, sort_order)
        total_amount = sum(donation.amount for donation in result)
        summary = DonationSummary(
            total_amount=total_amount,
            total_count=len(result),
            average_amount=_average(total_amount, len(result)),
        )
        return _paginate(result, page, limit, default_limit=20), summary

    def submit_donation(self,
                        campaign_id: int,
                        amount: Any,
                        donor_name: Any,
                        message: Any = None,
                        anonymous: Any = False) -> Donation:
        """
        Validate and record a donation, then apply it to the campaign.

        Raises NotFoundError for an unknown campaign, InvalidStateError when
        the campaign no longer accepts donations and ValidationError listing
        every violated rule.
        """
        with self._lock:
            campaign = self._find_campaign(campaign_id)

            if not campaign.is_active:
                logger.info("Donation rejected, fundraiser not active",
                            campaign_id=campaign_id, status=campaign.status.value)
                raise InvalidStateError("Cannot donate to a fundraiser that is not active")

            checked = validate_donation(amount, donor_name, self.max_donation_amount)
            if checked.errors:
                logger.info("Donation validation failed",
                            campaign_id=campaign_id, errors=checked.errors)
                raise ValidationError(checked.errors)

            if message is None:
                text = ""
            else:
                text = message.strip() if isinstance(message, str) else str(message).strip()

            donation = Donation(
                id=self._next_donation_id(),
                campaign_id=campaign.id,
                amount=checked.amount,
                donor_name=ANONYMOUS_DONOR if anonymous else donor_name.strip(),
                message=text,
                created_at=self._clock(),
                anonymous=bool(anonymous),
            )
            self._donations.append(donation)
            completed = campaign.apply_donation(donation.amount)
            raised = campaign.raised

        logger.info("Donation accepted",
                    donation_id=donation.id,
                    campaign_id=campaign_id,
                    amount=donation.amount,
                    raised=raised)
        if completed:
            logger.info("Fundraiser reached its goal",
                        campaign_id=campaign_id,
                        status=CampaignStatus.COMPLETED.value)
        return donation


def get_store(request: Request) -> CampaignStore:
    """FastAPI dependency returning the store owned by the running app"""
    return request.app.state.store
