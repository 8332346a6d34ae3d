from fastapi import APIRouter, Depends, Query
from typing import Optional
from fundraiser_service.core.config import get_settings
from fundraiser_service.core.exceptions import (
    StoreError,
    NotFoundError,
    InvalidStateError,
    ValidationError,
    InternalError,
)
from fundraiser_service.middleware.metrics import record_donation
from fundraiser_service.middleware.tracing import get_tracer
from fundraiser_service.services.store import CampaignStore, get_store
from fundraiser_service.schemas.fundraiser import (
    CreateDonationRequest,
    FundraiserResponse,
    DonationResponse,
    FundraiserListResponse,
    FundraiserDetailResponse,
    DonationListResponse,
    DonationCreatedResponse,
    StatsResponse,
    CategoryListResponse,
)

router = APIRouter(prefix="/api", tags=["fundraisers"])
tracer = get_tracer(__name__)


def _page_param(value: Optional[str], default: int) -> int:
    """Lenient page/limit parsing: anything missing, non-integer or < 1 is the default"""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 1 else default


def _fundraiser_id(value: str) -> int:
    """Path ids are plain ASCII digits; anything else names no fundraiser"""
    if not (value.isascii() and value.isdigit()):
        raise NotFoundError("Fundraiser not found")
    return int(value)


@router.get("/fundraisers", response_model=FundraiserListResponse)
def list_fundraisers(
    status: Optional[str] = Query(None, description="Filter by status (active, completed)"),
    category: Optional[str] = Query(None, description="Filter by exact category"),
    search: Optional[str] = Query(None, description="Case-insensitive match on title or description"),
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Field to sort by (default createdAt)"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc (default desc)"),
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Page size"),
    store: CampaignStore = Depends(get_store)
):
    """Get fundraisers with filtering, sorting and pagination"""
    settings = get_settings()
    try:
        result = store.list_campaigns(
            status=status,
            category=category,
            search=search,
            sort_by=sort_by or "createdAt",
            sort_order=sort_order or "desc",
            page=_page_param(page, 1),
            limit=_page_param(limit, settings.default_page_size),
        )
    except StoreError:
        raise
    except Exception as e:
        raise InternalError("Error fetching fundraisers", e)

    return FundraiserListResponse(
        data=[FundraiserResponse.from_campaign(campaign) for campaign in result.items],
        pagination={
            "page": result.page,
            "limit": result.limit,
            "total": result.total,
            "total_pages": result.total_pages,
        },
    )


@router.get("/fundraisers/{fundraiser_id}", response_model=FundraiserDetailResponse)
def get_fundraiser(
    fundraiser_id: str,
    store: CampaignStore = Depends(get_store)
):
    """Get a fundraiser by ID"""
    try:
        campaign = store.get_campaign(_fundraiser_id(fundraiser_id))
    except StoreError:
        raise
    except Exception as e:
        raise InternalError("Error fetching fundraiser", e)

    return FundraiserDetailResponse(data=FundraiserResponse.from_campaign(campaign))


@router.get("/fundraisers/{fundraiser_id}/donations", response_model=DonationListResponse)
def list_donations(
    fundraiser_id: str,
    sort_by: Optional[str] = Query(None, alias="sortBy", description="Field to sort by (default createdAt)"),
    sort_order: Optional[str] = Query(None, alias="sortOrder", description="asc or desc (default desc)"),
    page: Optional[str] = Query(None, description="Page number, starting at 1"),
    limit: Optional[str] = Query(None, description="Page size"),
    store: CampaignStore = Depends(get_store)
):
    """Get donations for a fundraiser with a summary over all of them"""
    settings = get_settings()
    try:
        result, summary = store.list_donations(
            _fundraiser_id(fundraiser_id),
            sort_by=sort_by or "createdAt",
            sort_order=sort_order or "desc",
            page=_page_param(page, 1),
            limit=_page_param(limit, settings.default_donation_page_size),
        )
    except StoreError:
        raise
    except Exception as e:
        raise InternalError("Error fetching donations", e)

    return DonationListResponse(
        data=[DonationResponse.from_donation(donation) for donation in result.items],
        summary={
            "total_amount": summary.total_amount,
            "total_count": summary.total_count,
            "average_amount": summary.average_amount,
        },
        pagination={
            "page": result.page,
            "limit": result.limit,
            "total": result.total,
            "total_pages": result.total_pages,
        },
    )


@router.post("/fundraisers/{fundraiser_id}/donations", response_model=DonationCreatedResponse, status_code=201)
def create_donation(
    fundraiser_id: str,
    donation_data: Optional[CreateDonationRequest] = None,
    store: CampaignStore = Depends(get_store)
):
    """
    Create a donation for a fundraiser
    Flow:
    1. Check the fundraiser exists and is active
    2. Validate amount and donor name, reporting every violation
    3. Record the donation and apply it to the fundraiser's total
    """
    donation_data = donation_data or CreateDonationRequest()

    with tracer.start_as_current_span("submit_donation") as span:
        span.set_attribute("fundraiser.id", fundraiser_id)
        try:
            donation = store.submit_donation(
                _fundraiser_id(fundraiser_id),
                amount=donation_data.amount,
                donor_name=donation_data.donor_name,
                message=donation_data.message,
                anonymous=donation_data.anonymous,
            )
        except NotFoundError:
            record_donation("not_found")
            raise
        except InvalidStateError:
            record_donation("not_active")
            raise
        except ValidationError:
            record_donation("invalid")
            raise
        except Exception as e:
            record_donation("error")
            raise InternalError("Error creating donation", e)

        span.set_attribute("donation.id", donation.id)

    record_donation("accepted", donation.amount)
    return DonationCreatedResponse(data=DonationResponse.from_donation(donation))


@router.get("/stats", response_model=StatsResponse)
def get_stats(store: CampaignStore = Depends(get_store)):
    """Get overall fundraising statistics"""
    try:
        stats = store.get_statistics()
    except Exception as e:
        raise InternalError("Error fetching statistics", e)

    return StatsResponse(data={
        "fundraisers": {
            "total": stats.total_campaigns,
            "active": stats.active_campaigns,
            "completed": stats.completed_campaigns,
        },
        "fundraising": {
            "total_raised": stats.total_raised,
            "total_goal": stats.total_goal,
            "percentage": stats.percentage,
        },
        "donations": {
            "total_count": stats.total_donations,
            "total_amount": stats.total_donation_amount,
            "average_amount": stats.average_donation,
        },
    })


@router.get("/categories", response_model=CategoryListResponse)
def get_categories(store: CampaignStore = Depends(get_store)):
    """Get all fundraiser categories"""
    try:
        categories = store.list_categories()
    except Exception as e:
        raise InternalError("Error fetching categories", e)

    return CategoryListResponse(data=categories)
