"""Pydantic models used throughout the Etsy Affiliate Hub application.

Models define validation and structure for creators, their products and
affiliate programs, directory filter criteria, static content, and the form
payloads exchanged with the onboarding webhook.

Store records are frozen: once the store is loaded nothing can mutate them.
The bundled JSON files use camelCase keys, so every field has a camelCase
alias and accepts its snake_case name as well.
"""
import math
from datetime import date
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class VettingStatus(str, Enum):
    """Closed classification of a creator's trustworthiness tier."""

    VERIFIED = "Verified"
    PENDING_REVIEW = "Pending review"
    WATCHLIST = "Watchlist"


class ProgramType(str, Enum):
    ETSY_AFFILIATE = "Etsy Affiliate"
    DIRECT = "Direct"
    HYBRID = "Hybrid"


class Currency(str, Enum):
    USD = "USD"
    EUR = "EUR"
    GBP = "GBP"
    CAD = "CAD"
    AUD = "AUD"


class SortOption(str, Enum):
    """Sort modes offered on the discovery page."""

    SALES = "sales"
    RATING = "rating"
    # No vetted-date field exists yet; ranks like SALES
    RECENT = "recent"


class FormState(str, Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class _Record(BaseModel):
    """Base for immutable store records loaded from camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class CreatorProduct(_Record):
    """A top-selling product with its affiliate purchase link."""

    id: str
    name: str
    description: str
    price: float = Field(ge=0)
    currency: Currency = Currency.USD
    image_url: str
    affiliate_url: str
    is_best_seller: bool = False


class AffiliateProgramDetails(_Record):
    """Commission and tracking-window metadata attached to a creator."""

    program_type: ProgramType
    base_commission_rate: float
    boosted_commission_rate: Optional[float] = None
    cookie_window_days: int
    min_monthly_clicks: Optional[int] = None
    notes: str
    application_url: Optional[str] = None


class SocialLinks(_Record):
    instagram: Optional[str] = None
    tiktok: Optional[str] = None
    pinterest: Optional[str] = None
    youtube: Optional[str] = None
    website: Optional[str] = None


class Creator(_Record):
    """A vetted Etsy shop listed in the directory."""

    id: str
    shop_name: str
    owner_name: str
    shop_url: str
    avatar_url: str
    header_image_url: str
    primary_category: str = Field(min_length=1)
    tags: List[str] = Field(min_length=1)
    location: str
    rating: float = Field(ge=0, le=5)
    review_count: int = Field(ge=0)
    sales: int = Field(ge=0)
    short_description: str
    bio: str
    vetting_status: VettingStatus
    vetting_notes: str
    badges: List[str] = []
    affiliate: AffiliateProgramDetails
    social: SocialLinks = SocialLinks()
    top_products: List[CreatorProduct] = []


class FilterCriteria(BaseModel):
    """User-selected search text, category, rating floor, vetting filter and sort.

    ``min_rating`` is not range-checked, so an unsatisfiable floor yields an
    empty directory. NaN is rejected.
    """

    model_config = ConfigDict(frozen=True)

    search: str = ""
    category: str = "All"
    min_rating: float = 0
    vetting: Union[Literal["All"], VettingStatus] = "All"
    sort_by: SortOption = SortOption.SALES

    @field_validator("min_rating")
    @classmethod
    def _not_nan(cls, value: float) -> float:
        # NaN compares false with every rating and would match everyone
        if math.isnan(value):
            raise ValueError("min_rating must be a number")
        return value


class BlogPost(_Record):
    """A resource article shown on the blog page."""

    slug: str
    title: str
    excerpt: str
    category: Literal["Strategy", "Tactics", "Case Study", "Platform"]
    read_time_minutes: int
    published_at: date
    content: List[str]
    key_takeaways: List[str]


class FaqItem(_Record):
    id: str
    question: str
    answer: str


class AnalyticsPoint(_Record):
    label: str
    clicks: int
    conversions: int


class _FormValues(BaseModel):
    """Base for visitor-entered form values.

    Text is stripped, so a whitespace-only answer counts as missing.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    @classmethod
    def blank(cls):
        """Unvalidated empty form for rendering before anything is entered."""
        empty = {name: "" for name, field in cls.model_fields.items() if field.is_required()}
        return cls.model_construct(**empty)


class OnboardingSubmission(_FormValues):
    """Affiliate profile sent to the onboarding webhook.

    Every field is required. Serialized with ``by_alias=True`` this produces
    the wire body ``{name, email, primaryChannel, monthlyReach, niches}``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    primary_channel: str = Field(min_length=1)
    monthly_reach: str = Field(min_length=1)
    niches: str = Field(min_length=1)


class OnboardingResponse(BaseModel):
    """Response shape returned by the onboarding webhook."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    ok: bool = False
    message: Optional[str] = None
    error: Optional[str] = None
    submitted_at: Optional[str] = None


CONTACT_ROLES = ("Affiliate", "Etsy creator", "Brand / agency", "Other")


class ContactSubmission(_FormValues):
    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    role: str = "Affiliate"
    topic: str = Field(min_length=1)
    message: str = Field(min_length=1)

    @field_validator("role")
    @classmethod
    def _known_role(cls, value: str) -> str:
        if value not in CONTACT_ROLES:
            raise ValueError(f"role must be one of {', '.join(CONTACT_ROLES)}")
        return value


class CreatorApplication(_FormValues):
    """In-page affiliate application for a single creator."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=1)
    primary_channel: str = Field(min_length=1)
    audience_summary: str = Field(min_length=1)
