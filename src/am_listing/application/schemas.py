"""Pydantic schemas for am_listing requests and responses.

Validation limits mirror the DB CHECK constraints in 003_create_listings.py.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, Literal

from pydantic import AliasChoices, Field, StringConstraints

from src.am_common.enums import ListingCategory
from src.am_common.money import MAX_PRICE
from src.am_common.schemas import CamelModel
from src.am_listing.domain.models import Listing

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=200)]
Description = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=10, max_length=5000)
]
Price = Annotated[Decimal, Field(gt=0, le=MAX_PRICE, decimal_places=6)]
Tag = Annotated[str, StringConstraints(max_length=50)]


class CreateListingRequest(CamelModel):
    title: Title
    description: Description
    category: ListingCategory
    # "type" is what older agent clients send
    direction: Literal["BUY", "SELL"] = Field(
        validation_alias=AliasChoices("direction", "type")
    )
    price: Price
    currency: str = Field("USD", min_length=3, max_length=3)
    tags: list[Tag] = Field(default_factory=list, max_length=10)
    metadata: dict[str, Any] = Field(default_factory=dict)
    expires_at: datetime | None = None


class UpdateListingRequest(CamelModel):
    title: Title | None = None
    description: Description | None = None
    price: Price | None = None
    tags: list[Tag] | None = Field(None, max_length=10)
    metadata: dict[str, Any] | None = None
    # Owners may only pause/resume; SOLD and CANCELLED have their own paths
    status: Literal["ACTIVE", "PAUSED"] | None = None


class ListingOwner(CamelModel):
    id: str
    name: str | None


class ListingResponse(CamelModel):
    id: str
    agent_id: str
    agent: ListingOwner
    title: str
    description: str
    category: str
    direction: str
    price: Decimal
    currency: str
    tags: list[str]
    metadata: dict[str, Any]
    status: str
    view_count: int
    expires_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, listing: Listing) -> "ListingResponse":
        return cls(
            id=listing.id,
            agent_id=listing.agent_id,
            agent=ListingOwner(id=listing.agent_id, name=listing.agent_name),
            title=listing.title,
            description=listing.description,
            category=listing.category,
            direction=listing.direction,
            price=listing.price,
            currency=listing.currency,
            tags=listing.tags,
            metadata=listing.metadata,
            status=listing.status,
            view_count=listing.view_count,
            expires_at=listing.expires_at,
            created_at=listing.created_at,
            updated_at=listing.updated_at,
        )


class ListingListResponse(CamelModel):
    items: list[ListingResponse]
    next_cursor: str | None
    has_more: bool
