"""
Billing module data models.

These models define the records exchanged with the billing proxy. Wire field
names are fixed by the proxy and are mapped onto descriptive attribute names
through aliases; unknown wire fields are ignored on decode.
"""

from enum import Enum
from typing import Any, Mapping, NewType, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


# Already-serialized document returned by the proxy (e.g., a charge record).
# Callers forward it without interpretation.
RawDocument = NewType("RawDocument", str)


class ProtocolVersion(str, Enum):
    """Billing protocol capability levels offered by proxy backends."""

    BASIC = "basic"          # Products and one-time charges only
    RECURRING = "recurring"  # Adds plans, subscriptions and charge display names

    @property
    def supports_recurring(self) -> bool:
        return self is ProtocolVersion.RECURRING


class LinkedAccountInfo(BaseModel):
    """
    Credentials for a merchant account linked through the authorization-code flow.

    Produced only by a successful account link. Instances are immutable;
    `id`, `name` and `created` are filled from the wire during decoding and
    never change afterwards. Missing or null fields decode to empty values.
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(default="", description="Identifier of this link record")
    name: str = Field(default="", description="Display name of the linked merchant")
    created: int = Field(default=0, description="Link creation time (epoch seconds)")
    linked_account_id: str = Field(
        default="",
        alias="stripe_user_id",
        description="Payment processor's identifier for the connected account",
    )
    token_type: str = Field(default="", description="Type of the access credential (e.g., bearer)")
    publishable_key: str = Field(
        default="",
        alias="stripe_publishable_key",
        description="Non-secret key usable by front-end code",
    )
    scope: str = Field(default="", description="Granted permission scope")
    live_mode: bool = Field(
        default=False,
        alias="livemode",
        description="True for production, False for test environment",
    )
    refresh_token: str = Field(
        default="",
        repr=False,
        description="Long-lived credential used to mint access tokens",
    )
    access_token: str = Field(
        default="",
        repr=False,
        description="Short-lived credential for authenticated calls",
    )

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        # Relays send explicit nulls for credentials they do not hold
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any]) -> "LinkedAccountInfo":
        """Decode a link record as sent by the proxy."""
        return cls.model_validate(dict(payload))

    def to_wire(self) -> dict[str, Any]:
        """Encode using the proxy's wire field names."""
        return self.model_dump(by_alias=True)


class CatalogItem(BaseModel):
    """
    Base for processor catalog objects.

    Only the fields a caller is likely to display are declared; everything
    else the processor sends is kept as extra data and passed through.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: str = Field(..., description="Processor object ID")
    object: str = Field(default="", description="Processor object type")
    active: bool = Field(default=True, description="Whether the item is on sale")
    metadata: dict[str, str] = Field(default_factory=dict)


class Product(CatalogItem):
    """A one-time-purchase product offered by a seller."""

    name: str = Field(default="", description="Display name")
    description: Optional[str] = Field(None, description="Product description")


class Plan(CatalogItem):
    """A recurring subscription plan offered by a seller."""

    nickname: Optional[str] = Field(None, description="Display name")
    product: Optional[str] = Field(None, description="ID of the plan's product")
    amount: Optional[int] = Field(None, description="Price in the currency's minor unit")
    currency: Optional[str] = Field(None, description="ISO currency code")
    interval: Optional[str] = Field(None, description="Billing interval (day, week, month, year)")
    interval_count: int = Field(default=1, description="Intervals between charges")


class CatalogCollection(BaseModel):
    """Processor list envelope."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    object: str = "list"
    has_more: bool = False
    url: Optional[str] = None


class PlanCollection(CatalogCollection):
    """Plans offered by a seller."""

    data: list[Plan] = Field(default_factory=list)


class ProductCollection(CatalogCollection):
    """Products offered by a seller."""

    data: list[Product] = Field(default_factory=list)


class ChargeRequest(BaseModel):
    """Body of a one-time charge request."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    product_id: str = Field(..., alias="productId")
    sku_id: str = Field(..., alias="skuId")
    source_token_id: str = Field(..., alias="sourceTokenId")
    seller_number: str = Field(..., alias="sellerNumber")
    product_name: Optional[str] = Field(None, alias="productName")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class SubscriptionRequest(BaseModel):
    """
    Body of a subscription request.

    A missing `source_token_id` asks the proxy to charge the payment method
    already stored for the principal; the field is then left off the wire.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    plan_id: str = Field(..., alias="planId")
    source_token_id: Optional[str] = Field(None, alias="sourceTokenId")
    seller_number: str = Field(..., alias="sellerNumber")
    plan_name: str = Field(..., alias="planName")

    @property
    def uses_stored_payment_method(self) -> bool:
        return self.source_token_id is None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
