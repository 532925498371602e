"""
Entity Models
Typed, immutable records for every kind of extracted intelligence.

Each entity type is its own pydantic model discriminated on ``type``; the
fields every entity shares live on ``BaseEntity``. ``metadata`` gives the
flat camelCase view used by downstream scoring.
"""
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class EntityType(str, Enum):
    PHONE_NUMBER = "phone_number"
    PAYMENT_ID = "payment_id"
    URL = "url"
    ORGANIZATION = "organization"
    BANK_ACCOUNT = "bank_account"
    EMAIL = "email"


class BaseEntity(BaseModel):
    """Fields shared by every extracted entity"""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    type: EntityType
    value: str
    confidence: float = Field(ge=0.0, le=1.0)
    context: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)
    validated: bool = False

    @property
    def metadata(self) -> Dict[str, Any]:
        """Type-specific fields plus ``validated``, keyed in camelCase."""
        shared = {"type", "value", "confidence", "context", "timestamp"}
        return self.model_dump(by_alias=True, exclude=shared)


class PhoneNumber(BaseEntity):
    type: Literal[EntityType.PHONE_NUMBER] = EntityType.PHONE_NUMBER
    country_code: str
    format: str
    region: str = "Unknown"


class PaymentId(BaseEntity):
    type: Literal[EntityType.PAYMENT_ID] = EntityType.PAYMENT_ID
    payment_system: str
    format: str


class Url(BaseEntity):
    type: Literal[EntityType.URL] = EntityType.URL
    domain: str
    format: str


class Organization(BaseEntity):
    type: Literal[EntityType.ORGANIZATION] = EntityType.ORGANIZATION
    is_known_brand: bool = False
    impersonation_risk: float = Field(default=0.0, ge=0.0, le=1.0)
    potentially_fake: bool = False


class BankAccount(BaseEntity):
    type: Literal[EntityType.BANK_ACCOUNT] = EntityType.BANK_ACCOUNT
    format: str
    country_code: Optional[str] = None
    checksum_valid: Optional[bool] = None
    ifsc: Optional[str] = None


class Email(BaseEntity):
    type: Literal[EntityType.EMAIL] = EntityType.EMAIL
    domain: str
    format: str


Entity = Annotated[
    Union[PhoneNumber, PaymentId, Url, Organization, BankAccount, Email],
    Field(discriminator="type"),
]


class LanguageDetectionResult(BaseModel):
    """Language tag (ISO-639-1 or "unknown") with a confidence in [0, 1]"""

    model_config = ConfigDict(frozen=True)

    language: str = "unknown"
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)


class Message(BaseModel):
    """Conversation message with flexible timestamp support"""

    sender: str
    text: str
    timestamp: Union[int, str, datetime, None] = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def validate_timestamp(cls, v):
        if v is None:
            return datetime.now().isoformat()
        if isinstance(v, (int, str, datetime)):
            return v
        try:
            return str(v)
        except Exception:
            return datetime.now().isoformat()
