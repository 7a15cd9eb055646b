from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .config import RADIUS_OPTIONS_KM


class ProviderCreate(BaseModel):
    display_name: Optional[str] = Field(default=None, min_length=2, max_length=120)
    service_type: Optional[str] = Field(default=None, max_length=120)
    neighborhood: Optional[str] = Field(default=None, max_length=120)
    photo_url: Optional[str] = None
    role: Literal["provider", "client"] = "provider"
    is_profile_complete: bool = False
    status: Literal["available", "busy"] = "available"
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lon: Optional[float] = Field(default=None, ge=-180, le=180)


class ProviderOut(BaseModel):
    uid: str
    display_name: Optional[str]
    service_type: Optional[str]
    neighborhood: Optional[str]
    photo_url: Optional[str]
    role: str
    is_profile_complete: bool
    status: str
    rating: float
    review_count: int
    lat: Optional[float]
    lon: Optional[float]
    is_premium: bool
    premium_expires_at: Optional[datetime]

    class Config:
        from_attributes = True


class StatusUpdate(BaseModel):
    status: Literal["available", "busy"]


class SearchRequest(BaseModel):
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lon: Optional[float] = Field(default=None, ge=-180, le=180)
    radius_km: Optional[float] = Field(default=None, gt=0, le=50)  # stored preference when omitted
    service_type: Optional[str] = None
    neighborhood: Optional[str] = None
    search_text: Optional[str] = None


class ProviderHit(BaseModel):
    uid: str
    display_name: str
    service_type: str
    neighborhood: str
    photo_url: Optional[str]
    rating: float
    review_count: int
    status: str
    lat: float
    lon: float
    is_premium: bool
    distance_km: Optional[float]


class SearchResponse(BaseModel):
    count: int
    radius_km: float
    location_known: bool
    hits: List[ProviderHit]


class RadiusPreference(BaseModel):
    radius_km: int

    @field_validator("radius_km")
    @classmethod
    def _allowed(cls, v: int) -> int:
        if v not in RADIUS_OPTIONS_KM:
            raise ValueError(f"radius_km must be one of {list(RADIUS_OPTIONS_KM)}")
        return v


class ReviewCreate(BaseModel):
    client_id: str = Field(min_length=1, max_length=64)
    client_name: str = Field(min_length=1, max_length=120)
    rating: int = Field(ge=1, le=5)
    comment: str = Field(default="", max_length=2000)


class ReviewOut(BaseModel):
    id: int
    provider_uid: str
    client_id: str
    client_name: str
    rating: int
    comment: str
    created_at: datetime

    class Config:
        from_attributes = True


class SubscribeRequest(BaseModel):
    plan_id: str = "premium_monthly"
    payment_method: Literal["stripe", "iap"] = "stripe"


class SubscriptionOut(BaseModel):
    id: int
    provider_uid: str
    plan_id: str
    status: str
    start_date: datetime
    end_date: datetime
    payment_method: str
    transaction_id: Optional[str]

    class Config:
        from_attributes = True


class PremiumStatusOut(BaseModel):
    provider_uid: str
    is_premium: bool
    premium_expires_at: Optional[datetime]


class ProximityCheckRequest(BaseModel):
    user_id: str = Field(min_length=1)
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    interests: List[str] = Field(default_factory=list)


class ProximityAlertOut(BaseModel):
    provider_uid: str
    provider_name: str
    service_type: str
    distance_km: float
    title: str
    message: str


class ServiceRequestCreate(BaseModel):
    client_id: str = Field(min_length=1, max_length=64)
    client_name: str = Field(min_length=1, max_length=120)
    service_type: str = Field(min_length=1, max_length=120)
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)
    address: str = Field(min_length=1)
    description: str = Field(default="", max_length=2000)


class ServiceRequestOut(BaseModel):
    id: int
    client_id: str
    client_name: str
    service_type: str
    lat: float
    lon: float
    address: str
    radius_km: float
    description: str
    status: str
    created_at: datetime

    class Config:
        from_attributes = True


class NearbyProviderOut(BaseModel):
    uid: str
    display_name: Optional[str]
    distance_km: float


class ServiceRequestCreated(BaseModel):
    request: ServiceRequestOut
    notified_providers: List[NearbyProviderOut]


class ServiceRequestStatusUpdate(BaseModel):
    status: Literal["active", "fulfilled", "cancelled"]


class ProviderStatsOut(BaseModel):
    total_reviews: int
    average_rating: float
    completed_services: int
    response_time: str
    join_date: datetime
