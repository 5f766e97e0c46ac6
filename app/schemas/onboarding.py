"""
app/schemas/onboarding.py

Purpose: Onboarding API request/response schemas

- Raw form values exactly as typed (parsed server-side by the flow)
- Route and provider profile returned after a successful submission
"""

from pydantic import BaseModel, Field
from typing import List, Optional

from app.flow.navigation import Route
from app.models.service_provider import ServiceProviderProfile


class OnboardingRequest(BaseModel):
    full_name: str = ""
    phone: str = ""
    category_id: Optional[str] = None
    experience_years: str = ""
    hourly_rate: str = ""

    model_config = {
        "json_schema_extra": {
            "example": {
                "full_name": "Asha Rao",
                "phone": "9123456780",
                "category_id": "plumbing",
                "experience_years": "5",
                "hourly_rate": "500"
            }
        }
    }


class TabResponse(BaseModel):
    name: str
    title: str


class RouteResponse(BaseModel):
    destination: str
    tabs: List[TabResponse] = Field(default_factory=list)

    @classmethod
    def from_route(cls, route: Route) -> "RouteResponse":
        return cls(
            destination=route.destination.value,
            tabs=[TabResponse(name=tab.name, title=tab.title) for tab in route.tabs]
        )


class OnboardingResponse(BaseModel):
    status: str = "success"
    route: RouteResponse
    provider_profile: Optional[ServiceProviderProfile] = None
    # Set when a provider record from an earlier attempt was kept as is
    provider_already_existed: bool = False


class CategoryResponse(BaseModel):
    id: str
    name: str
