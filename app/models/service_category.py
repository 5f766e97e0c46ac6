"""
app/models/service_category.py

Purpose: Service category reference data

- Closed set enumerated by the category directory
- Immutable once fetched
"""

from pydantic import BaseModel, ConfigDict


class ServiceCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
