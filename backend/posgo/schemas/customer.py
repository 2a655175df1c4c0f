from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, field_validator


class Customer(BaseModel):
    id: UUID
    name: str
    phone: str | None = None
    email: str | None = None
    document: str | None = None


class CustomerCreate(BaseModel):
    name: str
    phone: str | None = None
    email: str | None = None
    document: str | None = None

    @field_validator("name")
    @classmethod
    def name_required(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Customer name is required")
        return v.strip()
