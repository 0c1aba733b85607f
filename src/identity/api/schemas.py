"""Pydantic request/response schemas for the Identity API."""

from datetime import datetime

from pydantic import BaseModel


class RegisterAccountRequest(BaseModel):
    name: str = ""
    address: str = ""
    email: str
    password: str
    barangay_clearance_uploaded: bool = False
    government_id_uploaded: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Maria Santos",
                    "address": "12 Mabini St, Quezon City",
                    "email": "maria@example.ph",
                    "password": "s3cret",
                    "barangay_clearance_uploaded": True,
                    "government_id_uploaded": True,
                }
            ]
        }
    }


class LoginRequest(BaseModel):
    email: str
    password: str


class SessionResponse(BaseModel):
    account_id: str
    email: str
    name: str
    address: str
    started_at: datetime


class ActiveSessionResponse(BaseModel):
    session: SessionResponse | None = None


class StatusResponse(BaseModel):
    status: str = "ok"
