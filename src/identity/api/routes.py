"""FastAPI endpoints for the Identity domain: mock accounts and the session."""

from fastapi import APIRouter, Depends

from identity.account.accounts import Session
from identity.api.schemas import (
    ActiveSessionResponse,
    LoginRequest,
    RegisterAccountRequest,
    SessionResponse,
    StatusResponse,
)
from storefront.context import Storefront
from storefront.web import get_storefront

router = APIRouter(prefix="/accounts", tags=["accounts"])


def _session_response(session: Session) -> SessionResponse:
    return SessionResponse(
        account_id=session.account_id,
        email=session.email,
        name=session.name,
        address=session.address,
        started_at=session.started_at,
    )


@router.post("/register", status_code=201, response_model=SessionResponse)
async def register(body: RegisterAccountRequest, storefront: Storefront = Depends(get_storefront)) -> SessionResponse:
    storefront.accounts.register(
        name=body.name,
        address=body.address,
        email=body.email,
        password=body.password,
        documents_provided=body.barangay_clearance_uploaded and body.government_id_uploaded,
    )
    return _session_response(storefront.accounts.get_active_session())


@router.post("/login", response_model=SessionResponse)
async def login(body: LoginRequest, storefront: Storefront = Depends(get_storefront)) -> SessionResponse:
    session = storefront.accounts.login(body.email, body.password)
    return _session_response(session)


@router.post("/logout", response_model=StatusResponse)
async def logout(storefront: Storefront = Depends(get_storefront)) -> StatusResponse:
    storefront.accounts.logout()
    return StatusResponse()


@router.get("/session", response_model=ActiveSessionResponse)
async def active_session(storefront: Storefront = Depends(get_storefront)) -> ActiveSessionResponse:
    session = storefront.accounts.get_active_session()
    return ActiveSessionResponse(session=_session_response(session) if session else None)
