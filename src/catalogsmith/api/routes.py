"""API routes for CatalogSmith."""

import logging
from typing import Optional

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import Response
from pydantic import BaseModel, Field

from ..exceptions import (
    CatalogSmithError,
    EmptySheetError,
    UnknownHeaderError,
    UnknownMarketplaceError,
    UnsupportedSheetFormatError,
)
from ..mapping.models import ColumnMatch
from ..mapping.session import CatalogSession
from ..modes import AssistantRequest, AssistantResponse
from ..sheets import Row, SheetData, decode

logger = logging.getLogger(__name__)

router = APIRouter()

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def get_mode_router():
    """Get the global mode router instance."""
    from .app import get_mode_router as _get_mode_router

    return _get_mode_router()


class CatalogRequest(BaseModel):
    """Template and raw sheet plus optional manual mapping choices."""

    template: SheetData
    raw: SheetData
    marketplace: Optional[str] = None
    overrides: dict[str, Optional[str]] = Field(
        default_factory=dict,
        description="Template header -> raw header; empty or null clears the mapping",
    )


class MappingResponse(BaseModel):
    """Detected mapping with its explanation."""

    mapping: dict[str, str]
    matches: list[ColumnMatch]
    marketplace_tags: list[str]
    preview: list[Row]


class PreviewResponse(BaseModel):
    """Leading materialized rows."""

    headers: list[str]
    rows: list[Row]
    total_rows: int


def _build_session(request: CatalogRequest) -> CatalogSession:
    """Load both sheets and replay manual overrides."""
    try:
        session = CatalogSession(marketplace=request.marketplace)
        session.load_template(request.template)
        session.load_raw(request.raw)
        for template_header, raw_header in request.overrides.items():
            session.override(template_header, raw_header)
    except (UnknownHeaderError, UnknownMarketplaceError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return session


def _require_columns(request: CatalogRequest):
    if request.template.is_empty or request.raw.is_empty:
        raise HTTPException(status_code=400, detail=str(EmptySheetError()))


# Assistant endpoint


@router.post("/assistant", response_model=AssistantResponse, response_model_exclude_none=True)
async def assistant(request: AssistantRequest):
    """Answer a chat message or produce catalog enrichment insights."""
    mode_router = get_mode_router()
    try:
        return await mode_router.route(request)
    except Exception:
        logger.exception("Assistant request failed")
        raise HTTPException(status_code=500, detail="CatalogSmith backend error")


# Sheet endpoints


@router.post("/sheets/decode", response_model=SheetData)
async def decode_sheet(file: UploadFile = File(...)):
    """Decode an uploaded CSV or XLSX file."""
    data = await file.read()
    try:
        return decode(file.filename or "", data)
    except (EmptySheetError, UnsupportedSheetFormatError) as e:
        raise HTTPException(status_code=400, detail=str(e))


# Catalog endpoints


@router.post("/catalog/map", response_model=MappingResponse)
async def map_columns(request: CatalogRequest):
    """Auto-detect the column mapping and preview the result."""
    _require_columns(request)
    session = _build_session(request)
    return MappingResponse(
        mapping=session.mapping,
        matches=session.matches(),
        marketplace_tags=session.marketplace_tags(),
        preview=session.preview(),
    )


@router.post("/catalog/preview", response_model=PreviewResponse)
async def preview_catalog(request: CatalogRequest):
    """Materialize the leading rows of the catalog."""
    _require_columns(request)
    session = _build_session(request)
    return PreviewResponse(
        headers=request.template.headers,
        rows=session.preview(),
        total_rows=len(request.raw.rows),
    )


@router.post("/catalog/export")
async def export_catalog(request: CatalogRequest):
    """Materialize every row and download it as an XLSX workbook."""
    _require_columns(request)
    session = _build_session(request)
    try:
        workbook = session.export_workbook()
    except CatalogSmithError as e:
        raise HTTPException(status_code=400, detail=str(e))

    filename = session.export_filename()
    return Response(
        content=workbook,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# Health check


@router.get("/health")
async def health_check():
    """Health check endpoint with diagnostics."""
    from ..config import settings

    # Gather non-secret diagnostics
    config = {
        "llm_provider": settings.llm_provider,
        "model_name": settings.active_model,
        "anthropic_key_present": bool(settings.anthropic_api_key),
        "openrouter_key_present": bool(settings.openrouter_api_key),
    }

    return {
        "status": "ok",
        "service": "catalogsmith",
        "config": config,
    }
