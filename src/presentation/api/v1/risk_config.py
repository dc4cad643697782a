"""Admin API endpoints for the risk configuration."""

from typing import Annotated, Any, Optional

from fastapi import APIRouter, Body, Depends, Header, Path, Query, Request

from src.application.services import RiskConfigService
from src.core.config import Settings, get_settings
from src.core.dependencies import get_config_service, require_admin_token
from src.domain.entities import AuditMeta
from src.presentation.schemas import (
    AuditLogResponseSchema,
    ConfigHistoryResponseSchema,
    ErrorResponseSchema,
    RiskConfigSchema,
)

risk_config_router = APIRouter(
    prefix="/risk-config",
    dependencies=[Depends(require_admin_token)],
    responses={
        401: {"model": ErrorResponseSchema, "description": "Missing or invalid admin token"},
    },
)


@risk_config_router.get(
    "",
    response_model=RiskConfigSchema,
    summary="Get Risk Configuration",
    description="""
    Retrieve the current risk configuration.

    The documented defaults are stored as version 1 on first access.
    """,
)
async def get_risk_config(
    config_service: Annotated[RiskConfigService, Depends(get_config_service)],
) -> RiskConfigSchema:
    config = await config_service.get_config()
    return RiskConfigSchema.model_validate(config.to_dict())


@risk_config_router.put(
    "",
    response_model=RiskConfigSchema,
    summary="Update Risk Configuration",
    description="""
    Replace the risk configuration with a new revision.

    The body is the full configuration document as returned by GET, plus
    an optional `reason`. Its `version` must be the current version;
    the stored revision gets `version + 1`.
    """,
    responses={
        400: {"model": ErrorResponseSchema, "description": "Validation failed"},
        409: {"model": ErrorResponseSchema, "description": "Configuration changed meanwhile"},
    },
)
async def update_risk_config(
    request: Request,
    document: Annotated[Any, Body()],
    config_service: Annotated[RiskConfigService, Depends(get_config_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    x_qabum_actor: Annotated[Optional[str], Header()] = None,
    user_agent: Annotated[Optional[str], Header()] = None,
) -> RiskConfigSchema:
    reason = document.get("reason") if isinstance(document, dict) else None
    meta = AuditMeta(
        actor=x_qabum_actor or settings.default_admin_actor,
        reason=reason if isinstance(reason, str) and reason else settings.default_update_reason,
        user_agent=user_agent or "unknown",
        ip=request.client.host if request.client else "unknown",
    )

    config = await config_service.submit_document(document, meta)
    return RiskConfigSchema.model_validate(config.to_dict())


@risk_config_router.get(
    "/versions",
    response_model=ConfigHistoryResponseSchema,
    summary="List Risk Configuration Versions",
)
async def list_risk_config_versions(
    config_service: Annotated[RiskConfigService, Depends(get_config_service)],
    limit: Annotated[
        int,
        Query(ge=1, le=100, description="Maximum number of revisions to return"),
    ] = 20,
) -> ConfigHistoryResponseSchema:
    history = await config_service.list_versions(limit=limit)
    return ConfigHistoryResponseSchema(
        current_version=history.current_version,
        versions=[
            {"version": v.version, "updated_at": v.updated_at}
            for v in history.versions
        ],
    )


@risk_config_router.get(
    "/versions/{version}",
    response_model=RiskConfigSchema,
    summary="Get Risk Configuration Version",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Version not found"},
    },
)
async def get_risk_config_version(
    version: Annotated[int, Path(ge=1, description="Revision number")],
    config_service: Annotated[RiskConfigService, Depends(get_config_service)],
) -> RiskConfigSchema:
    config = await config_service.get_version(version)
    return RiskConfigSchema.model_validate(config.to_dict())


@risk_config_router.get(
    "/audit",
    response_model=AuditLogResponseSchema,
    summary="List Risk Configuration Audit Entries",
    description="Audit records of configuration changes, newest first.",
)
async def list_audit_entries(
    config_service: Annotated[RiskConfigService, Depends(get_config_service)],
    limit: Annotated[
        int,
        Query(ge=1, le=500, description="Maximum number of entries to return"),
    ] = 50,
) -> AuditLogResponseSchema:
    entries = await config_service.list_audit_entries(limit=limit)
    return AuditLogResponseSchema(entries=[e.to_dict() for e in entries])
