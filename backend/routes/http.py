from typing import Any
from uuid import uuid4

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from bundle_keep.config import get_services
from bundle_keep.core import (
    BundleValidationError,
    BundleValidationRequest,
    BundleValidationResponse,
    ResourceKey,
    ResourceUpsertResponse,
    ResourceVersionResponse,
    StatusResponse,
)
from bundle_keep.core.error_mapping import build_error_payload, classify_error
from bundle_keep.core.logging_utils import (
    clear_log_context,
    log_event,
    pop_request_metrics_summary,
    set_request_id,
)
from bundle_keep.fhir import has_fatal_issue, parse_bundle, validate_transaction_bundle_structure
from bundle_keep.services import ResourceStoreError, SearchUnavailableError

router = APIRouter()


def get_bundle_services():
    return get_services()


@router.get("/", response_model=StatusResponse)
def read_root():
    return {"status": "online", "system": "BundleKeep Validator"}


def _build_error_payload(
    code: str,
    message: str,
    details: Any = None,
) -> dict:
    payload: dict[str, Any] = {"code": code, "message": message}
    if details:
        payload["details"] = details
    return payload


def _error_response(err: Exception, data: dict | None = None) -> JSONResponse:
    _code, status = classify_error(err)
    return JSONResponse(
        status_code=status,
        content={"success": False, "data": data or {}, "error": build_error_payload(err)},
    )


@router.post("/bundle/$validate", response_model=BundleValidationResponse)
async def validate_bundle(
    request: BundleValidationRequest, services: dict = Depends(get_bundle_services)
):
    request_id = uuid4().hex
    set_request_id(request_id)
    try:
        warnings: list[str] = []
        if request.include_structure_validation:
            warnings = validate_transaction_bundle_structure(request.bundle)
            if has_fatal_issue(warnings):
                return JSONResponse(
                    status_code=400,
                    content={
                        "success": False,
                        "data": {"warnings": warnings},
                        "error": _build_error_payload(
                            "BUNDLE_STRUCTURE_INVALID",
                            "Bundle failed structural validation.",
                        ),
                    },
                )

        try:
            bundle = parse_bundle(request.bundle)
        except (TypeError, ValueError, AttributeError) as err:
            return JSONResponse(
                status_code=400,
                content={
                    "success": False,
                    "data": {},
                    "error": _build_error_payload(
                        "BUNDLE_INPUT_INVALID",
                        "Invalid bundle payload.",
                        details=str(err),
                    ),
                },
            )

        duplicate_check = "skipped"
        if bundle.bundle_type == "transaction":
            try:
                await services["validator"].validate_bundle(bundle)
            except (BundleValidationError, SearchUnavailableError) as err:
                log_event(
                    component="http",
                    event="bundle_rejected",
                    level="WARNING",
                    details={"error": type(err).__name__},
                )
                return _error_response(err, data={"warnings": warnings})
            duplicate_check = "passed"

        return {
            "success": True,
            "data": {
                "bundle_type": bundle.bundle_type,
                "entries": len(bundle.entries),
                "duplicate_check": duplicate_check,
                "warnings": warnings,
                "metrics": pop_request_metrics_summary(request_id),
            },
            "error": None,
        }
    finally:
        pop_request_metrics_summary(request_id)
        clear_log_context()


@router.get("/{resource_type}/{resource_id}/_version", response_model=ResourceVersionResponse)
async def read_latest_version(
    resource_type: str, resource_id: str, services: dict = Depends(get_bundle_services)
):
    key = ResourceKey(resource_type=resource_type, resource_id=resource_id)
    version_id = await services["validator"].get_latest_version_id(key)
    return {
        "resource_type": resource_type,
        "resource_id": resource_id,
        "version_id": version_id,
    }


@router.put("/{resource_type}/{resource_id}", response_model=ResourceUpsertResponse)
async def update_versioned_reference(
    resource_type: str,
    resource_id: str,
    resource: dict[str, Any] = Body(...),
    services: dict = Depends(get_bundle_services),
):
    if resource.get("resourceType") != resource_type or str(resource.get("id", resource_id)) != resource_id:
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "data": {},
                "error": _build_error_payload(
                    "RESOURCE_INPUT_INVALID",
                    "Resource type and id must match the request URL.",
                ),
            },
        )

    try:
        outcome = await services["validator"].update_versioned_reference(
            {**resource, "id": resource_id}
        )
    except ResourceStoreError as err:
        return _error_response(err)
    except ValueError as err:
        return JSONResponse(
            status_code=400,
            content={
                "success": False,
                "data": {},
                "error": _build_error_payload(
                    "RESOURCE_INPUT_INVALID",
                    "Invalid resource payload.",
                    details=str(err),
                ),
            },
        )

    return {
        "success": True,
        "data": {
            "resource": outcome.wrapper.raw_resource,
            "version_id": outcome.wrapper.version,
            "created": outcome.created,
        },
        "error": None,
    }
