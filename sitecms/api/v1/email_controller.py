"""
Email Controller
================

Admin endpoints for the SMTP server, the administrator address, the email
templates and the log of sent emails.
"""
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from sitecms.api.v1.dependencies import get_email_service
from sitecms.api.v1.security import require_admin
from sitecms.application.dto.email_dto import (
    EmailLogResponse,
    EmailSettingsRequest,
    EmailSettingsResponse,
    EmailTemplateResponse,
    EmailTemplateUpdateRequest,
    PlaceholderResponse,
    SendResultResponse,
    SmtpSettingsRequest,
    SmtpSettingsResponse,
)
from sitecms.application.services.email_service import EmailService
from sitecms.domain.models.email import EmailLog, EmailTemplate, SmtpSettings

router = APIRouter(tags=["email"], dependencies=[Depends(require_admin)])


def smtp_response(smtp: SmtpSettings) -> SmtpSettingsResponse:
    public = smtp.to_public_dict()
    return SmtpSettingsResponse(
        host=public["host"],
        port=public["port"],
        username=public["username"],
        password=public["password"],
        encryption=public["encryption"],
        is_configured=public["isConfigured"],
    )


def template_response(template: EmailTemplate) -> EmailTemplateResponse:
    return EmailTemplateResponse(
        type=template.type.value,
        subject=template.subject,
        body=template.body,
        enabled=template.enabled,
    )


def email_log_response(log: EmailLog) -> EmailLogResponse:
    return EmailLogResponse(
        id=log.id,
        reference_id=log.reference_id,
        template_type=log.template_type.value,
        recipient=log.recipient,
        subject=log.subject,
        status=log.status.value,
        error_message=log.error_message,
        sent_at=log.sent_at,
    )


@router.get("/smtp", response_model=SmtpSettingsResponse, summary="Get SMTP settings")
async def get_smtp_settings(service: EmailService = Depends(get_email_service)) -> SmtpSettingsResponse:
    return smtp_response(service.get_smtp_settings())


@router.put(
    "/smtp",
    response_model=SmtpSettingsResponse,
    summary="Update SMTP settings",
    description="The password is stored encrypted. Send it empty or masked to keep the current one.",
)
async def update_smtp_settings(
    request: SmtpSettingsRequest,
    service: EmailService = Depends(get_email_service),
) -> SmtpSettingsResponse:
    try:
        smtp = service.update_smtp_settings(
            request.host, request.port, request.username, request.password, request.encryption
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return smtp_response(smtp)


@router.post("/smtp/test", response_model=SendResultResponse, summary="Check the SMTP connection")
async def check_smtp_connection(service: EmailService = Depends(get_email_service)) -> SendResultResponse:
    result = service.check_smtp_connection()
    return SendResultResponse(success=result.success, error_message=result.error_message)


@router.get("/settings", response_model=EmailSettingsResponse, summary="Get the administrator email")
async def get_email_settings(service: EmailService = Depends(get_email_service)) -> EmailSettingsResponse:
    settings = service.get_email_settings()
    return EmailSettingsResponse(administrator_email=settings.administrator_email if settings else None)


@router.put("/settings", response_model=EmailSettingsResponse, summary="Set the administrator email")
async def update_email_settings(
    request: EmailSettingsRequest,
    service: EmailService = Depends(get_email_service),
) -> EmailSettingsResponse:
    try:
        settings = service.update_email_settings(request.administrator_email)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return EmailSettingsResponse(administrator_email=settings.administrator_email)


@router.get("/templates", response_model=List[EmailTemplateResponse], summary="List email templates")
async def list_templates(
    appointment_only: Optional[bool] = None,
    service: EmailService = Depends(get_email_service),
) -> List[EmailTemplateResponse]:
    return [template_response(template) for template in service.list_templates(appointment_only)]


@router.get(
    "/placeholders",
    response_model=Dict[str, List[PlaceholderResponse]],
    summary="List template placeholders",
)
async def list_placeholders(
    service: EmailService = Depends(get_email_service),
) -> Dict[str, List[PlaceholderResponse]]:
    return {
        group: [PlaceholderResponse(**placeholder) for placeholder in placeholders]
        for group, placeholders in service.list_placeholders().items()
    }


@router.get("/templates/{template_type}", response_model=EmailTemplateResponse, summary="Get an email template")
async def get_template(
    template_type: str,
    service: EmailService = Depends(get_email_service),
) -> EmailTemplateResponse:
    try:
        return template_response(service.get_template(template_type))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/templates/{template_type}", response_model=EmailTemplateResponse, summary="Update an email template")
async def update_template(
    template_type: str,
    request: EmailTemplateUpdateRequest,
    service: EmailService = Depends(get_email_service),
) -> EmailTemplateResponse:
    try:
        template = service.update_template(
            template_type, subject=request.subject, body=request.body, enabled=request.enabled
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return template_response(template)


@router.get(
    "/logs",
    response_model=List[EmailLogResponse],
    summary="List sent emails",
    description="Latest order and appointment email attempts, most recent first.",
)
async def list_email_logs(
    limit: int = Query(50, ge=1, le=500),
    service: EmailService = Depends(get_email_service),
) -> List[EmailLogResponse]:
    return [email_log_response(log) for log in service.list_email_logs(limit)]
