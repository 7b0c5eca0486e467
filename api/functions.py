"""
Notification functions - small e-mail handlers mounted at /functions/v1.

Each handler renders one HTML template and relays it to Resend. They are
stateless and CORS-open, and sit outside the session layer. Every POST must
carry the shared X-Functions-Secret header that Notifier sends, so only the
API can make the platform send mail.

Responses: 200 {"success": true, "emailId": ...}, 401 {"error": ...} or
500 {"error": ...}.
"""

from __future__ import annotations

import logging
import secrets

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from hoopcamps.data.repositories import CampRepository, ReviewRepository
from hoopcamps.email import (
    ResendClient,
    camp_approval_email,
    camp_rejection_email,
    review_verification_email,
    submission_notification_email,
)
from hoopcamps.errors import HoopCampsError, NotFoundError, NotificationError

from .dependencies import get_camp_repository, get_review_repository
from .schemas.notifications import (
    ApprovalEmailRequest,
    EmailSentResponse,
    RejectionEmailRequest,
    ReviewVerificationRequest,
    SubmissionNotificationRequest,
)
from .services.notifier import FUNCTIONS_SECRET_HEADER
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def get_resend_client() -> ResendClient:
    settings = get_settings()
    return ResendClient(settings.resend_api_key, settings.resend_api_url)


def verify_functions_secret(request: Request, settings: Settings = Depends(get_settings)) -> None:
    """Reject callers that do not present the shared functions secret."""
    expected = settings.functions_secret
    if not expected:
        if settings.get_effective_auth_mode() == "bypass":
            return
        logger.error("FUNCTIONS_SECRET is not set; refusing notification request")
        raise HTTPException(status_code=401, detail="Unauthorized")

    provided = request.headers.get(FUNCTIONS_SECRET_HEADER, "")
    if not secrets.compare_digest(provided.encode(), expected.encode()):
        logger.warning(f"SECURITY: Rejected {request.url.path}: missing or invalid {FUNCTIONS_SECRET_HEADER}")
        raise HTTPException(status_code=401, detail="Unauthorized")


def _sent(email_id: str) -> EmailSentResponse:
    return EmailSentResponse(email_id=email_id)


def verification_url(site_url: str, token: str) -> str:
    return f"{site_url.rstrip('/')}/verify-review?token={token}"


def create_functions_app() -> FastAPI:
    app = FastAPI(title="HoopCamps notification functions", docs_url=None, redoc_url=None)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "X-Client-Info", "Apikey", FUNCTIONS_SECRET_HEADER],
    )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(NotificationError)
    async def notification_error_handler(request: Request, exc: NotificationError) -> JSONResponse:
        logger.error(f"{request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    @app.exception_handler(HoopCampsError)
    async def store_error_handler(request: Request, exc: HoopCampsError) -> JSONResponse:
        logger.error(f"{request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc)})

    # Plain OPTIONS without CORS preflight headers still gets a 200
    @app.options("/{name}")
    async def options(name: str) -> JSONResponse:
        return JSONResponse(status_code=200, content=None)

    @app.post(
        "/send-camp-approval-email",
        response_model=EmailSentResponse,
        dependencies=[Depends(verify_functions_secret)],
    )
    async def send_camp_approval_email(
        body: ApprovalEmailRequest,
        resend: ResendClient = Depends(get_resend_client),
        settings: Settings = Depends(get_settings),
    ) -> EmailSentResponse:
        message = camp_approval_email(body.camp_name, body.owner_name)
        email_id = await resend.send([body.camp_email], message.subject, message.html, settings.email_from)
        return _sent(email_id)

    @app.post(
        "/send-camp-rejection-email",
        response_model=EmailSentResponse,
        dependencies=[Depends(verify_functions_secret)],
    )
    async def send_camp_rejection_email(
        body: RejectionEmailRequest,
        resend: ResendClient = Depends(get_resend_client),
        settings: Settings = Depends(get_settings),
    ) -> EmailSentResponse:
        message = camp_rejection_email(body.camp_name, body.owner_name, body.rejection_reason)
        email_id = await resend.send([body.camp_email], message.subject, message.html, settings.email_from)
        return _sent(email_id)

    @app.post(
        "/send-review-verification",
        response_model=EmailSentResponse,
        dependencies=[Depends(verify_functions_secret)],
    )
    async def send_review_verification(
        body: ReviewVerificationRequest,
        resend: ResendClient = Depends(get_resend_client),
        settings: Settings = Depends(get_settings),
        reviews: ReviewRepository = Depends(get_review_repository),
        camps: CampRepository = Depends(get_camp_repository),
    ) -> EmailSentResponse | JSONResponse:
        if not body.review_id:
            return JSONResponse(status_code=400, content={"error": "Missing reviewId"})

        try:
            review = await reviews.get(body.review_id)
        except NotFoundError:
            return JSONResponse(status_code=404, content={"error": "Review not found"})

        camp_name = None
        try:
            camp_name = (await camps.get(review.camp_id)).profile.camp_name
        except HoopCampsError as e:
            logger.debug(f"Camp name unavailable for review {review.id}: {e}")

        message = review_verification_email(
            participant_name=review.participant_name,
            verification_url=verification_url(settings.public_site_url, review.verification_token),
            camp_name=camp_name,
        )
        email_id = await resend.send([review.participant_email], message.subject, message.html, settings.review_email_from)
        return _sent(email_id)

    @app.post(
        "/send-camp-submission-notification",
        response_model=EmailSentResponse,
        dependencies=[Depends(verify_functions_secret)],
    )
    async def send_camp_submission_notification(
        body: SubmissionNotificationRequest,
        resend: ResendClient = Depends(get_resend_client),
        settings: Settings = Depends(get_settings),
    ) -> EmailSentResponse:
        message = submission_notification_email(body.template_context())
        email_id = await resend.send([settings.admin_email], message.subject, message.html, settings.email_from)
        return _sent(email_id)

    return app
