"""
API v1 routes.

Defines REST endpoints for the registration verification API.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.api.dependencies import get_account_repository, get_composer, get_mail_sender
from src.api.models import RegisterRequest, RegisterResponse, RejectionResponse
from src.domain.composer import VerificationEmailComposer
from src.domain.ports import AccountRepository, MailSender
from src.domain.registration import verify_registration

router = APIRouter(tags=["v1"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_202_ACCEPTED,
    responses={
        400: {"model": RejectionResponse, "description": "Registration rejected"},
        422: {"description": "Validation error"},
    },
    summary="Verify a registration",
    description="Check that the username and email are unclaimed, then send "
    "a verification email containing the supplied verification URL.",
)
def register(
    request_data: RegisterRequest,
    accounts: AccountRepository = Depends(get_account_repository),
    mail_sender: MailSender = Depends(get_mail_sender),
    composer: VerificationEmailComposer = Depends(get_composer),
) -> RegisterResponse | JSONResponse:
    """
    Verify registration details and send the verification email.

    - **username**: Requested username
    - **email**: Address that receives the verification link
    - **verification_url**: Link embedded in the email
    """
    result = verify_registration(
        request_data.to_domain(),
        accounts=accounts,
        mail_sender=mail_sender,
        composer=composer,
    )

    if result.reason is not None:
        body = RejectionResponse(detail=result.message, reason=result.reason)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=body.model_dump(mode="json"),
        )

    return RegisterResponse(message=result.message, email=str(request_data.email))
