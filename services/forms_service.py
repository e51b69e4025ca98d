"""Form handling: onboarding webhook delivery, contact and application receipts.

Each visible form is modelled by a FormSubmission that moves through
editing -> submitting -> success | error. Only the onboarding form talks to
the network; contact and creator applications are acknowledged locally.
"""
from datetime import datetime
from typing import Awaitable, Callable, Generic, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

import config
from models import (
    ContactSubmission,
    Creator,
    CreatorApplication,
    FormState,
    OnboardingResponse,
    OnboardingSubmission,
)

NETWORK_ERROR_MESSAGE = "Network error while submitting. Please check your connection and try again."
GENERIC_ERROR_MESSAGE = "There was a problem recording your submission. Please try again."
CONTACT_RECEIVED_MESSAGE = (
    "Thanks for reaching out, your message has been received and queued for review."
)
MISSING_FIELDS_MESSAGE = "Please fill in every field before submitting: {fields}."

F = TypeVar("F", bound=BaseModel)


class SubmissionError(Exception):
    """A form submission failed; the message is safe to show to the visitor."""


class SubmissionInProgress(Exception):
    """Raised when a form is submitted again while a request is outstanding."""


class FormSubmission(Generic[F]):
    """State of one form instance.

    Values survive an error so the visitor can retry, and are reset to the
    blank form after a success.
    """

    def __init__(self, values: F) -> None:
        self._blank: F = type(values).blank()
        self.values: F = values
        self.state: FormState = FormState.EDITING
        self.error: Optional[str] = None
        self.result = None

    @property
    def is_submitting(self) -> bool:
        return self.state == FormState.SUBMITTING

    def edit(self, values: F) -> None:
        if self.is_submitting:
            raise SubmissionInProgress("Form is being submitted")
        self.values = values
        self.state = FormState.EDITING

    def begin(self) -> None:
        if self.is_submitting:
            raise SubmissionInProgress("Form is already being submitted")
        self.state = FormState.SUBMITTING
        self.error = None

    def succeed(self, result=None) -> None:
        self.state = FormState.SUCCESS
        self.result = result
        self.values = self._blank

    def fail(self, message: str) -> None:
        self.state = FormState.ERROR
        self.error = message

    async def run(self, submit: Callable[[F], Awaitable]) -> "FormSubmission[F]":
        """Submit the current values with ``submit`` and record the outcome."""
        self.begin()
        try:
            result = await submit(self.values)
        except SubmissionError as e:
            self.fail(str(e))
        except Exception:
            self.fail(GENERIC_ERROR_MESSAGE)
            raise
        else:
            self.succeed(result)
        return self


def open_form(model: Type[F], **raw: str) -> FormSubmission[F]:
    """Validate posted form fields into a FormSubmission.

    Invalid or blank fields leave the form in the error state holding the
    raw values, so it is re-rendered instead of being submitted.
    """
    try:
        return FormSubmission(model(**raw))
    except ValidationError as e:
        # Error locations may be reported by alias (primaryChannel)
        names = {field.alias or name: name for name, field in model.model_fields.items()}
        fields = ", ".join(
            dict.fromkeys(
                names.get(str(err["loc"][0]), str(err["loc"][0])).replace("_", " ")
                for err in e.errors()
                if err["loc"]
            )
        )
        form = FormSubmission(model.model_construct(**raw))
        form.fail(MISSING_FIELDS_MESSAGE.format(fields=fields))
        return form


def _parse_response(response: httpx.Response) -> Optional[OnboardingResponse]:
    try:
        return OnboardingResponse.model_validate(response.json())
    except (ValueError, ValidationError):
        # Non-JSON or unexpected shape counts as a failed submission
        return None


async def submit_onboarding(
    submission: OnboardingSubmission,
    endpoint: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> OnboardingResponse:
    """POST an onboarding submission to the webhook and interpret its reply.

    Args:
        submission: Affiliate profile entered by the visitor.
        endpoint: Webhook URL; defaults to ``config.ONBOARDING_ENDPOINT``.
        client: Optional shared client, mainly for tests.

    Raises:
        SubmissionError: on transport failure, a non-2xx status, an
            unparseable body, or ``ok: false`` in the reply.
    """
    url = endpoint or config.ONBOARDING_ENDPOINT
    body = submission.model_dump(by_alias=True)

    try:
        if client is None:
            async with httpx.AsyncClient(follow_redirects=True) as own_client:
                response = await own_client.post(url, json=body, timeout=config.REQUEST_TIMEOUT)
        else:
            response = await client.post(url, json=body, timeout=config.REQUEST_TIMEOUT)
    except httpx.HTTPError as e:
        print(f"❌ Onboarding webhook unreachable: {e}")
        raise SubmissionError(NETWORK_ERROR_MESSAGE) from e

    data = _parse_response(response)
    if not response.is_success or data is None or not data.ok:
        message = (data and (data.error or data.message)) or GENERIC_ERROR_MESSAGE
        print(f"❌ Onboarding rejected ({response.status_code}): {message}")
        raise SubmissionError(message)

    return data


async def acknowledge_contact(submission: ContactSubmission) -> str:
    """Accept a contact form; messages are queued for review, not sent anywhere."""
    return CONTACT_RECEIVED_MESSAGE


def application_reference(creator_id: str, when: datetime) -> str:
    """Reference code for a creator application, e.g. AFF-MODPARTY-20250405."""
    return f"AFF-{creator_id.upper()}-{when:%Y%m%d}"


def acknowledge_application(
    creator: Creator, application: CreatorApplication, when: Optional[datetime] = None
) -> str:
    when = when or datetime.now()
    reference = application_reference(creator.id, when)
    return (
        f"Thanks, {application.name or 'affiliate'}, your application for {creator.shop_name} "
        f"has been recorded with reference {reference}. "
        "Expect a response within 2-3 business days."
    )
