import logging
from dataclasses import dataclass

from pydantic import BaseModel, Field

from walkathon.errors import PersistenceFailure, RegistrationError
from walkathon.participant import Participant, Provenance
from walkathon.utils import now_iso

logger = logging.getLogger(__name__)

LOCAL_ONLY_ADVISORY = (
    "Registration saved locally! Note: Email confirmation may not be available."
)
REQUIRED_FIELDS = {
    "first_name": "first name",
    "last_name": "last name",
    "email": "email",
    "phone": "phone",
}


class RegistrationForm(BaseModel):
    """What a participant fills in at the registration table."""

    first_name: str = Field("", description="First name.")
    last_name: str = Field("", description="Last name.")
    email: str = Field("", description="Email for the confirmation message.")
    phone: str = Field("", description="Mobile number.")
    emergency_contact: str = Field("", description="Emergency contact name.")
    emergency_phone: str = Field("", description="Emergency contact phone.")
    additional_party: str = Field(
        "", description="Family members or friends walking along."
    )
    waiver_signed: bool = Field(False, description="Liability waiver accepted.")
    signature: str = Field("", description="Typed full-name signature.")


@dataclass
class RegistrationOutcome:
    """Result of a completed registration."""

    participant: Participant
    advisory: str | None = None
    email_sent: bool = False
    failure: PersistenceFailure | None = None


class Registrar:
    """
    Runs the registration workflow: validate the form and waiver, save the
    record through the gateway, and send the confirmation email.
    """

    def __init__(self, gateway, emailer=None, clock=now_iso):
        self.gateway = gateway
        self.emailer = emailer
        self.clock = clock

    @staticmethod
    def prefill(participant: Participant) -> RegistrationForm:
        """Start a form from a pre-registered participant's spreadsheet row."""
        return RegistrationForm(
            first_name=participant.first_name,
            last_name=participant.last_name,
            email=participant.email,
            phone=participant.phone,
        )

    @staticmethod
    def validate(form: RegistrationForm) -> None:
        """
        Raises:
            RegistrationError: If the waiver is unsigned or a required field is blank.
        """
        if not form.waiver_signed:
            raise RegistrationError(
                "Please sign the waiver before completing registration."
            )
        missing = [
            label for field, label in REQUIRED_FIELDS.items()
            if not getattr(form, field).strip()
        ]
        if missing:
            raise RegistrationError(
                f"Please fill in all required fields (missing: {', '.join(missing)})."
            )

    def register(self, form: RegistrationForm, selected_id=None) -> RegistrationOutcome:
        """
        Register a participant.

        Args:
            form (RegistrationForm): Completed form.
            selected_id: Identifier of the pre-registered row this form confirms,
                or None for a walk-up registration.

        Returns:
            RegistrationOutcome: The saved participant and any advisory for the user.

        Raises:
            RegistrationError: If the form does not validate.
        """
        self.validate(form)

        source = (
            Provenance.PRE_REGISTERED_CONFIRMED
            if selected_id is not None
            else Provenance.ON_SITE_REGISTRATION
        )
        participant = Participant(
            id=0,
            **form.model_dump(),
            registration_time=self.clock(),
            source=source,
        )

        saved, failure = self.gateway.insert_registration(participant)
        outcome = RegistrationOutcome(participant=saved, failure=failure)
        if failure is not None:
            outcome.advisory = LOCAL_ONLY_ADVISORY

        if self.emailer is not None:
            outcome.email_sent = self.emailer.send(saved)

        logger.info("Registered %s (%s) as %s", saved, saved.id, source.value)
        return outcome
