from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Provenance(str, Enum):
    """Intake path that produced a participant record."""

    EXTERNAL_SOURCE = "external_source"
    ON_SITE_REGISTRATION = "on_site_registration"
    PRE_REGISTERED_CONFIRMED = "pre_registered_confirmed"


class Participant(BaseModel):
    """
    Represents a single walkathon participant.

    Pre-registered participants come from the external spreadsheet and may be
    missing everything but a name. On-site registrations always carry email,
    phone, and a signed waiver.

    Attributes are serialized under the same field names the spreadsheet cache,
    the local store, and the remote `participants` table use (see aliases).

    Attributes:
        id (int | str): Unique identifier. Spreadsheet rows use a `gs_` prefix.
        first_name (str): First name.
        last_name (str): Last name.
        source (Provenance): Which intake path produced this record.
        extra (dict[str, str]): Spreadsheet columns with no dedicated field.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int | str
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str = ""
    phone: str = ""
    emergency_contact: str = Field("", alias="emergencyContact")
    emergency_phone: str = Field("", alias="emergencyPhone")
    additional_party: str = Field("", alias="additionalParty")
    waiver_signed: bool = False
    signature: str = ""
    registration_time: str | None = None
    checked_in: bool = False
    checked_out: bool = False
    source: Provenance = Provenance.EXTERNAL_SOURCE
    extra: dict[str, str] = Field(default_factory=dict)

    @field_validator(
        "first_name",
        "last_name",
        "email",
        "phone",
        "emergency_contact",
        "emergency_phone",
        "additional_party",
        "signature",
        mode="before",
    )
    @classmethod
    def _null_text_to_empty(cls, value):
        # remote rows carry NULL for columns the form left blank
        return "" if value is None else value

    @field_validator("waiver_signed", "checked_in", "checked_out", mode="before")
    @classmethod
    def _null_flag_to_false(cls, value):
        return False if value is None else value

    def __repr__(self):
        return f"{self.full_name}"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_valid(self) -> bool:
        """Returns True if the participant has both a first and a last name."""
        return bool(self.first_name and self.last_name)

    def to_record(self) -> dict:
        """Serialize to the stored/exported field names."""
        return self.model_dump(mode="json", by_alias=True)

    def to_row(self) -> dict:
        """Serialize for the remote `participants` table, which has no `extra` column."""
        return self.model_dump(mode="json", by_alias=True, exclude={"extra"})

    @classmethod
    def from_record(cls, record: dict) -> "Participant":
        return cls.model_validate(record)
