import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError

from walkathon.errors import ConfigError

# environment variable -> Config field; environment values win over the YAML file
ENVIRONMENT_OVERRIDES = {
    "WALKATHON_FEED_URL": "feed_url",
    "SUPABASE_URL": "supabase_url",
    "SUPABASE_ANON_KEY": "supabase_key",
    "EMAILJS_SERVICE_ID": "emailjs_service_id",
    "EMAILJS_TEMPLATE_ID": "emailjs_template_id",
    "EMAILJS_PUBLIC_KEY": "emailjs_public_key",
}
PATH_FIELDS = ["storage_dir", "export_dir"]


class EventDetails(BaseModel):
    """Event facts quoted in confirmation emails."""

    name: str = Field("Community Walkathon", description="Event title.")
    date: str = Field("", description="Event date as shown to participants.")
    time: str = Field("", description="Event time window.")
    location: str = Field("", description="Where the walk starts.")
    breakfast_info: str = Field("", description="Breakfast note for the email.")
    lunch_info: str = Field("", description="Lunch note for the email.")


class Config(BaseModel):
    """Configuration data for running a walkathon check-in station."""

    name: str = Field("walkathon", description="Prefix for exported file names.")
    event: EventDetails = Field(default_factory=EventDetails)
    feed_url: str | None = Field(
        None, description="URL of the pre-registration spreadsheet's CSV export."
    )
    min_payload_bytes: int = Field(
        50, description="Feed payloads this size or smaller are treated as errors."
    )
    storage_dir: Path = Field(
        Path(".walkathon"), description="Directory for durable local data."
    )
    export_dir: Path = Field(Path("."), description="Directory for exported files.")
    supabase_url: str | None = Field(None, description="Supabase project URL.")
    supabase_key: str | None = Field(None, description="Supabase anon key.")
    supabase_table: str = Field(
        "participants", description="Remote table holding registrations."
    )
    emailjs_service_id: str | None = Field(None, description="EmailJS service ID.")
    emailjs_template_id: str | None = Field(None, description="EmailJS template ID.")
    emailjs_public_key: str | None = Field(None, description="EmailJS public key.")
    organizer_contacts: list[str] = Field(
        default_factory=list,
        description="Organizer names and phone numbers shown for donations.",
    )
    minimum_donation: float = Field(1.0, description="Smallest accepted donation.")

    @property
    def remote_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def email_configured(self) -> bool:
        return bool(
            self.emailjs_service_id
            and self.emailjs_template_id
            and self.emailjs_public_key
        )


def resolve_config_paths(config_data: dict, config_path: Path) -> dict:
    """Resolve relative directory paths against the configuration file directory.

    Args:
        config_data: Raw configuration dictionary.
        config_path: Path to the configuration file.

    Returns:
        dict: Configuration data with resolved paths.
    """
    if not config_data or not config_path:
        return config_data or {}

    resolved_data = dict(config_data)
    base_dir = config_path.parent
    for key in PATH_FIELDS:
        value = resolved_data.get(key)
        if not value:
            continue
        path = Path(value)
        if not path.is_absolute():
            resolved_data[key] = str((base_dir / path).resolve())
    return resolved_data


def apply_environment(config_data: dict, environ=None) -> dict:
    """Overlay secrets and endpoints from environment variables.

    Args:
        config_data: Configuration dictionary.
        environ: Mapping to read from, defaults to `os.environ`.

    Returns:
        dict: A copy of `config_data` with non-empty environment values applied.
    """
    environ = os.environ if environ is None else environ
    merged = dict(config_data)
    for variable, field in ENVIRONMENT_OVERRIDES.items():
        if environ.get(variable):
            merged[field] = environ[variable]
    return merged


def load_config(config_path: Path | None = None, environ=None) -> Config:
    """Load a YAML configuration file into a validated Config.

    Args:
        config_path: Path to the YAML file. When omitted only defaults and
            environment variables are used.
        environ: Optional environment mapping, mainly for tests.

    Returns:
        Config: Validated configuration.

    Raises:
        ConfigError: If the file cannot be read or fails validation.
    """
    data = {}
    if config_path is not None:
        config_path = Path(config_path)
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read config {config_path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config {config_path} must be a mapping")
        data = resolve_config_paths(data, config_path)

    try:
        return Config(**apply_environment(data, environ))
    except ValidationError as e:
        raise ConfigError(f"Invalid config: {e}") from e
