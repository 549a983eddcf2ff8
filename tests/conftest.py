import httpx
import pytest

from walkathon.config import Config
from walkathon.storage import LocalStore

FEED_URL = "https://sheets.example.com/export?format=csv"
SUPABASE_URL = "https://project.supabase.co"

FEED_CSV = (
    "First Name,Last Name,Email Address,Mobile,T-Shirt Size\n"
    "Ramesh,Patel,ramesh@x.com,(408) 555-0123,L\n"
    "Priya,Sharma,priya@x.com,(408) 987-6543,M\n"
    "Anu,,anu@x.com,(408) 368-7230,S\n"
    "Kumar,Krishnan,kumar@x.com,(408) 456-7890,XL\n"
)


@pytest.fixture
def store(tmp_path):
    return LocalStore(tmp_path / "store")


@pytest.fixture
def config(tmp_path):
    return Config(
        name="Test Walkathon",
        feed_url=FEED_URL,
        storage_dir=tmp_path / "store",
        export_dir=tmp_path / "exports",
        organizer_contacts=["Organizer One: (408) 555-0001"],
    )


@pytest.fixture
def mock_http():
    """Build an httpx.Client whose requests are answered by `handler`."""

    def build(handler):
        return httpx.Client(transport=httpx.MockTransport(handler))

    return build


@pytest.fixture
def clock():
    """Deterministic timestamps: fixed ISO time strings."""
    return lambda: "2025-08-16T07:30:00+00:00"
