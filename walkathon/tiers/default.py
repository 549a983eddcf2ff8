from walkathon.participant import Participant, Provenance
from walkathon.tiers import SyncOutcome, SyncTier, register

SAMPLE_PARTICIPANTS = [
    {
        "id": "gs_1",
        "firstName": "Ramesh",
        "lastName": "Patel",
        "email": "ramesh.patel@email.com",
        "phone": "(408) 555-0123",
    },
    {
        "id": "gs_2",
        "firstName": "Priya",
        "lastName": "Sharma",
        "email": "priya.sharma@email.com",
        "phone": "(408) 987-6543",
    },
    {
        "id": "gs_3",
        "firstName": "Kumar",
        "lastName": "Krishnan",
        "email": "kumar.krishnan@email.com",
        "phone": "(408) 456-7890",
    },
]


@register
class DefaultSample(SyncTier):
    """Built-in sample list so the station is usable fully offline."""

    outcome = SyncOutcome.DEFAULT
    priority = 2

    def load(self):
        return [
            Participant.model_validate(
                {**record, "source": Provenance.EXTERNAL_SOURCE}
            )
            for record in SAMPLE_PARTICIPANTS
        ]
