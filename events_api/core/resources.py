"""
Resource table for the Events Registry API.

Each entry describes one REST resource: its URL segment, ORM model,
request/response schemas, the handler class that serves it, which
relationships are eager-loaded on reads and which operations require a
bearer token. Routers and units of work are built from this table.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple, Type

from pydantic import BaseModel

from ..models.entities import Base, Event, Venue, Organizer, Participant, Sponsor, Registration
from ..schemas import entities as schemas
from ..services.crud_service import CrudService
from ..services.event_service import EventService

OPERATIONS = frozenset({"list", "get", "create", "update", "delete"})
MUTATIONS = frozenset({"create", "update", "delete"})


@dataclass(frozen=True)
class ResourceConfig:
    """Declarative description of a soft-delete CRUD resource."""
    name: str
    label: str
    model: Type[Base]
    create_schema: Type[BaseModel]
    update_schema: Type[BaseModel]
    response_schema: Type[BaseModel]
    service_class: Type[CrudService] = CrudService
    eager_load: Tuple[str, ...] = ()
    protected: FrozenSet[str] = field(default_factory=frozenset)

    def requires_auth(self, operation: str) -> bool:
        """Check whether an operation is gated by a bearer token."""
        if operation not in OPERATIONS:
            raise ValueError(f"Unknown operation: {operation}")
        return operation in self.protected


RESOURCES: Tuple[ResourceConfig, ...] = (
    ResourceConfig(
        name="events",
        label="Event",
        model=Event,
        create_schema=schemas.EventCreate,
        update_schema=schemas.EventUpdate,
        response_schema=schemas.EventResponse,
        service_class=EventService,
        eager_load=("sponsors",),
    ),
    ResourceConfig(
        name="venues",
        label="Venue",
        model=Venue,
        create_schema=schemas.VenueCreate,
        update_schema=schemas.VenueUpdate,
        response_schema=schemas.VenueResponse,
    ),
    ResourceConfig(
        name="organizers",
        label="Organizer",
        model=Organizer,
        create_schema=schemas.OrganizerCreate,
        update_schema=schemas.OrganizerUpdate,
        response_schema=schemas.OrganizerResponse,
        protected=MUTATIONS,
    ),
    ResourceConfig(
        name="participants",
        label="Participant",
        model=Participant,
        create_schema=schemas.ParticipantCreate,
        update_schema=schemas.ParticipantUpdate,
        response_schema=schemas.ParticipantResponse,
    ),
    ResourceConfig(
        name="sponsors",
        label="Sponsor",
        model=Sponsor,
        create_schema=schemas.SponsorCreate,
        update_schema=schemas.SponsorUpdate,
        response_schema=schemas.SponsorResponse,
        protected=MUTATIONS,
    ),
    ResourceConfig(
        name="registrations",
        label="Registration",
        model=Registration,
        create_schema=schemas.RegistrationCreate,
        update_schema=schemas.RegistrationUpdate,
        response_schema=schemas.RegistrationResponse,
    ),
)
