"""
Pydantic schemas for the Events Registry API resources.
Field constraints here are the declarative validation rules for each
resource; a payload that violates any of them never reaches persistence.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import AliasChoices, BaseModel, EmailStr, Field, model_validator

from ..models.entities import MAX_ID

PHONE_PATTERN = r"^\(\d{2}\)\d{5}-\d{4}$"
NATIONAL_ID_PATTERN = r"^\d{3}\.\d{3}\.\d{3}-\d{2}$"


class OrmResponse(BaseModel):
    """Common fields of every resource representation."""
    id: int
    is_deleted: bool = False

    class Config:
        from_attributes = True


# Venues

class VenueBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Venue name")
    address: str = Field(..., min_length=1, max_length=200, description="Street address")
    max_capacity: int = Field(..., ge=1, le=10000, description="Maximum number of people")


class VenueCreate(VenueBase):
    pass


class VenueUpdate(VenueBase):
    id: int


class VenueResponse(VenueBase, OrmResponse):
    pass


# Organizers

class OrganizerBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Organizer name")
    contact: str = Field(..., pattern=PHONE_PATTERN, description="Phone in the (99)99999-9999 format")


class OrganizerCreate(OrganizerBase):
    pass


class OrganizerUpdate(OrganizerBase):
    id: int


class OrganizerResponse(OrganizerBase, OrmResponse):
    pass


# Participants

class ParticipantBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Participant name")
    email: EmailStr = Field(..., description="Contact e-mail")
    national_id: str = Field(
        ..., pattern=NATIONAL_ID_PATTERN, description="National id in the 999.999.999-99 format"
    )


class ParticipantCreate(ParticipantBase):
    pass


class ParticipantUpdate(ParticipantBase):
    id: int


class ParticipantResponse(ParticipantBase, OrmResponse):
    pass


# Sponsors

class SponsorBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Sponsor name")
    contact: str = Field(..., pattern=PHONE_PATTERN, description="Phone in the (99)99999-9999 format")


class SponsorCreate(SponsorBase):
    pass


class SponsorUpdate(SponsorBase):
    id: int


class SponsorResponse(SponsorBase, OrmResponse):
    pass


class SponsorLink(BaseModel):
    """
    Sponsor nested in an event payload.

    An id of 0 describes a brand-new sponsor, which then needs a name and a
    contact. Any other id refers to an existing sponsor.
    """
    id: int = Field(0, ge=0)
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    contact: Optional[str] = Field(None, pattern=PHONE_PATTERN)

    @model_validator(mode="after")
    def require_details_for_new_sponsor(self):
        if self.id == 0 and (self.name is None or self.contact is None):
            raise ValueError("name and contact are required for a new sponsor")
        return self

    @property
    def is_new(self) -> bool:
        return self.id == 0


# Events

class EventBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Event name")
    description: str = Field(..., min_length=1, max_length=500, description="Event description")
    date: datetime = Field(..., description="Event date and time")
    capacity: int = Field(..., ge=1, le=10000, description="Event capacity")
    venue_id: int = Field(..., gt=0, le=MAX_ID, description="Hosting venue id")
    organizer_id: int = Field(..., gt=0, le=MAX_ID, description="Organizer id")


class EventCreate(EventBase):
    sponsors: List[SponsorLink] = Field(default_factory=list)


class EventUpdate(EventCreate):
    id: int


class EventResponse(EventBase, OrmResponse):
    sponsors: List[SponsorResponse] = Field(
        default_factory=list,
        validation_alias=AliasChoices("active_sponsors", "sponsors"),
    )


# Registrations

class RegistrationBase(BaseModel):
    registration_date: datetime = Field(..., description="Registration date")
    event_id: int = Field(..., gt=0, le=MAX_ID, description="Event id")
    participant_id: int = Field(..., gt=0, le=MAX_ID, description="Participant id")


class RegistrationCreate(RegistrationBase):
    pass


class RegistrationUpdate(RegistrationBase):
    id: int


class RegistrationResponse(RegistrationBase, OrmResponse):
    pass
