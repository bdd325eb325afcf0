"""
Event handler with sponsor reconciliation.
"""

import logging
from typing import Iterable, List

from ..models.entities import Event, Sponsor
from ..schemas.entities import SponsorLink
from .crud_service import CrudService

logger = logging.getLogger(__name__)


class EventService(CrudService):
    """
    CRUD for events plus upsert of the sponsors nested in event payloads.

    Sponsors with id 0 are created alongside the event; any other id links
    an existing sponsor. On update the association set is replaced only
    when the payload lists at least one sponsor, otherwise it is kept.
    """

    nested_fields = ("sponsors",)

    def _stage_relations(self, entity: Event, payload, is_new: bool) -> None:
        if is_new:
            entity.sponsors = self._resolve_sponsors(payload.sponsors)
            return

        if payload.sponsors:
            entity.sponsors.clear()
            entity.sponsors.extend(self._resolve_sponsors(payload.sponsors))

    def _resolve_sponsors(self, links: Iterable[SponsorLink]) -> List[Sponsor]:
        sponsors: List[Sponsor] = []
        for link in links:
            if link.is_new:
                sponsor = self.uow.sponsors.add(Sponsor(name=link.name, contact=link.contact))
            else:
                sponsor = self.uow.sponsors.get_active(link.id)
                if sponsor is None:
                    logger.warning(f"Skipping unknown sponsor {link.id} on event payload")
                    continue

            if sponsor not in sponsors:
                sponsors.append(sponsor)
        return sponsors
