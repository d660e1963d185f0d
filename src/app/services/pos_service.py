import dataclasses
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.clients.osm_client import OsmClient
from app.domain.enums import CampusType
from app.domain.objects import Pos
from app.mappers.entity_mapper import pos_mapper
from app.repositories.pos_repository import PosRepository
from .crud_service import CrudOperations, CrudService
from .osm_importer import pos_from_osm_node

logger = logging.getLogger(__name__)


class PosService(CrudOperations[Pos]):
    """
    Points of sale: generic CRUD, lookup by name, and import from OpenStreetMap.

    `osm_client` is only needed for `import_from_osm_node`.
    """

    def __init__(self, db: AsyncSession, osm_client: OsmClient | None = None):
        self.repository = PosRepository(db)
        self.crud = CrudService(self.repository, pos_mapper, "Pos")
        self.osm_client = osm_client

    async def get_by_name(self, name: str) -> Pos:
        return await self.crud.get_by_field("name", name)

    async def import_from_osm_node(self, node_id: int, campus: CampusType) -> Pos:
        """
        Fetch an OSM node, convert it to a POS and store it.

        A POS with the same name is updated in place instead of being duplicated.

        Raises:
            NotFoundError: the node could not be fetched
            MissingFieldError: the node lacks a required tag or has a malformed postcode
            ValidationError: the resulting POS is invalid
        """
        if self.osm_client is None:
            raise RuntimeError("PosService was created without an OsmClient")

        node = await self.osm_client.fetch_node(node_id)
        pos = pos_from_osm_node(node, campus)

        existing = await self.repository.find_by_name(pos.name)
        if existing is not None:
            pos = dataclasses.replace(pos, id=existing.id)

        saved = await self.upsert(pos)
        logger.info(
            "pos.imported",
            extra={
                "node_id": node_id,
                "pos_id": saved.id,
                "updated_existing": existing is not None,
            },
        )
        return saved
