"""Catalog loading — command and handler.

The catalog is supplied as a static list when a session starts. Entries carry
``id``, ``price`` and ``stock`` plus opaque display metadata.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Text
from protean.utils.globals import current_domain

from storefront.catalog.item import CatalogItem
from storefront.catalog.store import list_items
from storefront.domain import storefront

logger = structlog.get_logger(__name__)

_METADATA_FIELDS = ("description", "image_ref", "category", "rating")


@storefront.command(part_of="CatalogItem")
class LoadCatalog:
    """List every entry of a static catalog."""

    items = Text(required=True)  # JSON: list of {id, name, price, stock, ...}


@storefront.command_handler(part_of=CatalogItem)
class LoadCatalogHandler:
    @handle(LoadCatalog)
    def load_catalog(self, command):
        entries = json.loads(command.items) if isinstance(command.items, str) else command.items

        seen = {str(item.id) for item in list_items()}
        for entry in entries:
            item_id = str(entry["id"])
            if item_id in seen:
                raise ValidationError({"items": [f"Catalog item {item_id} is already listed"]})
            seen.add(item_id)

        repo = current_domain.repository_for(CatalogItem)
        for position, entry in enumerate(entries):
            item = CatalogItem.create(
                item_id=entry["id"],
                name=entry.get("name") or str(entry["id"]),
                price=entry["price"],
                stock=entry["stock"],
                position=position,
                **{key: entry.get(key) for key in _METADATA_FIELDS},
            )
            repo.add(item)

        logger.info("Catalog loaded", item_count=len(entries))
        return [str(entry["id"]) for entry in entries]
