"""Read side of the catalog store: lookups and live stock levels."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalog.item import CatalogItem
from storefront.exceptions import ItemNotFound


def get_item(item_id):
    """Fetch a catalog item, raising ``ItemNotFound`` for unknown ids."""
    try:
        return current_domain.repository_for(CatalogItem).get(str(item_id))
    except ObjectNotFoundError as exc:
        raise ItemNotFound({"item_id": [f"Catalog item {item_id} does not exist"]}) from exc


def list_items():
    """All catalog items in display order."""
    items = current_domain.repository_for(CatalogItem)._dao.query.all().items
    return sorted(items, key=lambda item: item.position)


def stock_levels():
    return {str(item.id): item.stock for item in list_items()}
