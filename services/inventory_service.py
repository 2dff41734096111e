from sqlalchemy.orm import Session

from models.inventory import InventoryItem


def list_inventory(db: Session):
    return db.query(InventoryItem).order_by(InventoryItem.item_id).all()


def get_low_stock_items(db: Session):
    """Items at or below their reorder level."""
    return (
        db.query(InventoryItem)
        .filter(InventoryItem.current_stock <= InventoryItem.reorder_level)
        .order_by(InventoryItem.item_id)
        .all()
    )
