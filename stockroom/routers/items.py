from fastapi import APIRouter, Depends, Request, Query
from sqlalchemy.orm import Session

from stockroom.db.session import get_db
from stockroom.schemas.items import ItemPayload, ItemOut, ItemPage, ItemStats
from stockroom.schemas.auth import MessageResponse
from stockroom.core.config import Settings, get_settings
from stockroom.core.security import get_current_user_id
from stockroom.core.logging import log_event, request_id
from stockroom.services.item_service import ItemService

router = APIRouter(prefix="/api/items", tags=["items"])

@router.get("", response_model=ItemPage)
def list_items(
	page: int = Query(1, ge=1, le=1_000_000),
	limit: int = Query(10, ge=1, le=1000),
	search: str | None = None,
	category: str | None = None,
	db: Session = Depends(get_db),
	user_id: int = Depends(get_current_user_id),
):
	return ItemService(db).list(user_id, page=page, page_size=limit, search=search, category=category)

@router.get("/stats", response_model=ItemStats)
def item_stats(
	db: Session = Depends(get_db),
	settings: Settings = Depends(get_settings),
	user_id: int = Depends(get_current_user_id),
):
	return ItemService(db).stats(user_id, settings.LOW_STOCK_THRESHOLD)

@router.get("/categories", response_model=list[str])
def item_categories(db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
	return ItemService(db).categories(user_id)

@router.post("", response_model=ItemOut, status_code=201)
def create_item(
	request: Request,
	payload: ItemPayload,
	db: Session = Depends(get_db),
	user_id: int = Depends(get_current_user_id),
):
	item = ItemService(db).create(user_id, payload)
	log_event("item_created", item_id=item.id, owner_id=user_id, request_id=request_id(request))
	return item

@router.get("/{item_id}", response_model=ItemOut)
def get_item(item_id: int, db: Session = Depends(get_db), user_id: int = Depends(get_current_user_id)):
	return ItemService(db).get(user_id, item_id)

@router.put("/{item_id}", response_model=ItemOut)
def update_item(
	request: Request,
	item_id: int,
	payload: ItemPayload,
	db: Session = Depends(get_db),
	user_id: int = Depends(get_current_user_id),
):
	item = ItemService(db).update(user_id, item_id, payload)
	log_event("item_updated", item_id=item.id, owner_id=user_id, request_id=request_id(request))
	return item

@router.delete("/{item_id}", response_model=MessageResponse)
def delete_item(
	request: Request,
	item_id: int,
	db: Session = Depends(get_db),
	user_id: int = Depends(get_current_user_id),
):
	ItemService(db).delete(user_id, item_id)
	log_event("item_deleted", item_id=item_id, owner_id=user_id, request_id=request_id(request))
	return {"message": "Item deleted"}
