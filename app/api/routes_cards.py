"""
Admin API routes for invitation cards and card templates
"""

from fastapi import APIRouter, Depends, status

from app.api.deps import get_card_service, get_paginated_query, get_storage
from app.schemas.card import CardCreate, CardUpdate
from app.schemas.card_template import CardTemplateCreate, CardTemplateUpdate
from app.schemas.common import PaginatedQuery
from app.services.card_service import CardService
from app.services.storage import Storage
from app.utils.responses import success_response

router = APIRouter()

# -------- Cards --------

@router.post("/cards")
def issue_card(
    card_data: CardCreate,
    cards: CardService = Depends(get_card_service),
):
    """Issue a card, optionally assigned to a guest"""
    card = cards.issue_card(card_data)
    return success_response(
        message="Card created successfully",
        data=card,
        status_code=status.HTTP_201_CREATED
    )

@router.get("/cards")
def list_cards(
    query: PaginatedQuery = Depends(get_paginated_query),
    storage: Storage = Depends(get_storage),
):
    """Search cards across events by holder name or phone"""
    cards = storage.cards.list(query)
    return success_response(message="Cards retrieved successfully", data=cards)

@router.get("/cards/{card_id}")
def get_card(card_id: int, storage: Storage = Depends(get_storage)):
    card = storage.cards.get_by_id(card_id)
    return success_response(message="Card retrieved successfully", data=card)

@router.patch("/cards/{card_id}")
def update_card(
    card_id: int,
    card_update: CardUpdate,
    storage: Storage = Depends(get_storage),
    cards: CardService = Depends(get_card_service),
):
    """Update a card; reassigning it moves the guest's card reference too"""
    card = storage.cards.get_by_id(card_id)
    updated = cards.update_card(card.model_copy(update=card_update.model_dump(exclude_unset=True)))
    return success_response(message="Card updated successfully", data=updated)

@router.delete("/cards/{card_id}")
def delete_card(card_id: int, cards: CardService = Depends(get_card_service)):
    """Delete a card; its holder is left without one"""
    cards.delete_card(card_id)
    return success_response(
        message="Card deleted successfully",
        data={"deleted_card_id": card_id}
    )

# -------- Card templates --------

@router.post("/card-templates")
def create_card_template(
    template_data: CardTemplateCreate,
    storage: Storage = Depends(get_storage),
):
    template = storage.card_templates.create(template_data)
    return success_response(
        message="Card template created successfully",
        data=template,
        status_code=status.HTTP_201_CREATED
    )

@router.get("/card-templates")
def list_card_templates(
    query: PaginatedQuery = Depends(get_paginated_query),
    storage: Storage = Depends(get_storage),
):
    templates = storage.card_templates.list(query)
    return success_response(message="Card templates retrieved successfully", data=templates)

@router.get("/card-templates/{template_id}")
def get_card_template(template_id: int, storage: Storage = Depends(get_storage)):
    template = storage.card_templates.get_by_id(template_id)
    return success_response(message="Card template retrieved successfully", data=template)

@router.patch("/card-templates/{template_id}")
def update_card_template(
    template_id: int,
    template_update: CardTemplateUpdate,
    storage: Storage = Depends(get_storage),
):
    template = storage.card_templates.get_by_id(template_id)
    updated = storage.card_templates.update(
        template.model_copy(update=template_update.model_dump(exclude_unset=True))
    )
    return success_response(message="Card template updated successfully", data=updated)

@router.delete("/card-templates/{template_id}")
def delete_card_template(template_id: int, storage: Storage = Depends(get_storage)):
    """Delete a template; events and cards using it keep working without one"""
    storage.card_templates.delete(template_id)
    return success_response(
        message="Card template deleted successfully",
        data={"deleted_card_template_id": template_id}
    )
