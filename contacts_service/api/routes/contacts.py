from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.orm import Session

from contacts_service.core.deps import get_db, read_json_body
from contacts_service.domain.kinds import PartType
from contacts_service.schemas.contact import ContactBody, ItemBrief, ItemPart
from contacts_service.services import contact_service
from contacts_service.services.contact_codec import encode_contact

router = APIRouter()

# surrogate keys are signed 64-bit integers
MAX_KEY = 2**63 - 1


@router.get("/count", response_model=ItemBrief)
def count_contacts(db: Session = Depends(get_db)):
    return contact_service.count_contacts(db)


@router.get("/first", response_model=ContactBody, response_model_exclude_none=True)
def find_first_contact(db: Session = Depends(get_db)):
    return encode_contact(contact_service.find_first_contact(db))


@router.get("/briefs", response_model=list[ItemBrief])
def list_briefs(name: Optional[str] = None, db: Session = Depends(get_db)):
    return contact_service.list_briefs(db, name)


@router.get("/hash", response_model=list[ContactBody], response_model_exclude_none=True)
def find_with_hash(
    id_type: PartType = Query(alias="idType"),
    contact_id: str = Query(alias="contactID"),
    db: Session = Depends(get_db),
):
    contacts = contact_service.find_with_hash(db, id_type=id_type, text=contact_id)
    return [encode_contact(c) for c in contacts]


@router.delete("/hash")
def delete_with_hash(
    id_type: PartType = Query(alias="idType"),
    contact_id: str = Query(alias="contactID"),
    db: Session = Depends(get_db),
):
    if not contact_service.delete_with_hash(db, id_type=id_type, text=contact_id):
        return Response(status_code=status.HTTP_202_ACCEPTED)
    return Response(status_code=status.HTTP_200_OK)


@router.get("", response_model=list[ContactBody], response_model_exclude_none=True)
def list_contacts(
    name: Optional[str] = None,
    city: Optional[str] = None,
    zip: Optional[str] = None,
    db: Session = Depends(get_db),
):
    contacts = contact_service.list_contacts(db, name=name, city=city, zip=zip)
    return [encode_contact(c) for c in contacts]


@router.post("", response_model=ItemBrief, status_code=status.HTTP_201_CREATED)
def create_contact(payload: ContactBody, db: Session = Depends(get_db)):
    return contact_service.create_contact(db, payload)


@router.put("", response_model=ItemBrief)
def update_contact(payload: ContactBody, db: Session = Depends(get_db)):
    return contact_service.update_contact(db, payload)


@router.post("/check", response_model=list[str])
def check_contact(payload: Any = Depends(read_json_body), db: Session = Depends(get_db)):
    return contact_service.check_contact(db, payload)


@router.post("/part", response_model=ItemBrief, status_code=status.HTTP_201_CREATED)
def create_part(payload: ItemPart, db: Session = Depends(get_db)):
    return contact_service.create_part(db, payload)


@router.get("/{contact_id}", response_model=ContactBody, response_model_exclude_none=True)
def get_contact(contact_id: int = Path(ge=0, le=MAX_KEY), db: Session = Depends(get_db)):
    return encode_contact(contact_service.get_contact(db, contact_id))


@router.delete("/{contact_id}")
def delete_contact(contact_id: int = Path(ge=0, le=MAX_KEY), db: Session = Depends(get_db)):
    if not contact_service.delete_contact(db, contact_id):
        return Response(status_code=status.HTTP_202_ACCEPTED)
    return Response(status_code=status.HTTP_200_OK)
