# peoplenrich/services/api/routers/persons.py
from __future__ import annotations

from http import HTTPStatus
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query

from peoplenrich.common.settings import get_settings
from peoplenrich.domain.entities.person import PersonDraft, PersonPatch, SearchFilters
from peoplenrich.services.api.deps import get_person_service
from peoplenrich.services.people.service import PersonService
from peoplenrich.services.schemas.envelope import APIResponse
from peoplenrich.services.schemas.persons import PersonCreate, PersonRead, PersonUpdate

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/persons", tags=["persons"])


@router.post("", response_model=APIResponse[PersonRead], status_code=HTTPStatus.CREATED)
def create_person(
    payload: PersonCreate,
    svc: PersonService = Depends(get_person_service),
) -> APIResponse[PersonRead]:
    draft = PersonDraft(name=payload.name, surname=payload.surname, patronymic=payload.patronymic)
    person = svc.create(draft)
    return APIResponse[PersonRead](
        code=int(HTTPStatus.CREATED),
        message="Successfully created",
        data=PersonRead.model_validate(person),
    )


@router.get("", response_model=APIResponse[List[PersonRead]])
def list_persons(
    limit: Optional[int] = Query(None, description="Page size; <= 0 falls back to 10"),
    offset: Optional[int] = Query(None, description="Rows to skip; < 0 falls back to 0"),
    age_min: Optional[int] = Query(None),
    age_max: Optional[int] = Query(None),
    name: Optional[str] = Query(None, description="Case-insensitive substring"),
    surname: Optional[str] = Query(None, description="Case-insensitive substring"),
    gender: Optional[str] = Query(None),
    nationality: Optional[str] = Query(None),
    svc: PersonService = Depends(get_person_service),
) -> APIResponse[List[PersonRead]]:
    filters = SearchFilters(
        limit=limit,
        offset=offset,
        age_min=age_min,
        age_max=age_max,
        name=name,
        surname=surname,
        gender=gender,
        nationality=nationality,
    )
    persons = svc.list(filters)
    return APIResponse[List[PersonRead]](
        code=int(HTTPStatus.OK),
        message="OK",
        data=[PersonRead.model_validate(p) for p in persons],
    )


@router.get("/{person_id}", response_model=APIResponse[PersonRead])
def get_person(
    person_id: UUID = Path(...),
    svc: PersonService = Depends(get_person_service),
) -> APIResponse[PersonRead]:
    person = svc.get(person_id)
    return APIResponse[PersonRead](code=int(HTTPStatus.OK), message="OK", data=PersonRead.model_validate(person))


@router.put("/{person_id}", response_model=APIResponse[PersonRead])
def update_person(
    person_id: UUID,
    payload: PersonUpdate,
    svc: PersonService = Depends(get_person_service),
) -> APIResponse[PersonRead]:
    # only what the caller actually sent goes into the patch
    patch = PersonPatch.from_mapping(payload.model_dump(exclude_unset=True))
    person = svc.update(person_id, patch)
    return APIResponse[PersonRead](
        code=int(HTTPStatus.OK),
        message="Successfully updated",
        data=PersonRead.model_validate(person),
    )


@router.delete("/{person_id}", response_model=APIResponse)
def delete_person(
    person_id: UUID,
    svc: PersonService = Depends(get_person_service),
) -> APIResponse:
    svc.delete(person_id)
    return APIResponse(code=int(HTTPStatus.OK), message="Successfully deleted")
