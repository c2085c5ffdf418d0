"""
Routes CRUD partagées

Each entity module builds its own APIRouter, registers its specific
routes first (static paths must precede `/{record_id}`), then calls
register_crud_routes() for create/list/get/update/delete.
"""

from datetime import date
from typing import Callable, Optional, Set, Type

from fastapi import APIRouter, HTTPException, Query
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from models import CrmModel
from services.crud import EntityService, month_range, year_range, day_range


def not_found(service: EntityService) -> HTTPException:
    return HTTPException(status_code=404, detail=f"{service.label} not found")


def validation_error(e: ValidationError) -> HTTPException:
    """Erreur Pydantic levée hors du corps JSON (formulaires multipart)"""
    return HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))


def non_nullable_fields(create_model: Type[CrmModel]) -> Set[str]:
    """Clés camelCase qu'un PUT ne peut pas remettre à null (requises ou avec défaut)"""
    return {
        field.alias or to_camel(name)
        for name, field in create_model.model_fields.items()
        if field.is_required() or field.default is not None
    }


def register_crud_routes(
    router: APIRouter,
    service: EntityService,
    create_model: Type[CrmModel],
    update_model: Type[CrmModel],
    prepare: Optional[Callable[[CrmModel], dict]] = None,
    with_create: bool = True,
    on_delete: Optional[Callable[[dict], None]] = None,
):
    """
    prepare: transforme le modèle validé en document (défaut: to_document()).
    with_create=False: le module déclare son propre POST (multipart).
    on_delete: nettoyage appelé avec le document supprimé.
    Les entités avec statuts acceptent ?status= sur la liste.
    """
    label = service.label
    required = non_nullable_fields(create_model)

    if with_create:
        @router.post("", status_code=201)
        async def create_record(data: create_model):
            fields = prepare(data) if prepare else data.to_document()
            record = await service.create(fields)
            return {"success": True, "message": f"{label} created successfully", "data": record}

    if service.statuses:
        @router.get("")
        async def list_records(status: Optional[str] = None):
            query = {"status": status} if status else {}
            records = await service.list(query)
            return {"success": True, "data": records, "count": len(records)}
    else:
        @router.get("")
        async def list_records():
            records = await service.list()
            return {"success": True, "data": records, "count": len(records)}

    @router.get("/{record_id}")
    async def get_record(record_id: str):
        record = await service.get(record_id)
        if not record:
            raise not_found(service)
        return {"success": True, "data": record}

    @router.put("/{record_id}")
    async def update_record(record_id: str, data: update_model):
        """null efface un champ optionnel; refusé sur un champ requis"""
        changes = data.to_document(partial=True)
        if not changes:
            raise HTTPException(status_code=400, detail="No data provided for update")
        cleared = sorted(k for k, v in changes.items() if v is None and k in required)
        if cleared:
            raise HTTPException(status_code=422, detail=f"Field(s) cannot be null: {', '.join(cleared)}")
        updated = await service.update(record_id, changes)
        if not updated:
            raise not_found(service)
        return {"success": True, "message": f"{label} updated successfully", "data": updated}

    @router.delete("/{record_id}")
    async def delete_record(record_id: str):
        deleted = await service.delete(record_id)
        if not deleted:
            raise not_found(service)
        if on_delete:
            on_delete(deleted)
        return {"success": True, "message": f"{label} deleted successfully", "data": deleted}


def register_status_routes(
    router: APIRouter,
    service: EntityService,
    status_model: Type[CrmModel],
    id_attr: str,
):
    """
    POST /status  {"<entity>Id": ..., "status": ...}  (drag & drop Kanban)
    GET  /board   colonnes Kanban
    """
    label = service.label

    @router.post("/status")
    async def update_status(data: status_model):
        record_id = getattr(data, id_attr)
        updated = await service.update_status(record_id, data.status.value)
        if not updated:
            raise not_found(service)
        return {"success": True, "message": f"{label} status updated successfully", "data": updated}

    @router.get("/board")
    async def get_board():
        return {"success": True, "data": await service.board()}


def register_date_routes(router: APIRouter, service: EntityService):
    """Recherche par mois, année ou jour précis sur le champ `date`"""

    @router.get("/by-month")
    async def search_by_month(month: int = Query(...), year: int = Query(..., ge=1, le=9998)):
        try:
            start, end = month_range(year, month)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        records = await service.find_in_range(start, end)
        return {"success": True, "data": records, "count": len(records)}

    @router.get("/by-year")
    async def search_by_year(year: int = Query(..., ge=1, le=9998)):
        start, end = year_range(year)
        records = await service.find_in_range(start, end)
        return {"success": True, "data": records, "count": len(records)}

    @router.get("/by-date")
    async def search_by_date(day: date = Query(..., alias="date")):
        start, end = day_range(day)
        records = await service.find_in_range(start, end)
        return {"success": True, "data": records, "count": len(records)}
