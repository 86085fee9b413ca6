"""Courier directory endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from ...persistence.store import DuplicateCourierError, LedgerStore
from ...schemas.records import CourierCreate, CourierModel

router = APIRouter(prefix="/couriers", tags=["couriers"])


@router.get("", response_model=List[CourierModel], status_code=status.HTTP_200_OK)
def list_couriers() -> List[CourierModel]:
    return [
        CourierModel(id=courier.id, name=courier.name, created_at=courier.created_at)
        for courier in LedgerStore().list_couriers()
    ]


@router.post("", response_model=CourierModel, status_code=status.HTTP_201_CREATED)
def create_courier(payload: CourierCreate) -> CourierModel:
    try:
        courier = LedgerStore().create_courier(payload.name)
    except DuplicateCourierError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc
    return CourierModel(id=courier.id, name=courier.name, created_at=courier.created_at)


@router.delete("/{courier_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_courier(courier_id: str) -> Response:
    LedgerStore().delete_courier(courier_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
