from fastapi import APIRouter, Body, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from shop_inventory.api.deps import parse_id
from shop_inventory.db import get_db
from shop_inventory.repositories.product_repo import DuplicateSku, ProductNotFound, ProductRepository
from shop_inventory.schemas.product_schema import ProductOut
from shop_inventory.services.validation import ProductValidationError, validate_product_input

router = APIRouter(tags=["products"])


def _to_dict(p) -> dict:
    return ProductOut.model_validate(p).model_dump()


@router.get("", summary="List products, newest first")
def list_products(db: Session = Depends(get_db)):
    repo = ProductRepository(db)
    return [_to_dict(p) for p in repo.list()]


@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: str, db: Session = Depends(get_db)):
    repo = ProductRepository(db)
    try:
        return _to_dict(repo.get(parse_id(product_id)))
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", status_code=201, summary="Create product")
def create_product(payload: dict = Body(...), db: Session = Depends(get_db)):
    """
    payload: { "name": "Basic Tee", "sku": "ts-1", "price": 19.99, "size": "m",
               "quantity": 10, "color": "black", "brand": null, "category": "t-shirts" }
    """
    repo = ProductRepository(db)
    try:
        data = validate_product_input(payload)
        return _to_dict(repo.create(data))
    except (ProductValidationError, DuplicateSku) as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{product_id}", summary="Replace all fields of a product")
def update_product(product_id: str, payload: dict = Body(...), db: Session = Depends(get_db)):
    pid = parse_id(product_id)
    repo = ProductRepository(db)
    try:
        data = validate_product_input(payload)
        return _to_dict(repo.update(pid, data))
    except (ProductValidationError, DuplicateSku) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{product_id}", status_code=204, summary="Delete product")
def delete_product(product_id: str, db: Session = Depends(get_db)):
    repo = ProductRepository(db)
    try:
        repo.delete(parse_id(product_id))
    except ProductNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)
