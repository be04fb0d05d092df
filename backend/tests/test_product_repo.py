import pytest
from sqlalchemy.exc import IntegrityError

from shop_inventory.models.product import Product
from shop_inventory.repositories.product_repo import (
    DuplicateSku,
    ProductNotFound,
    ProductRepository,
    is_unique_violation,
)
from shop_inventory.services.validation import validate_product_input


def _data(**overrides):
    raw = {"name": "Basic Tee", "sku": "ts-1", "price": 19.99, "size": "m", "quantity": 10}
    raw.update(overrides)
    return validate_product_input(raw)


def test_create_then_get_round_trip(db):
    repo = ProductRepository(db)
    data = _data(name=" Basic Tee ", color=" black ", brand="Acme")
    created = repo.create(data)
    assert created.id > 0

    fetched = repo.get(created.id)
    assert fetched.name == "Basic Tee"
    assert fetched.sku == "TS-1"
    assert fetched.size == "M"
    assert fetched.color == "black"
    assert fetched.brand == "Acme"
    assert fetched.category is None
    assert fetched.price == 19.99
    assert fetched.quantity == 10


def test_duplicate_sku_is_case_insensitive(db):
    repo = ProductRepository(db)
    first = repo.create(_data(sku="TS-1"))
    with pytest.raises(DuplicateSku):
        repo.create(_data(sku="ts-1", name="Other"))

    rows = repo.list()
    assert [p.id for p in rows] == [first.id]
    assert rows[0].name == "Basic Tee"


def test_list_is_newest_first(db):
    repo = ProductRepository(db)
    ids = [repo.create(_data(sku=f"SKU-{i}")).id for i in range(3)]
    assert [p.id for p in repo.list()] == list(reversed(ids))


def test_update_replaces_all_fields(db):
    repo = ProductRepository(db)
    p = repo.create(_data(color="red", brand="Acme"))
    updated = repo.update(p.id, _data(name="Tee v2", sku="ts-2", price=5, size="xl", quantity=0))
    assert updated.id == p.id
    assert updated.name == "Tee v2"
    assert updated.sku == "TS-2"
    assert updated.size == "XL"
    assert updated.quantity == 0
    # no patch semantics: omitted optional fields are cleared
    assert updated.color is None
    assert updated.brand is None


def test_update_missing_id_changes_nothing(db):
    repo = ProductRepository(db)
    p = repo.create(_data())
    with pytest.raises(ProductNotFound):
        repo.update(p.id + 100, _data(sku="NEW-SKU"))
    assert [x.sku for x in repo.list()] == ["TS-1"]


def test_update_to_existing_sku_is_rejected(db):
    repo = ProductRepository(db)
    a = repo.create(_data(sku="A-1", name="A"))
    b = repo.create(_data(sku="B-1", name="B"))
    with pytest.raises(DuplicateSku):
        repo.update(b.id, _data(sku="a-1", name="B renamed"))

    fresh = repo.get(b.id)
    assert fresh.sku == "B-1"
    assert fresh.name == "B"
    assert repo.get(a.id).name == "A"


def test_update_may_keep_own_sku(db):
    repo = ProductRepository(db)
    p = repo.create(_data())
    assert repo.update(p.id, _data(quantity=3)).quantity == 3


def test_delete_is_not_idempotent(db):
    repo = ProductRepository(db)
    p = repo.create(_data())
    repo.delete(p.id)
    with pytest.raises(ProductNotFound):
        repo.delete(p.id)
    with pytest.raises(ProductNotFound):
        repo.get(p.id)
    assert db.query(Product).count() == 0


class _DriverError(Exception):
    pass


def _integrity_error(**attrs):
    orig = _DriverError("constraint failed")
    for k, v in attrs.items():
        setattr(orig, k, v)
    return IntegrityError("INSERT", {}, orig)


def test_unique_violation_classification():
    assert is_unique_violation(_integrity_error(sqlite_errorname="SQLITE_CONSTRAINT_UNIQUE"))
    assert not is_unique_violation(_integrity_error(sqlite_errorname="SQLITE_CONSTRAINT_CHECK"))
    assert is_unique_violation(_integrity_error(pgcode="23505"))
    assert is_unique_violation(_integrity_error(sqlstate="23505"))
    assert not is_unique_violation(_integrity_error(sqlstate="23514"))
    # no driver code at all
    assert is_unique_violation(_integrity_error())
