"""
End-to-end сценарий: регистрация -> ферма -> продукт -> фильтр -> удаление фермы.
"""

from conftest import create_farm, create_product, only, register
from extensions import db
from models import Farm, Product, User


def test_marketplace_flow_leaves_orphan_product(app, client):
    register(client, "farmer")
    create_farm(client, name="Sunny Farm")
    farm = only(Farm, app)

    create_product(client, farm.id, name="Peach", category="fruit")
    product = only(Product, app)

    with app.app_context():
        user = User.query.filter_by(username="farmer").one()
        assert db.session.get(Farm, farm.id).author_id == user.id
        assert db.session.get(Product, product.id).author_id == user.id

    fruit = client.get("/products?category=fruit")
    assert b"Peach" in fruit.data
    dairy = client.get("/products?category=dairy")
    assert b"Peach" not in dairy.data

    client.delete(f"/farms/{farm.id}")

    with app.app_context():
        assert Farm.query.count() == 0
        assert db.session.get(Product, product.id).farm_id == farm.id
