"""A seeded data directory for the JSON repositories and the CLI."""

import json

import pytest

TENANTS = [
    {
        "id": "mama-ndole",
        "name": "Mama Ndole",
        "minimum_order_amount": 3000,
        "whatsapp": "+237670000000",
        "towns": [{"id": "douala", "name": "Douala"}],
        "quarters": [
            {"id": "akwa", "name": "Akwa", "town_id": "douala", "fee": 1000},
            {"id": "bonapriso", "name": "Bonapriso", "town_id": "douala",
             "fee": 300, "fee_group_id": "central"},
            {"id": "bali", "name": "Bali", "town_id": "douala", "fee": 700, "available": False},
        ],
        "fee_groups": [{"id": "central", "name": "Central Douala", "fee": 500}],
        "pickup_locations": [{"id": "kitchen", "name": "Mama's kitchen", "address": "Akwa"}],
    }
]

COMPONENTS = [
    {"id": "ndole", "tenant_id": "mama-ndole", "meal_id": "meal-1",
     "meal_name": "Ndole Special", "name": "Ndole", "price": 2500},
    {"id": "plantain", "tenant_id": "mama-ndole", "meal_id": "meal-1",
     "meal_name": "Ndole Special", "name": "Fried plantain", "price": 500, "unit": "portion"},
    {"id": "eru", "tenant_id": "other-cook", "meal_id": "meal-9",
     "meal_name": "Eru", "name": "Eru", "price": 2000},
]

PROMO_CODES = [
    {"tenant_id": "mama-ndole", "code": "SAVE10", "discount_type": "percentage",
     "value": 10, "starts_at": "2020-01-01", "ends_at": None, "max_uses": 5},
]


@pytest.fixture
def data_dir(tmp_path):
    (tmp_path / "tenants.json").write_text(json.dumps(TENANTS), encoding="utf-8")
    (tmp_path / "components.json").write_text(json.dumps(COMPONENTS), encoding="utf-8")
    (tmp_path / "promo_codes.json").write_text(json.dumps(PROMO_CODES), encoding="utf-8")
    (tmp_path / "wallets.json").write_text(json.dumps({"rich": 50_000}), encoding="utf-8")
    return tmp_path
