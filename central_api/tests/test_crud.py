import json
from pathlib import Path

from django.test import SimpleTestCase

from central_api.tests import ApiClientMixin

SUPPLIER = {
    "supplier_name": "Fornecedor XYZ",
    "supplier_category": "Eletrônicos",
    "contact_email": "contato@fornecedor.com",
    "phone_number": "(11) 98765-4321",
}
PRODUCT = {
    "name": "Notebook Dell",
    "description": "Notebook de alta performance",
    "price": 3500.00,
    "stock_quantity": 15,
    "supplier_id": "507f1f77bcf86cd799439011",
}
USER = {
    "name": "João Silva",
    "email": "joao@example.com",
    "username": "joaosilva",
    "password": "senha123",
}
STORE = {
    "name": "Loja Centro",
    "cnpj": "12345678000190",
    "address": "Av. Paulista, 1000",
    "phone_number": "(11) 3456-7890",
    "contact_email": "loja@example.com",
}
ORDER = {
    "name": "Pedido #001",
    "start_date": "2024-01-15",
    "end_date": "2024-01-31",
    "discount": 10,
    "store_id": "s1",
    "item": "p1",
    "amount": 1500,
}


class SupplierApiTests(ApiClientMixin, SimpleTestCase):
    def test_create_then_get(self):
        resp = self.client.post("/supplier", json=SUPPLIER)
        self.assertEqual(resp.status_code, 201)
        created = resp.json()
        self.assertTrue(created["id"])
        self.assertEqual(created["status"], "on")
        self.assertIn("created_at", created)
        self.assertIn("updated_at", created)

        resp = self.client.get(f"/supplier/{created['id']}")
        self.assertEqual(resp.status_code, 200)
        fetched = resp.json()
        for key, value in SUPPLIER.items():
            self.assertEqual(fetched[key], value)

    def test_optional_fields_default_to_empty(self):
        resp = self.client.post("/supplier", json={"supplier_name": "Só o nome"})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["supplier_category"], "")
        self.assertEqual(resp.json()["phone_number"], "")

    def test_list(self):
        self.client.post("/supplier", json=SUPPLIER)
        self.client.post("/supplier", json={**SUPPLIER, "supplier_name": "Outro"})
        resp = self.client.get("/supplier")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([s["supplier_name"] for s in resp.json()], ["Fornecedor XYZ", "Outro"])

    def test_name_lookup_and_delete_scenario(self):
        created = self.client.post("/supplier", json=SUPPLIER).json()

        resp = self.client.get("/supplier/name/Fornecedor XYZ")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["id"], created["id"])

        resp = self.client.delete(f"/supplier/{created['id']}")
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(resp.content, b"")

        resp = self.client.get(f"/supplier/{created['id']}")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"message": "Fornecedor não encontrado."})

        resp = self.client.delete(f"/supplier/{created['id']}")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"message": "Fornecedor não encontrado para exclusão."})

    def test_name_lookup_miss(self):
        resp = self.client.get("/supplier/name/Ninguém")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Fornecedor não encontrado.")

    def test_update_unknown_id(self):
        resp = self.client.put("/supplier/nao-existe", json={"status": "off"})
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"message": "Fornecedor não encontrado para atualização."})

    def test_update_merges_body(self):
        created = self.client.post("/supplier", json=SUPPLIER).json()
        resp = self.client.put(f"/supplier/{created['id']}", json={"status": "off"})
        self.assertEqual(resp.status_code, 200)
        updated = resp.json()
        self.assertEqual(updated["status"], "off")
        self.assertEqual(updated["supplier_name"], "Fornecedor XYZ")
        self.assertEqual(updated["contact_email"], "contato@fornecedor.com")
        self.assertEqual(updated["id"], created["id"])

    def test_update_revalidates_merged_document(self):
        created = self.client.post("/supplier", json=SUPPLIER).json()
        resp = self.client.put(f"/supplier/{created['id']}", json={"status": "maybe"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("status", resp.json()["message"])
        self.assertEqual(self.client.get(f"/supplier/{created['id']}").json()["status"], "on")

    def test_update_cannot_blank_required_field(self):
        created = self.client.post("/supplier", json=SUPPLIER).json()
        resp = self.client.put(f"/supplier/{created['id']}", json={"supplier_name": "  "})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("Campo obrigatório.", resp.json()["message"])

    def test_missing_required_field(self):
        resp = self.client.post("/supplier", json={"supplier_category": "Eletrônicos"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.json()["message"],
            "Falha na validação de Fornecedor: supplier_name: Campo obrigatório.",
        )

    def test_status_outside_enum(self):
        resp = self.client.post("/supplier", json={**SUPPLIER, "status": "maybe"})
        self.assertEqual(resp.status_code, 400)

    def test_unknown_keys_are_ignored(self):
        resp = self.client.post("/supplier", json={**SUPPLIER, "rating": 5})
        self.assertEqual(resp.status_code, 201)
        self.assertNotIn("rating", resp.json())
        stored = json.loads((Path(self.data_dir) / "supplier.json").read_text(encoding="utf-8"))
        self.assertNotIn("rating", stored[0])

    def test_malformed_json_body(self):
        resp = self.client.post(
            "/supplier", content=b"{not json", headers={"Content-Type": "application/json"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("JSON", resp.json()["message"])

    def test_body_must_be_an_object(self):
        resp = self.client.post("/supplier", json=[SUPPLIER])
        self.assertEqual(resp.status_code, 400)


class ProductApiTests(ApiClientMixin, SimpleTestCase):
    def test_numbers_and_dangling_supplier(self):
        resp = self.client.post("/product", json=PRODUCT)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["price"], 3500.0)
        self.assertEqual(resp.json()["supplier_id"], PRODUCT["supplier_id"])

    def test_negative_price_rejected(self):
        resp = self.client.post("/product", json={**PRODUCT, "price": -1})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("price", resp.json()["message"])

    def test_non_numeric_stock_rejected(self):
        resp = self.client.post("/product", json={**PRODUCT, "stock_quantity": "muitos"})
        self.assertEqual(resp.status_code, 400)

    def test_lookup_by_name(self):
        self.client.post("/product", json=PRODUCT)
        resp = self.client.get("/product/name/Notebook Dell")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["description"], PRODUCT["description"])

    def test_not_found_message(self):
        resp = self.client.get("/product/zzz")
        self.assertEqual(resp.json(), {"message": "Produto não encontrado."})


class UserApiTests(ApiClientMixin, SimpleTestCase):
    def test_defaults(self):
        resp = self.client.post("/user", json=USER)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["level"], "user")
        self.assertEqual(resp.json()["status"], "on")
        self.assertEqual(resp.json()["password"], "senha123")

    def test_level_outside_enum(self):
        resp = self.client.post("/user", json={**USER, "level": "root"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("level", resp.json()["message"])

    def test_duplicate_email(self):
        self.assertEqual(self.client.post("/user", json=USER).status_code, 201)
        resp = self.client.post("/user", json={**USER, "username": "outro"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("email", resp.json()["message"])

    def test_duplicate_username(self):
        self.client.post("/user", json=USER)
        resp = self.client.post("/user", json={**USER, "email": "outro@example.com"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("username", resp.json()["message"])

    def test_update_to_taken_username(self):
        self.client.post("/user", json=USER)
        other = self.client.post("/user", json={**USER, "email": "b@example.com", "username": "b"}).json()
        resp = self.client.put(f"/user/{other['id']}", json={"username": "joaosilva"})
        self.assertEqual(resp.status_code, 400)

    def test_update_keeping_own_unique_values(self):
        created = self.client.post("/user", json=USER).json()
        resp = self.client.put(f"/user/{created['id']}", json={"level": "admin"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["level"], "admin")


class StoreApiTests(ApiClientMixin, SimpleTestCase):
    def test_cnpj_is_formatted(self):
        resp = self.client.post("/store", json=STORE)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["cnpj"], "12.345.678/0001-90")

    def test_duplicate_cnpj_in_any_format(self):
        self.client.post("/store", json=STORE)
        resp = self.client.post("/store", json={**STORE, "name": "Filial", "cnpj": "12.345.678/0001-90"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("cnpj", resp.json()["message"])

    def test_not_found_message_is_feminine(self):
        resp = self.client.delete("/store/zzz")
        self.assertEqual(resp.json(), {"message": "Loja não encontrada para exclusão."})


class OrderApiTests(ApiClientMixin, SimpleTestCase):
    def test_create_with_defaults(self):
        resp = self.client.post("/order", json=ORDER)
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["status"], "pending")
        self.assertEqual(body["start_date"], "2024-01-15")
        self.assertEqual(body["discount"], 10.0)

    def test_accepts_iso_datetime(self):
        resp = self.client.post("/order", json={**ORDER, "start_date": "2024-01-15T00:00:00.000Z"})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["start_date"], "2024-01-15")

    def test_status_outside_enum(self):
        resp = self.client.post("/order", json={**ORDER, "status": "done"})
        self.assertEqual(resp.status_code, 400)

    def test_discount_range(self):
        self.assertEqual(self.client.post("/order", json={**ORDER, "discount": 101}).status_code, 400)
        self.assertEqual(self.client.post("/order", json={**ORDER, "discount": -1}).status_code, 400)
        self.assertEqual(self.client.post("/order", json={**ORDER, "discount": 100}).status_code, 201)

    def test_invalid_date(self):
        resp = self.client.post("/order", json={**ORDER, "end_date": "31/01/2024"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("end_date", resp.json()["message"])

    def test_legacy_shape_is_not_accepted(self):
        legacy = {k: v for k, v in ORDER.items() if k not in ("discount", "amount")}
        resp = self.client.post("/order", json={**legacy, "discount_percentage": "10%", "total_amount": 1500})
        self.assertEqual(resp.status_code, 400)

    def test_update_status(self):
        created = self.client.post("/order", json=ORDER).json()
        resp = self.client.put(f"/order/{created['id']}", json={"status": "completed"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "completed")
        self.assertEqual(resp.json()["amount"], 1500.0)


class CampaignApiTests(ApiClientMixin, SimpleTestCase):
    def test_default_status_is_planned(self):
        resp = self.client.post("/campaign", json={**ORDER, "name": "Black Friday"})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["status"], "planned")

    def test_order_status_is_not_a_campaign_status(self):
        resp = self.client.post("/campaign", json={**ORDER, "status": "pending"})
        self.assertEqual(resp.status_code, 400)

    def test_not_found_messages(self):
        self.assertEqual(self.client.get("/campaign/zzz").json()["message"], "Campanha não encontrada.")
        self.assertEqual(
            self.client.put("/campaign/zzz", json={}).json()["message"],
            "Campanha não encontrada para atualização.",
        )


class InputLimitsApiTests(ApiClientMixin, SimpleTestCase):
    def _post_raw(self, path, text):
        return self.client.post(path, content=text.encode(), headers={"Content-Type": "application/json"})

    def test_nan_and_infinity_are_rejected(self):
        body = json.dumps({k: v for k, v in PRODUCT.items() if k != "price"})
        for literal in ("NaN", "Infinity", "-Infinity"):
            resp = self._post_raw("/product", body[:-1] + f', "price": {literal}}}')
            self.assertEqual(resp.status_code, 400, literal)
            self.assertIn("price: Número inválido.", resp.json()["message"])

        body = json.dumps({k: v for k, v in ORDER.items() if k != "amount"})
        resp = self._post_raw("/order", body[:-1] + ', "amount": NaN}')
        self.assertEqual(resp.status_code, 400)
        self.assertIn("amount", resp.json()["message"])

        resp = self._post_raw("/order", body[:-1] + ', "amount": 10, "discount": NaN}')
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get("/product").json(), [])
        self.assertEqual(self.client.get("/order").json(), [])

    def test_text_longer_than_column(self):
        resp = self.client.post("/supplier", json={**SUPPLIER, "supplier_name": "x" * 201})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("supplier_name: Máximo de 200 caracteres.", resp.json()["message"])
        self.assertEqual(self.client.post("/supplier", json={**SUPPLIER, "supplier_name": "x" * 200}).status_code, 201)

        self.assertEqual(self.client.post("/user", json={**USER, "username": "u" * 151}).status_code, 400)
        self.assertEqual(self.client.post("/store", json={**STORE, "cnpj": "1" * 19}).status_code, 400)
        self.assertEqual(self.client.post("/order", json={**ORDER, "store_id": "s" * 65}).status_code, 400)

    def test_numbers_larger_than_column(self):
        resp = self.client.post("/product", json={**PRODUCT, "price": 1e300})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("price", resp.json()["message"])
        self.assertEqual(self.client.post("/product", json={**PRODUCT, "stock_quantity": 1e11}).status_code, 400)
        self.assertEqual(self.client.post("/order", json={**ORDER, "amount": 1e12}).status_code, 400)
        self.assertEqual(self.client.post("/product", json={**PRODUCT, "price": 999999999.99}).status_code, 201)

    def test_update_cannot_exceed_limits(self):
        created = self.client.post("/supplier", json=SUPPLIER).json()
        resp = self.client.put(f"/supplier/{created['id']}", json={"phone_number": "9" * 31})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get(f"/supplier/{created['id']}").json()["phone_number"], SUPPLIER["phone_number"])
