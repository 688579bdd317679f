from django.test import TransactionTestCase

from central_api.tests import ApiClientMixin
from stores.models import Store
from suppliers.models import Supplier
from users.models import User

USER = {
    "name": "João Silva",
    "email": "joao@example.com",
    "username": "joaosilva",
    "password": "senha123",
}


class OrmBackendApiTests(ApiClientMixin, TransactionTestCase):
    """Same HTTP contract, backed by the database."""

    backend = "orm"

    def test_user_round_trip(self):
        resp = self.client.post("/user", json=USER)
        self.assertEqual(resp.status_code, 201)
        created = resp.json()
        self.assertEqual(created["level"], "user")
        self.assertTrue(User.objects.filter(pk=int(created["id"])).exists())

        resp = self.client.get(f"/user/{created['id']}")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["username"], "joaosilva")

        resp = self.client.get("/user/name/João Silva")
        self.assertEqual(resp.json()["id"], created["id"])

    def test_duplicate_user_is_400(self):
        self.client.post("/user", json=USER)
        resp = self.client.post("/user", json={**USER, "username": "outro"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("email", resp.json()["message"])
        self.assertEqual(User.objects.count(), 1)

    def test_merge_update_and_delete(self):
        created = self.client.post("/store", json={
            "name": "Loja Centro",
            "cnpj": "12345678000190",
            "address": "Av. Paulista, 1000",
            "phone_number": "(11) 3456-7890",
            "contact_email": "loja@example.com",
        }).json()
        self.assertEqual(created["cnpj"], "12.345.678/0001-90")

        resp = self.client.put(f"/store/{created['id']}", json={"status": "off"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Loja Centro")
        self.assertEqual(Store.objects.get().status, "off")

        resp = self.client.put(f"/store/{created['id']}", json={"status": "maybe"})
        self.assertEqual(resp.status_code, 400)

        self.assertEqual(self.client.delete(f"/store/{created['id']}").status_code, 204)
        self.assertEqual(self.client.delete(f"/store/{created['id']}").status_code, 404)

    def test_order_numbers_and_dates(self):
        resp = self.client.post("/order", json={
            "name": "Pedido #001",
            "start_date": "2024-01-15",
            "end_date": "2024-01-31",
            "discount": 12.5,
            "store_id": "s1",
            "item": "p1",
            "amount": 1500,
        })
        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["discount"], 12.5)
        self.assertEqual(body["amount"], 1500.0)
        self.assertEqual(body["start_date"], "2024-01-15")

    def test_malformed_id_is_500(self):
        with self.assertLogs("central_api.crud", level="ERROR"):
            resp = self.client.get("/supplier/not-a-number")
        self.assertEqual(resp.status_code, 500)
        self.assertIn("message", resp.json())

    def test_unknown_numeric_id_is_404(self):
        resp = self.client.get("/product/999999")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json(), {"message": "Produto não encontrado."})

    def test_oversized_values_are_400_and_not_stored(self):
        resp = self.client.post("/supplier", json={"supplier_name": "x" * 500})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("Máximo de 200 caracteres", resp.json()["message"])
        self.assertFalse(Supplier.objects.exists())

        resp = self.client.post("/order", json={
            "name": "Pedido #002",
            "start_date": "2024-01-15",
            "end_date": "2024-01-31",
            "discount": 10,
            "store_id": "s1",
            "item": "p1",
            "amount": 1e300,
        })
        self.assertEqual(resp.status_code, 400)
