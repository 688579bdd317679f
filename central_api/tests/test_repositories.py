import os
import tempfile
import threading
from datetime import date
from pathlib import Path
from unittest.mock import patch

from django.test import SimpleTestCase, TestCase

from central_api.repositories import (
    DjangoRepository,
    DocumentValidationError,
    DuplicateKeyError,
    JsonFileRepository,
    PersistenceError,
    RepositoryRegistry,
)
from central_api.resources import ORDER, SUPPLIER, USER
from orders.models import Order
from products.models import Product
from suppliers.models import Supplier
from users.models import User


class JsonFileRepositoryTests(SimpleTestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "user.json"
        self.repo = JsonFileRepository(self.path, unique_fields=("email", "username"))

    def tearDown(self):
        self._tmp.cleanup()

    def test_missing_file_is_empty(self):
        self.assertEqual(self.repo.list(), [])
        self.assertIsNone(self.repo.get("x"))
        self.assertFalse(self.repo.delete("x"))

    def test_create_assigns_id_and_timestamps(self):
        doc = self.repo.create({"id": "ignored", "name": "A", "email": "a@x.com", "username": "a"})
        self.assertNotEqual(doc["id"], "ignored")
        self.assertEqual(doc["created_at"], doc["updated_at"])
        self.assertEqual(self.repo.get(doc["id"]), doc)

    def test_write_is_atomic(self):
        self.repo.create({"name": "A", "email": "a@x.com", "username": "a"})
        leftovers = [name for name in os.listdir(self._tmp.name) if name != "user.json"]
        self.assertEqual(leftovers, [])

    def test_serializes_dates(self):
        repo = JsonFileRepository(Path(self._tmp.name) / "order.json")
        doc = repo.create({"name": "P", "start_date": date(2024, 1, 15)})
        self.assertEqual(doc["start_date"], "2024-01-15")

    def test_unique_fields(self):
        self.repo.create({"name": "A", "email": "a@x.com", "username": "a"})
        with self.assertRaises(DuplicateKeyError) as ctx:
            self.repo.create({"name": "B", "email": "a@x.com", "username": "b"})
        self.assertEqual(ctx.exception.field, "email")

    def test_update_merges_and_keeps_created_at(self):
        doc = self.repo.create({"name": "A", "email": "a@x.com", "username": "a"})
        updated = self.repo.update(doc["id"], {"name": "B", "created_at": "1999-01-01"})
        self.assertEqual(updated["name"], "B")
        self.assertEqual(updated["email"], "a@x.com")
        self.assertEqual(updated["created_at"], doc["created_at"])
        self.assertIsNone(self.repo.update("missing", {"name": "C"}))

    def test_find_one(self):
        self.repo.create({"name": "A", "email": "a@x.com", "username": "a"})
        self.assertEqual(self.repo.find_one("username", "a")["name"], "A")
        self.assertIsNone(self.repo.find_one("username", "z"))

    def test_corrupted_file(self):
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(PersistenceError):
            self.repo.list()

    def test_concurrent_creates_are_not_lost(self):
        repo = JsonFileRepository(Path(self._tmp.name) / "product.json")

        def create(n):
            repo.create({"name": f"P{n}"})

        threads = [threading.Thread(target=create, args=(n,)) for n in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        self.assertEqual(len(repo.list()), 20)


class DjangoRepositoryTests(TestCase):
    def setUp(self):
        self.repo = DjangoRepository(Supplier)

    def test_round_trip(self):
        doc = self.repo.create({"supplier_name": "Fornecedor XYZ", "status": "on", "unknown": 1})
        self.assertIsInstance(doc["id"], str)
        self.assertNotIn("unknown", doc)
        self.assertEqual(self.repo.get(doc["id"])["supplier_name"], "Fornecedor XYZ")
        self.assertEqual(self.repo.find_one("supplier_name", "Fornecedor XYZ")["id"], doc["id"])

    def test_update_and_delete(self):
        doc = self.repo.create({"supplier_name": "A"})
        updated = self.repo.update(doc["id"], {"status": "off"})
        self.assertEqual(updated["status"], "off")
        self.assertEqual(updated["supplier_name"], "A")
        self.assertTrue(self.repo.delete(doc["id"]))
        self.assertFalse(self.repo.delete(doc["id"]))
        self.assertIsNone(self.repo.get(doc["id"]))
        self.assertIsNone(self.repo.update(doc["id"], {"status": "on"}))

    def test_malformed_id(self):
        with self.assertRaises(PersistenceError):
            self.repo.get("not-a-number")
        with self.assertRaises(PersistenceError):
            self.repo.delete("not-a-number")

    def test_decimals_come_back_as_floats(self):
        repo = DjangoRepository(Order)
        doc = repo.create({
            "name": "Pedido", "start_date": date(2024, 1, 15), "end_date": date(2024, 1, 31),
            "discount": 12.5, "store_id": "s1", "item": "p1", "amount": 1500.0, "status": "pending",
        })
        self.assertEqual(doc["discount"], 12.5)
        self.assertEqual(doc["amount"], 1500.0)
        self.assertEqual(doc["start_date"], date(2024, 1, 15))
        self.assertEqual(Order.objects.get().amount, 1500)

    def test_unique_fields(self):
        repo = DjangoRepository(User, unique_fields=("email", "username"))
        user = {"name": "A", "email": "a@x.com", "username": "a", "password": "x"}
        first = repo.create(user)
        with self.assertRaises(DuplicateKeyError) as ctx:
            repo.create({**user, "email": "b@x.com"})
        self.assertEqual(ctx.exception.field, "username")
        # O próprio registro não conta como duplicado.
        self.assertEqual(repo.update(first["id"], user)["email"], "a@x.com")

    def test_django_validation_message_is_readable(self):
        repo = DjangoRepository(Product)
        with self.assertRaises(DocumentValidationError) as ctx:
            repo.create({
                "name": "P", "description": "d", "price": float("nan"),
                "stock_quantity": 1, "supplier_id": "s1",
            })
        self.assertFalse(str(ctx.exception).startswith("["))
        self.assertNotIn("['", str(ctx.exception))
        self.assertFalse(Product.objects.exists())

    def test_integrity_error_reports_the_value(self):
        repo = DjangoRepository(User, unique_fields=("email",))
        user = {"name": "A", "email": "a@x.com", "username": "a", "password": "x"}
        repo.create(user)
        # Corrida: outro processo gravou entre a checagem e o INSERT.
        with patch.object(DjangoRepository, "_check_unique"):
            with self.assertRaises(DuplicateKeyError) as ctx:
                repo.create({**user, "username": "b"})
        self.assertEqual(ctx.exception.field, "email")
        self.assertEqual(ctx.exception.value, "a@x.com")
        self.assertNotIn("None", str(ctx.exception))


class RepositoryRegistryTests(SimpleTestCase):
    def test_unknown_backend(self):
        with self.assertRaises(ValueError):
            RepositoryRegistry("mongo")

    def test_json_backend_caches_per_resource(self):
        with tempfile.TemporaryDirectory() as tmp:
            registry = RepositoryRegistry("json", tmp)
            repo = registry.for_resource(USER)
            self.assertIsInstance(repo, JsonFileRepository)
            self.assertIs(registry.for_resource(USER), repo)
            self.assertEqual(repo.path, Path(tmp) / "user.json")
            self.assertEqual(repo.unique_fields, ("email", "username"))

    def test_json_backend_needs_directory(self):
        with self.assertRaises(PersistenceError):
            RepositoryRegistry("json").for_resource(SUPPLIER)

    def test_orm_backend_uses_resource_model(self):
        repo = RepositoryRegistry("orm").for_resource(ORDER)
        self.assertIsInstance(repo, DjangoRepository)
        self.assertIs(repo.model, Order)
