import tempfile

from fastapi.testclient import TestClient

from central_api import app
from central_api.crud import get_registry
from central_api.repositories import RepositoryRegistry


class ApiClientMixin:
    """Points the API at JSON files in a throwaway directory."""

    backend = "json"

    def setUp(self):
        super().setUp()
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = self._tmp.name
        self.registry = RepositoryRegistry(self.backend, self.data_dir)
        app.dependency_overrides[get_registry] = lambda: self.registry
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_registry, None)
        self._tmp.cleanup()
        super().tearDown()
