"""Persistence backends for the API documents.

Two interchangeable implementations of ``Repository``:

* ``DjangoRepository`` stores documents as rows of the resource apps' models;
* ``JsonFileRepository`` keeps one ``<resource>.json`` file per resource.

Both speak plain dicts (``id`` always a string) and report failures with the
exceptions below; missing documents are ``None`` / ``False``, never exceptions.
Every method is blocking; callers on the event loop go through
``run_in_threadpool``.
"""

import json
import logging
import os
import tempfile
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import date, datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from django.apps import apps
from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction

logger = logging.getLogger("central_api.repositories")

RESERVED_FIELDS = ("id", "created_at", "updated_at")


class DocumentValidationError(Exception):
    pass


class DuplicateKeyError(DocumentValidationError):
    def __init__(self, field: str, value: Any = None) -> None:
        self.field = field
        self.value = value
        super().__init__(f"Já existe um registro com {field} = {value!r}.")


class PersistenceError(Exception):
    pass


class Repository(ABC):
    unique_fields: tuple = ()

    @abstractmethod
    def list(self) -> List[dict]:
        ...

    @abstractmethod
    def get(self, doc_id: str) -> Optional[dict]:
        ...

    @abstractmethod
    def find_one(self, field: str, value: Any) -> Optional[dict]:
        ...

    @abstractmethod
    def create(self, data: dict) -> dict:
        ...

    @abstractmethod
    def update(self, doc_id: str, data: dict) -> Optional[dict]:
        ...

    @abstractmethod
    def delete(self, doc_id: str) -> bool:
        ...


def _clean_payload(data: dict) -> dict:
    return {key: value for key, value in data.items() if key not in RESERVED_FIELDS}


# -----------------------------------
# Django ORM
# -----------------------------------
class DjangoRepository(Repository):
    def __init__(self, model, unique_fields: Iterable[str] = ()) -> None:
        self.model = model
        self.unique_fields = tuple(unique_fields)
        self._field_names = {
            field.name for field in model._meta.concrete_fields if field.name not in RESERVED_FIELDS
        }

    @staticmethod
    def _to_document(instance) -> dict:
        document = {}
        for field in instance._meta.concrete_fields:
            value = getattr(instance, field.attname)
            if field.primary_key:
                value = str(value)
            elif isinstance(value, Decimal):
                value = float(value)
            document[field.name] = value
        return document

    def _parse_pk(self, doc_id: str):
        try:
            return self.model._meta.pk.to_python(doc_id)
        except (DjangoValidationError, ValueError, TypeError) as exc:
            raise PersistenceError(f"Identificador inválido: {doc_id!r}") from exc

    def _check_unique(self, data: dict, exclude_pk=None) -> None:
        for field in self.unique_fields:
            if field not in data:
                continue
            qs = self.model._default_manager.filter(**{field: data[field]})
            if exclude_pk is not None:
                qs = qs.exclude(pk=exclude_pk)
            if qs.exists():
                raise DuplicateKeyError(field, data[field])

    def _field_of(self, exc: IntegrityError) -> str:
        text = str(exc)
        for field in self.unique_fields:
            if field in text:
                return field
        return self.unique_fields[0] if self.unique_fields else "id"

    def list(self) -> List[dict]:
        try:
            return [self._to_document(obj) for obj in self.model._default_manager.order_by("pk")]
        except DatabaseError as exc:
            raise PersistenceError(str(exc)) from exc

    def get(self, doc_id: str) -> Optional[dict]:
        pk = self._parse_pk(doc_id)
        try:
            obj = self.model._default_manager.filter(pk=pk).first()
        except DatabaseError as exc:
            raise PersistenceError(str(exc)) from exc
        return self._to_document(obj) if obj is not None else None

    def find_one(self, field: str, value: Any) -> Optional[dict]:
        try:
            obj = self.model._default_manager.filter(**{field: value}).order_by("pk").first()
        except DatabaseError as exc:
            raise PersistenceError(str(exc)) from exc
        return self._to_document(obj) if obj is not None else None

    def create(self, data: dict) -> dict:
        payload = {k: v for k, v in _clean_payload(data).items() if k in self._field_names}
        try:
            self._check_unique(payload)
            with transaction.atomic():
                obj = self.model._default_manager.create(**payload)
            obj.refresh_from_db()
        except IntegrityError as exc:
            field = self._field_of(exc)
            raise DuplicateKeyError(field, payload.get(field)) from exc
        except DjangoValidationError as exc:
            raise DocumentValidationError("; ".join(exc.messages)) from exc
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise DocumentValidationError(str(exc)) from exc
        except DatabaseError as exc:
            raise PersistenceError(str(exc)) from exc
        return self._to_document(obj)

    def update(self, doc_id: str, data: dict) -> Optional[dict]:
        pk = self._parse_pk(doc_id)
        payload = {k: v for k, v in _clean_payload(data).items() if k in self._field_names}
        try:
            obj = self.model._default_manager.filter(pk=pk).first()
            if obj is None:
                return None
            self._check_unique(payload, exclude_pk=pk)
            for key, value in payload.items():
                setattr(obj, key, value)
            with transaction.atomic():
                obj.save()
            obj.refresh_from_db()
        except IntegrityError as exc:
            field = self._field_of(exc)
            raise DuplicateKeyError(field, payload.get(field)) from exc
        except DjangoValidationError as exc:
            raise DocumentValidationError("; ".join(exc.messages)) from exc
        except (ValueError, TypeError, ArithmeticError) as exc:
            raise DocumentValidationError(str(exc)) from exc
        except DatabaseError as exc:
            raise PersistenceError(str(exc)) from exc
        return self._to_document(obj)

    def delete(self, doc_id: str) -> bool:
        pk = self._parse_pk(doc_id)
        try:
            deleted, _ = self.model._default_manager.filter(pk=pk).delete()
        except DatabaseError as exc:
            raise PersistenceError(str(exc)) from exc
        return deleted > 0


# -----------------------------------
# Arquivo JSON por recurso
# -----------------------------------
_FILE_LOCKS: Dict[str, threading.Lock] = {}
_FILE_LOCKS_GUARD = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = str(path.resolve())
    with _FILE_LOCKS_GUARD:
        lock = _FILE_LOCKS.get(key)
        if lock is None:
            lock = _FILE_LOCKS[key] = threading.Lock()
        return lock


def _json_default(value: Any):
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Tipo não serializável: {type(value).__name__}")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _same_value(left: Any, right: Any) -> bool:
    if isinstance(left, (date, datetime)):
        left = left.isoformat()
    if isinstance(right, (date, datetime)):
        right = right.isoformat()
    return left == right


class JsonFileRepository(Repository):
    """Whole-file read-modify-write; writes are atomic via ``os.replace``.

    The lock only serializes threads of this process. Separate processes writing
    the same file can still lose updates.
    """

    def __init__(self, path, unique_fields: Iterable[str] = ()) -> None:
        self.path = Path(path)
        self.unique_fields = tuple(unique_fields)
        self._lock = _lock_for(self.path)

    def _read(self) -> List[dict]:
        if not self.path.exists():
            return []
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                raw = fh.read()
        except OSError as exc:
            raise PersistenceError(f"Falha ao ler {self.path.name}: {exc}") from exc
        if not raw.strip():
            return []
        try:
            documents = json.loads(raw)
        except ValueError as exc:
            raise PersistenceError(f"Arquivo {self.path.name} corrompido: {exc}") from exc
        if not isinstance(documents, list):
            raise PersistenceError(f"Arquivo {self.path.name} não contém uma lista.")
        return documents

    def _write(self, documents: List[dict]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=str(self.path.parent))
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(documents, fh, ensure_ascii=False, indent=2, default=_json_default)
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError) as exc:
            raise PersistenceError(f"Falha ao gravar {self.path.name}: {exc}") from exc

    def _check_unique(self, documents: List[dict], data: dict, exclude_id: Optional[str] = None) -> None:
        for field in self.unique_fields:
            if field not in data:
                continue
            for doc in documents:
                if doc.get("id") == exclude_id:
                    continue
                if _same_value(doc.get(field), data[field]):
                    raise DuplicateKeyError(field, data[field])

    def list(self) -> List[dict]:
        with self._lock:
            return self._read()

    def get(self, doc_id: str) -> Optional[dict]:
        doc_id = str(doc_id)
        with self._lock:
            for doc in self._read():
                if doc.get("id") == doc_id:
                    return doc
        return None

    def find_one(self, field: str, value: Any) -> Optional[dict]:
        with self._lock:
            for doc in self._read():
                if _same_value(doc.get(field), value):
                    return doc
        return None

    def create(self, data: dict) -> dict:
        payload = json.loads(json.dumps(_clean_payload(data), default=_json_default))
        with self._lock:
            documents = self._read()
            self._check_unique(documents, payload)
            now = _now()
            document = {"id": uuid.uuid4().hex, **payload, "created_at": now, "updated_at": now}
            documents.append(document)
            self._write(documents)
        return document

    def update(self, doc_id: str, data: dict) -> Optional[dict]:
        doc_id = str(doc_id)
        payload = json.loads(json.dumps(_clean_payload(data), default=_json_default))
        with self._lock:
            documents = self._read()
            for index, doc in enumerate(documents):
                if doc.get("id") != doc_id:
                    continue
                self._check_unique(documents, payload, exclude_id=doc_id)
                updated = {**doc, **payload, "id": doc_id, "updated_at": _now()}
                documents[index] = updated
                self._write(documents)
                return updated
        return None

    def delete(self, doc_id: str) -> bool:
        doc_id = str(doc_id)
        with self._lock:
            documents = self._read()
            remaining = [doc for doc in documents if doc.get("id") != doc_id]
            if len(remaining) == len(documents):
                return False
            self._write(remaining)
        return True


# -----------------------------------
# Seleção por configuração
# -----------------------------------
class RepositoryRegistry:
    """Builds (and caches) one repository per resource for the configured backend."""

    BACKENDS = ("orm", "json")

    def __init__(self, backend: str = "orm", data_dir=None) -> None:
        backend = (backend or "orm").strip().lower()
        if backend not in self.BACKENDS:
            raise ValueError(f"HUB_STORAGE inválido: {backend!r}. Opções: {list(self.BACKENDS)}")
        self.backend = backend
        self.data_dir = Path(data_dir) if data_dir else None
        self._cache: Dict[str, Repository] = {}
        self._guard = threading.Lock()

    @classmethod
    def from_settings(cls) -> "RepositoryRegistry":
        return cls(
            backend=getattr(settings, "HUB_STORAGE", "orm"),
            data_dir=getattr(settings, "HUB_DATA_DIR", None),
        )

    def _build(self, resource) -> Repository:
        if self.backend == "json":
            if self.data_dir is None:
                raise PersistenceError("HUB_DATA_DIR não configurado para o armazenamento em JSON.")
            return JsonFileRepository(self.data_dir / f"{resource.name}.json", resource.unique_fields)
        model = apps.get_model(resource.model_label)
        return DjangoRepository(model, resource.unique_fields)

    def for_resource(self, resource) -> Repository:
        with self._guard:
            repository = self._cache.get(resource.name)
            if repository is None:
                repository = self._cache[resource.name] = self._build(resource)
                logger.info("Repositório %s (%s) pronto", resource.name, self.backend)
            return repository
