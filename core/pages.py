"""Generic table + modal page used by every resource of the central.

Each resource app subclasses ``ResourcePage`` with its service, columns and modal
fields, then mounts ``page.get_urls()``. The page never touches the database:
every read and write goes through ``core.services`` to the REST API.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Sequence

from django.contrib import messages
from django.shortcuts import redirect, render
from django.urls import path, reverse
from django.views.decorators.http import require_GET, require_POST

from .modal import Modal, ModalField, option_label
from .services import ResourceService, ServiceError, product_service, store_service
from .utils.documents import format_cnpj

logger = logging.getLogger('core.pages')

MISSING_LABEL = 'N/A'


@dataclass
class Column:
	key: str
	label: str
	kind: str = 'text'


def format_currency(value: Any) -> str:
	try:
		return f'R$ {float(value):.2f}'
	except (TypeError, ValueError):
		return ''


def format_date(value: Any) -> str:
	if value in (None, ''):
		return ''
	if isinstance(value, (date, datetime)):
		return value.strftime('%d/%m/%Y')
	try:
		parsed = date.fromisoformat(str(value)[:10])
	except ValueError:
		return str(value)
	return parsed.strftime('%d/%m/%Y')


def format_number(value: Any) -> str:
	if value in (None, ''):
		return ''
	try:
		number = float(value)
	except (TypeError, ValueError):
		return str(value)
	if number.is_integer():
		return str(int(number))
	return f'{number:g}'


CELL_FORMATTERS = {
	'currency': format_currency,
	'date': format_date,
	'number': format_number,
	'status': option_label,
	'cnpj': format_cnpj,
}


def format_cell(value: Any, kind: str = 'text') -> str:
	formatter = CELL_FORMATTERS.get(kind)
	if formatter is not None:
		return formatter(value)
	return '' if value is None else str(value)


def enrich_rows(
	rows: Iterable[Mapping[str, Any]],
	lookups: Mapping[str, tuple[str, Sequence[Mapping[str, Any]]]],
	label_field: str = 'name',
) -> list[dict]:
	"""Join display names of referenced records into each row.

	``lookups`` maps the new key to ``(reference_field, related_records)``; e.g.
	``{'store_name': ('store_id', stores)}`` adds ``store_name`` holding the name of
	the store whose id equals ``row['store_id']``, or ``'N/A'`` when it dangles.
	"""
	indexes = {
		target: (source, {str(item.get('id')): item.get(label_field) for item in related or ()})
		for target, (source, related) in lookups.items()
	}
	enriched = []
	for row in rows:
		item = dict(row)
		for target, (source, index) in indexes.items():
			reference = item.get(source)
			label = index.get(str(reference)) if reference not in (None, '') else None
			item[target] = label or MISSING_LABEL
		enriched.append(item)
	return enriched


def _has_pending_messages(request) -> bool:
	return len(messages.get_messages(request)) > 0


class ResourcePage:
	"""Configuration + views for one resource screen.

	``gender`` is ``'o'`` or ``'a'`` and drives the Portuguese agreement of the
	generated texts (``Fornecedor criado`` / ``Loja criada``).
	"""

	namespace: str = ''
	service: ResourceService
	singular: str = ''
	plural: str = ''
	gender: str = 'o'
	columns: Sequence[Column] = ()
	template_name = 'core/resource_page.html'

	# relacionados: {chave no contexto: (servico, mensagem de erro)}
	related: Mapping[str, tuple[ResourceService, str]] = {}

	def __init__(self) -> None:
		self.list_view = require_GET(self._list)
		self.save_view = require_POST(self._save)
		self.delete_view = require_POST(self._delete)

	# -- textos ------------------------------------------------------------
	def text(self, key: str) -> str:
		g = self.gender
		singular_lower = self.singular.lower()
		this = 'este' if g == 'o' else 'esta'
		none = 'Nenhum' if g == 'o' else 'Nenhuma'
		texts = {
			'heading': f'Gerenciar {self.plural}',
			'new': f'Nov{g} {self.singular}',
			'edit': f'Editar {self.singular}',
			'loaded': f'{self.plural} carregad{g}s com sucesso!',
			'load_error': f'Erro ao carregar {self.plural.lower()}',
			'created': f'{self.singular} criad{g} com sucesso!',
			'updated': f'{self.singular} atualizad{g} com sucesso!',
			'deleted': f'{self.singular} deletad{g} com sucesso!',
			'save_error': f'Erro ao salvar {singular_lower}',
			'delete_error': f'Erro ao deletar {singular_lower}',
			'confirm_delete': f'Tem certeza que deseja deletar {this} {singular_lower}?',
			'empty': f'{none} {singular_lower} cadastrad{g}',
			'create_first': f'Criar primeir{g} {singular_lower}',
		}
		return texts[key]

	# -- hooks por recurso -------------------------------------------------
	def get_fields(self, related: Mapping[str, list]) -> list[ModalField]:
		raise NotImplementedError

	def enrich(self, rows: list[dict], related: Mapping[str, list]) -> list[dict]:
		return rows

	# -- dados --------------------------------------------------------------
	def load_related(self, request) -> dict[str, list]:
		loaded = {}
		for key, (service, error_message) in self.related.items():
			try:
				loaded[key] = service.get_all()
			except ServiceError as exc:
				logger.warning('Falha ao carregar %s: %s', key, exc.message)
				messages.error(request, error_message)
				loaded[key] = []
		return loaded

	def load_rows(self, request, related: Mapping[str, list], announce: bool) -> list[dict]:
		try:
			records = self.service.get_all()
		except ServiceError as exc:
			logger.warning('Falha ao carregar %s: %s', self.namespace, exc.message)
			messages.error(request, self.text('load_error'))
			return []
		if announce:
			messages.success(request, self.text('loaded'))
		return self.enrich(list(records), related)

	def build_table(self, rows: Sequence[Mapping[str, Any]]) -> list[dict]:
		table = []
		for row in rows:
			table.append({
				'id': row.get('id'),
				'delete_url': reverse(f'{self.namespace}:delete', args=[row.get('id')]),
				'cells': [format_cell(row.get(column.key), column.kind) for column in self.columns],
			})
		return table

	def _error_message(self, exc: ServiceError, fallback_key: str) -> str:
		# Sem status a API nem respondeu; vale a mensagem padrão da página.
		if exc.status_code:
			return exc.message
		return self.text(fallback_key)

	# -- views --------------------------------------------------------------
	def render_page(self, request, related, modal: Optional[Modal] = None, form=None, status: int = 200):
		announce = not _has_pending_messages(request) and modal is None
		rows = self.load_rows(request, related, announce)
		if modal is not None and form is None:
			form = modal.form()
		context = {
			'page': self,
			'heading': self.text('heading'),
			'new_label': self.text('new'),
			'empty_label': self.text('empty'),
			'create_first_label': self.text('create_first'),
			'confirm_delete': self.text('confirm_delete'),
			'columns': self.columns,
			'table': self.build_table(rows),
			'modal': modal,
			'form': form,
			'save_url': reverse(f'{self.namespace}:save'),
			'list_url': reverse(f'{self.namespace}:list'),
		}
		return render(request, self.template_name, context, status=status)

	def _list(self, request):
		related = self.load_related(request)
		fields = self.get_fields(related)
		modal = None
		edit_id = (request.GET.get('edit') or '').strip()
		if edit_id:
			try:
				record = self.service.get_by_id(edit_id)
			except ServiceError as exc:
				messages.error(request, self._error_message(exc, 'load_error'))
			else:
				modal = Modal(self.text('edit'), fields, initial=record)
		elif request.GET.get('new'):
			modal = Modal(self.text('new'), fields)
		return self.render_page(request, related, modal=modal)

	def _save(self, request):
		related = self.load_related(request)
		fields = self.get_fields(related)
		record_id = (request.POST.get('id') or '').strip()
		modal = Modal(
			self.text('edit') if record_id else self.text('new'),
			fields,
			initial={'id': record_id} if record_id else None,
		)

		def persist(values: dict) -> None:
			if record_id:
				self.service.update(record_id, values)
				messages.success(request, self.text('updated'))
			else:
				self.service.create(values)
				messages.success(request, self.text('created'))

		try:
			form = modal.submit(request.POST, persist)
		except ServiceError as exc:
			messages.error(request, self._error_message(exc, 'save_error'))
			return self.render_page(request, related, modal=modal, form=modal.form(request.POST), status=400)
		if not form.is_valid():
			return self.render_page(request, related, modal=modal, form=form, status=400)
		return redirect(f'{self.namespace}:list')

	def _delete(self, request, doc_id: str):
		try:
			self.service.delete(doc_id)
		except ServiceError as exc:
			messages.error(request, self._error_message(exc, 'delete_error'))
		else:
			messages.success(request, self.text('deleted'))
		return redirect(f'{self.namespace}:list')

	def get_urls(self):
		return [
			path('', self.list_view, name='list'),
			path('save/', self.save_view, name='save'),
			path('<str:doc_id>/delete/', self.delete_view, name='delete'),
		]


class DealPage(ResourcePage):
	"""Orders and campaigns: each row points at a store and a product by id."""

	statuses: Sequence[str] = ()
	columns = (
		Column('name', 'Nome'),
		Column('store_name', 'Loja'),
		Column('item_name', 'Produto'),
		Column('amount', 'Valor Total', 'currency'),
		Column('status', 'Status', 'status'),
		Column('start_date', 'Data de Início', 'date'),
	)
	related = {
		'stores': (store_service, 'Erro ao carregar lojas'),
		'products': (product_service, 'Erro ao carregar produtos'),
	}

	def get_fields(self, related):
		stores = [{'value': s.get('id'), 'label': s.get('name')} for s in related.get('stores', [])]
		products = [{'value': p.get('id'), 'label': p.get('name')} for p in related.get('products', [])]
		return [
			ModalField('name', f'Nome d{self.gender} {self.singular}', placeholder='Digite o nome'),
			ModalField('start_date', 'Data de Início', type='date', placeholder='2024-01-01'),
			ModalField('end_date', 'Data de Término', type='date', placeholder='2024-01-31'),
			ModalField('discount', 'Desconto (%)', type='number', placeholder='10'),
			ModalField('store_id', 'Loja', type='select', options=stores),
			ModalField('item', 'Produto', type='select', options=products),
			ModalField('amount', 'Valor Total', type='number', placeholder='1500.00'),
			ModalField('status', 'Status', type='select', options=list(self.statuses)),
		]

	def enrich(self, rows, related):
		return enrich_rows(rows, {
			'store_name': ('store_id', related.get('stores', [])),
			'item_name': ('item', related.get('products', [])),
		})
