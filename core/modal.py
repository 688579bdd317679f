"""Data-driven create/edit modal shared by every resource page.

A page describes its form as a list of ``ModalField``; ``Modal`` turns that list
into a Django form, pre-filled from an existing record when editing, and hands
the submitted flat ``{name: value}`` map to the page's handler.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from django import forms

from .utils.documents import format_phone

OPTION_LABELS = {
	'on': 'Ativo',
	'off': 'Inativo',
	'admin': 'Admin',
	'user': 'Usuário',
	'pending': 'Pendente',
	'processing': 'Processando',
	'completed': 'Concluído',
	'active': 'Ativa',
	'inactive': 'Inativa',
	'planned': 'Planejada',
}

PHONE_FIELDS = {'phone_number'}
EMPTY_OPTION_LABEL = '-- Selecione --'

Option = Union[str, Mapping[str, Any]]


def option_label(value: Any) -> str:
	if value is None:
		return ''
	return OPTION_LABELS.get(str(value), str(value))


def normalize_options(options: Sequence[Option]) -> list[tuple[str, str]]:
	"""Accept plain values or ``{'value', 'label'}`` mappings and return choices."""
	choices = []
	for option in options or ():
		if isinstance(option, Mapping):
			value = '' if option.get('value') is None else str(option.get('value'))
			label = option.get('label')
			choices.append((value, str(label) if label not in (None, '') else value))
		else:
			choices.append((str(option), option_label(option)))
	return choices


@dataclass
class ModalField:
	name: str
	label: str
	type: str = 'text'
	placeholder: str = ''
	options: Sequence[Option] = field(default_factory=list)
	required: bool = True


def _widget_for(modal_field: ModalField) -> forms.Widget:
	attrs = {'class': 'input'}
	if modal_field.placeholder:
		attrs['placeholder'] = modal_field.placeholder
	if modal_field.name in PHONE_FIELDS:
		attrs['data-mask'] = 'phone'
		attrs['inputmode'] = 'tel'
	if modal_field.type == 'email':
		return forms.EmailInput(attrs=attrs)
	if modal_field.type == 'password':
		return forms.PasswordInput(attrs=attrs, render_value=True)
	if modal_field.type == 'number':
		attrs['step'] = 'any'
		return forms.NumberInput(attrs=attrs)
	if modal_field.type == 'date':
		return forms.DateInput(attrs={**attrs, 'type': 'date'})
	return forms.TextInput(attrs=attrs)


def _initial_value(modal_field: ModalField, value: Any) -> Any:
	if value is None:
		return ''
	if modal_field.type == 'date' and isinstance(value, str):
		# A API devolve datas ISO; o input date só aceita a parte AAAA-MM-DD.
		return value[:10]
	return value


class ModalForm(forms.Form):
	def __init__(self, fields: Sequence[ModalField], *args, **kwargs) -> None:
		super().__init__(*args, **kwargs)
		self.modal_fields = list(fields)
		for modal_field in self.modal_fields:
			if modal_field.type == 'select':
				self.fields[modal_field.name] = forms.ChoiceField(
					label=modal_field.label,
					required=modal_field.required,
					choices=[('', EMPTY_OPTION_LABEL), *normalize_options(modal_field.options)],
					widget=forms.Select(attrs={'class': 'select'}),
				)
			elif modal_field.type == 'number':
				self.fields[modal_field.name] = forms.FloatField(
					label=modal_field.label,
					required=modal_field.required,
					widget=_widget_for(modal_field),
				)
			else:
				self.fields[modal_field.name] = forms.CharField(
					label=modal_field.label,
					required=modal_field.required,
					strip=modal_field.type != 'password',
					widget=_widget_for(modal_field),
				)

	def clean(self):
		cleaned_data = super().clean()
		for name in PHONE_FIELDS:
			if cleaned_data.get(name):
				cleaned_data[name] = format_phone(cleaned_data[name])
		return cleaned_data

	def values(self) -> dict[str, Any]:
		"""Flat map of the submitted values; blank fields are sent as ``''``."""
		data = {}
		for modal_field in self.modal_fields:
			value = self.cleaned_data.get(modal_field.name)
			data[modal_field.name] = '' if value is None else value
		return data


class Modal:
	def __init__(self, title: str, fields: Sequence[ModalField], initial: Optional[Mapping[str, Any]] = None) -> None:
		self.title = title
		self.fields = list(fields)
		self.initial = dict(initial) if initial else None

	@property
	def is_edit(self) -> bool:
		return self.initial is not None

	@property
	def record_id(self) -> Optional[str]:
		if not self.initial:
			return None
		record_id = self.initial.get('id')
		return str(record_id) if record_id not in (None, '') else None

	def form(self, data: Optional[Mapping[str, Any]] = None) -> ModalForm:
		if data is not None:
			return ModalForm(self.fields, data)
		initial = {}
		if self.initial:
			for modal_field in self.fields:
				initial[modal_field.name] = _initial_value(modal_field, self.initial.get(modal_field.name))
		return ModalForm(self.fields, initial=initial)

	def submit(self, data: Mapping[str, Any], on_submit: Callable[[dict], Any]) -> ModalForm:
		"""Validate ``data`` and pass the flat values to ``on_submit``.

		The bound form is returned either way so callers can re-render it with errors.
		"""
		form = self.form(data)
		if form.is_valid():
			on_submit(form.values())
		return form
