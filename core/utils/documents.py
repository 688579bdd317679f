"""Helpers for CNPJ and phone normalization and formatting."""

from __future__ import annotations

import re
from typing import Optional

DIGITS_RE = re.compile(r'\D+')
PHONE_GROUPS_RE = re.compile(r'^(\d{0,2})(\d{0,5})(\d{0,4})$')


def only_digits(value: Optional[str]) -> str:
	if value is None:
		return ''
	return DIGITS_RE.sub('', str(value))


def format_cnpj(value: Optional[str]) -> str:
	digits = only_digits(value)
	if len(digits) != 14:
		return digits
	return '{}.{}.{}/{}-{}'.format(
		digits[0:2],
		digits[2:5],
		digits[5:8],
		digits[8:12],
		digits[12:14],
	)


def format_phone(value: Optional[str]) -> str:
	"""Apply the ``(DD) DDDDD-DDDD`` mask to whatever digits were typed so far.

	Partial input is formatted progressively (``'119'`` -> ``'(11) 9'``). Values
	with more than eleven digits do not fit the mask and are returned untouched.
	"""
	if value is None:
		return ''
	text = str(value)
	match = PHONE_GROUPS_RE.match(only_digits(text))
	if not match:
		return text
	area, prefix, suffix = match.groups()
	formatted = ''
	if area:
		formatted = f'({area}'
	if prefix:
		formatted += f') {prefix}'
	if suffix:
		formatted += f'-{suffix}'
	return formatted or text


__all__ = [
	'only_digits',
	'format_cnpj',
	'format_phone',
]
