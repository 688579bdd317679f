from django import template
from django.utils.http import urlencode

register = template.Library()


@register.simple_tag(takes_context=True)
def qs_url(context, **pairs):
    """Current querystring with ``pairs`` replaced; ``None`` drops a key.

    Usage: href="{% qs_url edit=row.id new=None %}"
    """
    request = context.get('request')
    params = request.GET.copy() if request else {}
    for key, value in pairs.items():
        if value is None:
            params.pop(key, None)
        else:
            params[key] = value
    return '?' + urlencode(params, doseq=True)
