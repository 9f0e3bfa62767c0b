"""
Built-in field template and template filters.

The template is rendered once per field with the variable ``field``.
"""

from datetime import date, datetime
from typing import Any

DEFAULT_TEMPLATE = """\
<div class="form-group">
    {% if field.type != "hidden" %}
    <label class="form-label" {% if field.id %}for="{{ field.id }}"{% endif %}>
        {{ field.label }}
    </label>
    {% endif %}
    {% set invalid = " is-invalid" if field.errors else "" %}
    {% if field.type == "textarea" %}
    <textarea {{ field.attrs|safe }} class="form-control{{ invalid }}" {% if field.id %}id="{{ field.id }}"{% endif %} name="{{ field.name }}" rows="3" placeholder="{{ field.placeholder }}">{{ field.value }}</textarea>
    {% elif field.type == "checkbox" %}
    <input {{ field.attrs|safe }} type="checkbox" class="form-check-input{{ invalid }}" {% if field.id %}id="{{ field.id }}"{% endif %} name="{{ field.name }}" value="true" {% if field.value %}checked{% endif %}>
    {% elif field.type == "select" %}
    <select {{ field.attrs|safe }} class="form-control{{ invalid }}" {% if field.id %}id="{{ field.id }}"{% endif %} name="{{ field.name }}">
        {% if field.placeholder %}
        <option value="">{{ field.placeholder }}</option>
        {% endif %}
        {% for label, option in field.options.items() %}
        <option {% if option == field.value %}selected="selected" {% endif %}value="{{ option }}">{{ label }}</option>
        {% endfor %}
    </select>
    {% else %}
    <input {{ field.attrs|safe }} type="{{ field.type }}" class="form-control{{ invalid }}" {% if field.id %}id="{{ field.id }}"{% endif %} name="{{ field.name }}" placeholder="{{ field.placeholder }}" {% if field.value %}value="{{ field.value }}"{% endif %}>
    {% endif %}
    {% for error in field.errors %}
    <div class="invalid-feedback d-block">{{ error }}</div>
    {% endfor %}
    {% if field.footer %}
    <small class="form-text text-muted"> {{ field.footer }} </small>
    {% endif %}
</div>
"""


def _formatter(fmt: str):
    def format_value(value: Any) -> str:
        if isinstance(value, (date, datetime)):
            return value.strftime(fmt)
        if value is None:
            return ""
        return str(value)

    return format_value


FILTERS = {
    "date": _formatter("%Y-%m-%d"),
    "datelocal": _formatter("%m/%d/%Y"),
    "datetime": _formatter("%m/%d/%Y %H:%M"),
    "datetimelocal": _formatter("%Y-%m-%dT%H:%M"),
}
