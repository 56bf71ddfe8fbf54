"""Kida environment setup and default form rendering.

``RenderData`` is plain data and works with any template engine. For
projects without their own form template, ``render_form()`` renders one
through kida. All markup fields (``label_tag``, ``input``,
``enctype_attr``) are ``Markup`` and pass through autoescaping untouched;
labels, help texts, and error messages are escaped.
"""

from kida import Environment

from plume.form import RenderData

FORM_TEMPLATE = """\
<form action="{{ form.action }}" method="post" accept-charset="utf-8"{% if form.enctype_attr %} {{ form.enctype_attr }}{% end %}>
{% if form.errors %}
<ul class="form-errors">
{% for message in form.errors %}
<li>{{ message }}</li>
{% end %}
</ul>
{% end %}
{% for field in form.fields %}
<div class="field{% if field.errors %} error{% end %}">
{{ field.label_tag }}
{{ field.input }}
{% if field.help %}
<span class="help">{{ field.help }}</span>
{% end %}
{% for message in field.errors %}
<span class="error">{{ message }}</span>
{% end %}
</div>
{% end %}
<button type="submit">{{ submit_label }}</button>
</form>
"""


def create_environment() -> Environment:
    """Create the kida Environment used by ``render_form()``.

    Autoescaping is always on: form values are user input.
    """
    return Environment(
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_form(
    data: RenderData,
    *,
    env: Environment | None = None,
    submit_label: str = "Submit",
) -> str:
    """Render *data* with the default form template.

    Args:
        data: A snapshot from ``Form.render_data()``.
        env: Environment to compile the template in. Defaults to a fresh
            one from ``create_environment()``.
        submit_label: Text of the submit button.
    """
    env = env or create_environment()
    template = env.from_string(FORM_TEMPLATE)
    return template.render(form=data, submit_label=submit_label)
