"""Plume — bind HTML forms to your data, coerce, validate, render.

Fill a dataclass (or a dict, or both nested) from submitted form values,
with type coercion driven by the destination's type hints::

    from dataclasses import dataclass

    from plume import Field, Form
    from plume.validation import required

    @dataclass
    class Profile:
        name: str = ""
        age: int = 0

    profile = Profile()
    form = Form(profile, {
        "Name": Field("Your name", validator=required("Required.")),
        "Age": Field("Your age"),
    })
    form.fill({"Name": ["Ada"], "Age": ["36"]})  # True; profile.age == 36

Rendering::

    data = form.render_data()      # RenderData for your own template
    html = render_form(data)        # or the default kida template
"""

__version__ = "0.1.0-dev"
__all__ = [
    "CoercionError",
    "ConfigurationError",
    "Field",
    "FieldRenderData",
    "Form",
    "FormConfig",
    "FormData",
    "PlumeError",
    "RenderData",
    "ResolutionError",
    "UploadFile",
    "render_form",
]

# Public name -> defining module. Imported on first attribute access.
_LAZY_IMPORTS: dict[str, str] = {
    "CoercionError": "plume.errors",
    "ConfigurationError": "plume.errors",
    "Field": "plume.form",
    "FieldRenderData": "plume.form",
    "Form": "plume.form",
    "FormConfig": "plume.config",
    "FormData": "plume.submission",
    "PlumeError": "plume.errors",
    "RenderData": "plume.form",
    "ResolutionError": "plume.errors",
    "UploadFile": "plume.submission",
    "render_form": "plume.templating.integration",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import plume`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
