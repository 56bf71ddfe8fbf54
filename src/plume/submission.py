"""Submitted values — what ``Form.fill()`` reads.

Parsing a request body is the web framework's job. ``FormData`` only
carries the result: every submitted string per field name, in submission
order, plus uploaded files by field name. Plain ``dict[str, list[str]]``
works for ``fill()`` too; ``FormData`` is needed once files are involved::

    submitted = FormData.from_pairs(parse_qsl(body), files={"Avatar": upload})
    form.fill(submitted)
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class UploadFile:
    """An uploaded file, bound as-is to the form field of the same name."""

    filename: str
    content_type: str = "application/octet-stream"
    content: bytes = b""

    @property
    def size(self) -> int:
        return len(self.content)


class FormData(Mapping[str, str]):
    """Immutable submitted values and files.

    Implements ``Mapping[str, str]`` and the ``MultiValueMapping`` protocol:
    ``form_data[key]`` is the first value, ``get_list(key)`` all of them.
    """

    __slots__ = ("_files", "_values")

    def __init__(
        self,
        values: Mapping[str, str | Iterable[str]] | None = None,
        files: Mapping[str, UploadFile] | None = None,
    ) -> None:
        self._values: dict[str, tuple[str, ...]] = {
            key: (raw,) if isinstance(raw, str) else tuple(raw)
            for key, raw in (values or {}).items()
        }
        self._files: Mapping[str, UploadFile] = MappingProxyType(dict(files or {}))

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[str, str]],
        files: Mapping[str, UploadFile] | None = None,
    ) -> "FormData":
        """Collect ``(name, value)`` pairs; repeated names keep every value in order."""
        values: dict[str, list[str]] = {}
        for key, value in pairs:
            values.setdefault(key, []).append(value)
        return cls(values, files)

    @property
    def files(self) -> Mapping[str, UploadFile]:
        """Uploaded files by field name."""
        return self._files

    def __getitem__(self, key: str) -> str:
        values = self._values[key]
        if not values:
            raise KeyError(key)
        return values[0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* (checkbox groups, multi-selects)."""
        return list(self._values.get(key, ()))

    def __repr__(self) -> str:
        return f"FormData({self._values!r}, files={sorted(self._files)!r})"
