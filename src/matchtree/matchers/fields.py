"""Per-field matching of records."""

from __future__ import annotations

import dataclasses
import inspect
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from matchtree.errors import PreconditionError
from matchtree.matchers.base import Matcher, SupportsMatch, ensure_matcher
from matchtree.outcome import Child, CompositeKind, CompositePayload, MatchOutcome

logger = logging.getLogger(__name__)


def qualified_name(record_type: type) -> str:
    module = getattr(record_type, "__module__", None)
    qualname = getattr(record_type, "__qualname__", record_type.__name__)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"


def declared_field_names(record_type: type) -> list[str] | None:
    """Field names of ``record_type`` in declaration order, if it declares any.

    Understands dataclasses, pydantic models, attrs classes, named tuples,
    and plain classes with annotations.
    """
    if dataclasses.is_dataclass(record_type):
        return [f.name for f in dataclasses.fields(record_type)]
    model_fields = getattr(record_type, "model_fields", None)
    if isinstance(model_fields, Mapping):
        return list(model_fields)
    attrs_fields = getattr(record_type, "__attrs_attrs__", None)
    if attrs_fields is not None:
        return [a.name for a in attrs_fields]
    named_fields = getattr(record_type, "_fields", None)
    if isinstance(named_fields, tuple):
        return list(named_fields)

    names: list[str] = []
    for klass in reversed(record_type.__mro__):
        for name in inspect.get_annotations(klass):
            if name not in names:
                names.append(name)
    return names or None


def extract_fields(record: Any, names: list[str]) -> dict[str, Any]:
    """Project ``record`` onto ``names``, preserving their order."""
    values: dict[str, Any] = {}
    for name in names:
        if isinstance(record, Mapping):
            if name not in record:
                raise PreconditionError(f"Record has no key {name!r}: {record!r}")
            values[name] = record[name]
            continue
        try:
            values[name] = getattr(record, name)
        except AttributeError as exc:
            raise PreconditionError(
                f"{type(record).__name__} has no field {name!r}"
            ) from exc
    return values


@dataclass
class FieldsSpec:
    """Field matchers for one record type, in declaration order."""

    type_name: str
    matchers: dict[str, SupportsMatch]
    record_type: type | None = None

    def project(self, record: Any) -> dict[str, Any]:
        if self.record_type is not None and not isinstance(record, self.record_type):
            raise PreconditionError(
                f"match_fields expected {self.type_name}, got "
                f"{type(record).__name__}: {record!r}"
            )
        return extract_fields(record, list(self.matchers))


def fields(record_type: type, **matchers: SupportsMatch) -> FieldsSpec:
    """Build a :class:`FieldsSpec` for ``record_type``.

    Matchers are reordered to follow the type's declared fields. Naming a
    field the type does not declare raises :class:`PreconditionError`.
    """
    declared = declared_field_names(record_type)
    if declared is None:
        ordered = list(matchers)
    else:
        unknown = [name for name in matchers if name not in declared]
        if unknown:
            raise PreconditionError(
                f"{qualified_name(record_type)} has no field(s): {', '.join(unknown)}"
            )
        ordered = [name for name in declared if name in matchers]

    check_type = record_type if not issubclass(record_type, Mapping) else None
    return FieldsSpec(
        type_name=qualified_name(record_type),
        matchers={name: ensure_matcher(matchers[name]) for name in ordered},
        record_type=check_type,
    )


class FieldsMatcher(Matcher):
    def __init__(self, spec: FieldsSpec, require_all: bool = True) -> None:
        self.spec = spec
        self.require_all = require_all
        self.kind = CompositeKind.FIELDS if require_all else CompositeKind.ANY_FIELDS

    def match(self, actual: Any) -> MatchOutcome:
        values = self.spec.project(actual)
        children = [
            Child(name, self.spec.matchers[name].match(value))
            for name, value in values.items()
        ]
        payload = CompositePayload(self.kind, children, type_name=self.spec.type_name)
        verdicts = [child.outcome.is_success for child in children]
        passed = all(verdicts) if self.require_all else any(verdicts)
        logger.debug(
            f"fields {self.spec.type_name}: {sum(verdicts)}/{len(verdicts)} matched"
        )
        if passed:
            return MatchOutcome.succeeded(payload, value=actual)
        return MatchOutcome.failed(payload, value=actual)


def match_fields(spec: FieldsSpec) -> Matcher:
    """Succeeds when every field matcher succeeds."""
    return FieldsMatcher(spec, require_all=True)


def match_any_fields(spec: FieldsSpec) -> Matcher:
    """Succeeds when at least one field matcher succeeds."""
    return FieldsMatcher(spec, require_all=False)
