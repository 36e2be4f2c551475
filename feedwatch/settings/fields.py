"""
Field Descriptors - Declarative parsing rules for the operator YAML config.

Every config record is described by a table of FieldSpec entries and built
by one generic function, parse_struct(). A FieldSpec names:

- the attribute to populate
- the source key(s) in the YAML mapping (or SELF for the enclosing node)
- the decoder for the raw node
- the rule applied when the value is missing or does not decode
- an optional minimum the parsed value is clamped up to

Rules:
    LITERAL  substitute FieldSpec.default
    DEFAULT  use the type's default (FieldSpec.default_factory)
    FAIL     required field, raise MissingFieldError
    ALL      sequence; decode each element, dropping the ones that fail

Tagged variants (feed identities, weekday overrides) are decoded by probing
an ordered tuple of VariantCase entries; the first key present with a value
that decodes wins.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type, Union

logger = logging.getLogger(__name__)


class Rule(Enum):
    """What to do when a field is missing or fails to decode."""
    LITERAL = "literal"
    DEFAULT = "default"
    FAIL = "fail"
    ALL = "all"


class _SelfKey:
    """Marker: decode the enclosing node instead of one of its keys."""

    def __repr__(self):
        return "SELF"


SELF = _SelfKey()

_ABSENT = object()


class DecodeError(ValueError):
    """A YAML node could not be decoded into the requested type."""
    pass


class MissingFieldError(Exception):
    """A required (FAIL rule) field had no usable value."""

    def __init__(self, field_name: str, location: Optional[List[str]] = None):
        self.field_name = field_name
        self.location = list(location or [])
        super().__init__(self._message())

    def within(self, label: str) -> "MissingFieldError":
        """Prefix the error location with an enclosing key or index."""
        self.location.insert(0, label)
        self.args = (self._message(),)
        return self

    def _message(self) -> str:
        where = " > ".join(self.location)
        if where:
            return f"{where}: required field '{self.field_name}' is missing or invalid"
        return f"required field '{self.field_name}' is missing or invalid"


@dataclass(frozen=True)
class FieldSpec:
    """Parsing rule for a single record attribute."""
    name: str
    keys: Union[str, Tuple[str, ...], _SelfKey]
    decode: Callable[[Any], Any]
    rule: Rule = Rule.LITERAL
    default: Any = None
    default_factory: Optional[Callable[[], Any]] = None
    minimum: Optional[float] = None

    @property
    def label(self) -> str:
        if self.keys is SELF:
            return self.name
        if isinstance(self.keys, tuple):
            return self.keys[0]
        return self.keys

    def fallback(self) -> Any:
        """Value used when the field is missing or does not decode."""
        if self.rule is Rule.DEFAULT:
            return self.default_factory()
        if self.rule is Rule.ALL:
            return ()
        return self.default


@dataclass(frozen=True)
class VariantCase:
    """One candidate of a tagged variant: source key, decoder, constructor."""
    key: str
    decode: Callable[[Any], Any]
    build: Callable[[Any], Any]


# =============================================================================
# Leaf decoders
# =============================================================================

def decode_float(node: Any) -> float:
    """Finite integer or floating point literal; .nan and .inf do not decode."""
    if isinstance(node, bool) or not isinstance(node, (int, float)):
        raise DecodeError(f"expected a number, got {node!r}")
    if isinstance(node, float) and not math.isfinite(node):
        raise DecodeError(f"expected a finite number, got {node!r}")
    return float(node)


def decode_uint(node: Any) -> int:
    """Non-negative integer; integral floats such as 4.0 are accepted."""
    if isinstance(node, bool):
        raise DecodeError(f"expected an unsigned integer, got {node!r}")
    if isinstance(node, float):
        if not node.is_integer():
            raise DecodeError(f"expected an unsigned integer, got {node!r}")
        node = int(node)
    if not isinstance(node, int) or node < 0:
        raise DecodeError(f"expected an unsigned integer, got {node!r}")
    return node


def decode_str(node: Any) -> str:
    if not isinstance(node, str):
        raise DecodeError(f"expected a string, got {node!r}")
    return node


def enum_decoder(enum_cls: Type[Enum]) -> Callable[[Any], Enum]:
    """Decoder for a plain enum spelled by its value, e.g. 'Descending'."""
    by_value = {member.value: member for member in enum_cls}

    def decode(node: Any) -> Enum:
        if not isinstance(node, str) or node not in by_value:
            raise DecodeError(f"expected one of {sorted(by_value)}, got {node!r}")
        return by_value[node]

    return decode


# =============================================================================
# Structural decoders
# =============================================================================

def _as_mapping(node: Any) -> Dict[str, Any]:
    # A key with no value ("Misc:") reads as an empty mapping
    if node is None:
        return {}
    if not isinstance(node, dict):
        raise DecodeError(f"expected a mapping, got {type(node).__name__}")
    return node


def _lookup(spec: FieldSpec, mapping: Dict[str, Any], node: Any) -> Any:
    if spec.keys is SELF:
        return node
    keys = spec.keys if isinstance(spec.keys, tuple) else (spec.keys,)
    for key in keys:
        if key in mapping:
            return mapping[key]
    return _ABSENT


def decode_all(decode: Callable[[Any], Any], node: Any, label: str) -> Tuple[Any, ...]:
    """
    Decode every element of a sequence, dropping the ones that fail.

    A missing or non-sequence node yields an empty tuple. MissingFieldError
    raised inside an element is not a decode failure and propagates.
    """
    if node is _ABSENT or node is None:
        return ()
    if not isinstance(node, list):
        logger.warning(f"Config '{label}' should be a list, ignoring {type(node).__name__}")
        return ()

    items = []
    for index, element in enumerate(node):
        if element is None:
            logger.warning(f"Dropping empty config entry '{label}'[{index}]")
            continue
        try:
            items.append(decode(element))
        except DecodeError as e:
            logger.warning(f"Dropping config entry '{label}'[{index}]: {e}")
        except MissingFieldError as e:
            raise e.within(f"{label}[{index}]")
    return tuple(items)


def parse_field(spec: FieldSpec, mapping: Dict[str, Any], node: Any) -> Any:
    """Apply one FieldSpec to a mapping and return the attribute value."""
    raw = _lookup(spec, mapping, node)

    if spec.rule is Rule.ALL:
        value = decode_all(spec.decode, raw, spec.label)
    else:
        try:
            if raw is _ABSENT:
                raise DecodeError(f"'{spec.label}' not present")
            value = spec.decode(raw)
        except DecodeError:
            if spec.rule is Rule.FAIL:
                raise MissingFieldError(spec.name)
            value = spec.fallback()
        except MissingFieldError as e:
            raise e.within(spec.label)

    if spec.minimum is not None and value is not None and value < spec.minimum:
        value = type(value)(spec.minimum)
    return value


def parse_struct(cls: Type, fields: Iterable[FieldSpec], node: Any):
    """Build a record of type cls from a YAML node using its field table."""
    mapping = _as_mapping(node)
    return cls(**{spec.name: parse_field(spec, mapping, node) for spec in fields})


def struct_decoder(cls: Type, fields: Iterable[FieldSpec]) -> Callable[[Any], Any]:
    fields = tuple(fields)

    def decode(node: Any):
        return parse_struct(cls, fields, node)

    return decode


def probe_variants(cases: Iterable[VariantCase], node: Any):
    """
    Decode a tagged variant by probing candidate keys in order.

    Raises:
        DecodeError: node is not a mapping or no candidate key decodes.
    """
    if not isinstance(node, dict):
        raise DecodeError(f"expected a mapping, got {type(node).__name__}")

    for case in cases:
        if case.key not in node:
            continue
        try:
            value = case.decode(node[case.key])
        except DecodeError:
            continue
        return case.build(value)

    raise DecodeError(f"none of {[case.key for case in cases]} present with a valid value")
