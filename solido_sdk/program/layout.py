"""Binary layouts of Solido instruction data.

Every payload is a u8 discriminant followed by fixed-width little-endian
fields with no padding, so the encoded length depends only on the kind.
"""

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Tuple

from .errors import (
    InvalidFieldError,
    MalformedPayloadError,
    UnsupportedInstructionError,
)
from .types import InstructionKind
from .utils import (
    U8_MAX,
    U32_MAX,
    U64_MAX,
    decode_u32,
    decode_u64,
    decode_u8,
    encode_u32,
    encode_u64,
    encode_u8,
)


@dataclass(frozen=True)
class FieldType:
    """A fixed-width unsigned integer type."""

    name: str
    size: int
    max_value: int
    encoder: Callable[[int, str], bytes]
    decoder: Callable[[bytes, int], int]


U8 = FieldType("u8", 1, U8_MAX, encode_u8, decode_u8)
U32 = FieldType("u32", 4, U32_MAX, encode_u32, decode_u32)
U64 = FieldType("u64", 8, U64_MAX, encode_u64, decode_u64)


@dataclass(frozen=True)
class Field:
    """A named field of an instruction layout."""

    name: str
    type: FieldType


@dataclass(frozen=True)
class InstructionLayout:
    """Discriminant and ordered fields of one instruction kind."""

    kind: InstructionKind
    fields: Tuple[Field, ...] = ()

    @property
    def span(self) -> int:
        """Total encoded length in bytes, discriminant included."""
        return 1 + sum(f.type.size for f in self.fields)

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def encode(self, values: Mapping[str, int]) -> bytes:
        """Encode field values into instruction data.

        Raises:
            InvalidFieldError: If a field is missing, unknown or not an int
            FieldOverflowError: If a value does not fit its field
        """
        unexpected = set(values) - set(self.field_names)
        if unexpected:
            raise InvalidFieldError(
                f"unexpected fields for {self.kind.name}: {', '.join(sorted(unexpected))}"
            )

        data = bytearray()
        data.append(self.kind)
        for f in self.fields:
            if f.name not in values:
                raise InvalidFieldError(f"missing field {f.name!r} for {self.kind.name}")
            value = values[f.name]
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidFieldError(
                    f"{f.name} must be an int, got {type(value).__name__}"
                )
            data.extend(f.type.encoder(value, f.name))
        return bytes(data)

    def decode(self, data: bytes) -> Dict[str, int]:
        """Decode instruction data produced by ``encode``.

        Raises:
            MalformedPayloadError: If the length or discriminant is wrong
        """
        if len(data) != self.span:
            raise MalformedPayloadError(
                f"{self.kind.name} data must be {self.span} bytes, got {len(data)}"
            )
        if data[0] != self.kind:
            raise MalformedPayloadError(
                f"expected discriminant {int(self.kind)}, got {data[0]}"
            )

        values = {}
        offset = 1
        for f in self.fields:
            values[f.name] = f.type.decoder(data, offset)
            offset += f.type.size
        return values


def _layout(kind: InstructionKind, *fields: Tuple[str, FieldType]) -> InstructionLayout:
    return InstructionLayout(kind, tuple(Field(name, t) for name, t in fields))


LAYOUTS: Dict[InstructionKind, InstructionLayout] = {
    layout.kind: layout
    for layout in (
        _layout(InstructionKind.DEPOSIT, ("amount", U64)),
        _layout(
            InstructionKind.WITHDRAW,
            ("amount", U64),
            ("validator_index", U32),
        ),
        _layout(
            InstructionKind.CHANGE_REWARD_DISTRIBUTION,
            ("treasury_fee", U32),
            ("developer_fee", U32),
            ("st_sol_appreciation", U32),
        ),
        _layout(InstructionKind.ADD_VALIDATOR),
        _layout(InstructionKind.REMOVE_VALIDATOR, ("validator_index", U32)),
        _layout(InstructionKind.DEACTIVATE_VALIDATOR, ("validator_index", U32)),
        _layout(InstructionKind.ADD_MAINTAINER),
        _layout(InstructionKind.REMOVE_MAINTAINER, ("maintainer_index", U32)),
        _layout(InstructionKind.MERGE_STAKE, ("validator_index", U32)),
        _layout(
            InstructionKind.CHANGE_CRITERIA,
            ("max_commission", U8),
            ("min_block_production_rate", U64),
            ("min_vote_success_rate", U64),
            ("min_uptime", U64),
        ),
        _layout(InstructionKind.DEACTIVATE_IF_VIOLATES),
    )
}


def get_layout(kind: InstructionKind) -> InstructionLayout:
    """Look up the layout of an instruction kind.

    Raises:
        UnsupportedInstructionError: If the kind has no layout
    """
    try:
        return LAYOUTS[kind]
    except (KeyError, TypeError):
        raise UnsupportedInstructionError(kind) from None


def encode_instruction_data(kind: InstructionKind, fields: Mapping[str, int]) -> bytes:
    """Encode an instruction payload: discriminant followed by fields."""
    return get_layout(kind).encode(fields)


def decode_instruction_data(data: bytes) -> Tuple[InstructionKind, Dict[str, int]]:
    """Decode an instruction payload into its kind and field values.

    Raises:
        MalformedPayloadError: If the data is empty, the discriminant is
            unknown or the length does not match the kind
    """
    if not data:
        raise MalformedPayloadError("empty instruction data")
    try:
        kind = InstructionKind(data[0])
    except ValueError:
        raise MalformedPayloadError(f"unknown discriminant {data[0]}") from None
    return kind, LAYOUTS[kind].decode(bytes(data))
