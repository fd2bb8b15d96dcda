"""Boolean circuits in Bristol Fashion format and their plaintext evaluation."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from os import PathLike
from typing import Iterable, Union

from .block import Block

_USIZE_LIMIT = 1 << 64
_NUMBER_RE = re.compile(r"(\d+)")
_GATE_TOKEN_RE = re.compile(r"(\d+|\S+)\s*")


class CircuitEvalError(Exception):
    """Raised when a gate reads a wire that has not been assigned a value."""

    def __init__(self, wire: int) -> None:
        super().__init__(f"uninitialized value, wire {wire}")
        self.wire = wire


class CircuitLoadError(Exception):
    """Raised when a circuit description cannot be read or parsed."""


class GateKind(Enum):
    """The gate types a circuit may contain."""

    XOR = "XOR"
    AND = "AND"
    INV = "INV"


@dataclass(frozen=True, slots=True)
class Gate:
    """A gate reading ``lin_id`` (and ``rin_id`` for two-input gates), writing ``out_id``."""

    kind: GateKind
    gate_id: int
    lin_id: int
    out_id: int
    rin_id: int | None = None


@dataclass(frozen=True, slots=True)
class CircuitInput:
    """A value assigned to an input wire."""

    id: int
    value: Block


def _parse_usize(token: str, what: str) -> int:
    if not (token.isascii() and token.isdigit()):
        raise CircuitLoadError(f"Failed to parse {what}: {token}")
    number = int(token)
    if number >= _USIZE_LIMIT:
        raise CircuitLoadError(f"Failed to parse {what}: {token}")
    return number


def _parse_count_line(line: str, what: str) -> tuple[int, list[int]]:
    """Parse a line holding a count followed by that many wire counts."""
    tokens = _NUMBER_RE.findall(line)
    if not tokens:
        raise CircuitLoadError(f"Failed to parse n{what}s: {line!r}")
    count = _parse_usize(tokens[0], f"n{what}s")
    widths = [_parse_usize(token, f"{what} wire count") for token in tokens[1:]]
    if len(widths) != count:
        raise CircuitLoadError(
            f"Expecting wire count to be specified for every {what}: {line}"
        )
    return count, widths


def _parse_gate(line: str, gate_id: int) -> Gate:
    tokens = _GATE_TOKEN_RE.findall(line)
    if not tokens:
        raise CircuitLoadError(f"Failed to parse gate: {line!r}")
    gate_type = tokens[-1]
    try:
        kind = GateKind(gate_type)
    except ValueError:
        raise CircuitLoadError(f"Encountered unsupported gate type: {gate_type}") from None
    try:
        if kind is GateKind.INV:
            return Gate(
                kind,
                gate_id,
                lin_id=_parse_usize(tokens[2], "gate"),
                out_id=_parse_usize(tokens[3], "gate"),
            )
        return Gate(
            kind,
            gate_id,
            lin_id=_parse_usize(tokens[2], "gate"),
            rin_id=_parse_usize(tokens[3], "gate"),
            out_id=_parse_usize(tokens[4], "gate"),
        )
    except IndexError:
        raise CircuitLoadError(f"Failed to parse gate: {line}") from None


@dataclass
class Circuit:
    """A circuit: its sizes, its gates in evaluation order and per-kind gate counts."""

    ngates: int
    nwires: int
    ninput_wires: int
    noutput_wires: int
    gates: list[Gate] = field(default_factory=list)
    nand: int = 0
    nxor: int = 0
    ninv: int = 0

    def eval(self, inputs: Iterable[CircuitInput]) -> list[Block]:
        """Evaluate the circuit in plaintext; the last ``noutput_wires`` wires are returned."""
        wires: list[Block | None] = [None] * self.nwires
        for circuit_input in inputs:
            wires[circuit_input.id] = circuit_input.value

        def read(wire: int) -> Block:
            value = wires[wire]
            if value is None:
                raise CircuitEvalError(wire)
            return value

        for gate in self.gates:
            if gate.kind is GateKind.XOR:
                value = read(gate.lin_id) ^ read(gate.rin_id)
            elif gate.kind is GateKind.AND:
                value = read(gate.lin_id) & read(gate.rin_id)
            else:
                value = read(gate.lin_id).flip()
            wires[gate.out_id] = value

        first_output = self.nwires - self.noutput_wires
        return [read(wire) for wire in range(first_output, self.nwires)]

    @classmethod
    def from_text(cls, text: str) -> Circuit:
        """Parse a circuit in Bristol Fashion format."""
        lines = text.split("\n")
        header = (lines + ["", "", ""])[:3]
        body = lines[3:]

        first = _NUMBER_RE.findall(header[0])
        if len(first) != 2:
            raise CircuitLoadError(f"Expecting line to be ngates, nwires: {header[0]}")
        ngates = _parse_usize(first[0], "ngates")
        nwires = _parse_usize(first[1], "nwires")

        _, input_widths = _parse_count_line(header[1], "input")
        _, output_widths = _parse_count_line(header[2], "output")

        circuit = cls(ngates, nwires, sum(input_widths), sum(output_widths))
        counters = {GateKind.AND: "nand", GateKind.XOR: "nxor", GateKind.INV: "ninv"}

        for raw in body:
            line = raw[:-1] if raw.endswith("\r") else raw
            if not line:
                continue
            gate = _parse_gate(line, len(circuit.gates))
            attribute = counters[gate.kind]
            setattr(circuit, attribute, getattr(circuit, attribute) + 1)
            circuit.gates.append(gate)

        parsed = len(circuit.gates)
        if parsed != ngates:
            raise CircuitLoadError(f"Expecting {ngates} gates, parsed {parsed}")
        return circuit

    @classmethod
    def load(cls, path: Union[str, PathLike]) -> Circuit:
        """Read and parse a Bristol Fashion circuit file."""
        try:
            with open(path, encoding="utf-8") as handle:
                text = handle.read()
        except OSError as exc:
            raise CircuitLoadError(f"Failed to read circuit from {path}") from exc
        except UnicodeDecodeError as exc:
            raise CircuitLoadError(f"Failed to read circuit from {path}") from exc
        return cls.from_text(text)