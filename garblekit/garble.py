"""Garbled circuits with the half-gates construction and free XOR.

The generator picks a global offset ``delta`` whose least significant bit
is set, labels every wire with a pair ``(zero, zero ^ delta)`` and emits two
ciphertexts per AND gate. XOR gates cost nothing; inverters XOR with a label
standing for the public constant one. The evaluator walks the same gates
holding a single label per wire. The output bits come from the labels'
least significant bits.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from .block import SELECT_MASK, Block
from .circuit import Circuit, CircuitInput, GateKind
from .hash_aes import AES_HASH

LabelPair = tuple[Block, Block]


class GeneratorError(Exception):
    """Raised when garbling reads a wire that has no label yet."""

    def __init__(self, wire: int) -> None:
        super().__init__(
            f"Encountered uninitialized input label during garbling, wire {wire}"
        )
        self.wire = wire


class EvaluatorError(Exception):
    """Raised when a garbled circuit cannot be evaluated.

    ``wire`` is set when a gate reads a wire without a label; ``counts``
    holds (given, expected) when the number of input labels is wrong.
    """

    def __init__(
        self,
        message: str,
        *,
        wire: int | None = None,
        counts: tuple[int, int] | None = None,
    ) -> None:
        super().__init__(message)
        self.wire = wire
        self.counts = counts


def _uninitialized(wire: int) -> EvaluatorError:
    return EvaluatorError(
        f"Encountered uninitialized input label during evaluation, wire {wire}",
        wire=wire,
    )


@dataclass(frozen=True, slots=True)
class InputLabel:
    """The label held for one input wire."""

    id: int
    label: Block


@dataclass(slots=True)
class GarbledCircuit:
    """The part of a garbled circuit that is safe to hand to the evaluator."""

    generator_input_labels: list[InputLabel]
    table: list[LabelPair]
    public_one_label: Block
    output_bits: list[bool]


@dataclass(slots=True)
class CompleteGarbledCircuit:
    """All garbling data, including the secrets the evaluator must not see."""

    input_labels: list[LabelPair]
    wire_labels: list[LabelPair]
    table: list[LabelPair]
    output_bits: list[bool]
    public_one_label: Block
    delta: Block = field(repr=False)

    def to_public(self, inputs: Iterable[CircuitInput]) -> GarbledCircuit:
        """Keep only what the evaluator may see, with labels for the generator's inputs."""
        generator_input_labels = [
            InputLabel(item.id, self.input_labels[item.id][int(item.value.lsb())])
            for item in inputs
        ]
        return GarbledCircuit(
            generator_input_labels=generator_input_labels,
            table=list(self.table),
            public_one_label=self.public_one_label,
            output_bits=list(self.output_bits),
        )


class HalfGateGenerator:
    """Garbles circuits with half gates."""

    def and_gate(
        self, x: LabelPair, y: LabelPair, delta: Block, gid: int
    ) -> tuple[LabelPair, LabelPair]:
        """Garble one AND gate; return the output label pair and the two table rows."""
        pa = int(x[0].lsb())
        pb = int(y[0].lsb())
        index = Block(gid)
        index_next = Block(gid + 1)

        hash_x0 = AES_HASH.tccr_hash(index, x[0])
        hash_y0 = AES_HASH.tccr_hash(index_next, y[0])

        # Generator half gate: the generator knows pb.
        t_g = hash_x0 ^ AES_HASH.tccr_hash(index, x[1]) ^ (SELECT_MASK[pb] & delta)
        w_g = hash_x0 ^ (SELECT_MASK[pa] & t_g)

        # Evaluator half gate: the evaluator knows pb xor b.
        t_e = hash_y0 ^ AES_HASH.tccr_hash(index_next, y[1]) ^ x[0]
        w_e = hash_y0 ^ (SELECT_MASK[pb] & (t_e ^ x[0]))

        z0 = w_g ^ w_e
        return (z0, z0 ^ delta), (t_g, t_e)

    def xor_gate(self, x: LabelPair, y: LabelPair, delta: Block) -> LabelPair:
        """Garble one XOR gate for free."""
        z0 = x[0] ^ y[0]
        return z0, z0 ^ delta

    def inv_gate(self, x: LabelPair, public_one_label: Block, delta: Block) -> LabelPair:
        """Garble an inverter as XOR with the public constant one."""
        return self.xor_gate(x, (public_one_label ^ delta, public_one_label), delta)

    def garble(self, rng, circ: Circuit) -> CompleteGarbledCircuit:
        """Garble ``circ``, drawing all randomness from ``rng``."""
        delta = Block.random(rng).set_lsb()
        public_one_label = Block.random(rng) ^ delta

        wire_labels: list[LabelPair | None] = [None] * circ.nwires
        input_labels: list[LabelPair] = []
        for wire in range(circ.ninput_wires):
            zero = Block.random(rng)
            pair = (zero, zero ^ delta)
            input_labels.append(pair)
            wire_labels[wire] = pair

        def read(wire: int) -> LabelPair:
            pair = wire_labels[wire]
            if pair is None:
                raise GeneratorError(wire)
            return pair

        table: list[LabelPair] = []
        gid = 1
        for gate in circ.gates:
            if gate.kind is GateKind.INV:
                out = self.inv_gate(read(gate.lin_id), public_one_label, delta)
            elif gate.kind is GateKind.XOR:
                out = self.xor_gate(read(gate.lin_id), read(gate.rin_id), delta)
            else:
                out, rows = self.and_gate(read(gate.lin_id), read(gate.rin_id), delta, gid)
                table.append(rows)
                gid += 1
            wire_labels[gate.out_id] = out

        first_output = circ.nwires - circ.noutput_wires
        output_bits = [read(wire)[0].lsb() for wire in range(first_output, circ.nwires)]
        complete_labels = [read(wire) for wire in range(circ.nwires)]

        return CompleteGarbledCircuit(
            input_labels=input_labels,
            wire_labels=complete_labels,
            table=table,
            output_bits=output_bits,
            public_one_label=public_one_label,
            delta=delta,
        )


class HalfGateEvaluator:
    """Evaluates circuits garbled by :class:`HalfGateGenerator`."""

    def and_gate(self, x: Block, y: Block, table: LabelPair, gid: int) -> Block:
        """Evaluate one garbled AND gate."""
        sa = int(x.lsb())
        sb = int(y.lsb())
        hash_x = AES_HASH.tccr_hash(Block(gid), x)
        hash_y = AES_HASH.tccr_hash(Block(gid + 1), y)
        w_g = hash_x ^ (SELECT_MASK[sa] & table[0])
        w_e = hash_y ^ (SELECT_MASK[sb] & (table[1] ^ x))
        return w_g ^ w_e

    def xor_gate(self, x: Block, y: Block) -> Block:
        """Evaluate an XOR gate."""
        return x ^ y

    def inv_gate(self, x: Block, public_one_label: Block) -> Block:
        """Evaluate an inverter."""
        return x ^ public_one_label

    def eval(
        self,
        circ: Circuit,
        gc: GarbledCircuit,
        evaluator_input_labels: Sequence[InputLabel],
    ) -> list[bool]:
        """Evaluate the garbled circuit and return the plain output bits."""
        input_labels = [*gc.generator_input_labels, *evaluator_input_labels]
        if len(input_labels) != circ.ninput_wires:
            raise EvaluatorError(
                "Evaluator received invalid input counts for provided circuit",
                counts=(len(input_labels), circ.ninput_wires),
            )

        wire_labels: list[Block | None] = [None] * circ.nwires
        for item in input_labels:
            wire_labels[item.id] = item.label

        def read(wire: int) -> Block:
            label = wire_labels[wire]
            if label is None:
                raise _uninitialized(wire)
            return label

        gid = 1
        for gate in circ.gates:
            if gate.kind is GateKind.INV:
                out = self.inv_gate(read(gate.lin_id), gc.public_one_label)
            elif gate.kind is GateKind.XOR:
                out = self.xor_gate(read(gate.lin_id), read(gate.rin_id))
            else:
                x = read(gate.lin_id)
                y = read(gate.rin_id)
                if gid > len(gc.table):
                    raise EvaluatorError(
                        f"garbled table has {len(gc.table)} rows, AND gate {gid} needs one"
                    )
                out = self.and_gate(x, y, gc.table[gid - 1], gid)
                gid += 1
            wire_labels[gate.out_id] = out

        first_output = circ.nwires - circ.noutput_wires
        return [
            read(wire).lsb() ^ bit
            for wire, bit in zip(range(first_output, circ.nwires), gc.output_bits)
        ]