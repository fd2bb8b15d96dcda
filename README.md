# garblekit

Building blocks for two-party secure computation in plain Python:

- `garblekit.block`: `Block`, an immutable 128-bit value with `&`, `|`, `^`,
  `~`, `lsb()`, `set_lsb()`, `flip()`, carry-less multiplication (`clmul`,
  returning the low and high 128 bits), conversion to and from 16
  little-endian bytes (`to_bytes`, `from_bytes`), `Block.random(rng)` and
  `Block.hash_point(tweak, point)`. The last one keys AES-256 with a 32-byte
  compressed curve point and encrypts the tweak.
- `garblekit.utils`: `pack_bits` / `unpack_bits`, which pack booleans least
  significant bit first, and the bytewise helpers `xor_bytes`, `xor_bytes_n`,
  `xor_into`, `xor_into_n`, `and_bytes` and `and_into`.
- `garblekit.hash_aes`: `AesHash`, correlation-robust hashes over a keyed
  AES-128 permutation (`cr_hash`, `ccr_hash`, `tccr_hash`). `AES_HASH` is the
  instance keyed with the all-zero block.
- `garblekit.rand_aes`: `AesRng`, a deterministic generator that encrypts a
  counter under a seed block. It provides `next_u32`, `next_u64`,
  `next_block`, `next_bool`, `random_bytes(n)` and `fork()`. Without a seed
  it draws a random one.
- `garblekit.circuit`: `Circuit`, which parses Bristol Fashion circuits with
  `Circuit.load(path)` or `Circuit.from_text(text)` and evaluates them in
  plaintext with `Circuit.eval(inputs)`. The module also holds `Gate`,
  `GateKind`, `CircuitInput`, `CircuitEvalError` and `CircuitLoadError`.
- `garblekit.channel`: `Channel`, a byte channel over a binary reader and
  writer. It also carries bools, packed bool lists, blocks and 32-byte
  Edwards25519 point encodings. `local_channel_pair()` returns two connected
  in-process channels, and `NetChannel(is_server, "host:port")` makes a
  channel over TCP.
- `garblekit.ot`: Chou-Orlandi 1-out-of-2 oblivious transfer
  (`ChouOrlandiSender`, `ChouOrlandiReceiver`), with `OTSenderError` and
  `OTReceiverError`.
- `garblekit.garble`: half-gate garbling with free XOR (`HalfGateGenerator`)
  and evaluation (`HalfGateEvaluator`), with `CompleteGarbledCircuit`,
  `GarbledCircuit`, `InputLabel`, `GeneratorError` and `EvaluatorError`.

## Installation

```
pip install garblekit
```

Python 3.10 or later is required. The package depends on `cryptography`
and `pynacl`.

## Evaluating a circuit in plaintext

```python
from garblekit.block import Block
from garblekit.circuit import Circuit, CircuitInput

circ = Circuit.load("adder64.txt")
inputs = [CircuitInput(id=i, value=Block(0)) for i in range(circ.ninput_wires)]
outputs = circ.eval(inputs)   # list of Block, one per output wire
print(circ.nand, circ.nxor, circ.ninv)
```

The outputs are the values of the last `noutput_wires` wires. Reading a
wire that has no value yet raises `CircuitEvalError`. A file that cannot be
read or parsed raises `CircuitLoadError`. Examples of parse failures are a
bad header, a missing wire count, an unsupported gate type, or a gate count
that differs from the header.

## Garbling and evaluating

```python
from garblekit.block import Block
from garblekit.circuit import Circuit, CircuitInput
from garblekit.garble import HalfGateEvaluator, HalfGateGenerator, InputLabel
from garblekit.rand_aes import AesRng

circ = Circuit.load("adder64.txt")
rng = AesRng(Block(0))

complete = HalfGateGenerator().garble(rng, circ)

generator_bits = [True] * 64
evaluator_bits = [True] + [False] * 63

gc = complete.to_public(
    [CircuitInput(id=i, value=Block(int(bit))) for i, bit in enumerate(generator_bits)]
)

evaluator_labels = [
    InputLabel(id=64 + i, label=complete.input_labels[64 + i][int(bit)])
    for i, bit in enumerate(evaluator_bits)
]
result = HalfGateEvaluator().eval(circ, gc, evaluator_labels)   # list of bool
```

If the total number of input labels is not `circ.ninput_wires`,
`HalfGateEvaluator.eval` raises `EvaluatorError`. It also raises that error
when a gate reads a wire that has no label.

## Oblivious transfer

The sender holds pairs of blocks and the receiver holds one choice bit per
pair. Each side runs over its own end of a `Channel`:

```python
import threading

from garblekit.block import Block
from garblekit.channel import local_channel_pair
from garblekit.ot import ChouOrlandiReceiver, ChouOrlandiSender
from garblekit.rand_aes import AesRng

pairs = [(Block(1), Block(2)), (Block(3), Block(4))]
choices = [False, True]

left, right = local_channel_pair()
sender = threading.Thread(target=ChouOrlandiSender().send, args=(left, pairs, AesRng()))
sender.start()
chosen = ChouOrlandiReceiver().receive(right, choices, AesRng())   # [Block(1), Block(4)]
sender.join()
```

Each sender and receiver object keeps a counter that tweaks the key hashes.
Repeated runs between the same two objects stay in step. Channel failures
are raised as `OTSenderError` or `OTReceiverError`.

## Command-line demos

Both demos use TCP on `127.0.0.1:12345` unless `--address host:port` is
given. A non-zero `--is-server` (`-i`) value makes that side the server. The
default is `-1`, which also means server. Start the server in one terminal
and then the client in another.

To exchange random bytes, bools, a block and a point, and print them:

```
garblekit-netio --is-server 1
garblekit-netio --is-server 0
```

To run a batch of oblivious transfers (`--count`, default 8), with the
server sending random pairs and the client choosing at random:

```
garblekit-ot --is-server 1
garblekit-ot --is-server 0
```

## What the package does not do

- It ships no circuit files. Bristol Fashion files have to be supplied by
  the user.
- It has no command or driver that runs a full two-party computation over a
  network. Garbling, sending the garbled circuit and obtaining the
  evaluator's labels through oblivious transfer are separate pieces that the
  caller has to combine.

## Running the tests

```
pip install "garblekit[test]"
pytest
```