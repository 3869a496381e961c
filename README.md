# minnow

The parts of a TCP implementation that run in user space, in plain Python:

- `minnow.byte_stream.ByteStream`: a bounded in-memory byte stream. `writer()` and `reader()` both return the stream itself; the writer side has `push`, `close`, `set_error`, `is_closed`, `available_capacity` and `bytes_pushed`, the reader side has `peek`, `pop`, `is_finished`, `has_error`, `bytes_buffered` and `bytes_popped`. `minnow.byte_stream.read(reader, length)` peeks and pops up to `length` bytes and returns them.
- `minnow.reassembler.Reassembler`: puts indexed, possibly overlapping or out-of-order substrings back together into a `ByteStream` with `insert(first_index, data, is_last_substring, output)`. Bytes beyond the stream's capacity are dropped; `bytes_pending()` reports how many bytes are held back waiting for a gap to fill. The stream is closed once the last substring has been written.
- `minnow.wrapping_integers.Wrap32`: 32-bit sequence numbers that wrap at 2**32. `Wrap32.wrap(n, zero_point)` turns an absolute position into a sequence number, `unwrap(zero_point, checkpoint)` turns it back into the absolute position closest to `checkpoint`, and `+` adds an integer modulo 2**32.
- `minnow.messages`: the dataclasses `TCPSenderMessage` (`seqno`, `syn`, `payload`, `fin`, and `sequence_length()`), `TCPReceiverMessage` (`ackno`, `window_size`) and `TCPConfig` (`rt_timeout`, `recv_capacity`, `send_capacity`, `fixed_isn`, with the constants `DEFAULT_CAPACITY`, `MAX_PAYLOAD_SIZE`, `TIMEOUT_DFLT` and `MAX_RETX_ATTEMPTS`).
- `minnow.tcp_receiver.TCPReceiver`: `receive(message, reassembler, inbound_stream)` feeds segment payloads into a reassembler; `send(inbound_stream)` returns the acknowledgment number and a window capped at 65535.
- `minnow.tcp_sender.TCPSender`: `push(outbound_stream)` cuts stream bytes into segments (at most `TCPConfig.MAX_PAYLOAD_SIZE` bytes each) within the peer's window, `maybe_send()` hands out the next segment, `receive(msg)` processes acknowledgments, and `tick(ms)` retransmits the oldest outstanding segment on timeout with exponential back-off. `sequence_numbers_in_flight()` and `consecutive_retransmissions()` report its state. Without a fixed ISN a random one is chosen.
- `minnow.address.Address`: an IPv4 socket address. `Address.resolve(hostname, service)` looks a name up, `Address.from_ip_port(ip, port)` builds one from a dotted quad without lookups, and `Address.from_ipv4_numeric(n)` from a 32-bit integer. `ip_port()`, `ip()`, `port()`, `ipv4_numeric()` and `str()` convert it back.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from minnow.byte_stream import ByteStream, read
from minnow.reassembler import Reassembler

stream = ByteStream(1000)
reassembler = Reassembler()

reassembler.insert(1, b"bc", False, stream.writer())
reassembler.insert(0, b"a", False, stream.writer())
print(read(stream.reader(), 10))   # b"abc"
```

A sender and receiver pair:

```python
from minnow.byte_stream import ByteStream
from minnow.messages import TCPConfig
from minnow.reassembler import Reassembler
from minnow.tcp_receiver import TCPReceiver
from minnow.tcp_sender import TCPSender
from minnow.wrapping_integers import Wrap32

outbound = ByteStream(TCPConfig.DEFAULT_CAPACITY)
inbound = ByteStream(TCPConfig.DEFAULT_CAPACITY)
sender = TCPSender(TCPConfig.TIMEOUT_DFLT, Wrap32(0))
receiver = TCPReceiver()
reassembler = Reassembler()

sender.push(outbound.reader())
segment = sender.maybe_send()                  # the SYN segment
receiver.receive(segment, reassembler, inbound.writer())
sender.receive(receiver.send(inbound.writer()))  # acknowledges the SYN
```

## What this package does not do

Everything here works on in-memory objects. There is no socket layer that carries segments over a network, no full TCP connection that ties a sender and receiver together, and no command-line program; `Address` only resolves and converts addresses.

The package has no runtime dependencies beyond the standard library.