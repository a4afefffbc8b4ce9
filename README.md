# mdnsengine

Building blocks for multicast DNS (mDNS) service discovery.

## What is in the package

- `mdnsengine.dns`
  - `RecordType`: an `IntEnum` of the record types used by mDNS. These are
    `A`, `PTR`, `TXT`, `AAAA`, `SRV` and `NSEC`, plus the `ANY` wildcard for
    cache lookups.
  - The constants `MDNS_PORT` (5353), `MDNS_IPV4_ADDRESS` (224.0.0.251),
    `MDNS_IPV6_ADDRESS` (ff02::fb) and `MDNS_BROWSE_TYPE`
    (`b"_services._dns-sd._udp.local."`).
- `mdnsengine.bitmap.Bitmap`: the block-0 type bitmap carried by NSEC
  records. It is a frozen dataclass that holds at most 255 bytes.
- `mdnsengine.query.Query`: a question, made of a name, a type and the
  unicast-response flag.
- `mdnsengine.record.Record`: a resource record. Its fields are name, type,
  cache-flush flag and TTL (3600 by default), plus the fields that belong to
  particular record types:
  - `address` for A and AAAA records;
  - `target` for PTR and SRV records;
  - `priority`, `weight` and `port` for SRV records;
  - `attributes` for TXT records, where an attribute with no value maps to
    `None`;
  - `next_domain_name` and `bitmap` for NSEC records.

  Out-of-range numeric fields raise `ValueError`.
- `mdnsengine.message.Message`: a DNS message. It holds an address, port,
  transaction ID, response and truncation flags, and lists of queries and
  records. `reply(other)` copies the address, port and transaction ID of a
  received message and marks this message as a response.
- `mdnsengine.service.Service`: a service on the local network, with its
  type, name, hostname, port and TXT attributes.
- `mdnsengine.events`
  - `Signal`: supports `connect()`, `disconnect()` and `emit()`. Calling
    `disconnect()` for a slot that is not connected raises `ValueError`.
  - `Timer`: a single-shot timer built on `threading.Timer`. Its callback
    runs on a background thread.
- `mdnsengine.abstractserver.AbstractServer`: the transport interface. It
  has the signals `message_received` and `error`, and the abstract methods
  `send_message()` and `send_message_to_all()`.
- `mdnsengine.cache.Cache`: a record cache that honours TTLs.
  - `add_record()` stores a record. A record with the cache-flush flag
    replaces every cached record of the same name and type. A TTL of 0
    removes the matching record and reports it as expired.
  - `lookup_records(name, type)` and `lookup_record(name, type)` find cached
    records. A `name` of `None` matches any name, and `RecordType.ANY`
    matches any type.
  - `should_query` is emitted at about 50%, 85%, 90% and 95% of a record's
    lifetime.
  - `record_expired` is emitted when a record is dropped.
- `mdnsengine.browser.Browser`: finds services of one type, or of every
  type when given `MDNS_BROWSE_TYPE`.
  - It sends a PTR query as soon as it is created, and again every 60
    seconds.
  - It asks for SRV and TXT records it is missing, and asks for renewals of
    records that are about to expire.
  - It emits `service_added`, `service_updated` and `service_removed`.
  - `services` returns the known services, keyed by fully qualified name.
  - `close()` stops it.
- `mdnsengine.servicemodel.ServiceModel`: a flat list of the services a
  browser has found, kept in the order they appeared.
  - `len()` and `row_count()` give the number of services.
  - `data(row, Role.DISPLAY)` gives text of the form `"name (type)"`, and
    `data(row, Role.USER)` gives the `Service`. A row out of range gives
    `None`.
  - It emits `rows_inserted`, `data_changed` and `rows_removed` with the
    row index.

`Cache`, `Browser` and `ServiceModel` each take a `timer_factory`: a
callable that builds a timer object from a callback. The object must have
`start(msec)` and `stop()`. `Cache` also takes a `clock` that returns the
time in seconds. Together these let the classes run on another event loop,
or be driven by hand in tests.

## Example

```python
from mdnsengine.abstractserver import AbstractServer
from mdnsengine.browser import Browser


class MyServer(AbstractServer):
    def send_message(self, message):
        ...  # send to message.address / message.port

    def send_message_to_all(self, message):
        ...  # multicast on every interface


server = MyServer()
browser = Browser(server, b"_http._tcp.local.")
browser.service_added.connect(lambda service: print("found", service.name))

# For every message that arrives from the network:
# server.message_received.emit(message)
```

## What the package does not do

- It does not encode `Message` objects into DNS packets, and it does not
  parse packets back into messages.
- It opens no sockets and has no ready-made server. A subclass of
  `AbstractServer` has to supply the transport and the wire format.
- It does not claim a hostname, probe for unique names, announce services,
  or resolve hostnames to addresses. `Browser` only caches the A and AAAA
  records it happens to receive for hostnames it already knows.
- It has no command-line program.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```