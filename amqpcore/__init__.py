"""Building blocks of an AMQP 0-9-1 client: parsing input, topology records, publisher confirms, returned messages and I/O state."""

__version__ = "0.1.0"