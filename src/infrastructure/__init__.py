"""Adapters implementing the domain ports.

- persistence/: SQLAlchemy base, storage adapter, repositories, unit of work
- messaging/: event codec, in-memory broker, outbox processor, processed
  event store
- logging/: structlog console adapter
"""
