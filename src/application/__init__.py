"""Application layer - Use cases and orchestration.

This layer holds the contracts every service writes its use cases against:
- cqrs/: Command/query contracts, handler bases, registry and dispatcher
- pagination/: Filter validation for paged reads
- domain_events/: Dispatching domain events raised by aggregates at commit
- integration_events/: Publishing and consuming integration events
- errors/: ApplicationError, the failure type of every handler Result

The application layer orchestrates domain logic but contains no storage code.
"""
