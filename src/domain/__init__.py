"""Domain layer - Pure building-block types.

This layer contains the value objects, protocols (ports), specifications and
integration event base shared by every service. The domain layer has NO
dependencies on any framework or infrastructure - it is pure Python.

Structure:
- value_objects/: Filter, PagedList, RequestContext, SortKey
- specifications/: Per-aggregate search/sort declarations
- protocols/: Repository, unit of work, storage and messaging ports
- events/: Integration event base class
- errors/: Repository contract violations and paging messages
- enums/: Well-known roles

The domain layer defines WHAT the building blocks guarantee, not HOW
storage or messaging implement it.
"""
