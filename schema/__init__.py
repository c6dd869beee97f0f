"""
Schema Package
v1.0.0

Contains the record models for the Happy Paws feed.

Modules:
- listing: Pet feed Listing and PetType enumeration
- shelter: Shelter directory entries
- contact: Contact form messages
"""

from .listing import (
  Listing,
  PetType,
)

from .shelter import (
  ShelterEntry,
)

from .contact import (
  ContactMessage,
)

__all__ = [
  'Listing',
  'PetType',
  'ShelterEntry',
  'ContactMessage',
]
