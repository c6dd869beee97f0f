"""
Pet Listing Schema
v1.0.0

Canonical shape of a pet feed record. Raw records in the store use the
browser field names (desc, createdAt, isDemo); Listing uses Python names
and converts back with to_dict().

Design Principles:
- Every field has a defined fallback, so a Listing is always renderable
- Demo (seed) records are read-only to the mutation pipeline
"""
from dataclasses import dataclass
from typing import Dict
from enum import Enum

from config import TYPE_SYNONYMS


class PetType(str, Enum):
  """Fixed animal type enumeration"""
  DOG = "Dog"
  CAT = "Cat"
  BIRD = "Bird"
  OTHER = "Other"

  @classmethod
  def from_string(cls, value) -> "PetType":
    """Convert a raw value to PetType, matching synonyms case-insensitively"""
    if value is None:
      return cls.OTHER

    value_lower = str(value).lower()

    for type_name, synonyms in TYPE_SYNONYMS.items():
      if value_lower in synonyms:
        return cls(type_name)
    return cls.OTHER


@dataclass
class Listing:
  """A single pet post in the feed"""
  id: str
  name: str
  type: str = PetType.OTHER.value
  region: str = "Empty"
  description: str = ""
  image: str = ""
  created_at: int = 0
  is_demo: bool = False

  @property
  def category(self) -> str:
    return self.type

  def search_text(self) -> str:
    """Lower-cased haystack for free-text search"""
    return f"{self.name} {self.description} {self.type} {self.region}".lower()

  def to_dict(self) -> Dict:
    """Convert to the persisted (browser) field names"""
    return {
      "id": self.id,
      "name": self.name,
      "type": self.type,
      "region": self.region,
      "desc": self.description,
      "image": self.image,
      "createdAt": self.created_at,
      "isDemo": self.is_demo,
    }
