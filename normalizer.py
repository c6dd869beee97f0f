"""
Record normalization
v1.0.0

Maps raw persisted records onto the canonical schema. Every function
here is pure and never raises: anything malformed falls back to a
defined default, and normalizing an already-normalized record is a no-op.
"""
from typing import Any, Dict, List

from config import REGION_WHITELIST, EMPTY_REGION, NO_NAME_PLACEHOLDER
from images import PLACEHOLDER_IMAGE
from schema import Listing, PetType, ShelterEntry


def _as_dict(raw: Any) -> Dict:
  if isinstance(raw, (Listing, ShelterEntry)):
    return raw.to_dict()
  if isinstance(raw, dict):
    return raw
  return {}


def _as_text(value: Any) -> str:
  """Falsy -> "", anything else -> str"""
  if not value:
    return ""
  return str(value)


def normalize_type(value: Any) -> str:
  """Normalize animal type: Dog, Cat, Bird or Other"""
  return PetType.from_string(value if value else "").value


def normalize_region(value: Any) -> str:
  """Exact whitelist match after trimming, otherwise the Empty sentinel"""
  region = _as_text(value).strip()
  return region if region in REGION_WHITELIST else EMPTY_REGION


def normalize_timestamp(value: Any) -> int:
  """Integer ms timestamp; missing or unusable values become 0"""
  if isinstance(value, bool) or value is None:
    return 0
  if isinstance(value, int):
    return value
  try:
    return int(float(value))
  except (TypeError, ValueError, OverflowError):
    return 0


def normalize_listing(raw: Any) -> Listing:
  """Build a Listing from a raw stored record"""
  data = _as_dict(raw)

  description = data.get("desc")
  if description is None:
    description = data.get("description")

  is_demo = data.get("isDemo")
  if is_demo is None:
    is_demo = data.get("is_demo")

  created_at = data.get("createdAt")
  if created_at is None:
    created_at = data.get("created_at")

  name = _as_text(data.get("name"))
  if not name.strip():
    name = NO_NAME_PLACEHOLDER

  return Listing(
    id=_as_text(data.get("id")),
    name=name,
    type=normalize_type(data.get("type")),
    region=normalize_region(data.get("region")),
    description=_as_text(description),
    image=_as_text(data.get("image")) or PLACEHOLDER_IMAGE,
    created_at=normalize_timestamp(created_at),
    is_demo=bool(is_demo),
  )


def normalize_collection(raws: Any) -> List[Listing]:
  if not isinstance(raws, list):
    return []
  return [normalize_listing(raw) for raw in raws]


def normalize_shelter(raw: Any) -> ShelterEntry:
  """Coerce every directory field to a string"""
  data = _as_dict(raw)
  return ShelterEntry(**{name: _as_text(data.get(name)) for name in ShelterEntry.field_names()})
