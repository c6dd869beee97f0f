"""
Query engine for feed and directory lists
v1.0.0

Filters are independent and AND-combined. Ordering is newest first by
created_at using a stable sort, so records with equal timestamps (or
none, like directory entries) keep their storage order.
"""
from dataclasses import dataclass, replace
from typing import Iterable, List, Sequence

from config import REGION_WHITELIST, EMPTY_REGION
from normalizer import normalize_type

FILTER_KINDS = ("type", "region", "text", "category")


def filter_type(value) -> str:
  """Type control value (or synonym) as the normalized type, "" for any"""
  value = str(value or "").strip()
  return normalize_type(value) if value else ""


def filter_region(value) -> str:
  """Region control value matched to the whitelist ignoring case"""
  value = str(value or "").strip()
  for region in REGION_WHITELIST + [EMPTY_REGION]:
    if value.lower() == region.lower():
      return region
  return value


@dataclass(frozen=True)
class Filters:
  """Current filter control values, "" means not filtering"""
  type: str = ""
  region: str = ""
  text: str = ""
  category: str = ""

  def with_value(self, kind: str, value) -> "Filters":
    if kind not in FILTER_KINDS:
      raise ValueError(f"Unknown filter kind: {kind}")
    if kind == "type":
      value = filter_type(value)
    elif kind == "region":
      value = filter_region(value)
    return replace(self, **{kind: str(value or "")})

  def is_empty(self) -> bool:
    return not (self.type or self.region or self.text.strip() or self.category)


def sort_newest_first(collection: Iterable) -> List:
  return sorted(collection, key=lambda r: getattr(r, "created_at", 0) or 0, reverse=True)


def query(collection: Sequence, filters: Filters = None) -> List:
  """
  Apply filters to a normalized collection.

  Works on anything exposing type/region/category attributes and a
  search_text() method (Listing, ShelterEntry).
  """
  if filters is None:
    filters = Filters()

  results = sort_newest_first(collection)

  pet_type = filter_type(filters.type)
  if pet_type:
    results = [r for r in results if getattr(r, "type", "") == pet_type]

  region = filter_region(filters.region)
  if region:
    results = [r for r in results if getattr(r, "region", "") == region]

  needle = filters.text.strip().lower()
  if needle:
    results = [r for r in results if needle in r.search_text()]

  if filters.category:
    results = [r for r in results if r.category == filters.category]

  return results


def province_options(entries: Iterable) -> List[str]:
  """Distinct non-empty provinces, sorted for the directory selector"""
  return sorted({e.province for e in entries if e.province})
