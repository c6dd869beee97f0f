"""
Dataset loading: demo seed and shelter directory
v1.0.0

Datasets are JSON arrays fetched over HTTP (or read from a local file
when the source is a path). Both loaders degrade to an empty list:
the seed silently, the directory with a message the page can show.
"""
import asyncio
import json
import uuid
from dataclasses import dataclass, field
from typing import Any, List, Optional

import requests

from config import USER_AGENT, FETCH_TIMEOUT
from dal import CollectionStore
from errors import FetchFailedError, MalformedDatasetError, QuotaExceededError, StorageUnavailableError
from normalizer import normalize_shelter
from schema import ShelterEntry

DIRECTORY_FAILED_MESSAGE = (
  "Data loading failed. Please check the shelters.json file and run it via Live Server/HTTP."
)


@dataclass
class SeedResult:
  """What seed_if_empty did"""
  seeded: int = 0
  skipped: bool = False      # collection already had data
  error: Optional[str] = None


@dataclass
class DirectoryResult:
  entries: List[ShelterEntry] = field(default_factory=list)
  message: str = ""

  @property
  def ok(self) -> bool:
    return not self.message


def _is_url(source: str) -> bool:
  return source.startswith("http://") or source.startswith("https://")


def _fetch_url(source: str) -> Any:
  session = requests.Session()
  session.headers.update({
    "User-Agent": USER_AGENT,
    "Cache-Control": "no-cache",
  })
  try:
    print(f"  🔍 Fetching: {source}")
    response = session.get(source, timeout=FETCH_TIMEOUT)
    response.raise_for_status()
  except requests.RequestException as e:
    raise FetchFailedError(f"Error fetching {source}: {e}")
  finally:
    session.close()

  try:
    return response.json()
  except ValueError as e:
    raise MalformedDatasetError(f"{source} is not valid JSON: {e}")


def _read_file(source: str) -> Any:
  try:
    with open(source, 'r', encoding='utf-8') as f:
      text = f.read()
  except OSError as e:
    raise FetchFailedError(f"Error reading {source}: {e}")

  try:
    return json.loads(text)
  except ValueError as e:
    raise MalformedDatasetError(f"{source} is not valid JSON: {e}")


def fetch_dataset(source: str) -> List[Any]:
  """
  Fetch a dataset and check it is a JSON array.

  Raises FetchFailedError or MalformedDatasetError.
  """
  data = _fetch_url(source) if _is_url(source) else _read_file(source)
  if not isinstance(data, list):
    raise MalformedDatasetError(f"invalid {source}: expected a list, got {type(data).__name__}")
  return data


def prepare_seed_records(data: List[Any]) -> List[dict]:
  """
  Mark seed records as demo data and make ids unique.

  Records that already say whether they are demo data keep their flag.
  Non-object items are dropped; duplicate ids keep the first record.
  """
  records = []
  seen_ids = set()

  for item in data:
    if not isinstance(item, dict):
      continue

    record = dict(item)
    if "isDemo" not in record:
      record["isDemo"] = True

    record_id = str(record.get("id") or "")
    if not record_id:
      record_id = str(uuid.uuid4())
    if record_id in seen_ids:
      continue
    seen_ids.add(record_id)
    record["id"] = record_id

    records.append(record)

  return records


async def seed_if_empty(store: CollectionStore, source: str) -> SeedResult:
  """
  Import the bundled demo posts, once, into an empty collection.

  Never overwrites or duplicates existing data. Failures are logged and
  leave the collection empty.
  """
  if store.read():
    return SeedResult(skipped=True)

  try:
    data = await asyncio.to_thread(fetch_dataset, source)
  except (FetchFailedError, MalformedDatasetError) as e:
    print(f"  ❌ Seeding demo posts failed: {e.message}")
    return SeedResult(error=e.message)

  # A post may have been created while the fetch was pending
  if store.read():
    return SeedResult(skipped=True)

  records = prepare_seed_records(data)
  try:
    store.write(records)
  except (QuotaExceededError, StorageUnavailableError) as e:
    print(f"  ❌ Seeding demo posts failed: {e.message}")
    return SeedResult(error=e.message)

  print(f"  🌱 Loaded demo posts: {len(records)}")
  return SeedResult(seeded=len(records))


async def load_directory(source: str) -> DirectoryResult:
  """Fetch the shelter directory; failures come back as a visible message"""
  try:
    data = await asyncio.to_thread(fetch_dataset, source)
  except (FetchFailedError, MalformedDatasetError) as e:
    print(f"  ❌ fetch {source} failed: {e.message}")
    return DirectoryResult(message=DIRECTORY_FAILED_MESSAGE)

  entries = [normalize_shelter(item) for item in data if isinstance(item, dict)]
  print(f"  ✅ Loaded {len(entries)} shelters")
  return DirectoryResult(entries=entries)
