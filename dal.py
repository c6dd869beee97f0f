"""
Data Access Layer (DAL)
v1.0.0

Central API for all persisted data. All code that reads/writes a
collection must go through this layer.

Design Principles:
- One opaque key-value medium (LocalStorage), one JSON collection per key
- Reads fail soft: corrupt or missing data is an empty collection
- Writes fail loud: a full medium raises QuotaExceededError, an unwritable
  file StorageUnavailableError, and neither leaves a partial write behind
- Callers read immediately before they write, never from a stale snapshot

Usage:
  from dal import DAL, LocalStorage

  dal = DAL(LocalStorage("happy_paws_storage.json"))
  records = dal.listings.read()
  dal.listings.write([new_record] + records)
"""
import json
import os
import tempfile
from typing import List, Optional, Dict, Any

from config import STORAGE_KEYS, STORAGE_QUOTA_CHARS
from errors import QuotaExceededError, StorageCorruptError, StorageUnavailableError


class LocalStorage:
  """
  Key-value medium with a size quota, modelled on browser localStorage.

  Values are strings. Size is counted as len(key) + len(value) summed over
  all items. When a path is given, the whole map is mirrored to a JSON file
  after every successful write.
  """

  def __init__(self, path: Optional[str] = None, quota_chars: int = STORAGE_QUOTA_CHARS):
    self.path = path
    self.quota_chars = quota_chars
    self._items: Dict[str, str] = self._load_file()

  # ============================================
  # File Mirror
  # ============================================

  def _load_file(self) -> Dict[str, str]:
    """Load items from the JSON file, starting empty if unusable"""
    if not self.path or not os.path.exists(self.path):
      return {}

    try:
      with open(self.path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    except (OSError, ValueError) as e:
      print(f"⚠️ Error loading storage file {self.path}: {e}")
      return {}

    if not isinstance(data, dict):
      print(f"⚠️ Storage file {self.path} is not a key-value map, starting empty")
      return {}

    return {str(k): v for k, v in data.items() if isinstance(v, str)}

  def _save_file(self, items: Dict[str, str]):
    """Write items to a temp file beside the mirror, then swap it into place"""
    if not self.path:
      return

    directory = os.path.dirname(os.path.abspath(self.path))
    tmp_path = None
    try:
      fd, tmp_path = tempfile.mkstemp(prefix=".storage-", suffix=".tmp", dir=directory)
      with os.fdopen(fd, 'w', encoding='utf-8') as f:
        json.dump(items, f, ensure_ascii=False, indent=2)
      os.replace(tmp_path, self.path)
    except OSError as e:
      if tmp_path and os.path.exists(tmp_path):
        os.remove(tmp_path)
      raise StorageUnavailableError(f"Error saving storage file {self.path}: {e}")

  # ============================================
  # Key-Value API
  # ============================================

  def get_item(self, key: str) -> Optional[str]:
    return self._items.get(key)

  def set_item(self, key: str, value: str):
    """
    Store a value.

    Raises QuotaExceededError if the medium would overflow and
    StorageUnavailableError if the file mirror can't be written. Either
    way the stored items are unchanged.
    """
    value = str(value)
    current = self._items.get(key)
    used = self.used_chars()
    if current is not None:
      used -= len(key) + len(current)

    if used + len(key) + len(value) > self.quota_chars:
      raise QuotaExceededError(
        f"Setting '{key}' needs {len(key) + len(value)} chars, "
        f"only {self.quota_chars - used} left"
      )

    items = dict(self._items)
    items[key] = value
    self._save_file(items)
    self._items = items

  def remove_item(self, key: str):
    if key not in self._items:
      return
    items = {k: v for k, v in self._items.items() if k != key}
    self._save_file(items)
    self._items = items

  def keys(self) -> List[str]:
    return list(self._items.keys())

  def used_chars(self) -> int:
    return sum(len(k) + len(v) for k, v in self._items.items())


class CollectionStore:
  """
  Typed slot holding one JSON list of records.

  read() never raises; write() raises QuotaExceededError or
  StorageUnavailableError.
  """

  def __init__(self, storage: LocalStorage, key: str):
    self.storage = storage
    self.key = key

  def read_strict(self) -> List[Any]:
    """Read the slot, raising StorageCorruptError for unparsable data"""
    raw = self.storage.get_item(self.key)
    if raw is None:
      return []

    try:
      data = json.loads(raw)
    except ValueError as e:
      raise StorageCorruptError(f"Slot '{self.key}' is not valid JSON: {e}")

    if data is None:
      return []
    if not isinstance(data, list):
      raise StorageCorruptError(f"Slot '{self.key}' holds {type(data).__name__}, not a list")
    return data

  def read(self) -> List[Any]:
    """Read the slot; corrupt or missing data yields an empty list"""
    try:
      return self.read_strict()
    except StorageCorruptError:
      return []

  def write(self, records: List[Any]):
    """Persist the whole collection (raises QuotaExceededError when full)"""
    self.storage.set_item(self.key, json.dumps(list(records), ensure_ascii=False))

  def is_empty(self) -> bool:
    return len(self.read()) == 0

  def clear(self):
    self.storage.remove_item(self.key)


class DAL:
  """
  Data Access Layer - the single gateway to persisted collections.

  Slots are independent; no record references another slot.
  """

  def __init__(self, storage: Optional[LocalStorage] = None):
    self.storage = storage if storage is not None else LocalStorage()
    self.listings = self.collection("pets")
    self.contact_messages = self.collection("contact_messages")

  def collection(self, name: str) -> CollectionStore:
    """Get the store for a named slot from STORAGE_KEYS"""
    if name not in STORAGE_KEYS:
      raise KeyError(f"Unknown storage slot: {name}")
    return CollectionStore(self.storage, STORAGE_KEYS[name])

  def summary(self) -> Dict[str, Any]:
    """Counts per slot and quota usage (for the CLI report)"""
    return {
      "pets": len(self.listings.read()),
      "contact_messages": len(self.contact_messages.read()),
      "used_chars": self.storage.used_chars(),
      "quota_chars": self.storage.quota_chars,
    }
