"""
Mutation pipeline: create and delete posts
v1.0.0

Every mutation reads the latest persisted collection right before it
writes, then asks the owner to re-run its query so the view reflects
the change.

Create is quota-aware: if the full record does not fit, it is saved
once more without its image and the caller gets a notice instead of
an error. Delete refuses demo records when protection is on.
"""
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, List, Optional

from config import FEED_OPTIONS, IMAGE_MAX_WIDTH, IMAGE_QUALITY
from dal import CollectionStore
from errors import (
  OperationInProgressError,
  ProtectedRecordError,
  QuotaExceededError,
  ValidationError,
)
from images import ImageUpload, compress_image_async, to_data_url
from normalizer import normalize_listing
from schema import Listing

SAVED_WITHOUT_IMAGE_NOTICE = "Image is too large for your device storage. Saved without image."


@dataclass
class ListingForm:
  """Values submitted from the add-post form"""
  name: str = ""
  type: str = ""
  region: str = ""
  description: str = ""

  def cleaned(self) -> "ListingForm":
    return ListingForm(
      name=str(self.name or "").strip(),
      type=str(self.type or "").strip(),
      region=str(self.region or "").strip(),
      description=str(self.description or "").strip(),
    )

  def missing_fields(self) -> List[str]:
    return [name for name in ("name", "type", "region", "description") if not getattr(self, name)]


@dataclass
class CreateResult:
  listing: Listing
  saved_without_image: bool = False
  notice: Optional[str] = None


class OperationGuard:
  """
  "Operation in progress" bracket around a create.

  Listeners are called with True when the guard is taken and False when
  it is released, whatever way the operation ends.
  """

  def __init__(self):
    self.busy = False
    self._listeners: List[Callable[[bool], None]] = []

  def subscribe(self, listener: Callable[[bool], None]) -> Callable[[], None]:
    self._listeners.append(listener)
    return lambda: self._listeners.remove(listener)

  def _notify(self):
    for listener in list(self._listeners):
      listener(self.busy)

  @contextmanager
  def hold(self):
    if self.busy:
      raise OperationInProgressError()
    self.busy = True
    self._notify()
    try:
      yield self
    finally:
      self.busy = False
      self._notify()


def now_ms() -> int:
  return int(time.time() * 1000)


def make_id() -> str:
  return str(uuid.uuid4())


class MutationPipeline:
  """Create/delete posts in one collection"""

  def __init__(
    self,
    store: CollectionStore,
    on_change: Optional[Callable[[], None]] = None,
    confirm: Optional[Callable[[Listing], bool]] = None,
    protect_flagged: bool = FEED_OPTIONS["protect_flagged"],
    compress_images: bool = FEED_OPTIONS["compress_images"],
  ):
    self.store = store
    self.on_change = on_change
    self.confirm = confirm
    self.protect_flagged = protect_flagged
    self.compress_images = compress_images
    self.guard = OperationGuard()

  def _changed(self):
    if self.on_change:
      self.on_change()

  # ============================================
  # Create
  # ============================================

  async def _encode_image(self, image: ImageUpload) -> str:
    if self.compress_images:
      return await compress_image_async(image.data, IMAGE_MAX_WIDTH, IMAGE_QUALITY)
    return to_data_url(image)

  def _prepend(self, record: dict):
    """Read the latest collection and save it with record in front"""
    records = [r for r in self.store.read() if not (isinstance(r, dict) and r.get("id") == record["id"])]
    self.store.write([record] + records)

  async def create(self, form: ListingForm, image: Optional[ImageUpload]) -> CreateResult:
    """
    Validate, shrink the image and save a new post at the front.

    Raises ValidationError, ImageProcessingError, OperationInProgressError,
    QuotaExceededError if even the image-less record does not fit, or
    StorageUnavailableError if the storage file can't be written.
    """
    with self.guard.hold():
      form = form.cleaned()
      if form.missing_fields() or image is None or not image.size:
        raise ValidationError()

      image_url = await self._encode_image(image)

      record = {
        "id": make_id(),
        "name": form.name,
        "type": form.type,
        "region": form.region,
        "desc": form.description,
        "image": image_url,
        "createdAt": now_ms(),
        "isDemo": False,
      }

      result = CreateResult(listing=normalize_listing(record))
      try:
        self._prepend(record)
      except QuotaExceededError as e:
        print(f"  ⚠️ Storage quota reached, storing without image: {e.message}")
        record["image"] = ""
        self._prepend(record)
        result = CreateResult(
          listing=normalize_listing(record),
          saved_without_image=True,
          notice=SAVED_WITHOUT_IMAGE_NOTICE,
        )

      print(f"  🆕 New post: {record['name']} ({result.listing.type}, {result.listing.region})")

    self._changed()
    return result

  # ============================================
  # Delete
  # ============================================

  def delete(self, record_id: str, confirm: Optional[Callable[[Listing], bool]] = None) -> bool:
    """
    Delete a post by id.

    Returns False when nothing was removed (unknown id, or the user
    declined). Raises ProtectedRecordError for demo posts.
    """
    if not record_id:
      return False

    match = None
    for raw in self.store.read():
      if isinstance(raw, dict) and str(raw.get("id") or "") == record_id:
        match = raw
        break

    if match is None:
      return False

    listing = normalize_listing(match)
    if self.protect_flagged and listing.is_demo:
      raise ProtectedRecordError(record_id)

    confirm = confirm or self.confirm
    if confirm is not None and not confirm(listing):
      return False

    remaining = [r for r in self.store.read() if not (isinstance(r, dict) and str(r.get("id") or "") == record_id)]
    self.store.write(remaining)
    print(f"  🗑️ Deleted post: {listing.name}")

    self._changed()
    return True
