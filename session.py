"""
Feed sessions
v1.0.0

A session owns everything a list page keeps between events: the
current filters, the pagination cursor with its result, and the
renderer it draws to. Filter controls talk to the session through
set_filter()/toggle_type(); other parts of the page subscribe() to
receive every FeedView.

Usage:
  session = FeedSession(dal.listings, renderer=print_view)
  session.apply_filter()           # first page
  session.set_filter("region", "Bangkok")
  session.load_next_page()
"""
from typing import Callable, List, Optional, Sequence

from config import FEED_PAGE_SIZE, DIRECTORY_PAGE_SIZE, FEED_OPTIONS
from dal import CollectionStore
from mutations import MutationPipeline
from normalizer import normalize_collection
from pagination import PageCursor
from projector import FeedView, project_page, FEED, DIRECTORY
from query import Filters, filter_type, query, province_options
from schema import Listing, ShelterEntry

Listener = Callable[[FeedView], None]


class ListSession:
  """Filter -> query -> paginate -> project loop for one list"""

  variant = FEED
  protect_flagged = True

  def __init__(self, page_size: int, renderer: Optional[Listener] = None):
    self.filters = Filters()
    self.cursor = PageCursor(page_size)
    self.current_view: Optional[FeedView] = None
    self._listeners: List[Listener] = []
    if renderer is not None:
      self._listeners.append(renderer)

  def subscribe(self, listener: Listener) -> Callable[[], None]:
    """Register a view listener; returns a function that removes it"""
    self._listeners.append(listener)
    return lambda: self._listeners.remove(listener)

  def _collection(self) -> Sequence:
    raise NotImplementedError("Subclass must implement _collection()")

  def _project(self, page: Sequence, replace: bool) -> FeedView:
    return project_page(
      page, self.cursor.total, self.cursor.has_more,
      replace=replace, variant=self.variant, protect_flagged=self.protect_flagged,
    )

  def _emit(self, view: FeedView) -> FeedView:
    self.current_view = view
    for listener in list(self._listeners):
      listener(view)
    return view

  def apply_filter(self) -> FeedView:
    """Re-run the query and start a new pagination epoch"""
    self.cursor.reset(query(self._collection(), self.filters))
    return self._emit(self._project(self.cursor.next_page(), replace=True))

  def set_filter(self, kind: str, value: str) -> FeedView:
    self.filters = self.filters.with_value(kind, value)
    return self.apply_filter()

  def clear_filters(self) -> FeedView:
    self.filters = Filters()
    return self.apply_filter()

  def load_next_page(self) -> FeedView:
    """Append the next page of the current epoch"""
    return self._emit(self._project(self.cursor.next_page(), replace=False))


class FeedSession(ListSession):
  """Pet feed backed by the persisted listings collection"""

  variant = FEED

  def __init__(
    self,
    store: CollectionStore,
    renderer: Optional[Listener] = None,
    confirm: Optional[Callable[[Listing], bool]] = None,
    page_size: int = FEED_PAGE_SIZE,
    protect_flagged: bool = FEED_OPTIONS["protect_flagged"],
    compress_images: bool = FEED_OPTIONS["compress_images"],
  ):
    super().__init__(page_size, renderer)
    self.store = store
    self.protect_flagged = protect_flagged
    self.mutations = MutationPipeline(
      store,
      on_change=self.apply_filter,
      confirm=confirm,
      protect_flagged=protect_flagged,
      compress_images=compress_images,
    )

  def _collection(self) -> List[Listing]:
    return normalize_collection(self.store.read())

  def toggle_type(self, pet_type: str) -> FeedView:
    """Select an animal type card; selecting it again clears the filter"""
    if pet_type and self.filters.type == filter_type(pet_type):
      pet_type = ""
    return self.set_filter("type", pet_type)


class DirectorySession(ListSession):
  """Shelter directory over an already-loaded dataset"""

  variant = DIRECTORY

  def __init__(
    self,
    entries: Sequence[ShelterEntry] = (),
    renderer: Optional[Listener] = None,
    message: str = "",
    page_size: int = DIRECTORY_PAGE_SIZE,
  ):
    super().__init__(page_size, renderer)
    self.entries = list(entries)
    self.message = message

  def _collection(self) -> List[ShelterEntry]:
    return self.entries

  def province_options(self) -> List[str]:
    return province_options(self.entries)

  def search(self, text: str) -> FeedView:
    return self.set_filter("text", text)

  def select_province(self, province: str) -> FeedView:
    return self.set_filter("category", province)
