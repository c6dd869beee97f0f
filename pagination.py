"""
Pagination cursor
v1.0.0

A cursor owns the result it pages over. Replacing the result and
rewinding happen together in reset(), so a cursor can never walk a
result set that has been superseded by a filter change.
"""
from typing import List, Sequence


class PageCursor:
  """Incremental "load more" pages over one query result"""

  def __init__(self, page_size: int, results: Sequence = ()):
    if page_size < 1:
      raise ValueError("page_size must be at least 1")
    self.page_size = page_size
    self._results: List = list(results)
    self._position = 0

  def reset(self, results: Sequence):
    """Start a new epoch over a fresh result"""
    self._results = list(results)
    self._position = 0

  def next_page(self) -> List:
    """Next unseen slice; empty once everything has been returned"""
    end = min(self._position + self.page_size, len(self._results))
    page = self._results[self._position:end]
    self._position = end
    return page

  @property
  def position(self) -> int:
    return self._position

  @property
  def total(self) -> int:
    return len(self._results)

  @property
  def has_more(self) -> bool:
    return self._position < len(self._results)
