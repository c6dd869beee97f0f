"""
View projection
v1.0.0

Turns one page of normalized records into render descriptors plus the
list-level UI state. No filtering or mutation happens here; drawing is
left to whatever renderer receives the FeedView.
"""
from dataclasses import dataclass, field
from typing import Dict, List, Sequence

FEED = "feed"
DIRECTORY = "directory"


@dataclass
class Badge:
  label: str
  css_class: str


@dataclass
class CardDescriptor:
  """Everything a renderer needs to draw one card"""
  id: str
  title: str
  image: str = ""
  alt: str = ""
  body: str = ""
  badges: List[Badge] = field(default_factory=list)
  actions: List[Dict[str, str]] = field(default_factory=list)


@dataclass
class FeedView:
  """One render instruction for a list"""
  cards: List[CardDescriptor]
  total: int
  has_more: bool
  replace: bool = True     # clear previously drawn cards first
  variant: str = FEED

  @property
  def is_empty(self) -> bool:
    return self.total == 0

  @property
  def count_label(self) -> str:
    if self.variant == FEED:
      return f"{self.total} list"
    return str(self.total)

  @property
  def empty_label(self) -> str:
    if not self.is_empty:
      return ""
    return "+ Add Post" if self.variant == FEED else "No shelters found"


def type_badge_class(pet_type: str) -> str:
  """CSS class for the animal type badge"""
  x = (pet_type or "").lower()
  if x in ("dog", "cat", "bird"):
    return f"feed-badge {x}"
  return "feed-badge"


def listing_card(listing, protect_flagged: bool = True) -> CardDescriptor:
  actions = []
  if not (protect_flagged and listing.is_demo):
    actions.append({"act": "delete", "label": "Delete", "id": listing.id})

  return CardDescriptor(
    id=listing.id,
    title=listing.name,
    image=listing.image,
    alt=listing.name,
    body=listing.description,
    badges=[
      Badge(listing.type, type_badge_class(listing.type)),
      Badge(listing.region, "feed-badge region"),
    ],
    actions=actions,
  )


def shelter_card(entry) -> CardDescriptor:
  badges = [Badge(entry.province or "-", "s-chip")]
  if entry.area:
    badges.append(Badge(entry.area, "s-chip soft"))

  return CardDescriptor(
    id=entry.id,
    title=entry.name,
    image=entry.image,
    alt=entry.name,
    body=entry.about,
    badges=badges,
    actions=[{"act": link["kind"], "label": link["label"], "href": link["href"]} for link in entry.links()],
  )


def project_page(
  page: Sequence,
  total: int,
  has_more: bool,
  replace: bool = True,
  variant: str = FEED,
  protect_flagged: bool = True,
) -> FeedView:
  """Fold a page of records into a FeedView"""
  if variant == FEED:
    cards = [listing_card(item, protect_flagged) for item in page]
  else:
    cards = [shelter_card(item) for item in page]

  return FeedView(cards=cards, total=total, has_more=has_more, replace=replace, variant=variant)
