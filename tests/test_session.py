import pytest

from conftest import make_records
from errors import ProtectedRecordError
from mutations import ListingForm
from normalizer import normalize_shelter
from session import DirectorySession, FeedSession


@pytest.fixture
def views():
  return []


@pytest.fixture
def feed(store, views):
  store.write(make_records(8))
  return FeedSession(store, renderer=views.append)


def test_apply_filter_renders_first_page(feed, views):
  view = feed.apply_filter()

  assert views == [view]
  assert view.replace
  assert len(view.cards) == 6
  assert view.total == 8
  assert view.has_more
  assert [c.id for c in view.cards] == ["p7", "p6", "p5", "p4", "p3", "p2"]


def test_load_next_page_appends(feed):
  feed.apply_filter()

  view = feed.load_next_page()

  assert not view.replace
  assert [c.id for c in view.cards] == ["p1", "p0"]
  assert not view.has_more
  assert feed.load_next_page().cards == []


def test_filter_change_starts_new_epoch(feed, store):
  store.write(make_records(4) + make_records(3, type="cat", region="South"))
  feed.apply_filter()
  feed.load_next_page()

  view = feed.set_filter("type", "Cat")

  assert view.replace
  assert view.total == 3
  assert feed.cursor.position == 3
  assert {b.label for c in view.cards for b in c.badges} >= {"Cat"}


def test_filter_pages_cover_result_exactly_once(store, views):
  store.write(make_records(20, region="East") + make_records(5, region="South"))
  session = FeedSession(store, renderer=views.append, page_size=4)
  session.set_filter("region", "East")
  while session.current_view.has_more:
    session.load_next_page()

  ids = [c.id for v in views for c in v.cards]
  assert len(ids) == len(set(ids))
  assert len(ids) == 20


def test_toggle_type_selects_and_clears(feed):
  feed.toggle_type("Dog")
  assert feed.filters.type == "Dog"

  view = feed.toggle_type("Dog")

  assert feed.filters.type == ""
  assert view.total == 8


def test_clear_filters(feed):
  feed.set_filter("text", "nothing matches this")
  assert feed.current_view.is_empty
  assert feed.current_view.empty_label == "+ Add Post"

  assert feed.clear_filters().total == 8


def test_subscribe_and_unsubscribe(feed, views):
  extra = []
  unsubscribe = feed.subscribe(extra.append)
  feed.apply_filter()
  unsubscribe()
  feed.apply_filter()

  assert len(extra) == 1
  assert len(views) == 2


def test_session_reads_store_on_every_query(feed, store):
  feed.apply_filter()
  store.write(make_records(2))

  assert feed.apply_filter().total == 2


@pytest.mark.asyncio
async def test_create_re_renders_with_filters_kept(feed, views, upload):
  feed.set_filter("region", "North")
  views.clear()

  await feed.mutations.create(
    ListingForm(name="Mali", type="cat", region="Northern", description="Calm"), upload,
  )
  assert views[-1].total == 0

  feed.set_filter("region", "Northern")
  assert [c.title for c in feed.current_view.cards] == ["Mali"]


def test_delete_re_renders(feed, views):
  feed.apply_filter()

  feed.mutations.delete("p7")

  assert views[-1].replace
  assert views[-1].total == 7
  assert "p7" not in [c.id for c in views[-1].cards]


def test_protected_delete_does_not_re_render(store, views):
  store.write(make_records(2, isDemo=True))
  session = FeedSession(store, renderer=views.append)
  session.apply_filter()

  with pytest.raises(ProtectedRecordError):
    session.mutations.delete("p0")

  assert len(views) == 1
  assert all(c.actions == [] for c in views[0].cards)


# ============================================
# Directory
# ============================================

@pytest.fixture
def directory(views):
  entries = [normalize_shelter({"id": str(i), "name": f"Shelter {i}", "province": p})
             for i, p in enumerate(["Phuket", "Chiang Mai"] * 6)]
  return DirectorySession(entries, renderer=views.append)


def test_directory_pages_of_nine(directory):
  view = directory.apply_filter()

  assert len(view.cards) == 9
  assert view.count_label == "12"
  assert len(directory.load_next_page().cards) == 3


def test_directory_province_and_search(directory):
  assert directory.province_options() == ["Chiang Mai", "Phuket"]

  view = directory.select_province("Phuket")
  assert view.total == 6

  view = directory.search("shelter 10")
  assert [c.id for c in view.cards] == ["10"]

  assert directory.select_province("").total == 1


def test_empty_directory_keeps_message(views):
  session = DirectorySession([], renderer=views.append, message="Data loading failed.")

  view = session.apply_filter()

  assert view.is_empty
  assert view.empty_label == "No shelters found"
  assert session.message == "Data loading failed."


def test_type_filter_accepts_raw_control_values(feed, store):
  store.write(make_records(2) + make_records(3, type="cat"))

  assert feed.set_filter("type", "แมว").total == 3
  assert feed.toggle_type("cat").total == 5
  assert feed.set_filter("region", "bangkok").total == 5


def test_unprotected_feed_shows_delete_on_demo_posts(store):
  store.write(make_records(2, isDemo=True))

  view = FeedSession(store, protect_flagged=False).apply_filter()

  assert all(c.actions and c.actions[0]["act"] == "delete" for c in view.cards)
