#!/usr/bin/env python3
"""
Happy Paws Feed - Main Runner
v1.0.0

Drives the feed from the command line against a local storage file:
seeds demo posts, lists/filters/pages posts, adds and deletes posts,
browses the shelter directory and saves contact messages.

Usage:
  python feed.py --seed posts.json                  # Import demo posts once
  python feed.py --list --type Dog --region Bangkok # Filtered feed
  python feed.py --list --pages 3                   # First three pages
  python feed.py --add --name Fido --pet-type dog --pet-region Bangkok \\
                 --desc "Friendly" --image fido.jpg
  python feed.py --delete <id>                      # Asks for confirmation
  python feed.py --shelters shelters.json --province "Chiang Mai"
  python feed.py --messages                         # Stored contact messages
"""
import argparse
import asyncio
import os
import sys

from config import STORAGE_PATH, SEED_DATASET, DIRECTORY_DATASET, STORAGE_KEYS
from contact import ContactForm, SENT_MESSAGE, list_contact_messages, submit_contact_message
from dal import DAL, LocalStorage
from errors import FeedError
from images import ImageUpload
from loader import load_directory, seed_if_empty
from mutations import ListingForm
from projector import FeedView
from query import Filters
from session import DirectorySession, FeedSession


def print_view(view: FeedView):
  """Console renderer for a FeedView"""
  if view.replace:
    print("\n" + "=" * 60)
    print(f"📋 {view.count_label}")
    print("=" * 60)
    if view.is_empty:
      print(f"  {view.empty_label}")

  for card in view.cards:
    badges = " | ".join(badge.label for badge in card.badges)
    print(f"\n  🐾 {card.title}  [{badges}]")
    if card.body:
      print(f"     {card.body}")
    for action in card.actions:
      if action.get("href"):
        print(f"     🔗 {action['label']}: {action['href']}")
      else:
        print(f"     ✖ {action['label']} (id: {action['id']})")

  if view.has_more:
    print("\n  ⏬ More available")


def confirm_on_console(listing) -> bool:
  answer = input(f"Confirm delete the post '{listing.name}'? [y/N] ")
  return answer.strip().lower() in ("y", "yes")


def read_image(path: str) -> ImageUpload:
  with open(path, "rb") as f:
    return ImageUpload(data=f.read(), filename=os.path.basename(path))


def show_pages(session, pages: int):
  session.apply_filter()
  for _ in range(max(0, pages - 1)):
    if not session.cursor.has_more:
      break
    session.load_next_page()


async def run(args) -> int:
  dal = DAL(LocalStorage(args.storage))

  if args.seed:
    print("🌱 Seeding demo posts...")
    result = await seed_if_empty(dal.listings, args.seed)
    if result.skipped:
      print("  ℹ️ Feed already has posts, seeding skipped")

  if args.add:
    if not args.image:
      print("❌ Please input name/type/region and select an image")
      return 1
    session = FeedSession(dal.listings)
    form = ListingForm(name=args.name, type=args.pet_type, region=args.pet_region, description=args.desc)
    try:
      image = read_image(args.image)
      result = await session.mutations.create(form, image)
    except OSError as e:
      print(f"❌ Can't use this file: {e}")
      return 1
    except FeedError as e:
      print(f"❌ {e.message}")
      return 1
    if result.notice:
      print(f"⚠️ {result.notice}")
    print(f"✅ Posted {result.listing.name} (id: {result.listing.id})")

  if args.delete:
    confirm = (lambda listing: True) if args.yes else confirm_on_console
    session = FeedSession(dal.listings, confirm=confirm)
    try:
      deleted = session.mutations.delete(args.delete)
    except FeedError as e:
      print(f"❌ {e.message}")
      return 1
    print("✅ Deleted" if deleted else "ℹ️ Nothing deleted")

  if args.list:
    session = FeedSession(dal.listings, renderer=print_view)
    session.filters = Filters(type=args.type, region=args.region, text=args.q)
    show_pages(session, args.pages)

  if args.shelters:
    print("🏠 Loading shelters...")
    result = await load_directory(args.shelters)
    session = DirectorySession(result.entries, renderer=print_view, message=result.message)
    if session.message:
      print(f"  {session.message}")
    else:
      print(f"  Provinces: {', '.join(session.province_options()) or '-'}")
    session.filters = Filters(text=args.q, category=args.province)
    show_pages(session, args.pages)

  if args.contact:
    form = ContactForm(
      name=args.name, email=args.email, subject=args.subject,
      message=args.message, topic=args.topic, consent=args.consent,
    )
    try:
      submit_contact_message(dal.contact_messages, form)
    except FeedError as e:
      print(f"❌ {e.message}")
      return 1
    print(f"✅ {SENT_MESSAGE}")

  if args.messages:
    messages = list_contact_messages(dal.contact_messages)
    print(f"\n✉️ CONTACT MESSAGES ({len(messages)})")
    print("-" * 40)
    for message in messages:
      print(f"  [{message.topic}] {message.subject} - {message.name} <{message.email}>")

  if args.report:
    summary = dal.summary()
    print("\n" + "=" * 60)
    print("🐕 HAPPY PAWS - Storage")
    print("=" * 60)
    print(f"   Posts ({STORAGE_KEYS['pets']}): {summary['pets']}")
    print(f"   Messages ({STORAGE_KEYS['contact_messages']}): {summary['contact_messages']}")
    print(f"   Used: {summary['used_chars']:,} / {summary['quota_chars']:,} chars")

  return 0


def build_parser() -> argparse.ArgumentParser:
  parser = argparse.ArgumentParser(description="Happy Paws Feed v1.0")
  parser.add_argument("--storage", default=STORAGE_PATH, help=f"Storage file (default: {STORAGE_PATH})")
  parser.add_argument("--seed", nargs="?", const=SEED_DATASET, help="Import demo posts if the feed is empty")
  parser.add_argument("--list", action="store_true", help="Show the feed")
  parser.add_argument("--type", default="", help="Filter by animal type (Dog, Cat, Bird, Other)")
  parser.add_argument("--region", default="", help="Filter by region")
  parser.add_argument("--q", default="", help="Free-text search")
  parser.add_argument("--pages", type=int, default=1, help="Number of pages to show")
  parser.add_argument("--add", action="store_true", help="Add a post")
  parser.add_argument("--name", default="", help="Post or contact name")
  parser.add_argument("--pet-type", default="", help="Animal type for a new post")
  parser.add_argument("--pet-region", default="", help="Region for a new post")
  parser.add_argument("--desc", default="", help="Description for a new post")
  parser.add_argument("--image", help="Image file for a new post")
  parser.add_argument("--delete", help="Delete the post with this ID")
  parser.add_argument("--yes", action="store_true", help="Skip delete confirmation")
  parser.add_argument("--shelters", nargs="?", const=DIRECTORY_DATASET, help="Browse the shelter directory")
  parser.add_argument("--province", default="", help="Filter shelters by province")
  parser.add_argument("--contact", action="store_true", help="Save a contact message")
  parser.add_argument("--email", default="", help="Contact email")
  parser.add_argument("--subject", default="", help="Contact subject")
  parser.add_argument("--message", default="", help="Contact message")
  parser.add_argument("--topic", default="", help="Contact topic")
  parser.add_argument("--consent", action="store_true", help="Consent to storing the message")
  parser.add_argument("--messages", action="store_true", help="Show stored contact messages")
  parser.add_argument("--report", action="store_true", help="Show storage summary")
  return parser


def main():
  args = build_parser().parse_args()
  sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
  main()
