"""
Contact form handling
v1.0.0

Sanitizes a contact form submission and saves it on this device.
There is no mail delivery; messages live in their own store slot.
"""
import re
import time
import uuid
from dataclasses import dataclass
from typing import List

from bs4 import BeautifulSoup

from config import CONTACT_LIMITS
from dal import CollectionStore
from errors import ValidationError
from schema import ContactMessage

INVALID_MESSAGE = "The information is incorrect or contains inappropriate characters."
SENT_MESSAGE = "Message sent successfully (saved on this device for testing)"

EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$")
ZERO_WIDTH = re.compile("[\u200B-\u200D\uFEFF]")
TAG_PATTERN = re.compile(r"<[^>]*>")


@dataclass
class ContactForm:
  name: str = ""
  email: str = ""
  subject: str = ""
  message: str = ""
  topic: str = ""
  consent: bool = False


def sanitize_text(value, max_len: int = 2000) -> str:
  """Strip markup and zero-width characters, collapse whitespace, truncate"""
  text = TAG_PATTERN.sub("", str(value or ""))
  # decoded entities can form new tags
  if "&" in text:
    text = BeautifulSoup(text, "html.parser").get_text()
    text = TAG_PATTERN.sub("", text)
  text = text.replace("<", "").replace(">", "")
  text = ZERO_WIDTH.sub("", text)
  text = " ".join(text.split())
  return text[:max_len]


def sanitize_email(value) -> str:
  """Return the address if it looks valid, otherwise an empty string"""
  email = str(value or "").strip()
  if not EMAIL_PATTERN.match(email):
    return ""
  return email[:CONTACT_LIMITS["email"]]


def submit_contact_message(store: CollectionStore, form: ContactForm) -> ContactMessage:
  """
  Sanitize and save a message, newest first.

  Raises ValidationError when a field is empty after sanitizing or
  consent was not given.
  """
  message = ContactMessage(
    id=str(uuid.uuid4()),
    ts=int(time.time() * 1000),
    name=sanitize_text(form.name, CONTACT_LIMITS["name"]),
    email=sanitize_email(form.email),
    subject=sanitize_text(form.subject, CONTACT_LIMITS["subject"]),
    message=sanitize_text(form.message, CONTACT_LIMITS["message"]),
    topic=sanitize_text(form.topic, CONTACT_LIMITS["topic"]),
  )

  required = [message.name, message.email, message.subject, message.message, message.topic]
  if not all(required) or not form.consent:
    raise ValidationError(INVALID_MESSAGE)

  store.write([message.to_dict()] + store.read())
  print(f"  ✉️ Saved message from {message.name}")
  return message


def list_contact_messages(store: CollectionStore) -> List[ContactMessage]:
  return [ContactMessage.from_dict(item) for item in store.read() if isinstance(item, dict)]
