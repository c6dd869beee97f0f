"""
Contact Message Schema
v1.0.0

Messages sent from the contact page. Saved on this device only.
"""
from dataclasses import dataclass, asdict
from typing import Dict


@dataclass
class ContactMessage:
  """A sanitized contact form submission"""
  id: str
  ts: int          # ms since epoch
  name: str
  email: str
  subject: str
  message: str
  topic: str

  def to_dict(self) -> Dict:
    return asdict(self)

  @classmethod
  def from_dict(cls, data: Dict) -> "ContactMessage":
    defaults = {"id": "", "ts": 0, "name": "", "email": "", "subject": "", "message": "", "topic": ""}
    defaults.update({k: v for k, v in data.items() if k in cls.__dataclass_fields__})
    return cls(**defaults)
