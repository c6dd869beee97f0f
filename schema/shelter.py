"""
Shelter Directory Schema
v1.0.0

Directory records come from a bundled dataset and are never persisted.
All fields are strings; an empty string stands in for anything absent.
"""
from dataclasses import dataclass, asdict, fields
from typing import Dict, List


@dataclass
class ShelterEntry:
  """One shelter in the directory"""
  id: str = ""
  name: str = ""
  province: str = ""
  area: str = ""
  about: str = ""
  phone: str = ""
  site: str = ""
  facebook: str = ""
  donate: str = ""
  image: str = ""

  @property
  def category(self) -> str:
    return self.province

  def search_text(self) -> str:
    return f"{self.name} {self.about} {self.area} {self.province}".lower()

  def links(self) -> List[Dict[str, str]]:
    """External links that have data, in display order"""
    result = []
    if self.site:
      result.append({"label": "Website", "href": self.site, "kind": "site"})
    if self.facebook:
      result.append({"label": "Facebook", "href": self.facebook, "kind": "facebook"})
    if self.donate:
      result.append({"label": "Donate", "href": self.donate, "kind": "donate"})
    if self.phone:
      result.append({"label": "phone call", "href": f"tel:{self.phone}", "kind": "phone"})
    return result

  def to_dict(self) -> Dict:
    return asdict(self)

  @classmethod
  def field_names(cls) -> List[str]:
    return [f.name for f in fields(cls)]
